"""T0.01 — Grid Quantization.

Truncate every real coordinate toward zero onto the integer grid.
2.9 and 2.1 both land on 2; -2.9 lands on -2 (not floor).
"""

from __future__ import annotations

from mizlab.engine.context import TrajectoryContext
from mizlab.engine.registry import Layer, transform
from mizlab.local_patterns import quantize_points


@transform(
    id="T0.01",
    layer=Layer.RASTERIZATION,
    description="Truncate trajectory points to integer grid cells",
)
def grid_quantization(ctx: TrajectoryContext) -> None:
    ctx.grid_points = quantize_points(ctx.xs, ctx.ys)
