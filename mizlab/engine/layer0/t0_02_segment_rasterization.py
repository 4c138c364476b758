"""T0.02 — Segment Rasterization. ★★★

Bresenham every consecutive pair of grid points. Segments are kept
individually for inspection; extraction only ever sees their union.
"""

from __future__ import annotations

from mizlab.engine.context import TrajectoryContext
from mizlab.engine.registry import Layer, transform
from mizlab.utils.rasterizer import rasterize, rasterize_polyline


@transform(
    id="T0.02",
    layer=Layer.RASTERIZATION,
    dependencies=["T0.01"],
    description="Rasterize consecutive segments and union their cells",
)
def segment_rasterization(ctx: TrajectoryContext) -> None:
    pts = ctx.grid_points
    ctx.segment_cells = [
        rasterize(x0, y0, x1, y1) for (x0, y0), (x1, y1) in zip(pts, pts[1:])
    ]
    ctx.filled = rasterize_polyline(pts)
    ctx.features["filled_cells"] = len(ctx.filled)
    ctx.features["segments"] = len(ctx.segment_cells)
