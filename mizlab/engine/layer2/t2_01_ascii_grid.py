"""T2.01 — ASCII Grid. ★★

Render the filled cells as text: X = filled, . = empty. Rows run top to
bottom in increasing y. Grids longer than ``max_grid_side`` are not
rendered.
"""

from __future__ import annotations

from mizlab.engine.context import TrajectoryContext
from mizlab.engine.registry import Layer, transform
from mizlab.utils.rasterizer import cells_to_grid, grid_fill_percentage, grid_to_text


@transform(
    id="T2.01",
    layer=Layer.SUMMARY,
    dependencies=["T0.02"],
    description="Render filled cells as an ASCII grid",
)
def ascii_grid(ctx: TrajectoryContext) -> None:
    cfg = ctx.config
    if not ctx.filled:
        return

    xs = [x for x, _ in ctx.filled]
    ys = [y for _, y in ctx.filled]
    longest = max(max(xs) - min(xs), max(ys) - min(ys)) + 1 + 2 * cfg.grid_padding
    if longest > cfg.max_grid_side:
        ctx.features["ascii_grid_skipped"] = True
        return

    grid, origin = cells_to_grid(ctx.filled, padding=cfg.grid_padding)
    ctx.grid = grid
    ctx.grid_origin = origin
    ctx.ascii_grid = grid_to_text(grid, filled=cfg.filled_glyph, empty=cfg.empty_glyph)
    ctx.features["fill_percentage"] = round(grid_fill_percentage(grid), 2)
