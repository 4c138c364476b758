"""Pipeline configuration — controls rendering and summary behavior."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass
class PipelineConfig:
    """Knobs for the trajectory analysis pipeline."""

    # ASCII grid rendering
    grid_padding: int = 1
    filled_glyph: str = "X"
    empty_glyph: str = "."
    # Grids with a longer side than this are not rendered as text
    max_grid_side: int = 128

    # Histogram summary
    top_patterns: int = 5
