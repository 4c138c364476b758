"""TrajectoryContext — the single mutable state object flowing through all transforms.

Layer 0 fills grid points and cells, Layer 1 patterns and histogram,
Layer 2 the text grid and ``features``.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field
from typing import Any

import numpy as np
from numpy.typing import NDArray

from mizlab.engine.config import PipelineConfig
from mizlab.errors import LengthMismatchError
from mizlab.utils.rasterizer import Coordinate


@dataclass
class TrajectoryContext:
    """Shared state for one trajectory. Never reused across calls."""

    # Raw real-valued coordinates as supplied by the caller
    xs: list[float] = field(default_factory=list)
    ys: list[float] = field(default_factory=list)

    # --- Layer 0 ---
    # Points truncated toward zero
    grid_points: list[Coordinate] = field(default_factory=list)
    # Cells of each consecutive segment, in walk order
    segment_cells: list[list[Coordinate]] = field(default_factory=list)
    # Union of all segment cells
    filled: frozenset[Coordinate] = field(default_factory=frozenset)

    # --- Layer 1 ---
    patterns: list[int] = field(default_factory=list)
    histogram: NDArray[np.int64] | None = None

    # --- Layer 2 ---
    grid: NDArray[np.int8] | None = None
    grid_origin: Coordinate = (0, 0)
    ascii_grid: str = ""
    features: dict[str, Any] = field(default_factory=dict)

    # --- Pipeline metadata ---
    config: PipelineConfig = field(default_factory=PipelineConfig)
    completed_transforms: set[str] = field(default_factory=set)
    errors: dict[str, str] = field(default_factory=dict)
    # Transform ID → the failed or skipped dependency that blocked it
    skipped_transforms: dict[str, str] = field(default_factory=dict)

    @property
    def num_points(self) -> int:
        return len(self.xs)

    @property
    def num_segments(self) -> int:
        return max(self.num_points - 1, 0)

    @property
    def num_filled(self) -> int:
        return len(self.filled)


def build_context(xs: Sequence[float], ys: Sequence[float]) -> TrajectoryContext:
    """Validate raw coordinates and wrap them in a fresh context.

    Raises:
        LengthMismatchError: if ``len(xs) != len(ys)``.
    """
    if len(xs) != len(ys):
        raise LengthMismatchError(len(xs), len(ys))
    return TrajectoryContext(xs=list(xs), ys=list(ys))
