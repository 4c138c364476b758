"""Trajectory → local-pattern histogram.

    hist = compute_histogram([0, 2, 0, 2, 0, 2], [0, 0, 1, 1, 2, 2])
    hist.shape   # (512,)
"""

from __future__ import annotations

import logging
from collections.abc import Sequence

import numpy as np
from numpy.typing import NDArray

from mizlab.errors import LengthMismatchError
from mizlab.utils.patterns import extract_patterns, pattern_histogram
from mizlab.utils.rasterizer import Coordinate, rasterize_polyline, truncate_coordinate

logger = logging.getLogger(__name__)


def quantize_points(xs: Sequence[float], ys: Sequence[float]) -> list[Coordinate]:
    """Pair up xs/ys and truncate each component toward zero."""
    if len(xs) != len(ys):
        raise LengthMismatchError(len(xs), len(ys))
    return [(truncate_coordinate(x), truncate_coordinate(y)) for x, y in zip(xs, ys)]


def filled_cells(xs: Sequence[float], ys: Sequence[float]) -> frozenset[Coordinate]:
    """Union of the rasterized cells of every consecutive trajectory segment."""
    return rasterize_polyline(quantize_points(xs, ys))


def compute_histogram(xs: Sequence[float], ys: Sequence[float]) -> NDArray[np.int64]:
    """512-bin histogram of 3×3 occupancy patterns along the trajectory.

    Raises:
        LengthMismatchError: if ``len(xs) != len(ys)``.
    """
    filled = filled_cells(xs, ys)
    hist = pattern_histogram(extract_patterns(filled))
    logger.debug(
        "Histogram: %d points, %d filled cells, %d patterns",
        len(xs),
        len(filled),
        int(hist.sum()),
    )
    return hist


# Name used by the original library
local_patterns = compute_histogram
