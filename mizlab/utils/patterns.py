"""3×3 occupancy patterns over a set of filled cells, and their 9-bit encoding.

Scan order: rows dy = -1, 0, +1 (top to bottom); within a row, columns
dx = +1, 0, -1 (right to left). The first scanned neighbor is bit 8 (MSB),
the last is bit 0. With this order the 3×3 block {0, 1, 2}² yields 25
distinct buckets, the products of column masks {4, 6, 7, 3, 1} and row
factors {1, 9, 73, 72, 64}.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Set

import numpy as np
from numpy.typing import NDArray

from mizlab.errors import InvalidArgumentError
from mizlab.utils.rasterizer import Coordinate, is_integer

logger = logging.getLogger(__name__)

PATTERN_LENGTH = 9
HISTOGRAM_BINS = 1 << PATTERN_LENGTH  # 512

NEIGHBORHOOD_OFFSETS: tuple[Coordinate, ...] = tuple(
    (dx, dy) for dy in (-1, 0, 1) for dx in (1, 0, -1)
)


def encode_pattern(bits: Iterable[bool]) -> int:
    """Encode 9 booleans MSB-first into a bucket index in [0, 511].

    Raises:
        InvalidArgumentError: wrong length or a non-boolean element.
    """
    try:
        bits = list(bits)
    except TypeError as e:
        raise InvalidArgumentError(f"Pattern must be a sequence of bool, got {type(bits).__name__}") from e
    if len(bits) != PATTERN_LENGTH:
        raise InvalidArgumentError(
            f"Pattern must have {PATTERN_LENGTH} elements, got {len(bits)}"
        )
    value = 0
    for bit in bits:
        if not isinstance(bit, (bool, np.bool_)):
            raise InvalidArgumentError(
                f"Pattern elements must be bool, got {type(bit).__name__}"
            )
        value = (value << 1) | int(bit)
    return value


def decode_pattern(index: int) -> tuple[bool, ...]:
    """Inverse of ``encode_pattern``: bucket index → 9 booleans, MSB first."""
    if not is_integer(index) or not 0 <= index < HISTOGRAM_BINS:
        raise InvalidArgumentError(f"Pattern index must be an integer in [0, 511], got {index!r}")
    return tuple(bool((int(index) >> shift) & 1) for shift in range(PATTERN_LENGTH - 1, -1, -1))


def candidate_centers(cell: Coordinate) -> list[Coordinate]:
    """The 9 window centers whose 3×3 neighborhood contains ``cell``."""
    x, y = cell
    return [(x + dx, y + dy) for dx, dy in NEIGHBORHOOD_OFFSETS]


def neighborhood_pattern(center: Coordinate, filled: Set[Coordinate]) -> tuple[bool, ...]:
    """Occupancy of the 3×3 window around ``center`` in scan order."""
    x, y = center
    return tuple((x + dx, y + dy) in filled for dx, dy in NEIGHBORHOOD_OFFSETS)


def extract_patterns(filled: Set[Coordinate]) -> list[int]:
    """Encoded pattern of every distinct center adjacent to a filled cell.

    Each center is processed once no matter how many filled cells nominate it,
    so the work is linear in ``len(filled)``. Cells are visited in the set's
    own iteration order: the same set always yields the same list, and sets
    that are equal but were built differently yield the same patterns, possibly
    in another order.

    Raises:
        InvalidArgumentError: if ``filled`` is not a set.
    """
    if not isinstance(filled, Set):
        raise InvalidArgumentError(
            f"Filled cells must be a set, got {type(filled).__name__}"
        )

    visited: set[Coordinate] = set()
    patterns: list[int] = []
    for cell in filled:
        for center in candidate_centers(cell):
            if center in visited:
                continue
            visited.add(center)
            patterns.append(encode_pattern(neighborhood_pattern(center, filled)))

    logger.debug("Extracted %d patterns from %d filled cells", len(patterns), len(filled))
    return patterns


def pattern_histogram(patterns: Iterable[int]) -> NDArray[np.int64]:
    """Count encoded patterns into a fresh 512-bin histogram."""
    counts = np.fromiter(patterns, dtype=np.int64)
    return np.bincount(counts, minlength=HISTOGRAM_BINS).astype(np.int64)
