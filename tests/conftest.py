"""Shared test fixtures."""

from __future__ import annotations

import pytest


# Zig-zag that fills the 3×3 block {0, 1, 2}²
ZIGZAG_XS = [0, 2, 0, 2, 0, 2]
ZIGZAG_YS = [0, 0, 1, 1, 2, 2]

# Column masks × row factors of every window around the 3×3 block
ZIGZAG_BUCKETS = {c * r for c in (4, 6, 7, 3, 1) for r in (1, 9, 73, 72, 64)}

# Fractional, negative and repeated points
MIXED_XS = [-2.9, -0.5, 3.7, 3.2, 0.0]
MIXED_YS = [1.5, -1.1, 2.9, 2.2, 0.9]

DIAGONAL_XS = [0, 3]
DIAGONAL_YS = [0, 3]


@pytest.fixture
def zigzag() -> tuple[list[int], list[int]]:
    return list(ZIGZAG_XS), list(ZIGZAG_YS)


@pytest.fixture
def mixed() -> tuple[list[float], list[float]]:
    return list(MIXED_XS), list(MIXED_YS)


@pytest.fixture
def diagonal() -> tuple[list[int], list[int]]:
    return list(DIAGONAL_XS), list(DIAGONAL_YS)
