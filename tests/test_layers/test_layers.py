"""Tests for the registered transforms — full pipeline through all layers."""

import math

import numpy as np
import pytest

from mizlab.engine.config import PipelineConfig
from mizlab.engine.context import build_context
from mizlab.engine.pipeline import Pipeline, register_transforms
from mizlab.engine.registry import Layer, get_registry
from mizlab.local_patterns import compute_histogram
from mizlab.utils.rasterizer import rasterize_polyline
from tests.conftest import ZIGZAG_BUCKETS, ZIGZAG_XS, ZIGZAG_YS

register_transforms()


def test_all_transforms_registered():
    reg = get_registry()
    assert {s.id for s in reg.get_layer(Layer.RASTERIZATION)} == {"T0.01", "T0.02"}
    assert {s.id for s in reg.get_layer(Layer.PATTERNS)} == {"T1.01", "T1.02"}
    assert {s.id for s in reg.get_layer(Layer.SUMMARY)} == {"T2.01", "T2.02"}


def test_register_transforms_is_idempotent():
    before = get_registry().count
    register_transforms()
    assert get_registry().count == before


def test_zigzag_through_pipeline():
    ctx = build_context(ZIGZAG_XS, ZIGZAG_YS)
    Pipeline().run(ctx)

    assert ctx.errors == {}
    assert len(ctx.completed_transforms) == 6
    assert ctx.grid_points[:2] == [(0, 0), (2, 0)]
    assert ctx.segment_cells[1] == [(2, 0), (1, 1), (0, 1)]
    assert ctx.num_filled == 9
    assert np.array_equal(ctx.histogram, compute_histogram(ZIGZAG_XS, ZIGZAG_YS))
    assert set(ctx.patterns) == ZIGZAG_BUCKETS


def test_zigzag_features():
    ctx = Pipeline().run(build_context(ZIGZAG_XS, ZIGZAG_YS))
    f = ctx.features

    assert f["filled_cells"] == 9
    assert f["segments"] == 5
    assert f["total_patterns"] == 25
    assert f["distinct_patterns"] == 25
    # All counts tie, so the smallest buckets come first
    assert f["top_patterns"] == [(1, 1), (3, 1), (4, 1), (6, 1), (7, 1)]
    assert f["entropy_bits"] == pytest.approx(math.log2(25), abs=1e-4)
    assert f["bbox"] == (0, 0, 2, 2)
    assert f["fill_percentage"] == 36.0


def test_ascii_grid_rendering():
    ctx = Pipeline().run(build_context(ZIGZAG_XS, ZIGZAG_YS))
    assert ctx.grid_origin == (-1, -1)
    assert ctx.ascii_grid == "\n".join([
        ". . . . .",
        ". X X X .",
        ". X X X .",
        ". X X X .",
        ". . . . .",
    ])


def test_ascii_grid_skipped_when_too_large():
    config = PipelineConfig(max_grid_side=4)
    ctx = Pipeline(config=config).run(build_context(ZIGZAG_XS, ZIGZAG_YS))
    assert ctx.features["ascii_grid_skipped"] is True
    assert ctx.ascii_grid == ""
    assert ctx.features["total_patterns"] == 25


def test_single_point_trajectory():
    ctx = Pipeline().run(build_context([3.5], [4.5]))
    assert ctx.errors == {}
    assert "T2.01" not in ctx.completed_transforms
    assert ctx.histogram is not None and not ctx.histogram.any()
    assert ctx.features["total_patterns"] == 0
    assert ctx.features["entropy_bits"] == 0.0
    assert ctx.features["bbox"] is None


def test_bad_coordinate_recorded_as_error():
    ctx = Pipeline().run(build_context([0, "a"], [0, 1]))
    assert "T0.01" in ctx.errors
    assert "real number" in ctx.errors["T0.01"]
    assert ctx.skipped_transforms == {
        "T0.02": "T0.01",
        "T1.01": "T0.02",
        "T1.02": "T1.01",
        "T2.01": "T0.02",
        "T2.02": "T1.02",
    }
    assert ctx.completed_transforms == set()
    # No all-zero histogram that could pass for a degenerate trajectory
    assert ctx.histogram is None


def test_non_finite_coordinate_blocks_histogram():
    ctx = Pipeline().run(build_context([0, float("inf")], [0, 1]))
    assert ctx.errors == {"T0.01": "Coordinate must be finite, got inf"}
    assert "T1.02" in ctx.skipped_transforms
    assert ctx.histogram is None
    assert "total_patterns" not in ctx.features


def test_filled_set_is_union_of_segments(mixed):
    xs, ys = mixed
    ctx = Pipeline().run(build_context(xs, ys))
    union = frozenset(c for cells in ctx.segment_cells for c in cells)
    assert ctx.filled == union
    assert ctx.filled == rasterize_polyline(ctx.grid_points)
    assert ctx.features["filled_cells"] == len(union)
