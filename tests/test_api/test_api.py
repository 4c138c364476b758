"""Tests for API endpoints."""

from __future__ import annotations

import json

from fastapi.testclient import TestClient

from mizlab.config import Settings
from mizlab.dependencies import get_settings
from mizlab.main import app
from tests.conftest import ZIGZAG_BUCKETS, ZIGZAG_XS, ZIGZAG_YS


client = TestClient(app)


def test_health():
    response = client.get("/api/health")
    assert response.status_code == 200
    data = response.json()
    assert data["status"] == "ok"
    assert data["transforms_registered"] == 6


def test_rasterize():
    response = client.post("/api/rasterize", json={"x0": 0, "y0": 0, "x1": 3, "y1": 3})
    assert response.status_code == 200
    assert response.json()["cells"] == [[0, 0], [1, 1], [2, 2], [3, 3]]


def test_rasterize_rejects_float():
    response = client.post("/api/rasterize", json={"x0": 0, "y0": 0.5, "x1": 3, "y1": 3})
    assert response.status_code == 422


def test_histogram():
    response = client.post("/api/histogram", json={"xs": ZIGZAG_XS, "ys": ZIGZAG_YS})
    assert response.status_code == 200
    data = response.json()
    assert len(data["histogram"]) == 512
    assert data["total"] == 25
    assert data["distinct"] == 25
    assert {i for i, c in enumerate(data["histogram"]) if c} == ZIGZAG_BUCKETS


def test_histogram_empty_trajectory():
    response = client.post("/api/histogram", json={"xs": [], "ys": []})
    assert response.status_code == 200
    assert response.json()["total"] == 0


def test_histogram_length_mismatch():
    response = client.post("/api/histogram", json={"xs": [0, 1, 2], "ys": [0, 1]})
    assert response.status_code == 422
    assert response.json()["error"] == "LengthMismatchError"


def test_histogram_size_limit():
    app.dependency_overrides[get_settings] = lambda: Settings(max_trajectory_points=3)
    try:
        response = client.post("/api/histogram", json={"xs": [0, 1, 2, 3], "ys": [0, 1, 2, 3]})
    finally:
        app.dependency_overrides.clear()
    assert response.status_code == 413


def test_analyze():
    response = client.post("/api/analyze", json={"xs": ZIGZAG_XS, "ys": ZIGZAG_YS})
    assert response.status_code == 200
    data = response.json()
    assert data["transforms_completed"] == 6
    assert data["transforms_failed"] == 0
    assert data["features"]["distinct_patterns"] == 25
    assert data["features"]["bbox"] == [0, 0, 2, 2]
    assert "X X X" in data["ascii_grid"]
    assert sum(data["histogram"]) == 25


def test_analyze_length_mismatch():
    response = client.post("/api/analyze", json={"xs": [0], "ys": []})
    assert response.status_code == 422


def test_analyze_rejects_non_finite_coordinate():
    # JSON has no infinity literal; Python's json module reads "Infinity"
    response = client.post(
        "/api/analyze",
        content='{"xs": [0, Infinity], "ys": [0, 1]}',
        headers={"Content-Type": "application/json"},
    )
    assert response.status_code == 422
    assert response.json()["error"] == "InvalidArgumentError"


def test_analyze_rejects_string_coordinate():
    response = client.post("/api/analyze", json={"xs": [0, "inf"], "ys": [0, 1]})
    assert response.status_code == 422


def test_trajectory_rejects_boolean_coordinate():
    response = client.post("/api/histogram", json={"xs": [True, 2], "ys": [0, 1]})
    assert response.status_code == 422


def test_trajectory_accepts_ints_and_floats():
    response = client.post("/api/histogram", json={"xs": [0, 2.9], "ys": [0.5, 0]})
    assert response.status_code == 200
    assert response.json()["total"] > 0


def test_histogram_extent_limit():
    app.dependency_overrides[get_settings] = lambda: Settings(max_trajectory_points=10, max_filled_cells=1000)
    try:
        response = client.post("/api/histogram", json={"xs": [0, 300000], "ys": [0, 0]})
    finally:
        app.dependency_overrides.clear()
    assert response.status_code == 413
    assert "300001 cells" in response.json()["detail"]


def test_extent_limit_sums_segments():
    app.dependency_overrides[get_settings] = lambda: Settings(max_filled_cells=10)
    try:
        within = client.post("/api/histogram", json={"xs": [0, 4, 0], "ys": [0, 0, 0]})
        over = client.post("/api/analyze", json={"xs": [0, 5, 0], "ys": [0, 0, 0]})
    finally:
        app.dependency_overrides.clear()
    assert within.status_code == 200
    assert over.status_code == 413


def test_default_extent_limit_rejects_huge_line():
    response = client.post("/api/histogram", json={"xs": [0, 1e12], "ys": [0, 0]})
    assert response.status_code == 413


def test_rasterize_extent_limit():
    app.dependency_overrides[get_settings] = lambda: Settings(max_filled_cells=5)
    try:
        response = client.post("/api/rasterize", json={"x0": 0, "y0": 0, "x1": 5, "y1": 2})
    finally:
        app.dependency_overrides.clear()
    assert response.status_code == 413


def _events(body: str) -> list[tuple[str, dict]]:
    events = []
    for block in body.strip().split("\n\n"):
        name, data = block.split("\n", 1)
        events.append((name.removeprefix("event: "), json.loads(data.removeprefix("data: "))))
    return events


def test_analyze_stream():
    response = client.post("/api/analyze/stream", json={"xs": ZIGZAG_XS, "ys": ZIGZAG_YS})
    assert response.status_code == 200
    assert response.headers["content-type"].startswith("text/event-stream")

    events = _events(response.text)
    progress = [data for name, data in events if name == "progress"]
    assert [p["transform_id"] for p in progress] == ["T0.01", "T0.02", "T1.01", "T1.02", "T2.01", "T2.02"]
    assert all(p["status"] == "ok" and p["total"] == 6 for p in progress)

    name, result = events[-2]
    assert name == "result"
    assert result["transforms_completed"] == 6
    assert result["features"]["distinct_patterns"] == 25
    assert sum(result["histogram"]) == 25
    assert events[-1] == ("done", {"type": "done"})


def test_analyze_stream_validates_before_streaming():
    response = client.post("/api/analyze/stream", json={"xs": [0, 1], "ys": [0]})
    assert response.status_code == 422
    assert response.json()["error"] == "LengthMismatchError"
