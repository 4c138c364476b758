"""POST /api/histogram — 512-bin local pattern histogram of a trajectory."""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException

from mizlab.config import Settings
from mizlab.dependencies import get_settings
from mizlab.local_patterns import compute_histogram, quantize_points
from mizlab.models.requests import TrajectoryRequest
from mizlab.models.responses import HistogramResponse
from mizlab.utils.rasterizer import polyline_cell_count

router = APIRouter()


def check_trajectory_size(req: TrajectoryRequest, settings: Settings) -> None:
    """Reject trajectories with too many points or too long a rasterized path.

    Raises:
        HTTPException: 413 when either limit is exceeded.
        LengthMismatchError, InvalidArgumentError: from quantizing the points.
    """
    longest = max(len(req.xs), len(req.ys))
    if longest > settings.max_trajectory_points:
        raise HTTPException(
            status_code=413,
            detail=f"Trajectory has {longest} points (limit {settings.max_trajectory_points})",
        )

    cells = polyline_cell_count(quantize_points(req.xs, req.ys))
    if cells > settings.max_filled_cells:
        raise HTTPException(
            status_code=413,
            detail=f"Trajectory spans {cells} cells (limit {settings.max_filled_cells})",
        )


@router.post("/histogram", response_model=HistogramResponse)
def histogram(
    req: TrajectoryRequest,
    settings: Settings = Depends(get_settings),
) -> HistogramResponse:
    check_trajectory_size(req, settings)
    hist = compute_histogram(req.xs, req.ys)
    return HistogramResponse(
        histogram=hist.tolist(),
        total=int(hist.sum()),
        distinct=int((hist > 0).sum()),
    )
