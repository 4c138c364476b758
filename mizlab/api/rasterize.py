"""POST /api/rasterize — Bresenham cells between two integer endpoints."""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException

from mizlab.config import Settings
from mizlab.dependencies import get_settings
from mizlab.models.requests import RasterizeRequest
from mizlab.models.responses import RasterizeResponse
from mizlab.utils.rasterizer import rasterize, segment_cell_count

router = APIRouter()


@router.post("/rasterize", response_model=RasterizeResponse)
async def rasterize_line(
    req: RasterizeRequest,
    settings: Settings = Depends(get_settings),
) -> RasterizeResponse:
    cells = segment_cell_count((req.x0, req.y0), (req.x1, req.y1))
    if cells > settings.max_filled_cells:
        raise HTTPException(
            status_code=413,
            detail=f"Line spans {cells} cells (limit {settings.max_filled_cells})",
        )
    return RasterizeResponse(cells=rasterize(req.x0, req.y0, req.x1, req.y1))
