"""Master API router — mounts all endpoint routers."""

from __future__ import annotations

from fastapi import APIRouter

from mizlab.api import analyze, health, histogram, rasterize

api_router = APIRouter(prefix="/api")

api_router.include_router(health.router)
api_router.include_router(rasterize.router)
api_router.include_router(histogram.router)
api_router.include_router(analyze.router)
