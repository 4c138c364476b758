"""API response models."""

from __future__ import annotations

from pydantic import BaseModel, Field


class HealthResponse(BaseModel):
    status: str = "ok"
    version: str = "0.1.0"
    transforms_registered: int = 0


class RasterizeResponse(BaseModel):
    cells: list[tuple[int, int]]


class HistogramResponse(BaseModel):
    histogram: list[int]
    total: int = 0
    distinct: int = 0


class AnalyzeResponse(BaseModel):
    histogram: list[int]
    features: dict = Field(default_factory=dict)
    ascii_grid: str = ""
    processing_time_ms: float = 0.0
    transforms_completed: int = 0
    transforms_failed: int = 0
    transforms_skipped: int = 0
    errors: dict[str, str] = Field(default_factory=dict)
