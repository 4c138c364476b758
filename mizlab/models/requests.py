"""API request models."""

from __future__ import annotations

from pydantic import BaseModel, Field, StrictFloat, StrictInt


class RasterizeRequest(BaseModel):
    # Strict: 1.0 or "1" must not be coerced to an integer endpoint
    x0: StrictInt
    y0: StrictInt
    x1: StrictInt
    y1: StrictInt


class TrajectoryRequest(BaseModel):
    # Strict: true or "2.5" must not be coerced to a coordinate
    xs: list[StrictInt | StrictFloat] = Field(..., description="x coordinates of the trajectory")
    ys: list[StrictInt | StrictFloat] = Field(..., description="y coordinates of the trajectory")
