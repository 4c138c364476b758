"""POST /api/analyze — full pipeline analysis of a trajectory."""

from __future__ import annotations

import asyncio
import json
import time
from collections.abc import AsyncGenerator

from fastapi import APIRouter, Depends
from fastapi.responses import StreamingResponse

from mizlab.api.histogram import check_trajectory_size
from mizlab.config import Settings
from mizlab.dependencies import get_settings
from mizlab.engine.context import TrajectoryContext, build_context
from mizlab.engine.pipeline import create_pipeline
from mizlab.models.requests import TrajectoryRequest
from mizlab.models.responses import AnalyzeResponse

router = APIRouter()


_SENTINEL = object()  # marks end of queue


def _to_response(ctx: TrajectoryContext, start: float) -> AnalyzeResponse:
    elapsed = (time.perf_counter() - start) * 1000
    return AnalyzeResponse(
        histogram=ctx.histogram.tolist() if ctx.histogram is not None else [],
        features=ctx.features,
        ascii_grid=ctx.ascii_grid,
        processing_time_ms=round(elapsed, 1),
        transforms_completed=len(ctx.completed_transforms),
        transforms_failed=len(ctx.errors),
        transforms_skipped=len(ctx.skipped_transforms),
        errors=ctx.errors,
    )


async def _stream_analyze(ctx: TrajectoryContext, start: float) -> AsyncGenerator[str, None]:
    """Drive pipeline.run_streaming() in a thread, yielding SSE events as they arrive."""
    pipeline = create_pipeline()
    loop = asyncio.get_running_loop()
    queue: asyncio.Queue = asyncio.Queue()

    def _run_pipeline() -> None:
        for progress in pipeline.run_streaming(ctx):
            loop.call_soon_threadsafe(queue.put_nowait, progress)
        loop.call_soon_threadsafe(queue.put_nowait, _SENTINEL)

    loop.run_in_executor(None, _run_pipeline)

    while True:
        item = await queue.get()
        if item is _SENTINEL:
            break
        yield f"event: progress\ndata: {json.dumps(item)}\n\n"

    result = _to_response(ctx, start).model_dump(mode="json")
    yield f"event: result\ndata: {json.dumps(result)}\n\n"
    yield f"event: done\ndata: {json.dumps({'type': 'done'})}\n\n"


@router.post("/analyze/stream")
async def analyze_stream(
    req: TrajectoryRequest,
    settings: Settings = Depends(get_settings),
) -> StreamingResponse:
    # Validate before streaming so bad input still gets a 413/422 status
    check_trajectory_size(req, settings)
    start = time.perf_counter()
    ctx = build_context(req.xs, req.ys)
    return StreamingResponse(
        _stream_analyze(ctx, start),
        media_type="text/event-stream",
        headers={
            "Cache-Control": "no-cache",
            "Connection": "keep-alive",
            "X-Accel-Buffering": "no",
        },
    )


@router.post("/analyze", response_model=AnalyzeResponse)
def analyze(
    req: TrajectoryRequest,
    settings: Settings = Depends(get_settings),
) -> AnalyzeResponse:
    check_trajectory_size(req, settings)
    start = time.perf_counter()

    ctx = build_context(req.xs, req.ys)
    ctx = create_pipeline().run(ctx)
    return _to_response(ctx, start)
