"""FastAPI app factory."""

from __future__ import annotations

import logging

from dotenv import load_dotenv
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from mizlab import __version__
from mizlab.config import settings
from mizlab.engine.pipeline import register_transforms
from mizlab.errors import MizlabError

load_dotenv()

logging.basicConfig(
    level=getattr(logging, settings.mizlab_log_level.upper(), logging.INFO),
    format="%(asctime)s %(name)s %(levelname)s %(message)s",
)

logger = logging.getLogger(__name__)


def create_app() -> FastAPI:
    app = FastAPI(
        title="mizlab",
        description="Local binary pattern histograms of 2-D trajectories",
        version=__version__,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Import all transform modules to trigger registration
    register_transforms()

    from mizlab.api.router import api_router

    app.include_router(api_router)

    @app.exception_handler(MizlabError)
    async def mizlab_error_handler(request: Request, exc: MizlabError) -> JSONResponse:
        logger.info("Rejected %s: %s", request.url.path, exc)
        return JSONResponse(
            status_code=422,
            content={"detail": str(exc), "error": type(exc).__name__},
        )

    return app


app = create_app()
