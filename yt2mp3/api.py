"""
yt2mp3 HTTP API

FastAPI application: CORS, error mapping and router wiring. Shared
components (extractor, rate limiter) are built once per application and
kept on ``app.state``.
"""

from __future__ import annotations

import logging
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from yt2mp3 import __version__
from yt2mp3.core.config import AppConfig, get_config
from yt2mp3.core.exceptions import InvalidReferenceError, RateLimitedError, Yt2Mp3Error
from yt2mp3.routers import health_router, media_router
from yt2mp3.services.extractor import MediaExtractor, YtDlpExtractor
from yt2mp3.services.media import MediaService
from yt2mp3.services.rate_limiter import SlidingWindowRateLimiter

logger = logging.getLogger(__name__)


async def handle_app_error(request: Request, exc: Yt2Mp3Error) -> JSONResponse:
    """Map a yt2mp3 error to ``{"error": message}`` with its status code."""
    if exc.status_code >= 500:
        logger.error(f"{request.method} {request.url.path} failed: {exc.message}")
    headers = None
    if isinstance(exc, RateLimitedError) and exc.retry_after is not None:
        headers = {"Retry-After": str(int(exc.retry_after) + 1)}
    return JSONResponse(status_code=exc.status_code, content={"error": exc.message}, headers=headers)


async def handle_validation_error(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Malformed bodies (no url, non-string url, bad JSON) are invalid URLs."""
    logger.debug(f"Request validation failed: {exc.errors()}")
    return JSONResponse(status_code=400, content={"error": InvalidReferenceError().message})


async def handle_unexpected_error(request: Request, exc: Exception) -> JSONResponse:
    logger.exception(f"Unhandled error on {request.method} {request.url.path}: {exc}")
    return JSONResponse(status_code=500, content={"error": "Internal server error."})


def create_app(
    config: Optional[AppConfig] = None,
    extractor: Optional[MediaExtractor] = None,
    rate_limiter: Optional[SlidingWindowRateLimiter] = None,
) -> FastAPI:
    """
    Build the FastAPI application.

    Args:
        config: Application config (defaults to the environment)
        extractor: Extractor to use (defaults to yt-dlp; cookies are decoded here)
        rate_limiter: Rate limiter to use (defaults to one built from config)

    Returns:
        Configured FastAPI app
    """
    config = config or get_config()

    if extractor is None:
        extractor = YtDlpExtractor.from_config(config.extractor)
    if rate_limiter is None:
        rate_limiter = SlidingWindowRateLimiter(
            limit=config.rate_limit.limit,
            window=config.rate_limit.window,
            sweep_threshold=config.rate_limit.sweep_threshold,
        )

    app = FastAPI(
        title="yt2mp3 API",
        description="YouTube to MP3 conversion API backed by yt-dlp",
        version=__version__,
        debug=config.debug,
    )

    app.state.config = config
    app.state.rate_limiter = rate_limiter
    app.state.media_service = MediaService(extractor, config.extractor.artifact_dir)

    # The browser client reads the download filename from Content-Disposition
    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.server.cors_origins,
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=["Content-Disposition"],
    )

    app.add_exception_handler(Yt2Mp3Error, handle_app_error)
    app.add_exception_handler(RequestValidationError, handle_validation_error)
    app.add_exception_handler(Exception, handle_unexpected_error)

    app.include_router(health_router)
    app.include_router(media_router)

    return app


def run_http_server(config: Optional[AppConfig] = None):
    """Run the HTTP API server"""
    import uvicorn

    config = config or get_config()
    app = create_app(config)
    logger.info(f"Server running on port {config.server.port}")
    uvicorn.run(app, host=config.server.host, port=config.server.port, log_level=config.log_level.lower())
