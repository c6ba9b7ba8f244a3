"""
AdTags Tag Server.

Main entry point for the tag preview API: renders GPT placeholders and
footer tags for a page description, one ad tag context per request.
"""

import time
from contextlib import asynccontextmanager
from typing import Any

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from adtags.common.config import TagSettings, get_settings
from adtags.common.exceptions import AdTagsError, EnvironmentMissingError
from adtags.common.logger import clear_log_context, get_logger, log_context
from adtags.common.utils import generate_request_id
from adtags.schemas.response import ErrorResponse
from adtags.tag_server.middleware.ad_context import AdTagsMiddleware
from adtags.tag_server.middleware.metrics import MetricsMiddleware, metrics_endpoint
from adtags.tag_server.routers import health, tags

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan manager."""
    settings = get_settings()

    logger.info(
        "Starting AdTags server",
        version=settings.app_version,
        env=settings.env,
        container_id_scope=settings.tags.container_id_scope,
    )

    yield

    logger.info("AdTags server stopped")


def create_app(tag_settings: TagSettings | None = None) -> FastAPI:
    """Create and configure FastAPI application."""
    settings = get_settings()

    app = FastAPI(
        title="AdTags",
        description="Google Publisher Tag placeholders and footer tags",
        version=settings.app_version,
        docs_url="/docs" if settings.debug else None,
        redoc_url="/redoc" if settings.debug else None,
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # One registry per request
    app.add_middleware(AdTagsMiddleware, tag_settings=tag_settings)

    if settings.monitoring.enabled:
        app.add_middleware(MetricsMiddleware)
        app.add_api_route("/metrics", metrics_endpoint, methods=["GET"], tags=["monitoring"])

    @app.middleware("http")
    async def logging_middleware(request: Request, call_next: Any) -> Any:
        """Log all requests with timing."""
        request_id = generate_request_id()
        request.state.request_id = request_id
        log_context(request_id=request_id)

        start_time = time.perf_counter()

        response = await call_next(request)

        duration_ms = (time.perf_counter() - start_time) * 1000

        logger.info(
            "Request completed",
            method=request.method,
            path=request.url.path,
            status_code=response.status_code,
            duration_ms=round(duration_ms, 2),
        )

        response.headers["X-Request-ID"] = request_id
        response.headers["X-Response-Time"] = f"{duration_ms:.2f}ms"

        clear_log_context()

        return response

    @app.exception_handler(AdTagsError)
    async def adtags_error_handler(
        request: Request,
        exc: AdTagsError,
    ) -> JSONResponse:
        """Handle AdTags errors."""
        logger.warning(
            "AdTags error",
            error=exc.__class__.__name__,
            message=exc.message,
            details=exc.details,
        )

        # A missing context is a deployment problem, not a bad request
        status_code = 500 if isinstance(exc, EnvironmentMissingError) else 400

        return JSONResponse(
            status_code=status_code,
            content=ErrorResponse(
                error=exc.__class__.__name__,
                message=exc.message,
                details=exc.details,
            ).model_dump(),
        )

    @app.exception_handler(Exception)
    async def general_error_handler(
        request: Request,
        exc: Exception,
    ) -> JSONResponse:
        """Handle unexpected errors."""
        logger.error(
            "Unexpected error",
            error=str(exc),
            error_type=exc.__class__.__name__,
        )

        return JSONResponse(
            status_code=500,
            content=ErrorResponse(
                error="InternalServerError",
                message="An unexpected error occurred",
            ).model_dump(),
        )

    app.include_router(health.router, tags=["health"])
    app.include_router(tags.router, prefix="/api/v1/tags", tags=["tags"])

    return app


app = create_app()


def main() -> None:
    """Run the server using uvicorn."""
    import uvicorn

    settings = get_settings()

    uvicorn.run(
        "adtags.tag_server.main:app",
        host=settings.server.host,
        port=settings.server.port,
        workers=settings.server.workers,
        reload=settings.server.reload,
        log_level="info" if not settings.debug else "debug",
    )


if __name__ == "__main__":
    main()
