"""
Affiliate Tracker: click recording and postback attribution.
Main application entry point.
"""

from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from tracker.api.dashboard import router as dashboard_router
from tracker.api.tracking import router as tracking_router
from tracker.config import Settings, get_settings
from tracker.core.errors import InvalidRequest, StoreError, TrackerError
from tracker.middleware.security import SecurityHeadersMiddleware
from tracker.models.database import Database

import structlog

structlog.configure(
    processors=[
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.add_log_level,
    ] + (
        [structlog.dev.ConsoleRenderer()] if get_settings().debug
        else [structlog.processors.format_exc_info, structlog.processors.JSONRenderer()]
    ),
)

logger = structlog.get_logger()


def _error(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"status": "error", "message": message})


async def tracker_error_handler(request: Request, exc: TrackerError) -> JSONResponse:
    return _error(exc.status_code, exc.message)


async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    return _error(InvalidRequest.status_code, InvalidRequest.message)


async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.error("unhandled_error", path=request.url.path, error=str(exc), exc_info=exc)
    return _error(StoreError.status_code, StoreError.message)


def create_app(settings: Settings | None = None) -> FastAPI:
    settings = settings or get_settings()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        db = Database(settings)
        if settings.create_schema:
            await db.create_all()
        app.state.db = db
        logger.info("tracker_starting", port=settings.port)
        try:
            yield
        finally:
            await db.dispose()
            logger.info("tracker_shutting_down")

    app = FastAPI(
        title=settings.app_name,
        description="Affiliate click tracking and postback attribution.",
        version="1.0.0",
        lifespan=lifespan,
        docs_url="/docs" if settings.debug else None,
        redoc_url="/redoc" if settings.debug else None,
        openapi_url="/openapi.json" if settings.debug else None,
    )

    app.add_middleware(SecurityHeadersMiddleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_methods=["GET"],
        allow_headers=["Content-Type"],
    )

    app.add_exception_handler(TrackerError, tracker_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)

    # --- Routes ---
    app.include_router(tracking_router)
    app.include_router(dashboard_router)

    @app.get("/health")
    async def health():
        return {"status": "ok", "service": "affiliate-tracker", "version": "1.0.0"}

    return app


app = create_app()


def run():
    """Console entry point: serve with uvicorn."""
    import uvicorn

    settings = get_settings()
    uvicorn.run("tracker.main:app", host=settings.host, port=settings.port)
