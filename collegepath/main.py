"""
CollegePath - college application tracker

FastAPI application: essays with version history and AI feedback, roadmap
progress, and the university/scholarship directory.
"""
import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from .api.router import api_router
from .config import get_settings
from .errors import (
    ConcurrentEditConflict,
    DataIntegrityViolation,
    FeedbackGenerationError,
    NotFoundOrUnauthorized,
    ValidationError,
)
from .infra.db.session import close_db, init_db

# Configure logging
logging.basicConfig(
    level=getattr(logging, get_settings().log_level.upper(), logging.INFO),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler."""
    logger.info("Starting CollegePath API server...")
    await init_db()

    yield

    await close_db()
    logger.info("Shutting down CollegePath API server...")


# ============================================================================
# Exception Handlers
# ============================================================================

async def _validation_error(request: Request, exc: ValidationError) -> JSONResponse:
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"detail": exc.message, "field": exc.field},
    )


async def _not_found(request: Request, exc: NotFoundOrUnauthorized) -> JSONResponse:
    return JSONResponse(status_code=status.HTTP_404_NOT_FOUND, content={"detail": str(exc)})


async def _conflict(request: Request, exc: ConcurrentEditConflict) -> JSONResponse:
    return JSONResponse(
        status_code=status.HTTP_409_CONFLICT,
        content={"detail": str(exc), "version": exc.version},
    )


async def _feedback_failed(request: Request, exc: FeedbackGenerationError) -> JSONResponse:
    logger.error(f"[FEEDBACK] {request.method} {request.url.path} failed: {exc}")
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"detail": "Failed to generate AI feedback"},
    )


async def _integrity_violation(request: Request, exc: DataIntegrityViolation) -> JSONResponse:
    logger.error(f"Data integrity violation on {request.method} {request.url.path}: {exc}")
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"detail": "Internal server error"},
    )


async def _unhandled(request: Request, exc: Exception) -> JSONResponse:
    logger.exception(f"Unhandled error on {request.method} {request.url.path}")
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"detail": "Internal server error"},
    )


def create_app() -> FastAPI:
    """Create and configure the FastAPI application."""
    settings = get_settings()

    app = FastAPI(
        title=settings.app_name,
        description="College application tracker: essays, feedback, roadmap and directory",
        version=settings.app_version,
        lifespan=lifespan,
        docs_url="/docs",
        redoc_url="/redoc",
    )

    # CORS middleware for frontend
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.add_exception_handler(ValidationError, _validation_error)
    app.add_exception_handler(NotFoundOrUnauthorized, _not_found)
    app.add_exception_handler(ConcurrentEditConflict, _conflict)
    app.add_exception_handler(FeedbackGenerationError, _feedback_failed)
    app.add_exception_handler(DataIntegrityViolation, _integrity_violation)
    app.add_exception_handler(Exception, _unhandled)

    # Include API routes
    app.include_router(api_router)

    @app.get("/", include_in_schema=False)
    async def root():
        return {
            "name": settings.app_name,
            "version": settings.app_version,
            "docs": "/docs",
            "api": "/api",
        }

    return app


app = create_app()
