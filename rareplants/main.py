"""
Main FastAPI application for RarePlants.

This module creates and configures the FastAPI application with its
middleware, exception handlers and route handlers.
"""

import os
import time
import uuid
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from prometheus_fastapi_instrumentator import Instrumentator
import structlog

from rareplants.application.models import APIConfig, ErrorResponse
from rareplants.application.api.routes import plants, health
from rareplants.infrastructure.database.config import DatabaseConfig, initialize_database, close_database
from rareplants.infrastructure.logging.config import configure_logging
from rareplants.shared.exceptions import RarePlantsError, get_http_status_code, should_log_error

# Configure structured logging
configure_logging()
logger = structlog.get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan manager for startup and shutdown."""
    logger.info("Starting RarePlants application...")

    try:
        db_manager = await initialize_database(DatabaseConfig.from_env())
        await db_manager.create_tables()
        logger.info("RarePlants application started successfully")
    except Exception as e:
        logger.error("Failed to start application", error=str(e))
        raise

    yield

    logger.info("Shutting down RarePlants application...")
    await close_database()


def create_application() -> FastAPI:
    """Create and configure the FastAPI application."""
    config = APIConfig()

    app = FastAPI(
        title=config.title,
        version=config.version,
        description=config.description,
        docs_url=config.docs_url,
        redoc_url=config.redoc_url,
        openapi_url=config.openapi_url,
        lifespan=lifespan
    )

    setup_middleware(app, config)
    setup_exception_handlers(app)
    setup_routes(app)
    setup_prometheus_metrics(app)

    return app


def setup_middleware(app: FastAPI, config: APIConfig) -> None:
    """Configure application middleware."""

    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.cors_origins,
        allow_credentials=True,
        allow_methods=config.cors_methods,
        allow_headers=config.cors_headers,
    )

    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        """Log all HTTP requests with correlation IDs."""
        correlation_id = request.headers.get("X-Correlation-ID") or f"req_{uuid.uuid4().hex}"

        with structlog.contextvars.bound_contextvars(
            correlation_id=correlation_id,
            method=request.method,
            path=request.url.path,
        ):
            start_time = time.perf_counter()
            logger.info("Request started")

            response = await call_next(request)

            response.headers["X-Correlation-ID"] = correlation_id
            logger.info(
                "Request completed",
                status_code=response.status_code,
                duration_ms=round((time.perf_counter() - start_time) * 1000, 2)
            )
            return response


def setup_exception_handlers(app: FastAPI) -> None:
    """Setup global exception handlers. Bodies never carry internal detail."""

    @app.exception_handler(RarePlantsError)
    async def rareplants_exception_handler(request: Request, exc: RarePlantsError):
        status_code = get_http_status_code(exc)

        if should_log_error(exc):
            logger.error(
                "RarePlants error occurred",
                error_type=type(exc).__name__,
                error_message=exc.message,
                error_code=exc.error_code,
                details=exc.details,
                status_code=status_code
            )

        message = "internal server error" if status_code >= 500 else "request could not be completed"
        return JSONResponse(status_code=status_code, content=ErrorResponse(error=message).model_dump())

    @app.exception_handler(Exception)
    async def general_exception_handler(request: Request, exc: Exception):
        logger.error(
            "Unexpected error occurred",
            error_type=type(exc).__name__,
            error_message=str(exc),
            request_method=request.method,
            request_path=request.url.path
        )
        return JSONResponse(
            status_code=500,
            content=ErrorResponse(error="internal server error").model_dump()
        )


def setup_routes(app: FastAPI) -> None:
    """Setup application routes."""

    app.include_router(
        plants.router,
        prefix="/api/v1/plants",
        tags=["Plants"]
    )

    app.include_router(
        health.router,
        prefix="/api/v1/health",
        tags=["Health"]
    )


def setup_prometheus_metrics(app: FastAPI) -> None:
    """Setup Prometheus metrics collection."""
    instrumentator = Instrumentator(
        should_group_status_codes=False,
        should_ignore_untemplated=True,
        should_respect_env_var=True,
        excluded_handlers=["/metrics"],
        env_var_name="ENABLE_METRICS",
    )
    instrumentator.instrument(app).expose(app, endpoint="/metrics")


# Create the application instance
app = create_application()


# Development server entry point
if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "rareplants.main:app",
        host=os.getenv("API_HOST", "0.0.0.0"),
        port=int(os.getenv("API_PORT", "8000")),
        reload=os.getenv("API_RELOAD", "false").lower() == "true",
        log_config=None,  # Use our custom logging configuration
        access_log=False,  # Handled by our middleware
    )
