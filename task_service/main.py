"""FastAPI application entry point."""

import time

import uvicorn
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from loguru import logger
from starlette.exceptions import HTTPException as StarletteHTTPException

from task_service import __version__
from task_service.config import Settings
from task_service.errors import TaskServiceError, error_response
from task_service.logging_setup import configure_logging
from task_service.models import HealthResponse
from task_service.routes import create_task_router
from task_service.store import TaskStore


def create_app(settings: Settings | None = None, store: TaskStore | None = None) -> FastAPI:
    """Create and configure the FastAPI application.

    Args:
        settings: Service settings. Defaults to ``Settings()``.
        store: Task store shared by every handler. A new one is created (and
            seeded when ``settings.seed_samples`` is set) if omitted.

    Returns:
        Configured FastAPI app.
    """
    settings = settings or Settings()
    if store is None:
        store = TaskStore()
        if settings.seed_samples:
            store.seed_samples()

    docs = settings.docs_enabled
    app = FastAPI(
        title="Task Service API",
        description="In-memory task management API.",
        version=__version__,
        docs_url="/docs" if docs else None,
        redoc_url="/redoc" if docs else None,
        openapi_url="/openapi.json" if docs else None,
    )
    app.state.settings = settings
    app.state.store = store

    app.add_middleware(
        CORSMiddleware,
        allow_origins=list(settings.cors_origins),
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        started = time.perf_counter()
        # Stays 500 when the handler raises and call_next re-raises.
        status_code = 500
        try:
            response = await call_next(request)
            status_code = response.status_code
            return response
        finally:
            elapsed_ms = (time.perf_counter() - started) * 1000
            logger.info(
                "{} {} -> {} ({:.1f} ms)",
                request.method,
                request.url.path,
                status_code,
                elapsed_ms,
            )

    @app.exception_handler(TaskServiceError)
    async def handle_service_error(request: Request, exc: TaskServiceError):
        logger.debug("{} {} failed: {}", request.method, request.url.path, exc.message)
        return error_response(exc.status_code, exc.message)

    @app.exception_handler(RequestValidationError)
    async def handle_request_validation(request: Request, exc: RequestValidationError):
        logger.warning("Invalid request body for {} {}: {}", request.method, request.url.path, exc.errors())
        return error_response(400, "Invalid request body")

    @app.exception_handler(StarletteHTTPException)
    async def handle_http_error(request: Request, exc: StarletteHTTPException):
        return error_response(exc.status_code, str(exc.detail), headers=getattr(exc, "headers", None))

    @app.exception_handler(Exception)
    async def handle_unexpected(request: Request, exc: Exception):
        logger.opt(exception=exc).error("Unhandled error on {} {}", request.method, request.url.path)
        return error_response(500, "Internal server error")

    @app.get("/api/health", response_model=HealthResponse, tags=["System"])
    async def health_check() -> HealthResponse:
        """Health check endpoint."""
        return HealthResponse(version=__version__)

    app.include_router(create_task_router(store))

    logger.info(
        "Task service ready env={} tasks={} docs={}",
        settings.environment,
        len(store),
        docs,
    )
    return app


def run() -> None:
    """Serve the API with uvicorn using settings from the environment."""
    settings = Settings.from_env()
    configure_logging(settings.log_level)
    app = create_app(settings)
    logger.info("Listening on http://{}:{}", settings.host, settings.port)
    # log_config=None keeps uvicorn from replacing the loguru intercept.
    uvicorn.run(app, host=settings.host, port=settings.port, log_config=None)


if __name__ == "__main__":
    run()
