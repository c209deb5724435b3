import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from .logging_config import setup_logging
from .repositories import Repository, build_repository
from .routers import status as status_router
from .routers import todos as todos_router
from .settings import Settings, get_settings

logger = logging.getLogger(__name__)

openapi_tags = [
    {"name": "status", "description": "Service banner and static file endpoints."},
    {"name": "todos", "description": "List and create Todo items."},
]


# PUBLIC_INTERFACE
def create_app(settings: Optional[Settings] = None, repository: Optional[Repository] = None) -> FastAPI:
    """
    Build the FastAPI application.

    Args:
        settings: Configuration to use; read from the environment when omitted.
        repository: Storage backend to use; built from settings during startup when omitted.

    Startup runs connect() then ensure_indexes() on the repository before any
    request is served. A failure in either step is logged and re-raised so the
    server refuses to start.
    """
    settings = settings or get_settings()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        setup_logging(settings.log_level)
        repo: Optional[Repository] = None
        try:
            repo = repository or build_repository(settings)
            logger.info("Starting Tasky API with %s backend", repo.name)
            await repo.connect()
            await repo.ensure_indexes()
        except Exception:
            logger.exception("Startup failed; refusing to accept traffic")
            if repo is not None:
                await repo.close()
            raise
        app.state.repository = repo
        logger.info("Startup complete")
        try:
            yield
        finally:
            logger.info("Tasky API shutting down")
            await repo.close()

    app = FastAPI(
        title="Tasky API",
        description="Minimal todo service backed by MongoDB.",
        version="0.1.0",
        openapi_tags=openapi_tags,
        lifespan=lifespan,
    )
    app.state.settings = settings

    # Configure CORS based on settings (CORS_ALLOW_ORIGINS), with '*' fallback
    allow_all = (settings.cors_allow_origins == ["*"]) or (len(settings.cors_allow_origins) == 0)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"] if allow_all else settings.cors_allow_origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
        """
        Return a consistent JSON structure for request validation errors.

        Response format:
            {
                "error": "ValidationError",
                "detail": [... pydantic/fastapi error details ...],
                "message": "Request validation failed"
            }
        """
        logger.warning("Validation error on %s", request.url.path)
        return JSONResponse(
            status_code=422,
            content={
                "error": "ValidationError",
                "message": "Request validation failed",
                "detail": jsonable_encoder(exc.errors()),
            },
        )

    @app.exception_handler(Exception)
    async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
        """Catch-all: log the traceback, answer a generic 500 without internal details."""
        logger.error("Unhandled exception on %s", request.url.path, exc_info=exc)
        return JSONResponse(
            status_code=500,
            content={"error": "InternalServerError", "message": "Internal Server Error"},
        )

    app.include_router(status_router.router)
    app.include_router(todos_router.router)
    return app


app = create_app()
