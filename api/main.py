"""
Lead Exchange API - Main Application.

FastAPI application with CORS enabled for the frontend. The Supabase Store is
created once here and shared by every request through `app.state.store`.
"""

import logging
import time
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from api import __version__
from api.logging_config import configure_logging
from api.models import ErrorResponse
from api.settings import Settings, load_settings
from domain.errors import ServiceError
from repositories.client import create_store

logger = logging.getLogger(__name__)

_UNSET = object()

# Documents the {"error": ...} body shared by every failing route.
ERROR_RESPONSES = {
    status: {"model": ErrorResponse} for status in (400, 401, 403, 404, 500)
}


def _error(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message})


def create_app(settings: Optional[Settings] = None, store=_UNSET) -> FastAPI:
    """
    Build the application.

    Args:
        settings: configuration; read from the environment when omitted
        store: an existing Store (or None to run without one); built from
            `settings` when omitted
    """
    settings = settings or load_settings()

    if store is _UNSET:
        store = create_store(
            settings.supabase_url,
            settings.supabase_key,
            timeout=settings.store_timeout_seconds,
        )

    app = FastAPI(
        title="Lead Exchange API",
        description="REST API brokering the lead exchange frontend and Supabase",
        version=__version__,
        docs_url="/docs",
        redoc_url="/redoc",
    )
    app.state.settings = settings
    app.state.store = store

    app.add_middleware(
        CORSMiddleware,
        allow_origins=[settings.frontend_url],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        started = time.perf_counter()
        response = await call_next(request)
        elapsed_ms = (time.perf_counter() - started) * 1000
        logger.info(
            "%s %s -> %s (%.1f ms)",
            request.method,
            request.url.path,
            response.status_code,
            elapsed_ms,
        )
        return response

    @app.exception_handler(ServiceError)
    async def service_error_handler(request: Request, exc: ServiceError):
        if exc.status_code >= 500:
            logger.error("%s %s failed: %s", request.method, request.url.path, exc.message)
        return _error(exc.status_code, exc.message)

    @app.exception_handler(StarletteHTTPException)
    async def http_error_handler(request: Request, exc: StarletteHTTPException):
        return _error(exc.status_code, str(exc.detail))

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(request: Request, exc: RequestValidationError):
        return _error(400, "Invalid request body.")

    @app.get("/health", tags=["Health"])
    def health_check():
        """
        Health check endpoint.

        Returns the API status, version and whether the store is configured.
        """
        return {
            "status": "healthy",
            "version": __version__,
            "service": "lead-exchange-api",
            "store": "initialized" if app.state.store is not None else "not initialized",
        }

    @app.get("/", tags=["Root"])
    def root():
        """
        Root endpoint with API information.
        """
        return {
            "message": "Lead Exchange API",
            "version": __version__,
            "docs": "/docs",
            "health": "/health"
        }

    # Import and include routers
    from api.routers import auth, dashboard, leads, tasks, users

    app.include_router(auth.router, prefix="/api/auth", tags=["Auth"], responses=ERROR_RESPONSES)
    app.include_router(dashboard.router, prefix="/api/dashboard", tags=["Dashboard"], responses=ERROR_RESPONSES)
    app.include_router(leads.router, prefix="/api/leads", tags=["Leads"], responses=ERROR_RESPONSES)
    app.include_router(tasks.router, prefix="/api/tasks", tags=["Tasks"], responses=ERROR_RESPONSES)
    app.include_router(users.router, prefix="/api/users", tags=["Users"], responses=ERROR_RESPONSES)

    return app


settings = load_settings()
configure_logging(settings.log_level, settings.log_format)
app = create_app(settings)


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host="0.0.0.0", port=settings.port)
