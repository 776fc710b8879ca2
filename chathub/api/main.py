"""
FastAPI application with assembled routers.

Initializes FastAPI app with all API routers, error handlers and
observability middleware, and configures uvicorn server.

Dependencies: fastapi, chathub.api.routers, uvicorn
System role: API entry point with router assembly and server launch
"""

import logging
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from chathub.boundary.db import init_models
from chathub.configs import get_settings
from chathub.observability.logger import configure_logging
from chathub.observability.middleware import CorrelationMiddleware, RequestLoggingMiddleware
from .routers import (
    cache_router,
    chat_stream_router,
    chats_router,
    connectors_router,
    folders_router,
    health_router,
    settings_router,
)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan context manager.

    Configures logging and creates missing tables on startup.
    """
    settings = get_settings()
    configure_logging(settings.log_level)
    logger = logging.getLogger("uvicorn")

    logger.info("Initializing database schema...")
    await init_models()
    logger.info("Database schema ready")

    yield

    logger.info("Shutting down")


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    """Report HTTP errors as ``{"error": message}``."""
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": exc.detail},
        headers=getattr(exc, "headers", None),
    )


async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Report malformed request bodies and parameters as 400 with the first error."""
    errors = exc.errors()
    if errors:
        first = errors[0]
        location = ".".join(str(part) for part in first.get("loc", ()) if part != "body")
        message = f"{location}: {first.get('msg')}" if location else str(first.get("msg"))
    else:
        message = "Invalid request"
    return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content={"error": message})


def create_app() -> FastAPI:
    """
    Create and configure FastAPI application with routers.

    Returns:
        FastAPI: Configured application instance with all routers registered
    """
    settings = get_settings()
    app = FastAPI(
        title="ChatHub API",
        description="Personal AI chat workspace with folders, search and tool connectors",
        version="0.1.0",
        debug=settings.debug,
        lifespan=lifespan,
    )

    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=["X-User-Message-Id", "X-Assistant-Message-Id", "X-Correlation-ID"],
    )

    # Observability; correlation is outermost so request logs carry the id
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(CorrelationMiddleware)

    app.include_router(health_router, prefix="/api")
    app.include_router(folders_router, prefix="/api")
    app.include_router(chats_router, prefix="/api")
    app.include_router(chat_stream_router, prefix="/api")
    app.include_router(connectors_router, prefix="/api")
    app.include_router(settings_router, prefix="/api")
    app.include_router(cache_router, prefix="/api")

    return app


app = create_app()


if __name__ == "__main__":
    uvicorn.run(
        "chathub.api.main:app",
        host="0.0.0.0",
        port=8000,
    )
