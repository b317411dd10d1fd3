"""FastAPI application entry point."""

import logging
import os
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles
from sqlalchemy.exc import SQLAlchemyError

from minicms.api import assistant, auth, dashboard, posts
from minicms.config import Settings, get_settings
from minicms.database import Database
from minicms.exceptions import CmsError, StorageFailureError
from minicms.services.sessions import build_session_store

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Handle application startup and shutdown events."""
    yield
    app.state.database.dispose()


async def cms_error_handler(request: Request, exc: CmsError) -> JSONResponse:
    return JSONResponse(status_code=exc.status_code, content={"detail": exc.detail})


async def storage_error_handler(request: Request, exc: SQLAlchemyError) -> JSONResponse:
    """Database failures are logged in full but reported generically."""
    logger.exception(f"Storage failure on {request.method} {request.url.path}")
    failure = StorageFailureError()
    return JSONResponse(status_code=failure.status_code, content={"detail": failure.detail})


def create_app(settings: Settings | None = None) -> FastAPI:
    """Build the application with its connection pool and session store."""
    settings = settings or get_settings()
    logging.basicConfig(level=settings.log_level.upper())

    app = FastAPI(
        title="Mini CMS API",
        description="Authenticated content publishing with AI-assisted drafts",
        version="0.1.0",
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.database = Database(settings.database_url)
    app.state.session_store = build_session_store(settings)

    # CORS middleware for development
    if settings.is_development:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=["http://localhost:3000"],
            allow_credentials=True,
            allow_methods=["*"],
            allow_headers=["*"],
        )

    app.add_exception_handler(CmsError, cms_error_handler)
    app.add_exception_handler(SQLAlchemyError, storage_error_handler)

    # Register routers
    app.include_router(auth.router)
    app.include_router(posts.router)
    app.include_router(dashboard.router)
    app.include_router(assistant.router)

    os.makedirs(settings.upload_dir, exist_ok=True)
    app.mount("/uploads", StaticFiles(directory=settings.upload_dir), name="uploads")

    @app.get("/health")
    async def health_check():
        """Health check endpoint."""
        return {"status": "healthy", "environment": settings.environment}

    return app


app = create_app()
