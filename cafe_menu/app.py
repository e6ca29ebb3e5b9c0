"""
Cafe menu back end - application entry point.

Main modules:
- admin authentication (bcrypt + signed cookie token)
- category and menu item management
- public menu listing
- image uploads
- menu assistant backed by Gemini

Stack: FastAPI + DuckDB + JWT
"""

import logging
from contextlib import asynccontextmanager
from pathlib import Path
from typing import Optional

from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles
from starlette.exceptions import HTTPException as StarletteHTTPException

from .api import api_router
from .config.settings import Settings, load_settings
from .core.database import DatabaseManager
from .core.error_handler import (
    application_error_handler,
    general_exception_handler,
    http_exception_handler,
    validation_exception_handler,
)
from .core.exceptions import BaseApplicationError
from .core.logging_config import configure_logging
from .core.security import SessionBoundary, TokenCodec
from .services import AssistantService, AuthService, CatalogService, GeminiClient, ImageStorage

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    app.state.db.init_database()
    logger.info("Database initialized at %s", app.state.db.db_path)

    yield

    app.state.db.close()


def create_app(settings: Optional[Settings] = None,
               assistant_client: Optional[GeminiClient] = None) -> FastAPI:
    """Build the application; configuration errors surface here, before serving"""
    settings = settings or load_settings()
    configure_logging(settings.log_level)

    app = FastAPI(
        title=settings.api_title,
        version=settings.api_version,
        description="Cafe menu API",
        debug=settings.debug,
        lifespan=lifespan
    )

    db = DatabaseManager(settings)
    codec = TokenCodec(settings)
    catalog_service = CatalogService(db)

    app.state.settings = settings
    app.state.db = db
    app.state.session_boundary = SessionBoundary(codec, settings)
    app.state.auth_service = AuthService(db)
    app.state.catalog_service = catalog_service
    app.state.assistant_service = AssistantService(catalog_service, settings, client=assistant_client)
    app.state.image_storage = ImageStorage(settings)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=False,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.add_exception_handler(BaseApplicationError, application_error_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(Exception, general_exception_handler)

    app.include_router(api_router, prefix=settings.api_prefix)

    upload_dir = Path(settings.upload_dir)
    upload_dir.mkdir(parents=True, exist_ok=True)
    app.mount(settings.media_url_prefix, StaticFiles(directory=upload_dir), name="media")

    @app.get("/health")
    def health_check():
        try:
            with db.cursor() as conn:
                conn.execute("SELECT 1").fetchone()
            return {"status": "healthy", "version": settings.api_version, "database": "connected"}
        except Exception:
            logger.exception("Health check failed")
            return {"status": "unhealthy", "version": settings.api_version, "database": "error"}

    @app.get("/")
    def root():
        return {
            "name": settings.api_title,
            "version": settings.api_version,
        }

    return app
