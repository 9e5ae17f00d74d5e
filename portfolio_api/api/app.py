from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from portfolio_api.api.errors import register_error_handlers
from portfolio_api.api.middleware import RequestLogMiddleware, RequestSizeLimitMiddleware, SecurityHeadersMiddleware
from portfolio_api.core.settings import Settings
from portfolio_api.db.migrations import run_migrations
from portfolio_api.db.session import create_engine_and_sessionmaker
from portfolio_api.services.auth_service import AuthService
from portfolio_api.services.mailer import ContactNotifier
from portfolio_api.services.passwords import PasswordHasher
from portfolio_api.services.repository import Repository

from portfolio_api.api.routers import admin, auth, health, public

logger = logging.getLogger(__name__)


def create_app(settings: Optional[Settings] = None, *, hasher: Optional[PasswordHasher] = None) -> FastAPI:
    settings = settings or Settings()
    hasher = hasher or PasswordHasher()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        logger.info("Starting portfolio API (env=%s, db=%s)...", settings.env, settings.db_path)

        app.state.settings = settings

        # --- DB ---
        db_rt = create_engine_and_sessionmaker(settings.database_url, echo=settings.db_echo)
        app.state.db = db_rt
        try:
            run_migrations(db_rt, settings, hasher)
        except Exception:
            logger.exception("Database migration failed; refusing to start")
            db_rt.dispose()
            raise

        # --- Services ---
        app.state.repository = Repository(db_rt)
        app.state.auth_service = AuthService(
            db_rt,
            hasher=hasher,
            session_ttl_days=settings.admin_session_ttl_days,
        )
        app.state.notifier = ContactNotifier(settings)
        if not app.state.notifier.configured:
            logger.info("SMTP not configured; contact notifications disabled")

        try:
            yield
        finally:
            logger.info("Shutting down portfolio API...")
            db_rt.dispose()

    app = FastAPI(
        title="Portfolio API",
        lifespan=lifespan,
        docs_url="/docs" if settings.is_dev else None,
        redoc_url="/redoc" if settings.is_dev else None,
        openapi_url="/openapi.json" if settings.is_dev else None,
    )

    # Security middleware
    app.add_middleware(RequestSizeLimitMiddleware, max_bytes=settings.max_request_size_bytes)
    app.add_middleware(SecurityHeadersMiddleware, api_prefix=settings.api_prefix)
    app.add_middleware(RequestLogMiddleware)

    # CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins or [],
        allow_credentials=True,
        allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
        allow_headers=["Content-Type", "Authorization", "X-Session-Token"],
    )

    register_error_handlers(app)

    prefix = settings.api_prefix
    app.include_router(health.router, prefix=prefix)
    app.include_router(public.router, prefix=prefix)
    app.include_router(auth.router, prefix=prefix)
    app.include_router(admin.router, prefix=prefix)

    return app
