"""
User Records API Server
CRUD over user records, backed by an in-memory or PostgreSQL store
"""

import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI

from userapi import __version__
from userapi.api.routes import root, users
from userapi.config.settings import PROTECTED_PREFIX, Settings, StoreBackend, get_settings
from userapi.database.connection import close_database, init_database
from userapi.middleware.access_log import AccessLogMiddleware
from userapi.middleware.api_key import ApiKeyMiddleware
from userapi.services.base_store import UserStore
from userapi.services.factory import build_user_store
from userapi.utils.error_handling import setup_error_handling

logger = logging.getLogger(__name__)


def create_app(settings: Optional[Settings] = None, store: Optional[UserStore] = None) -> FastAPI:
    """
    Build the application.

    Args:
        settings: Runtime configuration (defaults to environment)
        store: Pre-built user store. When omitted the store is created at
            startup from settings, opening the database pool if needed.
    """
    settings = settings or get_settings()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Application lifespan manager"""
        db_pool = None
        if app.state.user_store is None:
            if settings.store_backend == StoreBackend.POSTGRES:
                db_pool = await init_database(settings)
            app.state.user_store = build_user_store(settings, db_pool)
        yield
        await close_database(db_pool, timeout=settings.db_close_timeout)

    app = FastAPI(
        title="User Records API",
        description="CRUD API for user records",
        version=__version__,
        lifespan=lifespan
    )
    app.state.settings = settings
    app.state.user_store = store

    # Middleware added last runs first: access log -> error translation -> API key
    app.add_middleware(ApiKeyMiddleware, api_key=settings.api_key, protected_prefix=PROTECTED_PREFIX)
    setup_error_handling(app)
    app.add_middleware(AccessLogMiddleware)

    app.include_router(root.router, tags=["Root"])
    app.include_router(users.router, prefix="/users", tags=["Users"])

    return app
