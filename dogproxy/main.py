"""DogProxy API — FastAPI application entry point.

Invariants:
    - Routes registered explicitly (no auto-discovery)
    - Global error handlers map DogProxyError → structured JSON responses
    - CORS configured from settings (not hardcoded)
    - Database and dog.ceo client created on startup, released on shutdown

Design Decisions:
    - Lifespan over @app.on_event: FastAPI recommended pattern, cleaner cleanup
    - create_all on startup keeps SQLite dev runs migration-free; alembic owns production schema
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from dogproxy.api.error_handlers import register_error_handlers
from dogproxy.api.routes import dogs, health, users
from dogproxy.config import get_settings
from dogproxy.infrastructure.database import close_db, init_db
from dogproxy.infrastructure.dog_api_client import (
    DogApiConfig, close_dog_client, init_dog_client,
)
from dogproxy.infrastructure.observability import setup_logging
import dogproxy.models  # noqa: F401

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup/shutdown lifecycle."""
    settings = get_settings()
    setup_logging(settings.log_level, settings.log_format)
    manager = init_db(
        settings.database_url,
        pool_size=settings.database_pool_size,
        max_overflow=settings.database_max_overflow,
    )
    await manager.create_all()
    init_dog_client(DogApiConfig.from_settings(settings))
    logger.info("DogProxy API started")
    yield
    logger.info("DogProxy API shutting down")
    await close_dog_client()
    await close_db()


def create_app() -> FastAPI:
    settings = get_settings()
    app = FastAPI(title="DogProxy API", version="1.0.0", lifespan=lifespan)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(health.router)
    app.include_router(dogs.router)
    app.include_router(users.router)

    register_error_handlers(app)
    return app


app = create_app()
