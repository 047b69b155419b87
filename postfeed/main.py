"""PostFeed API — FastAPI application entry point.

Invariants:
    - Routes registered explicitly (no auto-discovery)
    - Global error handlers map every failure to {"error": "<message>"}
    - CORS configured from settings (not hardcoded)
    - Database initialized on startup via lifespan context manager, disposed on shutdown

Design Decisions:
    - Lifespan over @app.on_event: FastAPI recommended pattern, cleaner cleanup
    - Schema managed by Alembic (alembic/versions), never create_all at startup
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from postfeed.api.error_handlers import register_error_handlers
from postfeed.api.routes import health, posts, uploads
from postfeed.config import get_settings
from postfeed.infrastructure import database
from postfeed.infrastructure.observability import setup_logging

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup/shutdown lifecycle."""
    settings = get_settings()
    setup_logging(settings.log_level, settings.log_format)
    database.init_db(
        settings.database_url,
        pool_size=settings.database_pool_size,
        max_overflow=settings.database_max_overflow,
    )
    logger.info("PostFeed API started")
    yield
    if database.db_manager:
        await database.db_manager.dispose()
    logger.info("PostFeed API shutting down")


app = FastAPI(
    title="PostFeed API", version="1.0.0", lifespan=lifespan,
)

settings = get_settings()
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Uploads first: /posts/imageboi must never be read as a post id
app.include_router(health.router)
app.include_router(uploads.router)
app.include_router(posts.router)

register_error_handlers(app)
