"""Sefask API — FastAPI application entry point.

Invariants:
    - Routes registered explicitly (no auto-discovery)
    - Global error handlers map SefaskError → structured JSON responses
    - CORS configured from settings (not hardcoded); credentials allowed for the auth cookie
    - Database manager created on startup (app.state.db) and disposed on shutdown via lifespan

Design Decisions:
    - Lifespan over @app.on_event: FastAPI recommended pattern, cleaner cleanup
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from sefask.api.error_handlers import register_error_handlers
from sefask.infrastructure.database import DatabaseSessionManager
from sefask.infrastructure.observability import setup_logging
from sefask.config import get_settings
from sefask.api.routes import assignments, auth, health

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup/shutdown lifecycle."""
    settings = get_settings()
    setup_logging(settings.log_level, settings.log_format)
    app.state.db = DatabaseSessionManager.from_url(
        settings.database_url,
        pool_size=settings.database_pool_size,
        max_overflow=settings.database_max_overflow,
    )
    logger.info("Sefask API started")
    yield
    await app.state.db.dispose()
    logger.info("Sefask API shutting down")


app = FastAPI(
    title="Sefask API", version="1.0.0", lifespan=lifespan,
)

settings = get_settings()
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(health.router)
app.include_router(auth.router)
app.include_router(assignments.router)

register_error_handlers(app)
