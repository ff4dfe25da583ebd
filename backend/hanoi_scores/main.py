"""Hanoi Scores API: FastAPI application entry point.

Invariants:
    - Routes registered explicitly (no auto-discovery)
    - Connection pool and worker pool built once in the lifespan, stored on app.state
    - A pool that cannot be built or reached aborts startup (no traffic served)
    - Global error handlers map ScoreServiceError to plain-text responses
"""

import logging
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI
from pydantic import ValidationError

from hanoi_scores.api.error_handlers import register_error_handlers
from hanoi_scores.api.routes import scores
from hanoi_scores.config import get_settings
from hanoi_scores.infrastructure.database import init_db
from hanoi_scores.infrastructure.observability import (
    register_access_log, setup_logging,
)
from hanoi_scores.infrastructure.workers import WorkerPool

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup/shutdown lifecycle."""
    settings = get_settings()
    setup_logging(settings.log_level, settings.log_format)
    app.state.database = init_db(
        settings.database_url,
        pool_size=settings.database_pool_size,
        max_overflow=settings.database_max_overflow,
        pool_timeout=settings.database_pool_timeout,
        create_tables=settings.database_create_tables,
    )
    app.state.workers = WorkerPool(settings.worker_pool_size)
    logger.info("Hanoi Scores API started")
    yield
    app.state.database.dispose()
    logger.info("Hanoi Scores API shutting down")


app = FastAPI(title="Hanoi Scores API", version="0.1.0", lifespan=lifespan)

register_access_log(app)
register_error_handlers(app)

app.include_router(scores.router)


def run() -> None:
    """Console entry point: validate configuration, then serve with uvicorn."""
    try:
        settings = get_settings()
    except ValidationError as e:
        raise SystemExit(f"Invalid configuration (is DATABASE_URL set?):\n{e}")
    setup_logging(settings.log_level, settings.log_format)
    logger.info(f"Started http server: http://{settings.host}:{settings.port}")
    uvicorn.run(
        app, host=settings.host, port=settings.port,
        lifespan="on", log_config=None,
    )
