"""Civic issue reporter FastAPI application."""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles

from civic_reporter import __version__
from civic_reporter.api import health, issues, stats
from civic_reporter.core.config import settings
from civic_reporter.db.session import close_db, init_db
from civic_reporter.services.upload_service import ensure_upload_dir

logging.basicConfig(
    level=logging.DEBUG if settings.debug else logging.INFO,
    format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
)

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Open the issue store on startup and release it on shutdown."""
    init_db()
    upload_dir = ensure_upload_dir()
    logger.info("Storing uploads in %s", upload_dir.resolve())
    yield
    logger.info("Shutting down gracefully...")
    close_db()


app = FastAPI(
    title=settings.app_name,
    version=__version__,
    debug=settings.debug,
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(health.router)
app.include_router(issues.router, prefix=settings.api_prefix)
app.include_router(stats.router, prefix=settings.api_prefix)

app.mount("/uploads", StaticFiles(directory=settings.upload_dir, check_dir=False), name="uploads")
