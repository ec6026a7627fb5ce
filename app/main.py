"""
app/main.py
────────────
FastAPI application factory.

All business logic lives in ``analytics/`` and ``app/api/v1/endpoints/``.
This file wires together logging, middleware, routers, and lifecycle
events only.

API Layout
----------
GET  /                           Health check
GET  /api/v1/forecast/models     Available model tags
POST /api/v1/forecast/           Forecast from inline history
POST /api/v1/forecast/symbol     Fetch a ticker's history and forecast

OpenAPI docs
------------
- Swagger UI:  http://localhost:8000/docs
- ReDoc:       http://localhost:8000/redoc
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from app.api.v1.router import api_router
from core.config import get_settings

settings = get_settings()

logging.basicConfig(
    level=settings.effective_log_level,
    format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
)
logger = logging.getLogger(__name__)


# ── Lifespan ──────────────────────────────────────────────────────────────────


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Log startup and shutdown; the service holds no external connections."""
    logger.info(
        "Starting %s v%s (debug=%s, min_history_points=%d)",
        settings.APP_TITLE,
        settings.APP_VERSION,
        settings.DEBUG,
        settings.MIN_HISTORY_POINTS,
    )

    yield

    logger.info("Shutting down %s", settings.APP_TITLE)


# ── App factory ───────────────────────────────────────────────────────────────

app = FastAPI(
    title=settings.APP_TITLE,
    version=settings.APP_VERSION,
    description=settings.APP_DESCRIPTION,
    docs_url="/docs",
    redoc_url="/redoc",
    lifespan=lifespan,
)

# ── Middleware ────────────────────────────────────────────────────────────────

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# ── Routers ───────────────────────────────────────────────────────────────────

app.include_router(api_router, prefix="/api/v1")

# ── Root health-check ─────────────────────────────────────────────────────────


@app.get("/", tags=["health"], summary="Health check")
def health_check() -> dict:
    """
    Lightweight liveness check.

    Returns:
        Status and current API version.
    """
    return {"status": "ok", "version": settings.APP_VERSION}
