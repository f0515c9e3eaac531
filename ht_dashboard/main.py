"""FastAPI application factory for the dashboard API."""

from __future__ import annotations

from contextlib import asynccontextmanager
from typing import AsyncIterator

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from sqlalchemy.orm import Session, sessionmaker

from .config import settings
from .db import get_default_session_factory, init_db
from .logging import logger
from .middleware.logging import StructuredLoggingMiddleware
from .routers import router


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Create missing tables before the first request is served."""
    init_db(app.state.session_factory)
    logger.info("database_schema_ready")
    yield


def create_app(session_factory: sessionmaker[Session] | None = None) -> FastAPI:
    """Build the app around one session factory (the process default if omitted)."""
    app = FastAPI(title="hattrick-dashboard", version="1.0.0", lifespan=lifespan)
    app.state.session_factory = session_factory or get_default_session_factory()

    app.add_middleware(StructuredLoggingMiddleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.allowed_cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(router)

    @app.get("/healthz")
    def healthcheck() -> dict[str, str]:
        return {"status": "ok"}

    return app
