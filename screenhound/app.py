"""
FastAPI application entry point for the Screenhound backend.
"""

from __future__ import annotations

import logging
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from screenhound.config import Settings, get_settings
from screenhound.db import DbClient
from screenhound.dependencies import build_db_client
from screenhound.routes import root_router, router

logger = logging.getLogger(__name__)


def create_app(
    settings: Optional[Settings] = None, db: Optional[DbClient] = None
) -> FastAPI:
    settings = settings or get_settings()
    logging.basicConfig(level=settings.log_level.upper())

    app = FastAPI(title="Screenhound Backend", version="0.1.0")
    app.state.settings = settings
    app.state.db = db if db is not None else build_db_client(settings)
    logger.info("Datastore client: %s", app.state.db.__class__.__name__)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_allow_origins,
        allow_methods=["*"],
        allow_headers=["Origin", "X-Requested-With", "Content-Type", "Accept"],
    )
    app.include_router(root_router)
    app.include_router(router, prefix=settings.api_prefix)
    return app
