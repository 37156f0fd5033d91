"""
Dependency wiring for the FastAPI app.

The datastore client is built once when the application is created and kept
on ``app.state``; request handlers receive it through ``Depends``.
"""

from __future__ import annotations

import logging

from fastapi import Request

from screenhound.config import Settings
from screenhound.db import DbClient, InMemoryDbClient, PostgresDbClient

logger = logging.getLogger(__name__)


def build_db_client(settings: Settings) -> DbClient:
    """Pick the datastore backend from settings."""
    if settings.use_in_memory_backends:
        return InMemoryDbClient()
    if settings.supabase_url and settings.supabase_key:
        from screenhound.supabase_db import SupabaseDbClient

        return SupabaseDbClient(settings.supabase_url, settings.supabase_key)
    if settings.database_url:
        return PostgresDbClient(settings.database_url)
    logger.warning("No datastore configured, submissions will only live in memory")
    return InMemoryDbClient()


def get_db_client(request: Request) -> DbClient:
    return request.app.state.db


def get_app_settings(request: Request) -> Settings:
    return request.app.state.settings
