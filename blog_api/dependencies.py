"""
Dependency wiring for the FastAPI app.
"""

from __future__ import annotations

import logging

from blog_api.config import get_settings
from blog_api.db import DbClient, InMemoryDbClient, SqlDbClient

logger = logging.getLogger(__name__)

_db_client: DbClient | None = None


def connect_db(database_url: str | None = None) -> DbClient:
    """
    Open the process-wide store, replacing any client that is already open.

    With no URL the configured ``DATABASE_URL`` is used, or the in-memory
    store when ``USE_IN_MEMORY_BACKENDS`` is set.
    """
    global _db_client
    close_db_client()

    settings = get_settings()
    if database_url is None and settings.use_in_memory_backends:
        _db_client = InMemoryDbClient()
        logger.info("Using in-memory blog post store")
    else:
        _db_client = SqlDbClient(database_url or settings.database_url)
    return _db_client


def get_db_client() -> DbClient:
    """
    Return the singleton store so every request shares one connection pool.
    """
    if _db_client:
        return _db_client
    return connect_db()


def close_db_client() -> None:
    global _db_client
    if _db_client is None:
        return
    _db_client.close()
    _db_client = None
