"""
Database connection pool and connection manager.

All database access goes through conn(). Never use pool.acquire()
directly outside this module. The pool only exists when DATABASE_URL is
set; without it the app runs on the in-memory component store.
"""

from __future__ import annotations

import json
import logging
from contextlib import asynccontextmanager

import asyncpg

from backend.config import settings

logger = logging.getLogger(__name__)

pool: asyncpg.Pool | None = None


async def init_pool(dsn: str | None = None) -> None:
    """
    Initialize the connection pool.
    Called once at application startup.
    """
    global pool
    pool = await asyncpg.create_pool(
        dsn=dsn or settings.DATABASE_URL,
        min_size=1,
        max_size=10,
        command_timeout=60,
        init=_init_connection,
    )
    logger.info("Database pool initialized")


async def close_pool() -> None:
    """
    Close the connection pool.
    Called at application shutdown.
    """
    global pool
    if pool is not None:
        await pool.close()
        pool = None
        logger.info("Database pool closed")


async def _init_connection(conn: asyncpg.Connection) -> None:
    """
    Initialize each new connection.
    Component properties are stored as JSONB and decoded to dicts.
    """
    await conn.set_type_codec(
        "jsonb",
        encoder=json.dumps,
        decoder=json.loads,
        schema="pg_catalog",
    )
    await conn.set_type_codec(
        "json",
        encoder=json.dumps,
        decoder=json.loads,
        schema="pg_catalog",
    )


@asynccontextmanager
async def conn():
    """
    Acquire a pooled connection inside a transaction.

    Usage:
        async with conn() as c:
            row = await c.fetchrow("SELECT * FROM components WHERE id = $1", component_id)

    Yields:
        asyncpg.Connection
    """
    if pool is None:
        raise RuntimeError("Database pool not initialized. Call init_pool() first.")

    async with pool.acquire() as connection:
        async with connection.transaction():
            yield connection
