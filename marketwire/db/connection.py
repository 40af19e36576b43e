"""Database connection management."""

from contextlib import asynccontextmanager
from typing import Any, AsyncGenerator, Dict, Optional

import psycopg
from psycopg.conninfo import make_conninfo
from psycopg.rows import dict_row
from psycopg_pool import AsyncConnectionPool


def build_conninfo(config: Dict[str, Any]) -> str:
    """Build a libpq connection string from the resolved postgres config."""
    return make_conninfo(
        host=config.get("host", "localhost"),
        port=config.get("port", 5432),
        dbname=config.get("database", "marketwire"),
        user=config.get("user", "marketwire"),
        password=config.get("password") or None,
    )


_connection_pool: Optional[AsyncConnectionPool] = None


async def get_connection_pool(config: Dict[str, Any]) -> AsyncConnectionPool:
    """Get or open the process-wide pool. ``config`` is only read on first use."""
    global _connection_pool
    if _connection_pool is None:
        pool = AsyncConnectionPool(
            build_conninfo(config),
            min_size=1,
            max_size=10,
            kwargs={"row_factory": dict_row},
            open=False,
        )
        await pool.open()
        _connection_pool = pool
    return _connection_pool


async def close_connection_pool() -> None:
    """Close the pool if one was opened."""
    global _connection_pool
    if _connection_pool is not None:
        pool, _connection_pool = _connection_pool, None
        await pool.close()


@asynccontextmanager
async def get_connection(config: Dict[str, Any]) -> AsyncGenerator[psycopg.AsyncConnection, None]:
    """Borrow a connection from the pool."""
    pool = await get_connection_pool(config)
    async with pool.connection() as conn:
        yield conn
