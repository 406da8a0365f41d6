"""
Async PostgreSQL connection pool module.

Provides a process-wide asyncpg connection pool used by the PostgreSQL
request store. The pool is created in the FastAPI lifespan when
STORE_BACKEND=postgres and closed on shutdown; the in-memory backend never
touches this module.

Key Components:
- Global connection pool singleton (_pool)
- init_db(): Initialize the connection pool at application startup
- get_db_pool(): Get the pool instance (initializes if needed)
- close_db(): Gracefully close the pool at application shutdown
- execute_query() / execute_query_one() / execute_scalar() /
  execute_command(): helpers that acquire a connection, run one statement
  and release it

Usage:
    await init_db()

    rows = await execute_query("SELECT * FROM requests WHERE status = $1", "new")

    await close_db()
"""

from typing import Any, List, Optional

import asyncpg
from asyncpg import Pool

from backend.core.config import get_settings


# =============================================================================
# Global Pool Singleton
# =============================================================================

# None until init_db() is called
_pool: Optional[Pool] = None


# =============================================================================
# Pool Lifecycle Functions
# =============================================================================

async def init_db() -> Pool:
    """
    Initialize the database connection pool.

    Idempotent: returns the existing pool if one was already created.
    Pool sizing and command timeout come from settings.

    Returns:
        Pool: The asyncpg connection pool instance.

    Raises:
        ValueError: If DATABASE_URL is not configured.
        asyncpg.PostgresError: If connection to the database fails.
        OSError: If the database host is unreachable.
    """
    global _pool

    if _pool is None:
        settings = get_settings()
        if not settings.database_url:
            raise ValueError("DATABASE_URL is not configured")

        _pool = await asyncpg.create_pool(
            dsn=settings.database_url,
            min_size=settings.db_pool_min_size,
            max_size=settings.db_pool_max_size,
            command_timeout=settings.db_command_timeout,
        )

    return _pool


async def get_db_pool() -> Pool:
    """
    Get the database connection pool, initializing if needed.

    Prefer calling init_db() explicitly at startup; lazy initialization adds
    latency to the first request.
    """
    global _pool

    if _pool is None:
        await init_db()

    assert _pool is not None, "Pool should be initialized after init_db()"

    return _pool


async def close_db() -> None:
    """
    Close the database connection pool gracefully.

    Safe to call when the pool was never created. After closing, the next
    get_db_pool() call creates a fresh pool.
    """
    global _pool

    if _pool is not None:
        await _pool.close()
        _pool = None


# =============================================================================
# Query Execution Helpers
# =============================================================================

async def execute_query(query: str, *args: Any) -> List[asyncpg.Record]:
    """
    Execute a query and return all rows.

    Args:
        query: SQL with $1, $2, ... placeholders.
        *args: Positional parameters for the placeholders.

    Returns:
        List of asyncpg.Record rows (dict-like).

    Raises:
        asyncpg.PostgresError: If the query fails.
    """
    pool = await get_db_pool()

    async with pool.acquire() as conn:
        return await conn.fetch(query, *args)


async def execute_query_one(query: str, *args: Any) -> Optional[asyncpg.Record]:
    """
    Execute a query and return the first row, or None when nothing matches.

    Used for primary-key lookups and INSERT/UPDATE ... RETURNING statements.
    """
    pool = await get_db_pool()

    async with pool.acquire() as conn:
        return await conn.fetchrow(query, *args)


async def execute_scalar(query: str, *args: Any) -> Any:
    """Execute a query and return the first column of the first row."""
    pool = await get_db_pool()

    async with pool.acquire() as conn:
        return await conn.fetchval(query, *args)


async def execute_command(query: str, *args: Any) -> str:
    """
    Execute a statement that returns no rows.

    Without arguments the text may hold several statements (schema DDL).

    Returns:
        str: The command status string, e.g. 'CREATE TABLE' or 'UPDATE 1'.
    """
    pool = await get_db_pool()

    async with pool.acquire() as conn:
        return await conn.execute(query, *args)
