from collections.abc import Generator
from contextlib import contextmanager
from typing import Any

import psycopg
from psycopg.conninfo import make_conninfo
from psycopg_pool import ConnectionPool

from docfiler.config.settings import Settings

_pool: ConnectionPool | None = None

# One worker process runs documents sequentially.
_POOL_MAX_SIZE = 4
_POOL_OPEN_TIMEOUT_SECONDS = 10.0


def build_conninfo(settings: Settings) -> str:
    return make_conninfo(
        host=settings.db_host,
        port=settings.db_port,
        dbname=settings.db_database,
        user=settings.db_username,
        password=settings.db_password,
    )


def init_pool(settings: Settings) -> None:
    """Open the global connection pool and wait until it can serve connections.

    Raises:
        psycopg_pool.PoolTimeout: if the database is unreachable.
    """
    global _pool  # noqa: PLW0603
    pool = ConnectionPool(
        build_conninfo(settings),
        min_size=1,
        max_size=_POOL_MAX_SIZE,
        check=ConnectionPool.check_connection,
        open=True,
    )
    try:
        pool.wait(timeout=_POOL_OPEN_TIMEOUT_SECONDS)
    except Exception:
        pool.close()
        raise
    _pool = pool


def close_pool() -> None:
    global _pool  # noqa: PLW0603
    if _pool is not None:
        _pool.close()
        _pool = None


@contextmanager
def get_connection() -> Generator[psycopg.Connection[Any], None, None]:
    """Yield a connection from the pool. Caller manages commit/rollback."""
    if _pool is None:
        raise RuntimeError("Connection pool not initialized. Call init_pool() first.")
    with _pool.connection() as conn:
        yield conn
