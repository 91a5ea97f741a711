"""
db/connection.py
----------------
Manages the PostgreSQL database handle.
Uses psycopg2's SimpleConnectionPool sized to a single connection: the
console processes one request at a time, so one connection is held for
the whole process lifetime.
"""

from contextlib import contextmanager
from typing import Iterator

import psycopg2
from psycopg2 import pool
from config import DATABASE_URL, DB_CONNECT_TIMEOUT
from utils.logger import get_logger

logger = get_logger(__name__)

_pool: pool.SimpleConnectionPool | None = None


def init_pool(dsn: str | None = None) -> None:
    """
    Open the single shared database connection.

    Args:
        dsn: Connection string; defaults to ``config.DATABASE_URL``.

    Raises:
        psycopg2.OperationalError: If the database is unreachable.
    """
    global _pool
    if _pool is not None:
        return
    try:
        _pool = pool.SimpleConnectionPool(
            1, 1, dsn or DATABASE_URL, connect_timeout=DB_CONNECT_TIMEOUT
        )
        logger.info("Database connection initialized successfully.")
    except psycopg2.OperationalError as e:
        logger.error(f"Failed to connect to database: {e}")
        raise


def get_connection():
    """
    Borrow the shared connection.

    Raises:
        RuntimeError: If init_pool() has not been called.
    """
    if _pool is None:
        raise RuntimeError("Database pool not initialized. Call init_pool() first.")
    return _pool.getconn()


def release_connection(conn) -> None:
    """Hand the shared connection back after a statement."""
    if _pool is not None:
        _pool.putconn(conn)


def close_pool() -> None:
    """Close the shared connection."""
    global _pool
    if _pool is not None:
        _pool.closeall()
        _pool = None
        logger.info("Database connection closed.")


@contextmanager
def database(dsn: str | None = None) -> Iterator[None]:
    """
    Hold the database handle for the duration of the ``with`` block.

    The handle is closed on exit, whether the block finished normally
    or raised.
    """
    init_pool(dsn)
    try:
        yield
    finally:
        close_pool()
