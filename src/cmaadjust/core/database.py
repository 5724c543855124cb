"""
Database Helper Functions

Provides context managers and helper functions for SQLite database operations.

Usage:
    from cmaadjust.core.database import get_connection, fetch_one

    with get_connection() as conn:
        row = fetch_one(conn, "SELECT * FROM cma_adjustments WHERE cma_id = ?", (cma_id,))
"""

import sqlite3
from contextlib import contextmanager
from pathlib import Path
from typing import Any, Dict, Generator, Optional, Tuple, Union

from cmaadjust.config import get_config
from cmaadjust.exceptions import DatabaseConnectionError, DatabaseError
from cmaadjust.logging_config import get_logger

logger = get_logger(__name__)

# Type aliases
Row = Dict[str, Any]
Params = Union[Tuple, Dict[str, Any], None]


def dict_factory(cursor: sqlite3.Cursor, row: tuple) -> Dict[str, Any]:
    """Convert SQLite row to dictionary."""
    return {col[0]: row[idx] for idx, col in enumerate(cursor.description)}


@contextmanager
def get_connection(
    db_path: Optional[str] = None,
) -> Generator[sqlite3.Connection, None, None]:
    """Context manager for database connections.

    Rows are returned as dictionaries.

    Args:
        db_path: Path to database file. Uses config default if not specified.

    Yields:
        SQLite connection object.

    Raises:
        DatabaseConnectionError: If unable to connect to the database.
    """
    if db_path is None:
        db_path = get_config().database.path

    Path(db_path).parent.mkdir(parents=True, exist_ok=True)

    try:
        conn = sqlite3.connect(db_path)
    except sqlite3.Error as e:
        logger.error("Database connection error: %s", e)
        raise DatabaseConnectionError(f"Failed to connect to database: {e}") from e

    try:
        conn.row_factory = dict_factory
        logger.debug("Connected to database: %s", db_path)
        yield conn
    finally:
        conn.close()
        logger.debug("Closed database connection")


def fetch_one(
    conn: sqlite3.Connection,
    query: str,
    params: Params = None,
) -> Optional[Row]:
    """Execute a query and fetch one result.

    Args:
        conn: Database connection.
        query: SQL query string.
        params: Query parameters (tuple or dict).

    Returns:
        Single result row as dictionary, or None if no results.

    Raises:
        DatabaseError: If query execution fails.
    """
    try:
        cursor = conn.cursor()
        if params:
            cursor.execute(query, params)
        else:
            cursor.execute(query)
        return cursor.fetchone()
    except sqlite3.Error as e:
        logger.error("Query failed: %s - Error: %s", query[:100], e)
        raise DatabaseError(f"Query failed: {e}") from e


def execute(
    conn: sqlite3.Connection,
    query: str,
    params: Params = None,
    commit: bool = True,
) -> int:
    """Execute a statement (CREATE, INSERT, UPDATE, DELETE).

    Args:
        conn: Database connection.
        query: SQL statement.
        params: Query parameters (tuple or dict).
        commit: If True, commit the transaction.

    Returns:
        Number of rows affected.

    Raises:
        DatabaseError: If execution fails.
    """
    try:
        cursor = conn.cursor()
        if params:
            cursor.execute(query, params)
        else:
            cursor.execute(query)
        if commit:
            conn.commit()
        return cursor.rowcount
    except sqlite3.Error as e:
        logger.error("Execute failed: %s - Error: %s", query[:100], e)
        raise DatabaseError(f"Execute failed: {e}") from e
