"""
CMA Adjustment Configuration Storage

Persists the per-CMA rate table, per-comparable overrides and enabled flag.
Calculated results are never stored; they are rebuilt from this
configuration every time a report is opened.
"""

import json
import sqlite3
from datetime import datetime
from typing import Optional

from cmaadjust.core.constants import TABLE_CMA_ADJUSTMENTS
from cmaadjust.core.database import execute, fetch_one
from cmaadjust.core.models import CmaAdjustmentsData
from cmaadjust.exceptions import DatabaseError
from cmaadjust.logging_config import get_logger

logger = get_logger(__name__)


def init_adjustments_table(conn: sqlite3.Connection) -> None:
    """Create the adjustments table if it doesn't exist."""
    execute(conn, f"""
        CREATE TABLE IF NOT EXISTS {TABLE_CMA_ADJUSTMENTS} (
            cma_id TEXT PRIMARY KEY,
            rates TEXT NOT NULL,
            comp_adjustments TEXT NOT NULL,
            enabled INTEGER NOT NULL DEFAULT 0,
            updated_at TEXT
        )
    """)


def save_cma_adjustments(
    conn: sqlite3.Connection,
    cma_id: str,
    data: CmaAdjustmentsData,
) -> None:
    """Insert or replace the adjustment configuration for a CMA."""
    payload = data.to_dict()
    execute(conn, f"""
        INSERT INTO {TABLE_CMA_ADJUSTMENTS} (cma_id, rates, comp_adjustments, enabled, updated_at)
        VALUES (?, ?, ?, ?, ?)
        ON CONFLICT(cma_id) DO UPDATE SET
            rates = excluded.rates,
            comp_adjustments = excluded.comp_adjustments,
            enabled = excluded.enabled,
            updated_at = excluded.updated_at
    """, (
        cma_id,
        json.dumps(payload["rates"]),
        json.dumps(payload["compAdjustments"]),
        1 if data.enabled else 0,
        datetime.now().isoformat(timespec="seconds"),
    ))
    logger.info(
        "Saved adjustments for CMA %s (%d comp override(s))",
        cma_id, len(data.comp_adjustments),
    )


def load_cma_adjustments(
    conn: sqlite3.Connection,
    cma_id: str,
) -> Optional[CmaAdjustmentsData]:
    """Load a CMA's adjustment configuration.

    Stored rate tables are merged with the current defaults, so a rate
    added after the configuration was saved still has a value.

    Returns:
        The configuration, or None if nothing has been saved for the CMA.

    Raises:
        DatabaseError: If the stored JSON is unreadable.
    """
    row = fetch_one(
        conn,
        f"SELECT rates, comp_adjustments, enabled FROM {TABLE_CMA_ADJUSTMENTS} WHERE cma_id = ?",
        (cma_id,),
    )
    if row is None:
        return None

    try:
        rates = json.loads(row["rates"])
        comp_adjustments = json.loads(row["comp_adjustments"])
    except (TypeError, ValueError) as e:
        logger.error("Corrupt adjustment data for CMA %s: %s", cma_id, e)
        raise DatabaseError(f"Corrupt adjustment data for CMA {cma_id}: {e}") from e

    return CmaAdjustmentsData.from_dict({
        "rates": rates,
        "compAdjustments": comp_adjustments,
        "enabled": bool(row["enabled"]),
    })


def delete_cma_adjustments(conn: sqlite3.Connection, cma_id: str) -> bool:
    """Delete a CMA's adjustment configuration.

    Returns:
        True if a configuration was deleted, False if none existed.
    """
    deleted = execute(
        conn,
        f"DELETE FROM {TABLE_CMA_ADJUSTMENTS} WHERE cma_id = ?",
        (cma_id,),
    )
    if deleted:
        logger.info("Deleted adjustments for CMA %s", cma_id)
    return deleted > 0
