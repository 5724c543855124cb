"""
Core modules for the CMA Adjustments service.

Contains data models, shared constants, database helpers and storage of
per-CMA adjustment settings.
"""

from cmaadjust.core.constants import FEATURE_ORDER, LOT_SIZE_NOISE_FLOOR
from cmaadjust.core.database import get_connection, fetch_one, execute
from cmaadjust.core.models import (
    AdjustmentLine,
    AdjustmentRates,
    CmaAdjustmentsData,
    CompAdjustmentOverrides,
    CompAdjustmentResult,
    CustomAdjustment,
    DEFAULT_ADJUSTMENT_RATES,
    PropertyForAdjustment,
)
from cmaadjust.core.repository import (
    init_adjustments_table,
    save_cma_adjustments,
    load_cma_adjustments,
    delete_cma_adjustments,
)

__all__ = [
    "FEATURE_ORDER",
    "LOT_SIZE_NOISE_FLOOR",
    "get_connection",
    "fetch_one",
    "execute",
    "AdjustmentLine",
    "AdjustmentRates",
    "CmaAdjustmentsData",
    "CompAdjustmentOverrides",
    "CompAdjustmentResult",
    "CustomAdjustment",
    "DEFAULT_ADJUSTMENT_RATES",
    "PropertyForAdjustment",
    "init_adjustments_table",
    "save_cma_adjustments",
    "load_cma_adjustments",
    "delete_cma_adjustments",
]
