"""
CMA Adjustments

Comparable-adjustment engine for Comparative Market Analysis reports:
prices the feature differences between a subject property and each
comparable and derives the comparable's adjusted price.

Main components:
- adjustments: calculator and side-by-side comparison table
- core: data models, constants and SQLite storage of per-CMA settings
- api: Flask REST API server
- cli: Command-line interfaces

Usage:
    from cmaadjust.adjustments import calculate_adjustments, DEFAULT_ADJUSTMENT_RATES
    from cmaadjust.core.models import AdjustmentRates
"""

__version__ = "1.0.0"

from cmaadjust.config import get_config
from cmaadjust.logging_config import setup_logging

__all__ = [
    "__version__",
    "get_config",
    "setup_logging",
]
