"""
Comparable adjustment engine.

Prices feature differences between a subject property and its comparables
and lays the results out for side-by-side comparison.
"""

from cmaadjust.adjustments.calculator import (
    calculate_adjustments,
    calculate_all_adjustments,
    get_subject_value,
    get_unique_features,
)
from cmaadjust.adjustments.comparison import ComparisonTable, build_comparison_table
from cmaadjust.core.models import DEFAULT_ADJUSTMENT_RATES
from cmaadjust.utils.formatting import format_adjustment

__all__ = [
    "DEFAULT_ADJUSTMENT_RATES",
    "calculate_adjustments",
    "calculate_all_adjustments",
    "get_subject_value",
    "get_unique_features",
    "format_adjustment",
    "ComparisonTable",
    "build_comparison_table",
]
