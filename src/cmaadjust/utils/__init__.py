"""
Utility modules for the CMA Adjustments service.

Numeric coercion for loosely typed listing fields and display formatting.
"""

from cmaadjust.utils.number_parser import get_numeric_value, normalize_number
from cmaadjust.utils.formatting import (
    format_adjustment,
    format_price,
    format_value,
    short_address,
)

__all__ = [
    "get_numeric_value",
    "normalize_number",
    "format_adjustment",
    "format_price",
    "format_value",
    "short_address",
]
