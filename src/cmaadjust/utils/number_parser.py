"""
Numeric Coercion Utilities

Property feeds deliver the same logical field as a number in one record and
as a numeric string ("1,800" is not one of them, "1800 sqft" is) in another.
Everything that does arithmetic on property fields goes through
get_numeric_value() so the rest of the code only ever sees numbers.
"""

import math
import numbers
import re
from typing import Any, Union

from cmaadjust.logging_config import get_logger

logger = get_logger(__name__)

Number = Union[int, float]

# Leading numeric prefix, e.g. "1800", "  2.5 baths", "-3", ".75", "1e3"
_LEADING_NUMBER = re.compile(r"^\s*([+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?)")


def get_numeric_value(value: Any) -> Number:
    """Coerce a loosely typed value to a number, returning 0 when it can't.

    Handles:
    - None -> 0
    - int / float (and other real numbers) -> unchanged
    - "1800", "1800.5", "2.5 baths" -> leading numeric prefix
    - "", "N/A", NaN, infinities, bools, lists, dicts -> 0

    Args:
        value: Raw field value from a property record.

    Returns:
        The parsed number, or 0 if the value is missing or unparseable.

    Example:
        >>> get_numeric_value("1800")
        1800.0
        >>> get_numeric_value("N/A")
        0
    """
    if value is None or isinstance(value, bool):
        return 0

    if isinstance(value, numbers.Real):
        number = value
    elif isinstance(value, str):
        match = _LEADING_NUMBER.match(value)
        if not match:
            if value.strip():
                logger.debug("Could not parse number from: %r", value)
            return 0
        number = float(match.group(1))
    else:
        logger.debug("Ignoring non-numeric value of type %s", type(value).__name__)
        return 0

    if not math.isfinite(number):
        return 0
    return number


def normalize_number(value: Number) -> Number:
    """Return integral floats as ints so display values read as 2000, not 2000.0."""
    if isinstance(value, float) and value.is_integer():
        return int(value)
    return value
