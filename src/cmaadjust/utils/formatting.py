"""
Display Formatting Utilities

Currency and value formatting shared by the comparison table, the CLI and
the API. Whole-dollar amounts round half away from zero.
"""

from decimal import Decimal, ROUND_HALF_UP
from typing import Optional, Union

from cmaadjust.core.constants import NOT_APPLICABLE

Displayable = Union[int, float, str, None]


def _round_half_up(value: Union[int, float], places: str = "1") -> Decimal:
    return Decimal(str(value)).quantize(Decimal(places), rounding=ROUND_HALF_UP)


def format_price(price: Union[int, float, None]) -> str:
    """Format a price value as a whole-dollar string.

    Args:
        price: Price value to format.

    Returns:
        Formatted price string.

    Example:
        >>> format_price(450000)
        "$450,000"
        >>> format_price(-1250.5)
        "-$1,251"
    """
    if price is None:
        return "-"

    sign = "-" if price < 0 else ""
    amount = int(_round_half_up(abs(price)))
    return f"{sign}${amount:,}"


def format_adjustment(value: Union[int, float]) -> str:
    """Format a signed adjustment with an explicit sign and no cents.

    Example:
        >>> format_adjustment(12345)
        "+$12,345"
        >>> format_adjustment(-500)
        "-$500"
        >>> format_adjustment(0)
        "$0"
    """
    formatted = format_price(abs(value))
    if value > 0:
        return f"+{formatted}"
    if value < 0:
        return f"-{formatted}"
    return formatted


def format_value(value: Displayable) -> str:
    """Format a feature display value for a table cell.

    Unknown values (None) render as an em dash; numbers get thousands
    separators and at most three decimals; strings pass through.
    """
    if value is None:
        return NOT_APPLICABLE
    if isinstance(value, str):
        return value

    rounded = _round_half_up(value, "0.001")
    if rounded == rounded.to_integral_value():
        return f"{int(rounded):,}"
    return f"{rounded:,.3f}".rstrip("0").rstrip(".")


def short_address(address: Optional[str]) -> str:
    """Return the street portion of an address (text before the first comma)."""
    if not address:
        return ""
    return address.split(",")[0].strip()
