"""
Property Value Extraction

Resolves each feature the calculator prices from a PropertyForAdjustment,
walking the alternate-field preference chains that different listing feeds
require. Every numeric getter is parse-or-zero: a missing or unparseable
field reads as 0, and a 0 in a preferred field falls through to the next.
"""

from collections.abc import Mapping
from typing import Any, Union

from cmaadjust.core.constants import NO_POOL_VALUES, UNKNOWN_ADDRESS, UNKNOWN_ID
from cmaadjust.core.models import PropertyForAdjustment
from cmaadjust.utils.number_parser import Number, get_numeric_value

PropertyLike = Union[PropertyForAdjustment, Mapping]


def as_property(record: PropertyLike) -> PropertyForAdjustment:
    """Accept a PropertyForAdjustment or a raw property mapping."""
    if isinstance(record, PropertyForAdjustment):
        return record
    if isinstance(record, Mapping):
        return PropertyForAdjustment.from_dict(record)
    raise TypeError(
        f"Expected a property record, got {type(record).__name__}"
    )


def get_sqft(prop: PropertyForAdjustment) -> Number:
    return get_numeric_value(prop.living_area) or get_numeric_value(prop.square_feet)


def get_beds(prop: PropertyForAdjustment) -> Number:
    return get_numeric_value(prop.bedrooms_total)


def get_baths(prop: PropertyForAdjustment) -> Number:
    return get_numeric_value(prop.bathrooms_total)


def _is_pool_value(value: Any) -> bool:
    return isinstance(value, str) and value.strip().lower() not in NO_POOL_VALUES


def has_pool(prop: PropertyForAdjustment) -> bool:
    """Whether the listing's pool features describe an actual pool.

    Strings and lists of strings are understood; "None", "No" and blanks
    mean no pool, and any other shape is treated as no pool.
    """
    features = prop.pool_features
    if isinstance(features, str):
        return _is_pool_value(features)
    if isinstance(features, (list, tuple)):
        return any(_is_pool_value(item) for item in features)
    return False


def get_garage_spaces(prop: PropertyForAdjustment) -> Number:
    return get_numeric_value(prop.garage_spaces)


def get_year_built(prop: PropertyForAdjustment) -> Number:
    return get_numeric_value(prop.year_built)


def get_lot_size(prop: PropertyForAdjustment) -> Number:
    return get_numeric_value(prop.lot_size_square_feet) or get_numeric_value(prop.lot_size_area)


def get_sale_price(prop: PropertyForAdjustment) -> Number:
    """Closed price, else sold price, else list price."""
    return (
        get_numeric_value(prop.close_price)
        or get_numeric_value(prop.sold_price)
        or get_numeric_value(prop.list_price)
    )


def _text(value: Any) -> str:
    if value is None:
        return ""
    return str(value).strip()


def get_property_id(prop: PropertyForAdjustment, default: str = UNKNOWN_ID) -> str:
    """Listing id, else MLS number, else generic id, else `default`."""
    return (
        _text(prop.listing_id)
        or _text(prop.mls_number)
        or _text(prop.id)
        or default
    )


def get_property_address(prop: PropertyForAdjustment) -> str:
    address = _text(prop.address)
    if address:
        return address

    street = _text(prop.street_address)
    city = _text(prop.city)
    if street and city:
        return f"{street}, {city}"
    return street or UNKNOWN_ADDRESS
