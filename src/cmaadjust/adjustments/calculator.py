"""
Comparable Adjustment Calculator

Normalizes each comparable's price to the subject property: for every
feature where the two differ, the comparable's price is pushed up (it lacks
something the subject has) or down (it has something better), using the
per-unit rates of the CMA's rate table.

Adjustment lines are produced in a fixed order:
    Square Feet, Bedrooms, Bathrooms, Pool, Garage Spaces, Year Built,
    Lot Size, then any custom adjustments.

The calculator is pure: it reads only its arguments, never raises on
degraded property data and keeps no state between calls.

Usage:
    from cmaadjust.adjustments import calculate_adjustments, DEFAULT_ADJUSTMENT_RATES

    result = calculate_adjustments(subject, comp, DEFAULT_ADJUSTMENT_RATES)
    print(result.adjusted_price)
"""

import math
from typing import Dict, Iterable, List, Mapping, Optional, Sequence, Union

from cmaadjust.adjustments.property_values import (
    PropertyLike,
    as_property,
    get_baths,
    get_beds,
    get_garage_spaces,
    get_lot_size,
    get_property_address,
    get_property_id,
    get_sale_price,
    get_sqft,
    get_year_built,
    has_pool,
)
from cmaadjust.core.constants import (
    FEATURE_BATHROOMS,
    FEATURE_BEDROOMS,
    FEATURE_GARAGE,
    FEATURE_LOT_SIZE,
    FEATURE_ORDER,
    FEATURE_POOL,
    FEATURE_SQFT,
    FEATURE_YEAR_BUILT,
    LOT_SIZE_NOISE_FLOOR,
    NOT_APPLICABLE,
)
from cmaadjust.core.models import (
    AdjustmentLine,
    AdjustmentRates,
    CompAdjustmentOverrides,
    CompAdjustmentResult,
    DisplayValue,
)
from cmaadjust.logging_config import get_logger
from cmaadjust.utils.number_parser import Number, normalize_number

logger = get_logger(__name__)

OverridesLike = Union[CompAdjustmentOverrides, Mapping, None]


def _as_overrides(overrides: OverridesLike) -> CompAdjustmentOverrides:
    if isinstance(overrides, CompAdjustmentOverrides):
        return overrides
    if isinstance(overrides, Mapping):
        return CompAdjustmentOverrides.from_dict(overrides)
    return CompAdjustmentOverrides()


def _resolve(override: Optional[Number], computed: Number) -> Number:
    return override if override is not None else computed


def _display(value: Number) -> DisplayValue:
    """Zero means unknown for display purposes."""
    return normalize_number(value) if value else None


def _round_half_up(value: Number) -> int:
    # Halves go toward +inf: 2.5 -> 3, -2.5 -> -2
    return int(math.floor(value + 0.5))


def _diff_line(
    feature: str,
    subject_value: Number,
    comp_value: Number,
    adjustment: Number,
) -> AdjustmentLine:
    return AdjustmentLine(
        feature=feature,
        subject_value=_display(subject_value),
        comp_value=_display(comp_value),
        adjustment=adjustment,
    )


def calculate_adjustments(
    subject: PropertyLike,
    comp: PropertyLike,
    rates: AdjustmentRates,
    overrides: OverridesLike = None,
) -> CompAdjustmentResult:
    """Price the feature differences between a subject and one comparable.

    Args:
        subject: The property being valued.
        comp: The comparable property.
        rates: Complete rate table. Merge user input with the defaults
            before calling (AdjustmentRates.from_dict does this).
        overrides: Optional manual values for this comparable. An override
            replaces the computed adjustment for its feature; None keeps the
            computed value.

    Returns:
        CompAdjustmentResult with the qualifying lines, their total and the
        adjusted price (sale price + total adjustment, not clamped).
    """
    subject = as_property(subject)
    comp = as_property(comp)
    overrides = _as_overrides(overrides)

    lines: List[AdjustmentLine] = []

    # Square footage, bedrooms, bathrooms: linear in the difference
    linear_features = (
        (FEATURE_SQFT, get_sqft, rates.sqft_per_unit, overrides.sqft),
        (FEATURE_BEDROOMS, get_beds, rates.bedroom_value, overrides.bedrooms),
        (FEATURE_BATHROOMS, get_baths, rates.bathroom_value, overrides.bathrooms),
    )
    for feature, getter, rate, override in linear_features:
        subject_value = getter(subject)
        comp_value = getter(comp)
        adjustment = _resolve(override, (subject_value - comp_value) * rate)
        if adjustment != 0:
            lines.append(_diff_line(feature, subject_value, comp_value, adjustment))

    # Pool: only when exactly one of the two has one
    subject_pool = has_pool(subject)
    comp_pool = has_pool(comp)
    if subject_pool != comp_pool:
        computed = rates.pool_value if subject_pool else -rates.pool_value
        lines.append(AdjustmentLine(
            feature=FEATURE_POOL,
            subject_value="Yes" if subject_pool else "No",
            comp_value="Yes" if comp_pool else "No",
            adjustment=_resolve(overrides.pool, computed),
        ))

    subject_garage = get_garage_spaces(subject)
    comp_garage = get_garage_spaces(comp)
    garage_adj = _resolve(
        overrides.garage, (subject_garage - comp_garage) * rates.garage_per_space
    )
    if garage_adj != 0:
        lines.append(_diff_line(FEATURE_GARAGE, subject_garage, comp_garage, garage_adj))

    # An unknown year reads as 0 and must not price as a 2000-year gap
    subject_year = get_year_built(subject)
    comp_year = get_year_built(comp)
    year_adj = _resolve(
        overrides.year_built, (subject_year - comp_year) * rates.year_built_per_year
    )
    if year_adj != 0 and subject_year > 0 and comp_year > 0:
        lines.append(_diff_line(FEATURE_YEAR_BUILT, subject_year, comp_year, year_adj))

    subject_lot = get_lot_size(subject)
    comp_lot = get_lot_size(comp)
    lot_diff = subject_lot - comp_lot
    lot_adj = _resolve(overrides.lot_size, lot_diff * rates.lot_size_per_sqft)
    if lot_adj != 0 and abs(lot_diff) > LOT_SIZE_NOISE_FLOOR:
        lines.append(_diff_line(
            FEATURE_LOT_SIZE, subject_lot, comp_lot, _round_half_up(lot_adj)
        ))

    for custom in overrides.custom:
        if custom.value != 0:
            lines.append(AdjustmentLine(
                feature=custom.name,
                subject_value=NOT_APPLICABLE,
                comp_value=NOT_APPLICABLE,
                adjustment=custom.value,
            ))

    total_adjustment = sum(line.adjustment for line in lines)
    sale_price = get_sale_price(comp)

    result = CompAdjustmentResult(
        comp_id=get_property_id(comp),
        comp_address=get_property_address(comp),
        sale_price=sale_price,
        adjustments=lines,
        total_adjustment=total_adjustment,
        adjusted_price=sale_price + total_adjustment,
    )
    logger.debug(
        "Comp %s: %d adjustment(s), total %s, adjusted price %s",
        result.comp_id, len(lines), total_adjustment, result.adjusted_price,
    )
    return result


def calculate_all_adjustments(
    subject: Optional[PropertyLike],
    comps: Sequence[PropertyLike],
    rates: AdjustmentRates,
    comp_overrides: Optional[Mapping[str, OverridesLike]] = None,
) -> List[CompAdjustmentResult]:
    """Run the calculator for every comparable of a CMA.

    Each comparable's overrides are looked up by its listing id, MLS number
    or id, in that order. Returns an empty list when there is no subject or
    no comparables.
    """
    if subject is None or not comps:
        return []

    subject = as_property(subject)
    comp_overrides = comp_overrides or {}

    results = []
    for comp in comps:
        comp = as_property(comp)
        key = get_property_id(comp, default="")
        results.append(
            calculate_adjustments(subject, comp, rates, comp_overrides.get(key))
        )
    return results


def get_subject_value(subject: PropertyLike, feature: str) -> DisplayValue:
    """Display value of the subject for a comparison table row."""
    subject = as_property(subject)
    if feature == FEATURE_POOL:
        return "Yes" if has_pool(subject) else "No"

    getters = {
        FEATURE_SQFT: get_sqft,
        FEATURE_BEDROOMS: get_beds,
        FEATURE_BATHROOMS: get_baths,
        FEATURE_GARAGE: get_garage_spaces,
        FEATURE_YEAR_BUILT: get_year_built,
        FEATURE_LOT_SIZE: get_lot_size,
    }
    getter = getters.get(feature)
    if getter is None:
        return NOT_APPLICABLE
    return _display(getter(subject))


def get_unique_features(results: Iterable[CompAdjustmentResult]) -> List[str]:
    """Feature names present on any result, in table row order.

    Built-in features come first in their canonical order; custom names
    follow alphabetically.
    """
    names: Dict[str, None] = {}
    for result in results:
        for line in result.adjustments:
            names.setdefault(line.feature)

    known = [feature for feature in FEATURE_ORDER if feature in names]
    custom = sorted(
        (name for name in names if name not in FEATURE_ORDER),
        key=lambda name: (name.casefold(), name),
    )
    return known + custom
