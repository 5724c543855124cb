"""
Adjustment Report Assembly

Turns a calculation request (subject, comparables, rates, per-comparable
overrides) into the JSON-ready report shared by the API and the CLI:
per-comparable results, the table's feature rows, the comparison grid and
a per-comparable summary for exports.
"""

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any, Dict, List

from cmaadjust.adjustments.calculator import calculate_all_adjustments, get_unique_features
from cmaadjust.adjustments.comparison import build_comparison_table
from cmaadjust.core.models import (
    AdjustmentRates,
    CompAdjustmentOverrides,
    PropertyForAdjustment,
)
from cmaadjust.exceptions import ValidationError
from cmaadjust.logging_config import get_logger
from cmaadjust.utils.formatting import format_adjustment, format_price

logger = get_logger(__name__)


@dataclass
class CalculationRequest:
    subject: PropertyForAdjustment
    comparables: List[PropertyForAdjustment]
    rates: AdjustmentRates = field(default_factory=AdjustmentRates)
    comp_overrides: Dict[str, CompAdjustmentOverrides] = field(default_factory=dict)


def parse_calculation_request(data: Any) -> CalculationRequest:
    """Validate and convert a raw calculation payload.

    Expected shape:
        {
            "subject": {...property...},
            "comparables": [{...property...}, ...],
            "rates": {...partial rate table...},          (optional)
            "compAdjustments": {compId: {...overrides...}} (optional)
        }

    Property field values are not validated here; the calculator degrades
    bad values to zero. Only the envelope shape is checked.

    Raises:
        ValidationError: If the payload's structure is wrong.
    """
    if not isinstance(data, Mapping):
        raise ValidationError("Request body must be a JSON object")

    subject = data.get("subject")
    if not isinstance(subject, Mapping):
        raise ValidationError("Missing required field: subject", field="subject")

    comparables = data.get("comparables", [])
    if not isinstance(comparables, list):
        raise ValidationError("comparables must be a list", field="comparables")
    for index, comp in enumerate(comparables):
        if not isinstance(comp, Mapping):
            raise ValidationError(
                f"comparables[{index}] must be an object",
                field="comparables",
                value=comp,
            )

    rates = data.get("rates")
    if rates is not None and not isinstance(rates, Mapping):
        raise ValidationError("rates must be an object", field="rates", value=rates)

    raw_overrides = data.get("compAdjustments", data.get("comp_adjustments")) or {}
    if not isinstance(raw_overrides, Mapping):
        raise ValidationError("compAdjustments must be an object", field="compAdjustments")

    comp_overrides = {}
    for comp_id, overrides in raw_overrides.items():
        if not isinstance(overrides, Mapping):
            raise ValidationError(
                f"compAdjustments[{comp_id!r}] must be an object",
                field="compAdjustments",
                value=overrides,
            )
        comp_overrides[str(comp_id)] = CompAdjustmentOverrides.from_dict(overrides)

    return CalculationRequest(
        subject=PropertyForAdjustment.from_dict(subject),
        comparables=[PropertyForAdjustment.from_dict(comp) for comp in comparables],
        rates=AdjustmentRates.from_dict(rates),
        comp_overrides=comp_overrides,
    )


def build_adjustment_report(request: CalculationRequest) -> Dict[str, Any]:
    """Calculate every comparable and assemble the report payload."""
    results = calculate_all_adjustments(
        request.subject,
        request.comparables,
        request.rates,
        request.comp_overrides,
    )
    logger.info(
        "Calculated adjustments for %d comparable(s), %d override set(s)",
        len(results), len(request.comp_overrides),
    )

    return {
        "rates": request.rates.to_dict(),
        "results": [result.to_dict() for result in results],
        "features": get_unique_features(results),
        "table": build_comparison_table(request.subject, results).to_dict(),
        "summary": [
            {
                "compId": result.comp_id,
                "compAddress": result.comp_address,
                "salePrice": format_price(result.sale_price),
                "totalAdjustment": format_adjustment(result.total_adjustment),
                "adjustedPrice": format_price(result.adjusted_price),
            }
            for result in results
        ],
    }
