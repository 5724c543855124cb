"""
Side-by-side Adjustment Comparison Table

Lays out calculated results as rows per feature and columns per
comparable, the shape the report and PDF export render. Not every
comparable has every feature, so missing cells render as an em dash.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Sequence

from cmaadjust.adjustments.calculator import get_subject_value, get_unique_features
from cmaadjust.adjustments.property_values import PropertyLike
from cmaadjust.core.constants import NOT_APPLICABLE
from cmaadjust.core.models import CompAdjustmentResult
from cmaadjust.utils.formatting import (
    format_adjustment,
    format_price,
    format_value,
    short_address,
)


@dataclass
class ComparisonCell:
    """One comparable's entry in a row."""

    value: str
    adjustment: str = NOT_APPLICABLE
    direction: int = 0  # 1 comp inferior, -1 comp superior, 0 none

    def to_dict(self) -> Dict[str, Any]:
        return {
            "value": self.value,
            "adjustment": self.adjustment,
            "direction": self.direction,
        }


@dataclass
class ComparisonRow:
    label: str
    subject: str
    cells: List[ComparisonCell] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "label": self.label,
            "subject": self.subject,
            "cells": [cell.to_dict() for cell in self.cells],
        }


@dataclass
class ComparisonColumn:
    comp_id: str
    address: str
    short_address: str

    def to_dict(self) -> Dict[str, Any]:
        return {
            "compId": self.comp_id,
            "address": self.address,
            "shortAddress": self.short_address,
        }


@dataclass
class ComparisonTable:
    columns: List[ComparisonColumn] = field(default_factory=list)
    sale_price: Optional[ComparisonRow] = None
    features: List[ComparisonRow] = field(default_factory=list)
    total_adjustment: Optional[ComparisonRow] = None
    adjusted_price: Optional[ComparisonRow] = None

    @property
    def rows(self) -> List[ComparisonRow]:
        """All rows in display order."""
        rows = []
        if self.sale_price:
            rows.append(self.sale_price)
        rows.extend(self.features)
        if self.total_adjustment:
            rows.append(self.total_adjustment)
        if self.adjusted_price:
            rows.append(self.adjusted_price)
        return rows

    def to_dict(self) -> Dict[str, Any]:
        return {
            "columns": [column.to_dict() for column in self.columns],
            "rows": [row.to_dict() for row in self.rows],
        }


def _direction(value) -> int:
    if value > 0:
        return 1
    if value < 0:
        return -1
    return 0


def build_comparison_table(
    subject: PropertyLike,
    results: Sequence[CompAdjustmentResult],
) -> ComparisonTable:
    """Build the comparison grid for a subject and its calculated comps.

    Args:
        subject: The subject property (for the subject value column).
        results: Output of calculate_adjustments for each comparable.

    Returns:
        ComparisonTable with Sale Price, one row per feature present on any
        comparable, Total Adjustment and Adjusted Price.
    """
    table = ComparisonTable(
        columns=[
            ComparisonColumn(
                comp_id=result.comp_id,
                address=result.comp_address,
                short_address=short_address(result.comp_address),
            )
            for result in results
        ]
    )

    table.sale_price = ComparisonRow(
        label="Sale Price",
        subject=NOT_APPLICABLE,
        cells=[ComparisonCell(value=format_price(r.sale_price)) for r in results],
    )

    for feature in get_unique_features(results):
        row = ComparisonRow(
            label=feature,
            subject=format_value(get_subject_value(subject, feature)),
        )
        for result in results:
            lines = result.lines_for(feature)
            if not lines:
                row.cells.append(ComparisonCell(value=NOT_APPLICABLE))
                continue
            # Repeated custom names share one cell
            adjustment = sum(line.adjustment for line in lines)
            row.cells.append(ComparisonCell(
                value=format_value(lines[0].comp_value),
                adjustment=format_adjustment(adjustment),
                direction=_direction(adjustment),
            ))
        table.features.append(row)

    table.total_adjustment = ComparisonRow(
        label="Total Adjustment",
        subject=NOT_APPLICABLE,
        cells=[
            ComparisonCell(
                value=format_adjustment(r.total_adjustment),
                direction=_direction(r.total_adjustment),
            )
            for r in results
        ],
    )
    table.adjusted_price = ComparisonRow(
        label="Adjusted Price",
        subject=NOT_APPLICABLE,
        cells=[ComparisonCell(value=format_price(r.adjusted_price)) for r in results],
    )
    return table
