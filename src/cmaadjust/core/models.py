"""
Data Models for the CMA Adjustments service

Dataclass definitions for property snapshots, rate tables, per-comparable
overrides and adjustment results. Wire format (JSON, stored config) uses
camelCase keys; from_dict() also accepts the snake_case attribute names.
"""

from dataclasses import dataclass, field, fields
from typing import Any, Dict, List, Mapping, Optional, Union

from cmaadjust.core.constants import DEFAULT_RATE_VALUES, FEATURE_ORDER
from cmaadjust.utils.number_parser import Number, get_numeric_value

DisplayValue = Union[int, float, str, None]


def _camel(name: str) -> str:
    """sqft_per_unit -> sqftPerUnit"""
    head, *rest = name.split("_")
    return head + "".join(part.capitalize() for part in rest)


def _pick(data: Mapping[str, Any], name: str) -> Any:
    """Look up a field by its camelCase key, falling back to snake_case."""
    camel = _camel(name)
    if camel in data:
        return data[camel]
    return data.get(name)


@dataclass(frozen=True)
class PropertyForAdjustment:
    """Read-only snapshot of the property fields the calculator looks at.

    Values are kept exactly as received; coercion happens in
    cmaadjust.adjustments.property_values.
    """

    listing_id: Optional[str] = None
    mls_number: Optional[str] = None
    id: Optional[str] = None
    address: Optional[str] = None
    street_address: Optional[str] = None
    city: Optional[str] = None
    living_area: Any = None
    square_feet: Any = None
    bedrooms_total: Any = None
    bathrooms_total: Any = None
    pool_features: Any = None
    garage_spaces: Any = None
    year_built: Any = None
    lot_size_square_feet: Any = None
    lot_size_area: Any = None
    list_price: Any = None
    sold_price: Any = None
    close_price: Any = None

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "PropertyForAdjustment":
        """Build a snapshot from a property record, ignoring unknown keys."""
        return cls(**{f.name: _pick(data, f.name) for f in fields(cls)})

    def to_dict(self) -> Dict[str, Any]:
        """Convert to a camelCase dictionary, dropping unset fields."""
        return {
            _camel(f.name): getattr(self, f.name)
            for f in fields(self)
            if getattr(self, f.name) is not None
        }


@dataclass(frozen=True)
class AdjustmentRates:
    """Per-unit dollar rates used to price feature differences."""

    sqft_per_unit: Number = DEFAULT_RATE_VALUES["sqft_per_unit"]
    bedroom_value: Number = DEFAULT_RATE_VALUES["bedroom_value"]
    bathroom_value: Number = DEFAULT_RATE_VALUES["bathroom_value"]
    pool_value: Number = DEFAULT_RATE_VALUES["pool_value"]
    garage_per_space: Number = DEFAULT_RATE_VALUES["garage_per_space"]
    year_built_per_year: Number = DEFAULT_RATE_VALUES["year_built_per_year"]
    lot_size_per_sqft: Number = DEFAULT_RATE_VALUES["lot_size_per_sqft"]

    @classmethod
    def from_dict(cls, data: Optional[Mapping[str, Any]]) -> "AdjustmentRates":
        """Merge a partial rate table with the defaults.

        Missing or None rates take the default; anything else goes through
        parse-or-zero, the same as an edited rate field.
        """
        values = {}
        for f in fields(cls):
            raw = _pick(data, f.name) if isinstance(data, Mapping) else None
            if raw is not None:
                values[f.name] = get_numeric_value(raw)
        return cls(**values)

    def to_dict(self) -> Dict[str, Number]:
        return {_camel(f.name): getattr(self, f.name) for f in fields(self)}


DEFAULT_ADJUSTMENT_RATES = AdjustmentRates()


@dataclass
class CustomAdjustment:
    """A named, user-entered adjustment with no computed counterpart."""

    name: str
    value: Number = 0

    def __post_init__(self):
        # Custom lines get their own table row, never a computed feature's
        if self.name in FEATURE_ORDER:
            self.name = f"{self.name} (Custom)"

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "CustomAdjustment":
        name = str(data.get("name") or "").strip() or "Custom Adjustment"
        return cls(name=name, value=get_numeric_value(data.get("value")))

    def to_dict(self) -> Dict[str, Any]:
        return {"name": self.name, "value": self.value}


@dataclass
class CompAdjustmentOverrides:
    """Manual replacements for computed adjustments on one comparable.

    A value of None means "not overridden"; any number (including 0)
    replaces the computed adjustment for that feature.
    """

    sqft: Optional[Number] = None
    bedrooms: Optional[Number] = None
    bathrooms: Optional[Number] = None
    pool: Optional[Number] = None
    garage: Optional[Number] = None
    year_built: Optional[Number] = None
    lot_size: Optional[Number] = None
    custom: List[CustomAdjustment] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Optional[Mapping[str, Any]]) -> "CompAdjustmentOverrides":
        if not data:
            return cls()

        values: Dict[str, Any] = {}
        for f in fields(cls):
            if f.name == "custom":
                continue
            raw = _pick(data, f.name)
            if raw is not None:
                values[f.name] = get_numeric_value(raw)

        custom = data.get("custom") or []
        if isinstance(custom, list):
            values["custom"] = [
                CustomAdjustment.from_dict(entry)
                for entry in custom
                if isinstance(entry, Mapping)
            ]
        return cls(**values)

    def to_dict(self) -> Dict[str, Any]:
        result: Dict[str, Any] = {}
        for f in fields(self):
            if f.name == "custom":
                continue
            value = getattr(self, f.name)
            if value is not None:
                result[_camel(f.name)] = value
        if self.custom:
            result["custom"] = [c.to_dict() for c in self.custom]
        return result


@dataclass
class AdjustmentLine:
    """One priced feature difference between the subject and a comparable."""

    feature: str
    subject_value: DisplayValue
    comp_value: DisplayValue
    adjustment: Number

    def to_dict(self) -> Dict[str, Any]:
        return {
            "feature": self.feature,
            "subjectValue": self.subject_value,
            "compValue": self.comp_value,
            "adjustment": self.adjustment,
        }


@dataclass
class CompAdjustmentResult:
    """Adjustment breakdown and adjusted price for one comparable."""

    comp_id: str
    comp_address: str
    sale_price: Number
    adjustments: List[AdjustmentLine] = field(default_factory=list)
    total_adjustment: Number = 0
    adjusted_price: Number = 0

    def lines_for(self, feature: str) -> List[AdjustmentLine]:
        """Return this comp's lines for a feature (empty if it has none)."""
        return [line for line in self.adjustments if line.feature == feature]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "compId": self.comp_id,
            "compAddress": self.comp_address,
            "salePrice": self.sale_price,
            "adjustments": [line.to_dict() for line in self.adjustments],
            "totalAdjustment": self.total_adjustment,
            "adjustedPrice": self.adjusted_price,
        }


@dataclass
class CmaAdjustmentsData:
    """Adjustment configuration persisted per CMA report."""

    rates: AdjustmentRates = field(default_factory=AdjustmentRates)
    comp_adjustments: Dict[str, CompAdjustmentOverrides] = field(default_factory=dict)
    enabled: bool = False

    @classmethod
    def from_dict(cls, data: Optional[Mapping[str, Any]]) -> "CmaAdjustmentsData":
        if not data:
            return cls()

        raw_overrides = _pick(data, "comp_adjustments") or {}
        comp_adjustments = {}
        if isinstance(raw_overrides, Mapping):
            comp_adjustments = {
                str(comp_id): CompAdjustmentOverrides.from_dict(overrides)
                for comp_id, overrides in raw_overrides.items()
                if isinstance(overrides, Mapping)
            }

        rates = data.get("rates")
        return cls(
            rates=AdjustmentRates.from_dict(rates if isinstance(rates, Mapping) else None),
            comp_adjustments=comp_adjustments,
            enabled=bool(data.get("enabled", False)),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "rates": self.rates.to_dict(),
            "compAdjustments": {
                comp_id: overrides.to_dict()
                for comp_id, overrides in self.comp_adjustments.items()
            },
            "enabled": self.enabled,
        }
