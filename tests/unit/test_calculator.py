"""
Unit tests for the adjustment calculator.
"""

import pytest

from cmaadjust.adjustments.calculator import (
    calculate_adjustments,
    calculate_all_adjustments,
    get_subject_value,
    get_unique_features,
)
from cmaadjust.core.models import (
    AdjustmentRates,
    CompAdjustmentOverrides,
    CompAdjustmentResult,
    AdjustmentLine,
    CustomAdjustment,
    DEFAULT_ADJUSTMENT_RATES,
)


def _features(result):
    return [line.feature for line in result.adjustments]


def _line(result, feature):
    lines = result.lines_for(feature)
    assert len(lines) == 1, f"expected one {feature} line"
    return lines[0]


class TestWorkedExample:
    """Subject vs a smaller comparable with a pool."""

    def test_lines(self, subject_property, pool_comp):
        result = calculate_adjustments(subject_property, pool_comp, DEFAULT_ADJUSTMENT_RATES)
        assert _features(result) == ["Square Feet", "Pool"]
        assert _line(result, "Square Feet").adjustment == 10000
        assert _line(result, "Pool").adjustment == -25000

    def test_totals(self, subject_property, pool_comp):
        result = calculate_adjustments(subject_property, pool_comp, DEFAULT_ADJUSTMENT_RATES)
        assert result.total_adjustment == -15000
        assert result.sale_price == 450000
        assert result.adjusted_price == 435000

    def test_identity_and_address(self, subject_property, pool_comp):
        result = calculate_adjustments(subject_property, pool_comp, DEFAULT_ADJUSTMENT_RATES)
        assert result.comp_id == "COMP-1"
        assert result.comp_address == "200 Oak Lane, Austin"

    def test_display_values(self, subject_property, pool_comp):
        result = calculate_adjustments(subject_property, pool_comp, DEFAULT_ADJUSTMENT_RATES)
        sqft = _line(result, "Square Feet")
        assert sqft.subject_value == 2000
        assert sqft.comp_value == 1800
        pool = _line(result, "Pool")
        assert pool.subject_value == "No"
        assert pool.comp_value == "Yes"


class TestAllFeatures:
    def test_every_feature_in_order(self, subject_property, larger_comp):
        result = calculate_adjustments(subject_property, larger_comp, DEFAULT_ADJUSTMENT_RATES)
        assert _features(result) == [
            "Bedrooms", "Bathrooms", "Garage Spaces", "Year Built", "Lot Size",
        ]
        assert _line(result, "Bedrooms").adjustment == -10000
        assert _line(result, "Bathrooms").adjustment == -3750
        assert _line(result, "Garage Spaces").adjustment == -5000
        assert _line(result, "Year Built").adjustment == -5000
        assert _line(result, "Lot Size").adjustment == -2000

    def test_sold_price_and_mls_id(self, subject_property, larger_comp):
        result = calculate_adjustments(subject_property, larger_comp, DEFAULT_ADJUSTMENT_RATES)
        assert result.comp_id == "MLS-22"
        assert result.sale_price == 520000
        assert result.total_adjustment == -25750
        assert result.adjusted_price == 494250

    def test_total_is_sum_of_lines(self, subject_property, larger_comp):
        result = calculate_adjustments(subject_property, larger_comp, DEFAULT_ADJUSTMENT_RATES)
        assert result.total_adjustment == sum(line.adjustment for line in result.adjustments)
        assert result.adjusted_price == result.sale_price + result.total_adjustment

    def test_identical_properties_have_no_lines(self, subject_property):
        result = calculate_adjustments(subject_property, dict(subject_property), DEFAULT_ADJUSTMENT_RATES)
        assert result.adjustments == []
        assert result.total_adjustment == 0
        assert result.adjusted_price == result.sale_price


class TestIdempotence:
    def test_same_inputs_same_result(self, subject_property, larger_comp):
        overrides = {"bedrooms": -8000, "custom": [{"name": "View", "value": 4000}]}
        first = calculate_adjustments(subject_property, larger_comp, DEFAULT_ADJUSTMENT_RATES, overrides)
        second = calculate_adjustments(subject_property, larger_comp, DEFAULT_ADJUSTMENT_RATES, overrides)
        assert first == second
        assert first.to_dict() == second.to_dict()


class TestSignSymmetry:
    @pytest.mark.parametrize("feature", [
        "Square Feet", "Bedrooms", "Bathrooms", "Garage Spaces", "Year Built",
    ])
    def test_swapping_negates(self, feature):
        a = {"livingArea": 2100, "bedroomsTotal": 4, "bathroomsTotal": 3,
             "garageSpaces": 3, "yearBuilt": 2018}
        b = {"livingArea": 1750, "bedroomsTotal": 2, "bathroomsTotal": 1.5,
             "garageSpaces": 1, "yearBuilt": 1995}
        forward = _line(calculate_adjustments(a, b, DEFAULT_ADJUSTMENT_RATES), feature)
        backward = _line(calculate_adjustments(b, a, DEFAULT_ADJUSTMENT_RATES), feature)
        assert forward.adjustment == -backward.adjustment
        assert forward.adjustment != 0

    def test_positive_when_comp_is_inferior(self):
        result = calculate_adjustments(
            {"bedroomsTotal": 4}, {"bedroomsTotal": 3}, DEFAULT_ADJUSTMENT_RATES
        )
        assert _line(result, "Bedrooms").adjustment == 10000


class TestOverrides:
    def test_zero_override_suppresses_line(self, subject_property, pool_comp):
        result = calculate_adjustments(
            subject_property, pool_comp, DEFAULT_ADJUSTMENT_RATES, {"sqft": 0}
        )
        assert "Square Feet" not in _features(result)
        assert result.total_adjustment == -25000

    def test_override_replaces_computed_value(self, subject_property, larger_comp):
        overrides = CompAdjustmentOverrides(bedrooms=-12500, garage=-4000)
        result = calculate_adjustments(
            subject_property, larger_comp, DEFAULT_ADJUSTMENT_RATES, overrides
        )
        assert _line(result, "Bedrooms").adjustment == -12500
        assert _line(result, "Garage Spaces").adjustment == -4000

    def test_override_creates_line_without_difference(self, subject_property):
        comp = dict(subject_property, listingId="SAME")
        result = calculate_adjustments(
            subject_property, comp, DEFAULT_ADJUSTMENT_RATES, {"bathrooms": 2500}
        )
        assert _features(result) == ["Bathrooms"]
        assert _line(result, "Bathrooms").adjustment == 2500

    def test_none_override_falls_through(self, subject_property, pool_comp):
        result = calculate_adjustments(
            subject_property, pool_comp, DEFAULT_ADJUSTMENT_RATES, {"sqft": None}
        )
        assert _line(result, "Square Feet").adjustment == 10000

    def test_pool_override_when_pools_differ(self, subject_property, pool_comp):
        result = calculate_adjustments(
            subject_property, pool_comp, DEFAULT_ADJUSTMENT_RATES, {"pool": -18000}
        )
        assert _line(result, "Pool").adjustment == -18000

    def test_pool_override_ignored_when_pools_match(self, subject_property):
        comp = dict(subject_property, listingId="NOPOOL")
        result = calculate_adjustments(
            subject_property, comp, DEFAULT_ADJUSTMENT_RATES, {"pool": 15000}
        )
        assert "Pool" not in _features(result)

    def test_year_override_still_needs_known_years(self, subject_property):
        comp = dict(subject_property, yearBuilt=None)
        result = calculate_adjustments(
            subject_property, comp, DEFAULT_ADJUSTMENT_RATES, {"yearBuilt": 3000}
        )
        assert "Year Built" not in _features(result)

    def test_lot_override_is_rounded(self, subject_property):
        comp = dict(subject_property, lotSizeSquareFeet=7000)
        result = calculate_adjustments(
            subject_property, comp, DEFAULT_ADJUSTMENT_RATES, {"lotSize": 1234.5}
        )
        assert _line(result, "Lot Size").adjustment == 1235


class TestCustomAdjustments:
    def test_custom_lines_appended_after_builtins(self, subject_property, pool_comp):
        overrides = CompAdjustmentOverrides(custom=[
            CustomAdjustment(name="Updated Kitchen", value=-7500),
            CustomAdjustment(name="Busy Street", value=0),
            CustomAdjustment(name="Corner Lot", value=3000),
        ])
        result = calculate_adjustments(
            subject_property, pool_comp, DEFAULT_ADJUSTMENT_RATES, overrides
        )
        assert _features(result) == ["Square Feet", "Pool", "Updated Kitchen", "Corner Lot"]
        kitchen = _line(result, "Updated Kitchen")
        assert kitchen.subject_value == "—"
        assert kitchen.comp_value == "—"
        assert result.total_adjustment == -15000 - 7500 + 3000

    def test_custom_named_like_builtin_gets_own_line(self, subject_property, pool_comp):
        overrides = CompAdjustmentOverrides.from_dict({
            "custom": [{"name": "Pool", "value": 5}],
        })
        result = calculate_adjustments(
            subject_property, pool_comp, DEFAULT_ADJUSTMENT_RATES, overrides
        )
        assert _features(result) == ["Square Feet", "Pool", "Pool (Custom)"]
        assert _line(result, "Pool").adjustment == -25000
        assert _line(result, "Pool (Custom)").adjustment == 5
        assert result.total_adjustment == -15000 + 5


class TestLotSizeNoiseFloor:
    @pytest.mark.parametrize("comp_lot, expected", [
        (7500, None),
        (8500, None),
        (7499, 1002),
        (8501, -1002),
    ])
    def test_threshold(self, comp_lot, expected):
        result = calculate_adjustments(
            {"lotSizeSquareFeet": 8000}, {"lotSizeSquareFeet": comp_lot}, DEFAULT_ADJUSTMENT_RATES
        )
        lines = result.lines_for("Lot Size")
        if expected is None:
            assert lines == []
        else:
            assert [line.adjustment for line in lines] == [expected]

    def test_fractional_rate_rounds_half_up(self):
        rates = AdjustmentRates(lot_size_per_sqft=0.5)
        result = calculate_adjustments(
            {"lotSizeSquareFeet": 9001}, {"lotSizeSquareFeet": 8000}, rates
        )
        assert _line(result, "Lot Size").adjustment == 501  # 500.5

    def test_negative_half_rounds_toward_positive(self):
        rates = AdjustmentRates(lot_size_per_sqft=0.5)
        result = calculate_adjustments(
            {"lotSizeSquareFeet": 8000}, {"lotSizeSquareFeet": 9001}, rates
        )
        assert _line(result, "Lot Size").adjustment == -500  # -500.5

    def test_other_features_are_not_rounded(self):
        rates = AdjustmentRates(sqft_per_unit=12.25)
        result = calculate_adjustments({"livingArea": 2001}, {"livingArea": 2000}, rates)
        assert _line(result, "Square Feet").adjustment == 12.25


class TestYearBuiltGuard:
    @pytest.mark.parametrize("subject_year, comp_year", [
        (0, 2005), (2005, 0), (None, 2005), ("unknown", 2005), (2005, ""),
    ])
    def test_unknown_year_emits_no_line(self, subject_year, comp_year):
        result = calculate_adjustments(
            {"yearBuilt": subject_year}, {"yearBuilt": comp_year}, DEFAULT_ADJUSTMENT_RATES
        )
        assert result.lines_for("Year Built") == []
        assert result.total_adjustment == 0


class TestPool:
    def test_subject_pool_only(self):
        result = calculate_adjustments(
            {"poolFeatures": "Private"}, {"poolFeatures": "None"}, DEFAULT_ADJUSTMENT_RATES
        )
        assert _line(result, "Pool").adjustment == 25000

    def test_comp_pool_only(self):
        result = calculate_adjustments(
            {"poolFeatures": []}, {"poolFeatures": ["Community"]}, DEFAULT_ADJUSTMENT_RATES
        )
        assert _line(result, "Pool").adjustment == -25000

    @pytest.mark.parametrize("subject_pool, comp_pool", [
        ("Yes", ["In Ground"]),
        (None, "No"),
        ("", ["none"]),
    ])
    def test_matching_pools_emit_no_line(self, subject_pool, comp_pool):
        result = calculate_adjustments(
            {"poolFeatures": subject_pool}, {"poolFeatures": comp_pool}, DEFAULT_ADJUSTMENT_RATES
        )
        assert result.lines_for("Pool") == []


class TestDegradedInput:
    def test_empty_records(self):
        result = calculate_adjustments({}, {}, DEFAULT_ADJUSTMENT_RATES)
        assert result.comp_id == "unknown"
        assert result.comp_address == "Unknown Address"
        assert result.sale_price == 0
        assert result.adjustments == []

    def test_garbage_values_do_not_raise(self):
        comp = {
            "livingArea": "n/a",
            "bedroomsTotal": {"value": 3},
            "bathroomsTotal": float("nan"),
            "poolFeatures": 42,
            "garageSpaces": [2],
            "lotSizeSquareFeet": "",
            "closePrice": "TBD",
        }
        result = calculate_adjustments({"livingArea": 1500}, comp, DEFAULT_ADJUSTMENT_RATES)
        assert _features(result) == ["Square Feet"]
        sqft = _line(result, "Square Feet")
        assert sqft.comp_value is None
        assert sqft.adjustment == 75000

    def test_negative_adjusted_price_is_not_clamped(self):
        result = calculate_adjustments(
            {"bedroomsTotal": 1}, {"bedroomsTotal": 5, "listPrice": 20000}, DEFAULT_ADJUSTMENT_RATES
        )
        assert result.adjusted_price == -20000


class TestCalculateAll:
    def test_overrides_looked_up_by_comp_id(self, subject_property, pool_comp, larger_comp):
        results = calculate_all_adjustments(
            subject_property,
            [pool_comp, larger_comp],
            DEFAULT_ADJUSTMENT_RATES,
            {"MLS-22": {"bedrooms": 0}},
        )
        assert [r.comp_id for r in results] == ["COMP-1", "MLS-22"]
        assert results[1].lines_for("Bedrooms") == []
        assert results[0].lines_for("Square Feet")

    def test_no_subject_or_comps(self, subject_property, pool_comp):
        assert calculate_all_adjustments(None, [pool_comp], DEFAULT_ADJUSTMENT_RATES) == []
        assert calculate_all_adjustments(subject_property, [], DEFAULT_ADJUSTMENT_RATES) == []


class TestGetSubjectValue:
    def test_values(self, subject_property):
        assert get_subject_value(subject_property, "Square Feet") == 2000
        assert get_subject_value(subject_property, "Pool") == "No"
        assert get_subject_value(subject_property, "Year Built") == 2010
        assert get_subject_value(subject_property, "Updated Kitchen") == "—"

    def test_zero_is_unknown(self):
        assert get_subject_value({"garageSpaces": 0}, "Garage Spaces") is None


class TestGetUniqueFeatures:
    def _result(self, *features):
        return CompAdjustmentResult(
            comp_id="x",
            comp_address="x",
            sale_price=0,
            adjustments=[AdjustmentLine(f, None, None, 1) for f in features],
        )

    def test_canonical_order_then_custom_alphabetical(self):
        results = [
            self._result("Lot Size", "zoning", "Bedrooms"),
            self._result("Pool", "Updated Kitchen", "Square Feet", "Bedrooms"),
        ]
        assert get_unique_features(results) == [
            "Square Feet", "Bedrooms", "Pool", "Lot Size", "Updated Kitchen", "zoning",
        ]

    def test_empty(self):
        assert get_unique_features([]) == []
