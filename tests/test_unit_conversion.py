"""
Unit tests for ghg_engine/unit_conversion.py

Pure functions only; no fixtures needed.
"""
import pytest

from ghg_engine.exceptions import IncompatibleUnitsError
from ghg_engine.schemas import UnitConversion
from ghg_engine.unit_conversion import (
    UNIT_CATEGORIES,
    are_units_compatible,
    convert_unit,
    get_conversion_factor,
    get_unit_category,
    get_unit_conversion,
    get_unit_display_name,
    get_units_in_category,
    suggest_alternative_units,
)


# ─────────────────────────────────────────────────────────────────────────────
# 1. Category lookup
# ─────────────────────────────────────────────────────────────────────────────

class TestGetUnitCategory:

    @pytest.mark.parametrize("unit, category", [
        ("kWh", "energy"),
        ("MMBtu", "energy"),
        ("gal", "volume"),
        ("m³", "volume"),
        ("lbs", "mass"),
        ("nautical_miles", "distance"),
    ])
    def test_known_units(self, unit, category):
        assert get_unit_category(unit) == category

    def test_unknown_unit_returns_none(self):
        assert get_unit_category("passenger-mile") is None

    def test_lookup_is_case_sensitive(self):
        assert get_unit_category("kwh") is None

    def test_every_unit_belongs_to_exactly_one_category(self):
        seen = [u for units in UNIT_CATEGORIES.values() for u in units]
        assert len(seen) == len(set(seen))


class TestAreUnitsCompatible:

    def test_same_category_is_compatible(self):
        assert are_units_compatible("L", "gal") is True

    def test_different_categories_are_not(self):
        assert are_units_compatible("kg", "L") is False

    def test_unknown_unit_never_compatible(self):
        assert are_units_compatible("widgets", "kg") is False
        assert are_units_compatible("widgets", "widgets") is False


# ─────────────────────────────────────────────────────────────────────────────
# 2. convert_unit
# ─────────────────────────────────────────────────────────────────────────────

class TestConvertUnit:

    def test_kwh_to_mwh(self):
        assert convert_unit(1000, "kWh", "MWh") == 1

    def test_miles_to_km(self):
        assert convert_unit(1, "miles", "km") == 1.60934

    def test_identity_returns_value_unchanged(self):
        value = 0.1 + 0.2
        assert convert_unit(value, "kWh", "kWh") == value

    def test_identity_works_for_units_missing_from_table(self):
        assert convert_unit(42.5, "ton-mile", "ton-mile") == 42.5

    def test_incompatible_units_raise(self):
        with pytest.raises(IncompatibleUnitsError, match="Incompatible units"):
            convert_unit(10, "kWh", "kg")

    def test_unknown_unit_raises(self):
        with pytest.raises(IncompatibleUnitsError):
            convert_unit(10, "kWh", "foo")

    def test_incompatible_units_error_is_value_error(self):
        with pytest.raises(ValueError):
            convert_unit(1, "km", "L")

    def test_result_rounded_to_ten_decimals(self):
        # 1 / 3.78541 has more than 10 significant decimals
        result = convert_unit(1, "L", "gal")
        assert result == round(1 / 3.78541, 10)

    def test_tonnes_to_kg(self):
        assert convert_unit(2.5, "tonnes", "kg") == 2500

    @pytest.mark.parametrize("value, a, b", [
        (100.0, "kWh", "MWh"),
        (37.2, "L", "gal"),
        (250.0, "kg", "lbs"),
        (12.0, "km", "miles"),
        (5.5, "therms", "GJ"),
    ])
    def test_round_trip_within_rounding_tolerance(self, value, a, b):
        there = convert_unit(value, a, b)
        back = convert_unit(there, b, a)
        assert back == pytest.approx(value, abs=1e-8)


# ─────────────────────────────────────────────────────────────────────────────
# 3. Conversion factors
# ─────────────────────────────────────────────────────────────────────────────

class TestGetConversionFactor:

    def test_identical_units_return_exactly_one(self):
        assert get_conversion_factor("anything", "anything") == 1

    def test_gallon_to_litre(self):
        assert get_conversion_factor("gal", "L") == pytest.approx(3.78541)

    def test_incompatible_units_raise(self):
        with pytest.raises(IncompatibleUnitsError):
            get_conversion_factor("kg", "km")

    def test_get_unit_conversion_returns_value_object(self):
        conv = get_unit_conversion("MWh", "kWh")
        assert isinstance(conv, UnitConversion)
        assert conv.from_unit == "MWh"
        assert conv.to_unit == "kWh"
        assert conv.factor == pytest.approx(1000.0)


# ─────────────────────────────────────────────────────────────────────────────
# 4. Presentation helpers
# ─────────────────────────────────────────────────────────────────────────────

class TestPresentationHelpers:

    def test_units_in_category(self):
        assert get_units_in_category("distance") == ["km", "miles", "nautical_miles"]

    def test_unknown_category_is_empty(self):
        assert get_units_in_category("temperature") == []

    def test_display_name(self):
        assert get_unit_display_name("kWh") == "Kilowatt-hours"

    def test_display_name_falls_back_to_symbol(self):
        assert get_unit_display_name("passenger-mile") == "passenger-mile"

    def test_suggestions_exclude_input_unit(self):
        suggestions = suggest_alternative_units("km")
        assert suggestions == ["miles", "nautical_miles"]

    def test_suggestions_for_unknown_unit_are_empty(self):
        assert suggest_alternative_units("widgets") == []
