"""
Unit tests for ghg_engine/schemas.py
"""
from datetime import date, datetime

import pytest
from pydantic import ValidationError

from ghg_engine.schemas import (
    ActivityData,
    CalculationInput,
    CalculationResult,
    EmissionFactor,
    format_validation_errors,
    validate_activity_data,
    validate_calculation_input,
    validate_emission_factor,
)


def factor_payload(**overrides) -> dict:
    data = {
        "id": "grid-us",
        "category": "purchased_electricity",
        "subcategory": "us_average",
        "factor": 0.821,
        "unit": "kWh",
        "source": "EPA eGRID 2022",
        "year": 2025,
    }
    data.update(overrides)
    return data


def input_payload(**overrides) -> dict:
    data = {
        "scope": "scope_2",
        "category": "purchased_electricity",
        "subcategory": "us_average",
        "activityData": {
            "amount": 1200,
            "unit": "kWh",
            "startDate": "2024-01-01",
            "endDate": "2024-01-31",
        },
        "emissionFactorId": "grid-us",
    }
    data.update(overrides)
    return data


# ─────────────────────────────────────────────────────────────────────────────
# 1. EmissionFactor
# ─────────────────────────────────────────────────────────────────────────────

class TestEmissionFactor:

    def test_defaults(self):
        f = validate_emission_factor(factor_payload())
        assert f.is_active is True
        assert f.region is None

    def test_camel_case_alias_accepted(self):
        f = validate_emission_factor(factor_payload(isActive=False))
        assert f.is_active is False

    def test_factor_must_be_positive(self):
        with pytest.raises(ValidationError):
            validate_emission_factor(factor_payload(factor=0))

    @pytest.mark.parametrize("year", [1999, 2031])
    def test_year_range(self, year):
        with pytest.raises(ValidationError):
            validate_emission_factor(factor_payload(year=year))

    def test_unknown_category_rejected(self):
        with pytest.raises(ValidationError):
            validate_emission_factor(factor_payload(category="mining"))

    def test_frozen(self):
        f = EmissionFactor(**factor_payload())
        with pytest.raises(ValidationError):
            f.factor = 1.0


# ─────────────────────────────────────────────────────────────────────────────
# 2. ActivityData
# ─────────────────────────────────────────────────────────────────────────────

class TestActivityData:

    def test_iso_dates(self):
        a = validate_activity_data(
            {"amount": 5, "unit": "L", "startDate": "2024-03-01", "endDate": "2024-03-31"}
        )
        assert a.start_date == date(2024, 3, 1)
        assert a.end_date == date(2024, 3, 31)

    def test_loose_date_formats_parsed(self):
        a = ActivityData(amount=5, unit="L", start_date="03/15/2024", end_date="15-Mar-2024")
        assert a.start_date == date(2024, 3, 15)
        assert a.end_date == date(2024, 3, 15)

    def test_datetime_truncated_to_date(self):
        a = ActivityData(
            amount=5, unit="L",
            start_date=datetime(2024, 1, 1, 8, 30), end_date=date(2024, 1, 2),
        )
        assert a.start_date == date(2024, 1, 1)

    def test_blank_date_rejected(self):
        with pytest.raises(ValidationError):
            ActivityData(amount=5, unit="L", start_date="  ", end_date="2024-01-01")

    def test_garbage_date_rejected(self):
        with pytest.raises(ValidationError):
            ActivityData(amount=5, unit="L", start_date="not a date", end_date="2024-01-01")

    @pytest.mark.parametrize("amount", [0, -3.5])
    def test_amount_must_be_positive(self, amount):
        with pytest.raises(ValidationError):
            ActivityData(amount=amount, unit="L", start_date="2024-01-01", end_date="2024-01-02")

    def test_start_after_end_not_enforced(self):
        a = ActivityData(amount=1, unit="L", start_date="2024-02-01", end_date="2024-01-01")
        assert a.start_date > a.end_date


# ─────────────────────────────────────────────────────────────────────────────
# 3. CalculationInput
# ─────────────────────────────────────────────────────────────────────────────

class TestCalculationInput:

    def test_camel_case_payload(self):
        ci = validate_calculation_input(input_payload(metadata={"calculationMethod": "market_based"}))
        assert ci.emission_factor_id == "grid-us"
        assert ci.activity_data.amount == 1200
        assert ci.metadata == {"calculationMethod": "market_based"}

    def test_snake_case_payload(self):
        payload = input_payload()
        payload["activity_data"] = payload.pop("activityData")
        payload["emission_factor_id"] = payload.pop("emissionFactorId")
        assert validate_calculation_input(payload).emission_factor_id == "grid-us"

    def test_factor_source_required(self):
        with pytest.raises(ValidationError, match="No emission factor provided"):
            validate_calculation_input(input_payload(emissionFactorId=None))

    def test_blank_factor_id_counts_as_missing(self):
        with pytest.raises(ValidationError):
            validate_calculation_input(input_payload(emissionFactorId="   "))

    def test_blank_factor_id_with_custom_factor(self):
        ci = validate_calculation_input(
            input_payload(emissionFactorId="", customEmissionFactor=0.4)
        )
        assert ci.emission_factor_id is None
        assert ci.custom_emission_factor == 0.4

    def test_custom_factor_must_be_positive(self):
        with pytest.raises(ValidationError):
            validate_calculation_input(
                input_payload(emissionFactorId=None, customEmissionFactor=-1)
            )

    def test_unknown_scope_rejected(self):
        with pytest.raises(ValidationError):
            CalculationInput.model_validate(input_payload(scope="scope_4"))


# ─────────────────────────────────────────────────────────────────────────────
# 4. CalculationResult
# ─────────────────────────────────────────────────────────────────────────────

def result_payload(input_value) -> dict:
    return {
        "id": "calc-1",
        "input": input_value,
        "calculatedEmissions": 985.2,
        "calculationMethod": "SCOPE_2 purchased_electricity (standard emission factor)",
        "calculatedAt": "2025-06-30T12:00:00Z",
        "status": "completed",
    }


class TestCalculationResult:

    def test_valid_input_restored_as_model(self):
        result = CalculationResult.model_validate(result_payload(input_payload()))

        assert isinstance(result.input, CalculationInput)
        assert result.scope == "scope_2"
        assert result.category == "purchased_electricity"

    def test_json_round_trip_keeps_scope(self):
        original = CalculationResult.model_validate(result_payload(input_payload()))
        restored = CalculationResult.model_validate_json(original.model_dump_json(by_alias=True))

        assert restored.input == original.input
        assert restored.scope == "scope_2"

    def test_invalid_payload_kept_as_is(self):
        raw = {"scope": "scope_9", "amount": "lots"}
        result = CalculationResult.model_validate(
            {**result_payload(raw), "status": "error", "calculationMethod": "error"}
        )

        assert result.input == raw
        assert result.scope is None
        assert result.category is None


# ─────────────────────────────────────────────────────────────────────────────
# 5. Error formatting
# ─────────────────────────────────────────────────────────────────────────────

class TestFormatValidationErrors:

    def test_one_message_per_problem_with_path(self):
        payload = input_payload(scope="bogus")
        payload["activityData"]["amount"] = -1
        with pytest.raises(ValidationError) as excinfo:
            validate_calculation_input(payload)

        messages = format_validation_errors(excinfo.value)

        assert len(messages) == 2
        assert any(m.startswith("scope:") for m in messages)
        assert any(m.startswith("activityData.amount:") for m in messages)

    def test_model_level_message_has_no_prefix(self):
        with pytest.raises(ValidationError) as excinfo:
            validate_calculation_input(input_payload(emissionFactorId=None))

        assert format_validation_errors(excinfo.value) == ["No emission factor provided"]
