"""
schemas.py – Pydantic models for emission factors, calculation inputs and results.

Attributes are snake_case; every model also accepts the camelCase spelling
(``emissionFactorId``, ``activityData`` …) so JSON payloads produced by web
forms validate unchanged.  Emission values are kg CO₂e.
"""
from __future__ import annotations

import re
from datetime import date, datetime
from typing import Any, Literal, Mapping, Optional

from dateutil import parser as dateutil_parser
from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    ValidationError,
    field_validator,
    model_validator,
)
from pydantic.alias_generators import to_camel

from ghg_engine.constants import FACTOR_YEAR_MAX, FACTOR_YEAR_MIN

EmissionScope = Literal["scope_1", "scope_2", "scope_3"]

EmissionCategory = Literal[
    "stationary_combustion",
    "mobile_combustion",
    "process_emissions",
    "fugitive_emissions",
    "purchased_electricity",
    "purchased_steam",
    "purchased_heating",
    "purchased_cooling",
    "business_travel",
    "employee_commuting",
    "waste_generated",
    "upstream_transportation",
    "downstream_transportation",
]

CalculationStatus = Literal["pending", "completed", "error"]


class _Model(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class _FrozenModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel, populate_by_name=True, frozen=True
    )


# ─────────────────────────────────────────────────────────────
# Reference data
# ─────────────────────────────────────────────────────────────

class EmissionFactor(_FrozenModel):
    """A standardised emission factor (kg CO₂e per ``unit``)."""

    id: str = Field(..., min_length=1, description="Registry identifier")
    category: EmissionCategory
    subcategory: str = Field(..., description="Fuel, grid region, travel mode …")
    factor: float = Field(..., gt=0, description="kg CO₂e per unit")
    unit: str = Field(..., min_length=1, description="Unit the factor is expressed in")
    source: str = Field(..., description="Publisher, e.g. 'EPA 2025'")
    region: Optional[str] = Field(None, description="US, EU, grid sub-region …")
    year: int = Field(..., ge=FACTOR_YEAR_MIN, le=FACTOR_YEAR_MAX)
    is_active: bool = True
    description: Optional[str] = None


class UnitConversion(_FrozenModel):
    """Multiplicative conversion between two units of one category."""

    from_unit: str
    to_unit: str
    factor: float = Field(..., gt=0)


# ─────────────────────────────────────────────────────────────
# Calculation input
# ─────────────────────────────────────────────────────────────

def _to_date(value: Any) -> Any:
    """
    Coerce *value* to a ``date``.

    Accepts ``date``/``datetime`` objects, ISO strings and the looser formats
    python-dateutil understands (``03/15/2024``, ``15-Mar-2024`` …).  Anything
    unparseable is handed back so pydantic reports it as a field error.
    """
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date) or not isinstance(value, str):
        return value
    value = value.strip()
    if re.fullmatch(r"\d{4}-\d{2}-\d{2}", value):
        return value
    try:
        return dateutil_parser.parse(value, dayfirst=False).date()
    except (ValueError, OverflowError):
        return value


class ActivityData(_Model):
    """Quantity of an activity over a reporting period."""

    amount: float = Field(..., gt=0)
    unit: str = Field(..., min_length=1)
    start_date: date
    end_date: date
    description: Optional[str] = None

    @field_validator("start_date", "end_date", mode="before")
    @classmethod
    def _parse_dates(cls, value: Any) -> Any:
        return _to_date(value)


class CalculationInput(_Model):
    """
    One emission calculation request.

    At least one of ``emission_factor_id`` / ``custom_emission_factor`` is
    required.  When both are present the registry id takes precedence.
    """

    scope: EmissionScope
    category: EmissionCategory
    subcategory: str
    activity_data: ActivityData
    emission_factor_id: Optional[str] = None
    custom_emission_factor: Optional[float] = Field(None, gt=0)
    metadata: Optional[dict[str, Any]] = None

    @field_validator("emission_factor_id", mode="before")
    @classmethod
    def _blank_id_is_none(cls, value: Any) -> Any:
        if isinstance(value, str) and not value.strip():
            return None
        return value

    @model_validator(mode="after")
    def _require_factor_source(self) -> "CalculationInput":
        if self.emission_factor_id is None and self.custom_emission_factor is None:
            raise ValueError("No emission factor provided")
        return self


# ─────────────────────────────────────────────────────────────
# Calculation result
# ─────────────────────────────────────────────────────────────

class UncertaintyRange(_FrozenModel):
    min: float
    max: float


class CalculationResult(_FrozenModel):
    """Outcome of one calculation; ``status == 'error'`` carries ``errors``."""

    id: str
    # The raw payload is echoed back when it never validated
    input: Any
    emission_factor: Optional[EmissionFactor] = None
    calculated_emissions: float = Field(..., description="kg CO₂e; negative = avoided")
    calculation_method: str
    uncertainty_range: Optional[UncertaintyRange] = None
    calculated_at: datetime
    status: CalculationStatus
    errors: Optional[list[str]] = None

    @field_validator("input", mode="before")
    @classmethod
    def _restore_input(cls, value: Any) -> Any:
        # Dumped results carry the input as a plain mapping
        if isinstance(value, Mapping):
            try:
                return CalculationInput.model_validate(value)
            except ValidationError:
                return value
        return value

    @property
    def scope(self) -> str | None:
        if isinstance(self.input, CalculationInput):
            return self.input.scope
        return None

    @property
    def category(self) -> str | None:
        if isinstance(self.input, CalculationInput):
            return self.input.category
        return None


# ─────────────────────────────────────────────────────────────
# Validation helpers
# ─────────────────────────────────────────────────────────────

def format_validation_errors(exc: ValidationError) -> list[str]:
    """Flatten a pydantic ``ValidationError`` into 'field.path: message' strings."""
    messages = []
    for err in exc.errors():
        loc = ".".join(str(part) for part in err.get("loc", ()))
        msg = err.get("msg", "invalid value").removeprefix("Value error, ")
        messages.append(f"{loc}: {msg}" if loc else msg)
    return messages


def validate_calculation_input(data: Any) -> CalculationInput:
    return CalculationInput.model_validate(data)


def validate_emission_factor(data: Any) -> EmissionFactor:
    return EmissionFactor.model_validate(data)


def validate_activity_data(data: Any) -> ActivityData:
    return ActivityData.model_validate(data)
