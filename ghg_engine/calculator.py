"""
calculator.py – Emission calculation engine.

Turns one ``CalculationInput`` into one ``CalculationResult``:

 Step                         Detail
 ─────────────────────────────────────────────────────────────────────────
 1. validate                  pydantic schema (schemas.CalculationInput)
 2. resolve factor            registry id, else custom factor value
 3. convert activity units    activity unit → factor unit (registry only)
 4. base emissions            converted_amount × factor
 5. adjust                    scope / category rule (adjustments.py)
 6. uncertainty               ± band for registry factors only

``calculate`` never raises: every failure becomes a result with
``status='error'``, ``calculated_emissions=0`` and a non-empty ``errors`` list.

Usage
──────
    from ghg_engine.calculator import create_emission_calculator
    from ghg_engine.emission_factors import get_default_emission_factors

    calc = create_emission_calculator(get_default_emission_factors())
    result = calc.calculate({...})
    stats = calc.get_summary_statistics([result])
"""
from __future__ import annotations

import logging
import threading
import uuid
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Callable, Iterable, Mapping

from pydantic import ValidationError

from ghg_engine import unit_conversion
from ghg_engine.adjustments import (
    DEFAULT_ADJUSTMENTS,
    AdjustmentRule,
    RuleKey,
    apply_adjustments,
)
from ghg_engine.config import Config
from ghg_engine.constants import (
    ALLOWED_CATEGORIES,
    ALLOWED_SCOPES,
    DEFAULT_UNCERTAINTY_PCT,
    METHOD_LABEL_CUSTOM,
    METHOD_LABEL_ERROR,
    METHOD_LABEL_STANDARD,
    SCOPE_1,
    SCOPE_2,
    SCOPE_3,
    STATUS_COMPLETED,
    STATUS_ERROR,
)
from ghg_engine.emission_factors import get_default_emission_factors
from ghg_engine.exceptions import (
    EmissionFactorNotFoundError,
    InputValidationError,
    MissingEmissionFactorError,
)
from ghg_engine.schemas import (
    CalculationInput,
    CalculationResult,
    EmissionFactor,
    UncertaintyRange,
    format_validation_errors,
    validate_calculation_input,
)

logger = logging.getLogger(__name__)

IdGenerator = Callable[[], str]
Clock = Callable[[], datetime]


def _uuid_id() -> str:
    return str(uuid.uuid4())


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


# ─────────────────────────────────────────────────────────────────────────────
# Summary dataclass
# ─────────────────────────────────────────────────────────────────────────────

@dataclass
class SummaryStatistics:
    """Aggregate over a set of results; only completed results are summed."""
    total_emissions: float = 0.0
    scope1_total: float = 0.0
    scope2_total: float = 0.0
    scope3_total: float = 0.0
    calculation_count: int = 0
    error_count: int = 0
    by_category: dict[str, float] = field(default_factory=dict)

    @property
    def total_metric_tons(self) -> float:
        return self.total_emissions / 1_000.0


_SCOPE_TOTAL_ATTR = {
    SCOPE_1: "scope1_total",
    SCOPE_2: "scope2_total",
    SCOPE_3: "scope3_total",
}


# ─────────────────────────────────────────────────────────────────────────────
# Calculator
# ─────────────────────────────────────────────────────────────────────────────

class EmissionCalculator:
    """
    Holds an emission factor registry and computes CO₂e for activity data.

    The registry is copy-on-write: ``load_emission_factors`` builds a new dict
    and swaps it in under a lock, so calculations running on other threads
    always read a complete registry.

    Parameters
    ──────────
    emission_factors : factors to register at construction
    id_generator     : returns a fresh result id (default: UUID4 string)
    clock            : returns the ``calculated_at`` timestamp (default: UTC now)
    uncertainty_pct  : half-width of the band for registry factors (default 0.10)
    """

    def __init__(
        self,
        emission_factors: Iterable[EmissionFactor] | None = None,
        *,
        id_generator: IdGenerator | None = None,
        clock: Clock | None = None,
        uncertainty_pct: float = DEFAULT_UNCERTAINTY_PCT,
    ) -> None:
        self._emission_factors: dict[str, EmissionFactor] = {}
        self._adjustments: dict[RuleKey, AdjustmentRule] = dict(DEFAULT_ADJUSTMENTS)
        self._lock = threading.Lock()
        self._id_generator = id_generator or _uuid_id
        self._clock = clock or _utc_now
        self.uncertainty_pct = uncertainty_pct
        if emission_factors:
            self.load_emission_factors(emission_factors)

    @classmethod
    def from_config(cls, config: Config, **kwargs: Any) -> "EmissionCalculator":
        """Build a calculator from ``Config`` (built-in catalog + uncertainty)."""
        factors = get_default_emission_factors() if config.load_default_factors else []
        return cls(factors, uncertainty_pct=config.uncertainty_pct, **kwargs)

    # ── Registry ──────────────────────────────────────────────────────────

    def load_emission_factors(self, factors: Iterable[EmissionFactor | Mapping[str, Any]]) -> None:
        """
        Register *factors*, replacing any existing entry with the same id.

        Mappings are validated into ``EmissionFactor`` first; a ValidationError
        leaves the registry untouched.
        """
        validated = [
            f if isinstance(f, EmissionFactor) else EmissionFactor.model_validate(f)
            for f in factors
        ]
        with self._lock:
            registry = dict(self._emission_factors)
            for f in validated:
                registry[f.id] = f
            self._emission_factors = registry
        logger.info(
            "Loaded %d emission factor(s); registry size %d",
            len(validated), len(registry),
        )

    def get_emission_factor(self, factor_id: str) -> EmissionFactor | None:
        return self._emission_factors.get(factor_id)

    def list_emission_factors(self) -> list[EmissionFactor]:
        return list(self._emission_factors.values())

    # ── Adjustment rules ──────────────────────────────────────────────────

    def register_adjustment(
        self, scope: str, category: str | None, rule: AdjustmentRule
    ) -> None:
        """
        Install *rule* for *scope*/*category* on this calculator.

        ``category=None`` registers a scope-wide rule, used when no
        category-specific rule matches.
        """
        if scope not in ALLOWED_SCOPES:
            raise ValueError(f"Unsupported emission scope: {scope}")
        if category is not None and category not in ALLOWED_CATEGORIES:
            raise ValueError(f"Unsupported emission category: {category}")
        with self._lock:
            adjustments = dict(self._adjustments)
            adjustments[(scope, category)] = rule
            self._adjustments = adjustments

    # ── Calculation ───────────────────────────────────────────────────────

    def calculate(self, calc_input: CalculationInput | Mapping[str, Any]) -> CalculationResult:
        """
        Calculate CO₂e emissions for one input.

        Never raises; failures are returned as ``status='error'`` results.
        """
        try:
            validated = self._validate(calc_input)
        except InputValidationError as exc:
            logger.error("Calculation input invalid: %s", exc)
            return self._error_result(calc_input, exc.messages)

        try:
            return self._calculate(validated)
        except Exception as exc:  # noqa: BLE001
            logger.error(
                "Calculation failed (%s %s): %s",
                validated.scope, validated.category, exc,
            )
            return self._error_result(validated, [str(exc) or type(exc).__name__])

    def _validate(self, calc_input: Any) -> CalculationInput:
        try:
            validated = validate_calculation_input(calc_input)
        except ValidationError as exc:
            raise InputValidationError(format_validation_errors(exc)) from exc
        # model_validate hands back the caller's own instance unchanged
        return validated.model_copy(deep=True)

    def _calculate(self, calc_input: CalculationInput) -> CalculationResult:
        emission_factor, factor_value = self._resolve_factor(calc_input)
        activity = calc_input.activity_data

        amount = activity.amount
        if emission_factor is not None:
            amount = unit_conversion.convert_unit(
                activity.amount, activity.unit, emission_factor.unit
            )

        base_emissions = amount * factor_value
        emissions = apply_adjustments(self._adjustments, base_emissions, calc_input)

        logger.debug(
            "%s %s | %.4f %s × %.6f = %.4f kg CO₂e (adjusted %.4f)",
            calc_input.scope, calc_input.category, amount,
            emission_factor.unit if emission_factor else activity.unit,
            factor_value, base_emissions, emissions,
        )

        return CalculationResult(
            id=self._id_generator(),
            input=calc_input,
            emission_factor=emission_factor,
            calculated_emissions=emissions,
            calculation_method=self._calculation_method(calc_input, emission_factor),
            uncertainty_range=self._uncertainty_range(emissions, emission_factor),
            calculated_at=self._clock(),
            status=STATUS_COMPLETED,
        )

    def _resolve_factor(
        self, calc_input: CalculationInput
    ) -> tuple[EmissionFactor | None, float]:
        if calc_input.emission_factor_id is not None:
            emission_factor = self.get_emission_factor(calc_input.emission_factor_id)
            if emission_factor is None:
                raise EmissionFactorNotFoundError(calc_input.emission_factor_id)
            return emission_factor, emission_factor.factor
        if calc_input.custom_emission_factor is not None:
            return None, calc_input.custom_emission_factor
        raise MissingEmissionFactorError()

    def _uncertainty_range(
        self, emissions: float, emission_factor: EmissionFactor | None
    ) -> UncertaintyRange | None:
        # Fixed band; factor source/year/region are not consulted
        if emission_factor is None:
            return None
        low = emissions * (1 - self.uncertainty_pct)
        high = emissions * (1 + self.uncertainty_pct)
        return UncertaintyRange(min=min(low, high), max=max(low, high))

    @staticmethod
    def _calculation_method(
        calc_input: CalculationInput, emission_factor: EmissionFactor | None
    ) -> str:
        label = METHOD_LABEL_STANDARD if emission_factor is not None else METHOD_LABEL_CUSTOM
        return f"{calc_input.scope.upper()} {calc_input.category} ({label})"

    def _error_result(self, calc_input: Any, errors: list[str]) -> CalculationResult:
        return CalculationResult(
            id=self._id_generator(),
            input=calc_input,
            calculated_emissions=0.0,
            calculation_method=METHOD_LABEL_ERROR,
            calculated_at=self._clock(),
            status=STATUS_ERROR,
            errors=errors or ["Unknown error occurred"],
        )

    # ── Batch & aggregation ───────────────────────────────────────────────

    def batch_calculate(
        self, inputs: Iterable[CalculationInput | Mapping[str, Any]]
    ) -> list[CalculationResult]:
        """Calculate each input in order; one failure never stops the rest."""
        results = [self.calculate(calc_input) for calc_input in inputs]
        errors = sum(1 for r in results if r.status == STATUS_ERROR)
        logger.info("batch_calculate complete | Records=%d Errors=%d", len(results), errors)
        return results

    def get_summary_statistics(self, results: Iterable[CalculationResult]) -> SummaryStatistics:
        """
        Sum completed results overall, per scope and per category.

        Error results are only counted.  Negative emissions (avoided-emission
        credits) reduce the totals like any other value.
        """
        summary = SummaryStatistics()
        for r in results:
            if r.status == STATUS_ERROR:
                summary.error_count += 1
                continue
            if r.status != STATUS_COMPLETED:
                continue

            summary.calculation_count += 1
            summary.total_emissions += r.calculated_emissions
            scope_attr = _SCOPE_TOTAL_ATTR.get(r.scope)
            if scope_attr:
                setattr(summary, scope_attr, getattr(summary, scope_attr) + r.calculated_emissions)
            if r.category:
                summary.by_category[r.category] = (
                    summary.by_category.get(r.category, 0.0) + r.calculated_emissions
                )
        return summary


def create_emission_calculator(
    emission_factors: Iterable[EmissionFactor] | None = None, **kwargs: Any
) -> EmissionCalculator:
    """Factory for ``EmissionCalculator``; accepts zero or more factors."""
    return EmissionCalculator(emission_factors, **kwargs)
