"""
adjustments.py – Scope / category adjustment rules applied to base emissions.

 Scope    Category                                       Rule
 ─────────────────────────────────────────────────────────────────────────
 scope_1  stationary, mobile, process, fugitive          identity hooks
 scope_2  any                                            location- or market-based
 scope_3  business_travel, employee_commuting            identity hooks
 other    other                                          pass-through

Rules are looked up by ``(scope, category)`` first, then by ``(scope, None)``
for scope-wide rules.  A pair with no rule passes emissions through unchanged.
"""
from __future__ import annotations

import logging
from typing import Callable, Optional

from ghg_engine.constants import (
    CATEGORY_BUSINESS_TRAVEL,
    CATEGORY_EMPLOYEE_COMMUTING,
    CATEGORY_FUGITIVE_EMISSIONS,
    CATEGORY_MOBILE_COMBUSTION,
    CATEGORY_PROCESS_EMISSIONS,
    CATEGORY_STATIONARY_COMBUSTION,
    DEFAULT_SCOPE2_METHOD,
    META_CALCULATION_METHOD,
    META_RENEWABLE_PERCENTAGE,
    METHOD_MARKET_BASED,
    SCOPE_1,
    SCOPE_2,
    SCOPE_3,
)
from ghg_engine.exceptions import AdjustmentError
from ghg_engine.schemas import CalculationInput

logger = logging.getLogger(__name__)

AdjustmentRule = Callable[[float, CalculationInput], float]
RuleKey = tuple[str, Optional[str]]


def _metadata_value(calc_input: CalculationInput, keys: tuple[str, ...]):
    metadata = calc_input.metadata or {}
    for key in keys:
        if metadata.get(key) is not None:
            return metadata[key]
    return None


# ─────────────────────────────────────────────────────────────
# Scope 1 – direct emissions
# ─────────────────────────────────────────────────────────────

def adjust_for_stationary_combustion(emissions: float, calc_input: CalculationInput) -> float:
    """Hook for equipment efficiency / fuel quality corrections."""
    return emissions


def adjust_for_mobile_combustion(emissions: float, calc_input: CalculationInput) -> float:
    """Hook for vehicle efficiency / load factor corrections."""
    return emissions


def adjust_for_process_emissions(emissions: float, calc_input: CalculationInput) -> float:
    return emissions


def adjust_for_fugitive_emissions(emissions: float, calc_input: CalculationInput) -> float:
    return emissions


# ─────────────────────────────────────────────────────────────
# Scope 2 – purchased energy
# ─────────────────────────────────────────────────────────────

def adjust_for_scope2_method(emissions: float, calc_input: CalculationInput) -> float:
    """
    Apply the Scope 2 accounting method named in the input metadata.

    ``location_based`` (default) keeps the grid-average result.  ``market_based``
    removes the share covered by renewable contracts:

        emissions × (1 − renewablePercentage / 100)

    Raises
    ------
    AdjustmentError
        If ``renewablePercentage`` is not a number between 0 and 100.
    """
    method = _metadata_value(calc_input, META_CALCULATION_METHOD) or DEFAULT_SCOPE2_METHOD
    if method != METHOD_MARKET_BASED:
        return emissions

    raw_pct = _metadata_value(calc_input, META_RENEWABLE_PERCENTAGE)
    if raw_pct is None:
        renewable_pct = 0.0
    elif isinstance(raw_pct, bool):
        raise AdjustmentError(f"renewablePercentage must be a number, got {raw_pct!r}")
    else:
        try:
            renewable_pct = float(raw_pct)
        except (TypeError, ValueError):
            raise AdjustmentError(
                f"renewablePercentage must be a number, got {raw_pct!r}"
            ) from None
        if not 0.0 <= renewable_pct <= 100.0:
            raise AdjustmentError(
                f"renewablePercentage must be between 0 and 100, got {renewable_pct}"
            )

    logger.debug("Market-based scope 2: %.2f%% renewable", renewable_pct)
    return emissions * (1 - renewable_pct / 100)


# ─────────────────────────────────────────────────────────────
# Scope 3 – value-chain emissions
# ─────────────────────────────────────────────────────────────

def adjust_for_business_travel(emissions: float, calc_input: CalculationInput) -> float:
    """Hook for travel class / occupancy corrections."""
    return emissions


def adjust_for_employee_commuting(emissions: float, calc_input: CalculationInput) -> float:
    """Hook for commute pattern / remote-work corrections."""
    return emissions


DEFAULT_ADJUSTMENTS: dict[RuleKey, AdjustmentRule] = {
    (SCOPE_1, CATEGORY_STATIONARY_COMBUSTION): adjust_for_stationary_combustion,
    (SCOPE_1, CATEGORY_MOBILE_COMBUSTION): adjust_for_mobile_combustion,
    (SCOPE_1, CATEGORY_PROCESS_EMISSIONS): adjust_for_process_emissions,
    (SCOPE_1, CATEGORY_FUGITIVE_EMISSIONS): adjust_for_fugitive_emissions,
    (SCOPE_2, None): adjust_for_scope2_method,
    (SCOPE_3, CATEGORY_BUSINESS_TRAVEL): adjust_for_business_travel,
    (SCOPE_3, CATEGORY_EMPLOYEE_COMMUTING): adjust_for_employee_commuting,
}


def resolve_rule(
    rules: dict[RuleKey, AdjustmentRule], scope: str, category: str
) -> AdjustmentRule | None:
    """Most specific rule for *scope*/*category*, or None."""
    rule = rules.get((scope, category))
    if rule is None:
        rule = rules.get((scope, None))
    return rule


def apply_adjustments(
    rules: dict[RuleKey, AdjustmentRule],
    emissions: float,
    calc_input: CalculationInput,
) -> float:
    """Run the matching rule over *emissions*; unmatched pairs pass through."""
    rule = resolve_rule(rules, calc_input.scope, calc_input.category)
    if rule is None:
        return emissions
    return rule(emissions, calc_input)
