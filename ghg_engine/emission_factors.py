"""
emission_factors.py – Built-in emission factor catalog.

All factors are in kg CO₂e per unit.
Sources: US EPA GHG Emission Factors Hub (2025), EPA eGRID 2022, IPCC AR5,
EEA / DEFRA / Environment Canada / Australia NGA (2025).

Catalog ids are deterministic: ``<category>.<subcategory>.<unit>``.
"""
from __future__ import annotations

import logging
from typing import Iterable

from ghg_engine.constants import (
    FACTOR_QUERY_DEFAULT_LIMIT,
    FACTOR_QUERY_MAX_LIMIT,
)
from ghg_engine.schemas import EmissionFactor

logger = logging.getLogger(__name__)

_EPA = "EPA 2025"
_EGRID = "EPA eGRID 2022"
_YEAR = 2025

# (subcategory, factor, unit, source, region)
_FactorRow = tuple[str, float, str, str, str]

# ─────────────────────────────────────────────────────────────
# Scope 1 – Stationary Combustion
# ─────────────────────────────────────────────────────────────
STATIONARY_COMBUSTION: list[_FactorRow] = [
    ("natural_gas",          53.07,  "MMBtu", _EPA, "US"),
    ("natural_gas",          0.0548, "scf",   _EPA, "US"),
    ("anthracite_coal",      103.65, "MMBtu", _EPA, "US"),
    ("bituminous_coal",      93.08,  "MMBtu", _EPA, "US"),
    ("sub_bituminous_coal",  97.17,  "MMBtu", _EPA, "US"),
    ("lignite_coal",         97.75,  "MMBtu", _EPA, "US"),
    ("distillate_fuel_oil",  73.96,  "MMBtu", _EPA, "US"),
    ("residual_fuel_oil",    78.79,  "MMBtu", _EPA, "US"),
    ("kerosene",             75.20,  "MMBtu", _EPA, "US"),
    ("propane",              62.87,  "MMBtu", _EPA, "US"),
    ("wood_biomass",         93.80,  "MMBtu", _EPA, "US"),   # biogenic
    ("ethanol",              68.44,  "MMBtu", _EPA, "US"),   # biogenic
    ("natural_gas",          56.1,   "GJ",    "IPCC AR5", "Global"),
]

# ─────────────────────────────────────────────────────────────
# Scope 1 – Mobile Combustion
# ─────────────────────────────────────────────────────────────
MOBILE_COMBUSTION: list[_FactorRow] = [
    ("motor_gasoline",           8.78,  "gallon", _EPA, "US"),
    ("diesel_fuel",              10.21, "gallon", _EPA, "US"),
    ("aviation_gasoline",        8.31,  "gallon", _EPA, "US"),
    ("jet_fuel",                 9.79,  "gallon", _EPA, "US"),
    ("compressed_natural_gas",   53.02, "MMBtu",  _EPA, "US"),
    ("liquefied_natural_gas",    53.02, "MMBtu",  _EPA, "US"),
    ("liquefied_petroleum_gas",  5.68,  "gallon", _EPA, "US"),
    ("biodiesel_b100",           9.46,  "gallon", _EPA, "US"),   # biogenic
    ("ethanol_e100",             5.79,  "gallon", _EPA, "US"),   # biogenic
]

# ─────────────────────────────────────────────────────────────
# Scope 2 – Purchased Electricity (kg CO₂e / kWh)
# ─────────────────────────────────────────────────────────────
PURCHASED_ELECTRICITY: list[_FactorRow] = [
    ("us_average",      0.821, "kWh", _EGRID, "US"),
    ("nerc_west",       0.758, "kWh", _EGRID, "WECC"),
    ("nerc_east",       0.845, "kWh", _EGRID, "RFC"),
    ("ercot",           0.896, "kWh", _EGRID, "ERCOT"),
    ("california",      0.428, "kWh", _EGRID, "CAMX"),
    ("new_york",        0.526, "kWh", _EGRID, "NYISO"),
    ("eu_average",      0.295, "kWh", "EEA 2025", "EU"),
    ("uk_grid",         0.193, "kWh", "DEFRA 2025", "UK"),
    ("canada_average",  0.130, "kWh", "Environment Canada 2025", "Canada"),
    ("australia_nem",   0.79,  "kWh", "Australia NGA 2025", "Australia"),
]

# ─────────────────────────────────────────────────────────────
# Scope 2 – Purchased Steam / Heating / Cooling (kg CO₂e / MMBtu)
# ─────────────────────────────────────────────────────────────
PURCHASED_STEAM: list[_FactorRow] = [("district_steam", 66.33, "MMBtu", _EPA, "US")]
PURCHASED_HEATING: list[_FactorRow] = [("district_heating", 66.33, "MMBtu", _EPA, "US")]
PURCHASED_COOLING: list[_FactorRow] = [("district_cooling", 66.33, "MMBtu", _EPA, "US")]

# ─────────────────────────────────────────────────────────────
# Scope 3 – Business Travel / Employee Commuting (kg CO₂e / passenger-mile)
# ─────────────────────────────────────────────────────────────
BUSINESS_TRAVEL: list[_FactorRow] = [
    ("air_travel_short_haul",   0.275, "passenger-mile", _EPA, "US"),
    ("air_travel_medium_haul",  0.163, "passenger-mile", _EPA, "US"),
    ("air_travel_long_haul",    0.181, "passenger-mile", _EPA, "US"),
    ("passenger_car",           0.350, "passenger-mile", _EPA, "US"),
    ("light_duty_truck",        0.456, "passenger-mile", _EPA, "US"),
    ("intercity_rail",          0.134, "passenger-mile", _EPA, "US"),
    ("bus",                     0.164, "passenger-mile", _EPA, "US"),
]

EMPLOYEE_COMMUTING: list[_FactorRow] = [
    ("passenger_car",        0.350, "passenger-mile", _EPA, "US"),
    ("public_transit_bus",   0.164, "passenger-mile", _EPA, "US"),
    ("public_transit_rail",  0.103, "passenger-mile", _EPA, "US"),
    ("motorcycle",           0.187, "passenger-mile", _EPA, "US"),
]

# ─────────────────────────────────────────────────────────────
# Scope 3 – Freight (kg CO₂e / ton-mile)
# ─────────────────────────────────────────────────────────────
FREIGHT_TRANSPORTATION: list[_FactorRow] = [
    ("medium_heavy_duty_truck",  0.166, "ton-mile", _EPA, "US"),
    ("rail_freight",             0.040, "ton-mile", _EPA, "US"),
    ("waterborne_craft",         0.036, "ton-mile", _EPA, "US"),
    ("air_freight",              1.001, "ton-mile", _EPA, "US"),
]

# ─────────────────────────────────────────────────────────────
# Scope 3 – Waste (kg CO₂e / short ton)
# Recycling and composting credits are negative and cannot be
# registered as factors; model them with an adjustment rule.
# ─────────────────────────────────────────────────────────────
WASTE_GENERATED: list[_FactorRow] = [
    ("mixed_municipal_solid_waste_landfilled",   940.0, "short_tons", _EPA, "US"),
    ("mixed_municipal_solid_waste_incinerated",  340.0, "short_tons", _EPA, "US"),
]

_CATALOG: dict[str, list[_FactorRow]] = {
    "stationary_combustion": STATIONARY_COMBUSTION,
    "mobile_combustion": MOBILE_COMBUSTION,
    "purchased_electricity": PURCHASED_ELECTRICITY,
    "purchased_steam": PURCHASED_STEAM,
    "purchased_heating": PURCHASED_HEATING,
    "purchased_cooling": PURCHASED_COOLING,
    "business_travel": BUSINESS_TRAVEL,
    "employee_commuting": EMPLOYEE_COMMUTING,
    "upstream_transportation": FREIGHT_TRANSPORTATION,
    "downstream_transportation": FREIGHT_TRANSPORTATION,
    "waste_generated": WASTE_GENERATED,
}


def factor_id(category: str, subcategory: str, unit: str) -> str:
    """Deterministic catalog id, e.g. ``mobile_combustion.diesel_fuel.gallon``."""
    return f"{category}.{subcategory}.{unit}"


def get_default_emission_factors() -> list[EmissionFactor]:
    """Return the built-in catalog as validated ``EmissionFactor`` records."""
    factors = [
        EmissionFactor(
            id=factor_id(category, subcategory, unit),
            category=category,
            subcategory=subcategory,
            factor=factor,
            unit=unit,
            source=source,
            region=region,
            year=_YEAR,
        )
        for category, rows in _CATALOG.items()
        for subcategory, factor, unit, source, region in rows
    ]
    logger.debug("Built-in catalog: %d emission factors", len(factors))
    return factors


def filter_emission_factors(
    factors: Iterable[EmissionFactor],
    *,
    category: str | None = None,
    region: str | None = None,
    active_only: bool = True,
    limit: int = FACTOR_QUERY_DEFAULT_LIMIT,
) -> list[EmissionFactor]:
    """
    Filter a factor collection by category and region.

    Region matching is case-insensitive.

    Raises
    ------
    ValueError
        If *limit* is outside 1..100.
    """
    if not 1 <= limit <= FACTOR_QUERY_MAX_LIMIT:
        raise ValueError(f"limit must be between 1 and {FACTOR_QUERY_MAX_LIMIT}")

    wanted_region = region.lower() if region else None
    matches: list[EmissionFactor] = []
    for f in factors:
        if active_only and not f.is_active:
            continue
        if category and f.category != category:
            continue
        if wanted_region and (f.region or "").lower() != wanted_region:
            continue
        matches.append(f)
        if len(matches) >= limit:
            break
    return matches


def get_factor_categories(factors: Iterable[EmissionFactor]) -> list[str]:
    """Sorted distinct categories present in *factors*."""
    return sorted({f.category for f in factors})
