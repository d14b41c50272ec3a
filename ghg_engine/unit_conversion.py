"""
unit_conversion.py – Conversion between units of one physical quantity.

Every unit is stored with a multiplier to its category's base unit
(energy → kWh, volume → L, mass → kg, distance → km).  A conversion is

    value × (multiplier[from_unit] / multiplier[to_unit])

rounded once, at the end, to ``CONVERSION_PRECISION`` decimal digits so that
float noise such as ``0.30000000000000004`` never leaks into results.

Unit symbols are case-sensitive (``MWh`` and ``mWh`` are different things).
"""
from __future__ import annotations

from ghg_engine.constants import CONVERSION_PRECISION
from ghg_engine.exceptions import IncompatibleUnitsError
from ghg_engine.schemas import UnitConversion

# ─────────────────────────────────────────────────────────────
# Unit table (multiplier to category base unit)
# ─────────────────────────────────────────────────────────────
UNIT_CATEGORIES: dict[str, dict[str, float]] = {
    "energy": {
        "kWh": 1.0,
        "MWh": 1_000.0,
        "GWh": 1_000_000.0,
        "GJ": 277.777777778,       # 1 GJ = 277.78 kWh
        "MJ": 0.277777777778,
        "BTU": 0.000293071,
        "therms": 29.3071,         # 100,000 BTU
        "MMBtu": 293.071,          # 1,000,000 BTU
    },
    "volume": {
        "L": 1.0,
        "gal": 3.78541,            # US gallon
        "gallon": 3.78541,
        "m³": 1_000.0,
        "ft³": 28.3168,
        "scf": 28.3168,            # standard cubic foot
    },
    "mass": {
        "kg": 1.0,
        "tonnes": 1_000.0,
        "lbs": 0.453592,
        "short_tons": 907.185,
        "long_tons": 1_016.05,
    },
    "distance": {
        "km": 1.0,
        "miles": 1.60934,
        "nautical_miles": 1.852,
    },
}

# Derived reverse index: unit → category name
UNIT_TO_CATEGORY: dict[str, str] = {
    unit: category
    for category, units in UNIT_CATEGORIES.items()
    for unit in units
}

UNIT_DISPLAY_NAMES: dict[str, str] = {
    "kWh": "Kilowatt-hours",
    "MWh": "Megawatt-hours",
    "GWh": "Gigawatt-hours",
    "GJ": "Gigajoules",
    "MJ": "Megajoules",
    "BTU": "British Thermal Units",
    "therms": "Therms",
    "MMBtu": "Million British Thermal Units",
    "L": "Liters",
    "gal": "US Gallons",
    "gallon": "US Gallons",
    "m³": "Cubic Meters",
    "ft³": "Cubic Feet",
    "scf": "Standard Cubic Feet",
    "kg": "Kilograms",
    "tonnes": "Metric Tonnes",
    "lbs": "Pounds",
    "short_tons": "Short Tons (US)",
    "long_tons": "Long Tons (UK)",
    "km": "Kilometers",
    "miles": "Miles",
    "nautical_miles": "Nautical Miles",
}


# ─────────────────────────────────────────────────────────────
# Lookups
# ─────────────────────────────────────────────────────────────

def get_unit_category(unit: str) -> str | None:
    """Return the category a unit belongs to, or None for unknown units."""
    return UNIT_TO_CATEGORY.get(unit)


def are_units_compatible(from_unit: str, to_unit: str) -> bool:
    """True when both units are known and share a category."""
    from_category = get_unit_category(from_unit)
    if from_category is None:
        return False
    return from_category == get_unit_category(to_unit)


def _multipliers(from_unit: str, to_unit: str) -> tuple[float, float]:
    if not are_units_compatible(from_unit, to_unit):
        raise IncompatibleUnitsError(from_unit, to_unit)
    units = UNIT_CATEGORIES[UNIT_TO_CATEGORY[from_unit]]
    return units[from_unit], units[to_unit]


# ─────────────────────────────────────────────────────────────
# Conversion
# ─────────────────────────────────────────────────────────────

def convert_unit(value: float, from_unit: str, to_unit: str) -> float:
    """
    Convert *value* from *from_unit* to *to_unit*.

    Identical unit strings return *value* untouched without a table lookup,
    so units missing from the table still work when no conversion is needed.

    Raises
    ------
    IncompatibleUnitsError
        If the units are in different categories or either is unknown.
    """
    if from_unit == to_unit:
        return value
    from_mult, to_mult = _multipliers(from_unit, to_unit)
    return round(value * (from_mult / to_mult), CONVERSION_PRECISION)


def get_conversion_factor(from_unit: str, to_unit: str) -> float:
    """Return the multiplicative ratio from *from_unit* to *to_unit*."""
    if from_unit == to_unit:
        return 1.0
    from_mult, to_mult = _multipliers(from_unit, to_unit)
    return from_mult / to_mult


def get_unit_conversion(from_unit: str, to_unit: str) -> UnitConversion:
    """Return the conversion between two units as a ``UnitConversion`` value."""
    return UnitConversion(
        from_unit=from_unit,
        to_unit=to_unit,
        factor=get_conversion_factor(from_unit, to_unit),
    )


# ─────────────────────────────────────────────────────────────
# Presentation helpers
# ─────────────────────────────────────────────────────────────

def get_units_in_category(category: str) -> list[str]:
    """List every unit of *category*; unknown categories give []."""
    return list(UNIT_CATEGORIES.get(category, {}))


def get_unit_display_name(unit: str) -> str:
    """Human-readable name for *unit*, falling back to the symbol itself."""
    return UNIT_DISPLAY_NAMES.get(unit, unit)


def suggest_alternative_units(unit: str) -> list[str]:
    """Other units in the same category as *unit*."""
    category = get_unit_category(unit)
    if category is None:
        return []
    return [u for u in get_units_in_category(category) if u != unit]
