"""
ghg_engine – Greenhouse-gas emission calculation engine with unit conversion.
"""
from ghg_engine.calculator import (
    EmissionCalculator,
    SummaryStatistics,
    create_emission_calculator,
)
from ghg_engine.schemas import (
    ActivityData,
    CalculationInput,
    CalculationResult,
    EmissionFactor,
    UncertaintyRange,
    UnitConversion,
    validate_activity_data,
    validate_calculation_input,
    validate_emission_factor,
)
from ghg_engine.unit_conversion import (
    are_units_compatible,
    convert_unit,
    get_conversion_factor,
    get_unit_category,
    get_unit_conversion,
    get_unit_display_name,
    get_units_in_category,
    suggest_alternative_units,
)

__all__ = [
    "ActivityData",
    "CalculationInput",
    "CalculationResult",
    "EmissionCalculator",
    "EmissionFactor",
    "SummaryStatistics",
    "UncertaintyRange",
    "UnitConversion",
    "are_units_compatible",
    "convert_unit",
    "create_emission_calculator",
    "get_conversion_factor",
    "get_unit_category",
    "get_unit_conversion",
    "get_unit_display_name",
    "get_units_in_category",
    "suggest_alternative_units",
    "validate_activity_data",
    "validate_calculation_input",
    "validate_emission_factor",
]
