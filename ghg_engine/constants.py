"""
constants.py – Shared labels, enumerations, and numeric defaults.
"""

# ── Emission scopes ───────────────────────────────────────────
SCOPE_1 = "scope_1"
SCOPE_2 = "scope_2"
SCOPE_3 = "scope_3"

ALLOWED_SCOPES = [SCOPE_1, SCOPE_2, SCOPE_3]

# ── Emission categories ───────────────────────────────────────
CATEGORY_STATIONARY_COMBUSTION = "stationary_combustion"
CATEGORY_MOBILE_COMBUSTION = "mobile_combustion"
CATEGORY_PROCESS_EMISSIONS = "process_emissions"
CATEGORY_FUGITIVE_EMISSIONS = "fugitive_emissions"
CATEGORY_PURCHASED_ELECTRICITY = "purchased_electricity"
CATEGORY_PURCHASED_STEAM = "purchased_steam"
CATEGORY_PURCHASED_HEATING = "purchased_heating"
CATEGORY_PURCHASED_COOLING = "purchased_cooling"
CATEGORY_BUSINESS_TRAVEL = "business_travel"
CATEGORY_EMPLOYEE_COMMUTING = "employee_commuting"
CATEGORY_WASTE_GENERATED = "waste_generated"
CATEGORY_UPSTREAM_TRANSPORTATION = "upstream_transportation"
CATEGORY_DOWNSTREAM_TRANSPORTATION = "downstream_transportation"

ALLOWED_CATEGORIES = [
    CATEGORY_STATIONARY_COMBUSTION,
    CATEGORY_MOBILE_COMBUSTION,
    CATEGORY_PROCESS_EMISSIONS,
    CATEGORY_FUGITIVE_EMISSIONS,
    CATEGORY_PURCHASED_ELECTRICITY,
    CATEGORY_PURCHASED_STEAM,
    CATEGORY_PURCHASED_HEATING,
    CATEGORY_PURCHASED_COOLING,
    CATEGORY_BUSINESS_TRAVEL,
    CATEGORY_EMPLOYEE_COMMUTING,
    CATEGORY_WASTE_GENERATED,
    CATEGORY_UPSTREAM_TRANSPORTATION,
    CATEGORY_DOWNSTREAM_TRANSPORTATION,
]

# ── Calculation status ────────────────────────────────────────
STATUS_PENDING = "pending"
STATUS_COMPLETED = "completed"
STATUS_ERROR = "error"

# ── Scope 2 accounting methods ────────────────────────────────
METHOD_LOCATION_BASED = "location_based"
METHOD_MARKET_BASED = "market_based"
DEFAULT_SCOPE2_METHOD = METHOD_LOCATION_BASED

# Metadata keys; camelCase first, snake_case accepted as well
META_CALCULATION_METHOD = ("calculationMethod", "calculation_method")
META_RENEWABLE_PERCENTAGE = ("renewablePercentage", "renewable_percentage")

# ── Numeric defaults ──────────────────────────────────────────
# Decimal digits kept on a converted value (final result only)
CONVERSION_PRECISION = 10

# ±10 % band applied when a registered factor is used
DEFAULT_UNCERTAINTY_PCT = 0.10

# ── Emission factor catalog ───────────────────────────────────
FACTOR_YEAR_MIN = 2000
FACTOR_YEAR_MAX = 2030
FACTOR_QUERY_DEFAULT_LIMIT = 50
FACTOR_QUERY_MAX_LIMIT = 100

# ── Provenance labels ─────────────────────────────────────────
METHOD_LABEL_STANDARD = "standard emission factor"
METHOD_LABEL_CUSTOM = "custom emission factor"
METHOD_LABEL_ERROR = "error"
