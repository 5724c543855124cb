"""
Shared Constants for the CMA Adjustments service

Feature names, default rate values and placeholder strings used across
the calculator, the comparison table and the API.
"""

from typing import Dict, List

# Feature names as they appear on adjustment lines and table rows
FEATURE_SQFT: str = "Square Feet"
FEATURE_BEDROOMS: str = "Bedrooms"
FEATURE_BATHROOMS: str = "Bathrooms"
FEATURE_POOL: str = "Pool"
FEATURE_GARAGE: str = "Garage Spaces"
FEATURE_YEAR_BUILT: str = "Year Built"
FEATURE_LOT_SIZE: str = "Lot Size"

# Canonical row order for comparison tables
FEATURE_ORDER: List[str] = [
    FEATURE_SQFT,
    FEATURE_BEDROOMS,
    FEATURE_BATHROOMS,
    FEATURE_POOL,
    FEATURE_GARAGE,
    FEATURE_YEAR_BUILT,
    FEATURE_LOT_SIZE,
]

# Default per-unit rates (dollars)
DEFAULT_RATE_VALUES: Dict[str, float] = {
    "sqft_per_unit": 50,
    "bedroom_value": 10000,
    "bathroom_value": 7500,
    "pool_value": 25000,
    "garage_per_space": 5000,
    "year_built_per_year": 1000,
    "lot_size_per_sqft": 2,
}

# Lot differences at or below this many square feet are not adjusted for
LOT_SIZE_NOISE_FLOOR: float = 500

# Pool feature values that mean "no pool" (compared lowercased)
NO_POOL_VALUES = frozenset({"none", "no", "", "null"})

# Placeholders
UNKNOWN_ID: str = "unknown"
UNKNOWN_ADDRESS: str = "Unknown Address"
NOT_APPLICABLE: str = "—"

# Database table names
TABLE_CMA_ADJUSTMENTS: str = "cma_adjustments"
