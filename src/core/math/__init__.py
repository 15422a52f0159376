"""
Core math modules

Numerical primitives and the PLI range statistics, with deterministic,
division-safe behaviour.
"""

# Numerical Safeguards
from src.core.math.numerical_safeguards import (
    # Epsilon constants
    EPS_CALC,
    REPORTING_DECIMALS,
    # Exceptions
    InputValidationError,
    # Safe division
    denom_safe_signed,
    safe_divide,
    # NaN/Inf sanitization
    is_valid_float,
    sanitize_float,
    # Utilities
    clamp,
    round_half_away_from_zero,
    # Validation
    require_minimum_comparables,
    validate_in_range,
    validate_number,
    validate_numbers,
)

# Statistics
from src.core.math.statistics import (
    compute_range,
    detect_outliers,
    index_quartiles,
    interpolated_percentile,
    percentile_rank,
    sample_standard_deviation,
    tukey_fences,
)

__all__ = [
    # Numerical Safeguards: Epsilon constants
    "EPS_CALC",
    "REPORTING_DECIMALS",
    # Numerical Safeguards: Exceptions
    "InputValidationError",
    # Numerical Safeguards: Safe division
    "denom_safe_signed",
    "safe_divide",
    # Numerical Safeguards: NaN/Inf sanitization
    "is_valid_float",
    "sanitize_float",
    # Numerical Safeguards: Utilities
    "clamp",
    "round_half_away_from_zero",
    # Numerical Safeguards: Validation
    "require_minimum_comparables",
    "validate_in_range",
    "validate_number",
    "validate_numbers",
    # Statistics
    "compute_range",
    "detect_outliers",
    "index_quartiles",
    "interpolated_percentile",
    "percentile_rank",
    "sample_standard_deviation",
    "tukey_fences",
]
