"""
Numerical Safeguards: Safe Math Primitives

Every calculator in the engine divides by balances that can legitimately be
zero (revenue, operating cost, utilization, comparable indices). This module
keeps those divisions neutral and keeps malformed input out of the numbers:

- Safe division with a neutral fallback
- NaN/Inf sanitization
- Decimal rounding half away from zero (reported figures)
- Typed validation of numeric input

CRITICAL INVARIANTS:
1. Division by zero never raises (fallback is returned)
2. NaN/Inf never propagate out of safe_divide
3. Non-numeric input is rejected with InputValidationError, never coerced
4. All operations are deterministic and reproducible
"""

import math
from collections.abc import Iterable, Sequence
from decimal import ROUND_HALF_UP, Decimal
from typing import Final

# =============================================================================
# EPSILON PARAMETERS
# =============================================================================

# General purpose epsilon for denominators
EPS_CALC: Final[float] = 1e-12

# Decimal places of every reported statistic
REPORTING_DECIMALS: Final[int] = 2


# =============================================================================
# EXCEPTIONS
# =============================================================================


class InputValidationError(ValueError):
    """
    Structurally invalid numeric input (non-numeric, NaN/Inf, out of domain).

    Raised to the caller and never recovered locally. Business-rule edge
    cases (zero denominators, missing benchmark data) are NOT reported with
    this error; they resolve to neutral results.
    """


# =============================================================================
# SAFE DIVISION
# =============================================================================


def denom_safe_signed(value: float, eps: float = EPS_CALC) -> float:
    """
    Signed denominator with epsilon protection.

    denom_safe_signed(x, eps) = sign(x) * max(abs(x), eps)

    Args:
        value: Raw denominator
        eps: Minimum absolute magnitude (default: EPS_CALC)

    Returns:
        value if abs(value) >= eps, otherwise sign(value) * eps (eps for 0)

    Examples:
        >>> denom_safe_signed(10.0, 1e-6)
        10.0
        >>> denom_safe_signed(-1e-9, 1e-6)
        -1e-06
    """
    if eps <= 0:
        raise ValueError(f"eps must be positive, got {eps}")

    if abs(value) >= eps:
        return value

    if value < 0:
        return -eps
    return eps


def safe_divide(
    numerator: float,
    denominator: float,
    eps: float = EPS_CALC,
    fallback: float = 0.0,
) -> float:
    """
    Division that resolves a zero denominator to a neutral fallback.

    An exact zero denominator returns fallback. Tiny non-zero denominators
    are protected with epsilon. NaN/Inf inputs and results are sanitized.

    Args:
        numerator: Numerator
        denominator: Denominator
        eps: Minimum absolute denominator
        fallback: Result for a zero denominator (default: 0.0)

    Returns:
        numerator / denominator, or fallback

    Examples:
        >>> safe_divide(10.0, 2.0)
        5.0
        >>> safe_divide(10.0, 0.0)
        0.0
    """
    num_clean = sanitize_float(numerator, fallback=0.0)
    denom_raw = sanitize_float(denominator, fallback=0.0)

    if denom_raw == 0.0:
        return fallback

    denom_safe = denom_safe_signed(denom_raw, eps)

    try:
        result = num_clean / denom_safe
    except (ZeroDivisionError, FloatingPointError):
        return fallback

    return sanitize_float(result, fallback=fallback)


# =============================================================================
# NaN/Inf SANITIZATION
# =============================================================================


def is_valid_float(value: float) -> bool:
    """True if value is finite (not NaN, not Inf)."""
    return math.isfinite(value)


def sanitize_float(value: float, fallback: float = 0.0) -> float:
    """
    Replace NaN/Inf with fallback.

    Examples:
        >>> sanitize_float(float('nan'))
        0.0
        >>> sanitize_float(float('-inf'), fallback=-1.0)
        -1.0
    """
    if is_valid_float(value):
        return value
    return fallback


# =============================================================================
# ROUNDING
# =============================================================================


def round_half_away_from_zero(value: float, decimals: int = REPORTING_DECIMALS) -> float:
    """
    Round to a fixed number of decimals, ties away from zero.

    Rounding is done on the shortest decimal representation of the float
    (Decimal(repr(value))), so 2.675 rounds to 2.68 and -2.675 to -2.68,
    unlike the banker's rounding of the builtin round().

    Args:
        value: Value to round (must be finite)
        decimals: Number of decimal places (default: REPORTING_DECIMALS)

    Returns:
        Rounded float

    Raises:
        InputValidationError: If value is not a finite number

    Examples:
        >>> round_half_away_from_zero(12.345)
        12.35
        >>> round_half_away_from_zero(-0.125)
        -0.13
    """
    validate_number(value, "value")
    if decimals < 0:
        raise ValueError(f"decimals must be non-negative, got {decimals}")

    quantum = Decimal(1).scaleb(-decimals)
    rounded = Decimal(repr(float(value))).quantize(quantum, rounding=ROUND_HALF_UP)
    result = float(rounded)
    # Normalize -0.0 so reported figures never carry a negative zero
    return result + 0.0


def clamp(
    value: float,
    min_value: float | None = None,
    max_value: float | None = None,
) -> float:
    """
    Clamp value into [min_value, max_value].

    Examples:
        >>> clamp(-1.0, 0.0, 10.0)
        0.0
        >>> clamp(15.0, 0.0, 10.0)
        10.0
    """
    result = value

    if min_value is not None:
        result = max(result, min_value)

    if max_value is not None:
        result = min(result, max_value)

    return result


# =============================================================================
# VALIDATION
# =============================================================================


def validate_number(value: object, name: str) -> float:
    """
    Validate that value is a finite real number.

    bool is rejected even though it subclasses int: a flag passed where an
    amount is expected is a caller bug.

    Args:
        value: Candidate value
        name: Parameter name (for the error message)

    Returns:
        value as float

    Raises:
        InputValidationError: If value is not an int/float or is NaN/Inf
    """
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise InputValidationError(
            f"{name} must be a number, got {type(value).__name__}: {value!r}"
        )

    as_float = float(value)
    if not is_valid_float(as_float):
        raise InputValidationError(f"{name} must be a finite number (not NaN/Inf), got {value}")

    return as_float


def validate_numbers(values: Iterable[object], name: str) -> list[float]:
    """
    Validate every element of a sequence with validate_number.

    Returns:
        List of floats in input order

    Raises:
        InputValidationError: On the first invalid element (index reported)
    """
    if isinstance(values, (str, bytes)):
        raise InputValidationError(f"{name} must be a sequence of numbers, got a string")

    return [validate_number(v, f"{name}[{i}]") for i, v in enumerate(values)]


def validate_in_range(
    value: float,
    name: str,
    min_value: float | None = None,
    max_value: float | None = None,
) -> None:
    """
    Validate that value lies in [min_value, max_value].

    Raises:
        InputValidationError: If value is out of range, NaN/Inf or not a number
    """
    checked = validate_number(value, name)

    if min_value is not None and checked < min_value:
        raise InputValidationError(f"{name} must be >= {min_value}, got {value}")

    if max_value is not None and checked > max_value:
        raise InputValidationError(f"{name} must be <= {max_value}, got {value}")


def require_minimum_comparables(comparables: Sequence[object], minimum: int = 3) -> None:
    """
    Caller-side precondition for a statistically meaningful range.

    The engine itself accepts any number of comparables (including zero);
    callers that require a minimum set size enforce it with this helper.

    Raises:
        InputValidationError: If fewer than `minimum` comparables are given
    """
    if len(comparables) < minimum:
        raise InputValidationError(
            f"At least {minimum} comparables are required for a reliable range, "
            f"got {len(comparables)}"
        )
