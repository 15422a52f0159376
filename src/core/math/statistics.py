"""
Statistics: PLI range calculation

Two quartile conventions live here and are deliberately kept apart:

- interpolated_percentile / compute_range: linear interpolation at
  idx = p/100 * (n - 1). Used for the descriptive range of a PLI set.
- index_quartiles: truncated index sorted[floor(n * p)]. Used only for the
  headline arm's-length band of the comparability analysis.

Merging them would change reported compliance outcomes.

All reported range figures are rounded to 2 decimals, half away from zero.
"""

import logging
import math
from collections.abc import Iterable, Sequence

from src.core.domain.analysis import ArmLengthRange, StatisticalRange
from src.core.math.numerical_safeguards import (
    REPORTING_DECIMALS,
    clamp,
    round_half_away_from_zero,
    validate_number,
    validate_numbers,
)

logger = logging.getLogger(__name__)


# =============================================================================
# PERCENTILES
# =============================================================================


def interpolated_percentile(sorted_values: Sequence[float], percentile: float) -> float:
    """
    Percentile of an ascending sequence by linear interpolation.

    idx = (p / 100) * (n - 1); lower = floor(idx); upper = ceil(idx);
    weight = idx - lower;
    result = sorted[lower] * (1 - weight) + sorted[upper] * weight

    An index outside [0, n - 1] is clamped to the first/last element.

    Args:
        sorted_values: Values sorted ascending
        percentile: Percentile in [0, 100]

    Returns:
        Interpolated percentile, 0.0 for an empty sequence

    Examples:
        >>> interpolated_percentile([10, 12, 14, 16, 18, 20], 25)
        12.5
    """
    n = len(sorted_values)
    if n == 0:
        return 0.0

    index = (percentile / 100) * (n - 1)
    lower = math.floor(index)
    upper = math.ceil(index)

    if upper >= n:
        return float(sorted_values[-1])
    if lower < 0:
        return float(sorted_values[0])

    weight = index - lower
    return sorted_values[lower] * (1 - weight) + sorted_values[upper] * weight


def index_quartiles(sorted_values: Sequence[float]) -> ArmLengthRange:
    """
    Arm's-length band by truncated index.

    lower = sorted[floor(n * 0.25)], median = sorted[floor(n * 0.5)],
    upper = sorted[floor(n * 0.75)]. No interpolation, no rounding.

    Args:
        sorted_values: Values sorted ascending

    Returns:
        ArmLengthRange, all zero for an empty sequence
    """
    n = len(sorted_values)
    if n == 0:
        return ArmLengthRange()

    return ArmLengthRange(
        lower_quartile=float(sorted_values[math.floor(n * 0.25)]),
        median=float(sorted_values[math.floor(n * 0.5)]),
        upper_quartile=float(sorted_values[math.floor(n * 0.75)]),
    )


def sample_standard_deviation(values: Sequence[float]) -> float:
    """
    Sample standard deviation (divisor n - 1), 0.0 for fewer than 2 values.

    Examples:
        >>> sample_standard_deviation([1, 2, 3])
        1.0
    """
    n = len(values)
    if n < 2:
        return 0.0

    mean = math.fsum(values) / n
    return math.sqrt(math.fsum((v - mean) ** 2 for v in values) / (n - 1))


def tukey_fences(sorted_values: Sequence[float]) -> tuple[float, float]:
    """(q1 - 1.5 * IQR, q3 + 1.5 * IQR) over interpolated, unrounded quartiles."""
    q1 = interpolated_percentile(sorted_values, 25)
    q3 = interpolated_percentile(sorted_values, 75)
    iqr = q3 - q1
    return q1 - 1.5 * iqr, q3 + 1.5 * iqr


# =============================================================================
# RANGE
# =============================================================================


def compute_range(values: Iterable[float]) -> StatisticalRange:
    """
    Descriptive range of a PLI set.

    Args:
        values: PLI values in any order

    Returns:
        StatisticalRange with min/q1/median/q3/max/mean, the interquartile
        range (q3 - q1 from unrounded quartiles), the sample standard
        deviation, the Tukey fences and the 35th/65th percentile band, all
        rounded to 2 decimals; all zero for an empty input

    Raises:
        InputValidationError: If any value is not a finite number

    Examples:
        >>> r = compute_range([10, 12, 14, 16, 18, 20])
        >>> (r.q1, r.median, r.q3, r.interquartile_range)
        (12.5, 15.0, 17.5, 5.0)
    """
    checked = validate_numbers(values, "values")
    if not checked:
        return StatisticalRange()

    ordered = sorted(checked)
    n = len(ordered)

    q1 = interpolated_percentile(ordered, 25)
    median = interpolated_percentile(ordered, 50)
    q3 = interpolated_percentile(ordered, 75)
    # A float average of equal values can land one ulp outside them
    mean = clamp(math.fsum(ordered) / n, ordered[0], ordered[-1])
    lower_fence, upper_fence = tukey_fences(ordered)

    def _r(value: float) -> float:
        return round_half_away_from_zero(value, REPORTING_DECIMALS)

    result = StatisticalRange(
        count=n,
        min=_r(ordered[0]),
        q1=_r(q1),
        median=_r(median),
        q3=_r(q3),
        max=_r(ordered[-1]),
        mean=_r(mean),
        interquartile_range=_r(q3 - q1),
        standard_deviation=_r(sample_standard_deviation(ordered)),
        lower_fence=_r(lower_fence),
        upper_fence=_r(upper_fence),
        percentile_35=_r(interpolated_percentile(ordered, 35)),
        percentile_65=_r(interpolated_percentile(ordered, 65)),
    )
    logger.debug(
        "range n=%d min=%.2f q1=%.2f median=%.2f q3=%.2f max=%.2f sd=%.2f",
        n, result.min, result.q1, result.median, result.q3, result.max,
        result.standard_deviation,
    )
    return result


def percentile_rank(value: float, values: Iterable[float]) -> float:
    """
    Share of values less than or equal to value, in percent (2 decimals).

    Args:
        value: Value to position
        values: Reference set

    Returns:
        Percentile rank in [0, 100], 0.0 for an empty reference set

    Raises:
        InputValidationError: If value or any reference value is not a finite number

    Examples:
        >>> percentile_rank(14, [10, 12, 14, 16, 18, 20])
        50.0
    """
    target = validate_number(value, "value")
    checked = validate_numbers(values, "values")
    if not checked:
        return 0.0

    at_or_below = sum(1 for v in checked if v <= target)
    return round_half_away_from_zero(at_or_below / len(checked) * 100, REPORTING_DECIMALS)


def detect_outliers(values: Iterable[float]) -> list[tuple[float, bool]]:
    """
    Flag values outside the Tukey fences q1 - 1.5 * IQR and q3 + 1.5 * IQR.

    Quartiles are interpolated and unrounded.

    Args:
        values: PLI values

    Returns:
        (value, is_outlier) pairs in input order

    Raises:
        InputValidationError: If any value is not a finite number
    """
    checked = validate_numbers(values, "values")
    if not checked:
        return []

    lower_fence, upper_fence = tukey_fences(sorted(checked))

    return [(v, v < lower_fence or v > upper_fence) for v in checked]
