"""Numeric field statistics.

Descriptive, spread and distribution-shape statistics for numeric columns:
- Percentiles by linear interpolation (R-7, position ``(n - 1) * p``)
- Mode as every value sharing the maximal frequency (none when all distinct)
- Sample variance (``n - 1``) and standard deviation
- Adjusted sample skewness and excess kurtosis
- Outliers outside the 1.5 x IQR fences

Degenerate statistics (too few values, zero spread, floating-point overflow)
are reported as None, never NaN.
"""

from __future__ import annotations

import math
from collections import Counter
from collections.abc import Sequence

import numpy as np

from fieldlens.config import NUMERIC_THRESHOLD
from fieldlens.models.numeric import (
    DescriptiveStats,
    DistributionShape,
    NumericQualityCounters,
    NumericStats,
    OutlierSummary,
    Percentiles,
    Quartiles,
    SpreadStats,
)
from fieldlens.models.values import to_cells

OUTLIER_IQR_FACTOR = 1.5
_MAX_OUTLIERS = 100


def percentile(sorted_values: Sequence[float], p: float) -> float | None:
    """Linear-interpolation percentile of an ascending sequence.

    Args:
        sorted_values: Values sorted ascending.
        p: Percentile as a fraction in [0, 1].

    Returns:
        The interpolated value, or None for an empty sequence.

    Examples:
        >>> percentile([1.0, 2.0, 3.0, 4.0], 0.5)
        2.5
        >>> percentile([5.0], 0.9)
        5.0
    """
    n = len(sorted_values)
    if n == 0:
        return None

    index = p * (n - 1)
    lower = math.floor(index)
    upper = math.ceil(index)
    a = float(sorted_values[lower])
    b = float(sorted_values[upper])
    if a == b:
        return a
    # clamped so rounding never passes b
    return min(b, a + (b - a) * (index - lower))


def mode(values: Sequence[float]) -> list[float]:
    """All values with the maximal frequency, ascending.

    Returns an empty list when no value repeats.
    """
    if not values:
        return []
    frequency = Counter(values)
    max_freq = max(frequency.values())
    if max_freq == 1:
        return []
    return sorted(float(v) for v, count in frequency.items() if count == max_freq)


def _finite(value: float) -> float | None:
    value = float(value)
    return value if math.isfinite(value) else None


def sample_variance(values: np.ndarray, mean: float) -> float | None:
    """Unbiased sample variance; 0 for fewer than two values, None on overflow."""
    n = values.size
    if n < 2:
        return 0.0
    with np.errstate(over="ignore", invalid="ignore"):
        return _finite(np.sum((values - mean) ** 2) / (n - 1))


def skewness(values: np.ndarray, mean: float | None, std_dev: float | None) -> float | None:
    """Adjusted Fisher-Pearson skewness, ``n / ((n-1)(n-2)) * sum(z**3)``."""
    n = values.size
    if n < 3 or mean is None or not std_dev:
        return None
    z = (values - mean) / std_dev
    return _finite(n / ((n - 1) * (n - 2)) * np.sum(z**3))


def kurtosis(values: np.ndarray, mean: float | None, std_dev: float | None) -> float | None:
    """Sample excess kurtosis with the standard small-sample correction."""
    n = values.size
    if n < 4 or mean is None or not std_dev:
        return None
    z = (values - mean) / std_dev
    fourth = float(np.sum(z**4))
    return _finite(
        (n * (n + 1)) / ((n - 1) * (n - 2) * (n - 3)) * fourth
        - (3 * (n - 1) ** 2) / ((n - 2) * (n - 3))
    )


def detect_outliers(sorted_values: Sequence[float], q1: float, q3: float) -> OutlierSummary:
    """Values below ``q1 - 1.5*IQR`` or above ``q3 + 1.5*IQR``."""
    if not sorted_values:
        return OutlierSummary()
    iqr = q3 - q1
    lower_bound = q1 - OUTLIER_IQR_FACTOR * iqr
    upper_bound = q3 + OUTLIER_IQR_FACTOR * iqr
    outliers = [v for v in sorted_values if v < lower_bound or v > upper_bound]
    return OutlierSummary(
        count=len(outliers),
        percentage=round(len(outliers) / len(sorted_values) * 100, 2),
        values=outliers[:_MAX_OUTLIERS],
        lower_bound=lower_bound,
        upper_bound=upper_bound,
    )


def compute_numeric_stats(
    values: Sequence[object], threshold: float = NUMERIC_THRESHOLD
) -> NumericStats:
    """Compute statistics for a numeric column.

    Absent and empty values count as nulls; other values that do not convert
    to a finite number count as non-numeric. Both are excluded from the
    statistics.

    Args:
        values: Column values (raw or CellValue).
        threshold: Minimum numeric share of non-null values.

    Returns:
        NumericStats. ``is_numeric`` is False, with counters only, when no
        numeric values exist or their share is below ``threshold``.
    """
    cells = to_cells(values)
    numbers: list[float] = []
    null_count = 0
    non_numeric_count = 0

    for cell in cells:
        if cell.is_null:
            null_count += 1
            continue
        number = cell.number
        if number is None:
            non_numeric_count += 1
        else:
            numbers.append(number)

    counters = NumericQualityCounters(
        null_count=null_count,
        non_numeric_count=non_numeric_count,
        total_rows=len(cells),
    )
    total_non_null = len(numbers) + non_numeric_count
    if not numbers or len(numbers) / total_non_null < threshold:
        return NumericStats(is_numeric=False, numeric_count=len(numbers), quality=counters)

    arr = np.asarray(numbers, dtype=float)
    sorted_values = sorted(numbers)
    count = len(numbers)

    with np.errstate(over="ignore", invalid="ignore"):
        total = _finite(np.sum(arr))
        mean = _finite(np.mean(arr))
    median = percentile(sorted_values, 0.5)
    q1 = percentile(sorted_values, 0.25)
    q3 = percentile(sorted_values, 0.75)

    if sorted_values[0] == sorted_values[-1]:
        # zero spread: exact mean, no shape statistics
        mean = float(sorted_values[0])
        variance: float | None = 0.0
    elif mean is None:
        variance = None
    else:
        variance = sample_variance(arr, mean)
    std_dev = math.sqrt(variance) if variance is not None else None

    descriptive = DescriptiveStats(
        min=sorted_values[0],
        max=sorted_values[-1],
        mean=mean,
        median=median,
        mode=mode(numbers),
        sum=total,
        count=count,
    )
    spread = SpreadStats(
        range=sorted_values[-1] - sorted_values[0],
        variance=variance,
        std_dev=std_dev,
        iqr=q3 - q1,
    )
    distribution = DistributionShape(
        quartiles=Quartiles(q1=q1, q2=median, q3=q3),
        percentiles=Percentiles(
            p10=percentile(sorted_values, 0.1),
            p25=q1,
            p50=median,
            p75=q3,
            p90=percentile(sorted_values, 0.9),
        ),
        skewness=skewness(arr, mean, std_dev),
        kurtosis=kurtosis(arr, mean, std_dev),
    )

    return NumericStats(
        is_numeric=True,
        numeric_count=count,
        descriptive=descriptive,
        spread=spread,
        distribution=distribution,
        outliers=detect_outliers(sorted_values, q1, q3),
        quality=counters,
    )
