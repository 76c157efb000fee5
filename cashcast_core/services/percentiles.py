from __future__ import annotations

import math
from typing import List, Sequence

import numpy as np

from cashcast_core.domain.models import PercentileDay

PERCENTILES = (10, 25, 50, 75, 90)


def get_percentile(sorted_values: Sequence[float], percentile: float) -> float:
    """
    Linear interpolation between closest ranks on an ascending sample.
    idx = p/100 * (n - 1); a whole idx or equal neighbours return the order statistic as-is.
    """
    if len(sorted_values) == 0:
        raise ValueError("Cannot take a percentile of an empty sample")
    idx = (percentile / 100) * (len(sorted_values) - 1)
    lower = math.floor(idx)
    upper = math.ceil(idx)
    if lower == upper:
        return float(sorted_values[lower])
    low, high = sorted_values[lower], sorted_values[upper]
    if low == high:
        return float(low)
    weight = idx - lower
    return float(low * (1 - weight) + high * weight)


def _percentile_across_days(sorted_matrix: np.ndarray, percentile: float) -> np.ndarray:
    # Same arithmetic as get_percentile, applied to every day column at once.
    idx = (percentile / 100) * (sorted_matrix.shape[0] - 1)
    lower = math.floor(idx)
    upper = math.ceil(idx)
    if lower == upper:
        return sorted_matrix[lower]
    low, high = sorted_matrix[lower], sorted_matrix[upper]
    weight = idx - lower
    return np.where(low == high, low, low * (1 - weight) + high * weight)


def reduce_to_percentiles(series: Sequence[Sequence[float]]) -> List[PercentileDay]:
    """
    Per-day p10/p25/p50/p75/p90 across runs.
    The day count comes from the first series; longer series are truncated.
    """
    if len(series) == 0:
        return []

    days = len(series[0])
    short = [i for i, s in enumerate(series) if len(s) < days]
    if short:
        raise ValueError(f"Balance series {short} are shorter than the first series ({days} days)")
    if days == 0:
        return []

    matrix = np.array([list(s[:days]) for s in series], dtype=float)
    sorted_matrix = np.sort(matrix, axis=0)
    bands = {p: _percentile_across_days(sorted_matrix, p).tolist() for p in PERCENTILES}

    return [
        PercentileDay(
            day=day,
            p10=bands[10][day],
            p25=bands[25][day],
            p50=bands[50][day],
            p75=bands[75][day],
            p90=bands[90][day],
        )
        for day in range(days)
    ]
