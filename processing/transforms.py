"""
Data Transforms - Smoothing and rounding of daily values.

All math is done with pandas, as in the rest of the processing layer.
"""

import math
from typing import List, Sequence

import pandas as pd

from .labels import require_metric


DEFAULT_WINDOW = 7


def rolling_average(values: Sequence[float], window: int = DEFAULT_WINDOW) -> List[float]:
    """
    Causal moving average with a growing window at the start of the series.

    Point i is the mean of the trailing min(i + 1, window) values, so the
    output has the same length as the input and no leading gaps. A NaN
    input makes every window that contains it NaN.

    Args:
        values: Ordered numeric values
        window: Window size in points (positive integer)

    Returns:
        List of averaged values, same length as input
    """
    if isinstance(window, bool) or not isinstance(window, int) or window < 1:
        raise ValueError(f"window must be a positive integer, got {window!r}")

    if len(values) == 0:
        return []

    series = pd.Series(list(values), dtype='float64')
    means = series.rolling(window=window, min_periods=1).mean()

    # pandas skips NaN inside a window; a plain sum would not
    gaps = series.isna().astype('float64').rolling(window=window, min_periods=1).max()
    return means.mask(gaps > 0).tolist()


def round_half_up(value: float, digits: int = 0) -> float:
    """Round halves toward positive infinity (Python's round() is banker's)."""
    if not math.isfinite(value):
        return value
    scale = 10 ** digits
    return math.floor(value * scale + 0.5) / scale


def round_smoothed(values: Sequence[float], metric_id: str) -> List[float]:
    """
    Round a smoothed series for display.

    Percentage metrics (vaccine coverage) keep one decimal place,
    everything else is rounded to whole numbers.
    """
    info = require_metric(metric_id)
    if info.is_percentage:
        return [round_half_up(v, 1) for v in values]
    return [round_half_up(v) for v in values]
