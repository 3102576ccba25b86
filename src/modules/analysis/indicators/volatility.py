"""Volatility indicators: True Range, ATR.

Pure functions operating on pandas Series. No state or side effects.
"""

import pandas as pd

from src.modules.analysis.errors import InsufficientDataError
from src.modules.analysis.indicators.trend import check_period, wilder


def true_range(high: pd.Series, low: pd.Series, close: pd.Series) -> pd.Series:
    """Calculate True Range for every bar after the first.

    Args:
        high: High price series.
        low: Low price series.
        close: Closing price series.

    Returns:
        True range series, one shorter than the inputs.

    Raises:
        ValueError: If series lengths differ.
    """
    if not (len(high) == len(low) == len(close)):
        raise ValueError("All price series must have the same length")

    prev_close = close.shift(1)
    tr1 = high - low
    tr2 = (high - prev_close).abs()
    tr3 = (low - prev_close).abs()
    tr = pd.concat([tr1, tr2, tr3], axis=1).max(axis=1)

    return tr.iloc[1:]


def atr(
    high: pd.Series,
    low: pd.Series,
    close: pd.Series,
    period: int = 14,
) -> float:
    """Calculate Average True Range.

    Seeded with the simple average of the first `period` true ranges,
    then Wilder-smoothed over the rest.

    Args:
        high: High price series.
        low: Low price series.
        close: Closing price series.
        period: ATR period (default 14).

    Returns:
        Latest ATR, rounded to 6 decimals. Never negative.

    Raises:
        InvalidParameterError: If period < 1.
        InsufficientDataError: If fewer than period + 1 bars.
        ValueError: If series lengths differ.
    """
    check_period("ATR", period)
    if len(close) < period + 1:
        raise InsufficientDataError("ATR", period + 1, len(close))

    tr = true_range(high.astype(float), low.astype(float), close.astype(float))

    return round(wilder(tr, period), 6)
