"""Trend indicators and smoothing primitives: EMA, Wilder, MACD.

Pure functions operating on pandas Series. No state or side effects.
Each returns the latest value of the indicator, not the full history.
"""

from collections.abc import Sequence

import pandas as pd

from src.modules.analysis.errors import InsufficientDataError, InvalidParameterError


def check_period(name: str, period: int) -> None:
    """Reject periods below 1.

    Raises:
        InvalidParameterError: If period < 1.
    """
    if period < 1:
        raise InvalidParameterError(f"{name} period must be >= 1, got {period}")


def _seeded(values: pd.Series, period: int) -> pd.Series:
    """Replace the first `period` values with their simple average."""
    seed = pd.Series([values.iloc[:period].mean()])
    return pd.concat([seed, values.iloc[period:]], ignore_index=True)


def ema(values: pd.Series | Sequence[float], period: int) -> float:
    """Calculate the Exponential Moving Average of a series.

    Seeded with the simple average of the first `period` values, then
    smoothed with multiplier 2 / (period + 1).

    Args:
        values: Input series, oldest first.
        period: EMA period.

    Returns:
        EMA at the last value of the series.

    Raises:
        InvalidParameterError: If period < 1.
        InsufficientDataError: If the series is shorter than `period`.
    """
    check_period("EMA", period)
    series = pd.Series(values, dtype=float)
    if len(series) < period:
        raise InsufficientDataError("EMA", period, len(series))

    smoothed = _seeded(series, period).ewm(span=period, adjust=False).mean()
    return float(smoothed.iloc[-1])


def wilder(values: pd.Series, period: int) -> float:
    """Apply Wilder smoothing: avg = (avg * (period - 1) + x) / period.

    Seeded with the simple average of the first `period` values.

    Args:
        values: Input series, oldest first (length >= period).
        period: Smoothing period.

    Returns:
        Smoothed value at the end of the series.
    """
    smoothed = _seeded(values.astype(float), period).ewm(
        alpha=1.0 / period, adjust=False
    ).mean()
    return float(smoothed.iloc[-1])


def macd_series(close: pd.Series, fast: int, slow: int) -> pd.Series:
    """MACD line recomputed at every bar from `slow` through the end.

    Each point runs the EMA primitive over the prefix ending at that bar,
    so the cost is quadratic in series length.
    """
    values = [
        ema(close.iloc[:end], fast) - ema(close.iloc[:end], slow)
        for end in range(slow, len(close) + 1)
    ]
    return pd.Series(values, dtype=float)


def macd(
    close: pd.Series,
    fast: int = 12,
    slow: int = 26,
    signal: int = 9,
) -> tuple[float, float, float]:
    """Calculate MACD line, signal line and histogram.

    Formula: MACD = EMA(fast) - EMA(slow); Signal = EMA(MACD, signal);
    Histogram = MACD - Signal.

    Args:
        close: Closing price series.
        fast: Fast EMA period (default 12).
        slow: Slow EMA period (default 26).
        signal: Signal line EMA period (default 9).

    Returns:
        (macd, signal, histogram), each rounded to 6 decimals.

    Raises:
        InvalidParameterError: If fast >= slow or any period < 1.
        InsufficientDataError: If fewer than slow + signal closes.
    """
    for name, period in (("Fast", fast), ("Slow", slow), ("Signal", signal)):
        check_period(name, period)
    if fast >= slow:
        raise InvalidParameterError(
            f"Fast period must be less than slow period, got fast={fast}, slow={slow}"
        )

    close = pd.Series(close, dtype=float)
    required = slow + signal
    if len(close) < required:
        raise InsufficientDataError("MACD", required, len(close))

    macd_line = ema(close, fast) - ema(close, slow)
    signal_line = ema(macd_series(close, fast, slow), signal)
    histogram = macd_line - signal_line

    return round(macd_line, 6), round(signal_line, 6), round(histogram, 6)
