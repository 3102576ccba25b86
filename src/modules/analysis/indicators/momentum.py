"""Momentum indicators: RSI.

Pure functions operating on pandas Series. No state or side effects.
"""

import pandas as pd

from src.modules.analysis.errors import InsufficientDataError
from src.modules.analysis.indicators.trend import check_period, wilder
from src.modules.analysis.types import RSISignal

OVERBOUGHT_LEVEL = 70.0
OVERSOLD_LEVEL = 30.0


def rsi(close: pd.Series, period: int = 14) -> float:
    """Calculate Relative Strength Index (Wilder's smoothing).

    Args:
        close: Closing price series.
        period: Lookback period (default 14).

    Returns:
        Latest RSI between 0 and 100, rounded to 2 decimals. 100 when the
        smoothed average loss is zero.

    Raises:
        InvalidParameterError: If period < 1.
        InsufficientDataError: If fewer than period + 1 closes.
    """
    check_period("RSI", period)
    if len(close) < period + 1:
        raise InsufficientDataError("RSI", period + 1, len(close))

    delta = close.astype(float).diff().iloc[1:]
    gains = delta.clip(lower=0.0)
    losses = (-delta).clip(lower=0.0)

    avg_gain = wilder(gains, period)
    avg_loss = wilder(losses, period)

    # No losses in the window: RSI is pinned at 100
    if avg_loss == 0:
        return 100.0

    rs = avg_gain / avg_loss
    return round(100.0 - (100.0 / (1.0 + rs)), 2)


def rsi_signal(value: float) -> RSISignal:
    """Classify an RSI value into overbought / oversold / neutral."""
    if value >= OVERBOUGHT_LEVEL:
        return RSISignal.OVERBOUGHT
    if value <= OVERSOLD_LEVEL:
        return RSISignal.OVERSOLD
    return RSISignal.NEUTRAL
