"""Pivot detection: local highs and lows over a symmetric bar window.

Shared by zone clustering and trendline pairing.
"""

import numpy as np
import pandas as pd

from src.modules.analysis.types import PivotPoint

PIVOT_LEFT_BARS = 5
PIVOT_RIGHT_BARS = 5


def _pivots(
    prices: pd.Series,
    extreme: pd.Series,
) -> list[PivotPoint]:
    # Window edges compare as NaN and never match
    mask = (prices == extreme).to_numpy()
    return [
        PivotPoint(index=int(i), price=float(prices.iloc[i]), timestamp=prices.index[i])
        for i in np.flatnonzero(mask)
    ]


def find_pivot_highs(
    high: pd.Series,
    left_bars: int = PIVOT_LEFT_BARS,
    right_bars: int = PIVOT_RIGHT_BARS,
) -> list[PivotPoint]:
    """Find bars whose high is >= every high within the window around them.

    Only bars with a full window on both sides qualify. Equal neighbours do
    not disqualify a bar, so a flat top yields several adjacent pivots.

    Args:
        high: High price series.
        left_bars: Bars to the left that must not exceed the pivot.
        right_bars: Bars to the right that must not exceed the pivot.

    Returns:
        Pivot highs in bar order.
    """
    window_max = high.rolling(window=left_bars + right_bars + 1).max().shift(-right_bars)
    return _pivots(high, window_max)


def find_pivot_lows(
    low: pd.Series,
    left_bars: int = PIVOT_LEFT_BARS,
    right_bars: int = PIVOT_RIGHT_BARS,
) -> list[PivotPoint]:
    """Find bars whose low is <= every low within the window around them.

    Args:
        low: Low price series.
        left_bars: Bars to the left that must not undercut the pivot.
        right_bars: Bars to the right that must not undercut the pivot.

    Returns:
        Pivot lows in bar order.
    """
    window_min = low.rolling(window=left_bars + right_bars + 1).min().shift(-right_bars)
    return _pivots(low, window_min)


def detect_pivots(bars: pd.DataFrame) -> tuple[list[PivotPoint], list[PivotPoint]]:
    """Detect pivot highs and pivot lows of a bar sequence.

    Returns:
        (highs, lows), each in bar order.
    """
    return find_pivot_highs(bars["high"]), find_pivot_lows(bars["low"])
