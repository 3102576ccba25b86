"""Price level indicators: Floor Pivot Points, High/Low extremes.

Pure functions operating on pandas Series. No state or side effects.
"""

import pandas as pd

from src.modules.analysis.errors import InsufficientDataError, NoDataError
from src.modules.analysis.types import FloorPivotLevels, PriceExtremes


def floor_pivot_levels(
    high: pd.Series,
    low: pd.Series,
    close: pd.Series,
) -> FloorPivotLevels:
    """Calculate standard floor-trader pivot levels.

    Uses the second-to-last bar: the last one may still be in progress.

    Args:
        high: High price series.
        low: Low price series.
        close: Closing price series.

    Returns:
        PP, R1-R3, S1-S3 and the source bar's H/L/C, rounded to 6 decimals.

    Raises:
        InsufficientDataError: If fewer than 2 bars.
    """
    if len(close) < 2:
        raise InsufficientDataError("Pivot Points", 2, len(close))

    h = float(high.iloc[-2])
    l = float(low.iloc[-2])  # noqa: E741
    c = float(close.iloc[-2])

    pp = (h + l + c) / 3

    return FloorPivotLevels(
        pivot_point=round(pp, 6),
        r1=round(2 * pp - l, 6),
        r2=round(pp + (h - l), 6),
        r3=round(h + 2 * (pp - l), 6),
        s1=round(2 * pp - h, 6),
        s2=round(pp - (h - l), 6),
        s3=round(l - 2 * (h - pp), 6),
        previous_high=round(h, 6),
        previous_low=round(l, 6),
        previous_close=round(c, 6),
    )


def price_extremes(high: pd.Series, low: pd.Series) -> PriceExtremes:
    """Find the highest high and lowest low of a bar sequence.

    Ties resolve to the earliest bar: a later bar only replaces the
    extreme when it strictly exceeds it.

    Args:
        high: High price series indexed by timestamp.
        low: Low price series indexed by timestamp.

    Returns:
        Extreme values with the timestamp of their first occurrence.

    Raises:
        NoDataError: If the series are empty.
    """
    if high.empty or low.empty:
        raise NoDataError()

    # idxmax/idxmin return the first label holding the extreme
    high_date = high.idxmax()
    low_date = low.idxmin()

    return PriceExtremes(
        high=float(high.loc[high_date]),
        high_date=high_date,
        low=float(low.loc[low_date]),
        low_date=low_date,
    )
