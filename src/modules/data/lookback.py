"""Lookback heuristic: how many calendar days of bars to request.

A request window is `periods x multiplier` calendar days, scaled by the
interval. The multiplier is slack for weekends, holidays and partial
sessions.
"""

import math

from src.modules.data.protocols import Interval

# Stock-market session length (NYSE). 24h markets get more bars than needed.
TRADING_HOURS_PER_DAY = 6.5

# Minute bars are only served for a short recent window.
MAX_INTRADAY_DAYS = 7

# Fixed windows for floor pivots, which only need the last two bars.
PIVOT_WINDOW_DAYS: dict[Interval, int] = {
    Interval.HOURLY: 5,
    Interval.DAILY: 7,
    Interval.WEEKLY: 21,
    Interval.MONTHLY: 70,
}

WEEK_52_DAYS = 364


def days_needed(interval: Interval, periods: int, multiplier: int = 3) -> int:
    """Calendar days to request so that `periods` bars are available.

    Args:
        interval: Bar interval.
        periods: Number of bars the indicator needs.
        multiplier: Safety factor over the bare requirement.

    Returns:
        Number of calendar days to look back from today.
    """
    if interval.is_intraday_minutes:
        return min(MAX_INTRADAY_DAYS, periods * multiplier)
    if interval is Interval.HOURLY:
        return math.ceil((periods / TRADING_HOURS_PER_DAY) * multiplier)
    if interval is Interval.WEEKLY:
        return periods * 7 * multiplier
    if interval is Interval.MONTHLY:
        return periods * 30 * multiplier
    return periods * multiplier


def pivot_window_days(interval: Interval) -> int:
    """Calendar days needed to cover the previous completed bar."""
    if interval.is_intraday_minutes:
        return MAX_INTRADAY_DAYS
    return PIVOT_WINDOW_DAYS.get(interval, 7)
