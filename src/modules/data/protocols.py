"""Bar Provider Protocol.

Defines the single interface the indicator engine consumes: an ordered
sequence of OHLCV bars for a symbol, interval and date range.
"""

from datetime import date
from enum import Enum
from typing import Protocol

import pandas as pd


class Interval(str, Enum):
    """Bar interval, valued with the provider's interval code."""

    ONE_MINUTE = "1m"
    TWO_MINUTES = "2m"
    FIVE_MINUTES = "5m"
    FIFTEEN_MINUTES = "15m"
    THIRTY_MINUTES = "30m"
    HOURLY = "1h"
    DAILY = "1d"
    WEEKLY = "1wk"
    MONTHLY = "1mo"

    @property
    def is_intraday_minutes(self) -> bool:
        """True for sub-hour intervals."""
        return self in _MINUTE_INTERVALS


_MINUTE_INTERVALS = frozenset(
    {
        Interval.ONE_MINUTE,
        Interval.TWO_MINUTES,
        Interval.FIVE_MINUTES,
        Interval.FIFTEEN_MINUTES,
        Interval.THIRTY_MINUTES,
    }
)


class BarProvider(Protocol):
    """Protocol for bar sequence providers.

    Implementations must return bars in ascending chronological order with
    missing OHLCV fields already normalized to 0.
    """

    @property
    def name(self) -> str:
        """Provider name for logging and error messages."""
        ...

    def get_bars(
        self,
        symbol: str,
        start_date: date,
        end_date: date,
        interval: Interval,
    ) -> pd.DataFrame:
        """Fetch OHLCV bars for a symbol.

        Args:
            symbol: Asset symbol (e.g., 'AAPL', 'EURUSD=X').
            start_date: Start date (inclusive).
            end_date: End date (inclusive).
            interval: Bar interval.

        Returns:
            DataFrame with columns:
                - timestamp (index): Bar open time, ascending and unique
                - open: Opening price
                - high: High price
                - low: Low price
                - close: Closing price
                - volume: Traded volume
                - adjusted_close: Adjusted closing price (optional)

        Raises:
            ProviderError: If the provider fails to fetch data.
        """
        ...


class ProviderError(Exception):
    """Exception raised when a provider fails to fetch data."""

    def __init__(self, provider: str, symbol: str, message: str) -> None:
        """Initialize ProviderError.

        Args:
            provider: Name of the failing provider.
            symbol: Symbol that was being fetched.
            message: Error description.
        """
        self.provider = provider
        self.symbol = symbol
        super().__init__(f"[{provider}] Failed to fetch {symbol}: {message}")
