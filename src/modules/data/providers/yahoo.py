"""Yahoo Finance Bar Provider.

Reference bar source using the yfinance library (unofficial scraper).
"""

from datetime import date

import pandas as pd
import yfinance as yf

from src.modules.data.protocols import Interval, ProviderError
from src.shared.logger import get_logger

logger = get_logger(__name__)

BAR_COLUMNS = ["open", "high", "low", "close", "volume"]


class YahooProvider:
    """Yahoo Finance bar provider.

    Uses yfinance library which scrapes Yahoo Finance.
    Be aware: may be rate-limited or blocked with heavy usage.
    """

    @property
    def name(self) -> str:
        """Provider name."""
        return "Yahoo"

    def get_bars(
        self,
        symbol: str,
        start_date: date,
        end_date: date,
        interval: Interval,
    ) -> pd.DataFrame:
        """Fetch OHLCV bars from Yahoo Finance.

        Args:
            symbol: Yahoo symbol (e.g., 'AAPL', 'EURUSD=X', 'BTC-USD').
            start_date: Start date (inclusive).
            end_date: End date (inclusive).
            interval: Bar interval.

        Returns:
            Normalized DataFrame with OHLCV data. Empty (with the bar
            columns) when Yahoo has no bars in the range.

        Raises:
            ProviderError: If Yahoo Finance fails.
        """
        logger.info(
            "Fetching bars from Yahoo Finance",
            extra={
                "symbol": symbol,
                "start": str(start_date),
                "end": str(end_date),
                "interval": interval.value,
            },
        )

        try:
            # yfinance end_date is exclusive, so add 1 day
            end_date_exclusive = pd.Timestamp(end_date) + pd.Timedelta(days=1)

            ticker = yf.Ticker(symbol)
            df = ticker.history(
                start=start_date.isoformat(),
                end=end_date_exclusive.strftime("%Y-%m-%d"),
                interval=interval.value,
                auto_adjust=False,
            )

            if df.empty:
                logger.warning("No data returned from Yahoo Finance", extra={"symbol": symbol})
                return self._empty()

            return self._normalize(df)

        except Exception as e:
            raise ProviderError(self.name, symbol, str(e)) from e

    def _empty(self) -> pd.DataFrame:
        """Zero-row frame in the bar schema."""
        index = pd.DatetimeIndex([], name="timestamp")
        return pd.DataFrame(columns=BAR_COLUMNS, index=index, dtype=float)

    def _normalize(self, df: pd.DataFrame) -> pd.DataFrame:
        """Normalize yfinance response to the bar schema.

        Args:
            df: Raw yfinance DataFrame.

        Returns:
            Ascending, de-duplicated DataFrame with missing values set to 0.
        """
        df = df.rename(
            columns={
                "Open": "open",
                "High": "high",
                "Low": "low",
                "Close": "close",
                "Volume": "volume",
                "Adj Close": "adjusted_close",
            }
        )

        df.index.name = "timestamp"

        for col in BAR_COLUMNS:
            if col not in df.columns:
                df[col] = 0.0

        columns = BAR_COLUMNS + (["adjusted_close"] if "adjusted_close" in df.columns else [])
        df = df[columns].astype(float).fillna(0.0)

        df = df[~df.index.duplicated(keep="first")]
        return df.sort_index()
