"""Tests for Yahoo Finance bar provider."""

from datetime import date
from unittest.mock import MagicMock, patch

import numpy as np
import pandas as pd
import pytest

from src.modules.analysis.engine import IndicatorEngine
from src.modules.analysis.errors import InsufficientDataError, NoDataError
from src.modules.data.protocols import Interval, ProviderError
from src.modules.data.providers.yahoo import YahooProvider
from src.shared.config import Config


@pytest.fixture
def provider() -> YahooProvider:
    """Create a YahooProvider instance for testing."""
    return YahooProvider()


@pytest.fixture
def config() -> Config:
    """Engine configuration with the documented defaults."""
    return Config(
        log_level="INFO",
        sr_tolerance=0.005,
        sr_lookback_periods=100,
        trendline_lookback_periods=100,
        max_trendlines=10,
        all_time_lookback_years=20,
    )


@pytest.fixture
def sample_yfinance_df() -> pd.DataFrame:
    """Sample yfinance DataFrame, deliberately out of order with a gap."""
    data = {
        "Open": [154.0, 150.0],
        "High": [158.0, 155.0],
        "Low": [153.0, 149.0],
        "Close": [157.0, np.nan],
        "Volume": [1100000, 1000000],
        "Adj Close": [157.0, 154.0],
        "Dividends": [0.0, 0.0],
    }
    index = pd.DatetimeIndex(["2024-01-03", "2024-01-02"], name="Date")
    return pd.DataFrame(data, index=index)


class TestYahooProvider:
    """Tests for YahooProvider."""

    def test_name_property(self, provider: YahooProvider) -> None:
        """Test provider name."""
        assert provider.name == "Yahoo"

    @patch("src.modules.data.providers.yahoo.yf.Ticker")
    def test_get_bars_success(
        self,
        mock_ticker_class: MagicMock,
        provider: YahooProvider,
        sample_yfinance_df: pd.DataFrame,
    ) -> None:
        """Test successful fetch is normalized to the bar schema."""
        mock_ticker = MagicMock()
        mock_ticker.history.return_value = sample_yfinance_df
        mock_ticker_class.return_value = mock_ticker

        df = provider.get_bars(
            symbol="AAPL",
            start_date=date(2024, 1, 2),
            end_date=date(2024, 1, 3),
            interval=Interval.DAILY,
        )

        assert list(df.columns) == ["open", "high", "low", "close", "volume", "adjusted_close"]
        assert df.index.is_monotonic_increasing
        assert df.index.name == "timestamp"
        assert df.iloc[0]["close"] == 0.0
        assert df.iloc[1]["close"] == 157.0

    @patch("src.modules.data.providers.yahoo.yf.Ticker")
    def test_get_bars_passes_interval_and_inclusive_end(
        self,
        mock_ticker_class: MagicMock,
        provider: YahooProvider,
        sample_yfinance_df: pd.DataFrame,
    ) -> None:
        """The interval code is forwarded and the end date made inclusive."""
        mock_ticker = MagicMock()
        mock_ticker.history.return_value = sample_yfinance_df
        mock_ticker_class.return_value = mock_ticker

        provider.get_bars("EURUSD=X", date(2024, 1, 2), date(2024, 1, 3), Interval.HOURLY)

        kwargs = mock_ticker.history.call_args.kwargs
        assert kwargs["interval"] == "1h"
        assert kwargs["start"] == "2024-01-02"
        assert kwargs["end"] == "2024-01-04"
        mock_ticker_class.assert_called_once_with("EURUSD=X")

    @patch("src.modules.data.providers.yahoo.yf.Ticker")
    def test_get_bars_drops_duplicate_timestamps(
        self,
        mock_ticker_class: MagicMock,
        provider: YahooProvider,
    ) -> None:
        """Repeated timestamps keep the first bar."""
        raw = pd.DataFrame(
            {"Open": [1.0, 2.0], "High": [1.0, 2.0], "Low": [1.0, 2.0], "Close": [1.0, 2.0], "Volume": [1, 2]},
            index=pd.DatetimeIndex(["2024-01-02", "2024-01-02"]),
        )
        mock_ticker = MagicMock()
        mock_ticker.history.return_value = raw
        mock_ticker_class.return_value = mock_ticker

        df = provider.get_bars("AAPL", date(2024, 1, 2), date(2024, 1, 2), Interval.DAILY)

        assert len(df) == 1
        assert df.iloc[0]["close"] == 1.0
        assert "adjusted_close" not in df.columns

    @patch("src.modules.data.providers.yahoo.yf.Ticker")
    def test_get_bars_empty_response(
        self,
        mock_ticker_class: MagicMock,
        provider: YahooProvider,
    ) -> None:
        """Test empty response returns a zero-row frame in the bar schema."""
        mock_ticker = MagicMock()
        mock_ticker.history.return_value = pd.DataFrame()
        mock_ticker_class.return_value = mock_ticker

        df = provider.get_bars("INVALID", date(2024, 1, 2), date(2024, 1, 3), Interval.DAILY)

        assert df.empty
        assert list(df.columns) == ["open", "high", "low", "close", "volume"]
        assert df.index.name == "timestamp"

    @patch("src.modules.data.providers.yahoo.yf.Ticker")
    def test_empty_history_reaches_engine_as_no_data(
        self,
        mock_ticker_class: MagicMock,
        provider: YahooProvider,
        config: Config,
    ) -> None:
        """An empty Yahoo history surfaces as NoDataError from the engine."""
        mock_ticker = MagicMock()
        mock_ticker.history.return_value = pd.DataFrame()
        mock_ticker_class.return_value = mock_ticker

        engine = IndicatorEngine(provider, config)

        with pytest.raises(NoDataError, match="ZZZZ"):
            engine.calculate_52_week_high_low("ZZZZ")
        with pytest.raises(InsufficientDataError, match="got 0"):
            engine.calculate_rsi("ZZZZ")

    @patch("src.modules.data.providers.yahoo.yf.Ticker")
    def test_get_bars_exception(
        self,
        mock_ticker_class: MagicMock,
        provider: YahooProvider,
    ) -> None:
        """Test generic exception raises ProviderError."""
        mock_ticker = MagicMock()
        mock_ticker.history.side_effect = Exception("Network error")
        mock_ticker_class.return_value = mock_ticker

        with pytest.raises(ProviderError) as exc_info:
            provider.get_bars("AAPL", date(2024, 1, 2), date(2024, 1, 3), Interval.DAILY)

        assert "Yahoo" in str(exc_info.value)
        assert "Network error" in str(exc_info.value)
        assert exc_info.value.symbol == "AAPL"
