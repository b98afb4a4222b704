"""Tests for the market overview."""

import pytest

from signal_core.analysis import analyze_market
from signal_core.indicators import macd, rsi
from signal_core.models import PriceSeries, Trend


class TestAnalyzeMarket:
    """Tests for analyze_market."""

    def test_uptrend_is_bullish(self):
        """Price above both SMAs with SMA20 above SMA50."""
        series = PriceSeries(closes=[float(i) for i in range(100, 160)])
        analysis = analyze_market(series)

        assert analysis.trend == Trend.BULLISH
        assert analysis.strength == pytest.approx(0.7)

    def test_downtrend_is_bearish(self):
        """Mirror of the uptrend case."""
        series = PriceSeries(closes=[float(i) for i in range(200, 140, -1)])
        analysis = analyze_market(series)

        assert analysis.trend == Trend.BEARISH
        assert analysis.strength == pytest.approx(0.7)

    def test_short_series_is_sideways(self):
        """Fewer than 50 bars never counts as trending."""
        series = PriceSeries(closes=[float(i) for i in range(100, 140)])
        analysis = analyze_market(series)

        assert analysis.trend == Trend.SIDEWAYS
        assert analysis.strength == pytest.approx(0.3)

    def test_flat_series(self):
        """No movement: sideways, zero volatility, neutral RSI."""
        series = PriceSeries(closes=[100.0] * 60)
        analysis = analyze_market(series)

        assert analysis.trend == Trend.SIDEWAYS
        assert analysis.volatility == 0.0
        assert analysis.rsi == 50

    def test_volatility_is_mean_abs_percent_change(self):
        """Volatility averages absolute percent moves."""
        series = PriceSeries(closes=[100.0, 110.0, 99.0])
        analysis = analyze_market(series)

        # |+10%| and |-10%| averaged
        assert analysis.volatility == pytest.approx(10.0)

    def test_zero_prices_do_not_divide(self):
        """Zero previous closes are skipped."""
        series = PriceSeries(closes=[0.0, 0.0, 1.0])
        assert analyze_market(series).volatility == 0.0

    def test_volume_and_indicators(self):
        """Volume is the sum; RSI and MACD come from the indicator layer."""
        closes = [float(i % 7 + 100) for i in range(40)]
        series = PriceSeries(closes=closes, volumes=[2.0] * 40)
        analysis = analyze_market(series)

        assert analysis.volume == pytest.approx(80.0)
        assert analysis.rsi == pytest.approx(rsi(closes, 14).value)
        assert analysis.macd == macd(closes)

    def test_empty_series(self):
        """Empty input gives a neutral snapshot."""
        analysis = analyze_market(PriceSeries(closes=[]))

        assert analysis.trend == Trend.SIDEWAYS
        assert analysis.volume == 0.0
        assert analysis.volatility == 0.0
