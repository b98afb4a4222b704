"""Decision rules, confidences and levels of each computed strategy.

Every case is built by hand so the expected action, confidence and
stop/target follow directly from the strategy's thresholds.
"""

from datetime import datetime, timezone

import pytest

from signal_core.indicators import bollinger_bands
from signal_core.models import Action, PriceSeries, TradeSignal
from signal_core.strategy import get_strategy

AS_OF = datetime(2024, 1, 1, tzinfo=timezone.utc)

# RSI for 13 equal moves one way and 1 the other way
RSI_13_TO_1_HIGH = 100 - 100 / 14
RSI_13_TO_1_STRENGTH = (RSI_13_TO_1_HIGH - 70) / 30


def _evaluate(
    name: str,
    closes,
    highs=None,
    lows=None,
    volumes=None,
    spread: float | None = None,
) -> TradeSignal:
    """Evaluate one catalog strategy on hand-built arrays."""
    closes = [float(c) for c in closes]
    if spread is not None:
        highs = [c + spread for c in closes]
        lows = [c - spread for c in closes]
    series = PriceSeries(
        closes=closes,
        highs=highs or (),
        lows=lows or (),
        volumes=volumes or (),
        as_of=AS_OF,
    )
    return get_strategy(name).evaluate(series, "BTCUSDT")


UP_60 = list(range(100, 160))  # last close 159
DOWN_60 = list(range(200, 140, -1))  # last close 141


# ── Momentum ────────────────────────────────────────────────────────────────


class TestMultiTimeframeRSI:
    """Only RSI(14) and the SMA20 distance can vote; RSI(5) and RSI(21) see too few bars."""

    def test_oversold_rsi14_alone_buys(self):
        """14 straight losses: RSI(14) = 0, strength 1, confidence 1/4."""
        closes = [100.0] * 7 + [100 - 0.125 * i for i in range(1, 15)]
        signal = _evaluate("Multi-Timeframe RSI", closes)

        assert signal.action == Action.BUY
        assert signal.confidence == pytest.approx(0.25)
        assert signal.reason == "Multi-timeframe RSI: 1B/0S signals"
        assert signal.stop_loss == pytest.approx(98.25 * 0.98)
        assert signal.take_profit == pytest.approx(98.25 * 1.04)

    def test_overbought_rsi14_alone_sells(self):
        """13 gains and 1 loss near the SMA20: one SELL vote."""
        closes = [100.0] * 7 + [100 + 0.125 * i for i in range(1, 14)] + [101.5]
        signal = _evaluate("Multi-Timeframe RSI", closes)

        assert signal.action == Action.SELL
        assert signal.confidence == pytest.approx(RSI_13_TO_1_STRENGTH / 4)
        assert signal.reason == "Multi-timeframe RSI: 0B/1S signals"
        assert signal.stop_loss == pytest.approx(101.5 * 1.02)
        assert signal.take_profit == pytest.approx(101.5 * 0.96)

    def test_short_and_long_windows_stay_neutral(self):
        """A drop below SMA20 with RSI(14) oversold is a 1/1 tie, so HOLD."""
        closes = [100.0] * 20 + [97.0]
        signal = _evaluate("Multi-Timeframe RSI", closes)

        assert signal.action == Action.HOLD
        assert signal.confidence == 0
        assert signal.reason == "Multi-timeframe RSI: 1B/1S signals"


class TestADXMomentum:
    """Change versus the close four bars back must exceed 2%."""

    def test_rise_buys(self):
        """A 4% rise gives confidence min(0.04 * 10, 0.8)."""
        signal = _evaluate("ADX Momentum", [100.0] * 10 + [100, 101, 102, 103, 104])

        assert signal.action == Action.BUY
        assert signal.confidence == pytest.approx(0.4)
        assert signal.stop_loss == pytest.approx(104 * 0.98)
        assert signal.take_profit == pytest.approx(104 * 1.05)
        assert signal.reason == "ADX Momentum: UP trend with 4.0% volatility"

    def test_fall_sells(self):
        """A 4% fall sells with the mirrored levels."""
        signal = _evaluate("ADX Momentum", [100.0] * 10 + [100, 99, 98, 97, 96])

        assert signal.action == Action.SELL
        assert signal.confidence == pytest.approx(0.4)
        assert signal.stop_loss == pytest.approx(96 * 1.02)
        assert signal.take_profit == pytest.approx(96 * 0.95)

    def test_exactly_two_percent_holds(self):
        """The threshold is strict."""
        signal = _evaluate("ADX Momentum", [100.0] * 14 + [102.0])
        assert signal.action == Action.HOLD

    def test_confidence_cap(self):
        """A 20% jump is capped at 0.8."""
        signal = _evaluate("ADX Momentum", [100.0] * 14 + [120.0])
        assert signal.confidence == pytest.approx(0.8)


class TestRSIDivergence:
    """Oversold RSI with a bounce, or overbought RSI with a pullback."""

    def test_oversold_bounce_buys(self):
        """13 losses then a +5 bounce: RSI 27.8 and price above the close 4 bars back."""
        closes = [200.0 - i for i in range(14)] + [192.0]
        signal = _evaluate("RSI Divergence", closes)

        assert signal.action == Action.BUY
        assert signal.confidence == pytest.approx(0.7)
        assert signal.reason == "RSI Divergence: 27.8"
        assert signal.stop_loss == pytest.approx(192 * 0.98)
        assert signal.take_profit == pytest.approx(192 * 1.03)

    def test_overbought_pullback_sells(self):
        """13 gains then a -5 pullback: RSI 72.2 and price below the close 4 bars back."""
        closes = [100.0 + i for i in range(14)] + [108.0]
        signal = _evaluate("RSI Divergence", closes)

        assert signal.action == Action.SELL
        assert signal.reason == "RSI Divergence: 72.2"
        assert signal.stop_loss == pytest.approx(108 * 1.02)
        assert signal.take_profit == pytest.approx(108 * 0.97)

    def test_oversold_still_falling_holds(self):
        """Oversold alone is not enough."""
        closes = [200.0 - i for i in range(20)]
        closes[-8] += 1.5  # one small uptick inside the window, RSI ~3.3
        signal = _evaluate("RSI Divergence", closes)

        assert signal.action == Action.HOLD
        assert signal.reason == "RSI Divergence: 3.3"


class TestMACDHistogram:
    """The signal line tracks the price level, so the histogram sits near -price."""

    def test_uptrend_sells(self):
        """Histogram far below half the signal line; confidence capped at 0.8."""
        signal = _evaluate("MACD Histogram", UP_60)

        assert signal.action == Action.SELL
        assert signal.confidence == pytest.approx(0.8)
        assert signal.reason == "MACD Histogram: Bearish momentum"
        assert signal.stop_loss == pytest.approx(159 * 1.02)
        assert signal.take_profit == pytest.approx(159 * 0.96)

    def test_positive_prices_never_buy(self):
        """A positive histogram needs the MACD line above the price level."""
        for closes in (UP_60, DOWN_60, [100.0, 130.0] * 20):
            assert _evaluate("MACD Histogram", closes).action != Action.BUY


class TestOscillatorThresholds:
    """Stochastic 20/80, Williams %R -80/-20, CCI +/-100."""

    HIGHS = [110.0] * 14
    LOWS = [90.0] * 14

    def test_stochastic_buy(self):
        """%K = 10 buys with 1% / 3% levels."""
        signal = _evaluate("Stochastic Oscillator", [100.0] * 13 + [92.0], self.HIGHS, self.LOWS)

        assert signal.action == Action.BUY
        assert signal.confidence == pytest.approx(0.7)
        assert signal.reason == "Stochastic: 10.0"
        assert signal.stop_loss == pytest.approx(92 * 0.99)
        assert signal.take_profit == pytest.approx(92 * 1.03)

    def test_stochastic_sell(self):
        """%K = 90 sells."""
        signal = _evaluate("Stochastic Oscillator", [100.0] * 13 + [108.0], self.HIGHS, self.LOWS)

        assert signal.action == Action.SELL
        assert signal.stop_loss == pytest.approx(108 * 1.01)
        assert signal.take_profit == pytest.approx(108 * 0.97)

    def test_williams_r_buy(self):
        """%R = -90 buys."""
        signal = _evaluate("Williams %R", [100.0] * 13 + [92.0], self.HIGHS, self.LOWS)

        assert signal.action == Action.BUY
        assert signal.confidence == pytest.approx(0.7)
        assert signal.reason == "Williams %R: -90.0"
        assert signal.stop_loss == pytest.approx(92 * 0.99)

    def test_williams_r_sell(self):
        """%R = -10 sells."""
        signal = _evaluate("Williams %R", [100.0] * 13 + [108.0], self.HIGHS, self.LOWS)

        assert signal.action == Action.SELL
        assert signal.take_profit == pytest.approx(108 * 0.97)

    def test_cci_buy(self):
        """A steady 20-bar decline puts CCI at -126.7."""
        signal = _evaluate("CCI Strategy", range(120, 100, -1))

        assert signal.action == Action.BUY
        assert signal.confidence == pytest.approx(0.7)
        assert signal.reason == "CCI: -126.7"
        assert signal.stop_loss == pytest.approx(101 * 0.99)
        assert signal.take_profit == pytest.approx(101 * 1.03)

    def test_cci_sell(self):
        """A steady 20-bar rise puts CCI at +126.7."""
        signal = _evaluate("CCI Strategy", range(100, 120))

        assert signal.action == Action.SELL
        assert signal.reason == "CCI: 126.7"
        assert signal.stop_loss == pytest.approx(119 * 1.01)


# ── Trend ───────────────────────────────────────────────────────────────────


class TestTrendFollowingMACD:
    """MACD vote (0.3 cap) plus EMA9/EMA21 (0.2) and price/EMA21 (0.1), divided by 3."""

    def test_uptrend_buys_on_ema_votes(self):
        """MACD votes SELL but both EMA votes BUY: 2B/1S, confidence 0.6 / 3."""
        signal = _evaluate("Trend Following MACD", UP_60)

        assert signal.action == Action.BUY
        assert signal.confidence == pytest.approx(0.2)
        assert signal.reason == "Trend Following: MACD Bearish, EMA Bull"
        assert signal.stop_loss == pytest.approx(159 * 0.97)
        assert signal.take_profit == pytest.approx(159 * 1.06)
        assert signal.leverage == 5

    def test_downtrend_sells(self):
        """All three votes SELL."""
        signal = _evaluate("Trend Following MACD", DOWN_60)

        assert signal.action == Action.SELL
        assert signal.confidence == pytest.approx(0.2)
        assert signal.reason == "Trend Following: MACD Bearish, EMA Bear"
        assert signal.stop_loss == pytest.approx(141 * 1.03)
        assert signal.take_profit == pytest.approx(141 * 0.94)


class TestVolumeWeightedMACD:
    """MACD over price x volume, confidence min(|h| * 200, 0.9)."""

    def test_uptrend_sells_at_cap(self):
        """Unit volumes: same histogram sign as plain MACD."""
        signal = _evaluate("Volume-Weighted MACD", UP_60)

        assert signal.action == Action.SELL
        assert signal.confidence == pytest.approx(0.9)
        assert signal.stop_loss == pytest.approx(159 * 1.03)
        assert signal.take_profit == pytest.approx(159 * 0.94)

    def test_zero_volume_counts_as_one(self):
        """Zero-volume bars get unit weight."""
        zero = _evaluate("Volume-Weighted MACD", UP_60, volumes=[0.0] * 60)
        unit = _evaluate("Volume-Weighted MACD", UP_60, volumes=[1.0] * 60)

        assert zero == unit

    def test_positive_prices_never_buy(self):
        """Same signal-line calibration as the plain MACD strategies."""
        volumes = [float(v) for v in range(1, 61)]
        assert _evaluate("Volume-Weighted MACD", UP_60, volumes=volumes).action != Action.BUY


class TestMovingAverageTrend:
    """Supertrend, EMA Ribbon, Ichimoku and Market Structure on clean trends."""

    def test_supertrend_buy(self):
        """Price > SMA10 > SMA20."""
        signal = _evaluate("Supertrend Strategy", UP_60)

        assert signal.action == Action.BUY
        assert signal.confidence == pytest.approx(0.75)
        assert signal.stop_loss == pytest.approx(159 * 0.98)
        assert signal.take_profit == pytest.approx(159 * 1.04)

    def test_supertrend_sell(self):
        """Price < SMA10 < SMA20."""
        signal = _evaluate("Supertrend Strategy", DOWN_60)

        assert signal.action == Action.SELL
        assert signal.reason == "Supertrend: Downtrend confirmed"
        assert signal.stop_loss == pytest.approx(141 * 1.02)
        assert signal.take_profit == pytest.approx(141 * 0.96)

    def test_ema_ribbon_buy(self):
        """EMA 8 > 13 > 21 > 34."""
        signal = _evaluate("EMA Ribbon", UP_60)

        assert signal.action == Action.BUY
        assert signal.confidence == pytest.approx(0.8)
        assert signal.stop_loss == pytest.approx(159 * 0.97)
        assert signal.take_profit == pytest.approx(159 * 1.05)

    def test_ema_ribbon_sell(self):
        """EMA 8 < 13 < 21 < 34."""
        signal = _evaluate("EMA Ribbon", DOWN_60)

        assert signal.action == Action.SELL
        assert signal.reason == "EMA Ribbon: Bearish alignment"
        assert signal.stop_loss == pytest.approx(141 * 1.03)

    def test_ichimoku_sell(self):
        """Below both spans with conversion under base."""
        signal = _evaluate("Ichimoku Cloud", DOWN_60)

        assert signal.action == Action.SELL
        assert signal.confidence == pytest.approx(0.85)
        assert signal.reason == "Ichimoku Cloud: Price below cloud"
        assert signal.stop_loss == pytest.approx(141 * 1.02)
        assert signal.take_profit == pytest.approx(141 * 0.95)

    def test_market_structure_buy_stops_at_sma200(self):
        """Stop at SMA200 of 120..319, target 10%."""
        signal = _evaluate("Market Structure", range(100, 320))

        assert signal.action == Action.BUY
        assert signal.confidence == pytest.approx(0.8)
        assert signal.stop_loss == pytest.approx(219.5)
        assert signal.take_profit == pytest.approx(319 * 1.10)

    def test_market_structure_sell_stops_at_sma200(self):
        """Stop at SMA200 of 380..181."""
        signal = _evaluate("Market Structure", range(400, 180, -1))

        assert signal.action == Action.SELL
        assert signal.stop_loss == pytest.approx(280.5)
        assert signal.take_profit == pytest.approx(181 * 0.90)


class TestParabolicSAR:
    """The 5-bar window includes the current bar."""

    def test_consistent_candles_never_fire(self):
        """With high >= close >= low the close can't leave its own range."""
        closes = [100.0 + 3 * i for i in range(20)]
        signal = _evaluate("Parabolic SAR", closes, highs=closes, lows=closes)

        assert signal.action == Action.HOLD
        assert signal.reason == "Parabolic SAR: No reversal"

    def test_close_above_window_highs_buys(self):
        """Stop at the window low, target 3%."""
        signal = _evaluate(
            "Parabolic SAR", [100.0] * 9 + [110.0], highs=[100.0] * 10, lows=[99.0] * 10
        )

        assert signal.action == Action.BUY
        assert signal.confidence == pytest.approx(0.75)
        assert signal.stop_loss == pytest.approx(99.0)
        assert signal.take_profit == pytest.approx(110 * 1.03)

    def test_close_below_window_lows_sells(self):
        """Stop at the window high, target 3% below."""
        signal = _evaluate(
            "Parabolic SAR", [100.0] * 9 + [90.0], highs=[101.0] * 10, lows=[100.0] * 10
        )

        assert signal.action == Action.SELL
        assert signal.stop_loss == pytest.approx(101.0)
        assert signal.take_profit == pytest.approx(90 * 0.97)


# ── Volatility ──────────────────────────────────────────────────────────────


class TestATRBreakout:
    """Move beyond the previous close by one ATR; stop 1.5 ATR, target 2 ATR."""

    ATR = 32 / 14  # 13 ranges of 2 and the breakout bar's range of 6

    def test_breakout_up(self):
        """Close jumps 5 above a flat base."""
        signal = _evaluate("ATR Breakout", [100.0] * 15 + [105.0], spread=1.0)

        assert signal.action == Action.BUY
        assert signal.confidence == pytest.approx(0.75)
        assert signal.stop_loss == pytest.approx(105 - 1.5 * self.ATR)
        assert signal.take_profit == pytest.approx(105 + 2 * self.ATR)
        assert signal.reason == "ATR Breakout: 2.18% volatility"

    def test_breakout_down(self):
        """Close drops 5 below a flat base."""
        signal = _evaluate("ATR Breakout", [100.0] * 15 + [95.0], spread=1.0)

        assert signal.action == Action.SELL
        assert signal.stop_loss == pytest.approx(95 + 1.5 * self.ATR)
        assert signal.take_profit == pytest.approx(95 - 2 * self.ATR)

    def test_move_within_atr_holds(self):
        """A move smaller than the ATR doesn't fire."""
        signal = _evaluate("ATR Breakout", [100.0] * 15 + [101.0], spread=1.0)
        assert signal.action == Action.HOLD


class TestBollingerStrategies:
    """Mean Reversion BB and Bollinger Squeeze."""

    def test_mean_reversion_overbought(self):
        """Band break and %K vote SELL; RSI has no losses so stays neutral."""
        signal = _evaluate("Mean Reversion BB", [100.0] * 25 + [110.0])

        assert signal.action == Action.SELL
        assert signal.confidence == pytest.approx((0.4 + 1.0) / 3)
        assert signal.reason == "Mean Reversion: BB Overbought, RSI:50.0"
        assert signal.stop_loss == pytest.approx(110 * 1.01)
        # Target is the middle band
        assert signal.take_profit == pytest.approx(100.5)

    def test_squeeze_breakout_up(self):
        """Narrow bands with price above the middle: stop at the lower band."""
        closes = [100.0] * 19 + [101.0]
        bb = bollinger_bands(closes, 20)
        signal = _evaluate("Bollinger Squeeze", closes)

        assert bb.width < 0.1
        assert signal.action == Action.BUY
        assert signal.confidence == pytest.approx(0.8)
        assert signal.stop_loss == pytest.approx(bb.lower)
        assert signal.take_profit == pytest.approx(101 * 1.05)

    def test_wide_bands_hold(self):
        """Width 0.8 is no squeeze."""
        signal = _evaluate("Bollinger Squeeze", [80.0, 120.0] * 10)

        assert signal.action == Action.HOLD
        assert "no squeeze" in signal.reason


# ── Levels ──────────────────────────────────────────────────────────────────


class TestFibonacciRetracement:
    """20-bar swing 90..110: 61.8% level at 97.64, 23.6% level at 105.28."""

    def test_below_618_buys(self):
        """Stop at the swing low, target the 38.2% level."""
        signal = _evaluate("Fibonacci Retracement", [110.0] * 10 + [90.0] * 9 + [95.0])

        assert signal.action == Action.BUY
        assert signal.confidence == pytest.approx(0.8)
        assert signal.stop_loss == pytest.approx(90.0)
        assert signal.take_profit == pytest.approx(110 - 20 * 0.382)

    def test_above_236_sells(self):
        """Stop at the swing high, target the 50% level."""
        signal = _evaluate("Fibonacci Retracement", [90.0] * 10 + [110.0] * 9 + [106.0])

        assert signal.action == Action.SELL
        assert signal.stop_loss == pytest.approx(110.0)
        assert signal.take_profit == pytest.approx(100.0)


class TestPivotPoints:
    """Previous bar 101/99/100: pivot 100, R1 101, S1 99."""

    def test_above_r1_buys(self):
        """Stop at the pivot, target 2%."""
        signal = _evaluate("Pivot Points", [100, 102], highs=[101, 103], lows=[99, 101])

        assert signal.action == Action.BUY
        assert signal.confidence == pytest.approx(0.7)
        assert signal.reason == "Pivot Points: Above R1"
        assert signal.stop_loss == pytest.approx(100.0)
        assert signal.take_profit == pytest.approx(102 * 1.02)

    def test_below_s1_sells(self):
        """Stop at the pivot, target 2% below."""
        signal = _evaluate("Pivot Points", [100, 98], highs=[101, 99], lows=[99, 97])

        assert signal.action == Action.SELL
        assert signal.reason == "Pivot Points: Below S1"
        assert signal.stop_loss == pytest.approx(100.0)
        assert signal.take_profit == pytest.approx(98 * 0.98)


class TestSupportResistance:
    """10-bar range 100..110: support 101, resistance 108.9."""

    def test_at_support_buys(self):
        """Stop falls back to 1% below the low it sits on; target resistance."""
        signal = _evaluate("Support Resistance", [110.0] * 9 + [100.0])

        assert signal.action == Action.BUY
        assert signal.confidence == pytest.approx(0.75)
        assert signal.stop_loss == pytest.approx(99.0)
        assert signal.take_profit == pytest.approx(108.9)

    def test_at_resistance_sells(self):
        """Stop falls back to 1% above the high; target support."""
        signal = _evaluate("Support Resistance", [100.0] * 9 + [110.0])

        assert signal.action == Action.SELL
        assert signal.stop_loss == pytest.approx(111.1)
        assert signal.take_profit == pytest.approx(101.0)


class TestPriceAction:
    """Three consecutive closes."""

    def test_lower_closes_sell(self):
        """Stop at the close two bars back."""
        signal = _evaluate("Price Action", [102, 101, 100])

        assert signal.action == Action.SELL
        assert signal.reason == "Price Action: Lower lows"
        assert signal.stop_loss == pytest.approx(102.0)
        assert signal.take_profit == pytest.approx(97.0)


# ── Volume ──────────────────────────────────────────────────────────────────


class TestVWAPStrategy:
    """Price more than 1% away from the cumulative VWAP."""

    def test_above_vwap_buys(self):
        """Unit volumes: VWAP 100.5, stop at VWAP, target 2%."""
        signal = _evaluate("VWAP Strategy", [100.0] * 19 + [110.0])

        assert signal.action == Action.BUY
        assert signal.confidence == pytest.approx(0.7)
        assert signal.reason == "VWAP: Price above VWAP"
        assert signal.stop_loss == pytest.approx(100.5)
        assert signal.take_profit == pytest.approx(110 * 1.02)

    def test_below_vwap_sells(self):
        """VWAP 99.5 becomes the stop above the price."""
        signal = _evaluate("VWAP Strategy", [100.0] * 19 + [90.0])

        assert signal.action == Action.SELL
        assert signal.stop_loss == pytest.approx(99.5)
        assert signal.take_profit == pytest.approx(90 * 0.98)

    def test_volume_weighting_moves_the_stop(self):
        """A heavy last bar pulls the VWAP to 105."""
        volumes = [1.0] * 19 + [19.0]
        signal = _evaluate("VWAP Strategy", [100.0] * 19 + [110.0], volumes=volumes)

        assert signal.action == Action.BUY
        assert signal.stop_loss == pytest.approx(105.0)


class TestVolumeProfile:
    """Last volume above 1.5x the series average confirms the move."""

    VOLUMES = [1.0, 1.0, 1.0, 5.0]  # average 2, spike 2.5x

    def test_spike_up_buys(self):
        """Spike with a higher close."""
        signal = _evaluate("Volume Profile", [100, 100, 100, 101], volumes=self.VOLUMES)

        assert signal.action == Action.BUY
        assert signal.confidence == pytest.approx(0.7)
        assert signal.reason == "Volume Profile: 2.5x avg volume"
        assert signal.stop_loss == pytest.approx(101 * 0.99)
        assert signal.take_profit == pytest.approx(101 * 1.03)

    def test_spike_down_sells(self):
        """Spike with a lower close."""
        signal = _evaluate("Volume Profile", [100, 100, 100, 99], volumes=self.VOLUMES)

        assert signal.action == Action.SELL
        assert signal.stop_loss == pytest.approx(99 * 1.01)
        assert signal.take_profit == pytest.approx(99 * 0.97)

    def test_no_spike_holds(self):
        """1.33x the average is below the threshold."""
        signal = _evaluate("Volume Profile", [100, 100, 100, 101], volumes=[1.0, 1.0, 1.0, 1.5])
        assert signal.action == Action.HOLD


class TestOrderFlow:
    """Price direction confirmed by rising volume."""

    def test_falling_price_rising_volume_sells(self):
        """0.5% stop, 1.5% target."""
        signal = _evaluate("Order Flow", [101, 100], volumes=[10.0, 20.0])

        assert signal.action == Action.SELL
        assert signal.confidence == pytest.approx(0.7)
        assert signal.stop_loss == pytest.approx(100 * 1.005)
        assert signal.take_profit == pytest.approx(100 * 0.985)
