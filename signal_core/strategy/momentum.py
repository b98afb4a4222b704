"""Oscillator and momentum strategies.

RSI, Stochastic, Williams %R, CCI, MACD histogram and rate-of-change
momentum. All are pure functions of the price series.
"""

from signal_core.indicators import cci, macd, rsi, sma, stochastic, williams_r
from signal_core.models import Action, PriceSeries
from signal_core.strategy.base import Decision, VoteTally, directional, percent_levels
from signal_core.strategy.registry import register_strategy

# Bars between the current close and the reference close for momentum checks
MOMENTUM_LOOKBACK = 5


def _reference_close(series: PriceSeries) -> float:
    return series.closes[-MOMENTUM_LOOKBACK]


@register_strategy("Multi-Timeframe RSI", minimum_bars=20, duration="15m-1h", leverage=3)
def multi_timeframe_rsi(series: PriceSeries) -> Decision:
    closes = series.closes
    price = series.last_price
    sma20 = sma(closes, 20)

    votes = VoteTally()
    # Short and long readings see only their own window, one bar short of
    # the period + 1 RSI needs, so they stay neutral.
    votes.add_indicator(rsi(closes[-5:], 5))
    votes.add_indicator(rsi(closes, 14))
    votes.add_indicator(rsi(closes[-21:], 21))
    if price > sma20 * 1.02:
        votes.add(Action.BUY, 0.2)
    if price < sma20 * 0.98:
        votes.add(Action.SELL, 0.2)

    action = votes.action
    stop_loss, take_profit = percent_levels(action, price, 0.02, 0.04)
    return Decision(
        action=action,
        confidence=votes.confidence(divisor=4, cap=0.95),
        reason=f"Multi-timeframe RSI: {votes.buy}B/{votes.sell}S signals",
        stop_loss=stop_loss,
        take_profit=take_profit,
    )


@register_strategy("ADX Momentum", minimum_bars=14, duration="2h-1d", leverage=2)
def adx_momentum(series: PriceSeries) -> Decision:
    price = series.last_price
    reference = _reference_close(series)
    rising = price > reference
    change = abs((price - reference) / reference) if reference else 0.0

    action = directional(rising and change > 0.02, not rising and change > 0.02)
    stop_loss, take_profit = percent_levels(action, price, 0.02, 0.05)
    return Decision(
        action=action,
        confidence=min(change * 10, 0.8),
        reason=(
            f"ADX Momentum: {'UP' if rising else 'DOWN'} trend with "
            f"{change * 100:.1f}% volatility"
        ),
        stop_loss=stop_loss,
        take_profit=take_profit,
    )


@register_strategy("RSI Divergence", minimum_bars=15, duration="1h-4h", leverage=3)
def rsi_divergence(series: PriceSeries) -> Decision:
    reading = rsi(series.closes, 14)
    price = series.last_price
    reference = _reference_close(series)

    # Oversold but already turning up, or overbought and turning down
    action = directional(
        reading.value < 30 and price > reference,
        reading.value > 70 and price < reference,
    )
    stop_loss, take_profit = percent_levels(action, price, 0.02, 0.03)
    return Decision(
        action=action,
        confidence=0.7,
        reason=f"RSI Divergence: {reading.value:.1f}",
        stop_loss=stop_loss,
        take_profit=take_profit,
    )


@register_strategy("MACD Histogram", minimum_bars=26, duration="30m-2h", leverage=4)
def macd_histogram(series: PriceSeries) -> Decision:
    m = macd(series.closes)
    price = series.last_price

    action = directional(
        m.histogram > 0 and m.histogram > m.signal * 0.5,
        m.histogram < 0 and m.histogram < m.signal * 0.5,
    )
    stop_loss, take_profit = percent_levels(action, price, 0.02, 0.04)
    return Decision(
        action=action,
        confidence=min(abs(m.histogram) * 150, 0.8),
        reason=f"MACD Histogram: {'Bullish' if m.histogram > 0 else 'Bearish'} momentum",
        stop_loss=stop_loss,
        take_profit=take_profit,
    )


@register_strategy("Stochastic Oscillator", minimum_bars=14, duration="15m-1h", leverage=3)
def stochastic_oscillator(series: PriceSeries) -> Decision:
    k = stochastic(series.closes, series.highs, series.lows, 14)
    price = series.last_price

    action = directional(k.value < 20, k.value > 80)
    stop_loss, take_profit = percent_levels(action, price, 0.01, 0.03)
    return Decision(
        action=action,
        confidence=0.7,
        reason=f"Stochastic: {k.value:.1f}",
        stop_loss=stop_loss,
        take_profit=take_profit,
    )


@register_strategy("Williams %R", minimum_bars=14, duration="15m-1h", leverage=3)
def williams_r_strategy(series: PriceSeries) -> Decision:
    value = williams_r(series.closes, series.highs, series.lows, 14)
    price = series.last_price

    action = directional(value < -80, value > -20)
    stop_loss, take_profit = percent_levels(action, price, 0.01, 0.03)
    return Decision(
        action=action,
        confidence=0.7,
        reason=f"Williams %R: {value:.1f}",
        stop_loss=stop_loss,
        take_profit=take_profit,
    )


@register_strategy("CCI Strategy", minimum_bars=20, duration="30m-2h", leverage=3)
def cci_strategy(series: PriceSeries) -> Decision:
    value = cci(series.closes, series.highs, series.lows, 20)
    price = series.last_price

    action = directional(value < -100, value > 100)
    stop_loss, take_profit = percent_levels(action, price, 0.01, 0.03)
    return Decision(
        action=action,
        confidence=0.7,
        reason=f"CCI: {value:.1f}",
        stop_loss=stop_loss,
        take_profit=take_profit,
    )
