"""Volatility-envelope strategies: Bollinger mean reversion, squeeze, ATR breakout."""

from signal_core.indicators import atr, bollinger_bands, rsi, stochastic
from signal_core.models import Action, PriceSeries
from signal_core.strategy.base import (
    Decision,
    VoteTally,
    directional,
    percent_levels,
    stop_level,
    target_level,
)
from signal_core.strategy.registry import register_strategy

SQUEEZE_WIDTH = 0.1


@register_strategy("Mean Reversion BB", minimum_bars=20, duration="5m-15m", leverage=2)
def mean_reversion_bb(series: PriceSeries) -> Decision:
    closes = series.closes
    price = series.last_price
    bb = bollinger_bands(closes, 20)

    votes = VoteTally()
    if price < bb.lower and bb.lower > 0:
        votes.add(Action.BUY, min((bb.lower - price) / bb.lower * 1000, 0.4))
    if price > bb.upper and bb.upper > 0:
        votes.add(Action.SELL, min((price - bb.upper) / bb.upper * 1000, 0.4))
    reading = rsi(closes, 14)
    votes.add_indicator(reading)
    votes.add_indicator(stochastic(closes, series.highs, series.lows, 14))

    if price < bb.lower:
        band = "Oversold"
    elif price > bb.upper:
        band = "Overbought"
    else:
        band = "Inside"

    action = votes.action
    stop_loss, _ = percent_levels(action, price, 0.01, 0.0)
    return Decision(
        action=action,
        confidence=votes.confidence(divisor=3, cap=0.85),
        reason=f"Mean Reversion: BB {band}, RSI:{reading.value:.1f}",
        stop_loss=stop_loss,
        # Revert to the middle band
        take_profit=target_level(action, price, bb.middle, 0.02),
    )


@register_strategy("Bollinger Squeeze", minimum_bars=20, duration="15m-1h", leverage=5)
def bollinger_squeeze(series: PriceSeries) -> Decision:
    price = series.last_price
    bb = bollinger_bands(series.closes, 20)
    squeezed = bb.middle != 0 and bb.width < SQUEEZE_WIDTH

    action = directional(squeezed and price > bb.middle, squeezed and price <= bb.middle)
    _, take_profit = percent_levels(action, price, 0.0, 0.05)
    band_edge = bb.lower if action == Action.BUY else bb.upper
    return Decision(
        action=action,
        confidence=0.8,
        reason=(
            "Bollinger Squeeze: Breakout expected"
            if squeezed
            else f"Bollinger Squeeze: width {bb.width:.3f}, no squeeze"
        ),
        stop_loss=stop_level(action, price, band_edge, 0.02),
        take_profit=take_profit,
    )


@register_strategy("ATR Breakout", minimum_bars=15, duration="1h-4h", leverage=4)
def atr_breakout(series: PriceSeries) -> Decision:
    closes = series.closes
    price = series.last_price
    previous = closes[-2]
    value = atr(series.highs, series.lows, closes, 14)

    action = directional(price > previous + value, price < previous - value)
    if action == Action.BUY:
        stop, target = price - value * 1.5, price + value * 2
    else:
        stop, target = price + value * 1.5, price - value * 2
    volatility = value / price * 100 if price else 0.0
    return Decision(
        action=action,
        confidence=0.75,
        reason=f"ATR Breakout: {volatility:.2f}% volatility",
        stop_loss=stop_level(action, price, stop, 0.015),
        take_profit=target_level(action, price, target, 0.02),
    )
