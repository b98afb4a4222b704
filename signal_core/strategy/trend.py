"""Trend-following strategies.

Moving-average alignment, MACD trend, Ichimoku cloud position and
short-range breakouts.
"""

from signal_core.indicators import ema, highest, lowest, macd, sma
from signal_core.models import Action, PriceSeries
from signal_core.strategy.base import (
    Decision,
    VoteTally,
    directional,
    percent_levels,
    stop_level,
)
from signal_core.strategy.registry import register_strategy


def _trend_word(action: Action, up: str, down: str, neutral: str) -> str:
    if action == Action.BUY:
        return up
    if action == Action.SELL:
        return down
    return neutral


@register_strategy("Trend Following MACD", minimum_bars=26, duration="1h-4h", leverage=5)
def trend_following_macd(series: PriceSeries) -> Decision:
    closes = series.closes
    price = series.last_price
    m = macd(closes)
    ema9 = ema(closes, 9)
    ema21 = ema(closes, 21)

    votes = VoteTally()
    histogram_weight = min(abs(m.histogram) * 100, 0.3)
    if m.macd > m.signal and m.histogram > 0:
        votes.add(Action.BUY, histogram_weight)
    if m.macd < m.signal and m.histogram < 0:
        votes.add(Action.SELL, histogram_weight)
    votes.add(Action.BUY if ema9 > ema21 else Action.SELL, 0.2)
    votes.add(Action.BUY if price > ema21 else Action.SELL, 0.1)

    action = votes.action
    stop_loss, take_profit = percent_levels(action, price, 0.03, 0.06)
    return Decision(
        action=action,
        confidence=votes.confidence(divisor=3, cap=0.9),
        reason=(
            f"Trend Following: MACD {'Bullish' if m.histogram > 0 else 'Bearish'}, "
            f"EMA {'Bull' if ema9 > ema21 else 'Bear'}"
        ),
        stop_loss=stop_loss,
        take_profit=take_profit,
    )


@register_strategy("Volume-Weighted MACD", minimum_bars=26, duration="1h-4h", leverage=4)
def volume_weighted_macd(series: PriceSeries) -> Decision:
    price = series.last_price
    # Zero-volume bars count with unit weight
    weighted = [p * (v or 1.0) for p, v in zip(series.closes, series.volumes)]
    m = macd(weighted)

    action = directional(
        m.macd > m.signal and m.histogram > 0,
        m.macd < m.signal and m.histogram < 0,
    )
    stop_loss, take_profit = percent_levels(action, price, 0.03, 0.06)
    return Decision(
        action=action,
        confidence=min(abs(m.histogram) * 200, 0.9),
        reason=f"Volume-Weighted MACD: {'Bullish' if m.histogram > 0 else 'Bearish'}",
        stop_loss=stop_loss,
        take_profit=take_profit,
    )


@register_strategy("Ichimoku Cloud", minimum_bars=52, duration="4h-1d", leverage=3)
def ichimoku_cloud(series: PriceSeries) -> Decision:
    closes = series.closes
    price = series.last_price

    conversion = (highest(closes, 9) + lowest(closes, 9)) / 2
    base = (highest(closes, 26) + lowest(closes, 26)) / 2
    span_a = (conversion + base) / 2
    span_b = (highest(closes, 52) + lowest(closes, 52)) / 2

    action = directional(
        price > span_a and price > span_b and conversion > base,
        price < span_a and price < span_b and conversion < base,
    )
    stop_loss, take_profit = percent_levels(action, price, 0.02, 0.05)
    return Decision(
        action=action,
        confidence=0.85,
        reason="Ichimoku Cloud: "
        + _trend_word(action, "Price above cloud", "Price below cloud", "Neutral"),
        stop_loss=stop_loss,
        take_profit=take_profit,
    )


@register_strategy("Supertrend Strategy", minimum_bars=20, duration="30m-2h", leverage=4)
def supertrend(series: PriceSeries) -> Decision:
    price = series.last_price
    sma10 = sma(series.closes, 10)
    sma20 = sma(series.closes, 20)

    action = directional(
        price > sma10 and sma10 > sma20,
        price < sma10 and sma10 < sma20,
    )
    stop_loss, take_profit = percent_levels(action, price, 0.02, 0.04)
    return Decision(
        action=action,
        confidence=0.75,
        reason="Supertrend: "
        + _trend_word(action, "Uptrend confirmed", "Downtrend confirmed", "No trend"),
        stop_loss=stop_loss,
        take_profit=take_profit,
    )


@register_strategy("Parabolic SAR", minimum_bars=10, duration="1h-6h", leverage=3)
def parabolic_sar(series: PriceSeries) -> Decision:
    price = series.last_price
    # Window includes the current bar; only fires when the close sits
    # outside its own high/low range
    recent_high = highest(series.highs, 5)
    recent_low = lowest(series.lows, 5)

    action = directional(price > recent_high * 1.01, price < recent_low * 0.99)
    _, take_profit = percent_levels(action, price, 0.0, 0.03)
    swing = recent_low if action == Action.BUY else recent_high
    stop_loss = stop_level(action, price, swing, 0.02)
    return Decision(
        action=action,
        confidence=0.75,
        reason="Parabolic SAR: "
        + _trend_word(action, "Trend reversal up", "Trend reversal down", "No reversal"),
        stop_loss=stop_loss,
        take_profit=take_profit,
    )


@register_strategy("Moving Average Cross", minimum_bars=20, duration="30m-2h", leverage=4)
def moving_average_cross(series: PriceSeries) -> Decision:
    price = series.last_price
    sma10 = sma(series.closes, 10)
    sma20 = sma(series.closes, 20)

    action = directional(sma10 > sma20, sma10 < sma20)
    stop_loss, take_profit = percent_levels(action, price, 0.02, 0.04)
    return Decision(
        action=action,
        confidence=0.75,
        reason=f"MA Cross: SMA10 {'above' if sma10 > sma20 else 'below'} SMA20",
        stop_loss=stop_loss,
        take_profit=take_profit,
    )


@register_strategy("EMA Ribbon", minimum_bars=34, duration="1h-4h", leverage=3)
def ema_ribbon(series: PriceSeries) -> Decision:
    price = series.last_price
    ribbon = [ema(series.closes, period) for period in (8, 13, 21, 34)]
    pairs = list(zip(ribbon, ribbon[1:]))

    action = directional(
        all(fast > slow for fast, slow in pairs),
        all(fast < slow for fast, slow in pairs),
    )
    stop_loss, take_profit = percent_levels(action, price, 0.03, 0.05)
    return Decision(
        action=action,
        confidence=0.8,
        reason="EMA Ribbon: "
        + _trend_word(action, "Bullish alignment", "Bearish alignment", "Mixed"),
        stop_loss=stop_loss,
        take_profit=take_profit,
    )


@register_strategy("Market Structure", minimum_bars=200, duration="1d-1w", leverage=2)
def market_structure(series: PriceSeries) -> Decision:
    price = series.last_price
    sma50 = sma(series.closes, 50)
    sma200 = sma(series.closes, 200)

    action = directional(
        price > sma50 and sma50 > sma200,
        price < sma50 and sma50 < sma200,
    )
    _, take_profit = percent_levels(action, price, 0.0, 0.10)
    return Decision(
        action=action,
        confidence=0.8,
        reason="Market Structure: "
        + _trend_word(action, "Bull market", "Bear market", "Range"),
        stop_loss=stop_level(action, price, sma200, 0.05),
        take_profit=take_profit,
    )
