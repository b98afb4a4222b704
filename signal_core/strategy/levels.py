"""Price-level strategies: Fibonacci, pivots, swing support/resistance, price action."""

from signal_core.indicators import highest, lowest
from signal_core.models import Action, PriceSeries
from signal_core.strategy.base import (
    Decision,
    directional,
    percent_levels,
    stop_level,
    target_level,
)
from signal_core.strategy.registry import register_strategy


@register_strategy("Fibonacci Retracement", minimum_bars=20, duration="4h-1d", leverage=2)
def fibonacci_retracement(series: PriceSeries) -> Decision:
    price = series.last_price
    recent_high = highest(series.highs, 20)
    recent_low = lowest(series.lows, 20)
    diff = recent_high - recent_low

    level_236 = recent_high - diff * 0.236
    level_382 = recent_high - diff * 0.382
    level_500 = recent_high - diff * 0.5
    level_618 = recent_high - diff * 0.618

    action = directional(
        recent_low < price <= level_618,
        level_236 <= price < recent_high,
    )
    if action == Action.BUY:
        stop, target = recent_low, level_382
    else:
        stop, target = recent_high, level_500
    return Decision(
        action=action,
        confidence=0.8,
        reason=f"Fibonacci: {'Support' if action == Action.BUY else 'Resistance'} level",
        stop_loss=stop_level(action, price, stop, 0.02),
        take_profit=target_level(action, price, target, 0.03),
    )


@register_strategy("Pivot Points", minimum_bars=2, duration="1h-4h", leverage=3)
def pivot_points(series: PriceSeries) -> Decision:
    price = series.last_price
    prev_high = series.highs[-2]
    prev_low = series.lows[-2]
    prev_close = series.closes[-2]

    pivot = (prev_high + prev_low + prev_close) / 3
    r1 = 2 * pivot - prev_low
    s1 = 2 * pivot - prev_high

    action = directional(price > r1, price < s1)
    _, take_profit = percent_levels(action, price, 0.0, 0.02)
    return Decision(
        action=action,
        confidence=0.7,
        reason=f"Pivot Points: {'Above R1' if action == Action.BUY else 'Below S1'}",
        stop_loss=stop_level(action, price, pivot, 0.01),
        take_profit=take_profit,
    )


@register_strategy("Price Action", minimum_bars=3, duration="15m-1h", leverage=3)
def price_action(series: PriceSeries) -> Decision:
    prev_prev, prev, price = series.closes[-3:]

    action = directional(
        price > prev and prev > prev_prev,
        price < prev and prev < prev_prev,
    )
    _, take_profit = percent_levels(action, price, 0.0, 0.03)
    return Decision(
        action=action,
        confidence=0.7,
        reason=f"Price Action: {'Higher highs' if action == Action.BUY else 'Lower lows'}",
        stop_loss=stop_level(action, price, prev_prev, 0.01),
        take_profit=take_profit,
    )


@register_strategy("Support Resistance", minimum_bars=10, duration="1h-4h", leverage=3)
def support_resistance(series: PriceSeries) -> Decision:
    price = series.last_price
    recent_high = highest(series.highs, 10)
    recent_low = lowest(series.lows, 10)
    resistance = recent_high * 0.99
    support = recent_low * 1.01

    action = directional(price <= support, price >= resistance)
    if action == Action.BUY:
        stop, target = recent_low, resistance
    else:
        stop, target = recent_high, support
    return Decision(
        action=action,
        confidence=0.75,
        reason=(
            "Support/Resistance: "
            + ("Bounce from support" if action == Action.BUY else "Rejection at resistance")
        ),
        stop_loss=stop_level(action, price, stop, 0.01),
        take_profit=target_level(action, price, target, 0.02),
    )
