"""Volume-confirmed strategies: VWAP deviation, volume spikes, order flow."""

from signal_core.indicators import vwap
from signal_core.models import Action, PriceSeries
from signal_core.strategy.base import Decision, directional, percent_levels, stop_level
from signal_core.strategy.registry import register_strategy

VOLUME_SPIKE = 1.5


@register_strategy("VWAP Strategy", minimum_bars=20, duration="1h-4h", leverage=3)
def vwap_strategy(series: PriceSeries) -> Decision:
    price = series.last_price
    value = vwap(series.closes, series.highs, series.lows, series.volumes)

    action = directional(price > value * 1.01, price < value * 0.99)
    _, take_profit = percent_levels(action, price, 0.0, 0.02)
    return Decision(
        action=action,
        confidence=0.7,
        reason=f"VWAP: Price {'above' if price > value else 'below'} VWAP",
        stop_loss=stop_level(action, price, value, 0.01),
        take_profit=take_profit,
    )


@register_strategy("Volume Profile", minimum_bars=2, duration="15m-1h", leverage=3)
def volume_profile(series: PriceSeries) -> Decision:
    price = series.last_price
    volumes = series.volumes
    average = sum(volumes) / len(volumes)
    current = volumes[-1]
    spike = average > 0 and current > average * VOLUME_SPIKE
    previous = series.closes[-2]

    action = directional(spike and price > previous, spike and price < previous)
    stop_loss, take_profit = percent_levels(action, price, 0.01, 0.03)
    ratio = current / average if average else 0.0
    return Decision(
        action=action,
        confidence=0.7,
        reason=f"Volume Profile: {ratio:.1f}x avg volume",
        stop_loss=stop_loss,
        take_profit=take_profit,
    )


@register_strategy("Order Flow", minimum_bars=2, duration="5m-15m", leverage=5)
def order_flow(series: PriceSeries) -> Decision:
    price = series.last_price
    price_change = price - series.closes[-2]
    volume_change = series.volumes[-1] - series.volumes[-2]

    action = directional(
        price_change > 0 and volume_change > 0,
        price_change < 0 and volume_change > 0,
    )
    stop_loss, take_profit = percent_levels(action, price, 0.005, 0.015)
    return Decision(
        action=action,
        confidence=0.7,
        reason=f"Order Flow: {'Bullish' if price_change > 0 else 'Bearish'} with volume",
        stop_loss=stop_loss,
        take_profit=take_profit,
    )
