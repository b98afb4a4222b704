"""Market overview for one price series.

Summarises trend direction (close vs SMA20/SMA50), average bar-to-bar
volatility, RSI and MACD alongside the strategy signals.
"""

import numpy as np

from signal_core.indicators import macd, rsi, sma
from signal_core.models import MarketAnalysis, PriceSeries, Trend

TRENDING_STRENGTH = 0.7
SIDEWAYS_STRENGTH = 0.3


def _mean_abs_change(closes) -> float:
    arr = np.asarray(closes, dtype=np.float64)
    if len(arr) < 2:
        return 0.0
    previous = arr[:-1]
    changes = np.abs(np.diff(arr)[previous != 0] / previous[previous != 0])
    if len(changes) == 0:
        return 0.0
    return float(changes.mean())


def analyze_market(series: PriceSeries) -> MarketAnalysis:
    """
    Build a MarketAnalysis snapshot.

    BULLISH when close > SMA20 > SMA50, BEARISH when close < SMA20 < SMA50,
    SIDEWAYS otherwise. Volatility is the mean absolute percentage change
    between consecutive closes. Volume is the total over the series.
    """
    closes = series.closes
    price = series.last_price
    sma20 = sma(closes, 20)
    sma50 = sma(closes, 50)

    if len(closes) >= 50 and price > sma20 > sma50:
        trend, strength = Trend.BULLISH, TRENDING_STRENGTH
    elif len(closes) >= 50 and price < sma20 < sma50:
        trend, strength = Trend.BEARISH, TRENDING_STRENGTH
    else:
        trend, strength = Trend.SIDEWAYS, SIDEWAYS_STRENGTH

    return MarketAnalysis(
        trend=trend,
        strength=strength,
        volume=float(sum(series.volumes)),
        volatility=_mean_abs_change(closes) * 100,
        rsi=rsi(closes, 14).value,
        macd=macd(closes),
    )
