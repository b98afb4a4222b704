"""Technical indicators for strategy evaluation.

Every function reads the tail of the given arrays and returns the latest
indicator value as a float. When the window is shorter than the period the
function returns a neutral default instead of raising, and every division
is guarded so results are never NaN or infinite.
"""

from typing import Sequence

import numpy as np

from signal_core.indicators.classifier import classify_rsi, classify_stochastic
from signal_core.models import BollingerBands, IndicatorResult, MacdResult

MACD_FAST = 12
MACD_SLOW = 26
MACD_SIGNAL = 9

NEUTRAL_OSCILLATOR = 50.0
NEUTRAL_WILLIAMS_R = -50.0


def _as_array(values: Sequence[float]) -> np.ndarray:
    return np.asarray(values, dtype=np.float64)


def sma(values: Sequence[float], period: int) -> float:
    """
    Calculate Simple Moving Average of the last ``period`` values.

    Args:
        values: Sequence of values
        period: SMA period

    Returns:
        SMA value, or 0 when fewer than ``period`` values are available
    """
    if period <= 0 or len(values) < period:
        return 0.0
    return float(np.mean(_as_array(values)[-period:]))


def ema(values: Sequence[float], period: int) -> float:
    """
    Calculate Exponential Moving Average.

    Seeded with the SMA of the first ``period`` values, then smoothed with
    multiplier 2 / (period + 1) over the remaining values.

    Args:
        values: Sequence of values
        period: EMA period

    Returns:
        Latest EMA value, or 0 when fewer than ``period`` values are available
    """
    if period <= 0 or len(values) < period:
        return 0.0

    arr = _as_array(values)
    multiplier = 2.0 / (period + 1)
    result = float(np.mean(arr[:period]))

    for price in arr[period:]:
        result = (float(price) - result) * multiplier + result

    return result


def rsi(values: Sequence[float], period: int = 14) -> IndicatorResult:
    """
    Calculate Relative Strength Index with simple averaging.

    Gains and losses come from successive differences over the whole series;
    only the last ``period`` of them are averaged.

    Args:
        values: Sequence of close prices
        period: RSI period

    Returns:
        Classified RSI; value 50 / HOLD when there are fewer than
        ``period + 1`` values or when the average loss is 0
    """
    if period <= 0 or len(values) < period + 1:
        return IndicatorResult(value=NEUTRAL_OSCILLATOR)

    changes = np.diff(_as_array(values))
    gains = np.where(changes > 0, changes, 0.0)[-period:]
    losses = np.where(changes < 0, -changes, 0.0)[-period:]

    avg_gain = float(gains.sum()) / period
    avg_loss = float(losses.sum()) / period

    if avg_loss == 0:
        return IndicatorResult(value=NEUTRAL_OSCILLATOR)

    value = 100.0 - 100.0 / (1.0 + avg_gain / avg_loss)
    return classify_rsi(value)


def macd(values: Sequence[float]) -> MacdResult:
    """
    Calculate MACD(12, 26, 9).

    The signal line is EMA(9) of the last 26 prices, not a smoothed MACD
    line. Strategy thresholds are calibrated against this form.

    Args:
        values: Sequence of close prices

    Returns:
        MacdResult, all zeros when fewer than 26 values are available
    """
    if len(values) < MACD_SLOW:
        return MacdResult()

    macd_line = ema(values, MACD_FAST) - ema(values, MACD_SLOW)
    signal_line = ema(list(values)[-MACD_SLOW:], MACD_SIGNAL)

    return MacdResult(
        macd=macd_line,
        signal=signal_line,
        histogram=macd_line - signal_line,
    )


def bollinger_bands(
    values: Sequence[float],
    period: int = 20,
    num_std: float = 2.0,
) -> BollingerBands:
    """
    Calculate Bollinger Bands.

    Middle = SMA(period); bands = middle +/- num_std * population std.

    Args:
        values: Sequence of close prices
        period: Lookback period
        num_std: Band width in standard deviations

    Returns:
        BollingerBands, all zeros when fewer than ``period`` values
    """
    if period <= 0 or len(values) < period:
        return BollingerBands()

    window = _as_array(values)[-period:]
    middle = float(np.mean(window))
    band = num_std * float(np.std(window))

    return BollingerBands(upper=middle + band, middle=middle, lower=middle - band)


def highest(values: Sequence[float], period: int) -> float:
    """Highest of the last ``period`` values (fewer if the series is shorter)."""
    if len(values) == 0 or period <= 0:
        return 0.0
    return float(np.max(_as_array(values)[-period:]))


def lowest(values: Sequence[float], period: int) -> float:
    """Lowest of the last ``period`` values (fewer if the series is shorter)."""
    if len(values) == 0 or period <= 0:
        return 0.0
    return float(np.min(_as_array(values)[-period:]))


def stochastic(
    closes: Sequence[float],
    highs: Sequence[float],
    lows: Sequence[float],
    period: int = 14,
) -> IndicatorResult:
    """
    Calculate Stochastic %K.

    %K = (close - lowest low) / (highest high - lowest low) * 100

    Args:
        closes: Sequence of close prices
        highs: Sequence of high prices
        lows: Sequence of low prices
        period: Lookback period

    Returns:
        Classified %K; 50 / HOLD when there are fewer than ``period`` values
        or the window has no range
    """
    if period <= 0 or len(closes) < period:
        return IndicatorResult(value=NEUTRAL_OSCILLATOR)

    recent_high = highest(highs, period)
    recent_low = lowest(lows, period)
    if recent_high == recent_low:
        return IndicatorResult(value=NEUTRAL_OSCILLATOR)

    k = (closes[-1] - recent_low) / (recent_high - recent_low) * 100.0
    return classify_stochastic(k)


def williams_r(
    closes: Sequence[float],
    highs: Sequence[float],
    lows: Sequence[float],
    period: int = 14,
) -> float:
    """
    Calculate Williams %R on a -100..0 scale.

    Returns -50 when there are fewer than ``period`` values or no range.
    """
    if period <= 0 or len(closes) < period:
        return NEUTRAL_WILLIAMS_R

    highest_high = highest(highs, period)
    lowest_low = lowest(lows, period)
    if highest_high == lowest_low:
        return NEUTRAL_WILLIAMS_R

    return (highest_high - closes[-1]) / (highest_high - lowest_low) * -100.0


def cci(
    closes: Sequence[float],
    highs: Sequence[float],
    lows: Sequence[float],
    period: int = 20,
) -> float:
    """
    Calculate Commodity Channel Index.

    CCI = (TP - SMA(TP)) / (0.015 * mean absolute deviation), TP = (C+H+L)/3

    Returns 0 when there are fewer than ``period`` values or the mean
    deviation is 0.
    """
    if period <= 0 or len(closes) < period:
        return 0.0

    typical = (_as_array(closes) + _as_array(highs) + _as_array(lows)) / 3.0
    window = typical[-period:]
    mean_tp = float(np.mean(window))
    mean_deviation = float(np.mean(np.abs(window - mean_tp)))

    if mean_deviation == 0:
        return 0.0

    return (float(typical[-1]) - mean_tp) / (0.015 * mean_deviation)


def true_range(
    highs: Sequence[float],
    lows: Sequence[float],
    closes: Sequence[float],
) -> list[float]:
    """
    Calculate True Range for every bar that has a previous close.

    TR = max(high - low, abs(high - prev_close), abs(low - prev_close))

    The first bar has no previous close and is skipped, so the result has
    ``len(highs) - 1`` values.
    """
    result = []
    for i in range(1, len(highs)):
        hl = highs[i] - lows[i]
        hc = abs(highs[i] - closes[i - 1])
        lc = abs(lows[i] - closes[i - 1])
        result.append(max(hl, hc, lc))
    return result


def atr(
    highs: Sequence[float],
    lows: Sequence[float],
    closes: Sequence[float],
    period: int = 14,
) -> float:
    """
    Calculate Average True Range as the SMA of the last ``period`` true ranges.

    Returns 0 when fewer than ``period`` true ranges are available.
    """
    return sma(true_range(highs, lows, closes), period)


def vwap(
    closes: Sequence[float],
    highs: Sequence[float],
    lows: Sequence[float],
    volumes: Sequence[float],
) -> float:
    """
    Calculate cumulative Volume Weighted Average Price over the whole series.

    Falls back to the last close when total volume is 0.
    """
    if len(closes) == 0:
        return 0.0

    typical = (_as_array(closes) + _as_array(highs) + _as_array(lows)) / 3.0
    vol = _as_array(volumes)
    total_volume = float(vol.sum())
    if total_volume == 0:
        return float(closes[-1])

    return float((typical * vol).sum()) / total_volume
