"""Technical indicators (pure math, no I/O)."""

from signal_core.indicators.classifier import (
    classify,
    classify_rsi,
    classify_stochastic,
)
from signal_core.indicators.indicators import (
    sma,
    ema,
    rsi,
    macd,
    bollinger_bands,
    stochastic,
    williams_r,
    cci,
    atr,
    true_range,
    highest,
    lowest,
    vwap,
)

__all__ = [
    "classify",
    "classify_rsi",
    "classify_stochastic",
    "sma",
    "ema",
    "rsi",
    "macd",
    "bollinger_bands",
    "stochastic",
    "williams_r",
    "cci",
    "atr",
    "true_range",
    "highest",
    "lowest",
    "vwap",
]
