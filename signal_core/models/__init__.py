"""Data models shared by indicators, strategies and the consensus."""

from signal_core.models.series import PriceSeries
from signal_core.models.signal import (
    Action,
    BollingerBands,
    IndicatorResult,
    MacdResult,
    MarketAnalysis,
    TradeSignal,
    Trend,
)

__all__ = [
    "Action",
    "BollingerBands",
    "IndicatorResult",
    "MacdResult",
    "MarketAnalysis",
    "PriceSeries",
    "TradeSignal",
    "Trend",
]
