"""Multi-symbol scanner built on signal_core.

Loads candles from a CandleSource, evaluates the strategy catalog for
each symbol concurrently and reports the consensus.
"""

from scanner.candles import CandleSource, CandleSourceError, JsonFileCandleSource, parse_klines
from scanner.service import ScanService, SymbolScan, evaluate_series

__all__ = [
    "CandleSource",
    "CandleSourceError",
    "JsonFileCandleSource",
    "parse_klines",
    "ScanService",
    "SymbolScan",
    "evaluate_series",
]
