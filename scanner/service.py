"""ScanService: evaluate the strategy catalog for many symbols.

Each symbol is one task: load candles, run all strategies, reduce to a
consensus and build a market overview. Evaluation is CPU-bound and pure,
so tasks run in worker threads, bounded by a semaphore, and results are
returned in input order.
"""

from __future__ import annotations

import asyncio
import logging
import time
from dataclasses import dataclass, field

from signal_core.analysis import analyze_market
from signal_core.consensus import build_consensus, get_all_signals, named_signals
from signal_core.models import Action, MarketAnalysis, PriceSeries, TradeSignal

from scanner.candles import CandleSource, CandleSourceError

logger = logging.getLogger(__name__)


@dataclass
class SymbolScan:
    """Result of scanning a single symbol."""

    symbol: str
    consensus: TradeSignal | None = None
    signals: list[TradeSignal] = field(default_factory=list)
    analysis: MarketAnalysis | None = None
    bars: int = 0
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.error is None

    def named_signals(self) -> list[tuple[str, TradeSignal]]:
        """(strategy name, signal) pairs in catalog order."""
        return named_signals(self.signals)

    def top_signals(self, action: Action, limit: int = 5) -> list[tuple[str, TradeSignal]]:
        """Strategies voting ``action``, highest confidence first."""
        matching = [(name, s) for name, s in self.named_signals() if s.action == action]
        matching.sort(key=lambda pair: pair[1].confidence, reverse=True)
        return matching[:limit]


def evaluate_series(symbol: str, series: PriceSeries) -> SymbolScan:
    """Run the full catalog, consensus and overview for one series."""
    timestamp = series.timestamp
    stamped = series.model_copy(update={"as_of": timestamp})

    signals = get_all_signals(stamped, symbol)
    consensus = build_consensus(signals, symbol, series.last_price, timestamp)

    return SymbolScan(
        symbol=symbol,
        consensus=consensus,
        signals=signals,
        analysis=analyze_market(series),
        bars=len(series),
    )


class ScanService:
    """Scan a list of symbols concurrently against one candle source."""

    def __init__(
        self,
        source: CandleSource,
        candle_limit: int = 100,
        max_concurrency: int = 8,
    ):
        self._source = source
        self.candle_limit = candle_limit
        self.max_concurrency = max(1, max_concurrency)

    def _scan_symbol_sync(self, symbol: str) -> SymbolScan:
        try:
            series = self._source.load(symbol, self.candle_limit)
        except CandleSourceError as e:
            logger.warning("Skipping %s: %s", symbol, e)
            return SymbolScan(symbol=symbol, error=str(e))

        if len(series) == 0:
            logger.warning("Skipping %s: no candles", symbol)
            return SymbolScan(symbol=symbol, error="no candles")

        return evaluate_series(symbol, series)

    async def scan_symbol(self, symbol: str) -> SymbolScan:
        """Scan one symbol in a worker thread."""
        return await asyncio.to_thread(self._scan_symbol_sync, symbol)

    async def scan(self, symbols: list[str]) -> list[SymbolScan]:
        """Scan all symbols, at most ``max_concurrency`` at a time.

        Returns:
            One SymbolScan per input symbol, in input order. Symbols that
            fail to load carry ``error`` instead of signals.
        """
        start_time = time.time()
        semaphore = asyncio.Semaphore(self.max_concurrency)

        async def scan_one(symbol: str) -> SymbolScan:
            async with semaphore:
                return await self.scan_symbol(symbol)

        logger.info("Scanning %d symbols (concurrency=%d)", len(symbols), self.max_concurrency)
        results = await asyncio.gather(*(scan_one(s) for s in symbols))

        failed = sum(1 for r in results if not r.ok)
        logger.info(
            "Scan complete: %d ok, %d failed in %.2fs",
            len(results) - failed,
            failed,
            time.time() - start_time,
        )
        return list(results)
