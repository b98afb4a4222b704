"""Candle data sources for the scanner.

Candles arrive in the exchange kline row format:
    [open_time_ms, open, high, low, close, volume, close_time_ms, ...]
with prices and volumes as strings or numbers.

Fetching candles over the network is outside this package; a source only
has to produce a PriceSeries for a symbol.
"""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Protocol, Sequence

import orjson

from signal_core.models import PriceSeries

logger = logging.getLogger(__name__)

# Column indexes in a kline row
OPEN_TIME, OPEN, HIGH, LOW, CLOSE, VOLUME = range(6)


class CandleSourceError(Exception):
    """Raised when candles for a symbol can't be loaded or parsed."""


class CandleSource(Protocol):
    """Protocol for candle data access."""

    def load(self, symbol: str, limit: int) -> PriceSeries: ...


def parse_klines(rows: Sequence[Sequence[Any]]) -> PriceSeries:
    """
    Convert kline rows to a PriceSeries.

    Args:
        rows: Kline rows in chronological order

    Returns:
        PriceSeries with closes, highs, lows, volumes and as_of set to the
        open time of the last row

    Raises:
        CandleSourceError: If a row is too short or holds non-numeric values
    """
    closes, highs, lows, volumes = [], [], [], []
    for i, row in enumerate(rows):
        if not isinstance(row, (list, tuple)) or len(row) <= VOLUME:
            raise CandleSourceError(f"row {i}: expected a kline row with at least 6 columns")
        try:
            highs.append(float(row[HIGH]))
            lows.append(float(row[LOW]))
            closes.append(float(row[CLOSE]))
            volumes.append(float(row[VOLUME]))
        except (TypeError, ValueError) as e:
            raise CandleSourceError(f"row {i}: {e}") from e

    as_of = None
    if rows:
        try:
            as_of = datetime.fromtimestamp(int(rows[-1][OPEN_TIME]) / 1000, tz=timezone.utc)
        except (TypeError, ValueError, OverflowError, OSError) as e:
            raise CandleSourceError(f"invalid open time: {rows[-1][OPEN_TIME]!r}") from e

    return PriceSeries(
        closes=closes,
        highs=highs,
        lows=lows,
        volumes=volumes,
        as_of=as_of,
    )


class JsonFileCandleSource:
    """Read klines from <directory>/<SYMBOL>.json files."""

    def __init__(self, directory: Path):
        self._directory = Path(directory)

    def path_for(self, symbol: str) -> Path:
        return self._directory / f"{symbol.upper()}.json"

    def load(self, symbol: str, limit: int) -> PriceSeries:
        """Load the last ``limit`` candles for a symbol."""
        path = self.path_for(symbol)
        try:
            raw = path.read_bytes()
        except FileNotFoundError as e:
            raise CandleSourceError(f"{symbol}: no candle file at {path}") from e

        try:
            rows = orjson.loads(raw)
        except orjson.JSONDecodeError as e:
            raise CandleSourceError(f"{symbol}: invalid JSON in {path}: {e}") from e

        if not isinstance(rows, list):
            raise CandleSourceError(f"{symbol}: expected a list of kline rows in {path}")

        if limit > 0:
            rows = rows[-limit:]

        series = parse_klines(rows)
        logger.debug("Loaded %d candles for %s from %s", len(series), symbol, path)
        return series
