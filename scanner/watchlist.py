"""Watchlist loaded from watchlist.yaml.

Example:
    symbols:
      - BTCUSDT
      - symbol: ETHUSDT
        enabled: false

Falls back to the configured default symbols when the file doesn't exist.
"""

import logging
from pathlib import Path

import yaml
from pydantic import BaseModel, field_validator, model_validator

logger = logging.getLogger(__name__)


class WatchlistEntry(BaseModel):
    """A single symbol in the watchlist."""

    symbol: str
    enabled: bool = True

    @field_validator("symbol")
    @classmethod
    def _normalize(cls, value: str) -> str:
        value = value.strip().upper()
        if not value:
            raise ValueError("symbol must not be empty")
        return value


class Watchlist(BaseModel):
    """Top-level watchlist.yaml configuration."""

    symbols: list[WatchlistEntry] = []

    @model_validator(mode="before")
    @classmethod
    def _expand_bare_symbols(cls, data):
        # Allow plain strings alongside {symbol, enabled} mappings
        if isinstance(data, dict) and isinstance(data.get("symbols"), list):
            data = dict(data)
            data["symbols"] = [
                {"symbol": item} if isinstance(item, str) else item
                for item in data["symbols"]
            ]
        return data

    def enabled_symbols(self) -> list[str]:
        """Enabled symbols in file order, duplicates removed."""
        seen: dict[str, None] = {}
        for entry in self.symbols:
            if entry.enabled:
                seen.setdefault(entry.symbol, None)
        return list(seen)


def load_watchlist(path: Path, default_symbols: list[str]) -> Watchlist:
    """Load the watchlist from YAML.

    Args:
        path: watchlist.yaml location
        default_symbols: Symbols used when the file is missing or empty

    Returns:
        Parsed Watchlist

    Raises:
        ValueError: If the file exists but is not a valid watchlist.
    """
    if not path.exists():
        logger.info("No watchlist at %s, using %d default symbols", path, len(default_symbols))
        return Watchlist(symbols=default_symbols)

    with open(path) as f:
        raw = yaml.safe_load(f) or {}

    if not isinstance(raw, dict):
        raise ValueError(f"{path}: expected a mapping with a 'symbols' list")

    watchlist = Watchlist.model_validate(raw)
    if not watchlist.symbols:
        return Watchlist(symbols=default_symbols)

    logger.info("Loaded watchlist %s: %d symbols", path, len(watchlist.enabled_symbols()))
    return watchlist
