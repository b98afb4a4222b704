"""Scanner configuration."""

from functools import lru_cache
from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict


class ScannerSettings(BaseSettings):
    """Scanner settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="SCANNER_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Symbols scanned when no watchlist file is present
    symbols: list[str] = ["BTCUSDT", "ETHUSDT", "SOLUSDT", "BNBUSDT", "XRPUSDT"]

    # Candle input: one <SYMBOL>.json kline file per symbol
    candles_dir: Path = Path("candles")
    interval: str = "1h"
    candle_limit: int = 100

    watchlist_path: Path = Path("watchlist.yaml")

    # Symbols evaluated at the same time
    max_concurrency: int = 8

    log_level: str = "INFO"


@lru_cache
def get_settings() -> ScannerSettings:
    """Get cached settings instance."""
    return ScannerSettings()
