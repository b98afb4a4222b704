"""CLI entry point for the strategy scanner.

Reads kline files from a directory (one <SYMBOL>.json per symbol), runs
the full strategy catalog for each symbol and prints the consensus.

Usage:
    python -m scanner
    python -m scanner --symbols BTCUSDT,ETHUSDT --candles-dir ./candles
    python -m scanner --limit 200 --interval 4h --output results.json
"""

import argparse
import asyncio
import logging
from pathlib import Path

from scanner.candles import JsonFileCandleSource
from scanner.config import get_settings
from scanner.report import ReportFormatter
from scanner.service import ScanService
from scanner.watchlist import load_watchlist

logger = logging.getLogger(__name__)


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Run the strategy catalog and consensus over kline files",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python -m scanner
  python -m scanner --symbols BTCUSDT,ETHUSDT --candles-dir ./candles
  python -m scanner --limit 200 --interval 4h --output results.json
        """,
    )
    parser.add_argument(
        "--symbols",
        type=str,
        default=None,
        help="Comma-separated symbols (default: watchlist.yaml or settings)",
    )
    parser.add_argument(
        "--candles-dir",
        type=Path,
        default=None,
        help="Directory holding <SYMBOL>.json kline files",
    )
    parser.add_argument(
        "--watchlist",
        type=Path,
        default=None,
        help="Watchlist YAML file",
    )
    parser.add_argument(
        "--interval",
        type=str,
        default=None,
        help="Candle interval label for the report (default: settings)",
    )
    parser.add_argument(
        "--limit",
        type=int,
        default=None,
        help="Number of most recent candles to evaluate",
    )
    parser.add_argument(
        "--top",
        type=int,
        default=3,
        help="Strategies listed per direction in the console report",
    )
    parser.add_argument(
        "--output",
        type=str,
        default=None,
        help="Save results to JSON file",
    )
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Enable debug logging",
    )
    return parser.parse_args(argv)


def resolve_symbols(args: argparse.Namespace) -> list[str]:
    """Symbols from --symbols, else the watchlist, else settings."""
    settings = get_settings()
    if args.symbols:
        return [s.strip().upper() for s in args.symbols.split(",") if s.strip()]

    path = args.watchlist or settings.watchlist_path
    return load_watchlist(path, settings.symbols).enabled_symbols()


async def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv)
    settings = get_settings()

    # Configure logging
    level = logging.DEBUG if args.verbose else getattr(logging, settings.log_level.upper(), logging.INFO)
    logging.basicConfig(
        level=level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%H:%M:%S",
    )
    logging.getLogger("asyncio").setLevel(logging.WARNING)

    symbols = resolve_symbols(args)
    if not symbols:
        logger.error("No symbols to scan")
        return 1

    source = JsonFileCandleSource(args.candles_dir or settings.candles_dir)
    service = ScanService(
        source,
        candle_limit=args.limit or settings.candle_limit,
        max_concurrency=settings.max_concurrency,
    )

    interval = args.interval or settings.interval
    scans = await service.scan(symbols)
    ReportFormatter.print_console(scans, top=args.top, interval=interval)

    if args.output:
        ReportFormatter.save_json(scans, args.output, interval=interval)

    return 0 if any(scan.ok for scan in scans) else 1


def run() -> None:
    raise SystemExit(asyncio.run(main()))


if __name__ == "__main__":
    run()
