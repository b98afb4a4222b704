"""Report formatting for scan results.

Outputs results to console (formatted tables) and JSON files.
"""

from __future__ import annotations

from pathlib import Path

import orjson

from signal_core.models import Action, TradeSignal

from scanner.service import SymbolScan


def risk_reward(signal: TradeSignal) -> float:
    """Reward per unit of risk, 0 for HOLD or a zero-distance stop."""
    risk = signal.risk_amount
    if risk <= 0:
        return 0.0
    return signal.reward_amount / risk


class ReportFormatter:
    """Format scan results for display and export."""

    @staticmethod
    def print_console(scans: list[SymbolScan], top: int = 3, interval: str = "1h") -> None:
        """Print formatted report to console."""
        print("\n" + "=" * 86)
        print(f"  STRATEGY CONSENSUS ({interval} candles)")
        print("=" * 86)
        print(
            f"  {'Symbol':<10} {'Action':<6} {'Conf':>6} {'Price':>12} "
            f"{'Stop':>12} {'Target':>12} {'R:R':>5}  Tally"
        )
        for scan in scans:
            if not scan.ok:
                print(f"  {scan.symbol:<10} ERROR  {scan.error}")
                continue
            c = scan.consensus
            print(
                f"  {scan.symbol:<10} {c.action.value:<6} {c.confidence:>6.2f} "
                f"{c.price:>12.4f} {c.stop_loss:>12.4f} {c.take_profit:>12.4f} "
                f"{risk_reward(c):>5.2f}  {c.reason}"
            )

        for scan in scans:
            if not scan.ok:
                continue
            a = scan.analysis
            print("\n" + "-" * 86)
            print(
                f"  {scan.symbol}  {a.trend.value}  RSI {a.rsi:.1f}  "
                f"volatility {a.volatility:.2f}%  bars {scan.bars}"
            )
            print("-" * 86)
            for action in (Action.BUY, Action.SELL):
                for name, signal in scan.top_signals(action, top):
                    print(
                        f"  {action.value:<5} {name:<24} {signal.confidence:>5.2f}  "
                        f"{signal.duration:<8} x{signal.leverage}  "
                        f"R:R {risk_reward(signal):.2f}  {signal.reason}"
                    )

        print("=" * 86)

    @staticmethod
    def to_dict(scan: SymbolScan, interval: str = "1h") -> dict:
        """Serializable view of one scan."""
        if not scan.ok:
            return {"symbol": scan.symbol, "error": scan.error}
        return {
            "symbol": scan.symbol,
            "interval": interval,
            "bars": scan.bars,
            "consensus": {
                **scan.consensus.model_dump(mode="json", by_alias=True),
                "riskReward": risk_reward(scan.consensus),
            },
            "analysis": scan.analysis.model_dump(mode="json"),
            "signals": [
                {"strategy": name, **signal.model_dump(mode="json", by_alias=True)}
                for name, signal in scan.named_signals()
            ],
        }

    @staticmethod
    def save_json(scans: list[SymbolScan], path: str | Path, interval: str = "1h") -> None:
        """Save scan results to a JSON file."""
        data = [ReportFormatter.to_dict(scan, interval) for scan in scans]
        Path(path).write_bytes(orjson.dumps(data, option=orjson.OPT_INDENT_2))
        print(f"\nResults saved to {path}")
