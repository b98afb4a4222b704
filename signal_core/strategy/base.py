"""Shared building blocks for catalog strategies.

This module provides:
- Decision: what a strategy body computes (action, confidence, levels, reason)
- StrategyDescriptor: a catalog entry wrapping a body with its guard
- VoteTally: buy/sell vote counter with a capped confidence accumulator
- Level helpers that keep stop/target on the correct side of the entry
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable

from signal_core.models import Action, IndicatorResult, PriceSeries, TradeSignal

GUARD_DURATION = "N/A"
GUARD_LEVERAGE = 1


@dataclass(frozen=True)
class Decision:
    """Outcome of one strategy body before it is stamped into a TradeSignal."""

    action: Action
    confidence: float
    reason: str
    stop_loss: float = 0.0
    take_profit: float = 0.0


StrategyBody = Callable[[PriceSeries], Decision]


def hold_signal(series: PriceSeries, symbol: str, reason: str) -> TradeSignal:
    """Neutral signal used for insufficient data, stubs and no consensus."""
    return TradeSignal(
        symbol=symbol,
        action=Action.HOLD,
        confidence=0.0,
        price=series.last_price,
        timestamp=series.timestamp,
        duration=GUARD_DURATION,
        reason=reason,
        stop_loss=0.0,
        take_profit=0.0,
        leverage=GUARD_LEVERAGE,
    )


@dataclass(frozen=True)
class StrategyDescriptor:
    """One catalog entry.

    Attributes:
        name: Display name, stable across releases.
        minimum_bars: Bars required before the body runs.
        duration: Typical holding period label.
        leverage: Suggested leverage for actionable signals.
        body: Computation for implemented strategies.
        requirement: Missing data kind for capability stubs, None otherwise.
    """

    name: str
    minimum_bars: int
    duration: str
    leverage: int
    body: StrategyBody | None = None
    requirement: str | None = None

    @property
    def is_stub(self) -> bool:
        return self.requirement is not None

    def evaluate(self, series: PriceSeries, symbol: str) -> TradeSignal:
        """Run the strategy against one series."""
        if self.requirement is not None or self.body is None:
            return hold_signal(
                series, symbol, f"{self.name} requires {self.requirement}"
            )

        if len(series) < self.minimum_bars:
            return hold_signal(
                series,
                symbol,
                f"Insufficient data for {self.name}: "
                f"need {self.minimum_bars} bars, got {len(series)}",
            )

        decision = self.body(series)
        actionable = decision.action != Action.HOLD

        return TradeSignal(
            symbol=symbol,
            action=decision.action,
            confidence=decision.confidence if actionable else 0.0,
            price=series.last_price,
            timestamp=series.timestamp,
            duration=self.duration,
            reason=decision.reason,
            stop_loss=decision.stop_loss if actionable else 0.0,
            take_profit=decision.take_profit if actionable else 0.0,
            leverage=self.leverage,
        )


@dataclass
class VoteTally:
    """Counts BUY/SELL votes and accumulates their confidence contributions."""

    buy: int = 0
    sell: int = 0
    score: float = 0.0

    def add(self, action: Action, weight: float) -> None:
        """Record one fired condition. HOLD is ignored."""
        if action == Action.BUY:
            self.buy += 1
            self.score += weight
        elif action == Action.SELL:
            self.sell += 1
            self.score += weight

    def add_indicator(self, result: IndicatorResult) -> None:
        """Vote with a classified oscillator, weighted by its strength."""
        self.add(result.classification, result.strength)

    @property
    def action(self) -> Action:
        """Strict majority; ties are HOLD."""
        if self.buy > self.sell:
            return Action.BUY
        if self.sell > self.buy:
            return Action.SELL
        return Action.HOLD

    def confidence(self, divisor: int, cap: float) -> float:
        """Averaged accumulator, capped per strategy."""
        return min(self.score / divisor, cap)


def directional(buy: bool, sell: bool) -> Action:
    """Action for a single buy/sell condition pair, buy checked first."""
    if buy:
        return Action.BUY
    if sell:
        return Action.SELL
    return Action.HOLD


def percent_levels(
    action: Action,
    price: float,
    stop_pct: float,
    target_pct: float,
) -> tuple[float, float]:
    """Stop and target as percentage offsets from the entry price."""
    if action == Action.BUY:
        return price * (1 - stop_pct), price * (1 + target_pct)
    if action == Action.SELL:
        return price * (1 + stop_pct), price * (1 - target_pct)
    return 0.0, 0.0


def stop_level(action: Action, price: float, level: float, fallback_pct: float) -> float:
    """Use ``level`` as the stop when it lies on the losing side of ``price``."""
    if action == Action.BUY:
        return level if level < price else price * (1 - fallback_pct)
    if action == Action.SELL:
        return level if level > price else price * (1 + fallback_pct)
    return 0.0


def target_level(action: Action, price: float, level: float, fallback_pct: float) -> float:
    """Use ``level`` as the target when it lies on the winning side of ``price``."""
    if action == Action.BUY:
        return level if level > price else price * (1 + fallback_pct)
    if action == Action.SELL:
        return level if level < price else price * (1 - fallback_pct)
    return 0.0
