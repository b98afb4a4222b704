"""Consensus aggregation over the full strategy catalog.

Runs every strategy against one series, drops HOLD outputs and reduces
the remaining BUY/SELL votes to a single recommendation.

Tie-break: the consensus is BUY only on a strict buy majority, so equal
buy and sell counts resolve to SELL.
"""

from __future__ import annotations

import logging
from datetime import datetime
from typing import Sequence

from signal_core.models import Action, PriceSeries, TradeSignal
from signal_core.strategy import get_all_strategy_names, get_catalog

logger = logging.getLogger(__name__)

CONSENSUS_DURATION = "15m-4h"
CONSENSUS_LEVERAGE = 3
CONSENSUS_STOP_PCT = 0.02
CONSENSUS_TARGET_PCT = 0.03
NO_CONSENSUS_REASON = "No clear consensus across strategies"


def get_all_signals(series: PriceSeries, symbol: str) -> list[TradeSignal]:
    """
    Evaluate every catalog strategy against one series.

    Args:
        series: Price series for the instrument
        symbol: Instrument identifier stamped on each signal

    Returns:
        One TradeSignal per strategy, positionally matched to
        get_all_strategy_names()
    """
    signals = [descriptor.evaluate(series, symbol) for descriptor in get_catalog()]
    logger.debug(
        "%s: %d signals, %d actionable",
        symbol,
        len(signals),
        sum(1 for s in signals if s.is_actionable),
    )
    return signals


def build_consensus(
    signals: Sequence[TradeSignal],
    symbol: str,
    price: float,
    timestamp: datetime,
) -> TradeSignal:
    """
    Reduce a list of strategy signals to one consensus signal.

    confidence = mean(confidence of non-HOLD) * winning / non-HOLD

    Args:
        signals: Strategy outputs (any length)
        symbol: Instrument identifier
        price: Current price, the entry for stop/target offsets
        timestamp: Timestamp for the consensus signal

    Returns:
        HOLD with NO_CONSENSUS_REASON when every signal is HOLD, otherwise
        a BUY or SELL signal with the vote tally in its reason
    """
    voting = [s for s in signals if s.action != Action.HOLD]
    if not voting:
        return TradeSignal(
            symbol=symbol,
            action=Action.HOLD,
            confidence=0.0,
            price=price,
            timestamp=timestamp,
            duration="N/A",
            reason=NO_CONSENSUS_REASON,
            leverage=1,
        )

    buy_count = sum(1 for s in voting if s.action == Action.BUY)
    sell_count = len(voting) - buy_count

    action = Action.BUY if buy_count > sell_count else Action.SELL
    winning = max(buy_count, sell_count)
    avg_confidence = sum(s.confidence for s in voting) / len(voting)

    if action == Action.BUY:
        stop_loss = price * (1 - CONSENSUS_STOP_PCT)
        take_profit = price * (1 + CONSENSUS_TARGET_PCT)
    else:
        stop_loss = price * (1 + CONSENSUS_STOP_PCT)
        take_profit = price * (1 - CONSENSUS_TARGET_PCT)

    return TradeSignal(
        symbol=symbol,
        action=action,
        confidence=avg_confidence * (winning / len(voting)),
        price=price,
        timestamp=timestamp,
        duration=CONSENSUS_DURATION,
        reason=f"Consensus: {winning}/{len(voting)} strategies agree",
        stop_loss=stop_loss,
        take_profit=take_profit,
        leverage=CONSENSUS_LEVERAGE,
    )


def get_consensus_signal(series: PriceSeries, symbol: str) -> TradeSignal:
    """Evaluate the whole catalog and return the consensus signal."""
    timestamp = series.timestamp
    signals = get_all_signals(series.model_copy(update={"as_of": timestamp}), symbol)
    consensus = build_consensus(signals, symbol, series.last_price, timestamp)
    logger.debug("%s consensus: %s (%s)", symbol, consensus.action.value, consensus.reason)
    return consensus


def named_signals(signals: Sequence[TradeSignal]) -> list[tuple[str, TradeSignal]]:
    """Pair a full catalog result list with the strategy names."""
    return list(zip(get_all_strategy_names(), signals))


__all__ = [
    "build_consensus",
    "get_all_signals",
    "get_all_strategy_names",
    "get_consensus_signal",
    "named_signals",
]
