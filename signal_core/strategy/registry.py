"""Strategy registry holding the ordered 58-entry catalog.

Usage:
    @register_strategy("Moving Average Cross", minimum_bars=20,
                       duration="30m-2h", leverage=4)
    def moving_average_cross(series: PriceSeries) -> Decision:
        ...

    register_stub("Elliott Wave", "chart pattern recognition")

    catalog = get_catalog()

Catalog order is fixed by STRATEGY_NAMES, not by registration order.
Consumers zip get_all_signals() against get_all_strategy_names()
positionally, so entries must never be reordered or renamed.
"""

from __future__ import annotations

import logging

from signal_core.strategy.base import StrategyBody, StrategyDescriptor

logger = logging.getLogger(__name__)

STRATEGY_NAMES: tuple[str, ...] = (
    "Multi-Timeframe RSI",
    "Trend Following MACD",
    "Mean Reversion BB",
    "Volume-Weighted MACD",
    "Ichimoku Cloud",
    "Supertrend Strategy",
    "Parabolic SAR",
    "ADX Momentum",
    "RSI Divergence",
    "MACD Histogram",
    "Bollinger Squeeze",
    "Stochastic Oscillator",
    "Williams %R",
    "CCI Strategy",
    "ATR Breakout",
    "VWAP Strategy",
    "Fibonacci Retracement",
    "Pivot Points",
    "Moving Average Cross",
    "EMA Ribbon",
    "Price Action",
    "Support Resistance",
    "Volume Profile",
    "Order Flow",
    "Market Structure",
    "Elliott Wave",
    "Harmonic Patterns",
    "Gartley Pattern",
    "Butterfly Pattern",
    "Bat Pattern",
    "Crab Pattern",
    "Cypher Pattern",
    "Deep Learning AI",
    "Neural Network",
    "Genetic Algorithm",
    "Reinforcement Learning",
    "Sentiment Analysis",
    "Social Volume",
    "Whale Tracking",
    "Liquidity Analysis",
    "Market Cycle",
    "Seasonality",
    "Correlation Matrix",
    "Volatility Smile",
    "Gamma Exposure",
    "Delta Neutral",
    "Options Flow",
    "Funding Rate",
    "Open Interest",
    "Leverage Ratio",
    "Fear & Greed",
    "Network Growth",
    "On-Chain Analysis",
    "MVRV Z-Score",
    "NVT Ratio",
    "Stock-to-Flow",
    "Realized Price",
    "Coin Days Destroyed",
)

# Global registry: strategy_name -> descriptor
_REGISTRY: dict[str, StrategyDescriptor] = {}

_catalog: tuple[StrategyDescriptor, ...] | None = None


def _add(descriptor: StrategyDescriptor) -> None:
    global _catalog

    if descriptor.name not in STRATEGY_NAMES:
        raise ValueError(f"Strategy '{descriptor.name}' is not in the catalog")
    if descriptor.name in _REGISTRY:
        raise ValueError(f"Strategy '{descriptor.name}' is already registered")

    _REGISTRY[descriptor.name] = descriptor
    _catalog = None
    logger.debug(
        "Registered strategy: %s (min_bars=%d, stub=%s)",
        descriptor.name,
        descriptor.minimum_bars,
        descriptor.is_stub,
    )


def register_strategy(
    name: str,
    minimum_bars: int,
    duration: str,
    leverage: int,
):
    """Decorator to register a strategy body under a catalog name.

    Args:
        name: Catalog name (must appear in STRATEGY_NAMES).
        minimum_bars: Bars required before the body runs.
        duration: Holding period label for emitted signals.
        leverage: Suggested leverage for emitted signals.

    Returns:
        Decorator that registers the function and returns it unchanged.

    Raises:
        ValueError: If the name is unknown or already registered.
    """

    def decorator(func: StrategyBody) -> StrategyBody:
        _add(
            StrategyDescriptor(
                name=name,
                minimum_bars=minimum_bars,
                duration=duration,
                leverage=leverage,
                body=func,
            )
        )
        return func

    return decorator


def register_stub(name: str, requirement: str) -> None:
    """Register a capability stub that always returns HOLD.

    Args:
        name: Catalog name (must appear in STRATEGY_NAMES).
        requirement: Data kind the strategy would need, e.g. "options data".
    """
    _add(
        StrategyDescriptor(
            name=name,
            minimum_bars=0,
            duration="N/A",
            leverage=1,
            requirement=requirement,
        )
    )


def get_strategy(name: str) -> StrategyDescriptor:
    """Get a descriptor by name.

    Raises:
        KeyError: If no strategy is registered under the given name.
    """
    descriptor = _REGISTRY.get(name)
    if descriptor is None:
        available = ", ".join(sorted(_REGISTRY.keys())) or "(none)"
        raise KeyError(f"Unknown strategy '{name}'. Available: {available}")
    return descriptor


def get_catalog() -> tuple[StrategyDescriptor, ...]:
    """Return all descriptors in catalog order.

    Raises:
        RuntimeError: If any catalog name has no registered strategy.
    """
    global _catalog

    if _catalog is None:
        missing = [name for name in STRATEGY_NAMES if name not in _REGISTRY]
        if missing:
            raise RuntimeError(f"Unregistered strategies: {', '.join(missing)}")
        _catalog = tuple(_REGISTRY[name] for name in STRATEGY_NAMES)
    return _catalog


def get_all_strategy_names() -> list[str]:
    """Return the catalog names in order."""
    return list(STRATEGY_NAMES)


def list_implemented() -> list[str]:
    """Names of strategies that compute signals, in catalog order."""
    return [d.name for d in get_catalog() if not d.is_stub]


def list_stubs() -> list[str]:
    """Names of capability stubs, in catalog order."""
    return [d.name for d in get_catalog() if d.is_stub]
