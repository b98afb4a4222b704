"""Strategy catalog.

Public API:
- StrategyDescriptor: catalog entry (name, minimum_bars, evaluate)
- Decision / VoteTally: building blocks for strategy bodies
- register_strategy / register_stub: add entries to the registry
- get_catalog: all 58 descriptors in catalog order
- get_strategy: descriptor by name
- get_all_strategy_names: the ordered name list

Importing this package registers all built-in strategies.
"""

from signal_core.strategy.base import (
    Decision,
    StrategyDescriptor,
    VoteTally,
    hold_signal,
)
from signal_core.strategy.registry import (
    STRATEGY_NAMES,
    register_strategy,
    register_stub,
    get_catalog,
    get_strategy,
    get_all_strategy_names,
    list_implemented,
    list_stubs,
)

# Import built-in strategies to trigger auto-registration
import signal_core.strategy.momentum  # noqa: F401
import signal_core.strategy.trend  # noqa: F401
import signal_core.strategy.volatility  # noqa: F401
import signal_core.strategy.levels  # noqa: F401
import signal_core.strategy.volume  # noqa: F401
import signal_core.strategy.stubs  # noqa: F401

__all__ = [
    "Decision",
    "StrategyDescriptor",
    "VoteTally",
    "hold_signal",
    "STRATEGY_NAMES",
    "register_strategy",
    "register_stub",
    "get_catalog",
    "get_strategy",
    "get_all_strategy_names",
    "list_implemented",
    "list_stubs",
]
