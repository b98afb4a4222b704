"""Capability stubs.

These catalog entries depend on data this package does not have: chart
pattern recognition, trained models, and sentiment, on-chain, derivatives
or order-book feeds. Each always returns a HOLD signal stating what is
missing, so the catalog keeps its full 58-entry shape.
"""

from signal_core.strategy.registry import register_stub

PATTERN_RECOGNITION = "chart pattern recognition"

CAPABILITY_STUBS: tuple[tuple[str, str], ...] = (
    ("Elliott Wave", PATTERN_RECOGNITION),
    ("Harmonic Patterns", PATTERN_RECOGNITION),
    ("Gartley Pattern", PATTERN_RECOGNITION),
    ("Butterfly Pattern", PATTERN_RECOGNITION),
    ("Bat Pattern", PATTERN_RECOGNITION),
    ("Crab Pattern", PATTERN_RECOGNITION),
    ("Cypher Pattern", PATTERN_RECOGNITION),
    ("Deep Learning AI", "a trained model"),
    ("Neural Network", "a trained model"),
    ("Genetic Algorithm", "parameter optimization runs"),
    ("Reinforcement Learning", "a trained agent"),
    ("Sentiment Analysis", "external sentiment data"),
    ("Social Volume", "social media data"),
    ("Whale Tracking", "on-chain data"),
    ("Liquidity Analysis", "order book data"),
    ("Market Cycle", "multi-year price history"),
    ("Seasonality", "historical seasonal data"),
    ("Correlation Matrix", "multiple assets"),
    ("Volatility Smile", "options data"),
    ("Gamma Exposure", "options flow data"),
    ("Delta Neutral", "options positions"),
    ("Options Flow", "options market data"),
    ("Funding Rate", "perpetual swap data"),
    ("Open Interest", "futures market data"),
    ("Leverage Ratio", "margin trading data"),
    ("Fear & Greed", "sentiment indicators"),
    ("Network Growth", "blockchain data"),
    ("On-Chain Analysis", "blockchain metrics"),
    ("MVRV Z-Score", "market value vs realized value data"),
    ("NVT Ratio", "network value to transaction data"),
    ("Stock-to-Flow", "supply issuance data"),
    ("Realized Price", "UTXO age data"),
    ("Coin Days Destroyed", "coin movement data"),
)

for _name, _requirement in CAPABILITY_STUBS:
    register_stub(_name, _requirement)
