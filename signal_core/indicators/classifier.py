"""Map raw oscillator readings to BUY/SELL/HOLD with a strength.

Strength grows linearly from 0 at the threshold to 1 at the extreme of
the 0-100 scale.
"""

from signal_core.models import Action, IndicatorResult

RSI_OVERSOLD = 30.0
RSI_OVERBOUGHT = 70.0
STOCHASTIC_OVERSOLD = 20.0
STOCHASTIC_OVERBOUGHT = 80.0


def _clamp(value: float) -> float:
    return max(0.0, min(value, 1.0))


def classify(value: float, oversold: float, overbought: float) -> IndicatorResult:
    """Classify a 0-100 oscillator value against oversold/overbought bounds.

    Args:
        value: Raw oscillator value
        oversold: Values strictly below this are BUY
        overbought: Values strictly above this are SELL

    Returns:
        IndicatorResult carrying the raw value
    """
    if value < oversold:
        strength = (oversold - value) / oversold
        return IndicatorResult(
            value=value, classification=Action.BUY, strength=_clamp(strength)
        )
    if value > overbought:
        strength = (value - overbought) / (100.0 - overbought)
        return IndicatorResult(
            value=value, classification=Action.SELL, strength=_clamp(strength)
        )
    return IndicatorResult(value=value)


def classify_rsi(value: float) -> IndicatorResult:
    """Classify an RSI reading (30/70)."""
    return classify(value, RSI_OVERSOLD, RSI_OVERBOUGHT)


def classify_stochastic(value: float) -> IndicatorResult:
    """Classify a Stochastic %K reading (20/80)."""
    return classify(value, STOCHASTIC_OVERSOLD, STOCHASTIC_OVERBOUGHT)
