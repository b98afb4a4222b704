"""Signal and indicator data models."""

from datetime import datetime
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, model_validator


class Action(str, Enum):
    """Trade action."""

    BUY = "BUY"
    SELL = "SELL"
    HOLD = "HOLD"


class Trend(str, Enum):
    """Overall market trend classification."""

    BULLISH = "BULLISH"
    BEARISH = "BEARISH"
    SIDEWAYS = "SIDEWAYS"


class IndicatorResult(BaseModel):
    """Classified oscillator reading (RSI, Stochastic)."""

    model_config = ConfigDict(frozen=True)

    value: float
    classification: Action = Action.HOLD
    strength: float = Field(default=0.0, ge=0.0, le=1.0)


class MacdResult(BaseModel):
    """MACD line, signal line and histogram."""

    model_config = ConfigDict(frozen=True)

    macd: float = 0.0
    signal: float = 0.0
    histogram: float = 0.0


class BollingerBands(BaseModel):
    """Bollinger envelope around an SMA."""

    model_config = ConfigDict(frozen=True)

    upper: float = 0.0
    middle: float = 0.0
    lower: float = 0.0

    @property
    def width(self) -> float:
        """Relative band width, 0 when the middle band is 0."""
        if self.middle == 0:
            return 0.0
        return (self.upper - self.lower) / self.middle


class TradeSignal(BaseModel):
    """Trading recommendation produced by a strategy or the consensus."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    symbol: str
    action: Action
    confidence: float = Field(ge=0.0, le=1.0)
    price: float
    timestamp: datetime
    duration: str
    reason: str
    stop_loss: float = Field(default=0.0, alias="stopLoss")
    take_profit: float = Field(default=0.0, alias="takeProfit")
    leverage: int = Field(default=1, ge=1)

    @model_validator(mode="after")
    def _check_hold_confidence(self):
        if self.action == Action.HOLD and self.confidence != 0:
            raise ValueError(
                f"HOLD signal must have zero confidence, got {self.confidence}"
            )
        return self

    @property
    def is_actionable(self) -> bool:
        """True for BUY or SELL."""
        return self.action != Action.HOLD

    @property
    def risk_amount(self) -> float:
        """Get the risk amount (distance to stop loss)."""
        if self.action == Action.BUY:
            return self.price - self.stop_loss
        if self.action == Action.SELL:
            return self.stop_loss - self.price
        return 0.0

    @property
    def reward_amount(self) -> float:
        """Get the reward amount (distance to take profit)."""
        if self.action == Action.BUY:
            return self.take_profit - self.price
        if self.action == Action.SELL:
            return self.price - self.take_profit
        return 0.0


class MarketAnalysis(BaseModel):
    """Snapshot of trend, volatility and oscillator state for one series."""

    model_config = ConfigDict(frozen=True)

    trend: Trend
    strength: float
    volume: float = 0.0
    volatility: float  # mean absolute bar-to-bar change, in percent
    rsi: float
    macd: MacdResult
