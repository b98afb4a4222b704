"""Price series input model."""

from datetime import datetime, timezone

from pydantic import BaseModel, ConfigDict


class PriceSeries(BaseModel):
    """Chronological, index-aligned OHLCV arrays for one instrument.

    Only ``closes`` is required. Missing highs/lows fall back to the closes
    and missing volumes to a unit volume per bar.
    """

    model_config = ConfigDict(frozen=True)

    closes: tuple[float, ...]
    highs: tuple[float, ...] = ()
    lows: tuple[float, ...] = ()
    volumes: tuple[float, ...] = ()
    as_of: datetime | None = None  # time of the last bar

    def model_post_init(self, __context) -> None:
        """Fill optional arrays so all four stay index-aligned."""
        if not self.highs:
            object.__setattr__(self, "highs", self.closes)
        if not self.lows:
            object.__setattr__(self, "lows", self.closes)
        if not self.volumes:
            object.__setattr__(self, "volumes", (1.0,) * len(self.closes))

    @property
    def last_price(self) -> float:
        """Most recent close, 0 for an empty series."""
        if not self.closes:
            return 0.0
        return self.closes[-1]

    @property
    def timestamp(self) -> datetime:
        """Timestamp to stamp signals with."""
        return self.as_of or datetime.now(timezone.utc)

    def __len__(self) -> int:
        return len(self.closes)
