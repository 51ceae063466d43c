from datetime import datetime
from decimal import Decimal

from pydantic import BaseModel, ConfigDict

from chaintax.domain.enums.price import PriceSource


class PriceQuote(BaseModel):
    """A USD price for a token at a point in time."""

    model_config = ConfigDict(frozen=True)

    token: str
    timestamp: datetime
    price_usd: Decimal
    source: PriceSource
    symbol: str | None = None

    @property
    def is_available(self) -> bool:
        return self.source != PriceSource.UNKNOWN and self.price_usd > 0
