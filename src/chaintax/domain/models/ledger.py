"""Domain types for the FIFO cost-basis ledger."""

import uuid
from datetime import datetime
from decimal import Decimal

from pydantic import BaseModel, Field


class CostLot(BaseModel):
    """One acquisition of a token. Cost basis covers the original amount."""

    id: uuid.UUID = Field(default_factory=uuid.uuid4)
    address: str
    token: str
    symbol: str | None = None
    decimals: int = 18
    acquired_at: datetime
    acquired_tx_hash: str
    original_amount: int
    remaining_amount: int
    cost_basis_usd: Decimal
    disposed: bool = False
    disposed_at: datetime | None = None
    disposed_tx_hash: str | None = None

    def held_at(self, as_of: datetime) -> bool:
        """True if some of this lot was still held at `as_of`."""
        if self.acquired_at > as_of or self.remaining_amount <= 0:
            return False
        return not self.disposed or (self.disposed_at is not None and self.disposed_at > as_of)


class LotConsumption(BaseModel):
    """How much of one lot a disposal took."""

    lot_id: uuid.UUID
    amount: int
    cost_basis_usd: Decimal
    holding_days: int


class DisposalResult(BaseModel):
    cost_basis_usd: Decimal
    proceeds_usd: Decimal  # gross proceeds minus gas
    realized_gain_usd: Decimal
    holding_period_days: int
    amount_covered: int
    shortfall_amount: int = 0  # disposed without a covering lot, carries zero cost basis
    consumed: list[LotConsumption] = []

    @property
    def is_partial(self) -> bool:
        return self.shortfall_amount > 0


class HoldingView(BaseModel):
    """Unrealized view of one open lot valued at a point-in-time price."""

    lot_id: uuid.UUID
    token: str
    symbol: str | None = None
    remaining_amount: int
    amount: Decimal  # token units
    proportional_cost_basis: Decimal
    current_price: Decimal
    current_value: Decimal
    unrealized_gain: Decimal
    acquired_at: datetime
    acquired_tx_hash: str


class UnrealizedReport(BaseModel):
    as_of: datetime
    holdings: list[HoldingView] = []
    skipped_tokens: list[str] = []  # no resolvable price, excluded from totals

    @property
    def total_unrealized_gain(self) -> Decimal:
        return sum((h.unrealized_gain for h in self.holdings), Decimal(0))
