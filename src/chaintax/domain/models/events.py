"""Classified tax events produced from raw transactions."""

from datetime import datetime
from decimal import Decimal

from pydantic import BaseModel, Field

from chaintax.domain.enums.tax import TaxCategory


class TokenLeg(BaseModel):
    """One side of an event: a token and a raw integer amount (smallest unit)."""

    token: str  # lower-case contract address, or a native alias such as "eth"
    amount: int
    symbol: str | None = None
    decimals: int | None = None
    value_usd: Decimal | None = None  # None = not priced (price unavailable)


class ClassifiedEvent(BaseModel):
    """A categorized event. Pricing and ledger fields are filled by later stages."""

    tx_hash: str
    timestamp: datetime
    category: TaxCategory = Field(frozen=True)
    token_in: TokenLeg | None = None
    token_out: TokenLeg | None = None
    gas_fee_wei: int = 0
    gas_fee_usd: Decimal | None = None
    protocol: str | None = None
    notes: str = ""

    # Ledger results
    cost_basis_usd: Decimal | None = None
    proceeds_usd: Decimal | None = None
    realized_gain_usd: Decimal | None = None
    holding_period_days: int | None = None
    ledger_shortfall: int | None = None  # raw amount disposed without any covering lot
    error: str | None = None
