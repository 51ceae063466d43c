"""Domain types for tax rates and the per-run tax summary."""

from datetime import datetime
from decimal import Decimal
from enum import Enum

from pydantic import BaseModel, ConfigDict, model_validator

from chaintax.exceptions import InvalidConfigError


class UnrealizedAsOf(str, Enum):
    """Live valuation marker. Point-in-time reports pass a datetime instead."""

    NOW = "NOW"


class TaxRates(BaseModel):
    """Flat rates applied per bucket. No bracket modelling."""

    model_config = ConfigDict(frozen=True)

    ordinary_income_rate: Decimal = Decimal("0.30")
    short_term_rate: Decimal = Decimal("0.30")
    long_term_rate: Decimal = Decimal("0.15")
    long_term_threshold_days: int = 365

    @model_validator(mode="after")
    def _check_ranges(self) -> "TaxRates":
        for name in ("ordinary_income_rate", "short_term_rate", "long_term_rate"):
            value = getattr(self, name)
            if value < 0 or value > 1:
                raise InvalidConfigError(f"{name} must be within [0, 1], got {value}")
        if self.long_term_threshold_days <= 0:
            raise InvalidConfigError(
                f"long_term_threshold_days must be positive, got {self.long_term_threshold_days}"
            )
        return self


class TaxSummary(BaseModel):
    """Result of one report run. Immutable; a re-run creates a new one."""

    model_config = ConfigDict(frozen=True)

    address: str
    ordinary_income_usd: Decimal = Decimal(0)
    capital_gain_realized_usd: Decimal = Decimal(0)
    short_term_usd: Decimal = Decimal(0)
    long_term_usd: Decimal = Decimal(0)
    total_gas_fee_usd: Decimal = Decimal(0)
    capital_gain_unrealized_usd: Decimal = Decimal(0)
    estimated_tax_due: Decimal = Decimal(0)
    ordinary_income_rate: Decimal
    short_term_rate: Decimal
    long_term_rate: Decimal
    long_term_threshold_days: int
    unrealized_as_of: datetime
    skipped_tokens: list[str] = []
    event_errors: dict[str, list[str]] = {}  # tx_hash -> ledger errors, one per failed event
