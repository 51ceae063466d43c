"""TaxEngine — walks classified events through the ledger and totals the tax buckets."""

import logging
from datetime import datetime, timezone
from decimal import Decimal

from chaintax.accounting.fifo import holding_term
from chaintax.accounting.ledger import CostBasisLedger
from chaintax.domain.enums.tax import HoldingTerm, TaxCategory
from chaintax.domain.models.events import ClassifiedEvent, TokenLeg
from chaintax.domain.models.tax import TaxRates, TaxSummary, UnrealizedAsOf
from chaintax.exceptions import LedgerConsistencyError
from chaintax.infra.price.service import PriceResolver

logger = logging.getLogger(__name__)

INCOME_CATEGORIES = {TaxCategory.AIRDROP, TaxCategory.STAKING}


class TaxEngine:
    """Calculate ordinary income, realized (FIFO) and unrealized gains, and estimated tax."""

    def __init__(self, ledger: CostBasisLedger, resolver: PriceResolver) -> None:
        self._ledger = ledger
        self._resolver = resolver

    @property
    def ledger(self) -> CostBasisLedger:
        return self._ledger

    async def summarize(
        self,
        address: str,
        events: list[ClassifiedEvent],
        rates: TaxRates | None = None,
        *,
        unrealized_as_of: datetime | UnrealizedAsOf = UnrealizedAsOf.NOW,
        network: str = "ethereum",
    ) -> TaxSummary:
        """Run the ledger over `events` (mutating lot state) and return the summary.

        `unrealized_as_of` must be explicit about the view: `UnrealizedAsOf.NOW`
        for live holdings, or a period cutoff for a point-in-time report.
        """
        rates = rates or TaxRates()
        address = address.lower()

        ordinary = Decimal(0)
        short_term = Decimal(0)
        long_term = Decimal(0)
        gas_total = Decimal(0)
        errors: dict[str, list[str]] = {}

        # sorted() is stable: same-timestamp events keep classification order
        for event in sorted(events, key=lambda e: e.timestamp):
            if event.gas_fee_usd is not None:
                gas_total += event.gas_fee_usd

            try:
                if event.category in INCOME_CATEGORIES:
                    ordinary += self._record_income(address, event)
                elif event.category == TaxCategory.DISPOSAL:
                    gain = self._record_disposal(address, event)
                    if gain is not None:
                        term = holding_term(event.holding_period_days or 0, rates.long_term_threshold_days)
                        if term == HoldingTerm.LONG:
                            long_term += gain
                        else:
                            short_term += gain
            except LedgerConsistencyError as e:
                logger.error("Ledger error for %s: %s", event.tx_hash, e)
                event.error = str(e)
                errors.setdefault(event.tx_hash, []).append(str(e))

        as_of = datetime.now(timezone.utc) if unrealized_as_of == UnrealizedAsOf.NOW else unrealized_as_of
        unrealized = await self._ledger.unrealized_positions(address, as_of, self._resolver, network)

        estimated = (
            ordinary * rates.ordinary_income_rate
            + short_term * rates.short_term_rate
            + long_term * rates.long_term_rate
        )

        return TaxSummary(
            address=address,
            ordinary_income_usd=ordinary,
            capital_gain_realized_usd=short_term + long_term,
            short_term_usd=short_term,
            long_term_usd=long_term,
            total_gas_fee_usd=gas_total,
            capital_gain_unrealized_usd=unrealized.total_unrealized_gain,
            estimated_tax_due=estimated,
            ordinary_income_rate=rates.ordinary_income_rate,
            short_term_rate=rates.short_term_rate,
            long_term_rate=rates.long_term_rate,
            long_term_threshold_days=rates.long_term_threshold_days,
            unrealized_as_of=as_of,
            skipped_tokens=unrealized.skipped_tokens,
            event_errors=errors,
        )

    def _record_income(self, address: str, event: ClassifiedEvent) -> Decimal:
        """Income = USD value of the received leg; the leg becomes a lot at that cost."""
        leg = event.token_in
        if leg is None or leg.amount <= 0:
            return Decimal(0)
        value = leg.value_usd if leg.value_usd is not None else Decimal(0)
        self._acquire(address, event, leg, value)
        return value

    def _record_disposal(self, address: str, event: ClassifiedEvent) -> Decimal | None:
        gain: Decimal | None = None

        out_leg = event.token_out
        if out_leg is not None and out_leg.amount > 0:
            gross = _first_value(event.token_in, out_leg)
            gas = event.gas_fee_usd if event.gas_fee_usd is not None else Decimal(0)
            result = self._ledger.dispose(
                address, out_leg.token, event.timestamp, event.tx_hash, out_leg.amount, gross, gas
            )
            event.cost_basis_usd = result.cost_basis_usd
            event.proceeds_usd = result.proceeds_usd
            event.realized_gain_usd = result.realized_gain_usd
            event.holding_period_days = result.holding_period_days
            if result.is_partial:
                event.ledger_shortfall = result.shortfall_amount
            gain = result.realized_gain_usd

        in_leg = event.token_in
        if in_leg is not None and in_leg.amount > 0:
            cost = _first_value(in_leg, out_leg)
            self._acquire(address, event, in_leg, cost)

        return gain

    def _acquire(self, address: str, event: ClassifiedEvent, leg: TokenLeg, cost: Decimal) -> None:
        self._ledger.acquire(
            address,
            leg.token,
            event.timestamp,
            event.tx_hash,
            leg.amount,
            cost,
            symbol=leg.symbol,
            decimals=leg.decimals,
        )


def _first_value(*legs: TokenLeg | None) -> Decimal:
    """USD value of the first priced leg, else zero."""
    for leg in legs:
        if leg is not None and leg.value_usd is not None:
            return leg.value_usd
    return Decimal(0)
