"""CostBasisLedger — FIFO acquire/dispose over a LotStore."""

import logging
from datetime import datetime
from decimal import Decimal

from chaintax.accounting.fifo import (
    holding_days,
    plan_fifo_consumption,
    proportional_cost,
    weighted_holding_days,
)
from chaintax.accounting.store import LotStore
from chaintax.domain.models.ledger import (
    CostLot,
    DisposalResult,
    HoldingView,
    LotConsumption,
    UnrealizedReport,
)
from chaintax.exceptions import LedgerConsistencyError
from chaintax.infra.price.service import PriceResolver
from chaintax.infra.price.tokens import TokenRegistry, to_token_units

logger = logging.getLogger(__name__)


class CostBasisLedger:
    """Per-address, per-token FIFO cost basis.

    Mutations for one address must be applied sequentially in timestamp order.
    """

    def __init__(self, store: LotStore | None = None, tokens: TokenRegistry | None = None) -> None:
        self._store = store if store is not None else LotStore()
        self._tokens = tokens or TokenRegistry()

    @property
    def store(self) -> LotStore:
        return self._store

    def acquire(
        self,
        address: str,
        token: str,
        timestamp: datetime,
        tx_hash: str,
        amount: int,
        cost_basis_usd: Decimal,
        symbol: str | None = None,
        decimals: int | None = None,
    ) -> CostLot:
        if amount <= 0:
            raise LedgerConsistencyError(f"Cannot acquire non-positive amount {amount} of {token}")
        if cost_basis_usd < 0:
            raise LedgerConsistencyError(f"Negative cost basis {cost_basis_usd} for {token} in {tx_hash}")

        lot = CostLot(
            address=address.lower(),
            token=token.lower(),
            symbol=symbol,
            decimals=decimals if decimals is not None else self._tokens.decimals(token),
            acquired_at=timestamp,
            acquired_tx_hash=tx_hash,
            original_amount=amount,
            remaining_amount=amount,
            cost_basis_usd=cost_basis_usd,
        )
        self._store.add(lot)
        return lot

    def dispose(
        self,
        address: str,
        token: str,
        timestamp: datetime,
        tx_hash: str,
        amount: int,
        gross_proceeds_usd: Decimal,
        gas_fee_usd: Decimal = Decimal(0),
    ) -> DisposalResult:
        """Consume lots oldest-first. All-or-nothing: the plan is built before any lot changes."""
        if amount <= 0:
            raise LedgerConsistencyError(f"Cannot dispose non-positive amount {amount} of {token}")

        plan, shortfall = plan_fifo_consumption(self._store.open_lots(address, token), amount)

        consumed: list[LotConsumption] = []
        cost_basis = Decimal(0)
        for lot, taken in plan:
            cost = proportional_cost(lot, taken)
            cost_basis += cost
            consumed.append(LotConsumption(
                lot_id=lot.id,
                amount=taken,
                cost_basis_usd=cost,
                holding_days=holding_days(lot.acquired_at, timestamp),
            ))

        holding = weighted_holding_days(plan, timestamp)

        # Apply
        for lot, taken in plan:
            lot.remaining_amount -= taken
            if lot.remaining_amount == 0:
                lot.disposed = True
                lot.disposed_at = timestamp
                lot.disposed_tx_hash = tx_hash

        if shortfall > 0:
            logger.warning(
                "Ledger shortfall in %s: %d of %d %s disposed without cost basis",
                tx_hash, shortfall, amount, token,
            )

        proceeds = gross_proceeds_usd - gas_fee_usd
        return DisposalResult(
            cost_basis_usd=cost_basis,
            proceeds_usd=proceeds,
            realized_gain_usd=proceeds - cost_basis,
            holding_period_days=holding,
            amount_covered=amount - shortfall,
            shortfall_amount=shortfall,
            consumed=consumed,
        )

    async def unrealized_positions(
        self,
        address: str,
        as_of: datetime,
        resolver: PriceResolver,
        network: str = "ethereum",
    ) -> UnrealizedReport:
        """Value lots held at `as_of` at the price resolved for `as_of`.

        Tokens without a resolvable price are excluded from the totals and
        listed in `skipped_tokens`.
        """
        held = [lot for lot in self._store.all_lots(address) if lot.held_at(as_of)]

        prices: dict[str, Decimal | None] = {}
        for token in dict.fromkeys(lot.token for lot in held):
            prices[token] = await resolver.resolve_or_none(token, as_of, network)

        holdings: list[HoldingView] = []
        skipped: list[str] = []
        for lot in held:
            price = prices[lot.token]
            if price is None:
                if lot.token not in skipped:
                    logger.info("Skipping %s in unrealized gains: no price at %s", lot.token, as_of)
                    skipped.append(lot.token)
                continue

            units = to_token_units(lot.remaining_amount, lot.decimals)
            cost = proportional_cost(lot, lot.remaining_amount)
            value = units * price
            holdings.append(HoldingView(
                lot_id=lot.id,
                token=lot.token,
                symbol=lot.symbol,
                remaining_amount=lot.remaining_amount,
                amount=units,
                proportional_cost_basis=cost,
                current_price=price,
                current_value=value,
                unrealized_gain=value - cost,
                acquired_at=lot.acquired_at,
                acquired_tx_hash=lot.acquired_tx_hash,
            ))

        return UnrealizedReport(as_of=as_of, holdings=holdings, skipped_tokens=skipped)
