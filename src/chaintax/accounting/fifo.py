"""FIFO lot matching — pure functions, no store or DB dependency.

Oldest lot consumed first. Planning never mutates lots, so a disposal can be
planned in full before any lot is touched.
"""

from datetime import datetime
from decimal import Decimal

from chaintax.domain.enums.tax import HoldingTerm
from chaintax.domain.models.ledger import CostLot

DEFAULT_LONG_TERM_DAYS = 365


def holding_days(acquired_at: datetime, disposed_at: datetime) -> int:
    """Whole days between acquisition and disposal, floored, never negative."""
    return max((disposed_at - acquired_at).days, 0)


def is_long_term(days: int, threshold: int = DEFAULT_LONG_TERM_DAYS) -> bool:
    """Tie-break: exactly `threshold` days is long-term."""
    return days >= threshold


def holding_term(days: int, threshold: int = DEFAULT_LONG_TERM_DAYS) -> HoldingTerm:
    return HoldingTerm.LONG if is_long_term(days, threshold) else HoldingTerm.SHORT


def proportional_cost(lot: CostLot, taken: int) -> Decimal:
    """Cost basis of `taken` raw units of a lot: cost × taken / original."""
    if taken == lot.original_amount:
        return lot.cost_basis_usd
    return Decimal(lot.cost_basis_usd) * taken / lot.original_amount


def plan_fifo_consumption(lots: list[CostLot], amount: int) -> tuple[list[tuple[CostLot, int]], int]:
    """Plan which lots cover `amount` raw units.

    Args:
        lots: Open lots sorted by acquisition time (oldest first).
        amount: Raw units to dispose, must be positive.

    Returns:
        ([(lot, units_taken), ...], shortfall); shortfall is the uncovered remainder.
    """
    plan: list[tuple[CostLot, int]] = []
    remaining = amount

    for lot in lots:
        if remaining <= 0:
            break
        if lot.remaining_amount <= 0:
            continue
        taken = min(lot.remaining_amount, remaining)
        plan.append((lot, taken))
        remaining -= taken

    return plan, remaining


def weighted_holding_days(plan: list[tuple[CostLot, int]], disposed_at: datetime) -> int:
    """floor(Σ days × units / Σ units), 0 if nothing was taken."""
    total = sum(taken for _, taken in plan)
    if total == 0:
        return 0
    weighted = sum(holding_days(lot.acquired_at, disposed_at) * taken for lot, taken in plan)
    return weighted // total
