"""Tests for FIFO planning helpers — pure functions."""

from datetime import datetime, timedelta, timezone
from decimal import Decimal

from chaintax.accounting.fifo import (
    holding_days,
    is_long_term,
    plan_fifo_consumption,
    proportional_cost,
    weighted_holding_days,
)
from chaintax.domain.models.ledger import CostLot

T0 = datetime(2024, 1, 1, tzinfo=timezone.utc)
ONE = 10**18


def _lot(amount: int, cost: str, day: int = 0, remaining: int | None = None) -> CostLot:
    return CostLot(
        address="0xuser",
        token="0xtoken",
        acquired_at=T0 + timedelta(days=day),
        acquired_tx_hash=f"0xbuy{day}",
        original_amount=amount,
        remaining_amount=amount if remaining is None else remaining,
        cost_basis_usd=Decimal(cost),
    )


class TestHoldingDays:
    def test_floors_partial_days(self):
        assert holding_days(T0, T0 + timedelta(days=3, hours=23)) == 3

    def test_never_negative(self):
        assert holding_days(T0, T0 - timedelta(days=1)) == 0

    def test_long_term_tie_break(self):
        assert is_long_term(365) is True
        assert is_long_term(364) is False

    def test_custom_threshold(self):
        assert is_long_term(30, threshold=30) is True


class TestProportionalCost:
    def test_full_lot_is_exact(self):
        lot = _lot(3, "100")
        assert proportional_cost(lot, 3) == Decimal("100")

    def test_half_lot(self):
        assert proportional_cost(_lot(ONE, "2500"), ONE // 2) == Decimal("1250")

    def test_large_amounts_no_float_drift(self):
        lot = _lot(10**30, "1000000")
        assert proportional_cost(lot, 10**29) == Decimal("100000")


class TestPlanFifoConsumption:
    def test_consumes_oldest_first(self):
        old, new = _lot(ONE, "2000", 0), _lot(ONE, "2500", 31)

        plan, shortfall = plan_fifo_consumption([old, new], 15 * 10**17)

        assert [(lot.acquired_tx_hash, taken) for lot, taken in plan] == [
            ("0xbuy0", ONE),
            ("0xbuy31", ONE // 2),
        ]
        assert shortfall == 0

    def test_planning_does_not_mutate(self):
        lot = _lot(ONE, "2000")
        plan_fifo_consumption([lot], ONE)
        assert lot.remaining_amount == ONE

    def test_shortfall(self):
        plan, shortfall = plan_fifo_consumption([_lot(5, "1")], 8)
        assert [taken for _, taken in plan] == [5]
        assert shortfall == 3

    def test_skips_empty_lots(self):
        plan, _ = plan_fifo_consumption([_lot(5, "1", remaining=0), _lot(5, "1", 1)], 2)
        assert plan[0][0].acquired_tx_hash == "0xbuy1"

    def test_no_lots(self):
        assert plan_fifo_consumption([], 10) == ([], 10)


class TestWeightedHoldingDays:
    def test_weighted_by_units(self):
        old, new = _lot(ONE, "2000", 0), _lot(ONE, "2500", 31)
        disposed_at = T0 + timedelta(days=60)

        # floor((60 * 1 + 29 * 0.5) / 1.5) = floor(49.67)
        assert weighted_holding_days([(old, ONE), (new, ONE // 2)], disposed_at) == 49

    def test_nothing_taken(self):
        assert weighted_holding_days([], T0) == 0
