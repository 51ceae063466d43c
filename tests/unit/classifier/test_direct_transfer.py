"""Tests for DirectTransferClassifier — user appears in Transfer logs."""

from datetime import datetime, timezone

from chaintax.classifier.generic.direct import DirectTransferClassifier
from chaintax.classifier.utils.context import ClassificationContext
from chaintax.classifier.utils.transfers import TRANSFER_TOPIC, ZERO_ADDRESS
from chaintax.domain.enums.tax import TaxCategory
from chaintax.domain.models.transaction import RawLog, RawTransaction

WALLET = "0x1111111111111111111111111111111111111111"
OTHER = "0x2222222222222222222222222222222222222222"
TOKEN_A = "0xaaaa000000000000000000000000000000000001"
TOKEN_B = "0xbbbb000000000000000000000000000000000002"
TOKEN_C = "0xcccc000000000000000000000000000000000003"


def _topic(address: str) -> str:
    return "0x" + "0" * 24 + address[2:]


def _transfer(token: str, frm: str, to: str, amount: int) -> RawLog:
    return RawLog(address=token, topics=[TRANSFER_TOPIC, _topic(frm), _topic(to)], data=hex(amount))


def _context(logs: list[RawLog], sender: str = WALLET) -> ClassificationContext:
    tx = RawTransaction(
        hash="0xdirect",
        timestamp=datetime(2024, 5, 1, tzinfo=timezone.utc),
        from_address=sender,
        to_address="0x9999999999999999999999999999999999999999",
        gas_used=60_000,
        gas_price=10**9,
        logs=logs,
    )
    return ClassificationContext(tx, WALLET)


def _categories(events) -> list[TaxCategory]:
    return [e.category for e in events]


class TestDirectTransferClassifier:
    def setup_method(self):
        self.classifier = DirectTransferClassifier()

    def test_in_and_out_is_single_disposal(self):
        ctx = _context([
            _transfer(TOKEN_A, WALLET, OTHER, 100),
            _transfer(TOKEN_B, OTHER, WALLET, 200),
        ])

        events = self.classifier.classify(ctx)

        assert _categories(events) == [TaxCategory.DISPOSAL]
        assert events[0].token_out.token == TOKEN_A
        assert events[0].token_out.amount == 100
        assert events[0].token_in.token == TOKEN_B
        assert events[0].token_in.amount == 200

    def test_outflow_only_is_transfer(self):
        events = self.classifier.classify(_context([_transfer(TOKEN_A, WALLET, OTHER, 100)]))

        assert _categories(events) == [TaxCategory.TRANSFER]
        assert events[0].token_out.token == TOKEN_A
        assert events[0].token_in is None

    def test_inflow_only_is_airdrop(self):
        events = self.classifier.classify(_context([_transfer(TOKEN_A, OTHER, WALLET, 100)], sender=OTHER))

        assert _categories(events) == [TaxCategory.AIRDROP]
        assert events[0].token_in.amount == 100

    def test_mint_is_airdrop(self):
        events = self.classifier.classify(_context([_transfer(TOKEN_A, ZERO_ADDRESS, WALLET, 5)]))
        assert _categories(events) == [TaxCategory.AIRDROP]

    def test_mint_alongside_outflow(self):
        ctx = _context([
            _transfer(TOKEN_A, WALLET, OTHER, 100),
            _transfer(TOKEN_B, ZERO_ADDRESS, WALLET, 50),
        ])

        events = self.classifier.classify(ctx)

        # Mint stays an airdrop; the outflow is a disposal because the TX has an inflow
        assert sorted(_categories(events)) == sorted([TaxCategory.AIRDROP, TaxCategory.DISPOSAL])

    def test_unpaired_legs_in_swap_are_disposals(self):
        ctx = _context([
            _transfer(TOKEN_A, WALLET, OTHER, 100),
            _transfer(TOKEN_B, WALLET, OTHER, 200),
            _transfer(TOKEN_C, OTHER, WALLET, 300),
        ])

        events = self.classifier.classify(ctx)

        assert _categories(events) == [TaxCategory.DISPOSAL, TaxCategory.DISPOSAL]
        assert events[0].token_out.token == TOKEN_A
        assert events[0].token_in.token == TOKEN_C
        assert events[1].token_out.token == TOKEN_B
        assert events[1].token_in is None

    def test_extra_inflow_in_swap(self):
        ctx = _context([
            _transfer(TOKEN_A, WALLET, OTHER, 100),
            _transfer(TOKEN_B, OTHER, WALLET, 200),
            _transfer(TOKEN_C, OTHER, WALLET, 300),
        ])

        events = self.classifier.classify(ctx)

        assert _categories(events) == [TaxCategory.DISPOSAL, TaxCategory.DISPOSAL]
        assert events[1].token_in.token == TOKEN_C
        assert events[1].token_out is None

    def test_self_transfer_ignored(self):
        ctx = _context([_transfer(TOKEN_A, WALLET, WALLET, 100)])
        assert self.classifier.can_classify(ctx) is True
        assert self.classifier.classify(ctx) == []

    def test_not_applicable_without_user_logs(self):
        ctx = _context([_transfer(TOKEN_A, OTHER, "0x4444444444444444444444444444444444444444", 1)])
        assert self.classifier.can_classify(ctx) is False

    def test_every_event_carries_gas(self):
        ctx = _context([
            _transfer(TOKEN_A, WALLET, OTHER, 1),
            _transfer(TOKEN_B, WALLET, OTHER, 2),
        ])
        for event in self.classifier.classify(ctx):
            assert event.gas_fee_wei == 60_000 * 10**9
