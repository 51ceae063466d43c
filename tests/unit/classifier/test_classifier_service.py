"""Tests for Classifier — strategy priority and fall-through."""

from datetime import datetime, timezone

import pytest

from chaintax.classifier.generic.base import BaseClassifier
from chaintax.classifier.service import Classifier
from chaintax.classifier.utils.transfers import TRANSFER_TOPIC
from chaintax.domain.enums.tax import TaxCategory
from chaintax.domain.models.transaction import RawLog, RawTransaction
from chaintax.exceptions import ClassificationError

WALLET = "0x1111111111111111111111111111111111111111"
OTHER = "0x2222222222222222222222222222222222222222"
UNISWAP_V2_ROUTER = "0x7a250d5630b4cf539739df2c5dacb4c659f2488d"
TOKEN_A = "0xaaaa000000000000000000000000000000000001"
TOKEN_B = "0xbbbb000000000000000000000000000000000002"


def _topic(address: str) -> str:
    return "0x" + "0" * 24 + address[2:]


def _transfer(token: str, frm: str, to: str, amount: int) -> RawLog:
    return RawLog(address=token, topics=[TRANSFER_TOPIC, _topic(frm), _topic(to)], data=hex(amount))


def _tx(logs: list[RawLog] | None = None, to: str = OTHER, selector: str | None = None, value: int = 0):
    return RawTransaction(
        hash="0xtx",
        timestamp=datetime(2024, 2, 2, tzinfo=timezone.utc),
        from_address=WALLET,
        to_address=to,
        value=value,
        gas_used=100_000,
        gas_price=10**9,
        method_selector=selector,
        logs=logs or [],
    )


class TestClassifierPriority:
    def setup_method(self):
        self.classifier = Classifier()

    def test_known_protocol_wins_over_direct(self):
        tx = _tx([
            _transfer(TOKEN_A, WALLET, OTHER, 1),
            _transfer(TOKEN_B, OTHER, WALLET, 2),
        ], to=UNISWAP_V2_ROUTER, selector="0x38ed1739")

        events = self.classifier.classify(tx, WALLET)

        assert len(events) == 1
        assert events[0].protocol == "Uniswap V2"

    def test_in_and_out_logs_give_single_disposal(self):
        tx = _tx([
            _transfer(TOKEN_A, WALLET, OTHER, 1),
            _transfer(TOKEN_B, OTHER, WALLET, 2),
        ])

        events = self.classifier.classify(tx, WALLET)

        assert [e.category for e in events] == [TaxCategory.DISPOSAL]

    def test_user_address_case_insensitive(self):
        tx = _tx([_transfer(TOKEN_A, OTHER, WALLET, 2)])
        events = self.classifier.classify(tx, WALLET.upper().replace("0X", "0x"))
        assert events[0].category == TaxCategory.AIRDROP

    def test_proxy_when_user_not_in_logs(self):
        tx = _tx([
            _transfer(TOKEN_A, OTHER, "0x3333333333333333333333333333333333333333", 1),
            _transfer(TOKEN_B, "0x3333333333333333333333333333333333333333", OTHER, 2),
        ])
        events = self.classifier.classify(tx, WALLET)
        assert events[0].notes == "Swap via aggregator/proxy"

    def test_native_transfer(self):
        events = self.classifier.classify(_tx(value=10**18), WALLET)
        assert events[0].category == TaxCategory.TRANSFER
        assert events[0].token_out.token == "eth"

    def test_self_transfer_falls_through_to_gas_only(self):
        tx = _tx([_transfer(TOKEN_A, WALLET, WALLET, 5)])
        events = self.classifier.classify(tx, WALLET)
        assert [e.category for e in events] == [TaxCategory.DEDUCTION]

    def test_unknown_contract_call_is_deduction(self):
        events = self.classifier.classify(_tx(selector="0xdeadbeef"), WALLET)

        assert len(events) == 1
        assert events[0].category == TaxCategory.DEDUCTION
        assert events[0].gas_fee_wei == 100_000 * 10**9


class _NeverClassifier(BaseClassifier):
    NAME = "Never"

    def can_classify(self, context) -> bool:
        return True

    def classify(self, context):
        return []


class TestClassifierCustomStrategies:
    def test_no_result_raises(self):
        classifier = Classifier(strategies=[_NeverClassifier()])
        with pytest.raises(ClassificationError):
            classifier.classify(_tx(), WALLET)
