"""Tests for ReportService — stage pipeline and request deduplication."""

import asyncio
from datetime import datetime, timezone
from decimal import Decimal

import pytest

from chaintax.accounting.store import InMemoryLotStores
from chaintax.domain.enums.tax import JobStage, TaxCategory
from chaintax.domain.models.transaction import RawTransaction
from chaintax.infra.price.tokens import USDC
from chaintax.report.models import ReportPeriod, ReportRequest
from chaintax.report.service import ReportService

WALLET = "0x1111111111111111111111111111111111111111"
FAUCET = "0x2222222222222222222222222222222222222222"


@pytest.fixture()
def usdc_airdrop(transfer_log):
    def _build(day: int, amount: int) -> RawTransaction:
        return RawTransaction(
            hash=f"0xdrop{day}",
            timestamp=datetime(2024, 1, day, tzinfo=timezone.utc),
            from_address=FAUCET,
            to_address=USDC,
            logs=[transfer_log(USDC, FAUCET, WALLET, amount)],
        )

    return _build


class FakeSource:
    def __init__(self, txs: list[RawTransaction], delay: float = 0.0) -> None:
        self.txs = txs
        self.delay = delay
        self.calls = 0

    async def fetch(self, address, period, network):
        self.calls += 1
        await asyncio.sleep(self.delay)
        return list(self.txs)


class FailingSource:
    async def fetch(self, address, period, network):
        raise RuntimeError("indexer down")


def _request(**kwargs) -> ReportRequest:
    return ReportRequest(address=WALLET, period=ReportPeriod(year=2024, month=1), **kwargs)


class TestReportPipeline:
    async def test_runs_all_stages(self, resolver, usdc_airdrop):
        source = FakeSource([usdc_airdrop(5, 100 * 10**6), usdc_airdrop(3, 50 * 10**6)])
        service = ReportService(source, resolver, concurrency=2)

        job = await service.run(_request())

        assert job.stage == JobStage.DONE
        assert job.progress == 100
        assert job.error is None
        assert [e.tx_hash for e in job.events] == ["0xdrop3", "0xdrop5"]
        assert all(e.category == TaxCategory.AIRDROP for e in job.events)
        assert job.summary.ordinary_income_usd == Decimal("150")
        assert job.summary.unrealized_as_of == datetime(2024, 2, 1, tzinfo=timezone.utc)
        assert service.get_job(job.id) is job

    async def test_lots_saved_to_store(self, resolver, usdc_airdrop):
        stores = InMemoryLotStores()
        service = ReportService(FakeSource([usdc_airdrop(5, 100 * 10**6)]), resolver, lot_stores=stores)

        await service.run(_request())

        store = await stores.load(WALLET)
        assert len(store) == 1
        assert store.lots(WALLET, USDC)[0].decimals == 6

    async def test_failure_marks_error(self, resolver):
        job = await ReportService(FailingSource(), resolver).run(_request())

        assert job.stage == JobStage.ERROR
        assert "indexer down" in job.error
        assert job.finished_at is not None

    async def test_empty_period(self, resolver):
        job = await ReportService(FakeSource([]), resolver).run(_request())

        assert job.stage == JobStage.DONE
        assert job.events == []
        assert job.summary.estimated_tax_due == Decimal(0)

    async def test_live_unrealized(self, resolver):
        job = await ReportService(FakeSource([]), resolver).run(_request(live_unrealized=True))

        assert job.summary.unrealized_as_of > datetime(2024, 2, 1, tzinfo=timezone.utc)


class TestDeduplication:
    async def test_concurrent_requests_share_one_job(self, resolver, usdc_airdrop):
        source = FakeSource([usdc_airdrop(5, 10**6)], delay=0.05)
        service = ReportService(source, resolver)

        first, second = await asyncio.gather(service.run(_request()), service.run(_request()))

        assert first.id == second.id
        assert source.calls == 1

    async def test_completed_report_reused(self, resolver, usdc_airdrop):
        source = FakeSource([usdc_airdrop(5, 10**6)])
        service = ReportService(source, resolver)

        first = await service.run(_request())
        second = await service.run(_request())

        assert first is second
        assert source.calls == 1

    async def test_different_network_is_separate_job(self, resolver):
        source = FakeSource([])
        service = ReportService(source, resolver)

        await service.run(_request())
        await service.run(_request(network="mantle"))

        assert source.calls == 2

    async def test_rerun_in_new_service_keeps_lots(self, resolver, usdc_airdrop):
        stores = InMemoryLotStores()
        source = FakeSource([usdc_airdrop(5, 100 * 10**6)])

        first = await ReportService(source, resolver, lot_stores=stores).run(_request())
        second = await ReportService(source, resolver, lot_stores=stores).run(_request())

        store = await stores.load(WALLET)
        assert len(store) == 1
        assert second.stage == JobStage.DONE
        assert second.summary == first.summary
        assert second.events == []
        assert source.calls == 1

    async def test_next_month_still_applied(self, resolver, usdc_airdrop):
        stores = InMemoryLotStores()
        source = FakeSource([usdc_airdrop(5, 100 * 10**6)])

        await ReportService(source, resolver, lot_stores=stores).run(_request())
        feb = ReportRequest(address=WALLET, period=ReportPeriod(year=2024, month=2))
        await ReportService(FakeSource([]), resolver, lot_stores=stores).run(feb)

        store = await stores.load(WALLET)
        assert store.applied(feb.key) is not None
        assert len(store) == 1


class TestDeleteReports:
    async def test_delete_allows_rebuild(self, resolver, usdc_airdrop):
        stores = InMemoryLotStores()
        source = FakeSource([usdc_airdrop(5, 100 * 10**6)])
        service = ReportService(source, resolver, lot_stores=stores)

        await service.run(_request())
        await service.delete_reports(WALLET.upper())
        rebuilt = await service.run(_request())

        store = await stores.load(WALLET)
        assert rebuilt.stage == JobStage.DONE
        assert len(store) == 1
        assert source.calls == 2

    async def test_delete_leaves_other_addresses(self, resolver):
        stores = InMemoryLotStores()
        service = ReportService(FakeSource([]), resolver, lot_stores=stores)
        other = ReportRequest(address=FAUCET, period=ReportPeriod(year=2024, month=1))

        await service.run(other)
        await service.delete_reports(WALLET)

        assert (await stores.load(FAUCET)).applied(other.key) is not None
