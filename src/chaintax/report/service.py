"""ReportService — fetch → classify → price → calculate, one job per (address, period, network)."""

import asyncio
import logging
import uuid
from datetime import datetime, timezone
from typing import Protocol

from chaintax.accounting.ledger import CostBasisLedger
from chaintax.accounting.store import InMemoryLotStores, LotStore
from chaintax.accounting.tax_engine import TaxEngine
from chaintax.classifier.enrich import EventPricer
from chaintax.classifier.service import Classifier
from chaintax.db.repos.tax_report_repo import TaxReportRepo
from chaintax.domain.enums.tax import JobStage
from chaintax.domain.models.events import ClassifiedEvent
from chaintax.domain.models.tax import TaxRates, TaxSummary, UnrealizedAsOf
from chaintax.domain.models.transaction import RawTransaction
from chaintax.exceptions import ClassificationError
from chaintax.infra.price.service import PriceResolver
from chaintax.report.models import ReportJob, ReportPeriod, ReportRequest

logger = logging.getLogger(__name__)


class TransactionSource(Protocol):
    async def fetch(self, address: str, period: ReportPeriod, network: str) -> list[RawTransaction]: ...


class LotStores(Protocol):
    async def load(self, address: str) -> LotStore: ...

    async def save(self, address: str, store: LotStore) -> int: ...

    async def delete(self, address: str) -> None: ...


class ReportService:
    """Runs report jobs. Concurrent requests for the same key share one in-flight job.

    Classification and pricing fan out across transactions (bounded by
    `concurrency`); ledger processing for the address is sequential.
    """

    def __init__(
        self,
        source: TransactionSource,
        resolver: PriceResolver,
        classifier: Classifier | None = None,
        pricer: EventPricer | None = None,
        lot_stores: LotStores | None = None,
        rates: TaxRates | None = None,
        concurrency: int = 8,
        report_repo: TaxReportRepo | None = None,
    ) -> None:
        self._source = source
        self._resolver = resolver
        self._classifier = classifier or Classifier()
        self._pricer = pricer or EventPricer(resolver)
        self._lot_stores = lot_stores or InMemoryLotStores()
        self._rates = rates or TaxRates()
        self._semaphore = asyncio.Semaphore(concurrency)
        self._report_repo = report_repo
        self._inflight: dict[tuple[str, str, str], asyncio.Task[ReportJob]] = {}
        self._completed: dict[tuple[str, str, str], ReportJob] = {}
        self._jobs: dict[uuid.UUID, ReportJob] = {}

    async def run(self, request: ReportRequest) -> ReportJob:
        """Return the finished job for `request`, starting it only if none exists."""
        key = request.key
        if key in self._completed:
            logger.info("Report already exists for %s", "/".join(key))
            return self._completed[key]

        task = self._inflight.get(key)
        if task is None:
            job = ReportJob(request=request)
            self._jobs[job.id] = job
            task = asyncio.create_task(self._process(job))
            self._inflight[key] = task
            task.add_done_callback(lambda _: self._inflight.pop(key, None))
        return await asyncio.shield(task)

    def get_job(self, job_id: uuid.UUID) -> ReportJob | None:
        return self._jobs.get(job_id)

    async def delete_reports(self, address: str) -> None:
        """Drop every report and cost lot of an address so its history can be rebuilt."""
        address = address.lower()
        if self._report_repo is not None:
            removed = await self._report_repo.delete_by_address(address)
            logger.info("Deleted %d report records for %s", removed, address)
        await self._lot_stores.delete(address)
        for key in [k for k in self._completed if k[0] == address]:
            del self._completed[key]

    async def _process(self, job: ReportJob) -> ReportJob:
        request = job.request
        address = request.address.lower()
        job.started_at = datetime.now(timezone.utc)
        record = None

        try:
            store = await self._lot_stores.load(address)
            existing = await self._existing_summary(request, store)
            if existing is not None:
                logger.info("Report already exists for %s, lots left untouched", "/".join(request.key))
                job.summary = existing
                job.stage = JobStage.DONE
                job.progress = 100
                self._completed[request.key] = job
                return job

            if self._report_repo is not None:
                record = await self._report_repo.create(
                    address, request.network, request.period.year, request.period.month
                )

            await self._set_stage(job, record, JobStage.CLASSIFYING)
            txs = await self._source.fetch(address, request.period, request.network)
            txs.sort(key=lambda t: t.timestamp)
            job.events = self._classify(job, txs)

            await self._set_stage(job, record, JobStage.PRICING)
            await self._price(job)

            await self._set_stage(job, record, JobStage.CALCULATING)
            engine = TaxEngine(CostBasisLedger(store, self._resolver.tokens), self._resolver)
            job.summary = await engine.summarize(
                address,
                job.events,
                self._rates,
                unrealized_as_of=self._unrealized_as_of(request),
                network=request.network,
            )
            store.mark_applied(request.key, job.summary)
            await self._lot_stores.save(address, store)

            job.stage = JobStage.DONE
            job.progress = 100
            if record is not None:
                await self._report_repo.complete(record, job.summary)
            self._completed[request.key] = job
            logger.info(
                "Report %s done: %d tx, %d events", job.id, len(txs), len(job.events)
            )
        except Exception as e:
            job.stage = JobStage.ERROR
            job.error = str(e)
            if record is not None:
                await self._report_repo.update_stage(record, JobStage.ERROR, job.progress, error=str(e))
            logger.exception("Report %s failed", job.id)
        finally:
            job.finished_at = datetime.now(timezone.utc)

        return job

    async def _existing_summary(self, request: ReportRequest, store: LotStore) -> TaxSummary | None:
        """Summary of a completed report for the same key, from the database or the lot store."""
        if self._report_repo is not None:
            record = await self._report_repo.find_done(
                request.address, request.network, request.period.year, request.period.month
            )
            if record is not None:
                return TaxSummary.model_validate(record.summary)
        return store.applied(request.key)

    def _classify(self, job: ReportJob, txs: list[RawTransaction]) -> list[ClassifiedEvent]:
        request = job.request
        events: list[ClassifiedEvent] = []
        for i, tx in enumerate(txs, start=1):
            try:
                events.extend(self._classifier.classify(tx, request.address, request.network))
            except ClassificationError as e:
                logger.warning("Skipping %s: %s", tx.hash, e)
                job.skipped_transactions[tx.hash] = str(e)
            job.progress = i * 100 // len(txs)
        return events

    async def _price(self, job: ReportJob) -> None:
        total = len(job.events)
        done = 0

        async def price_one(event: ClassifiedEvent) -> None:
            nonlocal done
            async with self._semaphore:
                await self._pricer.price(event, job.request.network)
            done += 1
            job.progress = done * 100 // total

        await asyncio.gather(*(price_one(e) for e in job.events))

    async def _set_stage(self, job: ReportJob, record, stage: JobStage) -> None:
        job.stage = stage
        job.progress = 0
        logger.info("Report %s → %s", job.id, stage.value)
        if record is not None:
            await self._report_repo.update_stage(record, stage, 0)

    @staticmethod
    def _unrealized_as_of(request: ReportRequest) -> datetime | UnrealizedAsOf:
        if request.live_unrealized:
            return UnrealizedAsOf.NOW
        # Periods still in progress are valued at the current moment
        return min(request.period.end, datetime.now(timezone.utc))
