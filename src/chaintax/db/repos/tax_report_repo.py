from typing import Optional

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from chaintax.db.models.tax_report import TaxReportRecord
from chaintax.domain.enums.tax import JobStage
from chaintax.domain.models.tax import TaxSummary


class TaxReportRepo:
    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def create(self, address: str, network: str, year: int, month: int | None = None) -> TaxReportRecord:
        record = TaxReportRecord(
            address=address.lower(),
            network=network,
            period_year=year,
            period_month=month,
            stage=JobStage.PENDING.value,
            progress=0,
        )
        self._session.add(record)
        await self._session.flush()
        return record

    async def find_done(
        self, address: str, network: str, year: int, month: int | None = None
    ) -> Optional[TaxReportRecord]:
        """Most recent completed report for exactly this address, network and period."""
        month_clause = (
            TaxReportRecord.period_month.is_(None) if month is None else TaxReportRecord.period_month == month
        )
        result = await self._session.execute(
            select(TaxReportRecord)
            .where(
                TaxReportRecord.address == address.lower(),
                TaxReportRecord.network == network,
                TaxReportRecord.period_year == year,
                month_clause,
                TaxReportRecord.stage == JobStage.DONE.value,
            )
            .order_by(TaxReportRecord.created_at.desc())
            .limit(1)
        )
        return result.scalar_one_or_none()

    async def list_for_address(self, address: str) -> list[TaxReportRecord]:
        result = await self._session.execute(
            select(TaxReportRecord)
            .where(TaxReportRecord.address == address.lower())
            .order_by(TaxReportRecord.created_at.desc())
        )
        return list(result.scalars().all())

    async def update_stage(
        self, record: TaxReportRecord, stage: JobStage, progress: int, error: str | None = None
    ) -> None:
        record.stage = stage.value
        record.progress = progress
        if error is not None:
            record.error_message = error
        await self._session.flush()

    async def complete(self, record: TaxReportRecord, summary: TaxSummary) -> None:
        record.stage = JobStage.DONE.value
        record.progress = 100
        record.summary = summary.model_dump(mode="json")
        await self._session.flush()

    async def delete_by_address(self, address: str) -> int:
        result = await self._session.execute(
            delete(TaxReportRecord).where(TaxReportRecord.address == address.lower())
        )
        await self._session.flush()
        return result.rowcount
