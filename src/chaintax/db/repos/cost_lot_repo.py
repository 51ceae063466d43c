from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from chaintax.accounting.store import LotStore, ReportKey
from chaintax.db.models.cost_lot import CostLotRecord
from chaintax.db.models.tax_report import TaxReportRecord
from chaintax.domain.enums.tax import JobStage
from chaintax.domain.models.ledger import CostLot
from chaintax.domain.models.tax import TaxSummary
from chaintax.report.models import ReportPeriod


class CostLotRepo:
    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def load(self, address: str) -> LotStore:
        """Load every lot of an address into a fresh LotStore.

        Completed reports for the address mark which periods the lots already reflect.
        """
        address = address.lower()
        result = await self._session.execute(
            select(CostLotRecord)
            .where(CostLotRecord.address == address)
            .order_by(CostLotRecord.acquired_at.asc())
        )
        lots = [self._to_lot(r) for r in result.scalars().all()]
        return LotStore(lots, applied=await self._applied_reports(address))

    async def save(self, address: str, store: LotStore) -> int:
        """Replace the address's lots with the store's state (idempotent). Returns rows written."""
        await self._session.execute(
            delete(CostLotRecord).where(CostLotRecord.address == address.lower())
        )
        lots = store.all_lots(address)
        for lot in lots:
            self._session.add(CostLotRecord(
                id=lot.id,
                address=lot.address,
                token=lot.token,
                symbol=lot.symbol,
                decimals=lot.decimals,
                acquired_at=lot.acquired_at,
                acquired_tx_hash=lot.acquired_tx_hash,
                original_amount=lot.original_amount,
                remaining_amount=lot.remaining_amount,
                cost_basis_usd=lot.cost_basis_usd,
                disposed=lot.disposed,
                disposed_at=lot.disposed_at,
                disposed_tx_hash=lot.disposed_tx_hash,
            ))
        await self._session.flush()
        return len(lots)

    async def delete(self, address: str) -> None:
        await self._session.execute(
            delete(CostLotRecord).where(CostLotRecord.address == address.lower())
        )
        await self._session.flush()

    async def _applied_reports(self, address: str) -> dict[ReportKey, TaxSummary]:
        result = await self._session.execute(
            select(TaxReportRecord).where(
                TaxReportRecord.address == address,
                TaxReportRecord.stage == JobStage.DONE.value,
            )
        )
        applied: dict[ReportKey, TaxSummary] = {}
        for record in result.scalars().all():
            period = ReportPeriod(year=record.period_year, month=record.period_month)
            applied[(address, period.label, record.network)] = TaxSummary.model_validate(record.summary)
        return applied

    @staticmethod
    def _to_lot(record: CostLotRecord) -> CostLot:
        return CostLot(
            id=record.id,
            address=record.address,
            token=record.token,
            symbol=record.symbol,
            decimals=record.decimals,
            acquired_at=record.acquired_at,
            acquired_tx_hash=record.acquired_tx_hash,
            original_amount=record.original_amount,
            remaining_amount=record.remaining_amount,
            cost_basis_usd=record.cost_basis_usd,
            disposed=record.disposed,
            disposed_at=record.disposed_at,
            disposed_tx_hash=record.disposed_tx_hash,
        )
