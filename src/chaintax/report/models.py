"""Report request/job types."""

import uuid
from datetime import datetime, timezone

from pydantic import BaseModel, ConfigDict, Field, field_validator

from chaintax.domain.enums.chain import Network
from chaintax.domain.enums.tax import JobStage
from chaintax.domain.models.events import ClassifiedEvent
from chaintax.domain.models.tax import TaxSummary


class ReportPeriod(BaseModel):
    """A calendar year, or one month of it. Boundaries are UTC."""

    model_config = ConfigDict(frozen=True)

    year: int
    month: int | None = None

    @field_validator("month")
    @classmethod
    def _month_in_range(cls, v: int | None) -> int | None:
        if v is not None and not 1 <= v <= 12:
            raise ValueError(f"month must be 1-12, got {v}")
        return v

    @property
    def start(self) -> datetime:
        return datetime(self.year, self.month or 1, 1, tzinfo=timezone.utc)

    @property
    def end(self) -> datetime:
        """First instant after the period (exclusive cutoff)."""
        if self.month is None or self.month == 12:
            return datetime(self.year + 1, 1, 1, tzinfo=timezone.utc)
        return datetime(self.year, self.month + 1, 1, tzinfo=timezone.utc)

    @property
    def label(self) -> str:
        return f"{self.year}-{self.month:02d}" if self.month else str(self.year)

    def contains(self, timestamp: datetime) -> bool:
        return self.start <= timestamp < self.end


class ReportRequest(BaseModel):
    model_config = ConfigDict(frozen=True)

    address: str
    period: ReportPeriod
    network: str = "ethereum"
    live_unrealized: bool = False  # value holdings now instead of at the period cutoff

    @field_validator("network")
    @classmethod
    def _known_network(cls, v: str) -> str:
        return Network(v.lower()).value

    @property
    def key(self) -> tuple[str, str, str]:
        return self.address.lower(), self.period.label, self.network


class ReportJob(BaseModel):
    id: uuid.UUID = Field(default_factory=uuid.uuid4)
    request: ReportRequest
    stage: JobStage = JobStage.PENDING
    progress: int = 0  # percent within the current stage
    events: list[ClassifiedEvent] = []
    summary: TaxSummary | None = None
    skipped_transactions: dict[str, str] = {}  # tx_hash -> reason
    error: str | None = None
    started_at: datetime | None = None
    finished_at: datetime | None = None
