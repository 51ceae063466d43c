"""Report job metadata and the resulting tax summary."""

from typing import Optional

from sqlalchemy import JSON, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from chaintax.db.session import Base, TimestampMixin, UUIDPrimaryKey


class TaxReportRecord(UUIDPrimaryKey, TimestampMixin, Base):
    """One report run for (address, period, network)."""

    __tablename__ = "tax_reports"

    address: Mapped[str] = mapped_column(String(64), index=True)
    network: Mapped[str] = mapped_column(String(20), default="ethereum")
    period_year: Mapped[int] = mapped_column(Integer)
    period_month: Mapped[Optional[int]] = mapped_column(Integer, default=None)
    stage: Mapped[str] = mapped_column(String(20), default="PENDING")
    progress: Mapped[int] = mapped_column(Integer, default=0)
    summary: Mapped[Optional[dict]] = mapped_column(JSON, default=None)
    error_message: Mapped[Optional[str]] = mapped_column(Text, default=None)
