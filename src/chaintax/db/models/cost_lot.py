"""Persisted FIFO cost lots."""

from datetime import datetime
from decimal import Decimal
from typing import Optional

from sqlalchemy import Boolean, Index, Integer, Numeric, String
from sqlalchemy.orm import Mapped, mapped_column

from chaintax.db.session import Base, RawAmount, TimestampMixin, UtcDateTime, UUIDPrimaryKey


class CostLotRecord(UUIDPrimaryKey, TimestampMixin, Base):
    __tablename__ = "cost_lots"
    __table_args__ = (Index("ix_cost_lots_address_token", "address", "token"),)

    address: Mapped[str] = mapped_column(String(64))
    token: Mapped[str] = mapped_column(String(64))
    symbol: Mapped[Optional[str]] = mapped_column(String(50), default=None)
    decimals: Mapped[int] = mapped_column(Integer, default=18)
    acquired_at: Mapped[datetime] = mapped_column(UtcDateTime(timezone=True))
    acquired_tx_hash: Mapped[str] = mapped_column(String(100))
    original_amount: Mapped[int] = mapped_column(RawAmount(80))
    remaining_amount: Mapped[int] = mapped_column(RawAmount(80))
    cost_basis_usd: Mapped[Decimal] = mapped_column(Numeric(38, 18))
    disposed: Mapped[bool] = mapped_column(Boolean, default=False)
    disposed_at: Mapped[Optional[datetime]] = mapped_column(UtcDateTime(timezone=True), default=None)
    disposed_tx_hash: Mapped[Optional[str]] = mapped_column(String(100), default=None)
