"""Append-only historical token prices."""

from decimal import Decimal
from typing import Optional

from sqlalchemy import Integer, Numeric, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from chaintax.db.session import Base, TimestampMixin


class PriceQuoteRecord(TimestampMixin, Base):
    """USD price of a token at an exact Unix timestamp. Rows are never updated."""

    __tablename__ = "price_quotes"
    __table_args__ = (UniqueConstraint("token", "timestamp", name="uq_price_quotes_token_timestamp"),)

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    token: Mapped[str] = mapped_column(String(64))  # lower-case address or native symbol
    timestamp: Mapped[int] = mapped_column(Integer)  # Unix epoch seconds
    price_usd: Mapped[Decimal] = mapped_column(Numeric(38, 18))
    source: Mapped[str] = mapped_column(String(20))  # external / fallback
    symbol: Mapped[Optional[str]] = mapped_column(String(50), default=None)
