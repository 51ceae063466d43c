import asyncio
import logging
from datetime import datetime, timedelta, timezone

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from chaintax.db.models.price_quote import PriceQuoteRecord
from chaintax.domain.enums.price import PriceSource
from chaintax.domain.models.price import PriceQuote
from chaintax.infra.price.cache import pick_nearest

logger = logging.getLogger(__name__)


class PriceCacheRepo:
    """Database-backed price cache used by PriceResolver.

    The resolver prices tokens concurrently while an AsyncSession allows one
    operation at a time, so every session call goes through `_lock`.
    """

    def __init__(self, session: AsyncSession) -> None:
        self._session = session
        self._lock = asyncio.Lock()

    async def find_nearest(self, token: str, timestamp: datetime, tolerance: timedelta) -> PriceQuote | None:
        ts = int(timestamp.timestamp())
        window = int(tolerance.total_seconds())
        stmt = select(PriceQuoteRecord).where(
            PriceQuoteRecord.token == token.lower(),
            PriceQuoteRecord.timestamp >= ts - window,
            PriceQuoteRecord.timestamp <= ts + window,
        )
        async with self._lock:
            result = await self._session.execute(stmt)
            quotes = [self._to_quote(r) for r in result.scalars().all()]
        return pick_nearest(quotes, timestamp)

    async def add(self, quote: PriceQuote) -> None:
        async with self._lock:
            try:
                async with self._session.begin_nested():
                    self._session.add(PriceQuoteRecord(
                        token=quote.token.lower(),
                        timestamp=int(quote.timestamp.timestamp()),
                        price_usd=quote.price_usd,
                        source=quote.source.value,
                        symbol=quote.symbol,
                    ))
            except IntegrityError:
                # Same (token, timestamp) stored by a concurrent run; savepoint rolls back
                logger.debug("Price for %s at %s already cached", quote.token, quote.timestamp)

    async def count(self, token: str | None = None) -> int:
        stmt = select(PriceQuoteRecord.id)
        if token is not None:
            stmt = stmt.where(PriceQuoteRecord.token == token.lower())
        async with self._lock:
            result = await self._session.execute(stmt)
            return len(result.scalars().all())

    @staticmethod
    def _to_quote(record: PriceQuoteRecord) -> PriceQuote:
        return PriceQuote(
            token=record.token,
            timestamp=datetime.fromtimestamp(record.timestamp, tz=timezone.utc),
            price_usd=record.price_usd,
            source=PriceSource(record.source),
            symbol=record.symbol,
        )
