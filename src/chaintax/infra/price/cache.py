"""Price cache contract and an in-memory implementation.

Quotes are append-only: a stored quote is never overwritten. Lookups pick the
quote nearest to the requested timestamp inside a symmetric window; on equal
distance the more recent quote wins.
"""

from collections import defaultdict
from datetime import datetime, timedelta
from typing import Protocol

from chaintax.domain.models.price import PriceQuote


class PriceCacheStore(Protocol):
    async def find_nearest(self, token: str, timestamp: datetime, tolerance: timedelta) -> PriceQuote | None: ...

    async def add(self, quote: PriceQuote) -> None: ...


def pick_nearest(quotes: list[PriceQuote], timestamp: datetime) -> PriceQuote | None:
    if not quotes:
        return None
    return min(quotes, key=lambda q: (abs(q.timestamp - timestamp), -q.timestamp.timestamp()))


class InMemoryPriceCache:
    """Process-local cache for tests and one-off runs."""

    def __init__(self) -> None:
        self._quotes: dict[str, list[PriceQuote]] = defaultdict(list)

    async def find_nearest(self, token: str, timestamp: datetime, tolerance: timedelta) -> PriceQuote | None:
        window = [q for q in self._quotes.get(token.lower(), []) if abs(q.timestamp - timestamp) <= tolerance]
        return pick_nearest(window, timestamp)

    async def add(self, quote: PriceQuote) -> None:
        self._quotes[quote.token.lower()].append(quote)

    def __len__(self) -> int:
        return sum(len(v) for v in self._quotes.values())
