"""PriceResolver — stablecoin shortcut → cache → DefiLlama → fallback table."""

import asyncio
import logging
from collections import defaultdict
from datetime import datetime, timedelta
from decimal import Decimal

from chaintax.domain.enums.price import PriceSource
from chaintax.domain.models.price import PriceQuote
from chaintax.exceptions import PriceUnavailable
from chaintax.infra.price.cache import PriceCacheStore
from chaintax.infra.price.defillama import DefiLlamaProvider, coin_id, native_coin_id
from chaintax.infra.price.fallback import fallback_price
from chaintax.infra.price.tokens import TokenRegistry, is_native, is_stablecoin, native_symbol, usd_value

logger = logging.getLogger(__name__)

STABLE_PRICE = Decimal("1.0")


class PriceResolver:
    """Resolve a token's USD price at a timestamp.

    Never raises for a missing price: failures come back as a quote with source
    UNKNOWN and a zero price (`quote.is_available` is False). Use `require` when
    an exception is wanted instead.
    """

    def __init__(
        self,
        cache: PriceCacheStore,
        provider: DefiLlamaProvider | None = None,
        tokens: TokenRegistry | None = None,
        tolerance: timedelta = timedelta(minutes=5),
    ) -> None:
        self._cache = cache
        self._provider = provider
        self._tokens = tokens or TokenRegistry()
        self._tolerance = tolerance
        self._locks: dict[str, asyncio.Lock] = defaultdict(asyncio.Lock)

    @property
    def tokens(self) -> TokenRegistry:
        return self._tokens

    def _cache_key(self, token: str, network: str) -> str:
        if is_native(token):
            return native_symbol(network).lower()
        return token.lower()

    async def resolve(self, token: str, timestamp: datetime, network: str = "ethereum") -> PriceQuote:
        key = self._cache_key(token, network)

        # 1. Stablecoins
        if is_stablecoin(key):
            return PriceQuote(
                token=key,
                timestamp=timestamp,
                price_usd=STABLE_PRICE,
                source=PriceSource.STABLE,
                symbol=self._tokens.symbol(key),
            )

        # Per-token lock: concurrent lookups for one token hit the provider once
        async with self._locks[key]:
            # 2. Cache
            cached = await self._cache.find_nearest(key, timestamp, self._tolerance)
            if cached is not None:
                return cached.model_copy(update={"source": PriceSource.CACHE})

            # 3. External
            quote = await self._fetch(key, timestamp, network)
            if quote is not None:
                await self._cache.add(quote)
                return quote

        # 4. Fallback table
        return self._fallback(key, timestamp, network)

    async def _fetch(self, key: str, timestamp: datetime, network: str) -> PriceQuote | None:
        if self._provider is None:
            return None

        if key == native_symbol(network).lower():
            coin = native_coin_id(key)
            if coin is None:
                return None
        else:
            coin = coin_id(network, key)

        result = await self._provider.get_price(coin, timestamp)
        if result is None:
            return None

        if result.symbol:
            self._tokens.remember_symbol(key, result.symbol)
        return PriceQuote(
            token=key,
            timestamp=timestamp,
            price_usd=result.price_usd,
            source=PriceSource.EXTERNAL,
            symbol=result.symbol or self._tokens.symbol(key),
        )

    def _fallback(self, key: str, timestamp: datetime, network: str) -> PriceQuote:
        symbol = self._tokens.symbol(key) or key.upper()
        price = fallback_price(symbol, timestamp) if key == native_symbol(network).lower() else None
        if price is not None:
            logger.info("Using %s yearly fallback price %s for %s", symbol, price, timestamp.date())
            return PriceQuote(token=key, timestamp=timestamp, price_usd=price, source=PriceSource.FALLBACK, symbol=symbol)

        logger.warning("Price unavailable for %s at %s", key, timestamp.isoformat())
        return PriceQuote(
            token=key,
            timestamp=timestamp,
            price_usd=Decimal(0),
            source=PriceSource.UNKNOWN,
            symbol=self._tokens.symbol(key),
        )

    async def resolve_or_none(self, token: str, timestamp: datetime, network: str = "ethereum") -> Decimal | None:
        quote = await self.resolve(token, timestamp, network)
        return quote.price_usd if quote.is_available else None

    async def require(self, token: str, timestamp: datetime, network: str = "ethereum") -> PriceQuote:
        quote = await self.resolve(token, timestamp, network)
        if not quote.is_available:
            raise PriceUnavailable(token)
        return quote

    async def resolve_many(
        self, tokens: list[str], timestamp: datetime, network: str = "ethereum"
    ) -> dict[str, PriceQuote]:
        """Resolve several tokens at one timestamp. Keys are lower-cased token ids."""
        results: dict[str, PriceQuote] = {}
        for token in dict.fromkeys(t.lower() for t in tokens):
            results[token] = await self.resolve(token, timestamp, network)
        return results

    async def value_usd(
        self, token: str, amount: int, timestamp: datetime, network: str = "ethereum"
    ) -> Decimal | None:
        """USD value of a raw amount using the token's actual decimals, or None if unpriced."""
        price = await self.resolve_or_none(token, timestamp, network)
        if price is None:
            return None
        decimals = await self._tokens.refresh(token)
        return usd_value(amount, decimals, price)
