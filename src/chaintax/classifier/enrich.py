"""EventPricer — attach USD values, symbols and decimals to classified events.

Pricing never fails an event: a leg whose price cannot be resolved keeps
`value_usd=None` and the event still flows to the ledger.
"""

import asyncio
import logging
from decimal import Decimal

from chaintax.domain.models.events import ClassifiedEvent, TokenLeg
from chaintax.domain.models.price import PriceQuote
from chaintax.exceptions import ChainTaxError
from chaintax.infra.price.service import PriceResolver
from chaintax.infra.price.tokens import native_symbol, usd_value

logger = logging.getLogger(__name__)

NATIVE_DECIMALS = 18


class EventPricer:
    def __init__(self, resolver: PriceResolver, timeout: float = 30.0) -> None:
        self._resolver = resolver
        self._timeout = timeout

    async def price(self, event: ClassifiedEvent, network: str = "ethereum") -> ClassifiedEvent:
        """Price both legs and the gas fee of an event in place, and return it."""
        if event.token_in is not None:
            event.token_in = await self._price_leg(event.token_in, event, network)
        if event.token_out is not None:
            event.token_out = await self._price_leg(event.token_out, event, network)
        event.gas_fee_usd = await self._price_gas(event, network)
        return event

    async def price_all(self, events: list[ClassifiedEvent], network: str = "ethereum") -> list[ClassifiedEvent]:
        for event in events:
            await self.price(event, network)
        return events

    async def _lookup(self, leg: TokenLeg, event: ClassifiedEvent, network: str) -> tuple[int, PriceQuote]:
        decimals = leg.decimals if leg.decimals is not None else await self._resolver.tokens.refresh(leg.token)
        quote = await self._resolver.resolve(leg.token, event.timestamp, network)
        return decimals, quote

    async def _price_leg(self, leg: TokenLeg, event: ClassifiedEvent, network: str) -> TokenLeg:
        tokens = self._resolver.tokens
        try:
            # On-chain decimals reads count against the same timeout as the price
            decimals, quote = await asyncio.wait_for(self._lookup(leg, event, network), timeout=self._timeout)
        except (ChainTaxError, asyncio.TimeoutError) as e:
            logger.warning("Pricing %s in %s failed: %s", leg.token, event.tx_hash, e)
            fallback = leg.decimals if leg.decimals is not None else tokens.decimals(leg.token)
            return leg.model_copy(update={"decimals": fallback})

        symbol = leg.symbol or quote.symbol or tokens.symbol(leg.token)
        value = usd_value(leg.amount, decimals, quote.price_usd) if quote.is_available else None
        return leg.model_copy(update={"decimals": decimals, "symbol": symbol, "value_usd": value})

    async def _price_gas(self, event: ClassifiedEvent, network: str) -> Decimal | None:
        if event.gas_fee_wei <= 0:
            return Decimal(0)
        native = native_symbol(network).lower()
        try:
            quote = await asyncio.wait_for(
                self._resolver.resolve(native, event.timestamp, network), timeout=self._timeout
            )
        except (ChainTaxError, asyncio.TimeoutError) as e:
            logger.warning("Gas pricing for %s failed: %s", event.tx_hash, e)
            return None
        if not quote.is_available:
            return None
        return usd_value(event.gas_fee_wei, NATIVE_DECIMALS, quote.price_usd)
