"""DefiLlama price provider — historical USD prices keyed by `chain:address`."""

import logging
from datetime import datetime
from decimal import Decimal

from pydantic import BaseModel
from tenacity import retry, retry_if_exception_type, stop_after_attempt, wait_exponential

from chaintax.exceptions import ExternalServiceError
from chaintax.infra.http.rate_limited_client import RateLimitedClient

logger = logging.getLogger(__name__)

BASE_URL = "https://coins.llama.fi"

# Native gas tokens have no contract address; DefiLlama accepts coingecko ids instead
NATIVE_COIN_IDS: dict[str, str] = {
    "ETH": "coingecko:ethereum",
    "MNT": "coingecko:mantle",
    "MATIC": "coingecko:matic-network",
}

# Testnets price as their mainnet
NETWORK_ALIASES: dict[str, str] = {
    "sepolia": "ethereum",
}


class LlamaPrice(BaseModel):
    price_usd: Decimal
    symbol: str | None = None
    timestamp: int | None = None
    confidence: float | None = None


def coin_id(network: str, token: str) -> str:
    network = NETWORK_ALIASES.get(network, network)
    return f"{network}:{token.lower()}"


def native_coin_id(symbol: str) -> str | None:
    return NATIVE_COIN_IDS.get(symbol.upper())


class DefiLlamaProvider:
    """Fetch historical prices from coins.llama.fi. Returns None on any failure."""

    def __init__(self, http_client: RateLimitedClient, base_url: str = BASE_URL) -> None:
        self._http = http_client
        self._base_url = base_url.rstrip("/")

    @retry(
        retry=retry_if_exception_type(ExternalServiceError),
        stop=stop_after_attempt(3),
        wait=wait_exponential(multiplier=1, min=2, max=10),
        reraise=True,
    )
    async def _request(self, url: str) -> dict | None:
        response = await self._http.get(url)

        # Rate limit or server error → retriable
        if response.status_code == 429 or response.status_code >= 500:
            raise ExternalServiceError(f"DefiLlama returned {response.status_code}")

        if response.status_code != 200:
            logger.warning("DefiLlama returned %d for %s", response.status_code, url)
            return None

        try:
            data = response.json()
        except ValueError:
            # HTML error pages come back when throttled at the edge
            logger.warning(
                "DefiLlama returned non-JSON response (%s) for %s",
                response.headers.get("content-type"), url,
            )
            return None

        if not isinstance(data, dict):
            return None
        return data

    async def get_price(self, coin: str, timestamp: datetime) -> LlamaPrice | None:
        """Price for a DefiLlama coin id (`ethereum:0x…` or `coingecko:…`) at a timestamp."""
        unix_ts = int(timestamp.timestamp())
        url = f"{self._base_url}/prices/historical/{unix_ts}/{coin}"

        try:
            data = await self._request(url)
        except ExternalServiceError:
            logger.warning("DefiLlama exhausted retries for %s", coin)
            return None

        if data is None:
            return None

        coin_data = (data.get("coins") or {}).get(coin)
        if not coin_data or coin_data.get("price") is None:
            logger.info("No DefiLlama price data for %s at %d", coin, unix_ts)
            return None

        return LlamaPrice(
            price_usd=Decimal(str(coin_data["price"])),
            symbol=coin_data.get("symbol"),
            timestamp=coin_data.get("timestamp"),
            confidence=coin_data.get("confidence"),
        )
