"""Minimal EVM JSON-RPC client — ERC20 metadata reads via eth_call."""

import logging

from tenacity import retry, retry_if_exception_type, stop_after_attempt, wait_exponential

from chaintax.exceptions import ExternalServiceError
from chaintax.infra.http.rate_limited_client import RateLimitedClient

logger = logging.getLogger(__name__)

DECIMALS_SELECTOR = "0x313ce567"  # decimals()
SYMBOL_SELECTOR = "0x95d89b41"    # symbol()


class EvmRpcClient:
    def __init__(self, rpc_url: str, http_client: RateLimitedClient) -> None:
        self._rpc_url = rpc_url
        self._http = http_client

    @retry(
        retry=retry_if_exception_type(ExternalServiceError),
        stop=stop_after_attempt(3),
        wait=wait_exponential(multiplier=1, min=1, max=8),
        reraise=True,
    )
    async def _call(self, method: str, params: list) -> str | None:
        payload = {"jsonrpc": "2.0", "id": 1, "method": method, "params": params}
        resp = await self._http.post(self._rpc_url, json=payload)
        if resp.status_code == 429 or resp.status_code >= 500:
            raise ExternalServiceError(f"RPC {method} returned {resp.status_code}")
        if resp.status_code != 200:
            logger.warning("RPC %s returned %d", method, resp.status_code)
            return None

        try:
            data = resp.json()
        except ValueError:
            logger.warning("RPC %s returned a non-JSON body", method)
            return None
        if not isinstance(data, dict):
            return None

        if "error" in data:
            # Reverts (non-ERC20 contracts) are not retriable
            logger.debug("RPC error for %s: %s", method, data["error"])
            return None
        result = data.get("result")
        return result if isinstance(result, str) else None

    async def eth_call(self, to: str, data: str) -> str | None:
        return await self._call("eth_call", [{"to": to, "data": data}, "latest"])

    async def get_decimals(self, token: str) -> int | None:
        """Return decimals() of an ERC20 contract, or None if unreadable."""
        try:
            result = await self.eth_call(token, DECIMALS_SELECTOR)
        except ExternalServiceError:
            logger.warning("decimals() read failed for %s", token)
            return None
        if not result or result == "0x":
            return None
        try:
            value = int(result, 16)
        except ValueError:
            logger.warning("Malformed decimals() result for %s: %s", token, result[:66])
            return None
        if value > 255:  # uint8 in the standard, anything larger is garbage
            return None
        return value

    async def get_symbol(self, token: str) -> str | None:
        """Return symbol() of an ERC20 contract decoded from an ABI string, or None."""
        try:
            result = await self.eth_call(token, SYMBOL_SELECTOR)
        except ExternalServiceError:
            logger.warning("symbol() read failed for %s", token)
            return None
        if not result or len(result) < 2 + 64 * 3:
            return None
        try:
            raw = bytes.fromhex(result[2:])
        except ValueError:
            logger.warning("Malformed symbol() result for %s", token)
            return None
        length = int.from_bytes(raw[32:64], "big")
        return raw[64:64 + length].decode("utf-8", errors="ignore") or None
