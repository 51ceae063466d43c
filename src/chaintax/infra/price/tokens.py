"""Static token metadata and amount→USD conversion.

Every raw-amount conversion goes through `to_token_units` with the token's real
decimal count. USDC/USDT are 6 decimals and WBTC is 8, so assuming 18 would shift
values by 10^12 or 10^10.
"""

from __future__ import annotations

import logging
from decimal import Decimal
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from chaintax.infra.blockchain.evm.rpc_client import EvmRpcClient

logger = logging.getLogger(__name__)

DEFAULT_DECIMALS = 18

USDC = "0xa0b86991c6218b36c1d19d4a2e9eb0ce3606eb48"
USDT = "0xdac17f958d2ee523a2206206994597c13d831ec7"
DAI = "0x6b175474e89094c44da98b954eedeac495271d0f"
BUSD = "0x4fabb145d64652a948d72533023f6e7a623c7c53"
FRAX = "0x853d955acef822db058eb8505911ed77f175b99e"
USDBC = "0xd9aaec86b65d86f6a7b5b1b0c42ffa531710b6ca"
WETH = "0xc02aaa39b223fe8d0a0e5c4f27ead9083c756cc2"
WBTC = "0x2260fac5e5542a773aa44fbcfedf7c193bc2c599"

# Always $1, no external lookup
STABLECOINS: frozenset[str] = frozenset({USDC, USDT, DAI, BUSD, FRAX, USDBC})

TOKEN_SYMBOLS: dict[str, str] = {
    USDC: "USDC",
    USDT: "USDT",
    DAI: "DAI",
    BUSD: "BUSD",
    FRAX: "FRAX",
    USDBC: "USDbC",
    WETH: "WETH",
    WBTC: "WBTC",
}

TOKEN_DECIMALS: dict[str, int] = {
    USDC: 6,
    USDT: 6,
    BUSD: 6,
    USDBC: 6,
    WBTC: 8,
}

# Native gas token per network
NATIVE_SYMBOLS: dict[str, str] = {
    "ethereum": "ETH",
    "arbitrum": "ETH",
    "optimism": "ETH",
    "base": "ETH",
    "sepolia": "ETH",
    "polygon": "MATIC",
    "mantle": "MNT",
}

NATIVE_ALIASES: frozenset[str] = frozenset({"eth", "native", "matic", "mnt"})


def native_symbol(network: str) -> str:
    return NATIVE_SYMBOLS.get(network, "ETH")


def is_native(token: str) -> bool:
    return token.lower() in NATIVE_ALIASES


def is_stablecoin(token: str) -> bool:
    return token.lower() in STABLECOINS


def to_token_units(amount: int, decimals: int) -> Decimal:
    """Convert a raw integer amount to whole-token units."""
    return Decimal(amount) / Decimal(10) ** decimals


def usd_value(amount: int, decimals: int, price_usd: Decimal) -> Decimal:
    return to_token_units(amount, decimals) * price_usd


class TokenRegistry:
    """Address → decimals/symbol lookup.

    Static table first, then values read on-chain via `refresh` when an RPC client
    is configured, then the 18-decimal default.
    """

    def __init__(self, rpc: EvmRpcClient | None = None) -> None:
        self._rpc = rpc
        self._decimals: dict[str, int] = dict(TOKEN_DECIMALS)
        self._symbols: dict[str, str] = dict(TOKEN_SYMBOLS)

    def decimals(self, token: str) -> int:
        if is_native(token):
            return DEFAULT_DECIMALS
        return self._decimals.get(token.lower(), DEFAULT_DECIMALS)

    def symbol(self, token: str) -> str | None:
        if is_native(token):
            return token.upper()
        return self._symbols.get(token.lower())

    def remember_symbol(self, token: str, symbol: str) -> None:
        self._symbols.setdefault(token.lower(), symbol)

    async def refresh(self, token: str) -> int:
        """Read decimals() (and symbol() when unknown) on-chain once per token.

        Falls back to the table or the 18-decimal default when the read fails.
        """
        key = token.lower()
        if is_native(key) or self._rpc is None or key in self._decimals:
            return self.decimals(key)

        onchain = await self._rpc.get_decimals(key)
        if onchain is None:
            logger.debug("No on-chain decimals for %s, using default %d", key, DEFAULT_DECIMALS)
            return self.decimals(key)

        self._decimals[key] = onchain
        if self.symbol(key) is None:
            symbol = await self._rpc.get_symbol(key)
            if symbol:
                self.remember_symbol(key, symbol)
        return onchain
