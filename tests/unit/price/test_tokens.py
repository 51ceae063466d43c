"""Tests for token metadata and raw-amount conversion."""

from decimal import Decimal
from unittest.mock import AsyncMock, MagicMock

from chaintax.infra.price.tokens import (
    DEFAULT_DECIMALS,
    USDC,
    USDT,
    WBTC,
    TokenRegistry,
    is_native,
    is_stablecoin,
    native_symbol,
    to_token_units,
    usd_value,
)


class TestConversion:
    def test_six_decimal_regression(self):
        # Must not be treated as 18 decimals (0.000000154397871509)
        assert to_token_units(154397871509, 6) == Decimal("154397.871509")

    def test_eighteen_decimals(self):
        assert to_token_units(15 * 10**17, 18) == Decimal("1.5")

    def test_usd_value(self):
        assert usd_value(2 * 10**8, 8, Decimal("60000")) == Decimal("120000")


class TestNativeAndStable:
    def test_native_symbol_per_network(self):
        assert native_symbol("ethereum") == "ETH"
        assert native_symbol("mantle") == "MNT"
        assert native_symbol("polygon") == "MATIC"
        assert native_symbol("unknown-chain") == "ETH"

    def test_native_aliases(self):
        assert is_native("ETH")
        assert is_native("native")
        assert is_native("mnt")
        assert not is_native(USDC)

    def test_stablecoins(self):
        assert is_stablecoin(USDC.upper().replace("0X", "0x"))
        assert is_stablecoin(USDT)
        assert not is_stablecoin(WBTC)


class TestTokenRegistry:
    def test_static_decimals(self):
        tokens = TokenRegistry()
        assert tokens.decimals(USDC) == 6
        assert tokens.decimals(WBTC) == 8
        assert tokens.decimals("0x0000000000000000000000000000000000000abc") == DEFAULT_DECIMALS
        assert tokens.decimals("eth") == 18

    def test_symbols(self):
        tokens = TokenRegistry()
        assert tokens.symbol(USDC) == "USDC"
        assert tokens.symbol("eth") == "ETH"
        assert tokens.symbol("0x0000000000000000000000000000000000000abc") is None

    def test_remember_symbol_keeps_first(self):
        tokens = TokenRegistry()
        tokens.remember_symbol("0xABC", "ABC")
        tokens.remember_symbol("0xabc", "XYZ")
        assert tokens.symbol("0xabc") == "ABC"

    async def test_refresh_reads_onchain_once(self):
        rpc = MagicMock()
        rpc.get_decimals = AsyncMock(return_value=9)
        rpc.get_symbol = AsyncMock(return_value="NINE")
        tokens = TokenRegistry(rpc=rpc)

        assert await tokens.refresh("0xabc") == 9
        assert await tokens.refresh("0xABC") == 9
        assert tokens.decimals("0xabc") == 9
        rpc.get_decimals.assert_called_once_with("0xabc")
        rpc.get_symbol.assert_called_once_with("0xabc")
        assert tokens.symbol("0xabc") == "NINE"

    async def test_refresh_skips_known_tokens(self):
        rpc = MagicMock()
        rpc.get_decimals = AsyncMock(return_value=18)
        tokens = TokenRegistry(rpc=rpc)

        assert await tokens.refresh(USDC) == 6
        rpc.get_decimals.assert_not_called()

    async def test_refresh_falls_back_to_default(self):
        rpc = MagicMock()
        rpc.get_decimals = AsyncMock(return_value=None)
        rpc.get_symbol = AsyncMock(return_value="X")
        tokens = TokenRegistry(rpc=rpc)

        assert await tokens.refresh("0xabc") == DEFAULT_DECIMALS
        rpc.get_symbol.assert_not_called()

    async def test_refresh_without_rpc(self):
        assert await TokenRegistry().refresh("0xabc") == DEFAULT_DECIMALS

    async def test_refresh_keeps_known_symbol(self):
        rpc = MagicMock()
        rpc.get_decimals = AsyncMock(return_value=12)
        rpc.get_symbol = AsyncMock(return_value="OTHER")
        tokens = TokenRegistry(rpc=rpc)
        tokens.remember_symbol("0xabc", "ABC")

        assert await tokens.refresh("0xabc") == 12
        assert tokens.symbol("0xabc") == "ABC"
        rpc.get_symbol.assert_not_called()
