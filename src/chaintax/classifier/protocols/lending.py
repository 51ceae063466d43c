"""Lending markets. Borrow/repay are mapped without debt-liability accounting."""

from chaintax.classifier.utils.types import ProtocolSpec, method
from chaintax.domain.enums.protocol import MethodCategory, ProtocolCategory

AAVE_V2 = ProtocolSpec(
    id="aave_v2",
    name="Aave V2",
    category=ProtocolCategory.LENDING,
    contracts={"0x7d2768de32b0b80b7a3454c06bdac94a69ddc7a9": "Lending Pool"},
    methods={
        "0xe8eda9df": method("deposit", MethodCategory.DEPOSIT),
        "0x69328dec": method("withdraw", MethodCategory.WITHDRAW),
        "0xa415bcad": method("borrow", MethodCategory.BORROW),
        "0x573ade81": method("repay", MethodCategory.REPAY),
    },
)

AAVE_V3 = ProtocolSpec(
    id="aave_v3",
    name="Aave V3",
    category=ProtocolCategory.LENDING,
    contracts={"0x87870bca3f3fd6335c3f4ce8392d69350b4fa4e2": "Pool"},
    methods={
        "0x617ba037": method("supply", MethodCategory.DEPOSIT),
        "0x69328dec": method("withdraw", MethodCategory.WITHDRAW),
        "0xa415bcad": method("borrow", MethodCategory.BORROW),
        "0x573ade81": method("repay", MethodCategory.REPAY),
    },
)

COMPOUND_V2 = ProtocolSpec(
    id="compound_v2",
    name="Compound V2",
    category=ProtocolCategory.LENDING,
    contracts={
        "0x5d3a536e4d6dbd6114cc1ead35777bab948e3643": "cDAI",
        "0x4ddc2d193948926d02f9b1fe9e1daa0718270ed5": "cETH",
        "0x39aa39c021dfbae8fac545936693ac917d5e7563": "cUSDC",
        "0xf650c3d88d12db855b8bf7d11be6c55a4e07dcc9": "cUSDT",
    },
    methods={
        "0xa0712d68": method("mint", MethodCategory.DEPOSIT),
        "0xdb006a75": method("redeem", MethodCategory.WITHDRAW),
        "0xc5ebeaec": method("borrow", MethodCategory.BORROW),
        "0x0e752702": method("repayBorrow", MethodCategory.REPAY),
    },
)

LENDING_PROTOCOLS: list[ProtocolSpec] = [AAVE_V2, AAVE_V3, COMPOUND_V2]
