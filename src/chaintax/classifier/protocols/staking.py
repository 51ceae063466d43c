"""Liquid staking and yield vaults."""

from chaintax.classifier.utils.types import ProtocolSpec, method
from chaintax.domain.enums.protocol import MethodCategory, ProtocolCategory

LIDO = ProtocolSpec(
    id="lido",
    name="Lido",
    category=ProtocolCategory.STAKING,
    contracts={
        "0xae7ab96520de3a18e5e111b5eaab095312d7fe84": "stETH",
        "0x889edc2edab5f40e902b864ad4d7ade8e412f9b1": "Withdrawal Queue",
    },
    methods={
        "0xa1903eab": method("submit", MethodCategory.STAKE),
        "0x00f714ce": method("submit (with referral)", MethodCategory.STAKE),
        "0x3a4b66f1": method("requestWithdrawals", MethodCategory.WITHDRAW),
        "0xf7ec0e5e": method("claimWithdrawals", MethodCategory.CLAIM),
    },
)

ROCKET_POOL = ProtocolSpec(
    id="rocket_pool",
    name="Rocket Pool",
    category=ProtocolCategory.STAKING,
    contracts={
        "0xae78736cd615f374d3085123a210448e74fc6393": "rETH",
        "0x2cac916b2a963bf162f076c0a8a4a8200bcfbfb4": "Deposit Pool",
    },
    methods={
        "0xd0e30db0": method("deposit", MethodCategory.DEPOSIT),
        "0x2e1a7d4d": method("withdraw", MethodCategory.WITHDRAW),
    },
)

YEARN = ProtocolSpec(
    id="yearn",
    name="Yearn Finance",
    category=ProtocolCategory.YIELD,
    contracts={
        "0xda816459f1ab5631232fe5e97a05bbbb94970c95": "yvDAI",
        "0xa354f35829ae975e850e23e9615b11da1b3dc4de": "yvUSDC",
    },
    methods={
        "0xb6b55f25": method("deposit", MethodCategory.DEPOSIT),
        "0x2e1a7d4d": method("withdraw", MethodCategory.WITHDRAW),
        "0x3ccfd60b": method("withdraw (with shares)", MethodCategory.WITHDRAW),
    },
)

STAKING_PROTOCOLS: list[ProtocolSpec] = [LIDO, ROCKET_POOL, YEARN]
