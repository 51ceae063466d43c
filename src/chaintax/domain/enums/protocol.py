from enum import Enum


class ProtocolCategory(str, Enum):
    """Broad kind of a known DeFi protocol."""

    DEX = "DEX"
    LENDING = "LENDING"
    STAKING = "STAKING"
    YIELD = "YIELD"
    BRIDGE = "BRIDGE"


class MethodCategory(str, Enum):
    """What a known contract method does, before tax mapping."""

    SWAP = "SWAP"
    DEPOSIT = "DEPOSIT"
    WITHDRAW = "WITHDRAW"
    STAKE = "STAKE"
    CLAIM = "CLAIM"
    BORROW = "BORROW"
    REPAY = "REPAY"
