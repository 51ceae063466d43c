from enum import Enum


class TaxCategory(str, Enum):
    """Tax treatment of a classified event. Set once at classification."""

    DISPOSAL = "DISPOSAL"
    STAKING = "STAKING"
    AIRDROP = "AIRDROP"
    TRANSFER = "TRANSFER"
    DEDUCTION = "DEDUCTION"


class HoldingTerm(str, Enum):
    SHORT = "SHORT"
    LONG = "LONG"


class JobStage(str, Enum):
    """Report pipeline stages, executed strictly in order."""

    PENDING = "PENDING"
    CLASSIFYING = "CLASSIFYING"
    PRICING = "PRICING"
    CALCULATING = "CALCULATING"
    DONE = "DONE"
    ERROR = "ERROR"
