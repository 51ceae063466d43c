from chaintax.domain.enums.chain import Network
from chaintax.domain.enums.price import PriceSource
from chaintax.domain.enums.protocol import MethodCategory, ProtocolCategory
from chaintax.domain.enums.tax import HoldingTerm, JobStage, TaxCategory

__all__ = [
    "HoldingTerm",
    "JobStage",
    "MethodCategory",
    "Network",
    "PriceSource",
    "ProtocolCategory",
    "TaxCategory",
]
