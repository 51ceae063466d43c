from enum import Enum


class Network(str, Enum):
    """Supported EVM networks. Values match DefiLlama chain prefixes."""

    ETHEREUM = "ethereum"
    ARBITRUM = "arbitrum"
    OPTIMISM = "optimism"
    POLYGON = "polygon"
    BASE = "base"
    MANTLE = "mantle"
    SEPOLIA = "sepolia"
