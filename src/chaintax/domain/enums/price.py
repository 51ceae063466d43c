from enum import Enum


class PriceSource(str, Enum):
    """Where a resolved price came from."""

    STABLE = "stable"
    CACHE = "cache"
    EXTERNAL = "external"
    FALLBACK = "fallback"
    UNKNOWN = "unknown"  # zero price, treat as unavailable
