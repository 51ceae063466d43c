"""Last-resort yearly-average prices for native gas tokens.

Only native assets are approximated. Any other token gets no fallback price.
"""

from datetime import datetime
from decimal import Decimal

YEARLY_NATIVE_PRICES: dict[str, dict[int, Decimal]] = {
    "ETH": {
        2020: Decimal("400"),
        2021: Decimal("2000"),
        2022: Decimal("1500"),
        2023: Decimal("1800"),
        2024: Decimal("2200"),
        2025: Decimal("2500"),
        2026: Decimal("2800"),
    },
    "MNT": {
        2023: Decimal("0.5"),
        2024: Decimal("0.8"),
        2025: Decimal("1.0"),
        2026: Decimal("1.2"),
    },
}

DEFAULT_NATIVE_PRICES: dict[str, Decimal] = {
    "ETH": Decimal("2000"),
    "MNT": Decimal("0.8"),
}


def fallback_price(symbol: str, timestamp: datetime) -> Decimal | None:
    """Yearly average for a recognized native symbol, or None."""
    upper = symbol.upper()
    table = YEARLY_NATIVE_PRICES.get(upper)
    if table is None:
        return None
    return table.get(timestamp.year, DEFAULT_NATIVE_PRICES[upper])
