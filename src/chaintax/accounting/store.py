"""LotStore — in-memory cost lots keyed by (address, token).

The ledger operates on an explicit store handle; `CostLotRepo` loads a store
from the database and writes it back after a run. A store also remembers
which reports were already applied to its lots, so a report is never
replayed onto the same lots twice.
"""

from collections import defaultdict

from chaintax.domain.models.ledger import CostLot
from chaintax.domain.models.tax import TaxSummary

ReportKey = tuple[str, str, str]  # (address, period label, network)


def _key(address: str, token: str) -> tuple[str, str]:
    return address.lower(), token.lower()


class LotStore:
    def __init__(
        self,
        lots: list[CostLot] | None = None,
        applied: dict[ReportKey, TaxSummary] | None = None,
    ) -> None:
        self._lots: dict[tuple[str, str], list[CostLot]] = defaultdict(list)
        self._applied: dict[ReportKey, TaxSummary] = dict(applied or {})
        for lot in lots or []:
            self.add(lot)

    def add(self, lot: CostLot) -> None:
        self._lots[_key(lot.address, lot.token)].append(lot)

    def lots(self, address: str, token: str) -> list[CostLot]:
        """All lots for (address, token), oldest acquisition first.

        Sort is stable, so lots acquired at the same instant keep insertion order.
        """
        return sorted(self._lots.get(_key(address, token), []), key=lambda lot: lot.acquired_at)

    def open_lots(self, address: str, token: str) -> list[CostLot]:
        return [lot for lot in self.lots(address, token) if not lot.disposed and lot.remaining_amount > 0]

    def all_lots(self, address: str | None = None) -> list[CostLot]:
        result: list[CostLot] = []
        for (owner, _), lots in self._lots.items():
            if address is None or owner == address.lower():
                result.extend(lots)
        return sorted(result, key=lambda lot: lot.acquired_at)

    def tokens(self, address: str) -> list[str]:
        return [token for owner, token in self._lots if owner == address.lower()]

    def mark_applied(self, key: ReportKey, summary: TaxSummary) -> None:
        self._applied[key] = summary

    def applied(self, key: ReportKey) -> TaxSummary | None:
        """Summary of the report `key` if its events were already applied to these lots."""
        return self._applied.get(key)

    def __len__(self) -> int:
        return sum(len(v) for v in self._lots.values())


class InMemoryLotStores:
    """Process-local address → LotStore holder with the same shape as CostLotRepo."""

    def __init__(self) -> None:
        self._stores: dict[str, LotStore] = {}

    async def load(self, address: str) -> LotStore:
        return self._stores.setdefault(address.lower(), LotStore())

    async def save(self, address: str, store: LotStore) -> int:
        self._stores[address.lower()] = store
        return len(store)

    async def delete(self, address: str) -> None:
        self._stores.pop(address.lower(), None)
