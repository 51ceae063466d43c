"""Raw on-chain input types. Read-only to the core."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict


class RawLog(BaseModel):
    """One emitted event log: contract address, topics and ABI-encoded data."""

    model_config = ConfigDict(frozen=True)

    address: str
    topics: list[str] = []
    data: str = "0x"
    log_index: int = 0


class RawTransaction(BaseModel):
    """A fetched transaction with its receipt logs, ordered as emitted."""

    model_config = ConfigDict(frozen=True)

    hash: str
    block_number: int = 0
    timestamp: datetime
    from_address: str
    to_address: str | None = None
    value: int = 0  # wei
    gas_used: int = 0
    gas_price: int = 0
    method_selector: str | None = None
    logs: list[RawLog] = []

    @property
    def gas_fee_wei(self) -> int:
        return self.gas_used * self.gas_price
