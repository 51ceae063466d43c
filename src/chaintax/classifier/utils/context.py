"""ClassificationContext — everything a strategy needs to classify one transaction."""

from chaintax.classifier.utils.transfers import TransferLog, decode_transfer_logs
from chaintax.domain.enums.tax import TaxCategory
from chaintax.domain.models.events import ClassifiedEvent, TokenLeg
from chaintax.domain.models.transaction import RawTransaction
from chaintax.infra.price.tokens import native_symbol


class ClassificationContext:
    def __init__(self, tx: RawTransaction, user_address: str, network: str = "ethereum") -> None:
        self.tx = tx
        self.user = user_address.lower()
        self.network = network
        self.transfers: list[TransferLog] = decode_transfer_logs(tx.logs)

    @property
    def to_address(self) -> str | None:
        return self.tx.to_address.lower() if self.tx.to_address else None

    @property
    def user_sent_tx(self) -> bool:
        return self.tx.from_address.lower() == self.user

    @property
    def native_token(self) -> str:
        return native_symbol(self.network).lower()

    def outflows(self) -> list[TransferLog]:
        """Transfers sent by the user to someone else, in log order."""
        return [t for t in self.transfers if t.from_address == self.user and t.to_address != self.user]

    def inflows(self) -> list[TransferLog]:
        """Transfers received by the user from someone else, in log order."""
        return [t for t in self.transfers if t.to_address == self.user and t.from_address != self.user]

    def user_in_transfers(self) -> bool:
        return any(t.from_address == self.user or t.to_address == self.user for t in self.transfers)

    def native_leg(self) -> TokenLeg | None:
        if self.tx.value <= 0:
            return None
        return TokenLeg(token=self.native_token, amount=self.tx.value, symbol=native_symbol(self.network), decimals=18)

    def make_event(
        self,
        category: TaxCategory,
        *,
        token_in: TokenLeg | None = None,
        token_out: TokenLeg | None = None,
        protocol: str | None = None,
        notes: str = "",
    ) -> ClassifiedEvent:
        """Build an event for this tx. Every event carries the full gas fee."""
        return ClassifiedEvent(
            tx_hash=self.tx.hash,
            timestamp=self.tx.timestamp,
            category=category,
            token_in=token_in,
            token_out=token_out,
            gas_fee_wei=self.tx.gas_fee_wei,
            protocol=protocol,
            notes=notes,
        )


def leg_from_transfer(transfer: TransferLog) -> TokenLeg:
    return TokenLeg(token=transfer.token, amount=transfer.amount)
