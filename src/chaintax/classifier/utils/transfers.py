"""Decode ERC20 Transfer logs from raw receipt logs."""

from pydantic import BaseModel

from chaintax.domain.models.transaction import RawLog

# keccak256("Transfer(address,address,uint256)")
TRANSFER_TOPIC = "0xddf252ad1be2c89b69c2b068fc378daa952ba7f163c4a11628f55a4df523b3ef"
ZERO_ADDRESS = "0x0000000000000000000000000000000000000000"


class TransferLog(BaseModel):
    """A decoded ERC20 Transfer. Addresses lower-cased, amount in smallest unit."""

    token: str
    from_address: str
    to_address: str
    amount: int
    log_index: int = 0

    @property
    def is_mint(self) -> bool:
        return self.from_address == ZERO_ADDRESS


def topic_to_address(topic: str) -> str:
    """Indexed address topics are left-padded to 32 bytes."""
    return "0x" + topic[-40:].lower()


def decode_amount(data: str) -> int:
    stripped = data[2:] if data.startswith("0x") else data
    return int(stripped, 16) if stripped else 0


def decode_transfer_logs(logs: list[RawLog]) -> list[TransferLog]:
    """Return fungible Transfer logs in emission order.

    ERC721 Transfers index the token id as a 4th topic and are skipped, as are
    zero-amount transfers.
    """
    transfers: list[TransferLog] = []
    for log in logs:
        if not log.topics or log.topics[0].lower() != TRANSFER_TOPIC:
            continue
        if len(log.topics) != 3:
            continue
        amount = decode_amount(log.data)
        if amount == 0:
            continue
        transfers.append(TransferLog(
            token=log.address.lower(),
            from_address=topic_to_address(log.topics[1]),
            to_address=topic_to_address(log.topics[2]),
            amount=amount,
            log_index=log.log_index,
        ))
    return transfers
