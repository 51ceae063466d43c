"""DirectTransferClassifier — the user appears as sender/receiver in Transfer logs."""

from chaintax.classifier.generic.base import BaseClassifier
from chaintax.classifier.utils.context import ClassificationContext, leg_from_transfer
from chaintax.domain.enums.tax import TaxCategory
from chaintax.domain.models.events import ClassifiedEvent


class DirectTransferClassifier(BaseClassifier):
    """Classify by the user's own Transfer legs.

    - Inflows from the zero address are mints → AIRDROP.
    - Outflows and the remaining inflows are paired in log order → one DISPOSAL per pair.
    - Unpaired outflows → DISPOSAL if the TX has any inflow, else TRANSFER.
    - Unpaired inflows → AIRDROP if the TX has no outflow, else DISPOSAL (tokenIn only).
    """

    NAME = "DirectTransferClassifier"

    def can_classify(self, context: ClassificationContext) -> bool:
        return context.user_in_transfers()

    def classify(self, context: ClassificationContext) -> list[ClassifiedEvent]:
        events: list[ClassifiedEvent] = []
        outflows = context.outflows()
        inflows = context.inflows()

        mints = [t for t in inflows if t.is_mint]
        received = [t for t in inflows if not t.is_mint]

        for mint in mints:
            events.append(context.make_event(
                TaxCategory.AIRDROP,
                token_in=leg_from_transfer(mint),
                notes="Token minted to user",
            ))

        paired = min(len(outflows), len(received))
        for out, inc in zip(outflows[:paired], received[:paired]):
            events.append(context.make_event(
                TaxCategory.DISPOSAL,
                token_out=leg_from_transfer(out),
                token_in=leg_from_transfer(inc),
                notes="Token swap/exchange",
            ))

        for out in outflows[paired:]:
            category = TaxCategory.DISPOSAL if inflows else TaxCategory.TRANSFER
            events.append(context.make_event(
                category,
                token_out=leg_from_transfer(out),
                notes="Token swap/exchange" if inflows else "Token sent",
            ))

        for inc in received[paired:]:
            category = TaxCategory.DISPOSAL if outflows else TaxCategory.AIRDROP
            events.append(context.make_event(
                category,
                token_in=leg_from_transfer(inc),
                notes="Token received in swap" if outflows else "Potential airdrop/reward",
            ))

        return events
