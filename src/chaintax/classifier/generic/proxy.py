"""ProxyTransferClassifier — user sent the TX but never appears in Transfer logs.

Typical of DEX aggregators and vaults that move funds through intermediary
contracts. The token-order heuristic below is approximate: with 3+ distinct
tokens (multi-hop routes) it can pick the wrong legs.
"""

from chaintax.classifier.generic.base import BaseClassifier
from chaintax.classifier.utils.context import ClassificationContext
from chaintax.classifier.utils.transfers import TransferLog
from chaintax.domain.enums.tax import TaxCategory
from chaintax.domain.models.events import ClassifiedEvent, TokenLeg


class ProxyTransferClassifier(BaseClassifier):
    NAME = "ProxyTransferClassifier"

    def can_classify(self, context: ClassificationContext) -> bool:
        return bool(context.transfers) and context.user_sent_tx and not context.user_in_transfers()

    def classify(self, context: ClassificationContext) -> list[ClassifiedEvent]:
        groups = self._group_by_token(context.transfers)
        if not groups:
            return []

        tokens = list(groups)
        if len(tokens) >= 2:
            # First token group sold, last token group bought
            first, last = groups[tokens[0]], groups[tokens[-1]]
            return [context.make_event(
                TaxCategory.DISPOSAL,
                token_out=TokenLeg(token=tokens[0], amount=first[0].amount),
                token_in=TokenLeg(token=tokens[-1], amount=last[-1].amount),
                notes="Swap via aggregator/proxy",
            )]

        only = groups[tokens[0]]
        return [context.make_event(
            TaxCategory.TRANSFER,
            token_out=TokenLeg(token=tokens[0], amount=only[0].amount),
            notes="Token interaction via proxy",
        )]

    @staticmethod
    def _group_by_token(transfers: list[TransferLog]) -> dict[str, list[TransferLog]]:
        """Group in first-encounter order."""
        groups: dict[str, list[TransferLog]] = {}
        for t in transfers:
            groups.setdefault(t.token, []).append(t)
        return groups
