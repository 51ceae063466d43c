"""Last-resort classifiers: plain native transfers, then gas-only."""

from chaintax.classifier.generic.base import BaseClassifier
from chaintax.classifier.utils.context import ClassificationContext
from chaintax.domain.enums.tax import TaxCategory
from chaintax.domain.models.events import ClassifiedEvent


class NativeTransferClassifier(BaseClassifier):
    NAME = "NativeTransferClassifier"

    def can_classify(self, context: ClassificationContext) -> bool:
        return context.tx.value > 0

    def classify(self, context: ClassificationContext) -> list[ClassifiedEvent]:
        symbol = context.native_token.upper()
        return [context.make_event(
            TaxCategory.TRANSFER,
            token_out=context.native_leg(),
            notes=f"{symbol} transfer",
        )]


class GasOnlyClassifier(BaseClassifier):
    """Always matches. Records the gas fee as a deduction."""

    NAME = "GasOnlyClassifier"

    def can_classify(self, context: ClassificationContext) -> bool:
        return True

    def classify(self, context: ClassificationContext) -> list[ClassifiedEvent]:
        return [context.make_event(TaxCategory.DEDUCTION, notes="Gas fee only")]
