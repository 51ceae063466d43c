"""KnownProtocolClassifier — registry hit on contract address and method selector."""

from chaintax.classifier.generic.base import BaseClassifier
from chaintax.classifier.registry import METHOD_NOTES, METHOD_TAX_CATEGORY, ProtocolRegistry
from chaintax.classifier.utils.context import ClassificationContext, leg_from_transfer
from chaintax.domain.models.events import ClassifiedEvent


class KnownProtocolClassifier(BaseClassifier):
    """Emits exactly one event whose category comes from the method → tax table.

    tokenOut is the first token the user sent, tokenIn the last token the user
    received. Native value is the tokenOut leg when no token left the user.
    """

    NAME = "KnownProtocolClassifier"

    def __init__(self, registry: ProtocolRegistry) -> None:
        self._registry = registry

    def can_classify(self, context: ClassificationContext) -> bool:
        return self._match(context) is not None

    def classify(self, context: ClassificationContext) -> list[ClassifiedEvent]:
        match = self._match(context)
        if match is None:
            return []

        category = METHOD_TAX_CATEGORY[match.method.category]
        outflows = context.outflows()
        inflows = context.inflows()

        token_out = leg_from_transfer(outflows[0]) if outflows else context.native_leg()
        token_in = leg_from_transfer(inflows[-1]) if inflows else None

        return [context.make_event(
            category,
            token_in=token_in,
            token_out=token_out,
            protocol=match.protocol.name,
            notes=f"{match.protocol.name} {METHOD_NOTES[match.method.category]} ({match.method.name})",
        )]

    def _match(self, context: ClassificationContext):
        return self._registry.match(context.network, context.to_address, context.tx.method_selector)
