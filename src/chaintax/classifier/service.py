"""Classifier — runs strategies in priority order; first non-empty result wins."""

import logging

from chaintax.classifier.generic.base import BaseClassifier
from chaintax.classifier.generic.direct import DirectTransferClassifier
from chaintax.classifier.generic.native import GasOnlyClassifier, NativeTransferClassifier
from chaintax.classifier.generic.proxy import ProxyTransferClassifier
from chaintax.classifier.known import KnownProtocolClassifier
from chaintax.classifier.registry import ProtocolRegistry, build_default_registry
from chaintax.classifier.utils.context import ClassificationContext
from chaintax.domain.models.events import ClassifiedEvent
from chaintax.domain.models.transaction import RawTransaction
from chaintax.exceptions import ClassificationError

logger = logging.getLogger(__name__)


class Classifier:
    """Turn one raw transaction into tax events.

    Priority: known protocol → direct transfers → proxy transfers → native
    transfer → gas only. Gas-only always matches, so every transaction yields
    at least one event.
    """

    def __init__(
        self,
        registry: ProtocolRegistry | None = None,
        strategies: list[BaseClassifier] | None = None,
    ) -> None:
        self._registry = registry or build_default_registry()
        self._strategies: list[BaseClassifier] = strategies or [
            KnownProtocolClassifier(self._registry),
            DirectTransferClassifier(),
            ProxyTransferClassifier(),
            NativeTransferClassifier(),
            GasOnlyClassifier(),  # Always last
        ]

    @property
    def registry(self) -> ProtocolRegistry:
        return self._registry

    def classify(self, tx: RawTransaction, user_address: str, network: str = "ethereum") -> list[ClassifiedEvent]:
        context = ClassificationContext(tx, user_address, network)

        for strategy in self._strategies:
            if not strategy.can_classify(context):
                continue
            events = strategy.classify(context)
            if events:
                logger.debug("%s classified %s → %d event(s)", strategy.NAME, tx.hash, len(events))
                return events

        raise ClassificationError(f"No strategy produced events for {tx.hash}")
