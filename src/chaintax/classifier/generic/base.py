"""Base classifier interface."""

from abc import ABC, abstractmethod

from chaintax.classifier.utils.context import ClassificationContext
from chaintax.domain.models.events import ClassifiedEvent


class BaseClassifier(ABC):
    """Minimal interface all classification strategies implement."""

    NAME: str = "BaseClassifier"

    @abstractmethod
    def can_classify(self, context: ClassificationContext) -> bool:
        """Quick check: should this strategy handle this TX?"""

    @abstractmethod
    def classify(self, context: ClassificationContext) -> list[ClassifiedEvent]:
        """Return events for the TX. An empty list hands over to the next strategy."""
