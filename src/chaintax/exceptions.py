"""Exception hierarchy for chaintax."""


class ChainTaxError(Exception):
    """Base class for all chaintax errors."""


class ExternalServiceError(ChainTaxError):
    """An upstream HTTP / RPC service failed or returned an unusable response."""


class PriceUnavailable(ChainTaxError):
    """No usable USD price could be resolved for a token at a timestamp."""

    def __init__(self, token: str, message: str = "") -> None:
        self.token = token
        super().__init__(message or f"No price available for {token}")


class InvalidConfigError(ChainTaxError):
    """Rates or thresholds are out of range. Raised before any lot is touched."""


class LedgerConsistencyError(ChainTaxError):
    """A ledger operation was rejected without mutating any lot."""


class ClassificationError(ChainTaxError):
    """A raw transaction could not be decoded into classifiable data."""
