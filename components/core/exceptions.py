"""Domain errors raised by repositories and services.

Endpoints translate these into HTTP responses; nothing here is fatal to the
process and every error is scoped to the single action that raised it.
"""


class ProServError(Exception):
    """Base class for all domain errors."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationFailed(ProServError):
    """Input was rejected before reaching the store."""


class RecordNotFound(ProServError):
    """The record does not exist or belongs to another account."""


class QuotaExceeded(ProServError):
    """The free-tier monthly appointment quota is used up."""


class FeatureNotAvailable(ProServError):
    """The account's plan or role does not unlock this feature."""


class InvalidStatusTransition(ProServError):
    """The requested appointment status change is not allowed."""


class PaymentGatewayError(ProServError):
    """The payment provider is misconfigured or rejected the request."""
