"""Billing domain exceptions."""

import functools

from presida.core.exceptions import (
    ExternalServiceError,
    InvalidStateError,
    NotFoundException,
    PresidaException,
)


class BillingMetadataError(InvalidStateError):
    """Raised when a payment-provider object carries no internal user id."""

    def __init__(self, message: str = "User ID not found in metadata"):
        """Initialize with default message."""
        super().__init__(message)


class CustomerNotFoundError(NotFoundException):
    """Raised when no customer mapping exists for a subscription update."""

    def __init__(self, message: str = "Customer not found in database"):
        """Initialize with default message."""
        super().__init__(message)


class BillingNotAvailableError(InvalidStateError):
    """Raised by NullPaymentGateway when billing is not enabled."""

    def __init__(self, message: str = "Billing is not enabled for this instance"):
        """Initialize with default message."""
        super().__init__(message)


class WebhookSignatureError(ValueError):
    """Raised when a webhook payload fails signature verification."""

    pass


class PaymentGatewayError(ExternalServiceError):
    """Wraps ExternalServiceError from the payment adapter at the domain boundary."""

    def __init__(self, message: str = "Payment gateway error"):
        """Initialize with default message."""
        super().__init__(service_name="PaymentGateway", message=message)


def wrap_gateway_errors(fn):
    """Decorator: catch ExternalServiceError from payment gateway, wrap as PaymentGatewayError."""

    @functools.wraps(fn)
    async def wrapper(*args, **kwargs):
        try:
            return await fn(*args, **kwargs)
        except PaymentGatewayError:
            raise
        except ExternalServiceError as e:
            raise PaymentGatewayError(message=e.message) from e

    return wrapper


class CheckoutError(PresidaException):
    """A checkout attempt failed with a client-facing message and error code.

    Args:
    ----
        code (str): Stable machine-readable error code.
        message (str): User-facing message.

    """

    def __init__(self, code: str, message: str, status_code: int = 500):
        """Create a new CheckoutError instance."""
        self.code = code
        self.message = message
        self.status_code = status_code
        super().__init__(message)
