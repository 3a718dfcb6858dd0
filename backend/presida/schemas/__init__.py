"""Pydantic schemas for the application."""

from .admin import DeleteUserRequest, ForceLogoutResponse, MessageResponse, SignOutResult
from .billing import (
    CheckoutErrorResponse,
    CheckoutRequest,
    CheckoutSessionResponse,
    MockCheckoutResponse,
    WebhookAck,
)
from .health import CheckStatus, DependencyCheck, LivenessResponse, ReadinessResponse
from .identity import IdentityUser
from .stripe_customer import StripeCustomer, StripeCustomerCreate
from .stripe_subscription import StripeSubscription, StripeSubscriptionWrite

__all__ = [
    "CheckoutErrorResponse",
    "CheckoutRequest",
    "CheckoutSessionResponse",
    "CheckStatus",
    "DependencyCheck",
    "DeleteUserRequest",
    "ForceLogoutResponse",
    "IdentityUser",
    "LivenessResponse",
    "MessageResponse",
    "MockCheckoutResponse",
    "ReadinessResponse",
    "SignOutResult",
    "StripeCustomer",
    "StripeCustomerCreate",
    "StripeSubscription",
    "StripeSubscriptionWrite",
    "WebhookAck",
]
