"""Payment gateway protocol.

Cross-cutting infrastructure protocol for payment processing (Stripe).
All methods must be implemented by the same provider.

Direct consumers: CheckoutService, BillingWebhookProcessor.
"""

from typing import Any, Dict, Optional, Protocol, runtime_checkable


@runtime_checkable
class PaymentGatewayProtocol(Protocol):
    """Protocol for payment gateway operations.

    Abstracts the payment provider calls this service makes: customers,
    subscriptions, checkout sessions and webhook verification.
    """

    # -------------------------------------------------------------------------
    # Customer operations
    # -------------------------------------------------------------------------

    async def create_customer(
        self,
        email: Optional[str],
        name: Optional[str],
        metadata: Optional[Dict[str, str]] = None,
    ) -> Any:
        """Create a customer in the payment provider."""
        ...

    async def retrieve_customer(self, customer_id: str) -> Any:
        """Retrieve a customer."""
        ...

    # -------------------------------------------------------------------------
    # Subscription operations
    # -------------------------------------------------------------------------

    async def get_subscription(self, subscription_id: str) -> Any:
        """Retrieve a subscription."""
        ...

    # -------------------------------------------------------------------------
    # Checkout operations
    # -------------------------------------------------------------------------

    async def create_checkout_session(
        self,
        customer_id: str,
        price_id: str,
        success_url: str,
        cancel_url: str,
        metadata: Optional[Dict[str, str]] = None,
    ) -> Any:
        """Create a subscription-mode checkout session."""
        ...

    # -------------------------------------------------------------------------
    # Webhook operations
    # -------------------------------------------------------------------------

    def verify_webhook_signature(self, payload: bytes, signature: str) -> Any:
        """Verify and construct webhook event from payload and signature.

        Raises ValueError when the signature or payload is invalid.
        """
        ...
