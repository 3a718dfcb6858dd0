"""Billing domain protocols.

CheckoutServiceProtocol: what the checkout endpoints need injected.
BillingWebhookProtocol: single method for webhook event processing.
"""

from typing import Optional, Protocol, runtime_checkable

from sqlalchemy.ext.asyncio import AsyncSession

from presida.schemas.billing import MockCheckoutResponse
from presida.schemas.identity import IdentityUser


@runtime_checkable
class CheckoutServiceProtocol(Protocol):
    """Checkout flows exposed to the API layer."""

    def create_mock_checkout(
        self,
        price_id: str,
        success_url: Optional[str] = None,
        cancel_url: Optional[str] = None,
        authorization: Optional[str] = None,
    ) -> MockCheckoutResponse:
        """Build the redirect of a mock checkout without contacting the provider."""
        ...

    async def authenticate(self, authorization: Optional[str]) -> IdentityUser:
        """Resolve the caller of the real checkout from its bearer token."""
        ...

    async def create_checkout_session(
        self,
        db: AsyncSession,
        user: IdentityUser,
        price_id: str,
        success_url: Optional[str] = None,
        cancel_url: Optional[str] = None,
    ) -> str:
        """Create a provider checkout session. Returns the checkout URL."""
        ...


@runtime_checkable
class BillingWebhookProtocol(Protocol):
    """Processes verified payment-provider webhook deliveries."""

    async def process_webhook(self, db: AsyncSession, payload: bytes, signature: str) -> None:
        """Verify the delivery and reconcile its event.

        Raises WebhookSignatureError if the signature or payload is invalid.
        """
        ...
