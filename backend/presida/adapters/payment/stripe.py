"""Stripe adapter for payments.

Implements PaymentGatewayProtocol on top of ``stripe.StripeClient`` using the
async request methods. Stripe SDK errors are converted at the boundary:
signature and payload problems become ValueError, everything else becomes
ExternalServiceError.
"""

import logging
from functools import wraps
from typing import Any, Callable, Dict, Optional, TypeVar

import stripe

from presida.core.exceptions import ExternalServiceError
from presida.core.protocols.payment import PaymentGatewayProtocol
from presida.domains.billing.exceptions import BillingNotAvailableError

logger = logging.getLogger(__name__)

T = TypeVar("T")

SERVICE_NAME = "Stripe"


def _raise_from_stripe_error(e: stripe.StripeError, context: str) -> None:
    """Convert a Stripe SDK error to ExternalServiceError and raise it."""
    if isinstance(e, stripe.APIConnectionError):
        message = f"Network error while trying to {context}: {e.user_message or e}"
    else:
        message = e.user_message or str(e)
    raise ExternalServiceError(SERVICE_NAME, message) from e


def _translate_errors(context: str) -> Callable[[Callable[..., T]], Callable[..., T]]:
    """Decorator: wrap Stripe SDK failures of an async call."""

    def decorator(method: Callable[..., T]) -> Callable[..., T]:
        @wraps(method)
        async def wrapper(*args, **kwargs):
            try:
                return await method(*args, **kwargs)
            except stripe.StripeError as e:
                logger.error(f"Stripe call failed ({context}): {e}")
                _raise_from_stripe_error(e, context)

        return wrapper

    return decorator


class StripePaymentGateway(PaymentGatewayProtocol):
    """Payment gateway backed by the Stripe API."""

    def __init__(
        self,
        secret_key: Optional[str],
        webhook_secret: Optional[str] = None,
        client: Optional[stripe.StripeClient] = None,
    ) -> None:
        """Create the gateway.

        Args:
        ----
            secret_key (str, optional): Stripe secret API key.
            webhook_secret (str, optional): Endpoint secret used to verify webhooks.
            client (StripeClient, optional): Preconfigured client, mainly for tests.

        """
        self._secret_key = secret_key
        self._webhook_secret = webhook_secret
        self._client_instance = client

    @property
    def _client(self) -> stripe.StripeClient:
        """Client built on first use so a missing key only fails provider calls."""
        if self._client_instance is None:
            if not self._secret_key:
                raise BillingNotAvailableError("Stripe API key is not configured")
            self._client_instance = stripe.StripeClient(
                self._secret_key, http_client=stripe.HTTPXClient()
            )
        return self._client_instance

    # ---- Customer operations ----

    @_translate_errors("create customer")
    async def create_customer(
        self,
        email: Optional[str],
        name: Optional[str],
        metadata: Optional[Dict[str, str]] = None,
    ) -> Any:
        """Create a Stripe customer."""
        params: Dict[str, Any] = {"metadata": metadata or {}}
        if email:
            params["email"] = email
        if name:
            params["name"] = name
        return await self._client.customers.create_async(params=params)

    @_translate_errors("retrieve customer")
    async def retrieve_customer(self, customer_id: str) -> Any:
        """Retrieve a Stripe customer."""
        return await self._client.customers.retrieve_async(customer_id)

    # ---- Subscription operations ----

    @_translate_errors("retrieve subscription")
    async def get_subscription(self, subscription_id: str) -> Any:
        """Retrieve a Stripe subscription."""
        return await self._client.subscriptions.retrieve_async(subscription_id)

    # ---- Checkout operations ----

    @_translate_errors("create checkout session")
    async def create_checkout_session(
        self,
        customer_id: str,
        price_id: str,
        success_url: str,
        cancel_url: str,
        metadata: Optional[Dict[str, str]] = None,
    ) -> Any:
        """Create a subscription-mode checkout session with a single line item."""
        return await self._client.checkout.sessions.create_async(
            params={
                "customer": customer_id,
                "mode": "subscription",
                "line_items": [{"price": price_id, "quantity": 1}],
                "success_url": success_url,
                "cancel_url": cancel_url,
                "allow_promotion_codes": True,
                "billing_address_collection": "auto",
                "subscription_data": {"metadata": metadata or {}},
                "metadata": metadata or {},
            }
        )

    # ---- Webhook operations ----

    def verify_webhook_signature(self, payload: bytes, signature: str) -> Any:
        """Verify the Stripe-Signature header and construct the event.

        Raises ValueError when the secret is missing, the signature does not
        match or the payload is not a valid event.
        """
        if not self._webhook_secret:
            raise ValueError("Webhook secret is not configured")
        try:
            return stripe.Webhook.construct_event(payload, signature, self._webhook_secret)
        except stripe.SignatureVerificationError as e:
            raise ValueError(str(e.user_message or e)) from e
