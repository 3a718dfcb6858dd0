"""Fake payment gateway for testing.

In-memory implementation of PaymentGatewayProtocol.
Records all calls for assertions. No external API calls.
"""

from __future__ import annotations

from typing import Any, Dict, Optional
from uuid import uuid4

from presida.core.protocols.payment import PaymentGatewayProtocol


class FakePaymentGateway(PaymentGatewayProtocol):
    """Test implementation of PaymentGatewayProtocol.

    Usage::

        fake = FakePaymentGateway()
        customer = await fake.create_customer("a@b.com", None)
        assert fake.call_count("create_customer") == 1
    """

    def __init__(self, should_raise: Optional[Exception] = None) -> None:
        """Initialize with optional error injection."""
        self._should_raise = should_raise
        self._calls: list[tuple[str, tuple, dict]] = []

        # In-memory state
        self._customers: dict[str, _obj] = {}
        self._subscriptions: dict[str, _obj] = {}
        self._webhook_event: Any = None
        self._signature_error: Optional[str] = None

    def _record(self, method: str, *args: Any, **kwargs: Any) -> None:
        self._calls.append((method, args, kwargs))
        if self._should_raise:
            raise self._should_raise

    # ---- Test helpers ----

    def call_count(self, method: str) -> int:
        """Number of times a method was called."""
        return sum(1 for name, _, _ in self._calls if name == method)

    def calls_for(self, method: str) -> list[tuple[tuple, dict]]:
        """Return (args, kwargs) for each call to *method*."""
        return [(a, k) for name, a, k in self._calls if name == method]

    def add_customer(self, customer: Any) -> None:
        """Register a customer returned by retrieve_customer."""
        self._customers[customer.id] = customer

    def add_subscription(self, subscription: Any) -> None:
        """Register a subscription returned by get_subscription."""
        self._subscriptions[subscription.id] = subscription

    def set_webhook_event(self, event: Any) -> None:
        """Event returned by the next verify_webhook_signature calls."""
        self._webhook_event = event

    def reject_signatures(self, message: str = "No signatures found matching the expected signature") -> None:
        """Make verify_webhook_signature raise ValueError."""
        self._signature_error = message

    # ---- Customer operations ----

    async def create_customer(
        self,
        email: Optional[str],
        name: Optional[str],
        metadata: Optional[Dict[str, str]] = None,
    ) -> Any:
        """Create a fake customer in memory."""
        self._record("create_customer", email, name, metadata=metadata)
        cid = f"cus_{uuid4().hex[:14]}"
        obj = _obj(id=cid, email=email, name=name, metadata=metadata or {})
        self._customers[cid] = obj
        return obj

    async def retrieve_customer(self, customer_id: str) -> Any:
        """Retrieve a fake customer from memory."""
        self._record("retrieve_customer", customer_id)
        customer = self._customers.get(customer_id)
        if customer is None:
            customer = _obj(id=customer_id, email=None, metadata={})
        return customer

    # ---- Subscription operations ----

    async def get_subscription(self, subscription_id: str) -> Any:
        """Retrieve a fake subscription from memory."""
        self._record("get_subscription", subscription_id)
        sub = self._subscriptions.get(subscription_id)
        if sub is None:
            sub = _obj(
                id=subscription_id,
                status="active",
                items=_obj(data=[]),
                cancel_at_period_end=False,
                metadata={},
            )
        return sub

    # ---- Checkout operations ----

    async def create_checkout_session(
        self,
        customer_id: str,
        price_id: str,
        success_url: str,
        cancel_url: str,
        metadata: Optional[Dict[str, str]] = None,
    ) -> Any:
        """Return a fake checkout session URL."""
        self._record(
            "create_checkout_session",
            customer_id,
            price_id,
            success_url=success_url,
            cancel_url=cancel_url,
            metadata=metadata,
        )
        return _obj(id=f"cs_{uuid4().hex[:14]}", url="https://checkout.fake/session")

    # ---- Webhook operations ----

    def verify_webhook_signature(self, payload: bytes, signature: str) -> Any:
        """Return the configured webhook event."""
        self._record("verify_webhook_signature", payload, signature)
        if self._signature_error:
            raise ValueError(self._signature_error)
        if self._webhook_event is None:
            return _obj(type="test.event", id="evt_fake", data=_obj(object={}))
        return self._webhook_event


class _obj:
    """Tiny attribute-bag to emulate Stripe object shapes in tests."""

    def __init__(self, **kwargs: Any):
        for k, v in kwargs.items():
            setattr(self, k, v)

    def get(self, key: str, default: Any = None) -> Any:
        """Get attribute by key with default."""
        return getattr(self, key, default)

    def __getitem__(self, key: str) -> Any:
        return getattr(self, key)
