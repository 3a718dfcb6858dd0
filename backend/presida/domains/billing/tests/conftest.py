"""Billing domain test fixtures and helpers.

Provides builders for Stripe object shapes, ORM rows and service wiring.
"""

import time
from datetime import datetime, timezone
from typing import Any, Optional
from uuid import UUID, uuid4

from presida.adapters.identity.fake import FakeIdentityProvider
from presida.adapters.payment.fake import FakePaymentGateway, _obj
from presida.domains.billing.checkout import CheckoutService
from presida.domains.billing.fakes.repository import (
    FakeCustomerRepository,
    FakeSubscriptionRepository,
)
from presida.domains.billing.webhook_processor import BillingWebhookProcessor
from presida.domains.profiles.fakes.repository import FakeProfileRepository
from presida.models import StripeCustomer, StripeSubscription

# Default test IDs
DEFAULT_USER_ID = UUID("00000000-0000-0000-0000-000000000001")
DEFAULT_CUSTOMER_ID = "cus_test"
DEFAULT_SUBSCRIPTION_ID = "sub_test"
DEFAULT_ORIGIN = "https://app.presida.club"

# ---------------------------------------------------------------------------
# Stripe object shapes
# ---------------------------------------------------------------------------


def _make_customer_obj(
    customer_id: str = DEFAULT_CUSTOMER_ID,
    user_id: Optional[UUID] = DEFAULT_USER_ID,
    email: Optional[str] = "member@presida.club",
) -> _obj:
    """Return a Stripe-like customer carrying the user id in metadata."""
    metadata = {"user_id": str(user_id)} if user_id else {}
    return _obj(id=customer_id, email=email, metadata=metadata)


def _make_subscription_obj(
    sub_id: str = DEFAULT_SUBSCRIPTION_ID,
    customer_id: str = DEFAULT_CUSTOMER_ID,
    status: str = "active",
    price_id: str = "price_professional_yearly",
    period_start: Optional[int] = None,
    period_end: Optional[int] = None,
    metadata: Optional[dict] = None,
    **extra: Any,
) -> _obj:
    """Return a Stripe-like subscription with a single item."""
    now = int(time.time())
    return _obj(
        id=sub_id,
        customer=customer_id,
        status=status,
        items=_obj(data=[_obj(price=_obj(id=price_id))]),
        current_period_start=period_start if period_start is not None else now,
        current_period_end=period_end if period_end is not None else now + 30 * 86400,
        cancel_at_period_end=extra.pop("cancel_at_period_end", False),
        canceled_at=extra.pop("canceled_at", None),
        trial_start=extra.pop("trial_start", None),
        trial_end=extra.pop("trial_end", None),
        metadata=metadata or {},
        **extra,
    )


def _make_checkout_session_obj(
    customer_id: str = DEFAULT_CUSTOMER_ID,
    subscription_id: Optional[str] = DEFAULT_SUBSCRIPTION_ID,
    mode: str = "subscription",
    metadata: Optional[dict] = None,
) -> _obj:
    """Return a Stripe-like completed checkout session."""
    return _obj(
        id="cs_test",
        customer=customer_id,
        subscription=subscription_id,
        mode=mode,
        metadata=metadata or {},
    )


def _make_stripe_event(event_type: str, obj: Any, event_id: str = "evt_test") -> _obj:
    """Wrap a Stripe object in an event envelope."""
    return _obj(id=event_id, type=event_type, data=_obj(object=obj))


# ---------------------------------------------------------------------------
# ORM rows
# ---------------------------------------------------------------------------


def _make_customer_row(
    user_id: UUID = DEFAULT_USER_ID,
    stripe_customer_id: str = DEFAULT_CUSTOMER_ID,
    **overrides: Any,
) -> StripeCustomer:
    """Return a StripeCustomer row with sensible defaults."""
    defaults = dict(
        id=uuid4(),
        created_at=datetime.now(timezone.utc),
        user_id=user_id,
        stripe_customer_id=stripe_customer_id,
        email="member@presida.club",
    )
    defaults.update(overrides)
    return StripeCustomer(**defaults)


def _make_subscription_row(customer_row: StripeCustomer, **overrides: Any) -> StripeSubscription:
    """Return a StripeSubscription row belonging to *customer_row*."""
    now = datetime.now(timezone.utc)
    defaults = dict(
        id=DEFAULT_SUBSCRIPTION_ID,
        customer_id=customer_row.id,
        price_id="price_basic_monthly",
        status="active",
        current_period_start=now,
        current_period_end=now,
        cancel_at_period_end=False,
        canceled_at=None,
        trial_start=None,
        trial_end=None,
        created_at=now,
        updated_at=now,
    )
    defaults.update(overrides)
    return StripeSubscription(**defaults)


# ---------------------------------------------------------------------------
# Service wiring
# ---------------------------------------------------------------------------


def _make_webhook_processor(
    gateway: Optional[FakePaymentGateway] = None,
) -> tuple[
    BillingWebhookProcessor,
    FakePaymentGateway,
    FakeCustomerRepository,
    FakeSubscriptionRepository,
    FakeProfileRepository,
]:
    """Build a BillingWebhookProcessor wired to fresh fakes."""
    gateway = gateway or FakePaymentGateway()
    customers = FakeCustomerRepository()
    subscriptions = FakeSubscriptionRepository()
    profiles = FakeProfileRepository()
    processor = BillingWebhookProcessor(
        payment_gateway=gateway,
        customer_repo=customers,
        subscription_repo=subscriptions,
        profile_repo=profiles,
    )
    return processor, gateway, customers, subscriptions, profiles


def _make_checkout_service(
    gateway: Optional[FakePaymentGateway] = None,
) -> tuple[CheckoutService, FakePaymentGateway, FakeIdentityProvider, FakeCustomerRepository]:
    """Build a CheckoutService wired to fresh fakes."""
    gateway = gateway or FakePaymentGateway()
    identity = FakeIdentityProvider()
    customers = FakeCustomerRepository()
    service = CheckoutService(
        payment_gateway=gateway,
        identity_provider=identity,
        customer_repo=customers,
        default_origin=DEFAULT_ORIGIN,
    )
    return service, gateway, identity, customers
