"""Billing domain value types.

Webhook events are parsed once into a closed set of variants so the processor
can dispatch with ``match`` and have the type checker flag a missing case:

    CheckoutSessionCompleted | SubscriptionChanged | SubscriptionDeleted | UnhandledEvent
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Optional, Union

CHECKOUT_SESSION_COMPLETED = "checkout.session.completed"
SUBSCRIPTION_CREATED = "customer.subscription.created"
SUBSCRIPTION_UPDATED = "customer.subscription.updated"
SUBSCRIPTION_DELETED = "customer.subscription.deleted"

STATUS_ACTIVE = "active"
STATUS_CANCELED = "canceled"


def stripe_field(obj: Any, key: str, default: Any = None) -> Any:
    """Read *key* from a Stripe object, dict or attribute bag."""
    if obj is None:
        return default
    getter = getattr(obj, "get", None)
    if callable(getter):
        value = getter(key, default)
    else:
        value = getattr(obj, key, default)
    return default if value is None else value


def _metadata(obj: Any) -> dict[str, str]:
    metadata = stripe_field(obj, "metadata")
    if not metadata:
        return {}
    return {key: metadata[key] for key in metadata.keys()}


def from_unix(value: Optional[int]) -> Optional[datetime]:
    """Convert a Stripe unix timestamp to an aware UTC datetime."""
    if value is None:
        return None
    return datetime.fromtimestamp(int(value), tz=timezone.utc)


@dataclass(frozen=True)
class SubscriptionSnapshot:
    """The fields of a Stripe subscription that are mirrored locally."""

    id: str
    customer_id: str
    price_id: Optional[str]
    status: str
    current_period_start: Optional[datetime]
    current_period_end: Optional[datetime]
    cancel_at_period_end: bool
    canceled_at: Optional[datetime]
    trial_start: Optional[datetime]
    trial_end: Optional[datetime]
    metadata: dict[str, str] = field(default_factory=dict)

    @classmethod
    def from_stripe(cls, subscription: Any) -> "SubscriptionSnapshot":
        """Build a snapshot from a Stripe subscription object.

        Newer API versions moved the billing period onto subscription items,
        so the first item is used when the subscription itself has none.
        """
        items = stripe_field(stripe_field(subscription, "items"), "data", [])
        first_item = items[0] if items else None
        price_id = stripe_field(stripe_field(first_item, "price"), "id")

        period_start = stripe_field(subscription, "current_period_start")
        if period_start is None:
            period_start = stripe_field(first_item, "current_period_start")
        period_end = stripe_field(subscription, "current_period_end")
        if period_end is None:
            period_end = stripe_field(first_item, "current_period_end")

        customer = stripe_field(subscription, "customer")
        if not isinstance(customer, str):
            customer = stripe_field(customer, "id")

        return cls(
            id=stripe_field(subscription, "id"),
            customer_id=customer,
            price_id=price_id,
            status=stripe_field(subscription, "status"),
            current_period_start=from_unix(period_start),
            current_period_end=from_unix(period_end),
            cancel_at_period_end=bool(stripe_field(subscription, "cancel_at_period_end", False)),
            canceled_at=from_unix(stripe_field(subscription, "canceled_at")),
            trial_start=from_unix(stripe_field(subscription, "trial_start")),
            trial_end=from_unix(stripe_field(subscription, "trial_end")),
            metadata=_metadata(subscription),
        )


@dataclass(frozen=True)
class CheckoutSessionCompleted:
    """A checkout session finished successfully."""

    event_id: str
    session_id: str
    customer_id: str
    mode: Optional[str]
    subscription_id: Optional[str]
    metadata: dict[str, str] = field(default_factory=dict)

    @property
    def event_type(self) -> str:
        """Provider event type."""
        return CHECKOUT_SESSION_COMPLETED

    @property
    def is_subscription(self) -> bool:
        """Whether the session produced a subscription."""
        return self.mode == "subscription" and bool(self.subscription_id)


@dataclass(frozen=True)
class SubscriptionChanged:
    """A subscription was created or updated."""

    event_id: str
    event_type: str
    subscription: SubscriptionSnapshot


@dataclass(frozen=True)
class SubscriptionDeleted:
    """A subscription ended."""

    event_id: str
    subscription_id: str
    canceled_at: Optional[datetime]

    @property
    def event_type(self) -> str:
        """Provider event type."""
        return SUBSCRIPTION_DELETED


@dataclass(frozen=True)
class UnhandledEvent:
    """Any event type this service does not act on."""

    event_id: str
    event_type: str


WebhookEvent = Union[
    CheckoutSessionCompleted,
    SubscriptionChanged,
    SubscriptionDeleted,
    UnhandledEvent,
]


def _object_id(value: Any) -> Optional[str]:
    if value is None or isinstance(value, str):
        return value
    return stripe_field(value, "id")


def parse_event(event: Any) -> WebhookEvent:
    """Convert a verified Stripe event into a WebhookEvent variant."""
    event_type = stripe_field(event, "type")
    event_id = stripe_field(event, "id")
    obj = stripe_field(stripe_field(event, "data"), "object")

    if event_type == CHECKOUT_SESSION_COMPLETED:
        return CheckoutSessionCompleted(
            event_id=event_id,
            session_id=stripe_field(obj, "id"),
            customer_id=_object_id(stripe_field(obj, "customer")),
            mode=stripe_field(obj, "mode"),
            subscription_id=_object_id(stripe_field(obj, "subscription")),
            metadata=_metadata(obj),
        )
    if event_type in (SUBSCRIPTION_CREATED, SUBSCRIPTION_UPDATED):
        return SubscriptionChanged(
            event_id=event_id,
            event_type=event_type,
            subscription=SubscriptionSnapshot.from_stripe(obj),
        )
    if event_type == SUBSCRIPTION_DELETED:
        return SubscriptionDeleted(
            event_id=event_id,
            subscription_id=stripe_field(obj, "id"),
            canceled_at=from_unix(stripe_field(obj, "canceled_at")),
        )
    return UnhandledEvent(event_id=event_id, event_type=event_type)


def resolve_user_id(customer: Any, fallback_metadata: dict[str, str]) -> Optional[str]:
    """User id from the customer's metadata, else from the event object's metadata."""
    return _metadata(customer).get("user_id") or fallback_metadata.get("user_id")
