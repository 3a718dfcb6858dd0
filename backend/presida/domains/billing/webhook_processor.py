"""Webhook processor for Stripe billing events.

Verified events are parsed into a WebhookEvent variant and dispatched to one
handler per variant. Each repository write commits on its own, so a failure
halfway through a handler leaves the earlier writes in place.
"""

from datetime import datetime, timezone
from typing import Any, assert_never
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from presida.core.logging import ContextualLogger, logger
from presida.core.protocols.payment import PaymentGatewayProtocol
from presida.domains.billing.exceptions import (
    BillingMetadataError,
    CustomerNotFoundError,
    WebhookSignatureError,
    wrap_gateway_errors,
)
from presida.domains.billing.protocols import BillingWebhookProtocol
from presida.domains.billing.repository import (
    CustomerRepositoryProtocol,
    SubscriptionRepositoryProtocol,
)
from presida.domains.billing.types import (
    STATUS_ACTIVE,
    CheckoutSessionCompleted,
    SubscriptionChanged,
    SubscriptionDeleted,
    SubscriptionSnapshot,
    UnhandledEvent,
    WebhookEvent,
    parse_event,
    resolve_user_id,
    stripe_field,
)
from presida.domains.profiles.repository import ProfileRepositoryProtocol
from presida.models import StripeCustomer
from presida.schemas.stripe_customer import StripeCustomerCreate
from presida.schemas.stripe_subscription import StripeSubscriptionWrite


class BillingWebhookProcessor(BillingWebhookProtocol):
    """Reconcile Stripe webhook events into customer and subscription rows."""

    def __init__(
        self,
        payment_gateway: PaymentGatewayProtocol,
        customer_repo: CustomerRepositoryProtocol,
        subscription_repo: SubscriptionRepositoryProtocol,
        profile_repo: ProfileRepositoryProtocol,
    ) -> None:
        """Initialize with all required dependencies."""
        self._payment_gateway = payment_gateway
        self._customer_repo = customer_repo
        self._subscription_repo = subscription_repo
        self._profile_repo = profile_repo

    async def process_webhook(self, db: AsyncSession, payload: bytes, signature: str) -> None:
        """Verify webhook signature and process the resulting event.

        Raises WebhookSignatureError if the signature or payload is invalid.
        """
        try:
            event = self._payment_gateway.verify_webhook_signature(payload, signature)
        except ValueError as e:
            raise WebhookSignatureError(str(e)) from e
        await self.process_event(db, parse_event(event))

    async def process_event(self, db: AsyncSession, event: WebhookEvent) -> None:
        """Dispatch a parsed event to its handler."""
        log = logger.with_context(
            event_type=event.event_type, stripe_event_id=event.event_id
        )
        try:
            match event:
                case CheckoutSessionCompleted():
                    log.info("Processing webhook event")
                    await self._handle_checkout_completed(db, event, log)
                case SubscriptionChanged():
                    log.info("Processing webhook event")
                    await self._handle_subscription_changed(db, event, log)
                case SubscriptionDeleted():
                    log.info("Processing webhook event")
                    await self._handle_subscription_deleted(db, event, log)
                case UnhandledEvent():
                    log.info(f"Unhandled webhook event type: {event.event_type}")
                case _:
                    assert_never(event)
        except Exception as e:
            log.error(f"Error handling webhook event: {e}", exc_info=True)
            raise

    # Event handlers

    @wrap_gateway_errors
    async def _handle_checkout_completed(
        self,
        db: AsyncSession,
        event: CheckoutSessionCompleted,
        log: ContextualLogger,
    ) -> None:
        """Map the session to a user, ensure a customer row and record the subscription."""
        customer = await self._payment_gateway.retrieve_customer(event.customer_id)
        user_id = self._require_user_id(customer, event.metadata)

        customer_row = await self._customer_repo.get_by_user_and_stripe_customer(
            db, user_id=user_id, stripe_customer_id=event.customer_id
        )
        if not customer_row:
            customer_row = await self._customer_repo.create(
                db,
                obj_in=StripeCustomerCreate(
                    user_id=user_id,
                    stripe_customer_id=event.customer_id,
                    email=stripe_field(customer, "email"),
                ),
            )
            log.info(f"Created customer mapping {customer_row.id} for user {user_id}")

        if not event.is_subscription:
            log.info(f"Checkout session {event.session_id} has no subscription")
            return

        subscription = await self._payment_gateway.get_subscription(event.subscription_id)
        snapshot = SubscriptionSnapshot.from_stripe(subscription)
        # Plain insert: a redelivered event collides with the existing row.
        await self._subscription_repo.create(
            db, obj_in=self._subscription_write(snapshot, customer_row)
        )
        await self._profile_repo.clear_trial(db, user_id=user_id)
        log.info(f"Recorded subscription {snapshot.id} for user {user_id}")

    @wrap_gateway_errors
    async def _handle_subscription_changed(
        self,
        db: AsyncSession,
        event: SubscriptionChanged,
        log: ContextualLogger,
    ) -> None:
        """Upsert the subscription row of an existing customer."""
        snapshot = event.subscription
        customer = await self._payment_gateway.retrieve_customer(snapshot.customer_id)
        user_id = self._require_user_id(customer, snapshot.metadata)

        customer_row = await self._customer_repo.get_by_user_and_stripe_customer(
            db, user_id=user_id, stripe_customer_id=snapshot.customer_id
        )
        if not customer_row:
            raise CustomerNotFoundError()

        await self._subscription_repo.upsert(
            db, obj_in=self._subscription_write(snapshot, customer_row)
        )
        if snapshot.status == STATUS_ACTIVE:
            await self._profile_repo.clear_trial(db, user_id=user_id)
        log.info(f"Subscription {snapshot.id} is now {snapshot.status}")

    async def _handle_subscription_deleted(
        self,
        db: AsyncSession,
        event: SubscriptionDeleted,
        log: ContextualLogger,
    ) -> None:
        """Mark the subscription row canceled."""
        canceled_at = event.canceled_at or datetime.now(timezone.utc)
        matched = await self._subscription_repo.mark_canceled(
            db, subscription_id=event.subscription_id, canceled_at=canceled_at
        )
        if not matched:
            log.warning(f"No subscription row for {event.subscription_id}")
            return
        log.info(f"Subscription {event.subscription_id} canceled")

    # Helpers

    @staticmethod
    def _require_user_id(customer: Any, fallback_metadata: dict[str, str]) -> UUID:
        raw = resolve_user_id(customer, fallback_metadata)
        if not raw:
            raise BillingMetadataError()
        return UUID(raw)

    @staticmethod
    def _subscription_write(
        snapshot: SubscriptionSnapshot, customer_row: StripeCustomer
    ) -> StripeSubscriptionWrite:
        return StripeSubscriptionWrite(
            id=snapshot.id,
            customer_id=customer_row.id,
            price_id=snapshot.price_id,
            status=snapshot.status,
            current_period_start=snapshot.current_period_start,
            current_period_end=snapshot.current_period_end,
            cancel_at_period_end=snapshot.cancel_at_period_end,
            canceled_at=snapshot.canceled_at,
            trial_start=snapshot.trial_start,
            trial_end=snapshot.trial_end,
        )
