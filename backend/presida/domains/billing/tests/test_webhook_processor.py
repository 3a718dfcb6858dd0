"""Unit tests for BillingWebhookProcessor.

Handlers are exercised through process_event with parsed events, and the
signature path through process_webhook.
"""

from datetime import datetime, timedelta, timezone

import pytest

from presida.adapters.payment.fake import FakePaymentGateway
from presida.core.exceptions import ExternalServiceError
from presida.domains.billing.exceptions import (
    BillingMetadataError,
    CustomerNotFoundError,
    PaymentGatewayError,
    WebhookSignatureError,
)
from presida.domains.billing.tests.conftest import (
    DEFAULT_CUSTOMER_ID,
    DEFAULT_SUBSCRIPTION_ID,
    DEFAULT_USER_ID,
    _make_checkout_session_obj,
    _make_customer_obj,
    _make_customer_row,
    _make_stripe_event,
    _make_subscription_obj,
    _make_subscription_row,
    _make_webhook_processor,
)
from presida.domains.billing.types import STATUS_CANCELED, from_unix, parse_event

TRIAL_END = datetime(2030, 1, 1, tzinfo=timezone.utc)


def _checkout_event(**kwargs):
    return parse_event(
        _make_stripe_event("checkout.session.completed", _make_checkout_session_obj(**kwargs))
    )


def _subscription_event(event_type="customer.subscription.updated", **kwargs):
    return parse_event(
        _make_stripe_event(event_type, _make_subscription_obj(**kwargs))
    )


# ===========================================================================
# process_webhook
# ===========================================================================


class TestProcessWebhook:
    @pytest.mark.asyncio
    async def test_invalid_signature_raises(self, db):
        proc, gateway, customers, subs, _ = _make_webhook_processor()
        gateway.reject_signatures("No signatures found")

        with pytest.raises(WebhookSignatureError, match="No signatures found"):
            await proc.process_webhook(db, b"{}", "t=1,v1=bad")

        assert customers.rows == []
        assert subs.rows == []

    @pytest.mark.asyncio
    async def test_verified_event_is_dispatched(self, db):
        proc, gateway, customers, subs, profiles = _make_webhook_processor()
        profiles.seed(DEFAULT_USER_ID, trial_ends_at=TRIAL_END)
        gateway.add_customer(_make_customer_obj())
        gateway.add_subscription(_make_subscription_obj())
        gateway.set_webhook_event(
            _make_stripe_event("checkout.session.completed", _make_checkout_session_obj())
        )

        await proc.process_webhook(db, b"payload", "sig")

        assert gateway.calls_for("verify_webhook_signature") == [((b"payload", "sig"), {})]
        assert len(customers.rows) == 1
        assert len(subs.rows) == 1

    @pytest.mark.asyncio
    async def test_unhandled_event_is_noop(self, db):
        proc, gateway, customers, subs, _ = _make_webhook_processor()

        await proc.process_webhook(db, b"{}", "sig")

        assert gateway.call_count("retrieve_customer") == 0
        assert customers.rows == []
        assert subs.rows == []


# ===========================================================================
# checkout.session.completed
# ===========================================================================


class TestCheckoutCompleted:
    @pytest.mark.asyncio
    async def test_new_user_gets_customer_subscription_and_cleared_trial(self, db):
        proc, gateway, customers, subs, profiles = _make_webhook_processor()
        profiles.seed(DEFAULT_USER_ID, trial_ends_at=TRIAL_END)
        gateway.add_customer(_make_customer_obj())
        gateway.add_subscription(
            _make_subscription_obj(price_id="price_premium", period_start=100, period_end=200)
        )

        await proc.process_event(db, _checkout_event())

        assert len(customers.rows) == 1
        customer_row = customers.rows[0]
        assert customer_row.user_id == DEFAULT_USER_ID
        assert customer_row.stripe_customer_id == DEFAULT_CUSTOMER_ID
        assert customer_row.email == "member@presida.club"

        assert len(subs.rows) == 1
        sub_row = subs.rows[0]
        assert sub_row.id == DEFAULT_SUBSCRIPTION_ID
        assert sub_row.customer_id == customer_row.id
        assert sub_row.price_id == "price_premium"
        assert sub_row.status == "active"
        assert sub_row.current_period_start == from_unix(100)
        assert sub_row.current_period_end == from_unix(200)

        assert profiles.trial_ends_at(DEFAULT_USER_ID) is None

    @pytest.mark.asyncio
    async def test_existing_customer_row_is_reused(self, db):
        proc, gateway, customers, subs, _ = _make_webhook_processor()
        existing = _make_customer_row()
        customers.seed(existing)
        gateway.add_customer(_make_customer_obj())

        await proc.process_event(db, _checkout_event())

        assert customers.rows == [existing]
        assert subs.rows[0].customer_id == existing.id

    @pytest.mark.asyncio
    async def test_user_id_from_session_metadata(self, db):
        proc, gateway, customers, _, _ = _make_webhook_processor()
        gateway.add_customer(_make_customer_obj(user_id=None))

        await proc.process_event(db, _checkout_event(metadata={"user_id": str(DEFAULT_USER_ID)}))

        assert customers.rows[0].user_id == DEFAULT_USER_ID

    @pytest.mark.asyncio
    async def test_missing_user_id_raises(self, db):
        proc, gateway, customers, subs, _ = _make_webhook_processor()
        gateway.add_customer(_make_customer_obj(user_id=None))

        with pytest.raises(BillingMetadataError, match="User ID not found in metadata"):
            await proc.process_event(db, _checkout_event())

        assert customers.rows == []
        assert subs.rows == []

    @pytest.mark.asyncio
    async def test_non_subscription_session_only_maps_customer(self, db):
        proc, gateway, customers, subs, profiles = _make_webhook_processor()
        profiles.seed(DEFAULT_USER_ID, trial_ends_at=TRIAL_END)
        gateway.add_customer(_make_customer_obj())

        await proc.process_event(db, _checkout_event(subscription_id=None, mode="payment"))

        assert len(customers.rows) == 1
        assert subs.rows == []
        assert gateway.call_count("get_subscription") == 0
        assert profiles.trial_ends_at(DEFAULT_USER_ID) == TRIAL_END

    @pytest.mark.asyncio
    async def test_gateway_failure_is_wrapped(self, db):
        gateway = FakePaymentGateway(should_raise=ExternalServiceError("Stripe", "down"))
        proc, _, customers, _, _ = _make_webhook_processor(gateway)

        with pytest.raises(PaymentGatewayError, match="down"):
            await proc.process_event(db, _checkout_event())

        assert customers.rows == []

    @pytest.mark.asyncio
    @pytest.mark.xfail(
        strict=True, reason="checkout completion inserts; redelivery duplicates the row"
    )
    async def test_redelivered_event_keeps_single_subscription_row(self, db):
        proc, gateway, _, subs, _ = _make_webhook_processor()
        gateway.add_customer(_make_customer_obj())
        event = _checkout_event()

        await proc.process_event(db, event)
        await proc.process_event(db, event)

        assert len(subs.rows_for(DEFAULT_SUBSCRIPTION_ID)) == 1


# ===========================================================================
# customer.subscription.created / updated
# ===========================================================================


class TestSubscriptionChanged:
    @pytest.mark.asyncio
    async def test_missing_customer_row_raises_and_writes_nothing(self, db):
        proc, gateway, _, subs, profiles = _make_webhook_processor()
        profiles.seed(DEFAULT_USER_ID, trial_ends_at=TRIAL_END)
        gateway.add_customer(_make_customer_obj())

        with pytest.raises(CustomerNotFoundError, match="Customer not found in database"):
            await proc.process_event(db, _subscription_event())

        assert subs.rows == []
        assert profiles.trial_ends_at(DEFAULT_USER_ID) == TRIAL_END

    @pytest.mark.asyncio
    async def test_active_update_upserts_and_clears_trial(self, db):
        proc, gateway, customers, subs, profiles = _make_webhook_processor()
        profiles.seed(DEFAULT_USER_ID, trial_ends_at=TRIAL_END)
        customer_row = _make_customer_row()
        customers.seed(customer_row)
        subs.seed(_make_subscription_row(customer_row, status="past_due"))
        gateway.add_customer(_make_customer_obj())

        await proc.process_event(
            db, _subscription_event(price_id="price_professional", cancel_at_period_end=True)
        )

        rows = subs.rows_for(DEFAULT_SUBSCRIPTION_ID)
        assert len(rows) == 1
        assert rows[0].status == "active"
        assert rows[0].price_id == "price_professional"
        assert rows[0].cancel_at_period_end is True
        assert profiles.trial_ends_at(DEFAULT_USER_ID) is None

    @pytest.mark.asyncio
    async def test_created_event_inserts_row(self, db):
        proc, gateway, customers, subs, _ = _make_webhook_processor()
        customers.seed(_make_customer_row())
        gateway.add_customer(_make_customer_obj())

        await proc.process_event(db, _subscription_event("customer.subscription.created"))

        assert len(subs.rows) == 1

    @pytest.mark.asyncio
    async def test_inactive_update_keeps_trial(self, db):
        proc, gateway, customers, subs, profiles = _make_webhook_processor()
        profiles.seed(DEFAULT_USER_ID, trial_ends_at=TRIAL_END)
        customers.seed(_make_customer_row())
        gateway.add_customer(_make_customer_obj())

        await proc.process_event(db, _subscription_event(status="past_due"))

        assert subs.rows[0].status == "past_due"
        assert profiles.trial_ends_at(DEFAULT_USER_ID) == TRIAL_END

    @pytest.mark.asyncio
    async def test_user_id_from_subscription_metadata(self, db):
        proc, gateway, customers, subs, _ = _make_webhook_processor()
        customers.seed(_make_customer_row())
        gateway.add_customer(_make_customer_obj(user_id=None))

        await proc.process_event(
            db, _subscription_event(metadata={"user_id": str(DEFAULT_USER_ID)})
        )

        assert len(subs.rows) == 1

    @pytest.mark.asyncio
    async def test_missing_user_id_raises(self, db):
        proc, gateway, customers, subs, _ = _make_webhook_processor()
        customers.seed(_make_customer_row())
        gateway.add_customer(_make_customer_obj(user_id=None))

        with pytest.raises(BillingMetadataError):
            await proc.process_event(db, _subscription_event())

        assert subs.rows == []


# ===========================================================================
# customer.subscription.deleted
# ===========================================================================


class TestSubscriptionDeleted:
    @pytest.mark.asyncio
    async def test_marks_canceled_and_leaves_other_fields(self, db):
        proc, _, customers, subs, _ = _make_webhook_processor()
        customer_row = _make_customer_row()
        customers.seed(customer_row)
        original = _make_subscription_row(customer_row, price_id="price_premium")
        period_end = original.current_period_end
        subs.seed(original)

        await proc.process_event(
            db,
            parse_event(
                _make_stripe_event(
                    "customer.subscription.deleted", _make_subscription_obj(canceled_at=5000)
                )
            ),
        )

        row = subs.rows_for(DEFAULT_SUBSCRIPTION_ID)[0]
        assert row.status == STATUS_CANCELED
        assert row.canceled_at == from_unix(5000)
        assert row.price_id == "price_premium"
        assert row.current_period_end == period_end
        assert row.customer_id == customer_row.id

    @pytest.mark.asyncio
    async def test_missing_canceled_at_defaults_to_now(self, db):
        proc, _, customers, subs, _ = _make_webhook_processor()
        customer_row = _make_customer_row()
        subs.seed(_make_subscription_row(customer_row))
        before = datetime.now(timezone.utc)

        await proc.process_event(
            db,
            parse_event(
                _make_stripe_event("customer.subscription.deleted", _make_subscription_obj())
            ),
        )

        canceled_at = subs.rows[0].canceled_at
        assert before - timedelta(seconds=1) <= canceled_at <= datetime.now(timezone.utc)

    @pytest.mark.asyncio
    async def test_unknown_subscription_is_noop(self, db):
        proc, gateway, _, subs, _ = _make_webhook_processor()

        await proc.process_event(
            db,
            parse_event(
                _make_stripe_event(
                    "customer.subscription.deleted", _make_subscription_obj(sub_id="sub_gone")
                )
            ),
        )

        assert subs.rows == []
        assert gateway.call_count("retrieve_customer") == 0
