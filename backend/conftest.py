"""Root conftest for pytest configuration and shared fixtures.

This conftest is loaded before both testpaths (tests/ and presida/),
making its fixtures available to centralized tests AND colocated domain tests.
"""

import os
from unittest.mock import AsyncMock

import pytest

# Register pytest-asyncio plugin at the root level
pytest_plugins = ("pytest_asyncio",)

# ---------------------------------------------------------------------------
# Environment variables: must be set before any presida module import.
# Uses setdefault so real env vars (CI) are never overridden.
# ---------------------------------------------------------------------------
os.environ.setdefault("ENVIRONMENT", "test")
os.environ.setdefault("POSTGRES_HOST", "localhost")
os.environ.setdefault("POSTGRES_USER", "test_user")
os.environ.setdefault("POSTGRES_PASSWORD", "test_password")
os.environ.setdefault("POSTGRES_DB", "test_db")
os.environ.setdefault("SUPABASE_URL", "https://test-project.supabase.co")
os.environ.setdefault("SUPABASE_SERVICE_ROLE_KEY", "test-service-role-key")
os.environ.setdefault("SUPABASE_JWT_SECRET", "test-jwt-secret-minimum-32-characters-long")
os.environ.setdefault("STRIPE_SECRET_KEY", "sk_test_123")
os.environ.setdefault("STRIPE_WEBHOOK_SECRET", "whsec_test_secret")


# ---------------------------------------------------------------------------
# Shared fake fixtures: individual protocol fakes
# ---------------------------------------------------------------------------


@pytest.fixture
def db():
    """Stand-in AsyncSession; repository fakes never touch it."""
    return AsyncMock()


@pytest.fixture
def fake_identity_provider():
    """Fake IdentityProvider that records deletions and sign-outs."""
    from presida.adapters.identity.fake import FakeIdentityProvider

    return FakeIdentityProvider()


@pytest.fixture
def fake_payment_gateway():
    """Fake PaymentGateway with in-memory customers and subscriptions."""
    from presida.adapters.payment.fake import FakePaymentGateway

    return FakePaymentGateway()


@pytest.fixture
def fake_profile_repo():
    """In-memory profile repository."""
    from presida.domains.profiles.fakes.repository import FakeProfileRepository

    return FakeProfileRepository()


@pytest.fixture
def fake_customer_repo():
    """In-memory customer repository."""
    from presida.domains.billing.fakes.repository import FakeCustomerRepository

    return FakeCustomerRepository()


@pytest.fixture
def fake_subscription_repo():
    """In-memory subscription repository."""
    from presida.domains.billing.fakes.repository import FakeSubscriptionRepository

    return FakeSubscriptionRepository()


@pytest.fixture
def fake_db_probe():
    """Health probe that always reports up."""
    from presida.adapters.health.fake import FakeHealthProbe

    return FakeHealthProbe()


# ---------------------------------------------------------------------------
# Composite container fixture
# ---------------------------------------------------------------------------


@pytest.fixture
def test_container(
    fake_identity_provider,
    fake_payment_gateway,
    fake_profile_repo,
    fake_customer_repo,
    fake_subscription_repo,
    fake_db_probe,
):
    """A Container with all adapters and repositories replaced by fakes.

    Services are real, wired to the fakes, so endpoint tests exercise the
    domain logic end to end.

    For partial overrides, use dataclasses.replace():
        failing = replace(test_container, db_probe=FakeHealthProbe(error=OSError()))
    """
    from presida.core.container import Container
    from presida.domains.accounts.service import AccountService
    from presida.domains.billing.checkout import CheckoutService
    from presida.domains.billing.webhook_processor import BillingWebhookProcessor

    return Container(
        identity_provider=fake_identity_provider,
        payment_gateway=fake_payment_gateway,
        profile_repo=fake_profile_repo,
        customer_repo=fake_customer_repo,
        subscription_repo=fake_subscription_repo,
        account_service=AccountService(
            identity_provider=fake_identity_provider,
            profile_repo=fake_profile_repo,
            concurrency=2,
        ),
        checkout_service=CheckoutService(
            payment_gateway=fake_payment_gateway,
            identity_provider=fake_identity_provider,
            customer_repo=fake_customer_repo,
            default_origin="https://app.presida.club",
        ),
        billing_webhook=BillingWebhookProcessor(
            payment_gateway=fake_payment_gateway,
            customer_repo=fake_customer_repo,
            subscription_repo=fake_subscription_repo,
            profile_repo=fake_profile_repo,
        ),
        db_probe=fake_db_probe,
    )
