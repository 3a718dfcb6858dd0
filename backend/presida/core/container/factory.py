"""Container Factory.

All construction logic lives here. The factory reads settings and builds
the container with environment-appropriate implementations.
"""

from presida.adapters.health import PostgresHealthProbe
from presida.adapters.identity.supabase import SupabaseIdentityProvider
from presida.core.config import Settings
from presida.core.container.container import Container
from presida.core.logging import logger
from presida.core.protocols.identity import IdentityProviderProtocol
from presida.core.protocols.payment import PaymentGatewayProtocol
from presida.db.session import async_engine
from presida.domains.accounts.service import AccountService
from presida.domains.billing.checkout import CheckoutService
from presida.domains.billing.repository import CustomerRepository, SubscriptionRepository
from presida.domains.billing.webhook_processor import BillingWebhookProcessor
from presida.domains.profiles.repository import ProfileRepository


def create_container(settings: Settings) -> Container:
    """Build container with environment-appropriate implementations.

    This is the single source of truth for dependency wiring. It reads
    the settings and decides which adapter implementation to use for
    each protocol.

    Args:
        settings: Application settings (from core/config)

    Returns:
        Fully constructed Container ready for use
    """
    identity_provider = _create_identity_provider(settings)
    payment_gateway = _create_payment_gateway(settings)

    profile_repo = ProfileRepository()
    customer_repo = CustomerRepository()
    subscription_repo = SubscriptionRepository()

    account_service = AccountService(
        identity_provider=identity_provider,
        profile_repo=profile_repo,
        concurrency=settings.FORCE_LOGOUT_CONCURRENCY,
    )
    checkout_service = CheckoutService(
        payment_gateway=payment_gateway,
        identity_provider=identity_provider,
        customer_repo=customer_repo,
        default_origin=settings.CHECKOUT_DEFAULT_ORIGIN,
    )
    billing_webhook = BillingWebhookProcessor(
        payment_gateway=payment_gateway,
        customer_repo=customer_repo,
        subscription_repo=subscription_repo,
        profile_repo=profile_repo,
    )

    return Container(
        identity_provider=identity_provider,
        payment_gateway=payment_gateway,
        profile_repo=profile_repo,
        customer_repo=customer_repo,
        subscription_repo=subscription_repo,
        account_service=account_service,
        checkout_service=checkout_service,
        billing_webhook=billing_webhook,
        db_probe=PostgresHealthProbe(async_engine),
    )


def _create_identity_provider(settings: Settings) -> IdentityProviderProtocol:
    """Create the Supabase identity adapter.

    Missing credentials are not rejected here; they surface as provider
    errors on first use.
    """
    if not settings.SUPABASE_URL or not settings.SUPABASE_SERVICE_ROLE_KEY:
        logger.warning("Supabase credentials are not configured; account operations will fail")
    return SupabaseIdentityProvider(
        base_url=settings.SUPABASE_URL or "",
        service_role_key=settings.SUPABASE_SERVICE_ROLE_KEY or "",
        jwt_secret=settings.SUPABASE_JWT_SECRET,
        timeout=settings.IDENTITY_HTTP_TIMEOUT,
    )


def _create_payment_gateway(settings: Settings) -> PaymentGatewayProtocol:
    """Create payment gateway: Stripe if enabled, otherwise a null implementation."""
    if settings.STRIPE_ENABLED:
        from presida.adapters.payment.stripe import StripePaymentGateway

        return StripePaymentGateway(
            secret_key=settings.STRIPE_SECRET_KEY,
            webhook_secret=settings.STRIPE_WEBHOOK_SECRET,
        )

    from presida.adapters.payment.null import NullPaymentGateway

    return NullPaymentGateway()
