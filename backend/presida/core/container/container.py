"""Dependency Injection Container.

The container is a simple immutable dataclass that holds protocol implementations.
It has no construction logic; that belongs in the factory.

Design principles:
- Container serves, factory builds
- Fail fast: all construction at startup
- Type safety: fields are protocol types
- Testing: construct directly with fakes
"""

from dataclasses import dataclass

from presida.core.protocols import HealthProbe, IdentityProviderProtocol, PaymentGatewayProtocol
from presida.domains.accounts.protocols import AccountServiceProtocol
from presida.domains.billing.protocols import BillingWebhookProtocol, CheckoutServiceProtocol
from presida.domains.billing.repository import (
    CustomerRepositoryProtocol,
    SubscriptionRepositoryProtocol,
)
from presida.domains.profiles.repository import ProfileRepositoryProtocol


@dataclass(frozen=True)
class Container:
    """Immutable container holding all protocol implementations.

    Usage:
        # Production: use the global container built by factory
        from presida.core.container import container
        await container.identity_provider.delete_user(user_id)

        # Testing: construct directly with fakes (see backend/conftest.py
        # for the full test_container fixture)
        test_container = Container(identity_provider=FakeIdentityProvider(), ...)

        # FastAPI endpoints: use Inject() to pull individual protocols
        from presida.api.deps import Inject
        async def my_endpoint(accounts: AccountServiceProtocol = Inject(AccountServiceProtocol)):
            ...
    """

    # External providers
    identity_provider: IdentityProviderProtocol
    payment_gateway: PaymentGatewayProtocol

    # Repository protocols (thin wrappers around crud singletons)
    profile_repo: ProfileRepositoryProtocol
    customer_repo: CustomerRepositoryProtocol
    subscription_repo: SubscriptionRepositoryProtocol

    # Domain services
    account_service: AccountServiceProtocol
    checkout_service: CheckoutServiceProtocol
    billing_webhook: BillingWebhookProtocol

    # Readiness probe for the database
    db_probe: HealthProbe
