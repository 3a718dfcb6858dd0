"""Billing repositories and protocols."""

from datetime import datetime
from typing import Optional, Protocol
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from presida import crud
from presida.models import StripeCustomer, StripeSubscription
from presida.schemas.stripe_customer import StripeCustomerCreate
from presida.schemas.stripe_subscription import StripeSubscriptionWrite


class CustomerRepositoryProtocol(Protocol):
    """Access to customer mappings."""

    async def get_by_user_and_stripe_customer(
        self, db: AsyncSession, *, user_id: UUID, stripe_customer_id: str
    ) -> Optional[StripeCustomer]:
        """Get the customer mapping for a (user, provider customer) pair."""
        ...

    async def get_by_user(self, db: AsyncSession, *, user_id: UUID) -> Optional[StripeCustomer]:
        """Get any customer mapping of a user."""
        ...

    async def create(self, db: AsyncSession, *, obj_in: StripeCustomerCreate) -> StripeCustomer:
        """Insert a customer mapping."""
        ...


class CustomerRepository(CustomerRepositoryProtocol):
    """Delegates to the crud.stripe_customer singleton."""

    async def get_by_user_and_stripe_customer(
        self, db: AsyncSession, *, user_id: UUID, stripe_customer_id: str
    ) -> Optional[StripeCustomer]:
        """Get the customer mapping for a (user, provider customer) pair."""
        return await crud.stripe_customer.get_by_user_and_stripe_customer(
            db, user_id=user_id, stripe_customer_id=stripe_customer_id
        )

    async def get_by_user(self, db: AsyncSession, *, user_id: UUID) -> Optional[StripeCustomer]:
        """Get any customer mapping of a user."""
        return await crud.stripe_customer.get_by_user(db, user_id=user_id)

    async def create(self, db: AsyncSession, *, obj_in: StripeCustomerCreate) -> StripeCustomer:
        """Insert a customer mapping."""
        return await crud.stripe_customer.create(db, obj_in=obj_in)


class SubscriptionRepositoryProtocol(Protocol):
    """Writes to subscription records."""

    async def create(
        self, db: AsyncSession, *, obj_in: StripeSubscriptionWrite
    ) -> StripeSubscription:
        """Insert a subscription (no conflict handling)."""
        ...

    async def upsert(
        self, db: AsyncSession, *, obj_in: StripeSubscriptionWrite
    ) -> StripeSubscription:
        """Insert or fully replace a subscription by id."""
        ...

    async def mark_canceled(
        self, db: AsyncSession, *, subscription_id: str, canceled_at: datetime
    ) -> int:
        """Mark a subscription canceled. Returns matched row count."""
        ...


class SubscriptionRepository(SubscriptionRepositoryProtocol):
    """Delegates to the crud.stripe_subscription singleton."""

    async def create(
        self, db: AsyncSession, *, obj_in: StripeSubscriptionWrite
    ) -> StripeSubscription:
        """Insert a subscription (no conflict handling)."""
        return await crud.stripe_subscription.create(db, obj_in=obj_in)

    async def upsert(
        self, db: AsyncSession, *, obj_in: StripeSubscriptionWrite
    ) -> StripeSubscription:
        """Insert or fully replace a subscription by id."""
        return await crud.stripe_subscription.upsert(db, obj_in=obj_in)

    async def mark_canceled(
        self, db: AsyncSession, *, subscription_id: str, canceled_at: datetime
    ) -> int:
        """Mark a subscription canceled. Returns matched row count."""
        return await crud.stripe_subscription.mark_canceled(
            db, subscription_id=subscription_id, canceled_at=canceled_at
        )
