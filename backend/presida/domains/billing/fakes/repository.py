"""Fake billing repositories for testing."""

from datetime import datetime, timezone
from typing import Optional
from uuid import UUID, uuid4

from sqlalchemy.ext.asyncio import AsyncSession

from presida.domains.billing.types import STATUS_CANCELED
from presida.models import StripeCustomer, StripeSubscription
from presida.schemas.stripe_customer import StripeCustomerCreate
from presida.schemas.stripe_subscription import StripeSubscriptionWrite


class FakeCustomerRepository:
    """In-memory fake for CustomerRepositoryProtocol."""

    def __init__(self) -> None:
        """Initialize with empty store and call log."""
        self._store: list[StripeCustomer] = []
        self._calls: list[tuple] = []

    def seed(self, obj: StripeCustomer) -> None:
        """Populate store with test data."""
        self._store.append(obj)

    @property
    def rows(self) -> list[StripeCustomer]:
        """All stored customer rows."""
        return list(self._store)

    async def get_by_user_and_stripe_customer(
        self, db: AsyncSession, *, user_id: UUID, stripe_customer_id: str
    ) -> Optional[StripeCustomer]:
        """Get the customer mapping for a (user, provider customer) pair."""
        self._calls.append(("get_by_user_and_stripe_customer", db, user_id, stripe_customer_id))
        for obj in self._store:
            if obj.user_id == user_id and obj.stripe_customer_id == stripe_customer_id:
                return obj
        return None

    async def get_by_user(self, db: AsyncSession, *, user_id: UUID) -> Optional[StripeCustomer]:
        """Get any customer mapping of a user."""
        self._calls.append(("get_by_user", db, user_id))
        for obj in self._store:
            if obj.user_id == user_id:
                return obj
        return None

    async def create(self, db: AsyncSession, *, obj_in: StripeCustomerCreate) -> StripeCustomer:
        """Insert a customer mapping (fake)."""
        self._calls.append(("create", db, obj_in))
        obj = StripeCustomer(
            id=uuid4(),
            created_at=datetime.now(timezone.utc),
            **obj_in.model_dump(),
        )
        self._store.append(obj)
        return obj


class FakeSubscriptionRepository:
    """In-memory fake for SubscriptionRepositoryProtocol.

    ``create`` appends without a key check, so a repeated insert shows up as a
    duplicate row.
    """

    def __init__(self) -> None:
        """Initialize with empty store and call log."""
        self._store: list[StripeSubscription] = []
        self._calls: list[tuple] = []

    def seed(self, obj: StripeSubscription) -> None:
        """Populate store with test data."""
        self._store.append(obj)

    @property
    def rows(self) -> list[StripeSubscription]:
        """All stored subscription rows."""
        return list(self._store)

    def rows_for(self, subscription_id: str) -> list[StripeSubscription]:
        """Stored rows with the given subscription id."""
        return [obj for obj in self._store if obj.id == subscription_id]

    async def create(
        self, db: AsyncSession, *, obj_in: StripeSubscriptionWrite
    ) -> StripeSubscription:
        """Insert a subscription (fake)."""
        self._calls.append(("create", db, obj_in))
        obj = self._build(obj_in)
        self._store.append(obj)
        return obj

    async def upsert(
        self, db: AsyncSession, *, obj_in: StripeSubscriptionWrite
    ) -> StripeSubscription:
        """Insert or fully replace a subscription by id (fake)."""
        self._calls.append(("upsert", db, obj_in))
        obj = self._build(obj_in)
        self._store = [existing for existing in self._store if existing.id != obj_in.id]
        self._store.append(obj)
        return obj

    async def mark_canceled(
        self, db: AsyncSession, *, subscription_id: str, canceled_at: datetime
    ) -> int:
        """Mark a subscription canceled (fake)."""
        self._calls.append(("mark_canceled", db, subscription_id, canceled_at))
        matched = 0
        for obj in self._store:
            if obj.id == subscription_id:
                obj.status = STATUS_CANCELED
                obj.canceled_at = canceled_at
                obj.updated_at = datetime.now(timezone.utc)
                matched += 1
        return matched

    @staticmethod
    def _build(obj_in: StripeSubscriptionWrite) -> StripeSubscription:
        now = datetime.now(timezone.utc)
        return StripeSubscription(created_at=now, updated_at=now, **obj_in.model_dump())
