"""CRUD operations for StripeCustomer model."""

from typing import Optional
from uuid import UUID

from sqlalchemy import and_, select
from sqlalchemy.ext.asyncio import AsyncSession

from presida.crud._base import CRUDBase
from presida.models.stripe_customer import StripeCustomer
from presida.schemas.stripe_customer import StripeCustomerCreate


class CRUDStripeCustomer(CRUDBase[StripeCustomer, StripeCustomerCreate]):
    """CRUD operations for StripeCustomer model."""

    async def get_by_user_and_stripe_customer(
        self,
        db: AsyncSession,
        *,
        user_id: UUID,
        stripe_customer_id: str,
    ) -> Optional[StripeCustomer]:
        """Get the customer mapping for a (user, provider customer) pair."""
        query = (
            select(self.model)
            .where(
                and_(
                    self.model.user_id == user_id,
                    self.model.stripe_customer_id == stripe_customer_id,
                )
            )
            .limit(1)
        )
        result = await db.execute(query)
        return result.scalar_one_or_none()

    async def get_by_user(self, db: AsyncSession, *, user_id: UUID) -> Optional[StripeCustomer]:
        """Get the oldest customer mapping for a user."""
        query = (
            select(self.model)
            .where(self.model.user_id == user_id)
            .order_by(self.model.created_at)
            .limit(1)
        )
        result = await db.execute(query)
        return result.scalar_one_or_none()


stripe_customer = CRUDStripeCustomer(StripeCustomer)
