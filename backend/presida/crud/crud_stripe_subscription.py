"""CRUD operations for StripeSubscription model."""

from datetime import datetime, timezone

from sqlalchemy import update
from sqlalchemy.dialects.postgresql import insert
from sqlalchemy.ext.asyncio import AsyncSession

from presida.crud._base import CRUDBase
from presida.domains.billing.types import STATUS_CANCELED
from presida.models.stripe_subscription import StripeSubscription
from presida.schemas.stripe_subscription import StripeSubscriptionWrite


class CRUDStripeSubscription(CRUDBase[StripeSubscription, StripeSubscriptionWrite]):
    """CRUD operations for StripeSubscription model.

    ``create`` is a plain insert and fails on a duplicate subscription id;
    ``upsert`` replaces every column of an existing row.
    """

    async def upsert(
        self, db: AsyncSession, *, obj_in: StripeSubscriptionWrite
    ) -> StripeSubscription:
        """Insert the subscription or replace the existing row with the same id."""
        values = obj_in.model_dump()
        values["updated_at"] = datetime.now(timezone.utc)
        stmt = insert(self.model).values(**values)
        stmt = stmt.on_conflict_do_update(
            index_elements=[self.model.id],
            set_={key: stmt.excluded[key] for key in values if key != "id"},
        ).returning(self.model)
        result = await db.execute(stmt)
        db_obj = result.scalar_one()
        await db.commit()
        return db_obj

    async def mark_canceled(
        self,
        db: AsyncSession,
        *,
        subscription_id: str,
        canceled_at: datetime,
    ) -> int:
        """Set status to canceled. Returns the number of matched rows."""
        stmt = (
            update(self.model)
            .where(self.model.id == subscription_id)
            .values(
                status=STATUS_CANCELED,
                canceled_at=canceled_at,
                updated_at=datetime.now(timezone.utc),
            )
        )
        result = await db.execute(stmt)
        await db.commit()
        return result.rowcount


stripe_subscription = CRUDStripeSubscription(StripeSubscription)
