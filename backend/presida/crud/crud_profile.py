"""CRUD operations for Profile model."""

from uuid import UUID

from sqlalchemy import select, update
from sqlalchemy.ext.asyncio import AsyncSession

from presida.models.profile import Profile


class CRUDProfile:
    """Read ids and clear trial expirations on profiles."""

    def __init__(self, model: type[Profile]):
        """Initialize with the Profile model."""
        self.model = model

    async def list_ids(self, db: AsyncSession) -> list[UUID]:
        """Return every profile id."""
        result = await db.execute(select(self.model.id))
        return list(result.scalars().all())

    async def clear_trial(self, db: AsyncSession, *, user_id: UUID) -> None:
        """Set ``trial_ends_at`` to NULL for one profile."""
        await db.execute(
            update(self.model).where(self.model.id == user_id).values(trial_ends_at=None)
        )
        await db.commit()


profile = CRUDProfile(Profile)
