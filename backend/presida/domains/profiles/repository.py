"""Profile repository and protocol."""

from typing import Protocol
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from presida import crud


class ProfileRepositoryProtocol(Protocol):
    """Access to user profiles."""

    async def list_ids(self, db: AsyncSession) -> list[UUID]:
        """Return every profile id."""
        ...

    async def clear_trial(self, db: AsyncSession, *, user_id: UUID) -> None:
        """Clear the trial expiration of a user."""
        ...


class ProfileRepository(ProfileRepositoryProtocol):
    """Delegates to the crud.profile singleton."""

    async def list_ids(self, db: AsyncSession) -> list[UUID]:
        """Return every profile id."""
        return await crud.profile.list_ids(db)

    async def clear_trial(self, db: AsyncSession, *, user_id: UUID) -> None:
        """Clear the trial expiration of a user."""
        await crud.profile.clear_trial(db, user_id=user_id)
