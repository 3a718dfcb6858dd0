"""Fake profile repository for testing."""

from datetime import datetime
from typing import Optional
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession


class FakeProfileRepository:
    """In-memory fake for ProfileRepositoryProtocol."""

    def __init__(self, list_error: Optional[Exception] = None) -> None:
        """Initialize with empty store and call log."""
        self._trials: dict[UUID, Optional[datetime]] = {}
        self._list_error = list_error
        self._calls: list[tuple] = []

    def seed(self, user_id: UUID, trial_ends_at: Optional[datetime] = None) -> None:
        """Populate store with test data."""
        self._trials[user_id] = trial_ends_at

    def trial_ends_at(self, user_id: UUID) -> Optional[datetime]:
        """Current trial expiration of a seeded user."""
        return self._trials.get(user_id)

    async def list_ids(self, db: AsyncSession) -> list[UUID]:
        """Return every seeded profile id."""
        self._calls.append(("list_ids", db))
        if self._list_error:
            raise self._list_error
        return list(self._trials)

    async def clear_trial(self, db: AsyncSession, *, user_id: UUID) -> None:
        """Clear the trial expiration of a user (no-op for unknown ids)."""
        self._calls.append(("clear_trial", db, user_id))
        if user_id in self._trials:
            self._trials[user_id] = None
