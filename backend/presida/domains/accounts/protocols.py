"""Account domain protocols."""

from typing import Protocol, runtime_checkable

from sqlalchemy.ext.asyncio import AsyncSession

from presida.schemas.admin import ForceLogoutResponse


@runtime_checkable
class AccountServiceProtocol(Protocol):
    """Administrative account operations used by the admin endpoints."""

    async def delete_user(self, user_id: str) -> None:
        """Delete a user account. Raises IdentityProviderError on provider failure."""
        ...

    async def force_logout(self, db: AsyncSession) -> ForceLogoutResponse:
        """Sign out every user and report the per-user outcome."""
        ...
