"""Account administration service."""

import asyncio
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from presida.core.logging import logger
from presida.core.protocols.identity import IdentityProviderProtocol
from presida.domains.accounts.exceptions import wrap_identity_errors
from presida.domains.accounts.protocols import AccountServiceProtocol
from presida.domains.profiles.repository import ProfileRepositoryProtocol
from presida.schemas.admin import ForceLogoutResponse, SignOutResult


class AccountService(AccountServiceProtocol):
    """Delete accounts and force sign-outs through the identity provider."""

    def __init__(
        self,
        identity_provider: IdentityProviderProtocol,
        profile_repo: ProfileRepositoryProtocol,
        concurrency: int = 10,
    ) -> None:
        """Initialize with all required dependencies."""
        self._identity_provider = identity_provider
        self._profile_repo = profile_repo
        self._concurrency = concurrency

    @wrap_identity_errors
    async def delete_user(self, user_id: str) -> None:
        """Delete a user account through the identity provider."""
        await self._identity_provider.delete_user(user_id)
        logger.with_context(user_id=user_id).info("User deleted")

    async def force_logout(self, db: AsyncSession) -> ForceLogoutResponse:
        """Sign out every user with a profile.

        Sign-outs run concurrently, at most ``concurrency`` at a time. A failed
        sign-out is recorded in the result and does not stop the others.
        Listing failures propagate before any sign-out is attempted.
        """
        user_ids = await self._profile_repo.list_ids(db)
        semaphore = asyncio.Semaphore(self._concurrency)

        results = await asyncio.gather(
            *(self._sign_out(semaphore, user_id) for user_id in user_ids)
        )

        succeeded = sum(1 for result in results if result.success)
        failed = len(results) - succeeded
        logger.info(f"Force logout finished: {succeeded} succeeded, {failed} failed")
        return ForceLogoutResponse(
            success=failed == 0,
            total=len(results),
            succeeded=succeeded,
            failed=failed,
            results=list(results),
        )

    async def _sign_out(self, semaphore: asyncio.Semaphore, user_id: UUID) -> SignOutResult:
        async with semaphore:
            try:
                await self._identity_provider.sign_out_user(str(user_id))
            except Exception as e:
                message = getattr(e, "message", None) or str(e)
                logger.with_context(user_id=str(user_id)).warning(f"Sign-out failed: {message}")
                return SignOutResult(user_id=str(user_id), success=False, error=message)
        return SignOutResult(user_id=str(user_id), success=True)
