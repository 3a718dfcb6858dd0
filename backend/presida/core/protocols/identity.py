"""Identity provider protocol.

Admin-level account operations against the identity provider (Supabase GoTrue).

Direct consumers: AccountService, CheckoutService, api/v1/endpoints/billing.py.
"""

from typing import Optional, Protocol, runtime_checkable

from presida.schemas.identity import IdentityUser


@runtime_checkable
class IdentityProviderProtocol(Protocol):
    """Protocol for identity provider admin operations.

    Implementations raise ExternalServiceError when the provider rejects
    or fails a call.
    """

    async def delete_user(self, user_id: str) -> None:
        """Permanently delete a user account."""
        ...

    async def sign_out_user(self, user_id: str) -> None:
        """Invalidate every session of a user."""
        ...

    async def get_user(self, access_token: str) -> Optional[IdentityUser]:
        """Resolve the user owning an access token. None if the token is rejected."""
        ...

    async def aclose(self) -> None:
        """Release the underlying HTTP client."""
        ...
