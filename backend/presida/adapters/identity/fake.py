"""Fake identity provider for testing.

In-memory implementation of IdentityProviderProtocol.
Records all calls for assertions. No external API calls.
"""

from typing import Any, Optional

from presida.core.exceptions import ExternalServiceError
from presida.core.protocols.identity import IdentityProviderProtocol
from presida.schemas.identity import IdentityUser


class FakeIdentityProvider(IdentityProviderProtocol):
    """Test implementation of IdentityProviderProtocol.

    Usage::

        fake = FakeIdentityProvider()
        fake.fail_sign_out("user-2", "session not found")
        await fake.sign_out_user("user-1")
        assert fake.signed_out == ["user-1"]
    """

    def __init__(self, should_raise: Optional[Exception] = None) -> None:
        """Initialize with optional error injection."""
        self._should_raise = should_raise
        self._calls: list[tuple[str, tuple]] = []
        self._tokens: dict[str, IdentityUser] = {}
        self._sign_out_failures: dict[str, str] = {}
        self.deleted: list[str] = []
        self.signed_out: list[str] = []
        self.closed = False

    def _record(self, method: str, *args: Any) -> None:
        self._calls.append((method, args))
        if self._should_raise:
            raise self._should_raise

    # ---- Test helpers ----

    def call_count(self, method: str) -> int:
        """Number of times a method was called."""
        return sum(1 for name, _ in self._calls if name == method)

    def add_token(self, token: str, user: IdentityUser) -> None:
        """Make get_user resolve *token* to *user*."""
        self._tokens[token] = user

    def fail_sign_out(self, user_id: str, message: str) -> None:
        """Make sign_out_user fail for one user."""
        self._sign_out_failures[user_id] = message

    # ---- Protocol ----

    async def delete_user(self, user_id: str) -> None:
        """Record the deletion."""
        self._record("delete_user", user_id)
        self.deleted.append(user_id)

    async def sign_out_user(self, user_id: str) -> None:
        """Record the sign-out, or fail if configured for this user."""
        self._record("sign_out_user", user_id)
        if user_id in self._sign_out_failures:
            raise ExternalServiceError("Supabase", self._sign_out_failures[user_id])
        self.signed_out.append(user_id)

    async def get_user(self, access_token: str) -> Optional[IdentityUser]:
        """Resolve a registered token."""
        self._record("get_user", access_token)
        return self._tokens.get(access_token)

    async def aclose(self) -> None:
        """Mark the fake closed."""
        self.closed = True
