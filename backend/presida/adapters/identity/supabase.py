"""Supabase adapter for identity administration.

Implements IdentityProviderProtocol against the GoTrue REST API with an
``httpx.AsyncClient``. Admin calls authenticate with the service-role key.

GoTrue's logout endpoint signs out the owner of the bearer token, so
``sign_out_user`` mints a short-lived access token for the target user with
the project's JWT secret and calls logout with ``scope=global``.
"""

import logging
import time
from typing import Optional
from urllib.parse import quote

import httpx
import jwt

from presida.core.exceptions import ExternalServiceError
from presida.core.protocols.identity import IdentityProviderProtocol
from presida.schemas.identity import IdentityUser

logger = logging.getLogger(__name__)

SERVICE_NAME = "Supabase"

# Lifetime of the token minted for a forced sign-out
SIGN_OUT_TOKEN_TTL_SECONDS = 60


def _error_message(response: httpx.Response) -> str:
    """Extract GoTrue's error text from a failed response."""
    try:
        body = response.json()
    except ValueError:
        return response.text or f"HTTP {response.status_code}"
    if isinstance(body, dict):
        for key in ("msg", "message", "error_description", "error"):
            if body.get(key):
                return str(body[key])
    return f"HTTP {response.status_code}"


class SupabaseIdentityProvider(IdentityProviderProtocol):
    """Identity provider backed by Supabase Auth (GoTrue)."""

    def __init__(
        self,
        base_url: str,
        service_role_key: str,
        jwt_secret: Optional[str] = None,
        timeout: float = 10.0,
        client: Optional[httpx.AsyncClient] = None,
    ) -> None:
        """Create the adapter.

        Args:
        ----
            base_url (str): Project URL, e.g. ``https://xyz.supabase.co``.
            service_role_key (str): Service-role key used for admin calls.
            jwt_secret (str, optional): Project JWT secret, required for sign-out.
            timeout (float): HTTP timeout in seconds.
            client (httpx.AsyncClient, optional): Preconfigured client, mainly for tests.

        """
        self._auth_url = f"{base_url.rstrip('/')}/auth/v1"
        self._service_role_key = service_role_key
        self._jwt_secret = jwt_secret
        self._client = client or httpx.AsyncClient(timeout=timeout)

    def _headers(self, bearer: Optional[str] = None) -> dict[str, str]:
        return {
            "apikey": self._service_role_key,
            "Authorization": f"Bearer {bearer or self._service_role_key}",
        }

    async def _request(
        self, method: str, path: str, *, context: str, bearer: Optional[str] = None, **kwargs
    ) -> httpx.Response:
        try:
            return await self._client.request(
                method, f"{self._auth_url}{path}", headers=self._headers(bearer), **kwargs
            )
        except httpx.HTTPError as e:
            logger.error(f"Supabase request failed ({context}): {e}")
            raise ExternalServiceError(SERVICE_NAME, f"Failed to {context}: {e}") from e

    def _mint_user_token(self, user_id: str) -> str:
        if not self._jwt_secret:
            raise ExternalServiceError(SERVICE_NAME, "SUPABASE_JWT_SECRET is not configured")
        now = int(time.time())
        return jwt.encode(
            {
                "sub": user_id,
                "role": "authenticated",
                "aud": "authenticated",
                "iat": now,
                "exp": now + SIGN_OUT_TOKEN_TTL_SECONDS,
            },
            self._jwt_secret,
            algorithm="HS256",
        )

    async def delete_user(self, user_id: str) -> None:
        """Permanently delete a user through the admin API."""
        response = await self._request(
            "DELETE", f"/admin/users/{quote(user_id, safe='')}", context="delete user"
        )
        if response.is_error:
            raise ExternalServiceError(SERVICE_NAME, _error_message(response))

    async def sign_out_user(self, user_id: str) -> None:
        """Revoke every session of a user."""
        token = self._mint_user_token(user_id)
        response = await self._request(
            "POST",
            "/logout",
            context="sign out user",
            bearer=token,
            params={"scope": "global"},
        )
        if response.is_error:
            raise ExternalServiceError(SERVICE_NAME, _error_message(response))

    async def get_user(self, access_token: str) -> Optional[IdentityUser]:
        """Resolve the user owning an access token.

        Returns None when GoTrue rejects the token.
        """
        response = await self._request("GET", "/user", context="get user", bearer=access_token)
        if response.status_code in (401, 403):
            return None
        if response.is_error:
            raise ExternalServiceError(SERVICE_NAME, _error_message(response))
        return IdentityUser.model_validate(response.json())

    async def aclose(self) -> None:
        """Close the HTTP client."""
        await self._client.aclose()
