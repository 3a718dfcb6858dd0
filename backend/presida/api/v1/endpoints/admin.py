"""API endpoints for account administration.

Both endpoints use the identity provider's admin API and must only be
reachable from trusted callers.
"""

import json

from fastapi import Depends, Request, Response
from fastapi.responses import JSONResponse
from fastapi.routing import APIRouter
from pydantic import ValidationError
from sqlalchemy.ext.asyncio import AsyncSession

from presida import schemas
from presida.api import deps
from presida.api.cors import FORCE_LOGOUT_CORS
from presida.api.deps import Inject
from presida.core.logging import logger
from presida.domains.accounts.exceptions import IdentityProviderError
from presida.domains.accounts.protocols import AccountServiceProtocol

router = APIRouter()


def _message(status_code: int, message: str, error: str | None = None) -> JSONResponse:
    body = schemas.MessageResponse(message=message, error=error)
    return JSONResponse(status_code=status_code, content=body.model_dump(exclude_none=True))


@router.post("/delete-user", response_model=schemas.MessageResponse)
async def delete_user(
    request: Request,
    accounts: AccountServiceProtocol = Inject(AccountServiceProtocol),
) -> JSONResponse:
    """Permanently delete a user account.

    Body: ``{"user_id": "<id>"}``. Any method other than POST is answered with
    405 by the router before the body is read.
    """
    raw = await request.body()
    try:
        payload = json.loads(raw) if raw.strip() else {}
    except ValueError:
        return _message(400, "Invalid request body")

    try:
        body = schemas.DeleteUserRequest.model_validate(
            payload if isinstance(payload, dict) else {}
        )
    except ValidationError:
        return _message(400, "Invalid request body")
    if not body.user_id:
        return _message(400, "user_id is required")

    try:
        await accounts.delete_user(body.user_id)
    except IdentityProviderError as e:
        logger.error(f"Failed to delete user {body.user_id}: {e.message}")
        return _message(500, "Failed to delete user", e.message)
    except Exception as e:
        logger.error(f"Unexpected error deleting user {body.user_id}: {e}", exc_info=True)
        return _message(500, "Internal error", str(e))

    return _message(200, "User deleted successfully")


@router.options("/force-logout", include_in_schema=False)
async def force_logout_preflight() -> Response:
    """CORS preflight for force logout."""
    return FORCE_LOGOUT_CORS.preflight()


@router.post("/force-logout", response_model=schemas.ForceLogoutResponse)
async def force_logout(
    db: AsyncSession = Depends(deps.get_db),
    accounts: AccountServiceProtocol = Inject(AccountServiceProtocol),
) -> JSONResponse:
    """Sign out every user.

    Returns 200 when every sign-out succeeded and 500 otherwise; the body
    always lists the per-user outcome.
    """
    try:
        result = await accounts.force_logout(db)
    except Exception as e:
        logger.error(f"Error forcing logout: {e}", exc_info=True)
        result = schemas.ForceLogoutResponse(success=False, error=f"Failed to force logout: {e}")

    status_code = 200 if result.success else 500
    return FORCE_LOGOUT_CORS.apply(
        JSONResponse(status_code=status_code, content=result.model_dump(mode="json"))
    )
