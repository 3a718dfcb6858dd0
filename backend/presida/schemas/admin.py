"""Account administration schemas."""

from typing import Optional

from pydantic import BaseModel, Field


class DeleteUserRequest(BaseModel):
    """Body of the delete-user endpoint."""

    user_id: Optional[str] = None


class MessageResponse(BaseModel):
    """Human-readable outcome, with the upstream error when there is one."""

    message: str
    error: Optional[str] = None


class SignOutResult(BaseModel):
    """Outcome of signing out a single user."""

    user_id: str
    success: bool
    error: Optional[str] = None


class ForceLogoutResponse(BaseModel):
    """Aggregate and per-user outcome of a force logout."""

    success: bool
    total: int = 0
    succeeded: int = 0
    failed: int = 0
    results: list[SignOutResult] = Field(default_factory=list)
    error: Optional[str] = None
