"""Identity provider schemas."""

from typing import Optional

from pydantic import BaseModel, ConfigDict


class IdentityUser(BaseModel):
    """A user as reported by the identity provider."""

    id: str
    email: Optional[str] = None

    model_config = ConfigDict(extra="ignore")
