"""Profile model.

Rows are created by the identity side when a user signs up; this service only
lists them and clears the trial expiration.
"""

import uuid
from datetime import datetime
from typing import Optional

from sqlalchemy import DateTime
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import Mapped, mapped_column

from presida.models._base import Base


class Profile(Base):
    """User profile model."""

    __tablename__ = "profiles"

    id: Mapped[uuid.UUID] = mapped_column(UUID(as_uuid=True), primary_key=True)
    trial_ends_at: Mapped[Optional[datetime]] = mapped_column(
        DateTime(timezone=True), nullable=True
    )
