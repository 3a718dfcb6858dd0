"""Stripe customer model."""

import uuid
from typing import TYPE_CHECKING, List, Optional

from sqlalchemy import Index, String
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import Mapped, mapped_column, relationship

from presida.models._base import Base, CreatedAtMixin

if TYPE_CHECKING:
    from presida.models.stripe_subscription import StripeSubscription


class StripeCustomer(Base, CreatedAtMixin):
    """Maps an internal user to a payment-provider customer."""

    __tablename__ = "stripe_customers"

    id: Mapped[uuid.UUID] = mapped_column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    user_id: Mapped[uuid.UUID] = mapped_column(UUID(as_uuid=True), nullable=False)
    stripe_customer_id: Mapped[str] = mapped_column(String, nullable=False)
    email: Mapped[Optional[str]] = mapped_column(String, nullable=True)

    subscriptions: Mapped[List["StripeSubscription"]] = relationship(
        "StripeSubscription",
        back_populates="customer",
        lazy="noload",
    )

    __table_args__ = (
        Index("idx_stripe_customers_user_customer", "user_id", "stripe_customer_id"),
    )
