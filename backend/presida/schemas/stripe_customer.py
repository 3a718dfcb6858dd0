"""Stripe customer schemas."""

from datetime import datetime
from typing import Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict


class StripeCustomerCreate(BaseModel):
    """Schema for inserting a customer mapping."""

    user_id: UUID
    stripe_customer_id: str
    email: Optional[str] = None


class StripeCustomer(StripeCustomerCreate):
    """Complete customer mapping schema."""

    id: UUID
    created_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)
