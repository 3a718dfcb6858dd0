"""Stripe subscription schemas."""

from datetime import datetime
from typing import Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field


class StripeSubscriptionWrite(BaseModel):
    """Full subscription record as written on insert or upsert.

    ``id`` is the payment provider's subscription id.
    """

    id: str
    customer_id: UUID = Field(..., description="stripe_customers.id this subscription belongs to")
    price_id: Optional[str] = None
    status: str
    current_period_start: Optional[datetime] = None
    current_period_end: Optional[datetime] = None
    cancel_at_period_end: bool = False
    canceled_at: Optional[datetime] = None
    trial_start: Optional[datetime] = None
    trial_end: Optional[datetime] = None


class StripeSubscription(StripeSubscriptionWrite):
    """Complete subscription schema."""

    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)
