"""Billing request and response schemas."""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class CheckoutRequest(BaseModel):
    """Body accepted by both checkout endpoints."""

    price_id: Optional[str] = Field(None, alias="priceId")
    success_url: Optional[str] = Field(None, alias="successUrl")
    cancel_url: Optional[str] = Field(None, alias="cancelUrl")

    model_config = ConfigDict(populate_by_name=True, extra="ignore")


class MockCheckoutResponse(BaseModel):
    """Redirect returned by the mock checkout."""

    url: str
    cancel_url: str
    product_name: str
    duration_months: int


class CheckoutSessionResponse(BaseModel):
    """Redirect to a real payment-provider checkout page."""

    url: str


class CheckoutErrorResponse(BaseModel):
    """Error body of the real checkout endpoint."""

    error: str
    code: str


class WebhookAck(BaseModel):
    """Acknowledgment body for processed webhook deliveries."""

    received: bool = True
