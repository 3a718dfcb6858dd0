"""API endpoints for billing operations.

This module provides the HTTP interface for checkout and Stripe webhooks,
delegating all business logic to the billing domain.
"""

import json
from typing import Any, Optional

from fastapi import Depends, Header, Request, Response
from fastapi.responses import JSONResponse, PlainTextResponse
from fastapi.routing import APIRouter
from pydantic import ValidationError
from sqlalchemy.ext.asyncio import AsyncSession

from presida import schemas
from presida.api import deps
from presida.api.cors import CHECKOUT_CORS, CHECKOUT_SESSION_CORS, WEBHOOK_CORS
from presida.api.deps import Inject
from presida.core.logging import logger
from presida.domains.billing.checkout import INTERNAL_ERROR, PRICE_ID_MISSING
from presida.domains.billing.exceptions import CheckoutError, WebhookSignatureError
from presida.domains.billing.protocols import BillingWebhookProtocol, CheckoutServiceProtocol

router = APIRouter()


async def _read_checkout_request(request: Request) -> schemas.CheckoutRequest:
    """Parse a checkout body, raising ValueError("Invalid request body") on bad JSON."""
    try:
        payload: Any = json.loads(await request.body())
        return schemas.CheckoutRequest.model_validate(payload)
    except (ValueError, ValidationError) as e:
        raise ValueError("Invalid request body") from e


# ---------------------------------------------------------------------------
# Mock checkout
# ---------------------------------------------------------------------------


@router.options("/stripe-checkout", include_in_schema=False)
async def mock_checkout_preflight() -> Response:
    """CORS preflight for the mock checkout."""
    return CHECKOUT_CORS.preflight()


@router.post("/stripe-checkout", response_model=schemas.MockCheckoutResponse)
async def create_mock_checkout(
    request: Request,
    authorization: Optional[str] = Header(None),
    checkout: CheckoutServiceProtocol = Inject(CheckoutServiceProtocol),
) -> JSONResponse:
    """Build a mock checkout redirect.

    No payment-provider session is created; the returned URL points straight
    back to the app's success page with ``mock=true``.
    """
    try:
        body = await _read_checkout_request(request)
        if not body.price_id:
            raise ValueError("Price ID is required")
        result = checkout.create_mock_checkout(
            price_id=body.price_id,
            success_url=body.success_url,
            cancel_url=body.cancel_url,
            authorization=authorization,
        )
    except Exception as e:
        logger.error(f"Error in mock checkout: {e}")
        return CHECKOUT_CORS.apply(
            JSONResponse(status_code=400, content={"error": str(e) or "An unknown error occurred"})
        )

    return CHECKOUT_CORS.apply(JSONResponse(status_code=200, content=result.model_dump()))


# ---------------------------------------------------------------------------
# Real checkout
# ---------------------------------------------------------------------------


@router.options("/checkout-session", include_in_schema=False)
async def checkout_session_preflight() -> Response:
    """CORS preflight for the checkout session."""
    return CHECKOUT_SESSION_CORS.preflight()


@router.post(
    "/checkout-session",
    response_model=schemas.CheckoutSessionResponse,
    responses={
        400: {"model": schemas.CheckoutErrorResponse},
        401: {"model": schemas.CheckoutErrorResponse},
        500: {"model": schemas.CheckoutErrorResponse},
    },
)
async def create_checkout_session(
    request: Request,
    authorization: Optional[str] = Header(None),
    db: AsyncSession = Depends(deps.get_db),
    checkout: CheckoutServiceProtocol = Inject(CheckoutServiceProtocol),
) -> JSONResponse:
    """Create a Stripe subscription checkout session for the calling user."""
    try:
        user = await checkout.authenticate(authorization)
        try:
            body = await _read_checkout_request(request)
        except ValueError:
            body = schemas.CheckoutRequest()
        if not body.price_id:
            raise CheckoutError(PRICE_ID_MISSING, "ID do preço é obrigatório", status_code=400)
        url = await checkout.create_checkout_session(
            db,
            user,
            price_id=body.price_id,
            success_url=body.success_url,
            cancel_url=body.cancel_url,
        )
    except CheckoutError as e:
        error = schemas.CheckoutErrorResponse(error=e.message, code=e.code)
        return CHECKOUT_SESSION_CORS.apply(
            JSONResponse(status_code=e.status_code, content=error.model_dump())
        )
    except Exception as e:
        logger.error(f"Unexpected error creating checkout session: {e}", exc_info=True)
        error = schemas.CheckoutErrorResponse(error="Erro interno do servidor", code=INTERNAL_ERROR)
        return CHECKOUT_SESSION_CORS.apply(
            JSONResponse(status_code=500, content=error.model_dump())
        )

    body = schemas.CheckoutSessionResponse(url=url)
    return CHECKOUT_SESSION_CORS.apply(JSONResponse(status_code=200, content=body.model_dump()))


# ---------------------------------------------------------------------------
# Webhook
# ---------------------------------------------------------------------------


@router.options("/webhook", include_in_schema=False)
async def stripe_webhook_preflight() -> Response:
    """CORS preflight for the webhook."""
    return WEBHOOK_CORS.preflight()


@router.post("/webhook", include_in_schema=False)
async def stripe_webhook(
    request: Request,
    stripe_signature: Optional[str] = Header(None),
    db: AsyncSession = Depends(deps.get_db),
    webhook: BillingWebhookProtocol = Inject(BillingWebhookProtocol),
) -> Response:
    """Handle Stripe webhook events.

    Security:
    - The Stripe-Signature header is the only authentication
    - Verification happens inside the processor

    Returns:
        200 ``{"received": true}`` on success, 400 on a missing or invalid
        signature and 400 ``{"error": ...}`` on a processing error
    """
    if not stripe_signature:
        return WEBHOOK_CORS.apply(PlainTextResponse("No signature", status_code=400))

    payload = await request.body()
    try:
        await webhook.process_webhook(db, payload, stripe_signature)
    except WebhookSignatureError as e:
        logger.warning(f"Webhook signature verification failed: {e}")
        return WEBHOOK_CORS.apply(PlainTextResponse(f"Webhook Error: {e}", status_code=400))
    except Exception as e:
        return WEBHOOK_CORS.apply(
            JSONResponse(status_code=400, content={"error": str(e) or "Unknown error"})
        )

    return WEBHOOK_CORS.apply(
        JSONResponse(status_code=200, content=schemas.WebhookAck().model_dump())
    )
