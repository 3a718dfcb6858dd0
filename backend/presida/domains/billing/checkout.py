"""Checkout flows.

Two variants share the request shape ``{priceId, successUrl?, cancelUrl?}``:

- the mock checkout only classifies the price and builds the redirect back to
  the app, so no payment-provider session exists;
- the real checkout authenticates the caller, ensures a provider customer and
  opens a subscription checkout session.
"""

from typing import Optional
from urllib.parse import quote, urlsplit
from uuid import UUID

import jwt
from sqlalchemy.ext.asyncio import AsyncSession

from presida.core.exceptions import ExternalServiceError
from presida.core.logging import logger
from presida.core.protocols.identity import IdentityProviderProtocol
from presida.core.protocols.payment import PaymentGatewayProtocol
from presida.domains.billing.catalog import Product, classify_price
from presida.domains.billing.exceptions import BillingNotAvailableError, CheckoutError
from presida.domains.billing.protocols import CheckoutServiceProtocol
from presida.domains.billing.repository import CustomerRepositoryProtocol
from presida.domains.billing.types import stripe_field
from presida.schemas.billing import MockCheckoutResponse
from presida.schemas.identity import IdentityUser
from presida.schemas.stripe_customer import StripeCustomerCreate

AUTH_HEADER_MISSING = "AUTH_HEADER_MISSING"
AUTH_INVALID = "AUTH_INVALID"
PRICE_ID_MISSING = "PRICE_ID_MISSING"
STRIPE_CONFIG_MISSING = "STRIPE_CONFIG_MISSING"
INVALID_PRICE_ID = "INVALID_PRICE_ID"
STRIPE_API_KEY_INVALID = "STRIPE_API_KEY_INVALID"
NETWORK_ERROR = "NETWORK_ERROR"
CUSTOMER_ERROR = "CUSTOMER_ERROR"
INTERNAL_ERROR = "INTERNAL_ERROR"


def extract_origin(url: Optional[str]) -> Optional[str]:
    """Scheme and host of *url*, or None when no url is given.

    Raises ValueError when *url* is not an absolute URL.
    """
    if not url:
        return None
    try:
        parts = urlsplit(url)
    except ValueError as e:
        raise ValueError("Invalid successUrl") from e
    if not parts.scheme or not parts.netloc:
        raise ValueError("Invalid successUrl")
    return f"{parts.scheme}://{parts.netloc}"


def bearer_token(authorization: Optional[str]) -> Optional[str]:
    """Token of a ``Bearer`` authorization header."""
    if not authorization:
        return None
    scheme, _, token = authorization.partition(" ")
    if scheme.lower() != "bearer" or not token.strip():
        return None
    return token.strip()


def unverified_token_hint(authorization: Optional[str]) -> dict[str, str]:
    """Read ``sub`` and ``email`` from a bearer token without verifying it.

    Only for log context: the result must never drive an authorization
    decision. Malformed tokens yield an empty dict.
    """
    token = bearer_token(authorization)
    if not token:
        return {}
    try:
        claims = jwt.decode(token, options={"verify_signature": False})
    except jwt.PyJWTError as e:
        logger.warning(f"Ignoring unreadable bearer token: {e}")
        return {}
    return {key: str(claims[key]) for key in ("sub", "email") if claims.get(key)}


def classify_checkout_failure(error: Exception) -> CheckoutError:
    """Map a provider failure to a checkout error code."""
    if isinstance(error, BillingNotAvailableError):
        return CheckoutError(
            STRIPE_CONFIG_MISSING,
            "Sistema de pagamento não configurado. Entre em contato com o suporte.",
        )
    message = getattr(error, "message", None) or str(error)
    lowered = message.lower()
    if "no such price" in lowered:
        return CheckoutError(
            INVALID_PRICE_ID,
            "Plano selecionado não encontrado. Atualize a página e tente novamente.",
        )
    if "api key" in lowered:
        return CheckoutError(
            STRIPE_API_KEY_INVALID,
            "Configuração do sistema de pagamento inválida. Entre em contato com o suporte.",
        )
    if "network" in lowered or "connection" in lowered:
        return CheckoutError(
            NETWORK_ERROR,
            "Erro de conexão com o sistema de pagamento. Tente novamente em alguns minutos.",
        )
    if "customer" in lowered:
        return CheckoutError(CUSTOMER_ERROR, "Erro ao processar dados do cliente. Tente novamente.")
    return CheckoutError(INTERNAL_ERROR, message or "Erro interno do servidor")


class CheckoutService(CheckoutServiceProtocol):
    """Mock and real checkout flows."""

    def __init__(
        self,
        payment_gateway: PaymentGatewayProtocol,
        identity_provider: IdentityProviderProtocol,
        customer_repo: CustomerRepositoryProtocol,
        default_origin: str,
    ) -> None:
        """Initialize with all required dependencies."""
        self._payment_gateway = payment_gateway
        self._identity_provider = identity_provider
        self._customer_repo = customer_repo
        self._default_origin = default_origin.rstrip("/")

    def _origin(self, success_url: Optional[str]) -> str:
        return extract_origin(success_url) or self._default_origin

    # ------------------------------------------------------------------
    # Mock checkout
    # ------------------------------------------------------------------

    def create_mock_checkout(
        self,
        price_id: str,
        success_url: Optional[str] = None,
        cancel_url: Optional[str] = None,
        authorization: Optional[str] = None,
    ) -> MockCheckoutResponse:
        """Build the redirect of a mock checkout without contacting the provider.

        Raises ValueError when *success_url* is given but not absolute.
        """
        product = classify_price(price_id)
        origin = self._origin(success_url)

        hint = unverified_token_hint(authorization)
        logger.with_context(price_id=price_id, **hint).info(
            f"Mock checkout for {product.name} ({product.duration_months} months)"
        )

        url = (
            f"{origin}/success?product={quote(product.name)}"
            f"&duration={product.duration_months}&mock=true"
        )
        return MockCheckoutResponse(
            url=url,
            cancel_url=cancel_url or f"{origin}/pricing",
            product_name=product.name,
            duration_months=product.duration_months,
        )

    # ------------------------------------------------------------------
    # Real checkout
    # ------------------------------------------------------------------

    async def authenticate(self, authorization: Optional[str]) -> IdentityUser:
        """Resolve the caller from the bearer token.

        Raises CheckoutError with a 401 status when the header is absent or
        the identity provider rejects the token.
        """
        token = bearer_token(authorization)
        if not token:
            raise CheckoutError(
                AUTH_HEADER_MISSING, "Token de autenticação não fornecido", status_code=401
            )
        try:
            user = await self._identity_provider.get_user(token)
        except ExternalServiceError as e:
            logger.error(f"Identity provider failed to resolve token: {e.message}")
            user = None
        if not user:
            raise CheckoutError(
                AUTH_INVALID, "Sessão expirada. Faça login novamente.", status_code=401
            )
        return user

    async def create_checkout_session(
        self,
        db: AsyncSession,
        user: IdentityUser,
        price_id: str,
        success_url: Optional[str] = None,
        cancel_url: Optional[str] = None,
    ) -> str:
        """Create a provider checkout session. Returns the checkout URL.

        Raises CheckoutError carrying the mapped error code on any provider
        failure.
        """
        product = classify_price(price_id)
        log = logger.with_context(user_id=user.id, price_id=price_id)
        try:
            origin = self._origin(success_url)
        except ValueError:
            # successUrl is passed to the provider as given; only the cancel default needs an origin
            log.warning(f"Ignoring origin of non-absolute successUrl {success_url!r}")
            origin = self._default_origin

        try:
            customer_id = await self._ensure_customer(db, user, product)
            session = await self._payment_gateway.create_checkout_session(
                customer_id=customer_id,
                price_id=price_id,
                success_url=success_url
                or f"{origin}/success?product={quote(product.name)}",
                cancel_url=cancel_url or f"{origin}/pricing",
                metadata={
                    "user_id": user.id,
                    "duration_months": str(product.duration_months),
                    "product_name": product.name,
                },
            )
        except (ExternalServiceError, BillingNotAvailableError) as e:
            failure = classify_checkout_failure(e)
            log.error(f"Checkout session failed [{failure.code}]: {e}")
            raise failure from e

        log.info(f"Created checkout session for {product.name}")
        return stripe_field(session, "url")

    async def _ensure_customer(
        self, db: AsyncSession, user: IdentityUser, product: Product
    ) -> str:
        user_id = UUID(user.id)
        existing = await self._customer_repo.get_by_user(db, user_id=user_id)
        if existing:
            return existing.stripe_customer_id

        customer = await self._payment_gateway.create_customer(
            email=user.email,
            name=None,
            metadata={"user_id": user.id, "duration_months": str(product.duration_months)},
        )
        customer_id = stripe_field(customer, "id")
        await self._customer_repo.create(
            db,
            obj_in=StripeCustomerCreate(
                user_id=user_id, stripe_customer_id=customer_id, email=user.email
            ),
        )
        return customer_id
