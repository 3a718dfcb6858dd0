"""Static product catalog.

Price ids are matched by substring, so any price whose id contains
``professional`` or ``premium`` resolves to that tier and everything else
falls back to the basic plan.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class Product:
    """A sellable plan."""

    price_id: str
    name: str
    price: str
    duration_months: int
    description: str


BASIC = Product(
    price_id="price_basic_monthly",
    name="Básico",
    price="R$ 29,99",
    duration_months=1,
    description="Plano mensal para começar a organizar seus eventos.",
)
PROFESSIONAL = Product(
    price_id="price_professional_monthly",
    name="Profissional",
    price="R$ 39,99",
    duration_months=12,
    description="Plano anual com todos os recursos para profissionais.",
)
PREMIUM = Product(
    price_id="price_premium_monthly",
    name="Premium",
    price="R$ 59,99",
    duration_months=36,
    description="Plano de três anos com recursos ilimitados.",
)


def classify_price(price_id: str) -> Product:
    """Resolve a price id to its catalog tier."""
    if "professional" in price_id:
        return PROFESSIONAL
    if "premium" in price_id:
        return PREMIUM
    return BASIC
