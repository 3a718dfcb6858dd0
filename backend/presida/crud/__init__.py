"""CRUD singletons."""

from .crud_profile import profile
from .crud_stripe_customer import stripe_customer
from .crud_stripe_subscription import stripe_subscription

__all__ = ["profile", "stripe_customer", "stripe_subscription"]
