"""Models for the application."""

from ._base import Base
from .profile import Profile
from .stripe_customer import StripeCustomer
from .stripe_subscription import StripeSubscription

__all__ = [
    "Base",
    "Profile",
    "StripeCustomer",
    "StripeSubscription",
]
