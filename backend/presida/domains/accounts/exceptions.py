"""Account domain exceptions."""

import functools

from presida.core.exceptions import ExternalServiceError


class IdentityProviderError(ExternalServiceError):
    """Wraps ExternalServiceError from the identity adapter at the domain boundary."""

    def __init__(self, message: str = "Identity provider error"):
        """Initialize with default message."""
        super().__init__(service_name="IdentityProvider", message=message)


def wrap_identity_errors(fn):
    """Decorator: catch ExternalServiceError from identity provider, wrap as IdentityProviderError."""

    @functools.wraps(fn)
    async def wrapper(*args, **kwargs):
        try:
            return await fn(*args, **kwargs)
        except IdentityProviderError:
            raise
        except ExternalServiceError as e:
            raise IdentityProviderError(message=e.message) from e

    return wrapper
