"""Dependency Injection Container Module.

This module provides the DI container and factory for wiring dependencies
across the application.

Usage:
------
    # Initialize at startup (call once from main.py)
    from presida.core.container import initialize_container
    from presida.core.config import settings
    initialize_container(settings)

    # In FastAPI deps.py
    def get_container() -> Container:
        return container

    # In tests (construct directly with fakes, don't use global)
    from presida.core.container import Container
    test_container = Container(
        identity_provider=FakeIdentityProvider(),
        payment_gateway=FakePaymentGateway(),
        ...
    )
"""

from typing import TYPE_CHECKING

from presida.core.container.container import Container
from presida.core.container.factory import create_container

if TYPE_CHECKING:
    from presida.core.config import Settings

__all__ = ["Container", "create_container", "container", "initialize_container"]


# ---------------------------------------------------------------------------
# Global container instance
# ---------------------------------------------------------------------------

container: Container | None = None
"""Global container instance.

Initialized via `initialize_container()` at application startup.

Do NOT import this in domain code. Domains receive dependencies
via constructor parameters, never by importing the container directly.
"""


def initialize_container(settings: "Settings") -> None:
    """Initialize the global container. Call once at startup.

    Raises:
        RuntimeError: If called more than once (container already initialized)
    """
    global container

    if container is not None:
        raise RuntimeError(
            "Container already initialized. "
            "initialize_container() should only be called once at startup."
        )

    container = create_container(settings)


def reset_container() -> None:
    """Reset the global container to None. For testing only."""
    global container
    container = None
