"""Core protocols for dependency injection.

Domain-specific protocols (repositories, services) live in their
respective domains/ directories. This module keeps cross-cutting
infrastructure protocols only.
"""

from presida.core.protocols.health import HealthProbe
from presida.core.protocols.identity import IdentityProviderProtocol
from presida.core.protocols.payment import PaymentGatewayProtocol

__all__ = [
    "HealthProbe",
    "IdentityProviderProtocol",
    "PaymentGatewayProtocol",
]
