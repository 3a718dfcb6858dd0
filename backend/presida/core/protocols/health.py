"""Health probe protocol."""

from typing import Protocol, runtime_checkable

from presida.schemas.health import DependencyCheck


@runtime_checkable
class HealthProbe(Protocol):
    """Protocol for a single infrastructure health check.

    Implementations return a ``DependencyCheck`` on success and **raise**
    on failure. The readiness endpoint handles timeouts and error reporting,
    so probes can stay simple.
    """

    @property
    def name(self) -> str:
        """Human-readable identifier surfaced in the readiness response."""
        ...

    async def check(self) -> DependencyCheck:
        """Probe the dependency and return its status."""
        ...
