"""Fake health probe for testing."""

from typing import Optional

from presida.core.protocols.health import HealthProbe
from presida.schemas.health import CheckStatus, DependencyCheck


class FakeHealthProbe(HealthProbe):
    """Returns ``up`` or raises the configured error."""

    def __init__(self, name: str = "postgres", error: Optional[Exception] = None) -> None:
        self._name = name
        self._error = error

    @property
    def name(self) -> str:
        return self._name

    async def check(self) -> DependencyCheck:
        if self._error:
            raise self._error
        return DependencyCheck(status=CheckStatus.up, latency_ms=0.1)
