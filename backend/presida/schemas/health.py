"""Health check response schemas."""

from enum import Enum
from typing import Literal

from pydantic import BaseModel


class CheckStatus(str, Enum):
    """Status of an individual dependency check."""

    up = "up"
    down = "down"


class DependencyCheck(BaseModel):
    """Result of a single dependency health check."""

    status: CheckStatus
    latency_ms: float | None = None
    error: str | None = None


class ReadinessResponse(BaseModel):
    """Response from the readiness probe."""

    status: Literal["ready", "not_ready"]
    checks: dict[str, DependencyCheck]


class LivenessResponse(BaseModel):
    """Response from the liveness probe."""

    status: Literal["alive"] = "alive"
