"""Health check endpoints."""

import asyncio

from fastapi import Response
from fastapi.routing import APIRouter

from presida.api.deps import Inject
from presida.core.logging import logger
from presida.core.protocols import HealthProbe
from presida.schemas.health import (
    CheckStatus,
    DependencyCheck,
    LivenessResponse,
    ReadinessResponse,
)

router = APIRouter()

READINESS_TIMEOUT_SECONDS = 5.0


@router.get("")
async def health_check() -> dict[str, str]:
    """Check if the API is healthy.

    Returns:
    --------
        dict: A dictionary containing the status of the API.
    """
    return {"status": "healthy"}


@router.get("/live")
async def liveness() -> LivenessResponse:
    """Liveness probe: confirms the process is running."""
    return LivenessResponse()


@router.get(
    "/ready",
    response_model=ReadinessResponse,
    responses={503: {"model": ReadinessResponse}},
)
async def readiness(
    response: Response,
    db_probe: HealthProbe = Inject(HealthProbe),
) -> ReadinessResponse:
    """Readiness probe: checks the database."""
    try:
        check = await asyncio.wait_for(db_probe.check(), timeout=READINESS_TIMEOUT_SECONDS)
    except Exception as e:
        logger.warning(f"Readiness probe {db_probe.name} failed: {e}")
        check = DependencyCheck(status=CheckStatus.down, error=type(e).__name__)

    ready = check.status == CheckStatus.up
    if not ready:
        response.status_code = 503
    return ReadinessResponse(
        status="ready" if ready else "not_ready", checks={db_probe.name: check}
    )
