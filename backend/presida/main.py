"""Main module of the FastAPI application.

This module sets up the FastAPI application, the middleware that logs incoming
requests and the exception handlers.
"""

from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError

from presida.api.middleware import (
    add_request_id,
    exception_logging_middleware,
    external_service_exception_handler,
    invalid_state_exception_handler,
    log_requests,
    not_found_exception_handler,
    presida_exception_handler,
    validation_exception_handler,
)
from presida.api.v1.api import api_router
from presida.core.config import settings
from presida.core.exceptions import (
    ExternalServiceError,
    InvalidStateError,
    NotFoundException,
    PresidaException,
)
from presida.core.logging import logger


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Lifespan context manager for startup and shutdown events.

    Initializes the DI container on startup and closes the identity
    provider's HTTP client on shutdown.
    """
    from presida.core import container as container_mod
    from presida.core.container import initialize_container

    logger.info("Initializing dependency injection container...")
    initialize_container(settings)
    logger.info("Container initialized successfully")

    yield

    await container_mod.container.identity_provider.aclose()
    container_mod.reset_container()


app = FastAPI(
    title=settings.PROJECT_NAME,
    openapi_url="/openapi.json",
    lifespan=lifespan,
)

app.include_router(api_router)

# Last registered = outermost middleware (sees the request first)
app.middleware("http")(exception_logging_middleware)
app.middleware("http")(log_requests)
app.middleware("http")(add_request_id)

# Register exception handlers
app.exception_handler(RequestValidationError)(validation_exception_handler)
app.exception_handler(NotFoundException)(not_found_exception_handler)
app.exception_handler(InvalidStateError)(invalid_state_exception_handler)
app.exception_handler(ExternalServiceError)(external_service_exception_handler)
app.exception_handler(PresidaException)(presida_exception_handler)
