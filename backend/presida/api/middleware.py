"""Middleware for the FastAPI application.

This module contains middleware that process requests and responses, and the
application-level exception handlers.
"""

import time
import traceback
import uuid

from fastapi import Request, Response
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from presida.core.config import settings
from presida.core.exceptions import (
    ExternalServiceError,
    InvalidStateError,
    NotFoundException,
    PresidaException,
)
from presida.core.logging import logger

REQUEST_ID_HEADER = "X-Request-ID"


async def add_request_id(request: Request, call_next: callable) -> Response:
    """Middleware to generate and add a request ID to the request for tracing.

    An incoming ``X-Request-ID`` is reused so ids line up across services.

    Args:
    ----
        request (Request): The incoming request.
        call_next (callable): The next middleware in the chain.

    Returns:
    -------
        Response: The response to the incoming request.

    """
    request_id = request.headers.get(REQUEST_ID_HEADER) or str(uuid.uuid4())
    request.state.request_id = request_id
    response = await call_next(request)
    response.headers[REQUEST_ID_HEADER] = request_id
    return response


async def log_requests(request: Request, call_next: callable) -> Response:
    """Middleware to log incoming requests.

    Args:
    ----
        request (Request): The incoming request.
        call_next (callable): The next middleware in the chain.

    Returns:
    -------
        Response: The response to the incoming request.

    """
    start_time = time.time()
    response = await call_next(request)
    duration = time.time() - start_time
    logger.with_context(request_id=getattr(request.state, "request_id", None)).info(
        f"Handled request {request.method} {request.url.path} in {duration:.2f} seconds. "
        f"Response code: {response.status_code}"
    )
    return response


async def exception_logging_middleware(request: Request, call_next: callable) -> Response:
    """Middleware to log unhandled exceptions.

    Args:
    ----
        request (Request): The incoming request.
        call_next (callable): The next middleware in the chain.

    Returns:
    -------
        Response: The response to the incoming request.

    """
    try:
        return await call_next(request)
    except Exception as exc:
        logger.error(f"Unhandled exception: {exc}\n{traceback.format_exc()}")

        response_content = {"detail": f"Internal Server Error: {exc.__class__.__name__}: {exc}"}
        if settings.LOCAL_DEVELOPMENT:
            response_content["trace"] = traceback.format_exc()

        return JSONResponse(status_code=500, content=response_content)


async def validation_exception_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Exception handler for request validation errors.

    Returns:
    -------
        JSONResponse: A 422 response listing ``{"<loc>": "<msg>"}`` per error.

    """
    errors = [
        {".".join(str(part) for part in error["loc"]): error["msg"]} for error in exc.errors()
    ]
    logger.error(f"Validation error: {errors}")
    return JSONResponse(status_code=422, content={"errors": errors})


async def not_found_exception_handler(request: Request, exc: NotFoundException) -> JSONResponse:
    """Exception handler for NotFoundException.

    Returns:
    -------
        JSONResponse: A 404 Not Found status response that details the error message.

    """
    return JSONResponse(status_code=404, content={"detail": str(exc)})


async def invalid_state_exception_handler(request: Request, exc: InvalidStateError) -> JSONResponse:
    """Exception handler for InvalidStateError.

    Returns:
    -------
        JSONResponse: A 400 Bad Request status response that details the error message.

    """
    return JSONResponse(status_code=400, content={"detail": str(exc)})


async def external_service_exception_handler(
    request: Request, exc: ExternalServiceError
) -> JSONResponse:
    """Exception handler for ExternalServiceError.

    Returns:
    -------
        JSONResponse: A 502 Bad Gateway response naming the failing service.

    """
    return JSONResponse(
        status_code=502, content={"detail": str(exc), "service": exc.service_name}
    )


async def presida_exception_handler(request: Request, exc: PresidaException) -> JSONResponse:
    """Fallback handler for PresidaException subclasses without a dedicated handler."""
    return JSONResponse(status_code=500, content={"detail": str(exc)})
