"""
Error mapper.

Classifies every failure into one of four kinds and translates it into a
status code and failure envelope. Also registers the framework-level
handlers so no exception reaches a client unshaped.
"""

from __future__ import annotations

import logging
from typing import Any

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from common.models import ErrorEnvelope
from product_service.results import (
    FAILURE_TYPES,
    Failure,
    MalformedIdentifier,
    NotFound,
    StorageFault,
    ValidationFailure,
)

logger = logging.getLogger(__name__)

HTTP_400 = 400
HTTP_404 = 404
HTTP_500 = 500

INVALID_ID_MESSAGE = "Invalid product ID format"
NOT_FOUND_MESSAGE = "Product not found"
SERVER_ERROR_MESSAGE = "Server Error"
ROUTE_NOT_FOUND_MESSAGE = "Route not found"
INVALID_BODY_MESSAGE = "Request body must be a JSON object"
INTERNAL_ERROR_MESSAGE = "Internal Server Error"


def classify(outcome: Any) -> Failure:
    """Fold any failure value or exception into one of the four kinds."""
    if isinstance(outcome, FAILURE_TYPES):
        return outcome
    if isinstance(outcome, BaseException):
        return StorageFault(detail=str(outcome) or type(outcome).__name__)
    return StorageFault(detail=f"Unexpected result: {outcome!r}")


def to_response(outcome: Any, *, dev_mode: bool = False) -> tuple[int, ErrorEnvelope]:
    """Map a failure to its status code and envelope."""
    failure = classify(outcome)

    if isinstance(failure, ValidationFailure):
        logger.warning("Validation failed: %s", failure.message)
        return HTTP_400, ErrorEnvelope(message=failure.message)
    if isinstance(failure, MalformedIdentifier):
        logger.warning("Malformed product id: %s", failure.product_id)
        return HTTP_400, ErrorEnvelope(message=INVALID_ID_MESSAGE)
    if isinstance(failure, NotFound):
        logger.warning("Product not found: %s", failure.product_id)
        return HTTP_404, ErrorEnvelope(message=NOT_FOUND_MESSAGE)

    logger.error("Storage fault: %s", failure.detail)
    return HTTP_500, ErrorEnvelope(
        message=SERVER_ERROR_MESSAGE,
        error=failure.detail if dev_mode else None,
    )


def _error_response(status_code: int, envelope: ErrorEnvelope) -> JSONResponse:
    return JSONResponse(status_code=status_code, content=envelope.to_json())


def register_error_handlers(app: FastAPI, *, dev_mode: bool = False) -> None:
    """Register the framework-level error handlers on the application.

    Args:
        app: The FastAPI application instance.
        dev_mode: Attach exception detail to 500 responses.
    """

    @app.exception_handler(StarletteHTTPException)
    async def handle_http_exception(
        request: Request, exc: StarletteHTTPException
    ) -> JSONResponse:
        """Unmatched routes and methods all answer 404."""
        if exc.status_code in (404, 405):
            logger.warning("Route not found: %s %s", request.method, request.url.path)
            return _error_response(
                HTTP_404, ErrorEnvelope(message=ROUTE_NOT_FOUND_MESSAGE)
            )
        return _error_response(exc.status_code, ErrorEnvelope(message=str(exc.detail)))

    @app.exception_handler(RequestValidationError)
    async def handle_request_validation(
        _request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        logger.warning("Rejected request body: %d error(s)", len(exc.errors()))
        return _error_response(HTTP_400, ErrorEnvelope(message=INVALID_BODY_MESSAGE))

    @app.exception_handler(Exception)
    async def handle_unexpected(_request: Request, exc: Exception) -> JSONResponse:
        """Catch-all for unexpected errors. Detail only in development."""
        logger.exception("Unexpected error: %s", type(exc).__name__)
        return _error_response(
            HTTP_500,
            ErrorEnvelope(
                message=INTERNAL_ERROR_MESSAGE,
                error=str(exc) if dev_mode else None,
            ),
        )
