"""Mapping of domain and validation errors to JSON error responses"""

import logging
from datetime import datetime
from typing import List, Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from rewards_service.api.v1.schemas import ErrorResponse
from rewards_service.domain.exceptions import (
    ComputationError,
    CustomerNotFoundError,
    DomainException,
    InvalidInputError,
)

logger = logging.getLogger(__name__)


def build_error_response(
    status: int,
    message: str,
    path: str,
    errors: Optional[List[str]] = None,
) -> JSONResponse:
    body = ErrorResponse(
        timestamp=datetime.now(),
        status=status,
        error=message,
        path=path,
        errors=errors,
    )
    return JSONResponse(status_code=status, content=body.model_dump(mode="json", exclude_none=True))


async def customer_not_found_handler(request: Request, exc: CustomerNotFoundError) -> JSONResponse:
    logger.error(f"Customer not found: {exc}")
    return build_error_response(404, "Customer not found", request.url.path)


async def invalid_input_handler(request: Request, exc: InvalidInputError) -> JSONResponse:
    logger.warning(f"Invalid input: {exc}")
    return build_error_response(400, str(exc), request.url.path)


async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    messages = [
        f"{'.'.join(str(part) for part in err.get('loc', ()))}: {err.get('msg')}"
        for err in exc.errors()
    ]
    logger.warning(f"Validation error: {messages}")
    return build_error_response(400, "Validation failed", request.url.path, errors=messages)


async def domain_error_handler(request: Request, exc: DomainException) -> JSONResponse:
    if isinstance(exc, ComputationError):
        logger.error(f"Rewards computation failed: {exc}", exc_info=exc)
    else:
        logger.error(f"Unhandled domain error: {exc}", exc_info=exc)
    return build_error_response(500, "Internal Server Error", request.url.path)


async def unexpected_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.error(f"Unexpected error: {exc}", exc_info=exc)
    return build_error_response(500, "Internal Server Error", request.url.path)


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(CustomerNotFoundError, customer_not_found_handler)
    app.add_exception_handler(InvalidInputError, invalid_input_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)
    app.add_exception_handler(DomainException, domain_error_handler)
    app.add_exception_handler(Exception, unexpected_error_handler)
