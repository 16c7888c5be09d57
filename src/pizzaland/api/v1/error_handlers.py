# pizzaland/api/v1/error_handlers.py
"""
FastAPI exception handlers that map catalog exceptions to HTTP responses.

The services raise pizzaland.exceptions.* (PizzaNotFoundError, CategoryAlreadyExistsError,
InvalidIdentifierError, ...). Each exception knows its payload (``to_payload``) and status
(``http_status``); the handlers here only log and serialize.

    register_exception_handlers(app)   # from the app factory
"""

import logging

from fastapi import Request, status
from fastapi.responses import JSONResponse

from pizzaland.exceptions.base import (
    DuplicateError,
    InternalError,
    InvalidFieldError,
    NotFoundError,
    RepositoryError,
)

logger = logging.getLogger(__name__)

TIMEOUT_PAYLOAD = {"detail": "deadline exceeded", "code": "timeout"}


async def duplicate_error_handler(request: Request, exc: DuplicateError) -> JSONResponse:
    """409 Conflict, the name is already taken."""
    logger.info("DuplicateError for %s %s: fields=%s", request.method, request.url.path, exc.fields)
    return JSONResponse(status_code=exc.http_status(), content=exc.to_payload())


async def invalid_field_handler(request: Request, exc: InvalidFieldError) -> JSONResponse:
    logger.info("InvalidFieldError for %s %s: fields=%s", request.method, request.url.path, exc.fields)
    return JSONResponse(status_code=exc.http_status(), content=exc.to_payload())


async def not_found_handler(request: Request, exc: NotFoundError) -> JSONResponse:
    logger.info("NotFoundError for %s %s: fields=%s", request.method, request.url.path, exc.fields)
    return JSONResponse(status_code=exc.http_status(), content=exc.to_payload())


async def internal_error_handler(request: Request, exc: InternalError) -> JSONResponse:
    """
    500 with an opaque body. The chained storage error stays in the server log.
    """
    logger.error(
        "InternalError for %s %s: %s", request.method, request.url.path, exc.message, exc_info=exc
    )
    return JSONResponse(status_code=exc.http_status(), content=exc.to_payload())


async def repository_error_handler(request: Request, exc: RepositoryError) -> JSONResponse:
    """Fallback: invalid identifier, nothing to update, invalid argument."""
    logger.warning("RepositoryError for %s %s: %s", request.method, request.url.path, str(exc))
    return JSONResponse(status_code=exc.http_status(), content=exc.to_payload())


async def timeout_error_handler(request: Request, exc: TimeoutError) -> JSONResponse:
    logger.warning("Deadline exceeded for %s %s", request.method, request.url.path)
    return JSONResponse(status_code=status.HTTP_504_GATEWAY_TIMEOUT, content=dict(TIMEOUT_PAYLOAD))


def register_exception_handlers(app) -> None:
    app.add_exception_handler(DuplicateError, duplicate_error_handler)
    app.add_exception_handler(InvalidFieldError, invalid_field_handler)
    app.add_exception_handler(NotFoundError, not_found_handler)
    app.add_exception_handler(InternalError, internal_error_handler)
    app.add_exception_handler(RepositoryError, repository_error_handler)
    app.add_exception_handler(TimeoutError, timeout_error_handler)
