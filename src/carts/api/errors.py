"""Translate domain and validation failures into the API's error envelope.

Every error body carries ``timestamp``, ``status``, ``error``, ``message``
and ``path``; validation failures add ``validationErrors`` (field -> message).
Unexpected failures never echo their message back to the caller.
"""

from datetime import UTC, datetime

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from protean.exceptions import ObjectNotFoundError, ValidationError

from carts.api.schemas import ErrorResponse
from carts.utils.logging import get_logger

logger = get_logger(__name__)

_REASONS = {
    400: "Bad Request",
    404: "Not Found",
    500: "Internal Server Error",
}


def error_response(request: Request, status: int, message: str, validation_errors=None) -> JSONResponse:
    body = ErrorResponse(
        timestamp=datetime.now(UTC),
        status=status,
        error=_REASONS[status],
        message=message,
        path=request.url.path,
        validation_errors=validation_errors,
    )
    return JSONResponse(
        status_code=status,
        content=body.model_dump(mode="json", by_alias=True, exclude_none=True),
    )


def _first_message(messages) -> str:
    """Pick a readable message out of a protean ``messages`` mapping."""
    if isinstance(messages, dict):
        for value in messages.values():
            return _first_message(value)
        return ""
    if isinstance(messages, list | tuple):
        return "; ".join(str(m) for m in messages)
    return str(messages)


def _field_errors(messages) -> dict[str, str]:
    return {str(field): _first_message(value) for field, value in dict(messages).items()}


def _request_field_errors(exc: RequestValidationError) -> dict[str, str]:
    errors = {}
    for error in exc.errors():
        loc = [str(part) for part in error.get("loc", ())]
        field = ".".join(loc[1:]) if len(loc) > 1 else ".".join(loc) or "body"
        errors.setdefault(field, error.get("msg", "Invalid value"))
    return errors


async def handle_not_found(request: Request, exc: ObjectNotFoundError) -> JSONResponse:
    # protean raises its own ObjectNotFoundError with the message as the only argument
    message = _first_message(getattr(exc, "messages", None) or (exc.args[0] if exc.args else str(exc)))
    logger.warning("not_found", path=request.url.path, detail=message)
    return error_response(request, 404, message)


async def handle_domain_validation(request: Request, exc: ValidationError) -> JSONResponse:
    errors = _field_errors(exc.messages)
    logger.warning("validation_failed", path=request.url.path, errors=errors)
    return error_response(request, 400, "Validation failed", errors)


async def handle_request_validation(request: Request, exc: RequestValidationError) -> JSONResponse:
    errors = _request_field_errors(exc)
    logger.warning("validation_failed", path=request.url.path, errors=errors)
    return error_response(request, 400, "Validation failed", errors)


async def handle_unexpected(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("unexpected_error", path=request.url.path, error_type=type(exc).__name__)
    return error_response(request, 500, "An unexpected error occurred")


def register_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(ObjectNotFoundError, handle_not_found)
    app.add_exception_handler(ValidationError, handle_domain_validation)
    app.add_exception_handler(RequestValidationError, handle_request_validation)
    app.add_exception_handler(Exception, handle_unexpected)
