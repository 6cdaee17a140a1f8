"""Map client errors to HTTP responses."""
from fastapi import Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from eventhub.errors import (
    ERROR_INVALID_REQUEST,
    CheckoutInProgress,
    EmptyCart,
    EventHubError,
    OrderCreateFailed,
    OrderItemsCreateFailed,
    PermissionDenied,
    ProfileNotFound,
    RemoteOperationFailed,
    Unauthenticated,
    ValidationFailed,
)
from eventhub.logging import get_logger

logger = get_logger(__name__)

STATUS_CODES: dict[type[EventHubError], int] = {
    Unauthenticated: 401,
    PermissionDenied: 403,
    ProfileNotFound: 404,
    EmptyCart: 400,
    ValidationFailed: 400,
    CheckoutInProgress: 409,
    OrderCreateFailed: 502,
    OrderItemsCreateFailed: 502,
    RemoteOperationFailed: 502,
}


def status_code_for(error: EventHubError) -> int:
    for error_type in type(error).__mro__:
        if error_type in STATUS_CODES:
            return STATUS_CODES[error_type]
    return 400


async def eventhub_error_handler(request: Request, exc: EventHubError) -> JSONResponse:
    status_code = status_code_for(exc)
    if status_code >= 500:
        logger.error(f"{request.method} {request.url.path} failed: {type(exc).__name__}: {exc.message}")
    return JSONResponse(
        status_code=status_code,
        content={"detail": exc.message, "error": type(exc).__name__},
    )


def _validation_message(exc: RequestValidationError) -> str:
    """First human-readable reason, without pydantic's "Value error, " prefix."""
    for error in exc.errors():
        message = str(error.get("msg") or "")
        if message.startswith("Value error, "):
            message = message[len("Value error, "):]
        location = [str(part) for part in error.get("loc", ()) if part != "body"]
        if message and location and error.get("type") != "value_error":
            return f"{'.'.join(location)}: {message}"
        if message:
            return message
    return ERROR_INVALID_REQUEST


async def request_validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Rejected request bodies (sign-up form, event form, cart quantities) become ValidationFailed."""
    return await eventhub_error_handler(request, ValidationFailed(_validation_message(exc)))
