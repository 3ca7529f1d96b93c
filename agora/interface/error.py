"""Interface layer errors and their HTTP mapping."""

import logfire
from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

from agora.domain.error import (
    ConcurrencyConflictError,
    DomainError,
    NotFoundError,
    PersistenceFailureError,
    ValidationError,
)


class InterfaceError(Exception):
    """Base interface error."""

    pass


class AuthenticationRequiredError(InterfaceError):
    """Raised when a request that needs a voter carries no identity."""

    pass


# Most specific first
_STATUS_BY_ERROR: list[tuple[type[Exception], int]] = [
    (ValidationError, status.HTTP_400_BAD_REQUEST),
    (NotFoundError, status.HTTP_404_NOT_FOUND),
    (ConcurrencyConflictError, status.HTTP_409_CONFLICT),
    (PersistenceFailureError, status.HTTP_503_SERVICE_UNAVAILABLE),
    (AuthenticationRequiredError, status.HTTP_401_UNAUTHORIZED),
]


def status_for(error: Exception) -> int:
    """HTTP status code for a domain or interface error."""
    for error_type, status_code in _STATUS_BY_ERROR:
        if isinstance(error, error_type):
            return status_code
    return status.HTTP_500_INTERNAL_SERVER_ERROR


async def handle_error(request: Request, exc: Exception) -> JSONResponse:
    """Render an error as {"detail": message}."""
    status_code = status_for(exc)
    if status_code >= 500:
        logfire.error(
            "Request failed",
            path=request.url.path,
            error_type=type(exc).__name__,
            error=str(exc),
        )
    else:
        logfire.warn(
            "Request rejected",
            path=request.url.path,
            error_type=type(exc).__name__,
            error=str(exc),
            status_code=status_code,
        )
    return JSONResponse(status_code=status_code, content={"detail": str(exc)})


def register_error_handlers(app: FastAPI) -> None:
    """Map domain and interface errors onto HTTP responses."""
    app.add_exception_handler(DomainError, handle_error)
    app.add_exception_handler(InterfaceError, handle_error)
