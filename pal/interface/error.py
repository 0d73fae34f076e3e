"""Interface layer errors.

Maps domain and adapter errors onto HTTP responses.
"""

import logfire
from fastapi import FastAPI, HTTPException, Request, status
from fastapi.responses import JSONResponse

from pal.adapter.error import UpstreamUnavailableError
from pal.domain.error import (
    DomainError,
    DuplicateCoupleLinkError,
    DuplicateProposalError,
    InvalidProposedTimeError,
    InvalidTransitionError,
    NothingToUndoError,
    NotAuthorizedError,
    NotFoundError,
    PremiumRequiredError,
    QuotaExhaustedError,
    ValidationError,
)
from pal.util.error import NotAuthenticatedError

# Checked in order; subclasses before their bases
DOMAIN_ERROR_STATUS: list[tuple[type[DomainError], int]] = [
    (NotFoundError, status.HTTP_404_NOT_FOUND),
    (NotAuthorizedError, status.HTTP_403_FORBIDDEN),
    (DuplicateProposalError, status.HTTP_409_CONFLICT),
    (DuplicateCoupleLinkError, status.HTTP_409_CONFLICT),
    (InvalidTransitionError, status.HTTP_409_CONFLICT),
    (NothingToUndoError, status.HTTP_409_CONFLICT),
    (QuotaExhaustedError, status.HTTP_429_TOO_MANY_REQUESTS),
    (PremiumRequiredError, status.HTTP_402_PAYMENT_REQUIRED),
    (InvalidProposedTimeError, status.HTTP_422_UNPROCESSABLE_ENTITY),
    (ValidationError, status.HTTP_422_UNPROCESSABLE_ENTITY),
]


def status_for(error: DomainError) -> int:
    for error_type, code in DOMAIN_ERROR_STATUS:
        if isinstance(error, error_type):
            return code
    return status.HTTP_400_BAD_REQUEST


def to_http_exception(error: DomainError) -> HTTPException:
    """Convert a domain error raised by a use case into an HTTPException."""
    code = status_for(error)
    logfire.warn(
        "Domain error",
        error=str(error),
        error_type=type(error).__name__,
        status_code=code,
    )
    return HTTPException(status_code=code, detail=str(error))


async def _not_authenticated_handler(
    request: Request, exc: NotAuthenticatedError
) -> JSONResponse:
    return JSONResponse(
        status_code=status.HTTP_401_UNAUTHORIZED,
        content={"detail": str(exc) or "Authentication required"},
    )


async def _upstream_unavailable_handler(
    request: Request, exc: UpstreamUnavailableError
) -> JSONResponse:
    logfire.error("Upstream unavailable", error=str(exc), path=request.url.path)
    return JSONResponse(
        status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
        content={"detail": "Service temporarily unavailable"},
    )


async def _domain_error_handler(request: Request, exc: DomainError) -> JSONResponse:
    error = to_http_exception(exc)
    return JSONResponse(status_code=error.status_code, content={"detail": error.detail})


def register_error_handlers(app: FastAPI) -> None:
    """Install handlers for errors raised outside route bodies.

    Session resolution happens during dependency injection, before a route
    can catch anything, so authentication failures are handled here.
    """
    app.add_exception_handler(NotAuthenticatedError, _not_authenticated_handler)
    app.add_exception_handler(UpstreamUnavailableError, _upstream_unavailable_handler)
    app.add_exception_handler(DomainError, _domain_error_handler)
