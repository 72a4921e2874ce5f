"""HTTP translations for domain errors that several routes share."""

import logfire
from fastapi import FastAPI, HTTPException, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from quill.domain.error import AccountLockedError, RateLimitedError, StorageError


def too_many_requests(error: AccountLockedError | RateLimitedError) -> HTTPException:
    """429 carrying the wait time in ``Retry-After``."""
    return HTTPException(
        status_code=status.HTTP_429_TOO_MANY_REQUESTS,
        detail=str(error),
        headers={"Retry-After": str(max(error.retry_after, 1))},
    )


def storage_failure(error: StorageError, action: str) -> HTTPException:
    """Generic 500; the storage detail stays in the server log."""
    logfire.error("Storage failure", action=action, error=str(error))
    return HTTPException(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        detail="Internal server error",
    )


def add_validation_handler(app: FastAPI) -> None:
    """Report unparseable requests as 400 rather than FastAPI's 422.

    Args:
        app: FastAPI application
    """

    @app.exception_handler(RequestValidationError)
    async def _bad_request(request: Request, exc: RequestValidationError):
        logfire.info("Malformed request", path=request.url.path, errors=len(exc.errors()))
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={"detail": "Malformed request"},
        )
