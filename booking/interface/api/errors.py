"""Mapping of domain errors to HTTP responses."""

import logfire
from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

from booking.adapter.error import AdapterError
from booking.domain.error import (
    DomainError,
    NotEligibleError,
    NotFoundError,
    PermissionDeniedError,
    RemoteWriteError,
    StaleWriteError,
    ValidationError,
)
from booking.interface.error import AuthenticationError
from booking.util.jwt import JWTError


def _error(status_code: int, code: str, detail: str, **extra) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={"detail": detail, "code": code, **extra},
    )


async def handle_not_eligible(request: Request, exc: NotEligibleError) -> JSONResponse:
    return _error(
        status.HTTP_409_CONFLICT,
        exc.reason.value,
        str(exc),
        event_id=exc.event_id,
        mentor_id=exc.mentor_id,
    )


async def handle_permission_denied(
    request: Request, exc: PermissionDeniedError
) -> JSONResponse:
    return _error(
        status.HTTP_403_FORBIDDEN,
        "not-authorized",
        str(exc),
        capability=exc.capability,
    )


async def handle_not_found(request: Request, exc: NotFoundError) -> JSONResponse:
    return _error(status.HTTP_404_NOT_FOUND, "not-found", str(exc))


async def handle_stale_write(request: Request, exc: StaleWriteError) -> JSONResponse:
    return _error(
        status.HTTP_409_CONFLICT,
        "stale-write",
        str(exc),
        event_id=exc.event_id,
    )


async def handle_remote_write(
    request: Request, exc: RemoteWriteError
) -> JSONResponse:
    return _error(status.HTTP_503_SERVICE_UNAVAILABLE, "remote-write-failed", str(exc))


async def handle_validation(request: Request, exc: ValidationError) -> JSONResponse:
    return _error(status.HTTP_422_UNPROCESSABLE_ENTITY, "invalid", str(exc))


async def handle_domain_error(request: Request, exc: DomainError) -> JSONResponse:
    return _error(status.HTTP_400_BAD_REQUEST, "rejected", str(exc))


async def handle_unauthenticated(request: Request, exc: Exception) -> JSONResponse:
    return JSONResponse(
        status_code=status.HTTP_401_UNAUTHORIZED,
        content={"detail": str(exc), "code": "unauthenticated"},
        headers={"WWW-Authenticate": "Bearer"},
    )


async def handle_adapter_error(request: Request, exc: AdapterError) -> JSONResponse:
    logfire.error("Adapter failure", path=request.url.path, error=str(exc))
    return _error(status.HTTP_503_SERVICE_UNAVAILABLE, "unavailable", str(exc))


def register_error_handlers(app: FastAPI) -> None:
    """Install handlers; the most specific class wins."""
    app.add_exception_handler(NotEligibleError, handle_not_eligible)
    app.add_exception_handler(PermissionDeniedError, handle_permission_denied)
    app.add_exception_handler(NotFoundError, handle_not_found)
    app.add_exception_handler(StaleWriteError, handle_stale_write)
    app.add_exception_handler(RemoteWriteError, handle_remote_write)
    app.add_exception_handler(ValidationError, handle_validation)
    app.add_exception_handler(DomainError, handle_domain_error)
    app.add_exception_handler(JWTError, handle_unauthenticated)
    app.add_exception_handler(AuthenticationError, handle_unauthenticated)
    app.add_exception_handler(AdapterError, handle_adapter_error)
