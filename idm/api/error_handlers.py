# This file defines consistent API error payloads and exception handlers.
# Domain error kinds are mapped to HTTP status codes here and nowhere else.
# Malformed bodies and path parameters become 400 responses in the same envelope.
# Domain errors are logged at WARNING, or ERROR when they map to a 5xx.
# Unexpected failures are logged with their traceback and returned as a generic 500.

from __future__ import annotations

import logging
from typing import Any

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException

from idm.api.api_config import ApiConfig
from idm.api.response_envelope import build_error_envelope
from idm.common.errors import DomainError, ErrorKind

LOGGER = logging.getLogger("idm.api")

STATUS_BY_KIND: dict[ErrorKind, int] = {
    ErrorKind.VALIDATION: 400,
    ErrorKind.ALREADY_EXISTS: 400,
    ErrorKind.NOT_FOUND: 404,
    ErrorKind.INFRASTRUCTURE: 500,
}


class APIError(Exception):
    """HTTP-level error with structured API details."""

    def __init__(
        self,
        *,
        status_code: int,
        error_code: str,
        message: str,
        details: Any | None = None,
    ) -> None:
        self.status_code = status_code
        self.error_code = error_code
        self.message = message
        self.details = details
        super().__init__(message)


def status_for(exc: DomainError) -> int:
    return STATUS_BY_KIND.get(exc.kind, 500)


def _request_id(request: Request) -> str:
    return str(getattr(request.state, "request_id", "unknown"))


def _error_response(
    *,
    request: Request,
    status_code: int,
    error_code: str,
    message: str,
    details: Any | None = None,
) -> JSONResponse:
    config: ApiConfig = request.app.state.config
    body = build_error_envelope(
        api_version_path=config.api_version_path,
        schema_version=config.schema_version,
        request_id=_request_id(request),
        error_code=error_code,
        message=message,
        details=details,
    )
    return JSONResponse(status_code=status_code, content=jsonable_encoder(body))


def register_error_handlers(app: FastAPI) -> None:
    """Register global exception handlers."""

    @app.exception_handler(DomainError)
    async def domain_error_handler(request: Request, exc: DomainError) -> JSONResponse:
        status_code = status_for(exc)
        level = logging.ERROR if status_code >= 500 else logging.WARNING
        LOGGER.log(
            level,
            "%s %s failed with %s: %s",
            request.method,
            request.url.path,
            exc.kind.value,
            exc.message,
        )
        return _error_response(
            request=request,
            status_code=status_code,
            error_code=exc.kind.value,
            message=exc.message,
            details=exc.details,
        )

    @app.exception_handler(APIError)
    async def api_error_handler(request: Request, exc: APIError) -> JSONResponse:
        return _error_response(
            request=request,
            status_code=exc.status_code,
            error_code=exc.error_code,
            message=exc.message,
            details=exc.details,
        )

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
        return _error_response(
            request=request,
            status_code=400,
            error_code="REQUEST_PARSE_ERROR",
            message="Invalid request body or parameters.",
            details=exc.errors(),
        )

    @app.exception_handler(HTTPException)
    async def http_exception_handler(request: Request, exc: HTTPException) -> JSONResponse:
        return _error_response(
            request=request,
            status_code=exc.status_code,
            error_code="HTTP_ERROR",
            message=str(exc.detail),
        )

    @app.exception_handler(Exception)
    async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
        LOGGER.exception("Unhandled exception on %s %s", request.method, request.url.path, exc_info=exc)
        return _error_response(
            request=request,
            status_code=500,
            error_code="INTERNAL_SERVER_ERROR",
            message="The server encountered an unexpected error.",
        )
