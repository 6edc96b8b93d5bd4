"""Gestion centralisée des erreurs API.

Ce module traduit les exceptions (métier, dates invalides, validation FastAPI, routes inconnues,
erreurs inattendues) en réponses JSON au format attendu par les clients existants:
`{"error": <message>}` pour les erreurs applicatives.
"""

from __future__ import annotations

import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from horoscope_api.core.http_constants import (
    HTTP_BAD_REQUEST,
    HTTP_INTERNAL_SERVER_ERROR,
    HTTP_NOT_FOUND,
    MSG_INTERNAL_ERROR,
)
from horoscope_api.domain.dates import DateError
from horoscope_api.domain.errors import HoroscopeError

log = logging.getLogger(__name__)


def create_error_response(
    status_code: int, message: str, headers: dict[str, str] | None = None
) -> JSONResponse:
    """Create a `{"error": message}` response."""
    return JSONResponse(status_code=status_code, content={"error": message}, headers=headers)


def handle_horoscope_error(request: Request, exc: HoroscopeError) -> JSONResponse:
    """Handle business errors carrying their own status code."""
    log.warning(
        "API error occurred",
        extra={
            "error_message": exc.message,
            "status_code": exc.status_code,
            "path": request.url.path,
        },
    )
    return create_error_response(exc.status_code, exc.message)


def handle_date_error(request: Request, exc: DateError) -> JSONResponse:
    """Invalid birthdates are client errors: 400 with the parser message."""
    return create_error_response(HTTP_BAD_REQUEST, exc.message)


def handle_request_validation_error(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Map FastAPI request validation (422) to a single 400 message."""
    errors = exc.errors()
    message = errors[0].get("msg", "Invalid input") if errors else "Invalid input"
    return create_error_response(HTTP_BAD_REQUEST, message)


def handle_http_exception(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    """Handle HTTP exceptions; unknown routes get the route-not-found envelope."""
    if exc.status_code == HTTP_NOT_FOUND:
        return JSONResponse(
            status_code=HTTP_NOT_FOUND,
            content={
                "status": str(HTTP_NOT_FOUND),
                "message": f"The route {request.url.path} does not exist.",
            },
        )
    return create_error_response(
        exc.status_code, str(exc.detail), headers=getattr(exc, "headers", None)
    )


def handle_generic_exception(request: Request, exc: Exception) -> JSONResponse:
    """Handle unexpected exceptions without leaking internals."""
    log.error(
        "Unexpected error occurred",
        extra={
            "path": request.url.path,
            "exception_type": type(exc).__name__,
        },
        exc_info=exc,
    )
    return JSONResponse(
        status_code=HTTP_INTERNAL_SERVER_ERROR,
        content={"error": "InternalServerError", "message": MSG_INTERNAL_ERROR},
    )


def register_error_handlers(app: FastAPI) -> None:
    """Attach every handler of this module to the application."""
    app.add_exception_handler(HoroscopeError, handle_horoscope_error)
    app.add_exception_handler(DateError, handle_date_error)
    app.add_exception_handler(RequestValidationError, handle_request_validation_error)
    app.add_exception_handler(StarletteHTTPException, handle_http_exception)
    app.add_exception_handler(Exception, handle_generic_exception)
