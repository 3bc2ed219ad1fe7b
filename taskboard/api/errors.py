"""
Exception handlers

Turn every client error into a message for the screen that started the
action. Nothing escapes as a 500. Body shape:

    {"ok": false, "error": "<message>", "error_type": "<kind>", ...}
"""
from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from ..core.exceptions import (
    AuthenticationError,
    AuthorizationError,
    BackendError,
    SessionStateError,
    TransportError,
    ValidationError,
)

import logging
logger = logging.getLogger(__name__)


def _error(status_code: int, message: str, **extra) -> JSONResponse:
    body = {"ok": False, "error": message}
    body.update(extra)
    return JSONResponse(status_code=status_code, content=body)


async def validation_error_handler(request: Request, exc: ValidationError):
    return _error(422, exc.message, error_type="validation")


async def request_validation_error_handler(request: Request, exc: RequestValidationError):
    """Malformed request body or query (missing / mistyped field)"""
    errors = exc.errors()
    message = "Invalid request"
    if errors:
        first = errors[0]
        field = ".".join(str(part) for part in first.get("loc", ()) if part != "body")
        message = f"{field}: {first.get('msg')}" if field else str(first.get("msg"))
    return _error(422, message, error_type="validation", errors=jsonable_encoder(errors))


async def authentication_error_handler(request: Request, exc: AuthenticationError):
    return _error(400, exc.message, error_type="authentication")


async def session_state_error_handler(request: Request, exc: SessionStateError):
    return _error(409, exc.message, error_type="session_state")


async def authorization_error_handler(request: Request, exc: AuthorizationError):
    response = _error(401, exc.message, error_type="authorization", redirect=exc.redirect_to)
    response.headers["Location"] = exc.redirect_to
    return response


async def backend_error_handler(request: Request, exc: BackendError):
    return _error(502, exc.user_message, error_type="backend", backend_status=exc.status_code)


async def transport_error_handler(request: Request, exc: TransportError):
    return _error(503, exc.message, error_type="transport")


def register_exception_handlers(app: FastAPI):
    app.add_exception_handler(ValidationError, validation_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_error_handler)
    app.add_exception_handler(AuthenticationError, authentication_error_handler)
    app.add_exception_handler(SessionStateError, session_state_error_handler)
    app.add_exception_handler(AuthorizationError, authorization_error_handler)
    app.add_exception_handler(BackendError, backend_error_handler)
    app.add_exception_handler(TransportError, transport_error_handler)
