"""
Exception handlers that turn failures into the API's coarse error categories.

Full details are logged server-side; clients only ever see a short,
generic message and the status code.
"""

import logging
from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import IntegrityError, OperationalError, SQLAlchemyError, DisconnectionError, TimeoutError as PoolTimeoutError
from homepa.core.security import clear_session_cookie

logger = logging.getLogger(__name__)

CONFLICT_MESSAGE = "The resource already exists"
UNAVAILABLE_MESSAGE = "Database connection error. Please try again later."
INTERNAL_MESSAGE = "Server error. Please try again later."


class AuthenticationError(Exception):
    """Raised by the auth gate; handled as a 401."""

    def __init__(self, message: str, clear_cookie: bool = False):
        super().__init__(message)
        self.message = message
        self.clear_cookie = clear_cookie


def _format_validation_error(error: dict) -> str:
    # Drop the "body" prefix FastAPI puts on request body locations
    location = [str(part) for part in error.get("loc", ()) if part != "body"]
    message = error.get("msg", "Invalid value")
    # Custom validators surface as "Value error, <message>"
    if message.startswith("Value error, "):
        message = message[len("Value error, "):]
    if location:
        return f"{'.'.join(location)}: {message}"
    return message


async def validation_exception_handler(request: Request, exc: RequestValidationError):
    messages = [_format_validation_error(error) for error in exc.errors()]
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"detail": ", ".join(messages) or "Invalid request"},
    )


async def authentication_exception_handler(request: Request, exc: AuthenticationError):
    response = JSONResponse(
        status_code=status.HTTP_401_UNAUTHORIZED,
        content={"detail": exc.message},
    )
    if exc.clear_cookie:
        clear_session_cookie(response)
    return response


async def integrity_exception_handler(request: Request, exc: IntegrityError):
    logger.warning(f"Integrity error on {request.method} {request.url.path}: {exc.orig}")
    return JSONResponse(status_code=status.HTTP_409_CONFLICT, content={"detail": CONFLICT_MESSAGE})


async def database_exception_handler(request: Request, exc: SQLAlchemyError):
    logger.error(f"Database error on {request.method} {request.url.path}", exc_info=exc)
    if isinstance(exc, (OperationalError, DisconnectionError, PoolTimeoutError)):
        return JSONResponse(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            content={"detail": UNAVAILABLE_MESSAGE},
        )
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"detail": INTERNAL_MESSAGE},
    )


async def unhandled_exception_handler(request: Request, exc: Exception):
    logger.error(f"Unhandled error on {request.method} {request.url.path}", exc_info=exc)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"detail": INTERNAL_MESSAGE},
    )


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(AuthenticationError, authentication_exception_handler)
    # Starlette picks the handler closest to the exception in its MRO
    app.add_exception_handler(IntegrityError, integrity_exception_handler)
    app.add_exception_handler(SQLAlchemyError, database_exception_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)
