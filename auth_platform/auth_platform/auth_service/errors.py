"""
Error taxonomy for the authentication service and its mapping onto HTTP responses.

The user-facing layer (users.py) raises these exceptions without knowing
about status codes; register_exception_handlers() is the only place that
turns them into responses.
"""
import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

logger = logging.getLogger(__name__)

INTERNAL_ERROR_MESSAGE = "Internal Server Error"


class AuthServiceError(Exception):
    """Base class for errors reported to API callers."""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    message = INTERNAL_ERROR_MESSAGE

    def __init__(self, message: str = None):
        super().__init__(message or self.message)
        if message:
            self.message = message

    def to_body(self) -> dict:
        return {"success": False, "message": self.message}


class ConflictError(AuthServiceError):
    """A user with this email is already registered."""

    status_code = status.HTTP_400_BAD_REQUEST
    message = "User already exists!"


class AuthError(AuthServiceError):
    """
    Login rejected.

    Used for both an unknown email and a wrong password so callers cannot
    tell the two apart.
    """

    status_code = status.HTTP_401_UNAUTHORIZED
    message = "Invalid email or password"

    def to_body(self) -> dict:
        return {"message": self.message}


class InfrastructureError(AuthServiceError):
    """
    The credential store or another dependency failed.

    The message given here is for the server log only; callers always get
    the generic body.
    """

    def to_body(self) -> dict:
        return {"success": False, "message": INTERNAL_ERROR_MESSAGE}


class DatabaseConnectionError(Exception):
    """The document store could not be reached at startup."""


def internal_error_response() -> JSONResponse:
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"success": False, "message": INTERNAL_ERROR_MESSAGE},
    )


async def auth_service_error_handler(request: Request, exc: AuthServiceError) -> JSONResponse:
    if isinstance(exc, InfrastructureError):
        logger.error(
            "%s %s failed: %s", request.method, request.url.path, exc,
            exc_info=exc.__cause__ or exc
        )
    return JSONResponse(status_code=exc.status_code, content=exc.to_body())


async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    # Bodies are only checked for presence; anything malformed is a server error to the caller
    logger.warning("%s %s rejected malformed body: %s", request.method, request.url.path, exc.errors())
    return internal_error_response()


async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled error on %s %s", request.method, request.url.path, exc_info=exc)
    return internal_error_response()


def register_exception_handlers(app: FastAPI) -> None:
    """Install the error-to-response mapping on the application."""
    app.add_exception_handler(AuthServiceError, auth_service_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)
