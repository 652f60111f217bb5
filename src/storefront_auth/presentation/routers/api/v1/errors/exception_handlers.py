"""Global exception handlers for FastAPI application.

The single place where raw framework, driver and library exceptions are
converted into the error envelope. Nothing below this layer sends a raw
driver error to a client.

Handlers:
    auth_error_handler: AuthErrorException raised by dependencies
    validation_exception_handler: RequestValidationError -> 400
    integrity_error_handler: duplicate keys -> 409
    db_timeout_handler: pool/statement timeout -> 408
    database_error_handler: other SQLAlchemy errors -> 500
    jwt_error_handler: stray PyJWT errors -> 401
    http_exception_handler: Starlette HTTPException (unmatched routes -> 404)
    generic_exception_handler: everything else -> 500

Exports:
    register_exception_handlers: Register all exception handlers with FastAPI app
"""

import traceback

import jwt
from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.exc import TimeoutError as SQLAlchemyTimeoutError
from starlette.exceptions import HTTPException as StarletteHTTPException

from storefront_auth.core.config import Settings, get_settings
from storefront_auth.core.container import get_logger
from storefront_auth.core.enums import ErrorKind
from storefront_auth.core.errors import AuthErrorException
from storefront_auth.presentation.routers.api.v1.errors.error_response_builder import (
    ErrorResponseBuilder,
)

_GENERIC_MESSAGE = "An unexpected error occurred"

# Status -> wire code for HTTPExceptions raised by the framework itself
_HTTP_STATUS_CODES: dict[int, str] = {
    400: ErrorKind.VALIDATION.value,
    401: ErrorKind.TOKEN_INVALID.value,
    403: ErrorKind.FORBIDDEN.value,
    404: ErrorKind.NOT_FOUND.value,
    405: "METHOD_NOT_ALLOWED",
    408: ErrorKind.TIMEOUT.value,
    409: ErrorKind.CONFLICT.value,
    422: ErrorKind.UNPROCESSABLE.value,
    502: ErrorKind.GATEWAY.value,
}


def _settings(request: Request) -> Settings:
    app_settings: Settings | None = getattr(request.app.state, "settings", None)
    return app_settings or get_settings()


async def auth_error_handler(request: Request, exc: Exception) -> JSONResponse:
    """Unwrap AuthErrorException into the envelope for its kind."""
    assert isinstance(exc, AuthErrorException)
    return ErrorResponseBuilder.from_auth_error(exc.error, request)


async def validation_exception_handler(
    request: Request,
    exc: Exception,
) -> JSONResponse:
    """Convert RequestValidationError to a 400 with one message per field.

    Example:
        >>> # POST /auth/login with body "not json"
        >>> # {"success": false, "error": {"code": "VALIDATION_ERROR",
        >>> #   "details": {"body": "JSON decode error"}, ...}}
    """
    assert isinstance(exc, RequestValidationError)

    details: dict[str, str] = {}
    for error in exc.errors():
        # ["body", "email"] -> "email"
        loc = error.get("loc", [])
        field_parts = [str(p) for p in loc if p != "body"]
        field_name = ".".join(field_parts) if field_parts else "body"
        details.setdefault(field_name, error.get("msg", "Invalid value"))

    return ErrorResponseBuilder.build(
        request,
        status_code=status.HTTP_400_BAD_REQUEST,
        code=ErrorKind.VALIDATION.value,
        message="Validation failed",
        details=details,
    )


async def integrity_error_handler(request: Request, exc: Exception) -> JSONResponse:
    """Duplicate-key (and other constraint) violations become 409."""
    get_logger().warning(
        "integrity_error",
        path=request.url.path,
        error_type=type(exc).__name__,
    )
    return ErrorResponseBuilder.build(
        request,
        status_code=status.HTTP_409_CONFLICT,
        code=ErrorKind.CONFLICT.value,
        message="Duplicate entry",
    )


async def db_timeout_handler(request: Request, exc: Exception) -> JSONResponse:
    """No pooled connection became free in time."""
    get_logger().error("database_timeout", error=exc, path=request.url.path)
    return ErrorResponseBuilder.build(
        request,
        status_code=status.HTTP_408_REQUEST_TIMEOUT,
        code=ErrorKind.TIMEOUT.value,
        message="Request timed out",
    )


async def database_error_handler(request: Request, exc: Exception) -> JSONResponse:
    get_logger().error("database_error", error=exc, path=request.url.path)
    return ErrorResponseBuilder.build(
        request,
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        code=ErrorKind.DATABASE.value,
        message="Database error",
    )


async def jwt_error_handler(request: Request, exc: Exception) -> JSONResponse:
    """PyJWT exceptions that escaped the token service."""
    if isinstance(exc, jwt.ExpiredSignatureError):
        kind, message = ErrorKind.TOKEN_EXPIRED, "Access token has expired"
    else:
        kind, message = ErrorKind.TOKEN_INVALID, "Access token is invalid"
    return ErrorResponseBuilder.build(
        request,
        status_code=status.HTTP_401_UNAUTHORIZED,
        code=kind.value,
        message=message,
    )


async def http_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Convert HTTPException (from routing or dependencies) to the envelope.

    Unmatched routes are reported as ``Route not found: METHOD /path``,
    distinct from a handler-level NOT_FOUND.
    """
    assert isinstance(exc, StarletteHTTPException)

    if exc.status_code == status.HTTP_404_NOT_FOUND:
        message = f"Route not found: {request.method} {request.url.path}"
    else:
        message = exc.detail if isinstance(exc.detail, str) else str(exc.detail)

    code = _HTTP_STATUS_CODES.get(
        exc.status_code,
        ErrorKind.INTERNAL.value if exc.status_code >= 500 else f"HTTP_{exc.status_code}",
    )
    response = ErrorResponseBuilder.build(
        request,
        status_code=exc.status_code,
        code=code,
        message=message,
    )
    # Preserve headers such as Allow / WWW-Authenticate
    for key, value in (getattr(exc, "headers", None) or {}).items():
        response.headers[key] = value
    return response


async def generic_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Handle unexpected Python exceptions.

    Production responses carry a generic message only; elsewhere the
    exception message and stack are included in ``details``.
    """
    get_logger().error(
        "unhandled_exception",
        error=exc,
        path=request.url.path,
        method=request.method,
    )

    if _settings(request).is_production:
        return ErrorResponseBuilder.build(
            request,
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            code=ErrorKind.INTERNAL.value,
            message=_GENERIC_MESSAGE,
        )

    return ErrorResponseBuilder.build(
        request,
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        code=ErrorKind.INTERNAL.value,
        message=str(exc) or _GENERIC_MESSAGE,
        details={
            "exception": type(exc).__name__,
            "stack": traceback.format_exception(exc),
        },
    )


def register_exception_handlers(app: FastAPI) -> None:
    """Register all exception handlers with FastAPI application.

    Starlette picks the handler registered for the closest class in the
    exception's MRO, so the SQLAlchemy timeout and integrity handlers win
    over the generic database handler.

    Example:
        >>> app = FastAPI()
        >>> register_exception_handlers(app)
    """
    app.add_exception_handler(AuthErrorException, auth_error_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(IntegrityError, integrity_error_handler)
    app.add_exception_handler(SQLAlchemyTimeoutError, db_timeout_handler)
    app.add_exception_handler(SQLAlchemyError, database_error_handler)
    app.add_exception_handler(jwt.InvalidTokenError, jwt_error_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(Exception, generic_exception_handler)
