"""Error response builder.

Converts AuthError values (and raw codes from the exception handlers) into
the JSON error envelope. This is the only place an ErrorKind is mapped to
an HTTP status.

Exports:
    ErrorResponseBuilder: Utility class for building error responses
"""

from datetime import UTC, datetime
from typing import Any

from fastapi import Request, status
from fastapi.responses import JSONResponse

from storefront_auth.core.enums import ErrorKind
from storefront_auth.core.errors import AuthError
from storefront_auth.presentation.routers.api.middleware.request_id_middleware import (
    REQUEST_ID_HEADER,
    get_request_id,
)
from storefront_auth.presentation.routers.api.v1.errors.error_envelope import (
    ErrorBody,
    ErrorEnvelope,
)


class ErrorResponseBuilder:
    """Build error envelope responses.

    Example:
        >>> error = AuthError(
        ...     kind=ErrorKind.NOT_FOUND,
        ...     message="Session not found",
        ... )
        >>> response = ErrorResponseBuilder.from_auth_error(error, request)
        >>> # Returns 404 with code NOT_FOUND
    """

    @staticmethod
    def from_auth_error(error: AuthError, request: Request) -> JSONResponse:
        """Convert AuthError to a JSON error response.

        Args:
            error: Tagged error from a handler or dependency.
            request: FastAPI Request object (for path and request id).

        Returns:
            JSONResponse with the status mapped from ``error.kind``.
        """
        return ErrorResponseBuilder.build(
            request,
            status_code=ErrorResponseBuilder.status_for(error.kind),
            code=error.wire_code,
            message=error.message,
            details=error.details,
        )

    @staticmethod
    def build(
        request: Request,
        *,
        status_code: int,
        code: str,
        message: str,
        details: dict[str, Any] | None = None,
    ) -> JSONResponse:
        """Build an error envelope response from raw parts."""
        request_id = getattr(request.state, "request_id", None) or get_request_id()
        envelope = ErrorEnvelope(
            error=ErrorBody(
                code=code,
                message=message,
                details=details,
                timestamp=datetime.now(UTC).isoformat(),
                path=request.url.path,
                request_id=request_id,
            )
        )
        headers = {REQUEST_ID_HEADER: request_id} if request_id else None
        return JSONResponse(
            status_code=status_code,
            content=envelope.model_dump(by_alias=True),
            headers=headers,
        )

    @staticmethod
    def status_for(kind: ErrorKind) -> int:
        """Map error kind to HTTP status code.

        Example:
            >>> ErrorResponseBuilder.status_for(ErrorKind.TOKEN_EXPIRED)
            401
        """
        match kind:
            case ErrorKind.VALIDATION:
                return status.HTTP_400_BAD_REQUEST
            case (
                ErrorKind.ACCOUNT_NOT_FOUND
                | ErrorKind.CREDENTIALS_INVALID
                | ErrorKind.ACCOUNT_LOCKED
                | ErrorKind.TOKEN_MISSING
                | ErrorKind.TOKEN_INVALID
                | ErrorKind.TOKEN_EXPIRED
                | ErrorKind.REFRESH_TOKEN_INVALID
            ):
                return status.HTTP_401_UNAUTHORIZED
            case ErrorKind.FORBIDDEN:
                return status.HTTP_403_FORBIDDEN
            case ErrorKind.NOT_FOUND:
                return status.HTTP_404_NOT_FOUND
            case ErrorKind.TIMEOUT:
                return status.HTTP_408_REQUEST_TIMEOUT
            case ErrorKind.CONFLICT:
                return status.HTTP_409_CONFLICT
            case ErrorKind.UNPROCESSABLE:
                return status.HTTP_422_UNPROCESSABLE_ENTITY
            case ErrorKind.DATABASE | ErrorKind.INTERNAL:
                return status.HTTP_500_INTERNAL_SERVER_ERROR
            case ErrorKind.GATEWAY:
                return status.HTTP_502_BAD_GATEWAY
