"""Error kinds (the tag of the tagged error type).

Every expected failure in the service carries exactly one ErrorKind. The
kind decides the stable machine-readable wire code; the HTTP status is
resolved at the presentation boundary.

Categories:
- Input: VALIDATION
- Authentication: ACCOUNT_NOT_FOUND, CREDENTIALS_INVALID, ACCOUNT_LOCKED,
  TOKEN_MISSING, TOKEN_INVALID, TOKEN_EXPIRED, REFRESH_TOKEN_INVALID
- Authorization: FORBIDDEN
- Resources: NOT_FOUND, CONFLICT, UNPROCESSABLE
- Infrastructure: DATABASE, INTERNAL, GATEWAY, TIMEOUT
"""

from enum import Enum


class ErrorKind(Enum):
    """Tag for AuthError. Values are the default wire codes."""

    # Input
    VALIDATION = "VALIDATION_ERROR"

    # Authentication
    ACCOUNT_NOT_FOUND = "AUTH_ACCOUNT_NOT_FOUND"
    CREDENTIALS_INVALID = "AUTH_CREDENTIALS_INVALID"
    ACCOUNT_LOCKED = "AUTH_ACCOUNT_LOCKED"
    TOKEN_MISSING = "TOKEN_MISSING"
    TOKEN_INVALID = "TOKEN_INVALID"
    TOKEN_EXPIRED = "TOKEN_EXPIRED"
    REFRESH_TOKEN_INVALID = "REFRESH_TOKEN_INVALID"

    # Authorization
    FORBIDDEN = "FORBIDDEN"

    # Resources
    NOT_FOUND = "NOT_FOUND"
    CONFLICT = "DUPLICATE_ENTRY"
    UNPROCESSABLE = "UNPROCESSABLE_STATE"

    # Infrastructure
    DATABASE = "DATABASE_ERROR"
    INTERNAL = "INTERNAL_SERVER_ERROR"
    GATEWAY = "GATEWAY_ERROR"
    TIMEOUT = "REQUEST_TIMEOUT"
