"""Application-layer data transfer objects.

Usage:
    from storefront_auth.application.dtos import LoginResult, SessionView
"""

from storefront_auth.application.dtos.auth_dtos import (
    LoginResult,
    RefreshResult,
    RegistrationResult,
    SessionView,
)

__all__ = [
    "LoginResult",
    "RefreshResult",
    "RegistrationResult",
    "SessionView",
]
