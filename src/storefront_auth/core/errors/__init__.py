"""Core errors package.

Usage:
    from storefront_auth.core.errors import AuthError, AuthErrorException
"""

from storefront_auth.core.errors.auth_error import AuthError, AuthErrorException

__all__ = [
    "AuthError",
    "AuthErrorException",
]
