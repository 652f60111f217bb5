"""Core enums package.

Usage:
    from storefront_auth.core.enums import Environment, ErrorKind
"""

from storefront_auth.core.enums.environment import Environment
from storefront_auth.core.enums.error_kind import ErrorKind

__all__ = [
    "Environment",
    "ErrorKind",
]
