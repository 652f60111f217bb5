"""Domain entities."""

from storefront_auth.domain.entities.account import Account
from storefront_auth.domain.entities.session import Session
from storefront_auth.domain.entities.user import User

__all__ = [
    "Account",
    "Session",
    "User",
]
