"""Domain enums."""

from storefront_auth.domain.enums.account_type import AccountType
from storefront_auth.domain.enums.user_role import UserRole

__all__ = [
    "AccountType",
    "UserRole",
]
