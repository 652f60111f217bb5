"""User roles.

Roles travel inside access-token claims and are checked by the role gate
dependency. New registrations default to CUSTOMER.

Usage:
    from storefront_auth.domain.enums import UserRole

    if user.role == UserRole.ADMIN:
        ...
"""

from enum import Enum


class UserRole(str, Enum):
    """User roles for route authorization.

    String Enum:
        Inherits from str so values serialize directly into JWT claims
        and JSON responses.
    """

    CUSTOMER = "customer"
    STAFF = "staff"
    ADMIN = "admin"

    @classmethod
    def values(cls) -> list[str]:
        """Get all role values as strings.

        Returns:
            list[str]: ['customer', 'staff', 'admin'].
        """
        return [role.value for role in cls]

    @classmethod
    def is_valid(cls, value: str) -> bool:
        """Check if a string is a valid role."""
        return value in cls.values()
