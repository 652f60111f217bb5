"""Database models.

Importing this package registers every table on BaseModel.metadata.
"""

from storefront_auth.infrastructure.persistence.models.account import AccountModel
from storefront_auth.infrastructure.persistence.models.session import SessionModel
from storefront_auth.infrastructure.persistence.models.user import UserModel

__all__ = [
    "AccountModel",
    "SessionModel",
    "UserModel",
]
