"""Repository adapters.

Exports:
    UserRepository, AccountRepository, SessionRepository
"""

from storefront_auth.infrastructure.persistence.repositories.account_repository import (
    AccountRepository,
)
from storefront_auth.infrastructure.persistence.repositories.session_repository import (
    SessionRepository,
)
from storefront_auth.infrastructure.persistence.repositories.user_repository import (
    UserRepository,
)

__all__ = [
    "AccountRepository",
    "SessionRepository",
    "UserRepository",
]
