"""Domain protocols (ports).

Application handlers depend on these; infrastructure adapters satisfy them
structurally (no inheritance).
"""

from storefront_auth.domain.protocols.account_repository import (
    AccountRepository,
    AccountWithUser,
)
from storefront_auth.domain.protocols.logger_protocol import LoggerProtocol
from storefront_auth.domain.protocols.password_hashing_protocol import (
    PasswordHashingProtocol,
)
from storefront_auth.domain.protocols.session_repository import (
    SessionRepository,
    SessionWithOwner,
)
from storefront_auth.domain.protocols.token_service_protocol import (
    TokenServiceProtocol,
)
from storefront_auth.domain.protocols.user_repository import UserRepository

__all__ = [
    "AccountRepository",
    "AccountWithUser",
    "LoggerProtocol",
    "PasswordHashingProtocol",
    "SessionRepository",
    "SessionWithOwner",
    "TokenServiceProtocol",
    "UserRepository",
]
