"""Security adapters (password hashing, JWT)."""

from storefront_auth.infrastructure.security.bcrypt_password_service import (
    BcryptPasswordService,
)
from storefront_auth.infrastructure.security.jwt_service import JWTService

__all__ = [
    "BcryptPasswordService",
    "JWTService",
]
