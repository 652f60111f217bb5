"""Password hashing protocol for the domain layer.

Infrastructure provides the concrete implementation (bcrypt). The hash is
treated as opaque: callers only hash and verify.
"""

from typing import Protocol


class PasswordHashingProtocol(Protocol):
    """Password hashing and verification interface.

    Usage:
        def __init__(self, password_service: PasswordHashingProtocol):
            self._password_service = password_service

        password_hash = self._password_service.hash_password("Secret123")
        ok = self._password_service.verify_password("Secret123", password_hash)
    """

    def hash_password(self, password: str) -> str:
        """Hash a plaintext password (salted, one-way)."""
        ...

    def verify_password(self, password: str, password_hash: str) -> bool:
        """Verify a plaintext password against a hash.

        Returns:
            True if password matches hash, False otherwise (including
            malformed hashes).
        """
        ...

    def verify_dummy(self, password: str) -> None:
        """Spend the same effort as a real verification and discard it.

        Used when no account matches, so an unknown identifier and a wrong
        password take the same time.
        """
        ...
