"""Bcrypt password hashing service (adapter).

Implements PasswordHashingProtocol with bcrypt.

Security:
    - Cost factor from settings (default 10, ~60ms per hash)
    - Random salt per hash
    - Constant-time comparison via bcrypt.checkpw
    - Passwords are truncated to bcrypt's 72-byte input limit
"""

import secrets

import bcrypt

# bcrypt ignores input past 72 bytes; bcrypt>=5 raises instead of truncating
_MAX_PASSWORD_BYTES = 72


def _encode(password: str) -> bytes:
    return password.encode("utf-8")[:_MAX_PASSWORD_BYTES]


class BcryptPasswordService:
    """Bcrypt password hashing service.

    Usage:
        from storefront_auth.core.container import get_password_service

        password_service = get_password_service()
        password_hash = password_service.hash_password("Secret123")
        password_service.verify_password("Secret123", password_hash)  # True
    """

    def __init__(self, cost_factor: int = 10) -> None:
        """Initialize bcrypt password service.

        Args:
            cost_factor: Bcrypt cost factor (log2 rounds). bcrypt accepts 4-31;
                values below 10 are only suitable for tests.

        Raises:
            ValueError: If cost_factor is outside 4-31.
        """
        if not 4 <= cost_factor <= 31:
            msg = "Cost factor must be between 4 and 31"
            raise ValueError(msg)
        self._cost_factor = cost_factor
        # Hash of an unguessable value, used to burn equal time for unknown accounts
        self._dummy_hash = bcrypt.hashpw(
            secrets.token_hex(16).encode("utf-8"),
            bcrypt.gensalt(rounds=cost_factor),
        )

    def hash_password(self, password: str) -> str:
        """Hash a plaintext password using bcrypt.

        Args:
            password: Plaintext password to hash.

        Returns:
            Hashed password string (bcrypt format: $2b$10$...).
        """
        salt = bcrypt.gensalt(rounds=self._cost_factor)
        password_hash = bcrypt.hashpw(_encode(password), salt)
        return password_hash.decode("utf-8")

    def verify_password(self, password: str, password_hash: str) -> bool:
        """Verify a plaintext password against a bcrypt hash.

        Returns:
            True if password matches hash, False otherwise. Malformed
            hashes return False instead of raising.
        """
        try:
            return bcrypt.checkpw(_encode(password), password_hash.encode("utf-8"))
        except (ValueError, AttributeError):
            return False

    def verify_dummy(self, password: str) -> None:
        """Run one verification against a throwaway hash; result ignored."""
        bcrypt.checkpw(_encode(password), self._dummy_hash)
