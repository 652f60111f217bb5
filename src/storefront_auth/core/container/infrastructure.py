"""Infrastructure dependency factories.

Application-scoped singletons for core infrastructure services:
- Logging (structlog console adapter)
- Password hashing (bcrypt)
- Token generation (JWT)

The singletons read the process-wide ``get_settings()`` (environment), not
the ``Settings`` passed to ``create_app``. Token lifetimes reach the refresh
cookie through ``LoginResult.refresh_ttl``, so the cookie always matches the
session the token service actually issued.

Request-scoped:
- Database (owned by the application lifespan, read from ``app.state``)
- Database session

Reference:
    See DESIGN.md (dependency injection) for the composition root layout.
"""

from functools import lru_cache
from typing import TYPE_CHECKING, AsyncGenerator

from fastapi import Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from storefront_auth.core.config import Settings, get_settings
from storefront_auth.infrastructure.persistence.database import Database

if TYPE_CHECKING:
    from storefront_auth.domain.protocols import (
        LoggerProtocol,
        PasswordHashingProtocol,
    )
    from storefront_auth.infrastructure.security import JWTService


# ============================================================================
# Application-Scoped Dependencies (Singletons)
# ============================================================================


@lru_cache()
def get_logger() -> "LoggerProtocol":
    """Return the application-scoped logger singleton.

    - development: ConsoleAdapter (human-readable)
    - testing/ci/production: ConsoleAdapter (JSON)

    Returns:
        LoggerProtocol: Logger instance implementing the protocol.
    """
    from storefront_auth.infrastructure.logging import ConsoleAdapter

    settings = get_settings()
    return ConsoleAdapter(
        use_json=not settings.is_development,
        level=settings.log_level,
    )


@lru_cache()
def get_password_service() -> "PasswordHashingProtocol":
    """Get password hashing service singleton (app-scoped).

    Returns BcryptPasswordService with the configured cost factor
    (default 10).
    """
    from storefront_auth.infrastructure.security import BcryptPasswordService

    return BcryptPasswordService(cost_factor=get_settings().bcrypt_rounds)


@lru_cache()
def get_token_service() -> "JWTService":
    """Get JWT token service singleton (app-scoped).

    Access tokens last ``access_token_expire_minutes`` (default 1 day),
    refresh tokens and sessions ``refresh_token_expire_days`` (default 7).

    Returns:
        Token service implementing TokenServiceProtocol.
    """
    from storefront_auth.infrastructure.security import JWTService

    settings = get_settings()
    return JWTService(
        secret_key=settings.jwt_secret_key,
        refresh_secret_key=settings.jwt_refresh_secret_key,
        algorithm=settings.jwt_algorithm,
        access_expire_minutes=settings.access_token_expire_minutes,
        refresh_expire_days=settings.refresh_token_expire_days,
    )


def build_database(settings: Settings | None = None) -> Database:
    """Create the Database from settings (called once by the lifespan)."""
    settings = settings or get_settings()
    return Database(
        database_url=settings.database_url,
        echo=settings.db_echo,
        pool_max=settings.db_pool_max,
        pool_min=settings.db_pool_min,
        pool_timeout=settings.db_pool_timeout_seconds,
        idle_timeout=settings.db_idle_timeout_seconds,
        connect_timeout=settings.db_connect_timeout_seconds,
        statement_timeout=settings.db_statement_timeout_seconds,
    )


# ============================================================================
# Request-Scoped Dependencies (Per-Request)
# ============================================================================


def get_app_settings(request: Request) -> Settings:
    """Settings the running application was created with."""
    app_settings: Settings = request.app.state.settings
    return app_settings


def get_database(request: Request) -> Database:
    """Get the lifespan-owned Database.

    Returns:
        Database manager stored on ``app.state.database``.
    """
    database: Database = request.app.state.database
    return database


async def get_db_session(
    database: Database = Depends(get_database),
) -> AsyncGenerator[AsyncSession, None]:
    """Get database session (request-scoped).

    Creates new session per request with automatic transaction management:
        - Commits on success
        - Rolls back on exception
        - Always closes session

    Usage:
        @router.post("/users")
        async def create_user(
            session: AsyncSession = Depends(get_db_session)
        ):
            ...
    """
    async with database.get_session() as session:
        yield session
