"""Repository dependency factories.

Request-scoped repository instances. All repositories resolved for one
request share the same database session.
"""

from typing import TYPE_CHECKING

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from storefront_auth.core.container.infrastructure import get_db_session

if TYPE_CHECKING:
    from storefront_auth.infrastructure.persistence.repositories import (
        AccountRepository,
        SessionRepository,
        UserRepository,
    )


# ============================================================================
# Repository Factories (Request-Scoped)
# ============================================================================


async def get_user_repository(
    session: AsyncSession = Depends(get_db_session),
) -> "UserRepository":
    """Get user repository (request-scoped).

    Args:
        session: Database session for request duration.
            Injected via Depends(get_db_session).

    Usage:
        from storefront_auth.infrastructure.persistence.repositories import (
            UserRepository,
        )

        @router.get("/me")
        async def me(
            user_repo: UserRepository = Depends(get_user_repository),
        ):
            ...
    """
    from storefront_auth.infrastructure.persistence.repositories import (
        UserRepository,
    )

    return UserRepository(session=session)


async def get_account_repository(
    session: AsyncSession = Depends(get_db_session),
) -> "AccountRepository":
    """Get account repository (request-scoped)."""
    from storefront_auth.infrastructure.persistence.repositories import (
        AccountRepository,
    )

    return AccountRepository(session=session)


async def get_session_repository(
    session: AsyncSession = Depends(get_db_session),
) -> "SessionRepository":
    """Get session repository (request-scoped)."""
    from storefront_auth.infrastructure.persistence.repositories import (
        SessionRepository,
    )

    return SessionRepository(session=session)
