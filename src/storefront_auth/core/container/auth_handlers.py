"""Authentication handler factories.

Request-scoped handler instances for registration, login, refresh,
logout and session management. Each factory wires repositories from the
request's database session together with the app-scoped services.

Usage:
    from storefront_auth.core.container import get_login_user_handler

    @router.post("/login")
    async def login(
        handler: LoginUserHandler = Depends(get_login_user_handler),
    ):
        result = await handler.handle(command)
"""

from typing import TYPE_CHECKING

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from storefront_auth.core.container.infrastructure import (
    get_db_session,
    get_logger,
    get_password_service,
    get_token_service,
)

if TYPE_CHECKING:
    from storefront_auth.application.commands.handlers.login_user_handler import (
        LoginUserHandler,
    )
    from storefront_auth.application.commands.handlers.logout_user_handler import (
        LogoutAllDevicesHandler,
        LogoutSessionHandler,
        LogoutUserHandler,
    )
    from storefront_auth.application.commands.handlers.reap_sessions_handler import (
        ReapSessionsHandler,
    )
    from storefront_auth.application.commands.handlers.refresh_access_token_handler import (
        RefreshAccessTokenHandler,
    )
    from storefront_auth.application.commands.handlers.register_user_handler import (
        RegisterUserHandler,
    )
    from storefront_auth.application.queries.handlers.list_sessions_handler import (
        ListSessionsHandler,
    )


# ============================================================================
# Handler Factories (Request-Scoped)
# ============================================================================


async def get_register_user_handler(
    session: AsyncSession = Depends(get_db_session),
) -> "RegisterUserHandler":
    """Get RegisterUserHandler instance (request-scoped).

    User and account repositories share ``session`` so the two inserts
    commit together.
    """
    from storefront_auth.application.commands.handlers.register_user_handler import (
        RegisterUserHandler,
    )
    from storefront_auth.infrastructure.persistence.repositories import (
        AccountRepository,
        UserRepository,
    )

    return RegisterUserHandler(
        user_repo=UserRepository(session=session),
        account_repo=AccountRepository(session=session),
        password_service=get_password_service(),
        logger=get_logger(),
    )


async def get_login_user_handler(
    session: AsyncSession = Depends(get_db_session),
) -> "LoginUserHandler":
    """Get LoginUserHandler instance (request-scoped)."""
    from storefront_auth.application.commands.handlers.login_user_handler import (
        LoginUserHandler,
    )
    from storefront_auth.infrastructure.persistence.repositories import (
        AccountRepository,
        SessionRepository,
    )

    return LoginUserHandler(
        account_repo=AccountRepository(session=session),
        session_repo=SessionRepository(session=session),
        password_service=get_password_service(),
        token_service=get_token_service(),
        logger=get_logger(),
    )


async def get_refresh_access_token_handler(
    session: AsyncSession = Depends(get_db_session),
) -> "RefreshAccessTokenHandler":
    """Get RefreshAccessTokenHandler instance (request-scoped)."""
    from storefront_auth.application.commands.handlers.refresh_access_token_handler import (
        RefreshAccessTokenHandler,
    )
    from storefront_auth.infrastructure.persistence.repositories import (
        SessionRepository,
    )

    return RefreshAccessTokenHandler(
        session_repo=SessionRepository(session=session),
        token_service=get_token_service(),
        logger=get_logger(),
    )


async def get_logout_user_handler(
    session: AsyncSession = Depends(get_db_session),
) -> "LogoutUserHandler":
    """Get LogoutUserHandler instance (request-scoped)."""
    from storefront_auth.application.commands.handlers.logout_user_handler import (
        LogoutUserHandler,
    )
    from storefront_auth.infrastructure.persistence.repositories import (
        SessionRepository,
    )

    return LogoutUserHandler(
        session_repo=SessionRepository(session=session),
        logger=get_logger(),
    )


async def get_logout_all_devices_handler(
    session: AsyncSession = Depends(get_db_session),
) -> "LogoutAllDevicesHandler":
    """Get LogoutAllDevicesHandler instance (request-scoped)."""
    from storefront_auth.application.commands.handlers.logout_user_handler import (
        LogoutAllDevicesHandler,
    )
    from storefront_auth.infrastructure.persistence.repositories import (
        SessionRepository,
    )

    return LogoutAllDevicesHandler(
        session_repo=SessionRepository(session=session),
        logger=get_logger(),
    )


async def get_logout_session_handler(
    session: AsyncSession = Depends(get_db_session),
) -> "LogoutSessionHandler":
    """Get LogoutSessionHandler instance (request-scoped)."""
    from storefront_auth.application.commands.handlers.logout_user_handler import (
        LogoutSessionHandler,
    )
    from storefront_auth.infrastructure.persistence.repositories import (
        SessionRepository,
    )

    return LogoutSessionHandler(
        session_repo=SessionRepository(session=session),
        logger=get_logger(),
    )


async def get_list_sessions_handler(
    session: AsyncSession = Depends(get_db_session),
) -> "ListSessionsHandler":
    """Get ListSessionsHandler instance (request-scoped)."""
    from storefront_auth.application.queries.handlers.list_sessions_handler import (
        ListSessionsHandler,
    )
    from storefront_auth.infrastructure.persistence.repositories import (
        SessionRepository,
    )

    return ListSessionsHandler(session_repo=SessionRepository(session=session))


async def get_reap_sessions_handler(
    session: AsyncSession = Depends(get_db_session),
) -> "ReapSessionsHandler":
    """Get ReapSessionsHandler instance (request-scoped)."""
    from storefront_auth.application.commands.handlers.reap_sessions_handler import (
        ReapSessionsHandler,
    )
    from storefront_auth.infrastructure.persistence.repositories import (
        SessionRepository,
    )

    return ReapSessionsHandler(
        session_repo=SessionRepository(session=session),
        logger=get_logger(),
    )
