"""Container module - Centralized dependency injection.

Re-exports all factory functions from submodules:

    from storefront_auth.core.container import get_logger, get_login_user_handler

The container is organized into modules:
- infrastructure: Core services (db, logging, hashing, tokens)
- repositories: Repository factories
- auth_handlers: Authentication handler factories
"""

# Infrastructure services
from storefront_auth.core.container.infrastructure import (
    build_database,
    get_app_settings,
    get_database,
    get_db_session,
    get_logger,
    get_password_service,
    get_token_service,
)

# Repositories
from storefront_auth.core.container.repositories import (
    get_account_repository,
    get_session_repository,
    get_user_repository,
)

# Auth handlers
from storefront_auth.core.container.auth_handlers import (
    get_list_sessions_handler,
    get_login_user_handler,
    get_logout_all_devices_handler,
    get_logout_session_handler,
    get_logout_user_handler,
    get_reap_sessions_handler,
    get_refresh_access_token_handler,
    get_register_user_handler,
)

__all__ = [
    # Infrastructure
    "build_database",
    "get_app_settings",
    "get_database",
    "get_db_session",
    "get_logger",
    "get_password_service",
    "get_token_service",
    # Repositories
    "get_account_repository",
    "get_session_repository",
    "get_user_repository",
    # Auth handlers
    "get_list_sessions_handler",
    "get_login_user_handler",
    "get_logout_all_devices_handler",
    "get_logout_session_handler",
    "get_logout_user_handler",
    "get_reap_sessions_handler",
    "get_refresh_access_token_handler",
    "get_register_user_handler",
]
