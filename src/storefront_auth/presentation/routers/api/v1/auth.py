"""Auth resource router.

Endpoints:
    POST   /auth/register          - Create user + email account
    POST   /auth/login             - Open a session (refresh token as cookie)
    POST   /auth/refresh           - New access token from refresh cookie
    POST   /auth/logout            - End current session, clear cookie
    POST   /auth/logout-all        - End every session of the caller
    GET    /auth/sessions          - List active sessions
    DELETE /auth/sessions/{id}     - End one owned session
    POST   /auth/sessions/cleanup  - Reap stale sessions (admin)
    GET    /auth/me                - Current profile (fresh database check)

Token delivery:
    Access token travels in the response body and is sent back as
    ``Authorization: Bearer``. The refresh token is only ever sent as the
    HTTP-only ``refreshToken`` cookie, never in a JSON body.
"""

from datetime import timedelta
from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Depends, Request, Response, status
from fastapi.responses import JSONResponse

from storefront_auth.application.commands.auth_commands import (
    DeviceInfo,
    LoginUser,
    LogoutAllDevices,
    LogoutSession,
    LogoutUser,
    ReapSessions,
    RefreshAccessToken,
    RegisterUser,
)
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
from storefront_auth.application.queries.session_queries import ListUserSessions
from storefront_auth.core.config import Settings
from storefront_auth.core.container import (
    get_app_settings,
    get_list_sessions_handler,
    get_login_user_handler,
    get_logout_all_devices_handler,
    get_logout_session_handler,
    get_logout_user_handler,
    get_reap_sessions_handler,
    get_refresh_access_token_handler,
    get_register_user_handler,
)
from storefront_auth.core.enums import ErrorKind
from storefront_auth.core.errors import AuthError
from storefront_auth.core.result import Failure, Success
from storefront_auth.domain.enums import UserRole
from storefront_auth.presentation.routers.api.middleware.auth_dependencies import (
    AuthenticatedUser,
    FreshUser,
    require_any_role,
)
from storefront_auth.presentation.routers.api.v1.errors import (
    ErrorEnvelope,
    ErrorResponseBuilder,
)
from storefront_auth.schemas.auth_schemas import (
    AccessTokenData,
    AccountResponse,
    LoginRequest,
    LoginResponse,
    ProfileResponse,
    RefreshResponse,
    RegisterData,
    RegisterRequest,
    RegisterResponse,
    UserData,
    UserResponse,
)
from storefront_auth.schemas.common_schemas import MessageResponse
from storefront_auth.schemas.session_schemas import (
    CleanupData,
    CleanupResponse,
    LogoutAllData,
    LogoutAllResponse,
    SessionListData,
    SessionListResponse,
    SessionResponse,
)

router = APIRouter(prefix="/auth", tags=["Auth"])

REFRESH_COOKIE = "refreshToken"

AppSettings = Annotated[Settings, Depends(get_app_settings)]

_ERROR_RESPONSES: dict[int | str, dict[str, object]] = {
    400: {"description": "Validation failed", "model": ErrorEnvelope},
    401: {"description": "Authentication failed", "model": ErrorEnvelope},
}


def _set_refresh_cookie(
    response: Response, token: str, ttl: timedelta, settings: Settings
) -> None:
    # Same lifetime the login handler gave the session row
    response.set_cookie(
        key=REFRESH_COOKIE,
        value=token,
        max_age=int(ttl.total_seconds()),
        path="/",
        httponly=True,
        secure=settings.cookie_secure,
        samesite="strict",
    )


def _clear_refresh_cookie(response: Response, settings: Settings) -> None:
    response.delete_cookie(
        key=REFRESH_COOKIE,
        path="/",
        httponly=True,
        secure=settings.cookie_secure,
        samesite="strict",
    )


# sessions.device_type and sessions.ip_address are String(64)
_DEVICE_FIELD_MAX = 64


def _device_info(request: Request) -> DeviceInfo:
    """Client metadata: device-type header, first forwarded hop, user agent."""
    forwarded_for = request.headers.get("x-forwarded-for")
    if forwarded_for:
        ip_address: str | None = forwarded_for.split(",")[0].strip() or None
    else:
        ip_address = request.client.host if request.client else None
    device_type = request.headers.get("device-type") or "unknown"
    return DeviceInfo(
        device_type=device_type[:_DEVICE_FIELD_MAX],
        ip_address=ip_address[:_DEVICE_FIELD_MAX] if ip_address else None,
        user_agent=request.headers.get("user-agent"),
    )


@router.post(
    "/register",
    status_code=status.HTTP_201_CREATED,
    response_model=RegisterResponse,
    responses={
        **_ERROR_RESPONSES,
        409: {"description": "Email already registered", "model": ErrorEnvelope},
    },
    summary="Register",
    description="Create a user profile and its email account.",
)
async def register(
    request: Request,
    data: RegisterRequest,
    handler: RegisterUserHandler = Depends(get_register_user_handler),
) -> RegisterResponse | JSONResponse:
    """Register a new user.

    POST /auth/register → 201 Created
    """
    result = await handler.handle(
        RegisterUser(
            email=data.email,
            password=data.password,
            full_name=data.full_name,
            phone=data.phone,
            role=data.role,
        )
    )

    match result:
        case Failure(error=error):
            return ErrorResponseBuilder.from_auth_error(error, request)
        case Success(value=registration):
            return RegisterResponse(
                message="User registered successfully",
                data=RegisterData(
                    user=UserResponse.from_entity(registration.user),
                    account=AccountResponse.from_entity(registration.account),
                ),
            )


@router.post(
    "/login",
    response_model=LoginResponse,
    responses=_ERROR_RESPONSES,
    summary="Login",
    description="Authenticate with email and password and open a session.",
)
async def login(
    request: Request,
    response: Response,
    data: LoginRequest,
    settings: AppSettings,
    handler: LoginUserHandler = Depends(get_login_user_handler),
) -> LoginResponse | JSONResponse:
    """Log in.

    POST /auth/login → 200 OK, sets the ``refreshToken`` cookie.
    """
    result = await handler.handle(
        LoginUser(
            email=data.email,
            password=data.password,
            device=_device_info(request),
        )
    )

    match result:
        case Failure(error=error):
            return ErrorResponseBuilder.from_auth_error(error, request)
        case Success(value=login_result):
            _set_refresh_cookie(
                response, login_result.refresh_token, login_result.refresh_ttl, settings
            )
            return LoginResponse(
                message="Login successful",
                data=UserData(user=UserResponse.from_entity(login_result.user)),
                token=AccessTokenData(access_token=login_result.access_token),
            )


@router.post(
    "/refresh",
    response_model=RefreshResponse,
    responses=_ERROR_RESPONSES,
    summary="Refresh access token",
    description="Exchange the refresh cookie for a new access token.",
)
async def refresh(
    request: Request,
    handler: RefreshAccessTokenHandler = Depends(get_refresh_access_token_handler),
) -> RefreshResponse | JSONResponse:
    """Refresh the access token.

    POST /auth/refresh → 200 OK. The refresh token is not rotated, so the
    cookie is left as is.
    """
    result = await handler.handle(
        RefreshAccessToken(refresh_token=request.cookies.get(REFRESH_COOKIE))
    )

    match result:
        case Failure(error=error):
            return ErrorResponseBuilder.from_auth_error(error, request)
        case Success(value=tokens):
            return RefreshResponse(
                message="Token refreshed successfully",
                data=AccessTokenData(access_token=tokens.access_token),
            )


@router.post(
    "/logout",
    response_model=MessageResponse,
    summary="Logout",
    description="End the session bound to the refresh cookie. Idempotent.",
)
async def logout(
    request: Request,
    response: Response,
    settings: AppSettings,
    handler: LogoutUserHandler = Depends(get_logout_user_handler),
) -> MessageResponse | JSONResponse:
    """Log out of the current session.

    POST /auth/logout → 200 OK, always clears the cookie.
    """
    result = await handler.handle(
        LogoutUser(refresh_token=request.cookies.get(REFRESH_COOKIE))
    )

    match result:
        case Failure(error=error):
            return ErrorResponseBuilder.from_auth_error(error, request)
        case Success(value=deactivated):
            _clear_refresh_cookie(response, settings)
            return MessageResponse(
                message=(
                    "Logged out successfully" if deactivated else "No active session"
                ),
            )


@router.post(
    "/logout-all",
    response_model=LogoutAllResponse,
    responses=_ERROR_RESPONSES,
    summary="Logout from all devices",
    description="End every active session of the authenticated user.",
)
async def logout_all(
    request: Request,
    response: Response,
    current_user: AuthenticatedUser,
    settings: AppSettings,
    handler: LogoutAllDevicesHandler = Depends(get_logout_all_devices_handler),
) -> LogoutAllResponse | JSONResponse:
    """Log out everywhere.

    POST /auth/logout-all → 200 OK with the number of sessions ended.
    """
    result = await handler.handle(LogoutAllDevices(user_id=current_user.user_id))

    match result:
        case Failure(error=error):
            return ErrorResponseBuilder.from_auth_error(error, request)
        case Success(value=count):
            _clear_refresh_cookie(response, settings)
            return LogoutAllResponse(
                message="Logged out from all devices",
                data=LogoutAllData(sessions_deactivated=count),
            )


@router.get(
    "/sessions",
    response_model=SessionListResponse,
    responses=_ERROR_RESPONSES,
    summary="List sessions",
    description="Active, unexpired sessions of the authenticated user.",
)
async def list_sessions(
    request: Request,
    current_user: AuthenticatedUser,
    handler: ListSessionsHandler = Depends(get_list_sessions_handler),
) -> SessionListResponse | JSONResponse:
    """List active sessions, newest activity first.

    GET /auth/sessions → 200 OK
    """
    result = await handler.handle(
        ListUserSessions(
            user_id=current_user.user_id,
            current_refresh_token=request.cookies.get(REFRESH_COOKIE),
        )
    )

    match result:
        case Failure(error=error):
            return ErrorResponseBuilder.from_auth_error(error, request)
        case Success(value=views):
            sessions = [SessionResponse.from_view(view) for view in views]
            return SessionListResponse(
                message="Sessions retrieved successfully",
                data=SessionListData(sessions=sessions, total=len(sessions)),
            )


@router.post(
    "/sessions/cleanup",
    response_model=CleanupResponse,
    dependencies=[Depends(require_any_role(UserRole.ADMIN))],
    responses={
        **_ERROR_RESPONSES,
        403: {"description": "Admin role required", "model": ErrorEnvelope},
    },
    summary="Clean up sessions",
    description="Delete expired and long-inactive sessions (admin only).",
)
async def cleanup_sessions(
    request: Request,
    settings: AppSettings,
    handler: ReapSessionsHandler = Depends(get_reap_sessions_handler),
) -> CleanupResponse | JSONResponse:
    """Run the session reaper now.

    POST /auth/sessions/cleanup → 200 OK
    """
    result = await handler.handle(
        ReapSessions(retention_days=settings.session_retention_days)
    )

    match result:
        case Failure(error=error):
            return ErrorResponseBuilder.from_auth_error(error, request)
        case Success(value=deleted):
            return CleanupResponse(
                message="Sessions cleaned up",
                data=CleanupData(deleted=deleted),
            )


@router.delete(
    "/sessions/{session_id}",
    response_model=MessageResponse,
    responses={
        **_ERROR_RESPONSES,
        404: {"description": "Session not found", "model": ErrorEnvelope},
    },
    summary="Revoke session",
    description="End one session owned by the authenticated user.",
)
async def revoke_session(
    request: Request,
    session_id: str,
    current_user: AuthenticatedUser,
    handler: LogoutSessionHandler = Depends(get_logout_session_handler),
) -> MessageResponse | JSONResponse:
    """Revoke one session.

    DELETE /auth/sessions/{id} → 200 OK, or 404 when the session does not
    exist or belongs to another user (the two are indistinguishable).
    """
    try:
        parsed_id = UUID(session_id)
    except ValueError:
        return ErrorResponseBuilder.from_auth_error(
            AuthError(kind=ErrorKind.NOT_FOUND, message="Session not found"),
            request,
        )

    result = await handler.handle(
        LogoutSession(session_id=parsed_id, user_id=current_user.user_id)
    )

    match result:
        case Failure(error=error):
            return ErrorResponseBuilder.from_auth_error(error, request)
        case Success():
            return MessageResponse(message="Session revoked successfully")


@router.get(
    "/me",
    response_model=ProfileResponse,
    responses={
        **_ERROR_RESPONSES,
        403: {"description": "Account blocked", "model": ErrorEnvelope},
    },
    summary="Current user",
    description="Profile of the caller, re-read from the database.",
)
async def me(user: FreshUser) -> ProfileResponse:
    """Get the current profile.

    GET /auth/me → 200 OK
    """
    return ProfileResponse(
        message="Profile retrieved successfully",
        data=UserData(user=UserResponse.from_entity(user)),
    )
