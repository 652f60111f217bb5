"""Row <-> entity mapping shared by the repositories.

Accounts are loaded together with their users (login join) and users are
created together with their first account (registration), so the mappings
live in one place instead of on each repository.
"""

from storefront_auth.domain.entities import Account, Session, User
from storefront_auth.domain.enums import AccountType, UserRole
from storefront_auth.infrastructure.persistence.models import (
    AccountModel,
    SessionModel,
    UserModel,
)


def user_to_domain(model: UserModel) -> User:
    return User(
        id=model.id,
        email=model.email,
        full_name=model.full_name,
        phone=model.phone,
        role=UserRole(model.role),
        avatar_url=model.avatar_url,
        tier=model.tier,
        loyalty_points=model.loyalty_points,
        is_active=model.is_active,
        is_blocked=model.is_blocked,
        created_at=model.created_at,
        updated_at=model.updated_at,
    )


def user_to_model(user: User) -> UserModel:
    return UserModel(
        id=user.id,
        email=user.email,
        full_name=user.full_name,
        phone=user.phone,
        role=user.role.value,
        avatar_url=user.avatar_url,
        tier=user.tier,
        loyalty_points=user.loyalty_points,
        is_active=user.is_active,
        is_blocked=user.is_blocked,
        created_at=user.created_at,
        updated_at=user.updated_at,
    )


def account_to_domain(model: AccountModel) -> Account:
    return Account(
        id=model.id,
        user_id=model.user_id,
        account_type=AccountType(model.account_type),
        identifier=model.identifier,
        password_hash=model.password_hash,
        is_verified=model.is_verified,
        verified_at=model.verified_at,
        created_at=model.created_at,
        updated_at=model.updated_at,
    )


def account_to_model(account: Account) -> AccountModel:
    return AccountModel(
        id=account.id,
        user_id=account.user_id,
        account_type=account.account_type.value,
        identifier=account.identifier,
        password_hash=account.password_hash,
        is_verified=account.is_verified,
        verified_at=account.verified_at,
        created_at=account.created_at,
        updated_at=account.updated_at,
    )


def session_to_domain(model: SessionModel) -> Session:
    return Session(
        id=model.id,
        user_id=model.user_id,
        account_id=model.account_id,
        session_token=model.session_token,
        refresh_token=model.refresh_token,
        device_type=model.device_type,
        ip_address=model.ip_address,
        user_agent=model.user_agent,
        is_active=model.is_active,
        expires_at=model.expires_at,
        created_at=model.created_at,
        last_activity_at=model.last_activity_at,
    )


def session_to_model(session: Session) -> SessionModel:
    return SessionModel(
        id=session.id,
        user_id=session.user_id,
        account_id=session.account_id,
        session_token=session.session_token,
        refresh_token=session.refresh_token,
        device_type=session.device_type,
        ip_address=session.ip_address,
        user_agent=session.user_agent,
        is_active=session.is_active,
        expires_at=session.expires_at,
        created_at=session.created_at,
        last_activity_at=session.last_activity_at,
    )
