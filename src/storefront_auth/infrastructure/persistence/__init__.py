"""Persistence adapters (SQLAlchemy async)."""

from storefront_auth.infrastructure.persistence.database import Database

__all__ = ["Database"]
