"""Logging adapters (structlog)."""

from storefront_auth.infrastructure.logging.console_adapter import ConsoleAdapter

__all__ = ["ConsoleAdapter"]
