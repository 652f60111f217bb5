"""Background jobs."""

from storefront_auth.infrastructure.jobs.session_reaper import SessionReaper

__all__ = ["SessionReaper"]
