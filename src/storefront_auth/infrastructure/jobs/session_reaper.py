"""Periodic session cleanup.

Runs ReapSessionsHandler on a fixed interval as an asyncio task owned by
the application lifespan. Each run opens its own database session.

Usage:
    reaper = SessionReaper(database, logger, interval_seconds=3600)
    reaper.start()
    ...
    await reaper.stop()
"""

import asyncio

from sqlalchemy.exc import SQLAlchemyError

from storefront_auth.application.commands.auth_commands import ReapSessions
from storefront_auth.application.commands.handlers.reap_sessions_handler import (
    ReapSessionsHandler,
)
from storefront_auth.core.result import Success
from storefront_auth.domain.protocols import LoggerProtocol
from storefront_auth.infrastructure.persistence.database import Database
from storefront_auth.infrastructure.persistence.repositories import SessionRepository


class SessionReaper:
    """Background task deleting expired and long-inactive sessions.

    Args:
        database: Lifespan-owned database.
        logger: Structured logger.
        interval_seconds: Pause between runs.
        retention_days: Days a logged-out session is kept after logout.
    """

    def __init__(
        self,
        database: Database,
        logger: LoggerProtocol,
        *,
        interval_seconds: int = 3600,
        retention_days: int = 30,
    ) -> None:
        self._database = database
        self._logger = logger
        self._interval_seconds = interval_seconds
        self._retention_days = retention_days
        self._task: asyncio.Task[None] | None = None

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    async def run_once(self) -> int:
        """Reap once and return the number of deleted sessions."""
        async with self._database.get_session() as session:
            handler = ReapSessionsHandler(
                session_repo=SessionRepository(session=session),
                logger=self._logger,
            )
            result = await handler.handle(
                ReapSessions(retention_days=self._retention_days)
            )
        match result:
            case Success(value=deleted):
                return deleted
            case _:
                return 0

    def start(self) -> None:
        """Schedule the periodic loop on the running event loop."""
        if self.running:
            return
        self._task = asyncio.create_task(self._loop(), name="session-reaper")

    async def stop(self) -> None:
        """Cancel the loop and wait for it to finish."""
        if self._task is None:
            return
        self._task.cancel()
        try:
            await self._task
        except asyncio.CancelledError:
            pass
        self._task = None

    async def _loop(self) -> None:
        while True:
            await asyncio.sleep(self._interval_seconds)
            try:
                await self.run_once()
            except (SQLAlchemyError, OSError) as e:
                # Next tick retries
                self._logger.error("session_reaper_failed", error=e)
            except Exception as e:
                # The loop outlives any single run
                self._logger.error("session_reaper_unexpected_error", error=e)
