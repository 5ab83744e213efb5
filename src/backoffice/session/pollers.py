"""Background timers tied to the login session.

Both timers are asyncio tasks started on login and cancelled on logout:

- SessionLivenessPoller checks, every few seconds, whether an administrator
  has invalidated the signed-in user's session and, if so, warns and logs
  the user out after a short grace delay.
- ActivityHeartbeat tells the backend the user is still active, once on
  login and then on a longer interval.
"""

import asyncio
from collections.abc import Awaitable, Callable

import structlog

from backoffice.gateway.port import GatewayError

logger = structlog.get_logger(__name__)

FORCED_LOGOUT_MESSAGE = "You have been forcefully logged out by an administrator."


class PeriodicTask:
    """Run ``tick`` every ``interval`` seconds until stopped."""

    name = "periodic-task"

    def __init__(self, interval: float, run_immediately: bool = False) -> None:
        self.interval = interval
        self.run_immediately = run_immediately
        self._task: asyncio.Task | None = None

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    def start(self) -> None:
        if self.running:
            logger.warning("Periodic task already running", task=self.name)
            return
        self._task = asyncio.create_task(self._loop(), name=self.name)
        logger.debug("Periodic task started", task=self.name, interval=self.interval)

    async def stop(self) -> None:
        task, self._task = self._task, None
        if task is None or task is asyncio.current_task():
            return
        task.cancel()
        try:
            await task
        except asyncio.CancelledError:
            pass
        logger.debug("Periodic task stopped", task=self.name)

    async def _loop(self) -> None:
        if self.run_immediately:
            await self._run_tick()
        while True:
            await asyncio.sleep(self.interval)
            await self._run_tick()

    async def _run_tick(self) -> None:
        try:
            await self.tick()
        except Exception:
            logger.exception("Periodic task tick failed", task=self.name)

    async def tick(self) -> None:
        raise NotImplementedError


class SessionLivenessPoller(PeriodicTask):
    name = "session-liveness"

    def __init__(
        self,
        auth,
        notifications,
        on_logout: Callable[[], Awaitable[None]],
        interval: float = 3.0,
        grace: float = 1.0,
    ) -> None:
        super().__init__(interval)
        self.auth = auth
        self.notifications = notifications
        self.on_logout = on_logout
        self.grace = grace
        self._logout_task: asyncio.Task | None = None

    @property
    def logout_pending(self) -> bool:
        return self._logout_task is not None and not self._logout_task.done()

    async def tick(self) -> None:
        if not self.auth.is_authenticated or self.logout_pending:
            return
        if not self.auth.is_invalidated():
            return

        logger.warning("Session invalidated by administrator", user_id=self.auth.user_id)
        self.notifications.warning(FORCED_LOGOUT_MESSAGE)
        self._logout_task = asyncio.create_task(self._logout_after_grace(), name="forced-logout")

    async def _logout_after_grace(self) -> None:
        await asyncio.sleep(self.grace)
        await self.on_logout()

    async def stop(self) -> None:
        await super().stop()
        task, self._logout_task = self._logout_task, None
        if task is None or task is asyncio.current_task() or task.done():
            return
        task.cancel()
        try:
            await task
        except asyncio.CancelledError:
            pass


class ActivityHeartbeat(PeriodicTask):
    name = "activity-heartbeat"

    def __init__(self, gateway, interval: float = 30.0) -> None:
        super().__init__(interval, run_immediately=True)
        self.gateway = gateway

    async def tick(self) -> None:
        try:
            await self.gateway.update_activity()
        except GatewayError as exc:
            logger.warning("Activity heartbeat failed", error=exc.message, status_code=exc.status_code)
