"""Fire-and-forget notification dispatch, scheduled after commit."""

from __future__ import annotations

import asyncio

from tramites.application.interfaces.services import INotificationService
from tramites.shared.telemetry.logging import get_logger

logger = get_logger(__name__)


class NotificationDispatcher:
    """Schedules sends as background tasks so mail never blocks or rolls back a commit.

    Holds a reference to each pending task until it finishes. Failures are
    logged and never propagate to the caller.
    """

    def __init__(self, sender: INotificationService) -> None:
        self.sender = sender
        self._pending: set[asyncio.Task[None]] = set()

    def dispatch_tracking_code(self, email: str, tracking_code: str) -> asyncio.Task[None]:
        task = asyncio.create_task(
            self._send_tracking_code(email, tracking_code),
            name=f"notify-tracking-code-{tracking_code}",
        )
        self._pending.add(task)
        task.add_done_callback(self._pending.discard)
        return task

    async def _send_tracking_code(self, email: str, tracking_code: str) -> None:
        try:
            await self.sender.send_tracking_code(email, tracking_code)
        except Exception:
            logger.exception(
                "Failed to send tracking code %s; document remains registered",
                tracking_code,
            )

    @property
    def pending(self) -> int:
        return len(self._pending)

    async def drain(self) -> None:
        """Wait for all scheduled sends (shutdown and tests)."""
        if self._pending:
            await asyncio.gather(*list(self._pending), return_exceptions=True)
