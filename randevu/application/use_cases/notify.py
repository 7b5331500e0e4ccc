from __future__ import annotations

import asyncio
import logging

from randevu.application.ports.notification_sink import NotificationSinkPort
from randevu.domain.entities.notification import Notification


class NotificationDispatcher:
    """Fire-and-forget delivery. Failures are logged, never raised to the caller."""

    def __init__(self, sink: NotificationSinkPort) -> None:
        self._sink = sink
        self._tasks: set[asyncio.Task] = set()
        self._logger = logging.getLogger(__name__)

    def dispatch(self, notification: Notification) -> None:
        task = asyncio.get_running_loop().create_task(self._send(notification))
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)

    async def drain(self) -> None:
        """Wait for notifications still in flight (shutdown and tests)."""
        while self._tasks:
            await asyncio.gather(*list(self._tasks))

    async def _send(self, notification: Notification) -> None:
        try:
            await self._sink.send(notification)
        except Exception as e:
            self._logger.warning(
                "Notification delivery failed",
                extra={
                    "user_id": notification.user_id,
                    "notification_type": notification.type.value,
                    "error": str(e),
                },
            )
