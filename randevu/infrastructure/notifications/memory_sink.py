from __future__ import annotations

import logging

from randevu.application.ports.notification_sink import NotificationSinkPort
from randevu.domain.entities.notification import Notification


class MemoryNotificationSink(NotificationSinkPort):
    def __init__(self) -> None:
        self.sent: list[Notification] = []
        self._logger = logging.getLogger(__name__)

    async def send(self, notification: Notification) -> None:
        self.sent.append(notification)
        self._logger.info(
            "Mock notification sent",
            extra={"user_id": notification.user_id, "notification_type": notification.type.value},
        )
