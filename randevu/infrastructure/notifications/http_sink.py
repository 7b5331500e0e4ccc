from __future__ import annotations

import logging

import httpx

from randevu.application.ports.notification_sink import NotificationSinkPort
from randevu.domain.entities.notification import Notification


class HttpNotificationSink(NotificationSinkPort):
    """Posts notifications to the platform's notification endpoint."""

    def __init__(self, endpoint: str, timeout: float = 10.0, client: httpx.AsyncClient | None = None) -> None:
        self._endpoint = endpoint
        self._client = client or httpx.AsyncClient(timeout=timeout)
        self._logger = logging.getLogger(__name__)

    async def send(self, notification: Notification) -> None:
        payload = {
            "userId": notification.user_id,
            "title": notification.title,
            "message": notification.message,
            "type": notification.type.value,
            "read": notification.read,
            "data": notification.data,
        }
        resp = await self._client.post(self._endpoint, json=payload)
        if resp.status_code >= 400:
            self._logger.error(
                "Notification send failed",
                extra={
                    "status": resp.status_code,
                    "user_id": notification.user_id,
                    "notification_type": notification.type.value,
                },
            )
            resp.raise_for_status()

    async def aclose(self) -> None:
        await self._client.aclose()
