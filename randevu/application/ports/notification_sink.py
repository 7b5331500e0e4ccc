from abc import ABC, abstractmethod

from randevu.domain.entities.notification import Notification


class NotificationSinkPort(ABC):
    @abstractmethod
    async def send(self, notification: Notification) -> None:
        raise NotImplementedError

    async def aclose(self) -> None:
        """Release any connections held by the sink."""
        return None
