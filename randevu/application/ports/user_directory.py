from __future__ import annotations

from abc import ABC, abstractmethod

from randevu.domain.entities.user import UserAccount


class UserDirectoryPort(ABC):
    @abstractmethod
    async def get_user(self, user_id: str) -> UserAccount | None:
        raise NotImplementedError
