from __future__ import annotations

from abc import ABC, abstractmethod

from randevu.domain.entities.provider import Provider


class ProviderCatalogPort(ABC):
    @abstractmethod
    async def get_provider(self, provider_id: str) -> Provider | None:
        """Barber or employee record with services and resolved schedule."""
        raise NotImplementedError
