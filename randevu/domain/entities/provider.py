from __future__ import annotations

from dataclasses import dataclass

from randevu.domain.entities.service import Service
from randevu.domain.entities.user import UserRole
from randevu.domain.entities.working_hours import WeeklySchedule


@dataclass(frozen=True)
class Provider:
    """A bookable staff member: the shop owner (barber) or one of their employees."""

    id: str
    role: UserRole
    shop_id: str  # owner's id; equal to id for the owner
    schedule: WeeklySchedule
    services: tuple[Service, ...] = ()
    first_name: str = ""
    last_name: str = ""

    @property
    def display_name(self) -> str:
        return f"{self.first_name} {self.last_name}".strip() or self.id

    @property
    def is_owner(self) -> bool:
        return self.id == self.shop_id

    def belongs_to(self, provider_id: str) -> bool:
        """True when provider_id names this member's barbershop (the owner's id)."""
        return self.shop_id == provider_id

    def find_service(self, name: str) -> Service | None:
        for service in self.services:
            if service.name == name:
                return service
        return None
