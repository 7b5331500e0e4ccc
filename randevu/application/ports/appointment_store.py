from __future__ import annotations

from abc import ABC, abstractmethod
from datetime import datetime

from randevu.domain.entities.appointment import Appointment, AppointmentStatus


class AppointmentStorePort(ABC):
    @abstractmethod
    async def list_blocking(self, provider_id: str, date: str) -> list[Appointment]:
        """Pending and confirmed appointments of a barbershop on a date."""
        raise NotImplementedError

    @abstractmethod
    async def insert_if_available(self, appointment: Appointment) -> Appointment:
        """
        Persist a new appointment unless it now overlaps a blocking appointment
        of the same employee on the same date.
        The re-check and the insert are atomic per (employee_id, date).
        Raises SlotUnavailableError on conflict.
        """
        raise NotImplementedError

    @abstractmethod
    async def get(self, appointment_id: str) -> Appointment | None:
        raise NotImplementedError

    @abstractmethod
    async def update_status(
        self,
        appointment_id: str,
        status: AppointmentStatus,
        updated_at: datetime,
        completed_at: datetime | None = None,
    ) -> Appointment:
        """Write status and timestamps. Raises AppointmentNotFoundError if missing."""
        raise NotImplementedError

    @abstractmethod
    async def list_for_employee(
        self,
        employee_id: str,
        date: str | None = None,
        statuses: frozenset[AppointmentStatus] | None = None,
    ) -> list[Appointment]:
        raise NotImplementedError

    @abstractmethod
    async def list_for_customer(self, customer_id: str) -> list[Appointment]:
        raise NotImplementedError
