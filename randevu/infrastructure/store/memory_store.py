from __future__ import annotations

from datetime import datetime

from randevu.application.exceptions import AppointmentNotFoundError, SlotUnavailableError
from randevu.application.ports.appointment_store import AppointmentStorePort
from randevu.application.utils.slots import is_available, to_minutes
from randevu.domain.entities.appointment import BLOCKING_STATUSES, Appointment, AppointmentStatus
from randevu.infrastructure.store.locks import KeyedLocks


class MemoryAppointmentStore(AppointmentStorePort):
    def __init__(self) -> None:
        self._appointments: dict[str, Appointment] = {}
        self._locks = KeyedLocks()

    async def list_blocking(self, provider_id: str, date: str) -> list[Appointment]:
        return [
            a
            for a in self._appointments.values()
            if a.provider_id == provider_id and a.date == date and a.status in BLOCKING_STATUSES
        ]

    async def insert_if_available(self, appointment: Appointment) -> Appointment:
        async with self._locks.hold((appointment.employee_id, appointment.date)):
            existing = [a for a in self._appointments.values() if a.date == appointment.date]
            if not is_available(
                to_minutes(appointment.time),
                appointment.duration_minutes,
                existing,
                appointment.employee_id,
            ):
                raise SlotUnavailableError("Selected time was booked by someone else")
            self._appointments[appointment.id] = appointment
            return appointment

    async def get(self, appointment_id: str) -> Appointment | None:
        return self._appointments.get(appointment_id)

    async def update_status(
        self,
        appointment_id: str,
        status: AppointmentStatus,
        updated_at: datetime,
        completed_at: datetime | None = None,
    ) -> Appointment:
        current = self._appointments.get(appointment_id)
        if current is None:
            raise AppointmentNotFoundError(f"Appointment not found: {appointment_id}")
        updated = current.with_status(status, updated_at=updated_at, completed_at=completed_at)
        self._appointments[appointment_id] = updated
        return updated

    async def list_for_employee(
        self,
        employee_id: str,
        date: str | None = None,
        statuses: frozenset[AppointmentStatus] | None = None,
    ) -> list[Appointment]:
        return [
            a
            for a in self._appointments.values()
            if a.employee_id == employee_id
            and (date is None or a.date == date)
            and (statuses is None or a.status in statuses)
        ]

    async def list_for_customer(self, customer_id: str) -> list[Appointment]:
        return [a for a in self._appointments.values() if a.customer_id == customer_id]
