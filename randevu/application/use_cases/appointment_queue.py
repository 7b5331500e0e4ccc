from __future__ import annotations

from randevu.application.ports.appointment_store import AppointmentStorePort
from randevu.domain.entities.appointment import Appointment, AppointmentStatus


class AppointmentQueueUseCase:
    def __init__(self, store: AppointmentStorePort) -> None:
        self._store = store

    async def list_for_employee(
        self,
        employee_id: str,
        date: str | None = None,
        statuses: frozenset[AppointmentStatus] | None = None,
    ) -> list[Appointment]:
        """Staff queue, earliest first."""
        appointments = await self._store.list_for_employee(employee_id, date=date, statuses=statuses)
        return sorted(appointments, key=lambda a: (a.date, a.time))

    async def list_for_customer(self, customer_id: str) -> list[Appointment]:
        """Customer history, newest first."""
        appointments = await self._store.list_for_customer(customer_id)
        return sorted(appointments, key=lambda a: (a.date, a.time), reverse=True)
