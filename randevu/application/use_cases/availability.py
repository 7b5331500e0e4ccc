from __future__ import annotations

import asyncio
import logging
from datetime import date, datetime, time
from typing import Callable
from zoneinfo import ZoneInfo

from randevu.application.exceptions import AvailabilityUnavailableError, StorageError
from randevu.application.ports.appointment_store import AppointmentStorePort
from randevu.application.ports.provider_catalog import ProviderCatalogPort
from randevu.application.utils.slots import DEFAULT_STEP_MINUTES, generate_slots, is_available, to_minutes
from randevu.application.utils.working_hours import weekday_key
from randevu.domain.entities.provider import Provider
from randevu.domain.entities.service import Service


class AvailabilityUseCase:
    """
    Bookable start times for one employee, one service and one date.

    Every call reads the provider and the day's appointments afresh; nothing
    is cached between calls. Start times at or before the current time in the
    business timezone are never offered. A failed or timed-out appointment
    read raises AvailabilityUnavailableError instead of offering unchecked slots.
    """

    def __init__(
        self,
        catalog: ProviderCatalogPort,
        store: AppointmentStorePort,
        timezone: ZoneInfo,
        step_minutes: int = DEFAULT_STEP_MINUTES,
        fetch_timeout_seconds: float = 5.0,
        clock: Callable[[], datetime] | None = None,
    ) -> None:
        self._catalog = catalog
        self._store = store
        self._timezone = timezone
        self._step_minutes = step_minutes
        self._fetch_timeout_seconds = fetch_timeout_seconds
        self._clock = clock or (lambda: datetime.now(timezone))
        self._logger = logging.getLogger(__name__)

    def now(self) -> datetime:
        """Current time in the business timezone."""
        return self._clock().astimezone(self._timezone)

    async def list_available_slots(
        self,
        provider_id: str,
        employee_id: str,
        service_name: str,
        day: date,
    ) -> list[str]:
        employee = await self.find_employee(provider_id, employee_id)
        if employee is None:
            return []

        service = employee.find_service(service_name)
        if service is None:
            self._logger.info(
                "Service not offered by employee",
                extra={"employee_id": employee_id, "service": service_name},
            )
            return []

        return await self.slots_for(employee, service, day)

    async def find_employee(self, provider_id: str, employee_id: str) -> Provider | None:
        employee = await self._catalog.get_provider(employee_id)
        if employee is None or not employee.belongs_to(provider_id):
            self._logger.info(
                "Employee not found for barbershop",
                extra={"employee_id": employee_id, "provider_id": provider_id},
            )
            return None
        return employee

    async def slots_for(self, employee: Provider, service: Service, day: date) -> list[str]:
        """Free start times for an already resolved employee and service."""
        day_hours = employee.schedule.day(weekday_key(day))
        if day_hours is None:
            return []

        candidates = self._upcoming(generate_slots(day_hours, service.duration, self._step_minutes), day)
        if not candidates:
            return []

        # Appointments are filed under the shop, whichever id the caller used.
        existing = await self._fetch_blocking(employee.shop_id, day)
        return [
            slot
            for slot in candidates
            if is_available(to_minutes(slot), service.duration, existing, employee.id)
        ]

    def _upcoming(self, candidates: list[str], day: date) -> list[str]:
        now = self.now()
        if day > now.date():
            return candidates
        if day < now.date():
            return []
        return [
            slot
            for slot in candidates
            if datetime.combine(day, time.fromisoformat(slot), tzinfo=self._timezone) > now
        ]

    async def _fetch_blocking(self, provider_id: str, day: date):
        date_key = day.isoformat()
        try:
            return await asyncio.wait_for(
                self._store.list_blocking(provider_id, date_key),
                timeout=self._fetch_timeout_seconds,
            )
        except asyncio.TimeoutError as e:
            self._logger.error(
                "Appointment fetch timed out",
                extra={"provider_id": provider_id, "date": date_key},
            )
            raise AvailabilityUnavailableError("Availability could not be checked in time") from e
        except StorageError as e:
            self._logger.error(
                "Appointment fetch failed",
                extra={"provider_id": provider_id, "date": date_key, "error": str(e)},
            )
            raise AvailabilityUnavailableError("Availability could not be checked") from e
