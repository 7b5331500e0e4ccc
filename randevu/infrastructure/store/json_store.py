from __future__ import annotations

import asyncio
import json
from datetime import datetime
from pathlib import Path
from typing import Any

from randevu.application.exceptions import AppointmentNotFoundError, SlotUnavailableError, StorageError
from randevu.application.ports.appointment_store import AppointmentStorePort
from randevu.application.utils.slots import is_available, to_minutes
from randevu.domain.entities.appointment import BLOCKING_STATUSES, Appointment, AppointmentStatus
from randevu.infrastructure.store.locks import KeyedLocks


class JsonAppointmentStore(AppointmentStorePort):
    """
    File-backed store for local development: one JSON file per calendar date.

    Writes to a date file are serialised by a per-date lock, which also makes
    the conflict re-check in insert_if_available atomic.
    """

    def __init__(self, data_dir: str = "./data/appointments") -> None:
        self._data_dir = Path(data_dir)
        self._data_dir.mkdir(parents=True, exist_ok=True)
        self._locks = KeyedLocks()

    def _get_file_path(self, date: str) -> Path:
        return self._data_dir / f"{date}.json"

    def _load_day(self, date: str) -> list[dict[str, Any]]:
        """Load a date file, empty if missing."""
        file_path = self._get_file_path(date)
        if not file_path.exists():
            return []
        try:
            with open(file_path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except (json.JSONDecodeError, OSError) as e:
            raise StorageError(f"Could not read appointments for {date}") from e
        return data.get("appointments", [])

    def _save_day(self, date: str, records: list[dict[str, Any]]) -> None:
        """Save a date file atomically."""
        file_path = self._get_file_path(date)
        temp_path = file_path.with_suffix(".json.tmp")
        try:
            with open(temp_path, "w", encoding="utf-8") as f:
                json.dump({"date": date, "appointments": records, "version": 1}, f, indent=2, ensure_ascii=False)
            temp_path.replace(file_path)
        except OSError as e:
            if temp_path.exists():
                temp_path.unlink()
            raise StorageError(f"Could not write appointments for {date}") from e

    async def _read(self, date: str) -> list[Appointment]:
        records = await asyncio.to_thread(self._load_day, date)
        return [self._deserialize(r) for r in records]

    async def _read_all(self) -> list[Appointment]:
        appointments: list[Appointment] = []
        for file_path in sorted(self._data_dir.glob("*.json")):
            appointments.extend(await self._read(file_path.stem))
        return appointments

    def _serialize(self, appointment: Appointment) -> dict[str, Any]:
        return {
            "id": appointment.id,
            "customerId": appointment.customer_id,
            "barberId": appointment.provider_id,
            "employeeId": appointment.employee_id,
            "service": appointment.service_name,
            "date": appointment.date,
            "time": appointment.time,
            "duration": appointment.duration_minutes,
            "price": appointment.price,
            "status": appointment.status.value,
            "createdAt": appointment.created_at.isoformat() if appointment.created_at else None,
            "updatedAt": appointment.updated_at.isoformat() if appointment.updated_at else None,
            "completedAt": appointment.completed_at.isoformat() if appointment.completed_at else None,
        }

    def _deserialize(self, data: dict[str, Any]) -> Appointment:
        return Appointment(
            id=data["id"],
            customer_id=data["customerId"],
            provider_id=data["barberId"],
            employee_id=data.get("employeeId") or data["barberId"],
            service_name=data["service"],
            date=data["date"],
            time=data["time"],
            duration_minutes=int(data["duration"]),
            price=data["price"],
            status=AppointmentStatus(data.get("status", "pending")),
            created_at=_parse_datetime(data.get("createdAt")),
            updated_at=_parse_datetime(data.get("updatedAt")),
            completed_at=_parse_datetime(data.get("completedAt")),
        )

    async def list_blocking(self, provider_id: str, date: str) -> list[Appointment]:
        return [
            a
            for a in await self._read(date)
            if a.provider_id == provider_id and a.status in BLOCKING_STATUSES
        ]

    async def insert_if_available(self, appointment: Appointment) -> Appointment:
        async with self._locks.hold(appointment.date):
            existing = await self._read(appointment.date)
            if not is_available(
                to_minutes(appointment.time),
                appointment.duration_minutes,
                existing,
                appointment.employee_id,
            ):
                raise SlotUnavailableError("Selected time was booked by someone else")
            records = [self._serialize(a) for a in existing]
            records.append(self._serialize(appointment))
            await asyncio.to_thread(self._save_day, appointment.date, records)
        return appointment

    async def get(self, appointment_id: str) -> Appointment | None:
        for appointment in await self._read_all():
            if appointment.id == appointment_id:
                return appointment
        return None

    async def update_status(
        self,
        appointment_id: str,
        status: AppointmentStatus,
        updated_at: datetime,
        completed_at: datetime | None = None,
    ) -> Appointment:
        current = await self.get(appointment_id)
        if current is None:
            raise AppointmentNotFoundError(f"Appointment not found: {appointment_id}")

        async with self._locks.hold(current.date):
            day = await self._read(current.date)
            updated: Appointment | None = None
            for index, appointment in enumerate(day):
                if appointment.id == appointment_id:
                    updated = appointment.with_status(status, updated_at=updated_at, completed_at=completed_at)
                    day[index] = updated
            if updated is None:
                raise AppointmentNotFoundError(f"Appointment not found: {appointment_id}")
            await asyncio.to_thread(self._save_day, current.date, [self._serialize(a) for a in day])
        return updated

    async def list_for_employee(
        self,
        employee_id: str,
        date: str | None = None,
        statuses: frozenset[AppointmentStatus] | None = None,
    ) -> list[Appointment]:
        candidates = await self._read(date) if date else await self._read_all()
        return [
            a
            for a in candidates
            if a.employee_id == employee_id and (statuses is None or a.status in statuses)
        ]

    async def list_for_customer(self, customer_id: str) -> list[Appointment]:
        return [a for a in await self._read_all() if a.customer_id == customer_id]


def _parse_datetime(value: str | None) -> datetime | None:
    if not value:
        return None
    try:
        return datetime.fromisoformat(value)
    except (ValueError, TypeError):
        return None
