"""
Tests for the availability engine composed over the catalog and the store.
"""

from __future__ import annotations

import asyncio
from datetime import datetime, timezone

import pytest

from conftest import BUSINESS_TZ, MONDAY, NOW, SATURDAY, SUNDAY, build_app, make_appointment
from randevu.application.exceptions import AvailabilityUnavailableError, StorageError
from randevu.application.use_cases.availability import AvailabilityUseCase
from randevu.domain.entities.appointment import AppointmentStatus
from randevu.infrastructure.store.memory_store import MemoryAppointmentStore


def test_employee_slots_follow_own_hours_and_services(app):
    slots = asyncio.run(app.availability.list_available_slots("barber-1", "emp-1", "Saç Kesimi", MONDAY))

    assert slots == ["10:00", "10:30", "11:00", "11:30"]


def test_owner_uses_legacy_string_hours(app):
    slots = asyncio.run(app.availability.list_available_slots("barber-1", "barber-1", "Sakal Tıraşı", SATURDAY))

    assert slots[0] == "09:00"
    assert slots[-1] == "17:00"


def test_default_hours_apply_when_none_configured(app):
    slots = asyncio.run(app.availability.list_available_slots("barber-1", "emp-2", "Saç Kesimi", SATURDAY))

    assert slots[0] == "10:00"
    assert slots[-1] == "15:30"


def test_closed_days_have_no_slots(app):
    tuesday = MONDAY.replace(day=7)

    assert asyncio.run(app.availability.list_available_slots("barber-1", "emp-1", "Saç Kesimi", tuesday)) == []
    assert asyncio.run(app.availability.list_available_slots("barber-1", "barber-1", "Saç Kesimi", SUNDAY)) == []


def test_unknown_service_or_employee_yields_nothing(app):
    assert asyncio.run(app.availability.list_available_slots("barber-1", "emp-1", "Sakal Tıraşı", MONDAY)) == []
    assert asyncio.run(app.availability.list_available_slots("barber-1", "nobody", "Saç Kesimi", MONDAY)) == []
    # Employee of another barbershop.
    assert asyncio.run(app.availability.list_available_slots("barber-2", "emp-1", "Saç Kesimi", MONDAY)) == []
    # Customers are not bookable.
    assert asyncio.run(app.availability.list_available_slots("barber-1", "cust-1", "Saç Kesimi", MONDAY)) == []


def test_existing_appointments_remove_overlapping_slots(app, store):
    async def scenario():
        await store.insert_if_available(make_appointment("a1", "10:30", 45))
        return await app.availability.list_available_slots("barber-1", "emp-1", "Saç Kesimi", MONDAY)

    assert asyncio.run(scenario()) == ["10:00", "11:30"]


def test_employee_isolation(app, store):
    """Bookings of one employee never reduce another employee's slots."""

    async def scenario():
        await store.insert_if_available(make_appointment("a1", "10:00", 30, employee_id="emp-2"))
        await store.insert_if_available(make_appointment("a2", "11:00", 30, employee_id="barber-1"))
        return await app.availability.list_available_slots("barber-1", "emp-1", "Saç Kesimi", MONDAY)

    assert asyncio.run(scenario()) == ["10:00", "10:30", "11:00", "11:30"]


@pytest.mark.parametrize("status", [AppointmentStatus.rejected, AppointmentStatus.cancelled])
def test_terminal_appointments_do_not_reduce_availability(app, store, status):
    async def scenario():
        await store.insert_if_available(make_appointment("a1", "10:00", 30))
        await store.update_status("a1", status, updated_at=None)
        return await app.availability.list_available_slots("barber-1", "emp-1", "Saç Kesimi", MONDAY)

    assert "10:00" in asyncio.run(scenario())


class HangingStore(MemoryAppointmentStore):
    async def list_blocking(self, provider_id, date):
        await asyncio.sleep(10)
        return []


class BrokenStore(MemoryAppointmentStore):
    async def list_blocking(self, provider_id, date):
        raise StorageError("connection reset")


@pytest.mark.parametrize("store_cls", [HangingStore, BrokenStore])
def test_failed_fetch_fails_closed(documents, store_cls):
    availability = AvailabilityUseCase(
        catalog=documents,
        store=store_cls(),
        timezone=BUSINESS_TZ,
        fetch_timeout_seconds=0.05,
        clock=lambda: NOW,
    )

    with pytest.raises(AvailabilityUnavailableError):
        asyncio.run(availability.list_available_slots("barber-1", "emp-1", "Saç Kesimi", MONDAY))


def test_each_call_reads_fresh_appointments(app, store):
    async def scenario():
        before = await app.availability.list_available_slots("barber-1", "emp-1", "Saç Kesimi", MONDAY)
        await store.insert_if_available(make_appointment("a1", "11:00", 30))
        after = await app.availability.list_available_slots("barber-1", "emp-1", "Saç Kesimi", MONDAY)
        return before, after

    before, after = asyncio.run(scenario())
    assert "11:00" in before
    assert "11:00" not in after


class RecordingStore(MemoryAppointmentStore):
    def __init__(self) -> None:
        super().__init__()
        self.queried: list[tuple[str, str]] = []

    async def list_blocking(self, provider_id, date):
        self.queried.append((provider_id, date))
        return await super().list_blocking(provider_id, date)


def test_blocking_appointments_are_read_by_barbershop(documents, sink):
    """The owner's id scopes the appointment read, for employees and owners alike."""
    store = RecordingStore()
    app = build_app(documents, store, sink)

    asyncio.run(app.availability.list_available_slots("barber-1", "emp-1", "Saç Kesimi", MONDAY))
    asyncio.run(app.availability.list_available_slots("barber-1", "barber-1", "Saç Kesimi", MONDAY))

    assert store.queried == [("barber-1", "2025-01-06"), ("barber-1", "2025-01-06")]


def test_employee_id_is_not_a_barbershop(app):
    assert asyncio.run(app.availability.list_available_slots("emp-1", "emp-1", "Saç Kesimi", MONDAY)) == []


def test_past_dates_have_no_slots(documents, store, sink):
    app = build_app(documents, store, sink, now=datetime(2025, 1, 7, 8, 0, tzinfo=BUSINESS_TZ))

    assert asyncio.run(app.availability.list_available_slots("barber-1", "emp-1", "Saç Kesimi", MONDAY)) == []


def test_today_offers_only_times_after_now(documents, store, sink):
    app = build_app(documents, store, sink, now=datetime(2025, 1, 6, 10, 45, tzinfo=BUSINESS_TZ))

    slots = asyncio.run(app.availability.list_available_slots("barber-1", "emp-1", "Saç Kesimi", MONDAY))

    assert slots == ["11:00", "11:30"]


def test_slot_starting_now_is_not_offered(documents, store, sink):
    app = build_app(documents, store, sink, now=datetime(2025, 1, 6, 11, 0, tzinfo=BUSINESS_TZ))

    slots = asyncio.run(app.availability.list_available_slots("barber-1", "emp-1", "Saç Kesimi", MONDAY))

    assert slots == ["11:30"]


def test_clock_is_read_in_business_timezone(documents, store, sink):
    """07:45 UTC is 10:45 in Istanbul."""
    utc_now = datetime(2025, 1, 6, 7, 45, tzinfo=timezone.utc)
    app = build_app(documents, store, sink, now=utc_now)

    slots = asyncio.run(app.availability.list_available_slots("barber-1", "emp-1", "Saç Kesimi", MONDAY))

    assert slots == ["11:00", "11:30"]


def test_next_day_is_unaffected_by_late_clock(documents, store, sink):
    late = datetime(2025, 1, 5, 23, 59, tzinfo=BUSINESS_TZ)
    app = build_app(documents, store, sink, now=late)

    slots = asyncio.run(app.availability.list_available_slots("barber-1", "emp-1", "Saç Kesimi", MONDAY))

    assert slots == ["10:00", "10:30", "11:00", "11:30"]


def test_past_date_does_not_touch_storage(documents):
    availability = AvailabilityUseCase(
        catalog=documents,
        store=BrokenStore(),
        timezone=BUSINESS_TZ,
        clock=lambda: datetime(2025, 2, 1, 12, 0, tzinfo=BUSINESS_TZ),
    )

    assert asyncio.run(availability.list_available_slots("barber-1", "emp-1", "Saç Kesimi", MONDAY)) == []


def test_slots_for_resolves_closed_day_from_schedule(app, documents):
    """slots_for looks the weekday up itself; a closed day yields nothing."""
    tuesday = MONDAY.replace(day=7)

    async def scenario():
        employee = await documents.get_provider("emp-1")
        service = employee.find_service("Saç Kesimi")
        return (
            await app.availability.slots_for(employee, service, MONDAY),
            await app.availability.slots_for(employee, service, tuesday),
        )

    monday, closed = asyncio.run(scenario())
    assert monday == ["10:00", "10:30", "11:00", "11:30"]
    assert closed == []
