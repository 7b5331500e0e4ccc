from __future__ import annotations

from datetime import date, datetime
from types import SimpleNamespace
from zoneinfo import ZoneInfo

import pytest

from randevu.application.use_cases.appointment_queue import AppointmentQueueUseCase
from randevu.application.use_cases.appointment_status import AppointmentStatusUseCase
from randevu.application.use_cases.availability import AvailabilityUseCase
from randevu.application.use_cases.booking import BookingUseCase
from randevu.application.use_cases.notify import NotificationDispatcher
from randevu.domain.entities.appointment import Appointment, AppointmentStatus
from randevu.infrastructure.documents.user_documents import UserDocumentStore
from randevu.infrastructure.notifications.memory_sink import MemoryNotificationSink
from randevu.infrastructure.store.memory_store import MemoryAppointmentStore

MONDAY = date(2025, 1, 6)
SATURDAY = date(2025, 1, 11)
SUNDAY = date(2025, 1, 12)

BUSINESS_TZ = ZoneInfo("Europe/Istanbul")
# Wall clock for use cases built by build_app: before every test date above.
NOW = datetime(2025, 1, 1, 9, 0, tzinfo=BUSINESS_TZ)


def make_documents() -> dict[str, dict]:
    return {
        "barber-1": {
            "role": "barber",
            "firstName": "Ahmet",
            "lastName": "Yılmaz",
            "workingHours": "09:00-18:00",
            "services": [
                {"name": "Saç Kesimi", "price": 250, "duration": 30},
                {"name": "Sakal Tıraşı", "price": 150, "duration": 45},
            ],
        },
        "emp-1": {
            "role": "employee",
            "barberId": "barber-1",
            "firstName": "Mehmet",
            "lastName": "Kaya",
            "workingHours": {
                "Pazartesi": {"start": "10:00", "end": "12:00", "isClosed": False},
                "Salı": {"start": "00:00", "end": "00:00", "isClosed": True},
            },
            "services": [
                {"name": "Saç Kesimi", "price": 200, "duration": 30},
                {"name": "Fön", "price": 100, "duration": 45},
            ],
        },
        "emp-2": {
            "role": "employee",
            "barberId": "barber-1",
            "firstName": "Ali",
            "lastName": "Demir",
            "services": [{"name": "Saç Kesimi", "price": 200, "duration": 30}],
        },
        "barber-2": {
            "role": "barber",
            "firstName": "Can",
            "lastName": "Öz",
            "services": [{"name": "Saç Kesimi", "price": 300, "duration": 30}],
        },
        "cust-1": {"role": "customer", "firstName": "Ayşe", "lastName": "Çelik", "email": "ayse@example.com"},
        "cust-2": {"role": "user", "firstName": "Zeynep", "lastName": "Ak"},
    }


def make_appointment(
    appointment_id: str,
    time: str,
    duration: int = 30,
    employee_id: str = "emp-1",
    status: AppointmentStatus = AppointmentStatus.pending,
    day: date = MONDAY,
    customer_id: str = "cust-1",
) -> Appointment:
    return Appointment(
        id=appointment_id,
        customer_id=customer_id,
        provider_id="barber-1",
        employee_id=employee_id,
        service_name="Saç Kesimi",
        date=day.isoformat(),
        time=time,
        duration_minutes=duration,
        price=200,
        status=status,
    )


@pytest.fixture
def documents() -> UserDocumentStore:
    return UserDocumentStore(make_documents())


@pytest.fixture
def store() -> MemoryAppointmentStore:
    return MemoryAppointmentStore()


@pytest.fixture
def sink() -> MemoryNotificationSink:
    return MemoryNotificationSink()


def build_app(documents, store, sink, now: datetime = NOW) -> SimpleNamespace:
    dispatcher = NotificationDispatcher(sink=sink)
    availability = AvailabilityUseCase(
        catalog=documents,
        store=store,
        timezone=BUSINESS_TZ,
        step_minutes=30,
        fetch_timeout_seconds=1.0,
        clock=lambda: now,
    )
    return SimpleNamespace(
        dispatcher=dispatcher,
        availability=availability,
        booking=BookingUseCase(
            availability=availability,
            store=store,
            users=documents,
            notifications=dispatcher,
        ),
        status=AppointmentStatusUseCase(store=store, notifications=dispatcher, timezone=BUSINESS_TZ),
        queue=AppointmentQueueUseCase(store=store),
    )


@pytest.fixture
def app(documents, store, sink) -> SimpleNamespace:
    return build_app(documents, store, sink)
