from __future__ import annotations

from dataclasses import dataclass, replace
from datetime import datetime
from enum import Enum


class AppointmentStatus(str, Enum):
    pending = "pending"
    confirmed = "confirmed"
    rejected = "rejected"
    completed = "completed"
    cancelled = "cancelled"


# Only these statuses occupy time on an employee's day.
BLOCKING_STATUSES = frozenset({AppointmentStatus.pending, AppointmentStatus.confirmed})

ALLOWED_TRANSITIONS: dict[AppointmentStatus, frozenset[AppointmentStatus]] = {
    AppointmentStatus.pending: frozenset(
        {AppointmentStatus.confirmed, AppointmentStatus.rejected, AppointmentStatus.cancelled}
    ),
    AppointmentStatus.confirmed: frozenset({AppointmentStatus.completed, AppointmentStatus.cancelled}),
    AppointmentStatus.completed: frozenset(),
    AppointmentStatus.rejected: frozenset(),
    AppointmentStatus.cancelled: frozenset(),
}


def can_transition(current: AppointmentStatus, target: AppointmentStatus) -> bool:
    return target in ALLOWED_TRANSITIONS[current]


@dataclass(frozen=True)
class Appointment:
    id: str
    customer_id: str
    provider_id: str
    employee_id: str
    service_name: str
    date: str  # YYYY-MM-DD
    time: str  # HH:MM, provider local time
    duration_minutes: int  # snapshot taken at booking
    price: float  # snapshot taken at booking
    status: AppointmentStatus = AppointmentStatus.pending
    created_at: datetime | None = None
    updated_at: datetime | None = None
    completed_at: datetime | None = None

    @property
    def is_blocking(self) -> bool:
        return self.status in BLOCKING_STATUSES

    @property
    def is_terminal(self) -> bool:
        return not ALLOWED_TRANSITIONS[self.status]

    def with_status(
        self,
        status: AppointmentStatus,
        updated_at: datetime,
        completed_at: datetime | None = None,
    ) -> "Appointment":
        return replace(
            self,
            status=status,
            updated_at=updated_at,
            completed_at=completed_at if completed_at is not None else self.completed_at,
        )
