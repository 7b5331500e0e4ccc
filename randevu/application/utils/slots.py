from __future__ import annotations

from typing import Iterable

from randevu.domain.entities.appointment import BLOCKING_STATUSES, Appointment
from randevu.domain.entities.working_hours import DayHours

DEFAULT_STEP_MINUTES = 30


def to_minutes(value: str) -> int:
    """Minutes since midnight for an "HH:MM" string."""
    hour_raw, sep, minute_raw = value.strip().partition(":")
    if not sep:
        raise ValueError(f"bad time value: {value}")
    hour = int(hour_raw)
    minute = int(minute_raw)
    if not (0 <= hour <= 24 and 0 <= minute < 60) or (hour == 24 and minute):
        raise ValueError(f"bad time value: {value}")
    return hour * 60 + minute


def format_minutes(minutes: int) -> str:
    return f"{minutes // 60:02d}:{minutes % 60:02d}"


def generate_slots(
    day_hours: DayHours,
    duration_minutes: int,
    step_minutes: int = DEFAULT_STEP_MINUTES,
) -> list[str]:
    """Start times every step_minutes whose whole service fits before closing."""
    if day_hours.is_closed or duration_minutes <= 0 or step_minutes <= 0:
        return []
    try:
        start = to_minutes(day_hours.start)
        end = to_minutes(day_hours.end)
    except ValueError:
        return []

    slots: list[str] = []
    candidate = start
    while candidate + duration_minutes <= end:
        slots.append(format_minutes(candidate))
        candidate += step_minutes
    return slots


def overlaps(start_a: int, end_a: int, start_b: int, end_b: int) -> bool:
    """Half-open [start, end) overlap; touching intervals do not overlap."""
    return start_a < end_b and start_b < end_a


def is_available(
    candidate_start: int,
    duration_minutes: int,
    existing_appointments: Iterable[Appointment],
    target_employee_id: str,
) -> bool:
    candidate_end = candidate_start + duration_minutes
    for appointment in existing_appointments:
        if appointment.employee_id != target_employee_id:
            continue
        if appointment.status not in BLOCKING_STATUSES:
            continue
        try:
            app_start = to_minutes(appointment.time)
        except ValueError:
            continue
        app_end = app_start + appointment.duration_minutes
        if overlaps(candidate_start, candidate_end, app_start, app_end):
            return False
    return True
