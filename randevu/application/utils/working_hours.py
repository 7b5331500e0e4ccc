"""Normalization of configured working hours into a full weekly schedule."""
from __future__ import annotations

import logging
import re
from datetime import date
from typing import Any, Mapping

from randevu.domain.entities.working_hours import WEEKDAY_LABELS, DayHours, WeeklySchedule

logger = logging.getLogger(__name__)

_TIME_RE = re.compile(r"^([01]?\d|2[0-3]):([0-5]\d)$")

DEFAULT_DAY_HOURS: dict[str, DayHours] = {
    "Pazartesi": DayHours("09:00", "18:00"),
    "Salı": DayHours("09:00", "18:00"),
    "Çarşamba": DayHours("09:00", "18:00"),
    "Perşembe": DayHours("09:00", "18:00"),
    "Cuma": DayHours("09:00", "18:00"),
    "Cumartesi": DayHours("10:00", "16:00"),
    "Pazar": DayHours.closed(),
}

DEFAULT_SCHEDULE = WeeklySchedule(DEFAULT_DAY_HOURS)

SUNDAY = WEEKDAY_LABELS[6]


def weekday_key(day: date) -> str:
    """Schedule key for a date. Always one of WEEKDAY_LABELS."""
    return WEEKDAY_LABELS[day.weekday()]


def normalize_time(value: Any) -> str | None:
    """Return a zero-padded HH:MM string, or None when the value is not a clock time."""
    if not isinstance(value, str):
        return None
    match = _TIME_RE.match(value.strip())
    if not match:
        return None
    return f"{int(match.group(1)):02d}:{match.group(2)}"


def resolve_working_hours(raw: str | Mapping[str, Any] | WeeklySchedule | None) -> WeeklySchedule:
    """
    Expand stored working hours into a schedule with all seven weekdays.

    Accepts nothing (system default), the legacy "HH:MM-HH:MM" string
    (Monday-Saturday open, Sunday closed) or a per-day mapping whose missing
    days are taken from the default. Unparsable hours close the day.
    """
    if raw is None:
        return DEFAULT_SCHEDULE
    if isinstance(raw, WeeklySchedule):
        return raw
    if isinstance(raw, str):
        return _expand_legacy(raw)
    if isinstance(raw, Mapping):
        return _merge_day_map(raw)

    logger.warning("Unsupported working hours shape", extra={"error": type(raw).__name__})
    return WeeklySchedule({label: DayHours.closed() for label in WEEKDAY_LABELS})


def _expand_legacy(raw: str) -> WeeklySchedule:
    start_raw, sep, end_raw = raw.partition("-")
    start = normalize_time(start_raw)
    end = normalize_time(end_raw)
    if not sep or start is None or end is None:
        logger.warning("Malformed working hours string", extra={"error": raw})
        return WeeklySchedule({label: DayHours.closed() for label in WEEKDAY_LABELS})

    days = {label: DayHours(start, end) for label in WEEKDAY_LABELS if label != SUNDAY}
    days[SUNDAY] = DayHours.closed()
    return WeeklySchedule(days)


def _merge_day_map(raw: Mapping[str, Any]) -> WeeklySchedule:
    days: dict[str, DayHours] = {}
    for label in WEEKDAY_LABELS:
        entry = raw.get(label)
        if entry is None:
            days[label] = DEFAULT_DAY_HOURS[label]
        else:
            days[label] = _parse_day_entry(label, entry)
    return WeeklySchedule(days)


def _parse_day_entry(label: str, entry: Any) -> DayHours:
    if isinstance(entry, DayHours):
        return entry
    if not isinstance(entry, Mapping):
        logger.warning("Malformed working hours entry", extra={"error": label})
        return DayHours.closed()

    is_closed = bool(entry.get("isClosed", entry.get("is_closed", False)))
    if is_closed:
        return DayHours.closed()

    start = normalize_time(entry.get("start"))
    end = normalize_time(entry.get("end"))
    if start is None or end is None:
        logger.warning("Malformed working hours entry", extra={"error": label})
        return DayHours.closed()
    return DayHours(start, end)
