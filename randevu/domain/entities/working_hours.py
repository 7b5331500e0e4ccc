from __future__ import annotations

from dataclasses import dataclass
from types import MappingProxyType
from typing import Mapping

# Index matches date.weekday(): Monday == 0.
WEEKDAY_LABELS: tuple[str, ...] = (
    "Pazartesi",
    "Salı",
    "Çarşamba",
    "Perşembe",
    "Cuma",
    "Cumartesi",
    "Pazar",
)


@dataclass(frozen=True)
class DayHours:
    start: str
    end: str
    is_closed: bool = False

    @staticmethod
    def closed() -> "DayHours":
        return DayHours(start="00:00", end="00:00", is_closed=True)


@dataclass(frozen=True)
class WeeklySchedule:
    days: Mapping[str, DayHours]

    def __post_init__(self) -> None:
        missing = [label for label in WEEKDAY_LABELS if label not in self.days]
        if missing:
            raise ValueError(f"schedule is missing weekdays: {', '.join(missing)}")
        object.__setattr__(
            self, "days", MappingProxyType({label: self.days[label] for label in WEEKDAY_LABELS})
        )

    def day(self, label: str) -> DayHours | None:
        return self.days.get(label)
