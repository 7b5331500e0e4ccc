from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class UserRole(str, Enum):
    customer = "customer"
    barber = "barber"
    employee = "employee"
    admin = "admin"

    @staticmethod
    def from_value(value: str | None) -> "UserRole":
        normalized = str(value or "").strip().lower()
        # Older customer documents were written with role "user".
        if normalized in ("", "user"):
            return UserRole.customer
        return UserRole(normalized)


STAFF_ROLES = frozenset({UserRole.barber, UserRole.employee})


@dataclass(frozen=True)
class UserAccount:
    id: str
    role: UserRole
    first_name: str = ""
    last_name: str = ""
    email: str | None = None

    @property
    def display_name(self) -> str:
        return f"{self.first_name} {self.last_name}".strip() or self.id

    @property
    def is_staff(self) -> bool:
        return self.role in STAFF_ROLES
