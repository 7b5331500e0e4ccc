from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class NotificationType(str, Enum):
    appointment = "appointment"
    review_request = "review_request"
    system = "system"


@dataclass(frozen=True)
class Notification:
    user_id: str
    title: str
    message: str
    type: NotificationType = NotificationType.appointment
    data: dict[str, Any] = field(default_factory=dict)
    read: bool = False
