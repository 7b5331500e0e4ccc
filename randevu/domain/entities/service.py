from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Service:
    name: str  # identifier within one provider's catalog
    price: float
    duration: int  # minutes
