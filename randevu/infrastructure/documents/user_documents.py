from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Mapping

from randevu.application.ports.provider_catalog import ProviderCatalogPort
from randevu.application.ports.user_directory import UserDirectoryPort
from randevu.application.utils.working_hours import resolve_working_hours
from randevu.domain.entities.provider import Provider
from randevu.domain.entities.service import Service
from randevu.domain.entities.user import UserAccount, UserRole

logger = logging.getLogger(__name__)


class UserDocumentStore(ProviderCatalogPort, UserDirectoryPort):
    """
    Read side of the "users" document collection.

    Customers, barbers and employees share one collection and are told apart
    by their role field. Working hours are resolved here, once, so the rest of
    the application only ever sees a full WeeklySchedule.
    """

    def __init__(self, documents: Mapping[str, Mapping[str, Any]] | None = None) -> None:
        self._documents: dict[str, Mapping[str, Any]] = dict(documents or {})

    @classmethod
    def from_json_file(cls, path: str) -> "UserDocumentStore":
        file_path = Path(path)
        if not file_path.exists():
            logger.warning("Users file not found, starting empty", extra={"path": str(file_path)})
            return cls()
        with open(file_path, "r", encoding="utf-8") as f:
            data = json.load(f)
        return cls(data.get("users", data))

    def put(self, user_id: str, document: Mapping[str, Any]) -> None:
        self._documents[user_id] = document

    async def get_user(self, user_id: str) -> UserAccount | None:
        document = self._documents.get(user_id)
        if document is None:
            return None
        try:
            return user_from_document(user_id, document)
        except ValueError:
            logger.warning("Unknown role on user document", extra={"user_id": user_id})
            return None

    async def get_provider(self, provider_id: str) -> Provider | None:
        document = self._documents.get(provider_id)
        if document is None:
            return None
        user = await self.get_user(provider_id)
        if user is None or not user.is_staff:
            return None
        return provider_from_document(provider_id, document)


def user_from_document(user_id: str, document: Mapping[str, Any]) -> UserAccount:
    return UserAccount(
        id=user_id,
        role=UserRole.from_value(document.get("role")),
        first_name=str(document.get("firstName") or ""),
        last_name=str(document.get("lastName") or ""),
        email=document.get("email"),
    )


def provider_from_document(provider_id: str, document: Mapping[str, Any]) -> Provider:
    role = UserRole.from_value(document.get("role"))
    shop_id = provider_id
    if role == UserRole.employee:
        shop_id = str(document.get("barberId") or provider_id)

    return Provider(
        id=provider_id,
        role=role,
        shop_id=shop_id,
        schedule=resolve_working_hours(document.get("workingHours")),
        services=tuple(_parse_services(provider_id, document.get("services") or [])),
        first_name=str(document.get("firstName") or ""),
        last_name=str(document.get("lastName") or ""),
    )


def _parse_services(provider_id: str, raw_services: list[Any]) -> list[Service]:
    services: list[Service] = []
    for raw in raw_services:
        try:
            services.append(
                Service(
                    name=str(raw["name"]),
                    price=float(raw["price"]),
                    duration=int(raw["duration"]),
                )
            )
        except (KeyError, TypeError, ValueError):
            logger.warning("Skipping malformed service", extra={"provider_id": provider_id})
    return services
