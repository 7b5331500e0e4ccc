from functools import lru_cache
import logging
from zoneinfo import ZoneInfo

from randevu.core.config import settings
from randevu.application.ports.appointment_store import AppointmentStorePort
from randevu.application.ports.notification_sink import NotificationSinkPort
from randevu.application.use_cases.appointment_queue import AppointmentQueueUseCase
from randevu.application.use_cases.appointment_status import AppointmentStatusUseCase
from randevu.application.use_cases.availability import AvailabilityUseCase
from randevu.application.use_cases.booking import BookingUseCase
from randevu.application.use_cases.notify import NotificationDispatcher
from randevu.infrastructure.documents.user_documents import UserDocumentStore
from randevu.infrastructure.notifications.http_sink import HttpNotificationSink
from randevu.infrastructure.notifications.memory_sink import MemoryNotificationSink
from randevu.infrastructure.store.json_store import JsonAppointmentStore
from randevu.infrastructure.store.memory_store import MemoryAppointmentStore


_appointment_store: AppointmentStorePort | None = None


def get_appointment_store() -> AppointmentStorePort:
    global _appointment_store
    if _appointment_store is None:
        if settings.ENV.lower() in {"dev", "local"}:
            _appointment_store = JsonAppointmentStore(data_dir=settings.DATA_DIR)
        else:
            _appointment_store = MemoryAppointmentStore()
    return _appointment_store


@lru_cache
def get_user_documents() -> UserDocumentStore:
    return UserDocumentStore.from_json_file(settings.USERS_FILE)


_notification_sink: NotificationSinkPort | None = None
_notification_dispatcher: NotificationDispatcher | None = None


def get_notification_sink() -> NotificationSinkPort:
    global _notification_sink
    if _notification_sink is None:
        if not settings.NOTIFICATION_WEBHOOK_URL:
            logging.getLogger(__name__).info("Using MemoryNotificationSink (NOTIFICATION_WEBHOOK_URL not set)")
            _notification_sink = MemoryNotificationSink()
        else:
            _notification_sink = HttpNotificationSink(
                endpoint=settings.NOTIFICATION_WEBHOOK_URL,
                timeout=settings.NOTIFICATION_TIMEOUT_SECONDS,
            )
    return _notification_sink


def get_notification_dispatcher() -> NotificationDispatcher:
    global _notification_dispatcher
    if _notification_dispatcher is None:
        _notification_dispatcher = NotificationDispatcher(sink=get_notification_sink())
    return _notification_dispatcher


async def shutdown_notifications() -> None:
    """Wait for in-flight notifications, then release the sink's connections."""
    if _notification_dispatcher is not None:
        await _notification_dispatcher.drain()
    if _notification_sink is not None:
        await _notification_sink.aclose()


def get_timezone() -> ZoneInfo:
    return ZoneInfo(settings.BUSINESS_TIMEZONE)


def get_availability_use_case() -> AvailabilityUseCase:
    return AvailabilityUseCase(
        catalog=get_user_documents(),
        store=get_appointment_store(),
        timezone=get_timezone(),
        step_minutes=settings.SLOT_STEP_MINUTES,
        fetch_timeout_seconds=settings.STORE_TIMEOUT_SECONDS,
    )


def get_booking_use_case() -> BookingUseCase:
    return BookingUseCase(
        availability=get_availability_use_case(),
        store=get_appointment_store(),
        users=get_user_documents(),
        notifications=get_notification_dispatcher(),
    )


def get_appointment_status_use_case() -> AppointmentStatusUseCase:
    return AppointmentStatusUseCase(
        store=get_appointment_store(),
        notifications=get_notification_dispatcher(),
        timezone=get_timezone(),
    )


def get_appointment_queue_use_case() -> AppointmentQueueUseCase:
    return AppointmentQueueUseCase(store=get_appointment_store())
