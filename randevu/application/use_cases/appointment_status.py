from __future__ import annotations

import logging
from datetime import datetime
from zoneinfo import ZoneInfo

from randevu.application.exceptions import (
    AppointmentNotFoundError,
    InvalidTransitionError,
    NotAssignedError,
)
from randevu.application.ports.appointment_store import AppointmentStorePort
from randevu.application.use_cases.notify import NotificationDispatcher
from randevu.domain.entities.appointment import Appointment, AppointmentStatus, can_transition
from randevu.domain.entities.notification import Notification, NotificationType

STATUS_MESSAGES = {
    AppointmentStatus.confirmed: "Randevunuz onaylandı.",
    AppointmentStatus.rejected: "Randevunuz reddedildi.",
    AppointmentStatus.cancelled: "Randevunuz iptal edildi.",
    AppointmentStatus.completed: "Randevunuz tamamlandı olarak işaretlendi.",
}


class AppointmentStatusUseCase:
    def __init__(
        self,
        store: AppointmentStorePort,
        notifications: NotificationDispatcher,
        timezone: ZoneInfo,
    ) -> None:
        self._store = store
        self._notifications = notifications
        self._timezone = timezone
        self._logger = logging.getLogger(__name__)

    async def get_appointment(self, appointment_id: str) -> Appointment:
        appointment = await self._store.get(appointment_id)
        if appointment is None:
            raise AppointmentNotFoundError(f"Appointment not found: {appointment_id}")
        return appointment

    async def update_status(
        self,
        appointment_id: str,
        actor_id: str,
        new_status: AppointmentStatus,
    ) -> Appointment:
        """
        Move an appointment to a new status on behalf of its assigned staff.
        Notifications go out after the write and cannot undo it.
        """
        appointment = await self.get_appointment(appointment_id)
        if actor_id not in (appointment.employee_id, appointment.provider_id):
            raise NotAssignedError("Only the assigned barber or employee can change this appointment")
        if not can_transition(appointment.status, new_status):
            raise InvalidTransitionError(
                f"Cannot change appointment from {appointment.status.value} to {new_status.value}"
            )

        now = datetime.now(self._timezone)
        updated = await self._store.update_status(
            appointment_id,
            new_status,
            updated_at=now,
            completed_at=now if new_status == AppointmentStatus.completed else None,
        )
        self._logger.info(
            "Appointment status updated",
            extra={"appointment_id": appointment_id, "status": new_status.value},
        )
        self._notify_transition(updated)
        return updated

    def _notify_transition(self, appointment: Appointment) -> None:
        data = {"appointmentId": appointment.id}
        self._notifications.dispatch(
            Notification(
                user_id=appointment.customer_id,
                title="Randevu Durumu Güncellendi",
                message=STATUS_MESSAGES[appointment.status],
                type=NotificationType.appointment,
                data=data,
            )
        )
        if appointment.status == AppointmentStatus.completed:
            self._notifications.dispatch(
                Notification(
                    user_id=appointment.customer_id,
                    title="Değerlendirme",
                    message=f"{appointment.service_name} hizmetinizi değerlendirmek ister misiniz?",
                    type=NotificationType.review_request,
                    data={**data, "barberId": appointment.provider_id},
                )
            )
