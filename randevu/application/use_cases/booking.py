from __future__ import annotations

import logging
import uuid
from datetime import date

from randevu.application.exceptions import (
    CustomerNotFoundError,
    ProviderNotFoundError,
    RoleViolationError,
    ServiceNotFoundError,
    SlotUnavailableError,
)
from randevu.application.ports.appointment_store import AppointmentStorePort
from randevu.application.ports.user_directory import UserDirectoryPort
from randevu.application.use_cases.availability import AvailabilityUseCase
from randevu.application.use_cases.notify import NotificationDispatcher
from randevu.application.utils.working_hours import normalize_time
from randevu.domain.entities.appointment import Appointment, AppointmentStatus
from randevu.domain.entities.notification import Notification, NotificationType
from randevu.domain.entities.provider import Provider
from randevu.domain.entities.user import UserAccount, UserRole


class BookingUseCase:
    def __init__(
        self,
        availability: AvailabilityUseCase,
        store: AppointmentStorePort,
        users: UserDirectoryPort,
        notifications: NotificationDispatcher,
    ) -> None:
        self._availability = availability
        self._store = store
        self._users = users
        self._notifications = notifications
        self._logger = logging.getLogger(__name__)

    async def create_appointment(
        self,
        customer_id: str,
        provider_id: str,
        employee_id: str,
        service_name: str,
        day: date,
        time: str,
    ) -> Appointment:
        """
        Book a pending appointment for a customer.

        The slot is re-validated against fresh availability and then inserted
        through the store's atomic conflict check, so a slot taken by another
        client in the meantime raises SlotUnavailableError.
        """
        customer = await self._users.get_user(customer_id)
        if customer is None:
            raise CustomerNotFoundError("Customer account not found")
        if customer.role != UserRole.customer:
            self._logger.warning(
                "Non-customer account attempted to book",
                extra={"user_id": customer_id, "role": customer.role.value},
            )
            raise RoleViolationError("Only customer accounts can book appointments")

        employee = await self._availability.find_employee(provider_id, employee_id)
        if employee is None:
            raise ProviderNotFoundError("Employee not found for this barbershop")
        service = employee.find_service(service_name)
        if service is None:
            raise ServiceNotFoundError(f"Service not offered: {service_name}")

        slot = normalize_time(time)
        if slot is None or slot not in await self._availability.slots_for(employee, service, day):
            raise SlotUnavailableError("Selected time is not available")

        now = self._availability.now()
        appointment = Appointment(
            id=uuid.uuid4().hex,
            customer_id=customer.id,
            provider_id=employee.shop_id,
            employee_id=employee.id,
            service_name=service.name,
            date=day.isoformat(),
            time=slot,
            duration_minutes=service.duration,
            price=service.price,
            status=AppointmentStatus.pending,
            created_at=now,
            updated_at=now,
        )
        saved = await self._store.insert_if_available(appointment)

        self._logger.info(
            "Appointment created",
            extra={
                "appointment_id": saved.id,
                "employee_id": saved.employee_id,
                "date": saved.date,
                "time": saved.time,
            },
        )
        self._notify_created(saved, customer, employee)
        return saved

    def _notify_created(self, appointment: Appointment, customer: UserAccount, employee: Provider) -> None:
        data = {"appointmentId": appointment.id}
        self._notifications.dispatch(
            Notification(
                user_id=customer.id,
                title="Randevu Talebi",
                message=f"{employee.display_name} ile randevunuz oluşturuldu.",
                type=NotificationType.appointment,
                data=data,
            )
        )
        # The shop owner sees requests on the dashboard; only employees are notified.
        if not employee.is_owner:
            self._notifications.dispatch(
                Notification(
                    user_id=employee.id,
                    title="Yeni Randevu Talebi",
                    message=f"{customer.display_name} sizinle randevu oluşturdu.",
                    type=NotificationType.appointment,
                    data=data,
                )
            )
