from datetime import date, datetime
from pydantic import BaseModel, Field

from randevu.domain.entities.appointment import Appointment, AppointmentStatus


class AvailabilityResponseSchema(BaseModel):
    provider_id: str
    employee_id: str
    service: str
    date: date
    slots: list[str]


class AppointmentCreateSchema(BaseModel):
    provider_id: str
    employee_id: str
    service: str
    date: date
    time: str = Field(pattern=r"^\d{1,2}:\d{2}$")


class StatusUpdateSchema(BaseModel):
    status: AppointmentStatus


class AppointmentSchema(BaseModel):
    id: str
    customer_id: str
    provider_id: str
    employee_id: str
    service: str
    date: str
    time: str
    duration: int
    price: float
    status: AppointmentStatus
    created_at: datetime | None = None
    updated_at: datetime | None = None
    completed_at: datetime | None = None

    @staticmethod
    def from_entity(appointment: Appointment) -> "AppointmentSchema":
        return AppointmentSchema(
            id=appointment.id,
            customer_id=appointment.customer_id,
            provider_id=appointment.provider_id,
            employee_id=appointment.employee_id,
            service=appointment.service_name,
            date=appointment.date,
            time=appointment.time,
            duration=appointment.duration_minutes,
            price=appointment.price,
            status=appointment.status,
            created_at=appointment.created_at,
            updated_at=appointment.updated_at,
            completed_at=appointment.completed_at,
        )
