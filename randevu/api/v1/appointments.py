from __future__ import annotations

import logging
from datetime import date

from fastapi import APIRouter, Depends, Header, HTTPException, Query

from randevu.api.v1.schemas import (
    AppointmentCreateSchema,
    AppointmentSchema,
    AvailabilityResponseSchema,
    StatusUpdateSchema,
)
from randevu.application.exceptions import (
    AppointmentNotFoundError,
    BookingError,
    CustomerNotFoundError,
    InvalidTransitionError,
    NotAssignedError,
    ProviderNotFoundError,
    RoleViolationError,
    ServiceNotFoundError,
    SlotUnavailableError,
    StorageError,
)
from randevu.application.use_cases.appointment_queue import AppointmentQueueUseCase
from randevu.application.use_cases.appointment_status import AppointmentStatusUseCase
from randevu.application.use_cases.availability import AvailabilityUseCase
from randevu.application.use_cases.booking import BookingUseCase
from randevu.wiring.dependencies import (
    get_appointment_queue_use_case,
    get_appointment_status_use_case,
    get_availability_use_case,
    get_booking_use_case,
)

router = APIRouter()
logger = logging.getLogger(__name__)


def _to_http(e: BookingError | StorageError) -> HTTPException:
    if isinstance(e, StorageError):
        return HTTPException(status_code=503, detail=str(e))
    if isinstance(e, (RoleViolationError, NotAssignedError)):
        return HTTPException(status_code=403, detail=str(e))
    if isinstance(e, (CustomerNotFoundError, ProviderNotFoundError, ServiceNotFoundError, AppointmentNotFoundError)):
        return HTTPException(status_code=404, detail=str(e))
    if isinstance(e, (SlotUnavailableError, InvalidTransitionError)):
        return HTTPException(status_code=409, detail=str(e))
    return HTTPException(status_code=400, detail=str(e))


@router.get(
    "/providers/{provider_id}/employees/{employee_id}/availability",
    response_model=AvailabilityResponseSchema,
)
async def availability(
    provider_id: str,
    employee_id: str,
    service: str = Query(...),
    day: date = Query(..., alias="date"),
    uc: AvailabilityUseCase = Depends(get_availability_use_case),
):
    try:
        slots = await uc.list_available_slots(provider_id, employee_id, service, day)
    except StorageError as e:
        raise _to_http(e)
    return AvailabilityResponseSchema(
        provider_id=provider_id,
        employee_id=employee_id,
        service=service,
        date=day,
        slots=slots,
    )


@router.post("/appointments", response_model=AppointmentSchema, status_code=201)
async def create_appointment(
    req: AppointmentCreateSchema,
    user_id: str = Header(..., alias="X-User-Id"),
    uc: BookingUseCase = Depends(get_booking_use_case),
):
    try:
        appointment = await uc.create_appointment(
            customer_id=user_id,
            provider_id=req.provider_id,
            employee_id=req.employee_id,
            service_name=req.service,
            day=req.date,
            time=req.time,
        )
    except (BookingError, StorageError) as e:
        logger.info("Booking rejected", extra={"user_id": user_id, "reason": type(e).__name__})
        raise _to_http(e)
    return AppointmentSchema.from_entity(appointment)


@router.get("/appointments/{appointment_id}", response_model=AppointmentSchema)
async def get_appointment(
    appointment_id: str,
    uc: AppointmentStatusUseCase = Depends(get_appointment_status_use_case),
):
    try:
        appointment = await uc.get_appointment(appointment_id)
    except (BookingError, StorageError) as e:
        raise _to_http(e)
    return AppointmentSchema.from_entity(appointment)


@router.patch("/appointments/{appointment_id}/status", response_model=AppointmentSchema)
async def update_status(
    appointment_id: str,
    req: StatusUpdateSchema,
    user_id: str = Header(..., alias="X-User-Id"),
    uc: AppointmentStatusUseCase = Depends(get_appointment_status_use_case),
):
    try:
        appointment = await uc.update_status(appointment_id, actor_id=user_id, new_status=req.status)
    except (BookingError, StorageError) as e:
        raise _to_http(e)
    return AppointmentSchema.from_entity(appointment)


@router.get("/employees/{employee_id}/appointments", response_model=list[AppointmentSchema])
async def employee_queue(
    employee_id: str,
    day: date | None = Query(None, alias="date"),
    uc: AppointmentQueueUseCase = Depends(get_appointment_queue_use_case),
):
    try:
        appointments = await uc.list_for_employee(employee_id, date=day.isoformat() if day else None)
    except StorageError as e:
        raise _to_http(e)
    return [AppointmentSchema.from_entity(a) for a in appointments]


@router.get("/customers/{customer_id}/appointments", response_model=list[AppointmentSchema])
async def customer_history(
    customer_id: str,
    uc: AppointmentQueueUseCase = Depends(get_appointment_queue_use_case),
):
    try:
        appointments = await uc.list_for_customer(customer_id)
    except StorageError as e:
        raise _to_http(e)
    return [AppointmentSchema.from_entity(a) for a in appointments]
