from datetime import date

from fastapi import APIRouter, Depends, Header, HTTPException, Query

from salon_booking.api.v1.errors import to_http_error
from salon_booking.api.v1.schemas import DeletedSchema
from salon_booking.application.dto.requests import (
    AvailableSlotsRequest,
    CancelAppointmentRequest,
    ConfirmAppointmentRequest,
    CreateAppointmentRequest,
    StatisticsRequest,
    UpdateAppointmentRequest,
)
from salon_booking.application.dto.responses import AppointmentDTO, DayAvailabilityDTO, StatisticsDTO
from salon_booking.domain.entities.appointment_status import AppointmentStatusName
from salon_booking.domain.exceptions import SchedulingError
from salon_booking.wiring.dependencies import Container, get_container

router = APIRouter()


@router.post("/appointments", response_model=AppointmentDTO, status_code=201)
def create_appointment(
    req: CreateAppointmentRequest,
    x_user_id: str = Header(...),
    container: Container = Depends(get_container),
):
    try:
        return container.create_appointment.execute(req, organizer_id=x_user_id)
    except SchedulingError as e:
        raise to_http_error(e)


@router.get("/appointments/statistics", response_model=StatisticsDTO)
def appointment_statistics(
    start_date: date | None = None,
    end_date: date | None = None,
    container: Container = Depends(get_container),
):
    try:
        return container.statistics.execute(StatisticsRequest(start_date=start_date, end_date=end_date))
    except SchedulingError as e:
        raise to_http_error(e)


@router.get("/appointments", response_model=list[AppointmentDTO])
def list_appointments(
    client_id: str | None = None,
    stylist_id: str | None = None,
    container: Container = Depends(get_container),
):
    if not client_id and not stylist_id:
        raise HTTPException(status_code=400, detail="Either client_id or stylist_id is required")
    try:
        if client_id:
            return container.get_appointments.list_by_client(client_id)
        return container.get_appointments.list_by_stylist(stylist_id)
    except SchedulingError as e:
        raise to_http_error(e)


@router.get("/appointments/{appointment_id}", response_model=AppointmentDTO)
def get_appointment(appointment_id: str, container: Container = Depends(get_container)):
    try:
        return container.get_appointments.get_by_id(appointment_id)
    except SchedulingError as e:
        raise to_http_error(e)


@router.patch("/appointments/{appointment_id}", response_model=AppointmentDTO)
def update_appointment(
    appointment_id: str,
    req: UpdateAppointmentRequest,
    x_user_id: str = Header(...),
    container: Container = Depends(get_container),
):
    try:
        return container.update_appointment.execute(appointment_id, req, requester_id=x_user_id)
    except SchedulingError as e:
        raise to_http_error(e)


@router.delete("/appointments/{appointment_id}", response_model=DeletedSchema)
def delete_appointment(
    appointment_id: str,
    x_user_id: str = Header(...),
    container: Container = Depends(get_container),
):
    try:
        container.delete_appointment.execute(appointment_id, requester_id=x_user_id)
    except SchedulingError as e:
        raise to_http_error(e)
    return DeletedSchema(id=appointment_id)


@router.post("/appointments/{appointment_id}/confirm", response_model=AppointmentDTO)
def confirm_appointment(
    appointment_id: str,
    req: ConfirmAppointmentRequest | None = None,
    x_user_id: str = Header(...),
    container: Container = Depends(get_container),
):
    try:
        return container.confirm_appointment.execute(
            appointment_id, req or ConfirmAppointmentRequest(), requester_id=x_user_id
        )
    except SchedulingError as e:
        raise to_http_error(e)


@router.post("/appointments/{appointment_id}/cancel", response_model=AppointmentDTO)
def cancel_appointment(
    appointment_id: str,
    req: CancelAppointmentRequest | None = None,
    x_user_id: str = Header(...),
    container: Container = Depends(get_container),
):
    try:
        return container.cancel_appointment.execute(
            appointment_id, req or CancelAppointmentRequest(), requester_id=x_user_id
        )
    except SchedulingError as e:
        raise to_http_error(e)


def _advance(container: Container, appointment_id: str, target: AppointmentStatusName, requester_id: str):
    try:
        return container.advance_status.execute(appointment_id, target, requester_id=requester_id)
    except SchedulingError as e:
        raise to_http_error(e)


@router.post("/appointments/{appointment_id}/start", response_model=AppointmentDTO)
def start_appointment(
    appointment_id: str,
    x_user_id: str = Header(...),
    container: Container = Depends(get_container),
):
    return _advance(container, appointment_id, AppointmentStatusName.IN_PROGRESS, x_user_id)


@router.post("/appointments/{appointment_id}/complete", response_model=AppointmentDTO)
def complete_appointment(
    appointment_id: str,
    x_user_id: str = Header(...),
    container: Container = Depends(get_container),
):
    return _advance(container, appointment_id, AppointmentStatusName.COMPLETED, x_user_id)


@router.post("/appointments/{appointment_id}/no-show", response_model=AppointmentDTO)
def no_show_appointment(
    appointment_id: str,
    x_user_id: str = Header(...),
    container: Container = Depends(get_container),
):
    return _advance(container, appointment_id, AppointmentStatusName.NO_SHOW, x_user_id)


@router.get("/availability", response_model=DayAvailabilityDTO)
def availability(
    date: str,
    duration: int | None = None,
    stylist_id: str | None = None,
    service_ids: list[str] | None = Query(None),
    container: Container = Depends(get_container),
):
    try:
        return container.get_available_slots.execute(
            AvailableSlotsRequest(date=date, duration=duration, stylist_id=stylist_id, service_ids=service_ids)
        )
    except SchedulingError as e:
        raise to_http_error(e)
