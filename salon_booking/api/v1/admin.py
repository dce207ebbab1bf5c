from fastapi import APIRouter, Depends

from salon_booking.api.v1.errors import to_http_error
from salon_booking.api.v1.schemas import (
    HolidayCreateSchema,
    ScheduleCreateSchema,
    ScheduleUpdateSchema,
    StatusDescriptionSchema,
)
from salon_booking.application.dto.responses import AppointmentStatusDTO, HolidayDTO, ScheduleDTO
from salon_booking.domain.exceptions import SchedulingError
from salon_booking.wiring.dependencies import Container, get_container

router = APIRouter()


@router.get("/schedules", response_model=list[ScheduleDTO])
def list_schedules(container: Container = Depends(get_container)):
    return container.schedule_admin.list_schedules()


@router.post("/schedules", response_model=ScheduleDTO, status_code=201)
def create_schedule(req: ScheduleCreateSchema, container: Container = Depends(get_container)):
    try:
        return container.schedule_admin.create_schedule(
            req.day_of_week, req.start_time, req.end_time, holiday_id=req.holiday_id
        )
    except SchedulingError as e:
        raise to_http_error(e)


@router.put("/schedules/{schedule_id}", response_model=ScheduleDTO)
def update_schedule(schedule_id: str, req: ScheduleUpdateSchema, container: Container = Depends(get_container)):
    try:
        return container.schedule_admin.update_schedule(schedule_id, req.start_time, req.end_time)
    except SchedulingError as e:
        raise to_http_error(e)


@router.get("/holidays", response_model=list[HolidayDTO])
def list_holidays(container: Container = Depends(get_container)):
    return container.schedule_admin.list_holidays()


@router.post("/holidays", response_model=HolidayDTO, status_code=201)
def create_holiday(req: HolidayCreateSchema, container: Container = Depends(get_container)):
    try:
        return container.schedule_admin.create_holiday(req.name, req.date, req.description)
    except SchedulingError as e:
        raise to_http_error(e)


@router.get("/statuses", response_model=list[AppointmentStatusDTO])
def list_statuses(container: Container = Depends(get_container)):
    return container.status_admin.list_statuses()


@router.patch("/statuses/{status_id}", response_model=AppointmentStatusDTO)
def update_status_description(
    status_id: str,
    req: StatusDescriptionSchema,
    container: Container = Depends(get_container),
):
    try:
        return container.status_admin.update_description(status_id, req.description)
    except SchedulingError as e:
        raise to_http_error(e)
