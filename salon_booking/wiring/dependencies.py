from __future__ import annotations

import logging
from dataclasses import dataclass
from zoneinfo import ZoneInfo

from fastapi import Request

from salon_booking.application.ports.appointment_repository import AppointmentRepositoryPort
from salon_booking.application.ports.appointment_status_repository import AppointmentStatusRepositoryPort
from salon_booking.application.ports.directory import DirectoryPort
from salon_booking.application.ports.schedule_repository import HolidayRepositoryPort, ScheduleRepositoryPort
from salon_booking.application.use_cases.advance_status import AdvanceAppointmentStatusUseCase
from salon_booking.application.use_cases.appointment_statistics import AppointmentStatisticsUseCase
from salon_booking.application.use_cases.cancel_appointment import CancelAppointmentUseCase
from salon_booking.application.use_cases.confirm_appointment import ConfirmAppointmentUseCase
from salon_booking.application.use_cases.create_appointment import CreateAppointmentUseCase
from salon_booking.application.use_cases.delete_appointment import DeleteAppointmentUseCase
from salon_booking.application.use_cases.get_appointments import GetAppointmentsUseCase
from salon_booking.application.use_cases.get_available_slots import GetAvailableSlotsUseCase
from salon_booking.application.use_cases.manage_schedules import ManageSchedulesUseCase
from salon_booking.application.use_cases.manage_statuses import ManageAppointmentStatusesUseCase
from salon_booking.application.use_cases.update_appointment import UpdateAppointmentUseCase
from salon_booking.application.utils.clock import Clock, system_clock
from salon_booking.application.utils.schedule_resolver import ScheduleResolver
from salon_booking.core.config import Settings, settings
from salon_booking.domain.availability import AvailabilityCalculator
from salon_booking.infrastructure.directory.in_memory_directory import InMemoryDirectory
from salon_booking.infrastructure.store.json_store import JsonAppointmentRepository
from salon_booking.infrastructure.store.memory_store import (
    MemoryAppointmentRepository,
    MemoryAppointmentStatusRepository,
    MemoryHolidayRepository,
    MemoryScheduleRepository,
)

logger = logging.getLogger(__name__)


@dataclass
class Container:
    settings: Settings
    appointments: AppointmentRepositoryPort
    schedules: ScheduleRepositoryPort
    holidays: HolidayRepositoryPort
    statuses: AppointmentStatusRepositoryPort
    directory: DirectoryPort
    create_appointment: CreateAppointmentUseCase
    confirm_appointment: ConfirmAppointmentUseCase
    cancel_appointment: CancelAppointmentUseCase
    update_appointment: UpdateAppointmentUseCase
    advance_status: AdvanceAppointmentStatusUseCase
    delete_appointment: DeleteAppointmentUseCase
    get_appointments: GetAppointmentsUseCase
    get_available_slots: GetAvailableSlotsUseCase
    statistics: AppointmentStatisticsUseCase
    status_admin: ManageAppointmentStatusesUseCase
    schedule_admin: ManageSchedulesUseCase


def get_appointment_repository(app_settings: Settings, timezone: ZoneInfo) -> AppointmentRepositoryPort:
    provider = app_settings.STORE_PROVIDER.lower()
    if provider == "json":
        return JsonAppointmentRepository(data_dir=app_settings.DATA_DIR, timezone=timezone)
    if provider != "memory":
        raise ValueError(f"Unknown STORE_PROVIDER: {app_settings.STORE_PROVIDER}")
    return MemoryAppointmentRepository(timezone=timezone)


def build_container(
    app_settings: Settings | None = None,
    clock: Clock | None = None,
    directory: DirectoryPort | None = None,
) -> Container:
    app_settings = app_settings or settings
    timezone = ZoneInfo(app_settings.BUSINESS_TIMEZONE)
    clock = clock or system_clock(timezone)

    appointments = get_appointment_repository(app_settings, timezone)
    schedules = MemoryScheduleRepository()
    holidays = MemoryHolidayRepository()
    statuses = MemoryAppointmentStatusRepository()
    directory = directory or InMemoryDirectory()
    resolver = ScheduleResolver(schedules, holidays)

    status_admin = ManageAppointmentStatusesUseCase(statuses)
    schedule_admin = ManageSchedulesUseCase(schedules, holidays)
    status_admin.seed_system_statuses()
    if app_settings.SEED_DEFAULT_SCHEDULES:
        schedule_admin.seed_default_schedules()

    logger.info(
        "Container built",
        extra={"store": app_settings.STORE_PROVIDER, "timezone": app_settings.BUSINESS_TIMEZONE},
    )

    return Container(
        settings=app_settings,
        appointments=appointments,
        schedules=schedules,
        holidays=holidays,
        statuses=statuses,
        directory=directory,
        create_appointment=CreateAppointmentUseCase(
            appointments=appointments,
            statuses=statuses,
            schedules=resolver,
            directory=directory,
            timezone=timezone,
            clock=clock,
            max_advance_days=app_settings.MAX_ADVANCE_DAYS,
        ),
        confirm_appointment=ConfirmAppointmentUseCase(
            appointments=appointments,
            statuses=statuses,
            timezone=timezone,
            clock=clock,
            min_lead_minutes=app_settings.CONFIRM_MIN_LEAD_MINUTES,
        ),
        cancel_appointment=CancelAppointmentUseCase(
            appointments=appointments,
            statuses=statuses,
            timezone=timezone,
            clock=clock,
            min_lead_minutes=app_settings.CANCEL_MIN_LEAD_MINUTES,
        ),
        update_appointment=UpdateAppointmentUseCase(
            appointments=appointments,
            schedules=resolver,
            directory=directory,
            timezone=timezone,
            clock=clock,
            min_lead_hours=app_settings.MODIFY_MIN_LEAD_HOURS,
            max_advance_days=app_settings.MAX_ADVANCE_DAYS,
        ),
        advance_status=AdvanceAppointmentStatusUseCase(
            appointments=appointments,
            statuses=statuses,
            timezone=timezone,
            clock=clock,
        ),
        delete_appointment=DeleteAppointmentUseCase(appointments),
        get_appointments=GetAppointmentsUseCase(appointments),
        get_available_slots=GetAvailableSlotsUseCase(
            appointments=appointments,
            schedules=resolver,
            directory=directory,
            calculator=AvailabilityCalculator(timezone),
            timezone=timezone,
            clock=clock,
            default_slot_minutes=app_settings.DEFAULT_SLOT_MINUTES,
            max_advance_days=app_settings.MAX_ADVANCE_DAYS,
        ),
        statistics=AppointmentStatisticsUseCase(appointments, timezone),
        status_admin=status_admin,
        schedule_admin=schedule_admin,
    )


def get_container(request: Request) -> Container:
    return request.app.state.container
