from __future__ import annotations

from datetime import date, datetime
from enum import Enum

from pydantic import BaseModel, Field


class CancelledBy(str, Enum):
    client = "client"
    stylist = "stylist"
    admin = "admin"
    system = "system"


class CreateAppointmentRequest(BaseModel):
    client_id: str
    date_time: datetime
    service_ids: list[str] = Field(default_factory=list)
    duration: int | None = None
    stylist_id: str | None = None
    notes: str | None = None


class ConfirmAppointmentRequest(BaseModel):
    notes: str | None = None
    notify_client: bool = True
    confirmed_by: str | None = None


class CancelAppointmentRequest(BaseModel):
    reason: str | None = None
    cancelled_by: CancelledBy | None = None
    notify_client: bool = True


class UpdateAppointmentRequest(BaseModel):
    """
    Partial update. Only fields the caller actually sent are applied, so an
    explicit stylist_id=None unassigns the stylist while an absent one keeps it.
    """

    date_time: datetime | None = None
    duration: int | None = None
    stylist_id: str | None = None
    service_ids: list[str] | None = None
    notes: str | None = None
    reason: str | None = None

    def changed_fields(self) -> set[str]:
        return self.model_fields_set & {"date_time", "duration", "stylist_id", "service_ids"}


class AvailableSlotsRequest(BaseModel):
    date: str
    duration: int | None = None
    stylist_id: str | None = None
    service_ids: list[str] | None = None


class StatisticsRequest(BaseModel):
    start_date: date | None = None
    end_date: date | None = None
