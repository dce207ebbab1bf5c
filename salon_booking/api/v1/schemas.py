from datetime import date

from pydantic import BaseModel


class ScheduleCreateSchema(BaseModel):
    day_of_week: str
    start_time: str
    end_time: str
    holiday_id: str | None = None


class ScheduleUpdateSchema(BaseModel):
    start_time: str
    end_time: str


class HolidayCreateSchema(BaseModel):
    name: str
    date: date
    description: str | None = None


class StatusDescriptionSchema(BaseModel):
    description: str | None = None


class DeletedSchema(BaseModel):
    id: str
    deleted: bool = True
