from __future__ import annotations

import json
import logging
import threading
from datetime import date, datetime, tzinfo
from pathlib import Path
from typing import Any

from salon_booking.application.ports.appointment_repository import AppointmentRepositoryPort
from salon_booking.domain.entities.appointment import Appointment
from salon_booking.domain.exceptions import ConflictError, NotFoundError, SchedulingError, StorageError
from salon_booking.infrastructure.store.conflicts import ensure_no_conflict, find_overlapping, local_date

STORE_VERSION = 1


class JsonAppointmentRepository(AppointmentRepositoryPort):
    """
    Appointments kept in a single JSON file.

    Every write rewrites the whole file through a temp file and an atomic
    replace. The conflict scan and the write share one lock, so two bookings
    for the same slot cannot both land.
    """

    def __init__(self, data_dir: str = "./data", timezone: tzinfo | None = None) -> None:
        self._data_dir = Path(data_dir)
        self._data_dir.mkdir(parents=True, exist_ok=True)
        self._file_path = self._data_dir / "appointments.json"
        self._timezone = timezone
        self._lock = threading.Lock()
        self._logger = logging.getLogger(__name__)

    def _load(self) -> dict[str, Appointment]:
        """
        Load appointments from disk. A missing file is an empty store; a file
        that exists but cannot be parsed raises StorageError and is left in place.
        """
        if not self._file_path.exists():
            return {}

        try:
            with open(self._file_path, "r", encoding="utf-8") as f:
                data = json.load(f)
            appointments: dict[str, Appointment] = {}
            for raw in data.get("appointments", []):
                appointment = self._deserialize(raw)
                appointments[appointment.id] = appointment
        except (OSError, ValueError, KeyError, TypeError, AttributeError, SchedulingError) as e:
            self._logger.error(
                "Appointment store unreadable",
                extra={"path": str(self._file_path), "reason": str(e)},
            )
            raise StorageError(f"Appointment store is unreadable: {self._file_path}") from e
        return appointments

    def _save(self, appointments: dict[str, Appointment]) -> None:
        temp_path = self._file_path.with_suffix(".json.tmp")
        data = {
            "version": STORE_VERSION,
            "appointments": [self._serialize(a) for a in appointments.values()],
        }

        try:
            with open(temp_path, "w", encoding="utf-8") as f:
                json.dump(data, f, indent=2, ensure_ascii=False)
            temp_path.replace(self._file_path)
        except Exception:
            temp_path.unlink(missing_ok=True)
            raise

    def _serialize(self, appointment: Appointment) -> dict[str, Any]:
        return {
            "id": appointment.id,
            "start_time": appointment.start_time.isoformat(),
            "duration": appointment.duration,
            "organizer_id": appointment.organizer_id,
            "client_id": appointment.client_id,
            "stylist_id": appointment.stylist_id,
            "schedule_id": appointment.schedule_id,
            "status_id": appointment.status_id,
            "status": appointment.status.value,
            "service_ids": list(appointment.service_ids),
            "confirmed_at": _iso(appointment.confirmed_at),
            "created_at": _iso(appointment.created_at),
            "updated_at": _iso(appointment.updated_at),
        }

    def _deserialize(self, data: dict[str, Any]) -> Appointment:
        return Appointment.from_persistence(
            id=data["id"],
            start_time=datetime.fromisoformat(data["start_time"]),
            duration=data["duration"],
            organizer_id=data["organizer_id"],
            client_id=data["client_id"],
            schedule_id=data["schedule_id"],
            status_id=data["status_id"],
            status=data["status"],
            stylist_id=data.get("stylist_id"),
            service_ids=data.get("service_ids", []),
            confirmed_at=_parse(data.get("confirmed_at")),
            created_at=_parse(data.get("created_at")),
            updated_at=_parse(data.get("updated_at")),
        )

    def _all(self) -> list[Appointment]:
        with self._lock:
            return sorted(self._load().values(), key=lambda a: a.start_time)

    def find_by_id(self, appointment_id: str) -> Appointment | None:
        with self._lock:
            return self._load().get(appointment_id)

    def find_all(self) -> list[Appointment]:
        return self._all()

    def find_by_date(self, day: date) -> list[Appointment]:
        return [a for a in self._all() if local_date(a.start_time, self._timezone) == day]

    def find_by_date_range(self, start: datetime, end: datetime) -> list[Appointment]:
        return [a for a in self._all() if start <= a.start_time < end]

    def find_by_client_id(self, client_id: str) -> list[Appointment]:
        return [a for a in self._all() if a.client_id == client_id]

    def find_by_stylist_id(self, stylist_id: str) -> list[Appointment]:
        return [a for a in self._all() if a.stylist_id == stylist_id]

    def find_conflicting(
        self,
        start_time: datetime,
        duration: int,
        stylist_id: str | None = None,
        exclude_id: str | None = None,
    ) -> list[Appointment]:
        return find_overlapping(self._all(), start_time, duration, stylist_id, exclude_id)

    def save(self, appointment: Appointment) -> Appointment:
        with self._lock:
            appointments = self._load()
            if appointment.id in appointments:
                raise ConflictError(f"Appointment already exists: {appointment.id}")
            ensure_no_conflict(appointments.values(), appointment)
            appointments[appointment.id] = appointment
            self._save(appointments)
        return appointment

    def update(self, appointment: Appointment) -> Appointment:
        with self._lock:
            appointments = self._load()
            if appointment.id not in appointments:
                raise NotFoundError("Appointment", appointment.id)
            ensure_no_conflict(appointments.values(), appointment)
            appointments[appointment.id] = appointment
            self._save(appointments)
        return appointment

    def delete(self, appointment_id: str) -> bool:
        with self._lock:
            appointments = self._load()
            if appointments.pop(appointment_id, None) is None:
                return False
            self._save(appointments)
            return True


def _iso(moment: datetime | None) -> str | None:
    return moment.isoformat() if moment else None


def _parse(value: str | None) -> datetime | None:
    return datetime.fromisoformat(value) if value else None
