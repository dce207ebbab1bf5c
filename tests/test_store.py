"""
Tests for appointment persistence: reserve-or-fail semantics and the JSON file store.
"""

from __future__ import annotations

import json
import tempfile
import threading
from datetime import date, datetime, timedelta, timezone
from pathlib import Path

import pytest

from salon_booking.domain.entities.appointment import Appointment
from salon_booking.domain.entities.appointment_status import AppointmentStatus, AppointmentStatusName
from salon_booking.domain.exceptions import ConflictError, NotFoundError, StorageError
from salon_booking.infrastructure.store.json_store import JsonAppointmentRepository
from salon_booking.infrastructure.store.memory_store import MemoryAppointmentRepository

NOW = datetime(2024, 6, 3, 9, 0, tzinfo=timezone.utc)
PENDING = AppointmentStatus.system(AppointmentStatusName.PENDING)


def make(hour: int, minute: int = 0, stylist_id: str | None = "stylist-1", duration: int = 60) -> Appointment:
    return Appointment.create(
        start_time=datetime(2024, 6, 10, hour, minute, tzinfo=timezone.utc),
        duration=duration,
        organizer_id="organizer-1",
        client_id="client-1",
        schedule_id="schedule-1",
        status_id=PENDING.id,
        stylist_id=stylist_id,
        service_ids=["haircut"],
        now=NOW,
    )


@pytest.fixture(params=["memory", "json"])
def repository(request, tmp_path):
    if request.param == "json":
        return JsonAppointmentRepository(data_dir=str(tmp_path), timezone=timezone.utc)
    return MemoryAppointmentRepository(timezone=timezone.utc)


def test_save_is_reserve_or_fail(repository):
    repository.save(make(10))
    with pytest.raises(ConflictError):
        repository.save(make(10, 30))
    repository.save(make(10, 30, stylist_id="stylist-2"))
    repository.save(make(11))
    assert len(repository.find_by_date(date(2024, 6, 10))) == 3


def test_unassigned_bookings_conflict_with_everyone(repository):
    repository.save(make(10, stylist_id="stylist-2"))
    with pytest.raises(ConflictError):
        repository.save(make(10, 30, stylist_id=None))


def test_assigned_booking_cannot_overlap_an_unassigned_one(repository):
    """The unassigned booking came first; it still holds the slot for every stylist."""
    unassigned = repository.save(make(10, stylist_id=None))
    with pytest.raises(ConflictError):
        repository.save(make(10, stylist_id="stylist-1"))

    repository.save(make(11, stylist_id="stylist-1"))
    reloaded = repository.find_by_id(unassigned.id)
    reloaded.add_service("color", now=NOW)
    assert repository.update(reloaded).service_ids == ["haircut", "color"]


def test_find_conflicting_scopes_and_excludes(repository):
    first = repository.save(make(10))
    start = datetime(2024, 6, 10, 10, 30, tzinfo=timezone.utc)

    assert [a.id for a in repository.find_conflicting(start, 60, stylist_id="stylist-1")] == [first.id]
    assert repository.find_conflicting(start, 60, stylist_id="stylist-2") == []
    assert [a.id for a in repository.find_conflicting(start, 60)] == [first.id]
    assert repository.find_conflicting(start, 60, exclude_id=first.id) == []


def test_update_rechecks_conflicts(repository):
    repository.save(make(10))
    second = repository.save(make(12))

    moved = repository.find_by_id(second.id)
    moved.reschedule(datetime(2024, 6, 10, 10, 15, tzinfo=timezone.utc), now=NOW)
    with pytest.raises(ConflictError):
        repository.update(moved)

    assert repository.find_by_id(second.id).start_time.hour == 12


def test_update_unknown_appointment(repository):
    with pytest.raises(NotFoundError):
        repository.update(make(10))


def test_delete(repository):
    saved = repository.save(make(10))
    assert repository.delete(saved.id) is True
    assert repository.delete(saved.id) is False
    assert repository.find_by_id(saved.id) is None


def test_range_and_owner_queries(repository):
    repository.save(make(9))
    repository.save(make(14, stylist_id="stylist-2"))
    start = datetime(2024, 6, 10, 0, 0, tzinfo=timezone.utc)

    assert len(repository.find_by_date_range(start, start + timedelta(hours=12))) == 1
    assert len(repository.find_by_client_id("client-1")) == 2
    assert len(repository.find_by_stylist_id("stylist-2")) == 1
    assert repository.find_by_date(date(2024, 6, 11)) == []


def test_memory_store_hands_out_copies():
    """Mutating a loaded appointment does not change the stored one until update()."""
    repository = MemoryAppointmentRepository(timezone=timezone.utc)
    saved = repository.save(make(10))

    loaded = repository.find_by_id(saved.id)
    loaded.add_service("color", now=NOW)
    assert repository.find_by_id(saved.id).service_ids == ["haircut"]


def test_concurrent_bookings_only_one_wins():
    repository = MemoryAppointmentRepository(timezone=timezone.utc)
    outcomes: list[str] = []
    lock = threading.Lock()

    def attempt() -> None:
        try:
            repository.save(make(10))
            result = "saved"
        except ConflictError:
            result = "conflict"
        with lock:
            outcomes.append(result)

    threads = [threading.Thread(target=attempt) for _ in range(8)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    assert outcomes.count("saved") == 1
    assert outcomes.count("conflict") == 7


def test_json_store_persistence():
    """Appointments survive a new repository instance over the same directory."""
    with tempfile.TemporaryDirectory() as tmpdir:
        first = JsonAppointmentRepository(data_dir=tmpdir, timezone=timezone.utc)
        saved = make(10)
        saved.mark_as_confirmed(AppointmentStatus.system(AppointmentStatusName.CONFIRMED), now=NOW)
        first.save(saved)

        reopened = JsonAppointmentRepository(data_dir=tmpdir, timezone=timezone.utc)
        loaded = reopened.find_by_id(saved.id)

        assert loaded is not None
        assert loaded.status is AppointmentStatusName.CONFIRMED
        assert loaded.start_time == saved.start_time
        assert loaded.confirmed_at == NOW
        assert loaded.service_ids == ["haircut"]

        data = json.loads((Path(tmpdir) / "appointments.json").read_text(encoding="utf-8"))
        assert data["version"] == 1
        assert not (Path(tmpdir) / "appointments.json.tmp").exists()


def test_json_store_refuses_to_write_over_an_unreadable_file():
    """A truncated file raises instead of being read as empty, and its bytes stay on disk."""
    with tempfile.TemporaryDirectory() as tmpdir:
        repository = JsonAppointmentRepository(data_dir=tmpdir, timezone=timezone.utc)
        repository.save(make(10))

        path = Path(tmpdir) / "appointments.json"
        damaged = path.read_text(encoding="utf-8")[:-5]
        path.write_text(damaged, encoding="utf-8")

        with pytest.raises(StorageError):
            repository.save(make(10))
        with pytest.raises(StorageError):
            repository.find_all()
        assert path.read_text(encoding="utf-8") == damaged
