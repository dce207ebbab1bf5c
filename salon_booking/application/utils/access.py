from __future__ import annotations

from salon_booking.domain.entities.appointment import Appointment
from salon_booking.domain.exceptions import PermissionDeniedError


def is_organizer_or_stylist(appointment: Appointment, user_id: str) -> bool:
    return user_id == appointment.organizer_id or (
        appointment.stylist_id is not None and user_id == appointment.stylist_id
    )


def ensure_party(appointment: Appointment, user_id: str, action: str, allow_client: bool = False) -> None:
    if is_organizer_or_stylist(appointment, user_id):
        return
    if allow_client and user_id == appointment.client_id:
        return
    raise PermissionDeniedError(f"You don't have permission to {action} this appointment")
