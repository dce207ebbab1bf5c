from __future__ import annotations

import re
import uuid
from dataclasses import dataclass
from enum import Enum

from salon_booking.domain.exceptions import BusinessRuleError, ValidationError

STATUS_NAME_PATTERN = re.compile(r"^[A-Z_][A-Z0-9_]*$")
MAX_NAME_LENGTH = 50
MAX_DESCRIPTION_LENGTH = 200


class AppointmentStatusName(str, Enum):
    PENDING = "PENDING"
    CONFIRMED = "CONFIRMED"
    IN_PROGRESS = "IN_PROGRESS"
    COMPLETED = "COMPLETED"
    CANCELLED = "CANCELLED"
    NO_SHOW = "NO_SHOW"

    @staticmethod
    def lookup(value: "AppointmentStatusName | str") -> "AppointmentStatusName | None":
        """Canonical member for value, or None. Only exact canonical names match."""
        if isinstance(value, AppointmentStatusName):
            return value
        try:
            return AppointmentStatusName(value)
        except ValueError:
            return None

    def allowed_transitions(self) -> frozenset["AppointmentStatusName"]:
        match self:
            case AppointmentStatusName.PENDING:
                return frozenset({AppointmentStatusName.CONFIRMED, AppointmentStatusName.CANCELLED})
            case AppointmentStatusName.CONFIRMED:
                return frozenset(
                    {
                        AppointmentStatusName.IN_PROGRESS,
                        AppointmentStatusName.CANCELLED,
                        AppointmentStatusName.NO_SHOW,
                    }
                )
            case AppointmentStatusName.IN_PROGRESS:
                return frozenset({AppointmentStatusName.COMPLETED, AppointmentStatusName.CANCELLED})
            case AppointmentStatusName.COMPLETED | AppointmentStatusName.CANCELLED | AppointmentStatusName.NO_SHOW:
                return frozenset()

    def can_transition_to(self, target: "AppointmentStatusName | str") -> bool:
        resolved = AppointmentStatusName.lookup(target)
        if resolved is None:
            return False
        return resolved in self.allowed_transitions()

    def is_terminal(self) -> bool:
        return not self.allowed_transitions()


INITIAL_STATUS = AppointmentStatusName.PENDING

SYSTEM_STATUS_DESCRIPTIONS: dict[AppointmentStatusName, str] = {
    AppointmentStatusName.PENDING: "Appointment is pending confirmation",
    AppointmentStatusName.CONFIRMED: "Appointment has been confirmed",
    AppointmentStatusName.IN_PROGRESS: "Appointment is currently in progress",
    AppointmentStatusName.COMPLETED: "Appointment has been completed",
    AppointmentStatusName.CANCELLED: "Appointment has been cancelled",
    AppointmentStatusName.NO_SHOW: "Client did not show up for appointment",
}


def ensure_transition(
    current: AppointmentStatusName,
    target: AppointmentStatusName | str,
) -> AppointmentStatusName:
    """
    The one place a status change is authorized.
    Returns the resolved target or raises BusinessRuleError.
    """
    if not current.can_transition_to(target):
        valid = ", ".join(sorted(s.value for s in current.allowed_transitions())) or "none"
        name = target.value if isinstance(target, AppointmentStatusName) else target
        raise BusinessRuleError(
            f"Cannot transition from {current.value} to {name}. Valid transitions: {valid}"
        )
    return AppointmentStatusName(target)


def _validate_description(description: str | None) -> str | None:
    if description is None:
        return None
    normalized = description.strip()
    if len(normalized) > MAX_DESCRIPTION_LENGTH:
        raise ValidationError(
            f"AppointmentStatus description is too long (max {MAX_DESCRIPTION_LENGTH} characters)"
        )
    return normalized or None


@dataclass
class AppointmentStatus:
    """A seeded status row. Its name is fixed, only the description is editable."""

    id: str
    name: AppointmentStatusName
    description: str | None = None

    def __post_init__(self) -> None:
        raw = self.name.value if isinstance(self.name, AppointmentStatusName) else str(self.name or "")
        if not raw.strip():
            raise ValidationError("AppointmentStatus name cannot be empty")
        if len(raw) > MAX_NAME_LENGTH:
            raise ValidationError(f"AppointmentStatus name is too long (max {MAX_NAME_LENGTH} characters)")
        if not STATUS_NAME_PATTERN.match(raw):
            raise ValidationError("Status name must be uppercase letters, numbers, and underscores only")
        resolved = AppointmentStatusName.lookup(raw)
        if resolved is None:
            raise ValidationError(f"Unknown appointment status: {raw}")
        self.name = resolved
        self.description = _validate_description(self.description)

    @staticmethod
    def create(name: AppointmentStatusName | str, description: str | None = None) -> "AppointmentStatus":
        return AppointmentStatus(id=str(uuid.uuid4()), name=name, description=description)

    @staticmethod
    def system(name: AppointmentStatusName) -> "AppointmentStatus":
        """Seed row with a stable id, so stored appointments keep resolving across restarts."""
        return AppointmentStatus(
            id=str(uuid.uuid5(uuid.NAMESPACE_URL, f"salon-booking/appointment-status/{name.value}")),
            name=name,
            description=SYSTEM_STATUS_DESCRIPTIONS[name],
        )

    def update_description(self, description: str | None) -> None:
        self.description = _validate_description(description)

    def is_terminal_status(self) -> bool:
        return self.name.is_terminal()

    def can_transition_to(self, target: AppointmentStatusName | str) -> bool:
        return self.name.can_transition_to(target)
