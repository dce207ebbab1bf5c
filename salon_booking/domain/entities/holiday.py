from __future__ import annotations

import uuid
from dataclasses import dataclass
from datetime import date

from salon_booking.domain.exceptions import ValidationError


@dataclass(frozen=True)
class Holiday:
    id: str
    name: str
    date: date
    description: str | None = None

    @staticmethod
    def create(name: str, on: date, description: str | None = None) -> "Holiday":
        normalized = (name or "").strip()
        if not normalized:
            raise ValidationError("Holiday name is required")
        if len(normalized) > 100:
            raise ValidationError("Holiday name is too long (max 100 characters)")
        return Holiday(
            id=str(uuid.uuid4()),
            name=normalized,
            date=on,
            description=(description or "").strip() or None,
        )
