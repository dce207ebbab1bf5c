class SchedulingError(Exception):
    """Base class for every error the scheduling core raises."""
    pass


class ValidationError(SchedulingError):
    """Raised when input is malformed or out of range (caller-fixable)."""
    pass


class FormatError(ValidationError):
    """Raised when a time string is not a valid HH:MM value."""
    pass


class NotFoundError(SchedulingError):
    """Raised when a referenced entity does not exist."""

    def __init__(self, entity: str, identifier: str) -> None:
        self.entity = entity
        self.identifier = identifier
        super().__init__(f"{entity} not found: {identifier}")


class ConflictError(SchedulingError):
    """Raised when a requested interval overlaps an existing booking."""
    pass


class BusinessRuleError(SchedulingError):
    """Raised when well-formed input is forbidden by a domain policy."""
    pass


class PermissionDeniedError(BusinessRuleError):
    """Raised when the requester is not a party allowed to act on the appointment."""
    pass


class StorageError(SchedulingError):
    """Raised when persisted data exists but cannot be read back."""
    pass
