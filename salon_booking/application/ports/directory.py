from __future__ import annotations

from abc import ABC, abstractmethod


class DirectoryPort(ABC):
    """Read-only lookups of users and services owned by other parts of the system."""

    @abstractmethod
    def user_exists(self, user_id: str) -> bool:
        raise NotImplementedError

    @abstractmethod
    def service_exists(self, service_id: str) -> bool:
        raise NotImplementedError

    @abstractmethod
    def get_service_duration(self, service_id: str) -> int | None:
        """Service duration in minutes, or None if the service is unknown."""
        raise NotImplementedError
