from __future__ import annotations

from typing import Iterable

from salon_booking.application.ports.directory import DirectoryPort
from salon_booking.domain.entities.service_catalog import ServiceCatalogEntry
from salon_booking.infrastructure.directory.service_catalog_data import DEMO_USERS, SERVICE_CATALOG


class InMemoryDirectory(DirectoryPort):
    def __init__(
        self,
        users: Iterable[str] | None = None,
        catalog: dict[str, ServiceCatalogEntry] | None = None,
    ) -> None:
        self._users = set(DEMO_USERS if users is None else users)
        self._catalog = dict(SERVICE_CATALOG if catalog is None else catalog)

    def add_user(self, user_id: str) -> None:
        self._users.add(user_id)

    def add_service(self, entry: ServiceCatalogEntry) -> None:
        self._catalog[entry.service_id] = entry

    def get_service(self, service_id: str) -> ServiceCatalogEntry | None:
        return self._catalog.get(service_id.strip())

    def user_exists(self, user_id: str) -> bool:
        return user_id in self._users

    def service_exists(self, service_id: str) -> bool:
        return self.get_service(service_id) is not None

    def get_service_duration(self, service_id: str) -> int | None:
        entry = self.get_service(service_id)
        if not entry:
            return None
        return entry.duration_minutes
