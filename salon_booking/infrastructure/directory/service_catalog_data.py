from __future__ import annotations

from salon_booking.domain.entities.service_catalog import ServiceCatalogEntry

SERVICE_CATALOG: dict[str, ServiceCatalogEntry] = {
    entry.service_id: entry
    for entry in (
        ServiceCatalogEntry("haircut", "Haircut", "hair", 30, 35),
        ServiceCatalogEntry("haircut_long", "Haircut (long hair)", "hair", 45, 45),
        ServiceCatalogEntry("blowout", "Blowout", "hair", 30, 30),
        ServiceCatalogEntry("beard_trim", "Beard trim", "hair", 15, 15),
        ServiceCatalogEntry("color", "Single-process color", "color", 90, 95),
        ServiceCatalogEntry("highlights", "Highlights", "color", 120, 140),
        ServiceCatalogEntry("manicure", "Manicure", "nails", 45, 30),
        ServiceCatalogEntry("pedicure", "Pedicure", "nails", 60, 45),
    )
}

DEMO_USERS: frozenset[str] = frozenset(
    {
        "organizer-1",
        "client-1",
        "client-2",
        "stylist-1",
        "stylist-2",
    }
)
