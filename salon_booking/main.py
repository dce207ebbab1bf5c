import logging

from fastapi import FastAPI

from salon_booking.api.v1.admin import router as admin_router
from salon_booking.api.v1.appointments import router as appointments_router
from salon_booking.core.config import settings
from salon_booking.wiring.dependencies import Container, build_container

class ContextFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        extras = []
        for key in (
            "appointment_id",
            "stylist_id",
            "status",
            "requester_id",
            "cancelled_by",
            "notify_client",
            "reason",
            "changes",
        ):
            value = getattr(record, key, None)
            if value not in (None, ""):
                extras.append(f"{key}={value}")
        base = super().format(record)
        if extras:
            return f"{base} | " + " ".join(extras)
        return base


handler = logging.StreamHandler()
handler.setFormatter(ContextFormatter("%(levelname)s:%(name)s:%(message)s"))

root = logging.getLogger()
root.setLevel(getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO))
root.handlers.clear()
root.addHandler(handler)


def create_app(container: Container | None = None) -> FastAPI:
    container = container or build_container(settings)
    app = FastAPI(title=f"{container.settings.BUSINESS_NAME} Booking", version="1.0.0")
    app.state.container = container

    app.include_router(appointments_router, prefix="/api/v1", tags=["appointments"])
    app.include_router(admin_router, prefix="/api/v1", tags=["admin"])

    @app.get("/health")
    def health() -> dict[str, str]:
        return {"status": "ok", "env": container.settings.ENV}

    return app


app = create_app()
