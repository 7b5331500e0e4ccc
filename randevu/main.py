import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI

from randevu.api.v1.appointments import router as appointments_router
from randevu.core.config import settings
from randevu.wiring.dependencies import shutdown_notifications

LOG_CONTEXT_KEYS = (
    "appointment_id",
    "provider_id",
    "employee_id",
    "user_id",
    "service",
    "date",
    "time",
    "status",
    "notification_type",
    "reason",
    "error",
)


class ContextFormatter(logging.Formatter):
    """Appends the booking context passed through `extra=` to each line."""

    def format(self, record: logging.LogRecord) -> str:
        base = super().format(record)
        extras = [
            f"{key}={getattr(record, key)}"
            for key in LOG_CONTEXT_KEYS
            if getattr(record, key, None) not in (None, "")
        ]
        if extras:
            return f"{base} | " + " ".join(extras)
        return base


def configure_logging(level: str) -> None:
    handler = logging.StreamHandler()
    handler.setFormatter(ContextFormatter("%(levelname)s:%(name)s:%(message)s"))

    root = logging.getLogger()
    root.setLevel(getattr(logging, level.upper(), logging.INFO))
    root.handlers.clear()
    root.addHandler(handler)


@asynccontextmanager
async def lifespan(app: FastAPI):
    yield
    # Notifications are fire-and-forget; let the ones in flight finish.
    await shutdown_notifications()
    logging.getLogger(__name__).info("Notification dispatcher drained")


configure_logging(settings.LOG_LEVEL)

app = FastAPI(title="Kuaför Randevu", version="1.0.0", lifespan=lifespan)

app.include_router(appointments_router, prefix="/api/v1", tags=["appointments"])


@app.get("/health")
def health() -> dict[str, str]:
    return {"status": "ok"}
