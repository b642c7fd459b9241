import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI

from barbershop.api.v1.admin import router as admin_router
from barbershop.api.v1.auth import router as auth_router
from barbershop.api.v1.booking import router as booking_router
from barbershop.api.v1.style import router as style_router
from barbershop.core.config import settings
from barbershop.wiring.dependencies import build_ledger_store

class ContextFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        extras = []
        for key in ("appointment_id", "customer_id", "barber", "date", "time", "service", "path", "reason"):
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


@asynccontextmanager
async def lifespan(app: FastAPI):
    store = build_ledger_store()
    store.open()
    app.state.ledger_store = store
    try:
        yield
    finally:
        store.close()


app = FastAPI(title=f"{settings.SALON_NAME} Booking", version="1.0.0", lifespan=lifespan)

app.include_router(booking_router, prefix="/api/v1", tags=["booking"])
app.include_router(admin_router, prefix="/api/v1", tags=["admin"])
app.include_router(auth_router, prefix="/api/v1/auth", tags=["auth"])
app.include_router(style_router, prefix="/api/v1/style", tags=["style"])


@app.get("/health")
def health() -> dict[str, str]:
    return {"status": "ok"}
