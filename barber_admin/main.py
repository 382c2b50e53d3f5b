from fastapi import FastAPI

from barber_admin.api.admin import router as admin_router
from barber_admin.api.agenda import router as agenda_router
from barber_admin.core.config import settings
from barber_admin.core.log_context import configure_logging

configure_logging(settings.LOG_LEVEL)

app = FastAPI(title="Barbershop Admin Agenda", version="1.0.0")

app.include_router(agenda_router, tags=["agenda"])
app.include_router(admin_router, tags=["admin"])


@app.get("/health")
def health() -> dict[str, str]:
    return {"status": "ok"}
