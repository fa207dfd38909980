from fastapi import FastAPI

from .admin import router as admin_router
from .auth import router as auth_router
from .events import router as events_router
from .notifications import router as notifications_router
from .registrations import router as registrations_router


def register_routes(app: FastAPI) -> None:
    """Register every API router on the FastAPI application."""

    app.include_router(auth_router)
    app.include_router(events_router)
    app.include_router(registrations_router)
    app.include_router(admin_router)
    app.include_router(notifications_router)
