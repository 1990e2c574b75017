from fastapi import FastAPI

from .activity import admin_router as admin_activity_router
from .activity import router as activity_router
from .estimates import router as estimates_router
from .health import router as health_router
from .invoices import router as invoices_router
from .projects import router as projects_router


def register_routes(app: FastAPI) -> None:
    """Register every API router on the FastAPI application."""

    app.include_router(health_router)
    app.include_router(activity_router)
    app.include_router(admin_activity_router)
    app.include_router(projects_router)
    app.include_router(estimates_router)
    app.include_router(invoices_router)
