"""API module exports."""

from src.api.deps import get_db, get_vehicle_repository
from src.api.health import router as health_router
from src.api.tax import router as tax_router
from src.api.vehicles import router as vehicles_router

__all__ = [
    "get_db",
    "get_vehicle_repository",
    "health_router",
    "tax_router",
    "vehicles_router",
]
