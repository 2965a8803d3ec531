"""Persistence repositories."""

from src.repositories.vehicle import (
    DuplicateVehicleNameError,
    VehicleNotFoundError,
    VehicleRepository,
    VehicleRepositoryError,
)

__all__ = [
    "DuplicateVehicleNameError",
    "VehicleNotFoundError",
    "VehicleRepository",
    "VehicleRepositoryError",
]
