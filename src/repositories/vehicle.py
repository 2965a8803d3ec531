"""Vehicle catalog persistence."""

from __future__ import annotations

from decimal import Decimal

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from src.core.logging import get_logger
from src.models.vehicle import Vehicle

logger = get_logger(__name__)


class VehicleRepositoryError(Exception):
    """Base class for vehicle repository errors."""


class VehicleNotFoundError(VehicleRepositoryError):
    """Raised when a vehicle id does not exist."""

    def __init__(self, vehicle_id: int) -> None:
        self.vehicle_id = vehicle_id
        super().__init__(f"Vehicle {vehicle_id} not found")


class DuplicateVehicleNameError(VehicleRepositoryError):
    """Raised when another vehicle already uses the name."""

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"Vehicle with name {name!r} already exists")


class VehicleRepository:
    """Async repository over the vehicles table.

    The repository flushes but never commits; the caller owns the
    transaction boundary.
    """

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def find_all(self) -> list[Vehicle]:
        result = await self._session.execute(
            select(Vehicle).order_by(Vehicle.name.asc(), Vehicle.id.asc())
        )
        return list(result.scalars().all())

    async def find_by_id(self, vehicle_id: int) -> Vehicle | None:
        return await self._session.get(Vehicle, vehicle_id)

    async def find_by_name(self, name: str) -> Vehicle | None:
        result = await self._session.execute(
            select(Vehicle).where(Vehicle.name == name.strip())
        )
        return result.scalars().first()

    async def create(self, name: str, type: str, assessed_value: Decimal) -> Vehicle:
        """Insert a vehicle.

        Raises:
            DuplicateVehicleNameError: If the trimmed name is already taken.
        """
        clean_name = name.strip()
        if await self.find_by_name(clean_name) is not None:
            raise DuplicateVehicleNameError(clean_name)

        vehicle = Vehicle(
            name=clean_name,
            type=type.strip(),
            assessed_value=assessed_value,
        )
        self._session.add(vehicle)
        await self._flush(clean_name)
        logger.info("vehicle_created", vehicle_id=vehicle.id, name=clean_name)
        return vehicle

    async def update(
        self,
        vehicle_id: int,
        name: str,
        type: str,
        assessed_value: Decimal,
    ) -> Vehicle:
        """Replace a vehicle's fields.

        Raises:
            VehicleNotFoundError: If no vehicle has this id.
            DuplicateVehicleNameError: If another vehicle uses the new name.
        """
        vehicle = await self.find_by_id(vehicle_id)
        if vehicle is None:
            raise VehicleNotFoundError(vehicle_id)

        clean_name = name.strip()
        existing = await self.find_by_name(clean_name)
        if existing is not None and existing.id != vehicle.id:
            raise DuplicateVehicleNameError(clean_name)

        vehicle.name = clean_name
        vehicle.type = type.strip()
        vehicle.assessed_value = assessed_value
        await self._flush(clean_name)
        logger.info("vehicle_updated", vehicle_id=vehicle.id)
        return vehicle

    async def delete(self, vehicle_id: int) -> None:
        """Remove a vehicle.

        Raises:
            VehicleNotFoundError: If no vehicle has this id.
        """
        vehicle = await self.find_by_id(vehicle_id)
        if vehicle is None:
            raise VehicleNotFoundError(vehicle_id)

        await self._session.delete(vehicle)
        await self._session.flush()
        logger.info("vehicle_deleted", vehicle_id=vehicle_id)

    async def _flush(self, name: str) -> None:
        # The unique constraint still guards against concurrent inserts
        # that pass the name lookup.
        try:
            await self._session.flush()
        except IntegrityError as exc:
            raise DuplicateVehicleNameError(name) from exc
