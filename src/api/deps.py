"""FastAPI dependency injection for database and repository access."""

from collections.abc import AsyncGenerator
from typing import Annotated

from fastapi import Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from src.repositories.vehicle import VehicleRepository


async def get_db(request: Request) -> AsyncGenerator[AsyncSession, None]:
    """Yield a database session from the app's session factory.

    Args:
        request: FastAPI request containing app state.

    Yields:
        AsyncSession for database operations with automatic commit/rollback.
    """
    async with request.app.state.async_session() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise


async def get_vehicle_repository(
    db: Annotated[AsyncSession, Depends(get_db)],
) -> VehicleRepository:
    """Build a vehicle repository bound to the request's session."""
    return VehicleRepository(db)
