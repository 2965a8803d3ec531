"""Health check endpoint for the vehicle catalog."""

from typing import Annotated

from fastapi import APIRouter, Depends
from pydantic import BaseModel
from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from src.api.deps import get_db
from src.core.logging import get_logger
from src.models.vehicle import Vehicle

logger = get_logger(__name__)

router = APIRouter(prefix="/api", tags=["health"])


class HealthResponse(BaseModel):
    """Health check response model.

    vehicles is the catalog size, or None when the database is unreachable.
    """

    status: str
    db: str
    vehicles: int | None = None


@router.get("/health", response_model=HealthResponse)
async def health_check(
    db: Annotated[AsyncSession, Depends(get_db)],
) -> HealthResponse:
    """Check that the vehicle catalog can be read.

    Counting rows exercises the connection and the vehicles table in one
    query, so a missing migration shows up as degraded.
    """
    vehicles: int | None = None
    try:
        result = await db.execute(select(func.count()).select_from(Vehicle))
        vehicles = int(result.scalar_one())
        db_status = "connected"
    except Exception as e:
        logger.exception("catalog_health_check_failed", error=str(e))
        db_status = "disconnected"

    return HealthResponse(
        status="ok" if db_status == "connected" else "degraded",
        db=db_status,
        vehicles=vehicles,
    )
