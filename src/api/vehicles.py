"""Vehicle catalog API endpoints."""

from datetime import datetime
from decimal import Decimal
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Query, Response, status
from pydantic import BaseModel, Field, field_validator
from sqlalchemy.exc import SQLAlchemyError

from src.api.deps import get_vehicle_repository
from src.api.tax import TaxAssessmentResponse, assess
from src.core.config import settings
from src.core.logging import get_logger, vehicle_id_ctx
from src.models.vehicle import Vehicle
from src.repositories.vehicle import (
    DuplicateVehicleNameError,
    VehicleNotFoundError,
    VehicleRepository,
)

logger = get_logger(__name__)

router = APIRouter(prefix="/api/vehicles", tags=["vehicles"])

Repository = Annotated[VehicleRepository, Depends(get_vehicle_repository)]


class VehicleRequest(BaseModel):
    """Payload for creating or replacing a vehicle."""

    name: str = Field(min_length=2, max_length=255)
    type: str = Field(min_length=2, max_length=100)
    assessed_value: Decimal = Field(gt=0, max_digits=15, decimal_places=2)

    @field_validator("name", "type", mode="before")
    @classmethod
    def strip_text(cls, value: object) -> object:
        """Trim surrounding whitespace before length checks."""
        if isinstance(value, str):
            return value.strip()
        return value

    @field_validator("assessed_value")
    @classmethod
    def check_assessed_value_limit(cls, value: Decimal) -> Decimal:
        """Cap the assessed value at the configured maximum."""
        if value > settings.max_assessed_value:
            raise ValueError(
                f"assessed_value must not exceed {settings.max_assessed_value:,}"
            )
        return value


class VehicleResponse(BaseModel):
    """Vehicle response model."""

    id: int
    name: str
    type: str
    assessed_value: Decimal
    created_at: datetime
    updated_at: datetime | None


def _to_vehicle_response(vehicle: Vehicle) -> VehicleResponse:
    """Map SQLAlchemy vehicle model to response model."""
    return VehicleResponse(
        id=vehicle.id,
        name=vehicle.name,
        type=vehicle.type,
        assessed_value=vehicle.assessed_value,
        created_at=vehicle.created_at,
        updated_at=vehicle.updated_at,
    )


def _not_found() -> HTTPException:
    return HTTPException(status_code=404, detail="Vehicle not found")


def _duplicate_name() -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_409_CONFLICT,
        detail="Vehicle with this name already exists",
    )


def _storage_failure(action: str, exc: SQLAlchemyError) -> HTTPException:
    logger.exception("vehicle_storage_failed", action=action, error=str(exc))
    return HTTPException(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        detail=f"Failed to {action}",
    )


@router.get("", response_model=list[VehicleResponse])
async def list_vehicles(repository: Repository) -> list[VehicleResponse]:
    """List all vehicles ordered by name."""
    try:
        vehicles = await repository.find_all()
    except SQLAlchemyError as exc:
        raise _storage_failure("fetch vehicles", exc) from exc
    return [_to_vehicle_response(vehicle) for vehicle in vehicles]


@router.post("", response_model=VehicleResponse, status_code=status.HTTP_201_CREATED)
async def create_vehicle(
    payload: VehicleRequest,
    repository: Repository,
) -> VehicleResponse:
    """Create a new vehicle."""
    try:
        vehicle = await repository.create(
            name=payload.name,
            type=payload.type,
            assessed_value=payload.assessed_value,
        )
    except DuplicateVehicleNameError as exc:
        raise _duplicate_name() from exc
    except SQLAlchemyError as exc:
        raise _storage_failure("create vehicle", exc) from exc
    return _to_vehicle_response(vehicle)


@router.get("/{vehicle_id}", response_model=VehicleResponse)
async def get_vehicle(vehicle_id: int, repository: Repository) -> VehicleResponse:
    """Get vehicle by ID."""
    try:
        vehicle = await repository.find_by_id(vehicle_id)
    except SQLAlchemyError as exc:
        raise _storage_failure("fetch vehicle", exc) from exc
    if vehicle is None:
        raise _not_found()
    return _to_vehicle_response(vehicle)


@router.put("/{vehicle_id}", response_model=VehicleResponse)
async def update_vehicle(
    vehicle_id: int,
    payload: VehicleRequest,
    repository: Repository,
) -> VehicleResponse:
    """Replace a vehicle's name, type and assessed value."""
    vehicle_id_ctx.set(vehicle_id)
    try:
        vehicle = await repository.update(
            vehicle_id,
            name=payload.name,
            type=payload.type,
            assessed_value=payload.assessed_value,
        )
    except VehicleNotFoundError as exc:
        raise _not_found() from exc
    except DuplicateVehicleNameError as exc:
        raise _duplicate_name() from exc
    except SQLAlchemyError as exc:
        raise _storage_failure("update vehicle", exc) from exc
    return _to_vehicle_response(vehicle)


@router.delete("/{vehicle_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_vehicle(vehicle_id: int, repository: Repository) -> Response:
    """Delete a vehicle."""
    vehicle_id_ctx.set(vehicle_id)
    try:
        await repository.delete(vehicle_id)
    except VehicleNotFoundError as exc:
        raise _not_found() from exc
    except SQLAlchemyError as exc:
        raise _storage_failure("delete vehicle", exc) from exc
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get("/{vehicle_id}/tax", response_model=TaxAssessmentResponse)
async def get_vehicle_tax(
    vehicle_id: int,
    repository: Repository,
    ownership_rank: int = Query(default=1, ge=1),
) -> TaxAssessmentResponse:
    """Compute the tax for a stored vehicle at an ownership rank."""
    vehicle_id_ctx.set(vehicle_id)
    try:
        vehicle = await repository.find_by_id(vehicle_id)
    except SQLAlchemyError as exc:
        raise _storage_failure("fetch vehicle", exc) from exc
    if vehicle is None:
        raise _not_found()
    return assess(vehicle.assessed_value, ownership_rank)
