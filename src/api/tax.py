"""Tax calculation API endpoints."""

from decimal import Decimal

from fastapi import APIRouter, HTTPException, Query
from pydantic import BaseModel

from src.core.config import settings
from src.core.logging import get_logger
from src.tax.engine import (
    MANDATORY_INSURANCE_FEE,
    PLATE_ADMIN_FEE,
    REGISTRATION_ADMIN_FEE,
    TRANSFER_FEE_RATE,
    TaxAssessment,
    TaxInputError,
    compute_tax,
    rate_schedule,
)

logger = get_logger(__name__)

router = APIRouter(prefix="/api/tax", tags=["tax"])


class TaxCalculationRequest(BaseModel):
    """Payload for an ad-hoc tax calculation."""

    assessed_value: Decimal
    ownership_rank: int


class TaxAssessmentResponse(BaseModel):
    """Tax breakdown response model."""

    assessed_value: Decimal
    ownership_rank: int
    transfer_fee: Decimal
    base_rate: Decimal
    vehicle_tax: Decimal
    progressive_surcharge: Decimal
    mandatory_insurance_fee: Decimal
    registration_admin_fee: Decimal
    plate_admin_fee: Decimal
    fixed_fees: Decimal
    total_tax: Decimal


class RateTierResponse(BaseModel):
    """One ownership rank and its PKB rate in percent."""

    ownership_rank: int
    base_rate: Decimal


class RateScheduleResponse(BaseModel):
    """Rates and fixed fees used by the tax engine."""

    transfer_fee_rate: Decimal
    tiers: list[RateTierResponse]
    mandatory_insurance_fee: Decimal
    registration_admin_fee: Decimal
    plate_admin_fee: Decimal


def to_assessment_response(assessment: TaxAssessment) -> TaxAssessmentResponse:
    """Map an engine result to the response model."""
    return TaxAssessmentResponse(
        assessed_value=assessment.assessed_value,
        ownership_rank=assessment.ownership_rank,
        transfer_fee=assessment.transfer_fee,
        base_rate=assessment.base_rate,
        vehicle_tax=assessment.vehicle_tax,
        progressive_surcharge=assessment.progressive_surcharge,
        mandatory_insurance_fee=assessment.mandatory_insurance_fee,
        registration_admin_fee=assessment.registration_admin_fee,
        plate_admin_fee=assessment.plate_admin_fee,
        fixed_fees=assessment.fixed_fees,
        total_tax=assessment.total_tax,
    )


def check_ownership_rank_limit(ownership_rank: int) -> None:
    """Reject ranks above the configured request cap.

    Raises:
        HTTPException: 422 when the rank exceeds settings.max_ownership_rank.
    """
    if ownership_rank > settings.max_ownership_rank:
        raise HTTPException(
            status_code=422,
            detail=(
                f"ownership_rank must be between 1 and {settings.max_ownership_rank}"
            ),
        )


def assess(assessed_value: Decimal, ownership_rank: int) -> TaxAssessmentResponse:
    """Run the engine and translate input errors to HTTP 422."""
    check_ownership_rank_limit(ownership_rank)
    try:
        assessment = compute_tax(assessed_value, ownership_rank)
    except TaxInputError as exc:
        logger.info("tax_input_rejected", field=exc.field, error=str(exc))
        raise HTTPException(
            status_code=422,
            detail=str(exc),
        ) from exc

    logger.info(
        "tax_computed",
        ownership_rank=ownership_rank,
        total_tax=assessment.total_tax,
    )
    return to_assessment_response(assessment)


@router.post("/calculate", response_model=TaxAssessmentResponse)
async def calculate_tax(payload: TaxCalculationRequest) -> TaxAssessmentResponse:
    """Compute the tax for an arbitrary assessed value."""
    return assess(payload.assessed_value, payload.ownership_rank)


@router.get("/rates", response_model=RateScheduleResponse)
async def get_rates(
    max_rank: int | None = Query(default=None, ge=1, le=100),
) -> RateScheduleResponse:
    """Return the progressive rate table and the fixed fees."""
    tiers = rate_schedule(max_rank or settings.max_ownership_rank)
    return RateScheduleResponse(
        transfer_fee_rate=TRANSFER_FEE_RATE * 100,
        tiers=[
            RateTierResponse(ownership_rank=tier.ownership_rank, base_rate=tier.base_rate)
            for tier in tiers
        ],
        mandatory_insurance_fee=MANDATORY_INSURANCE_FEE,
        registration_admin_fee=REGISTRATION_ADMIN_FEE,
        plate_admin_fee=PLATE_ADMIN_FEE,
    )
