"""Motor vehicle tax calculation."""

from src.tax.engine import (
    FIXED_FEES_TOTAL,
    MANDATORY_INSURANCE_FEE,
    PLATE_ADMIN_FEE,
    REGISTRATION_ADMIN_FEE,
    TRANSFER_FEE_RATE,
    RateTier,
    TaxAssessment,
    TaxInputError,
    base_rate_for_rank,
    compute_tax,
    rate_schedule,
)

__all__ = [
    "FIXED_FEES_TOTAL",
    "MANDATORY_INSURANCE_FEE",
    "PLATE_ADMIN_FEE",
    "REGISTRATION_ADMIN_FEE",
    "TRANSFER_FEE_RATE",
    "RateTier",
    "TaxAssessment",
    "TaxInputError",
    "base_rate_for_rank",
    "compute_tax",
    "rate_schedule",
]
