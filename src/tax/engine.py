"""Progressive motor vehicle tax engine (DKI Jakarta).

This module provides pure functions for computing the annual tax due on a
motor vehicle:
- Transfer fee (BBNKB) at 12.5% of the assessed value
- Vehicle tax (PKB) at a base rate that grows with ownership rank
- Progressive surcharge relative to a first-vehicle owner
- Fixed insurance (SWDKLLJ) and administration fees (STNK, TNKB)

All monetary values use Decimal and are returned unrounded; currency
rounding and display formatting belong to the caller.
"""

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager
from dataclasses import dataclass
from decimal import MAX_EMAX, MIN_EMIN, Decimal, Inexact, InvalidOperation, localcontext


# =============================================================================
# Constants
# =============================================================================

TRANSFER_FEE_RATE = Decimal("0.125")
FIRST_OWNERSHIP_RATE = Decimal("0.16")
PROGRESSIVE_RATE_STEP = Decimal("0.08")  # added per ownership rank above 1

MANDATORY_INSURANCE_FEE = Decimal("35000")  # SWDKLLJ
REGISTRATION_ADMIN_FEE = Decimal("100000")  # STNK
PLATE_ADMIN_FEE = Decimal("60000")  # TNKB

FIXED_FEES_TOTAL = MANDATORY_INSURANCE_FEE + REGISTRATION_ADMIN_FEE + PLATE_ADMIN_FEE

_PERCENT = Decimal("100")

# Digits beyond the operands: rate and fee scales plus the fixed-fee magnitude
_PRECISION_MARGIN = 16


# =============================================================================
# Data Structures
# =============================================================================


class TaxInputError(ValueError):
    """Raised when tax engine inputs are outside the accepted domain."""

    def __init__(self, field: str, message: str) -> None:
        self.field = field
        super().__init__(f"{field}: {message}")


@dataclass(frozen=True)
class TaxAssessment:
    """Breakdown of the tax due for one vehicle at one ownership rank.

    Attributes:
        assessed_value: Official assessed sale value used as the basis.
        ownership_rank: Position of the vehicle among the owner's vehicles.
        transfer_fee: BBNKB, 12.5% of the assessed value.
        base_rate: PKB rate as a percentage (16 for the first vehicle).
        vehicle_tax: PKB, transfer fee multiplied by the base rate.
        progressive_surcharge: Vehicle tax above what a first owner pays.
        mandatory_insurance_fee: SWDKLLJ contribution.
        registration_admin_fee: STNK administration fee.
        plate_admin_fee: TNKB administration fee.
        total_tax: Vehicle tax plus the three fixed fees.
    """

    assessed_value: Decimal
    ownership_rank: int
    transfer_fee: Decimal
    base_rate: Decimal
    vehicle_tax: Decimal
    progressive_surcharge: Decimal
    mandatory_insurance_fee: Decimal
    registration_admin_fee: Decimal
    plate_admin_fee: Decimal
    total_tax: Decimal

    @property
    def fixed_fees(self) -> Decimal:
        """Sum of the insurance and administration fees."""
        return (
            self.mandatory_insurance_fee
            + self.registration_admin_fee
            + self.plate_admin_fee
        )


@dataclass(frozen=True)
class RateTier:
    """One row of the progressive rate table.

    Attributes:
        ownership_rank: Ownership rank this tier applies to.
        base_rate: PKB rate as a percentage.
    """

    ownership_rank: int
    base_rate: Decimal


# =============================================================================
# Input Validation
# =============================================================================


def _to_assessed_value(value: Decimal | int | float | str) -> Decimal:
    """Convert an assessed value to a finite, positive Decimal."""
    if isinstance(value, bool):
        raise TaxInputError("assessed_value", "must be a number, not a boolean")

    if isinstance(value, Decimal):
        amount = value
    elif isinstance(value, (int, float, str)):
        try:
            # str() keeps floats such as 0.1 from expanding to binary noise
            amount = Decimal(str(value).strip())
        except InvalidOperation as exc:
            raise TaxInputError("assessed_value", f"{value!r} is not a number") from exc
    else:
        raise TaxInputError(
            "assessed_value", f"unsupported type {type(value).__name__}"
        )

    if not amount.is_finite():
        raise TaxInputError("assessed_value", "must be a finite number")
    if amount <= 0:
        raise TaxInputError("assessed_value", "must be greater than zero")
    return amount


def _check_ownership_rank(rank: int, field: str = "ownership_rank") -> int:
    """Ensure a rank is an integer of at least 1."""
    if isinstance(rank, bool) or not isinstance(rank, int):
        raise TaxInputError(field, f"must be an integer, got {type(rank).__name__}")
    if rank < 1:
        raise TaxInputError(field, "must be at least 1")
    return rank


@contextmanager
def _exact_arithmetic(digits: int) -> Iterator[None]:
    """Run Decimal operations with enough precision that nothing rounds.

    Any rounding that still happens raises Inexact instead of being
    silently applied.
    """
    with localcontext() as ctx:
        ctx.prec = digits + _PRECISION_MARGIN
        ctx.Emax = MAX_EMAX
        ctx.Emin = MIN_EMIN
        ctx.traps[Inexact] = True
        yield


# =============================================================================
# Calculations
# =============================================================================


def base_rate_for_rank(ownership_rank: int) -> Decimal:
    """Return the PKB rate as a fraction for an ownership rank.

    The first vehicle is taxed at 16%; every further rank adds 8 percentage
    points with no ceiling.

    Args:
        ownership_rank: Ownership rank, 1 for the first vehicle.

    Returns:
        Rate as a fraction (0.16, 0.24, 0.32, ...).

    Raises:
        TaxInputError: If the rank is not an integer >= 1.
    """
    rank = _check_ownership_rank(ownership_rank)
    if rank == 1:
        return FIRST_OWNERSHIP_RATE
    with _exact_arithmetic(len(str(rank))):
        return FIRST_OWNERSHIP_RATE + PROGRESSIVE_RATE_STEP * (rank - 1)


def compute_tax(
    assessed_value: Decimal | int | float | str,
    ownership_rank: int,
) -> TaxAssessment:
    """Compute the tax breakdown for a vehicle.

    Args:
        assessed_value: Official assessed value of the vehicle.
        ownership_rank: Ownership rank of the vehicle, 1 for the first.

    Returns:
        Immutable TaxAssessment with unrounded Decimal amounts.

    Raises:
        TaxInputError: If the value is not a finite positive number or the
            rank is not an integer >= 1.

    Example:
        >>> compute_tax(18000000, 2).total_tax
        Decimal('735000.00000')
    """
    value = _to_assessed_value(assessed_value)
    rate = base_rate_for_rank(ownership_rank)

    _, digits, exponent = value.as_tuple()
    precision = len(digits) + abs(exponent) + len(str(ownership_rank))
    try:
        with _exact_arithmetic(precision):
            transfer_fee = value * TRANSFER_FEE_RATE
            vehicle_tax = transfer_fee * rate
            first_owner_vehicle_tax = transfer_fee * FIRST_OWNERSHIP_RATE
            progressive_surcharge = vehicle_tax - first_owner_vehicle_tax

            total_tax = (
                vehicle_tax
                + MANDATORY_INSURANCE_FEE
                + REGISTRATION_ADMIN_FEE
                + PLATE_ADMIN_FEE
            )
            base_rate = rate * _PERCENT
    except Inexact as exc:
        raise TaxInputError(
            "assessed_value", "cannot be computed without rounding"
        ) from exc

    return TaxAssessment(
        assessed_value=value,
        ownership_rank=ownership_rank,
        transfer_fee=transfer_fee,
        base_rate=base_rate,
        vehicle_tax=vehicle_tax,
        progressive_surcharge=progressive_surcharge,
        mandatory_insurance_fee=MANDATORY_INSURANCE_FEE,
        registration_admin_fee=REGISTRATION_ADMIN_FEE,
        plate_admin_fee=PLATE_ADMIN_FEE,
        total_tax=total_tax,
    )


def rate_schedule(max_rank: int) -> list[RateTier]:
    """Build the progressive rate table for ranks 1 through max_rank.

    Args:
        max_rank: Highest ownership rank to include.

    Returns:
        List of RateTier, one per rank, rates as percentages.

    Raises:
        TaxInputError: If max_rank is not an integer >= 1.
    """
    _check_ownership_rank(max_rank, field="max_rank")
    return [
        RateTier(ownership_rank=rank, base_rate=base_rate_for_rank(rank) * _PERCENT)
        for rank in range(1, max_rank + 1)
    ]
