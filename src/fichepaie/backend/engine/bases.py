"""Contribution base computation (tranche slicing against the ceiling)."""

from __future__ import annotations

from decimal import Decimal

from fichepaie.backend.config.schema import BaseType

from .decimal_utils import ZERO, DecimalValue, minimum, multiply, subtract, to_decimal
from .models import ContributionBases

REDUCED_BASE_RATIO = Decimal("0.9825")
ABOVE_CEILING_MULTIPLIER = Decimal("8")


def ceiling_capped_base(gross_salary: DecimalValue, ceiling: DecimalValue) -> Decimal:
    """Tranche 1: the part of the salary up to the ceiling."""

    return minimum(gross_salary, ceiling)


def above_ceiling_base(gross_salary: DecimalValue, ceiling: DecimalValue) -> Decimal:
    """Tranche 2: the part of the salary between one and eight ceilings."""

    salary = to_decimal(gross_salary)
    cap = to_decimal(ceiling)
    if salary <= cap:
        return ZERO
    upper = minimum(salary, multiply(cap, ABOVE_CEILING_MULTIPLIER))
    return subtract(upper, cap)


def reduced_base(gross_salary: DecimalValue) -> Decimal:
    """CSG/CRDS base: 98.25% of the gross salary."""

    return multiply(gross_salary, REDUCED_BASE_RATIO)


def compute_base(
    base_type: BaseType, gross_salary: DecimalValue, ceiling: DecimalValue
) -> Decimal:
    """Return the amount a contribution of ``base_type`` is computed against."""

    if base_type is BaseType.TOTAL:
        return to_decimal(gross_salary)
    if base_type is BaseType.CEILING_CAPPED:
        return ceiling_capped_base(gross_salary, ceiling)
    if base_type is BaseType.ABOVE_CEILING:
        return above_ceiling_base(gross_salary, ceiling)
    if base_type is BaseType.REDUCED:
        return reduced_base(gross_salary)
    raise ValueError(f"Unsupported base type: {base_type!r}")


def compute_bases(gross_salary: DecimalValue, ceiling: DecimalValue) -> ContributionBases:
    """Compute every base once for a given salary and ceiling."""

    return ContributionBases(
        total=to_decimal(gross_salary),
        ceiling_capped=ceiling_capped_base(gross_salary, ceiling),
        above_ceiling=above_ceiling_base(gross_salary, ceiling),
        reduced=reduced_base(gross_salary),
    )


__all__ = [
    "ABOVE_CEILING_MULTIPLIER",
    "REDUCED_BASE_RATIO",
    "above_ceiling_base",
    "ceiling_capped_base",
    "compute_base",
    "compute_bases",
    "reduced_base",
]
