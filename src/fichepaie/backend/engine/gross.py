"""Gross salary construction from base pay, overtime and bonuses."""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal

from .decimal_utils import (
    ZERO,
    DecimalValue,
    divide,
    multiply,
    round_currency,
    to_decimal,
    total,
)

MONTHLY_REFERENCE_HOURS = Decimal("151.67")
OVERTIME_25_MULTIPLIER = Decimal("1.25")
OVERTIME_50_MULTIPLIER = Decimal("1.5")


@dataclass(frozen=True)
class GrossSalaryBreakdown:
    """Rounded components of a monthly gross salary."""

    base_salary: Decimal
    hourly_rate: Decimal
    overtime_25_amount: Decimal
    overtime_50_amount: Decimal
    bonuses: Decimal
    gross_salary: Decimal

    def as_dict(self) -> dict[str, Decimal]:
        return {
            "base_salary": self.base_salary,
            "hourly_rate": self.hourly_rate,
            "overtime_25_amount": self.overtime_25_amount,
            "overtime_50_amount": self.overtime_50_amount,
            "bonuses": self.bonuses,
            "gross_salary": self.gross_salary,
        }


def compute_gross_salary(
    base_salary: DecimalValue,
    overtime_hours_25: DecimalValue = ZERO,
    overtime_hours_50: DecimalValue = ZERO,
    bonuses: DecimalValue = ZERO,
    monthly_reference_hours: DecimalValue = MONTHLY_REFERENCE_HOURS,
) -> GrossSalaryBreakdown:
    """Return the monthly gross salary including overtime at 125% and 150%.

    Each overtime amount is rounded to cents because it appears as its own
    payslip line; the hourly rate itself stays unrounded.
    """

    base = to_decimal(base_salary)
    hours_25 = to_decimal(overtime_hours_25)
    hours_50 = to_decimal(overtime_hours_50)
    extra = to_decimal(bonuses)
    reference = to_decimal(monthly_reference_hours)

    if min(base, hours_25, hours_50, extra) < 0:
        raise ValueError("Salary components cannot be negative")
    if reference <= 0:
        raise ValueError("Monthly reference hours must be positive")

    hourly_rate = divide(base, reference)
    overtime_25 = round_currency(multiply(multiply(hourly_rate, OVERTIME_25_MULTIPLIER), hours_25))
    overtime_50 = round_currency(multiply(multiply(hourly_rate, OVERTIME_50_MULTIPLIER), hours_50))

    return GrossSalaryBreakdown(
        base_salary=round_currency(base),
        hourly_rate=round_currency(hourly_rate),
        overtime_25_amount=overtime_25,
        overtime_50_amount=overtime_50,
        bonuses=round_currency(extra),
        gross_salary=round_currency(total((base, overtime_25, overtime_50, extra))),
    )


__all__ = [
    "GrossSalaryBreakdown",
    "MONTHLY_REFERENCE_HOURS",
    "compute_gross_salary",
]
