"""Part-time proration of a full-time-equivalent salary."""

from __future__ import annotations

from decimal import Decimal

from .decimal_utils import DecimalValue, divide, multiply, to_decimal
from .models import FULL_TIME_REFERENCE_HOURS


def prorate(
    full_time_salary: DecimalValue,
    contracted_hours: DecimalValue,
    reference_hours: DecimalValue = FULL_TIME_REFERENCE_HOURS,
) -> Decimal:
    """Return ``full_time_salary * contracted_hours / reference_hours``.

    Multiplication happens first so that exact fractions of the reference
    (17.5 of 35) stay exact.
    """

    hours = to_decimal(contracted_hours)
    reference = to_decimal(reference_hours)
    if hours <= 0 or reference <= 0:
        raise ValueError("Contracted and reference hours must be positive")
    return divide(multiply(full_time_salary, hours), reference)


def effective_gross_salary(
    full_time_salary: DecimalValue,
    contracted_hours: DecimalValue,
    reference_hours: DecimalValue = FULL_TIME_REFERENCE_HOURS,
) -> Decimal:
    """Prorate only when the schedule is shorter than the reference."""

    if to_decimal(contracted_hours) < to_decimal(reference_hours):
        return prorate(full_time_salary, contracted_hours, reference_hours)
    return to_decimal(full_time_salary)


__all__ = ["effective_gross_salary", "prorate"]
