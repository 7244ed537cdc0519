"""Flat-rate gross-to-net preview.

This is a rough estimate for interactive previews. It applies one flat
employee rate and one flat employer rate to the whole salary and must never
be used for a payslip; :func:`fichepaie.backend.engine.calculate_payslip` is
the authoritative computation.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal

from .decimal_utils import DecimalValue, add, percent_of, round_currency, subtract, to_decimal

DEFAULT_EMPLOYEE_RATE_PERCENT = Decimal("22")
DEFAULT_EMPLOYER_RATE_PERCENT = Decimal("42")


@dataclass(frozen=True)
class QuickEstimate:
    gross_salary: Decimal
    employee_rate_percent: Decimal
    employer_rate_percent: Decimal
    employee_contributions: Decimal
    employer_contributions: Decimal
    net_salary: Decimal
    employer_cost: Decimal
    is_estimate: bool = True

    def as_dict(self) -> dict[str, object]:
        return {
            "gross_salary": self.gross_salary,
            "employee_rate_percent": self.employee_rate_percent,
            "employer_rate_percent": self.employer_rate_percent,
            "employee_contributions": self.employee_contributions,
            "employer_contributions": self.employer_contributions,
            "net_salary": self.net_salary,
            "employer_cost": self.employer_cost,
            "is_estimate": self.is_estimate,
        }


def estimate_net_salary(
    gross_salary: DecimalValue,
    employee_rate_percent: DecimalValue = DEFAULT_EMPLOYEE_RATE_PERCENT,
    employer_rate_percent: DecimalValue = DEFAULT_EMPLOYER_RATE_PERCENT,
) -> QuickEstimate:
    """Return a labelled flat-rate estimate for ``gross_salary``."""

    gross = to_decimal(gross_salary)
    employee_rate = to_decimal(employee_rate_percent)
    employer_rate = to_decimal(employer_rate_percent)
    if gross < 0:
        raise ValueError("Gross salary cannot be negative")
    for rate in (employee_rate, employer_rate):
        if rate < 0 or rate > 100:
            raise ValueError("Estimate rates must be between 0 and 100")

    employee = percent_of(gross, employee_rate)
    employer = percent_of(gross, employer_rate)

    return QuickEstimate(
        gross_salary=round_currency(gross),
        employee_rate_percent=employee_rate,
        employer_rate_percent=employer_rate,
        employee_contributions=round_currency(employee),
        employer_contributions=round_currency(employer),
        net_salary=round_currency(subtract(gross, employee)),
        employer_cost=round_currency(add(gross, employer)),
    )


__all__ = [
    "DEFAULT_EMPLOYEE_RATE_PERCENT",
    "DEFAULT_EMPLOYER_RATE_PERCENT",
    "QuickEstimate",
    "estimate_net_salary",
]
