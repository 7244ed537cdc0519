"""Payroll calculation engine: rate table in, itemised payslip out."""

from .aggregation import aggregate
from .bases import compute_base, compute_bases
from .contributions import apply_rate_table
from .decimal_utils import round_currency, to_decimal
from .estimate import QuickEstimate, estimate_net_salary
from .gross import GrossSalaryBreakdown, compute_gross_salary
from .models import (
    CalculationInput,
    CalculationInputError,
    CalculationResult,
    ContributionBases,
    ContributionLine,
)
from .payslip import calculate_payslip
from .proration import effective_gross_salary, prorate

__all__ = [
    "CalculationInput",
    "CalculationInputError",
    "CalculationResult",
    "ContributionBases",
    "ContributionLine",
    "GrossSalaryBreakdown",
    "QuickEstimate",
    "aggregate",
    "apply_rate_table",
    "calculate_payslip",
    "compute_base",
    "compute_bases",
    "compute_gross_salary",
    "effective_gross_salary",
    "estimate_net_salary",
    "prorate",
    "round_currency",
    "to_decimal",
]
