"""Aggregate contribution lines into the payslip totals."""

from __future__ import annotations

from typing import Sequence

from .bases import compute_bases
from .decimal_utils import (
    DecimalValue,
    add,
    percent_of,
    round_currency,
    subtract,
    to_decimal,
    total,
)
from .models import CalculationResult, ContributionBases, ContributionLine


def aggregate(
    effective_gross_salary: DecimalValue,
    lines: Sequence[ContributionLine],
    tax_withholding_rate_percent: DecimalValue,
    *,
    ceiling: DecimalValue | None = None,
    bases: ContributionBases | None = None,
    employee_id: str = "",
    period: str = "",
) -> CalculationResult:
    """Build the rounded result from unrounded contribution ``lines``.

    The salary, the contribution totals and the tax are rounded once, when
    they are placed into the result. Net, taxable and employer-cost figures
    are exact sums and differences of those rounded values, so the payslip
    identities hold to the cent. The reported bases come from ``bases`` or,
    when only ``ceiling`` is known, are recomputed from the salary.
    """

    gross = round_currency(effective_gross_salary)
    tax_rate = to_decimal(tax_withholding_rate_percent)
    if bases is None:
        if ceiling is None:
            raise ValueError("Either 'bases' or 'ceiling' is required to report bases")
        bases = compute_bases(effective_gross_salary, ceiling)

    # Totals are output figures: each is rounded once from the exact line sums,
    # and every derived figure is computed from these rounded values.
    employee_total = round_currency(total(line.employee_amount for line in lines))
    employer_total = round_currency(total(line.employer_amount for line in lines))
    non_deductible = round_currency(
        total(line.employee_amount for line in lines if line.non_deductible)
    )

    taxable_income = subtract(gross, subtract(employee_total, non_deductible))
    net_before_tax = subtract(gross, employee_total)
    tax_amount = round_currency(percent_of(taxable_income, tax_rate))

    return CalculationResult(
        effective_gross_salary=gross,
        reduced_base=round_currency(bases.reduced),
        ceiling_capped_base=round_currency(bases.ceiling_capped),
        above_ceiling_base=round_currency(bases.above_ceiling),
        contributions=tuple(line.rounded() for line in lines),
        total_employee_contributions=employee_total,
        total_employer_contributions=employer_total,
        taxable_income=taxable_income,
        net_before_tax=net_before_tax,
        tax_amount=tax_amount,
        net_salary=subtract(net_before_tax, tax_amount),
        employer_cost=add(gross, employer_total),
        tax_withholding_rate_percent=tax_rate,
        employee_id=employee_id,
        period=period,
    )


__all__ = ["aggregate"]
