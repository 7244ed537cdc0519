"""Public entry point of the payroll calculation engine."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from pydantic import ValidationError

from .aggregation import aggregate
from .bases import compute_bases
from .contributions import apply_rate_table
from .decimal_utils import money_context
from .models import (
    CalculationInput,
    CalculationInputError,
    CalculationResult,
    format_validation_error,
)
from .proration import effective_gross_salary


def _coerce_input(payload: CalculationInput | Mapping[str, Any]) -> CalculationInput:
    if isinstance(payload, CalculationInput):
        return payload
    if not isinstance(payload, Mapping):
        raise CalculationInputError("Calculation input must be a mapping")
    try:
        return CalculationInput.model_validate(payload)
    except ValidationError as exc:
        raise CalculationInputError(format_validation_error(exc)) from exc


def calculate_payslip(payload: CalculationInput | Mapping[str, Any]) -> CalculationResult:
    """Turn a gross salary and a rate table into a fully itemised payslip.

    The computation is pure: no I/O, no clock, no shared state. Identical
    input always yields an equal result, so calls can run concurrently.
    """

    calculation = _coerce_input(payload)

    with money_context():
        gross = effective_gross_salary(
            calculation.gross_salary,
            calculation.contracted_hours,
            calculation.reference_hours,
        )
        bases = compute_bases(gross, calculation.social_security_ceiling)
        lines = apply_rate_table(calculation.rate_table, calculation.is_executive, bases)
        return aggregate(
            gross,
            lines,
            calculation.tax_withholding_rate_percent,
            bases=bases,
            employee_id=calculation.employee_id,
            period=calculation.period,
        )


__all__ = ["calculate_payslip"]
