"""Input and result types for the payroll calculation engine.

Inputs are frozen Pydantic models so invalid values are rejected when the
object is built, before any computation runs. Derived values are frozen
dataclasses: they are created once per calculation and never mutated.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from decimal import Decimal
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from fichepaie.backend.config.schema import BaseType, ContributionCategory, RateDefinition

from .decimal_utils import round_currency, to_decimal

FULL_TIME_REFERENCE_HOURS = Decimal("35")


class CalculationInputError(ValueError):
    """Raised when a payslip calculation request is rejected."""


class CalculationInput(BaseModel):
    """Validated input for a single payslip calculation."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    employee_id: str = ""
    period: str = ""
    gross_salary: Decimal = Field(ge=0)
    is_executive: bool = False
    contracted_hours: Decimal = Field(default=FULL_TIME_REFERENCE_HOURS, gt=0)
    reference_hours: Decimal = Field(default=FULL_TIME_REFERENCE_HOURS, gt=0)
    tax_withholding_rate_percent: Decimal = Field(default=Decimal("0"), ge=0, le=100)
    social_security_ceiling: Decimal = Field(gt=0)
    rate_table: tuple[RateDefinition, ...] = ()

    @field_validator(
        "gross_salary",
        "contracted_hours",
        "reference_hours",
        "tax_withholding_rate_percent",
        "social_security_ceiling",
        mode="before",
    )
    @classmethod
    def _coerce_decimal(cls, value: Any) -> Decimal:
        try:
            return to_decimal(value)
        except TypeError as exc:
            raise ValueError(str(exc)) from exc

    @field_validator("employee_id", "period", mode="before")
    @classmethod
    def _coerce_identifier(cls, value: Any) -> str:
        if value is None:
            return ""
        return str(value)


@dataclass(frozen=True)
class ContributionBases:
    """Unrounded salary slices derived from the effective gross salary."""

    total: Decimal
    ceiling_capped: Decimal
    above_ceiling: Decimal
    reduced: Decimal

    def for_type(self, base_type: BaseType) -> Decimal:
        return {
            BaseType.TOTAL: self.total,
            BaseType.CEILING_CAPPED: self.ceiling_capped,
            BaseType.ABOVE_CEILING: self.above_ceiling,
            BaseType.REDUCED: self.reduced,
        }[base_type]


@dataclass(frozen=True)
class ContributionLine:
    """One applied rate-table entry."""

    category: ContributionCategory
    label: str
    base_type: BaseType
    base_amount: Decimal
    employer_rate_percent: Decimal
    employee_rate_percent: Decimal
    employer_amount: Decimal
    employee_amount: Decimal
    non_deductible: bool = False
    executive_only: bool = False
    code: str | None = None

    def rounded(self) -> ContributionLine:
        """Return a copy with base and amounts rounded to cents."""

        return replace(
            self,
            base_amount=round_currency(self.base_amount),
            employer_amount=round_currency(self.employer_amount),
            employee_amount=round_currency(self.employee_amount),
        )

    def as_dict(self) -> dict[str, Any]:
        return {
            "code": self.code,
            "category": self.category.value,
            "label": self.label,
            "base_type": self.base_type.value,
            "base_amount": self.base_amount,
            "employer_rate_percent": self.employer_rate_percent,
            "employee_rate_percent": self.employee_rate_percent,
            "employer_amount": self.employer_amount,
            "employee_amount": self.employee_amount,
            "non_deductible": self.non_deductible,
            "executive_only": self.executive_only,
        }


@dataclass(frozen=True)
class CalculationResult:
    """Complete, rounded payslip computation."""

    effective_gross_salary: Decimal
    reduced_base: Decimal
    ceiling_capped_base: Decimal
    above_ceiling_base: Decimal
    contributions: tuple[ContributionLine, ...]
    total_employee_contributions: Decimal
    total_employer_contributions: Decimal
    taxable_income: Decimal
    net_before_tax: Decimal
    tax_amount: Decimal
    net_salary: Decimal
    employer_cost: Decimal
    tax_withholding_rate_percent: Decimal = Decimal("0")
    employee_id: str = ""
    period: str = ""

    def lines_for_category(self, category: ContributionCategory) -> tuple[ContributionLine, ...]:
        return tuple(line for line in self.contributions if line.category is category)

    def as_dict(self) -> dict[str, Any]:
        return {
            "employee_id": self.employee_id,
            "period": self.period,
            "effective_gross_salary": self.effective_gross_salary,
            "reduced_base": self.reduced_base,
            "ceiling_capped_base": self.ceiling_capped_base,
            "above_ceiling_base": self.above_ceiling_base,
            "contributions": [line.as_dict() for line in self.contributions],
            "total_employee_contributions": self.total_employee_contributions,
            "total_employer_contributions": self.total_employer_contributions,
            "taxable_income": self.taxable_income,
            "net_before_tax": self.net_before_tax,
            "tax_withholding_rate_percent": self.tax_withholding_rate_percent,
            "tax_amount": self.tax_amount,
            "net_salary": self.net_salary,
            "employer_cost": self.employer_cost,
        }


def format_validation_error(error: ValidationError) -> str:
    """Return a concise human-readable description of validation issues."""

    messages: list[str] = []
    for issue in error.errors():
        location = ".".join(str(part) for part in issue.get("loc", ()))
        message = issue.get("msg", "Invalid value")
        if "greater than or equal to 0" in message.lower():
            message = "value cannot be negative"
        if location:
            messages.append(f"{location}: {message}")
        else:
            messages.append(message)

    details = "; ".join(messages) if messages else str(error)
    return f"Invalid calculation input: {details}"


__all__ = [
    "CalculationInput",
    "CalculationInputError",
    "CalculationResult",
    "ContributionBases",
    "ContributionLine",
    "FULL_TIME_REFERENCE_HOURS",
    "format_validation_error",
]
