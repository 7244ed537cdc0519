"""Pydantic models describing the public API surface."""

from __future__ import annotations

from decimal import Decimal
from typing import Any

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    ValidationError,
    field_validator,
)

from fichepaie.backend.config.schema import RateDefinition

__all__ = [
    "PayslipRequest",
    "EstimateRequest",
    "GrossSalaryRequest",
    "ContributionEntry",
    "PayslipResponse",
    "EstimateResponse",
    "GrossSalaryResponse",
    "ResponseMeta",
    "format_validation_error",
]

_AMOUNT_CONFIG = ConfigDict(extra="forbid")


def _reject_boolean(value: Any) -> Any:
    if isinstance(value, bool):
        raise ValueError("Boolean values are not valid amounts")
    return value


class PayslipRequest(BaseModel):
    """Payload accepted by the payslip calculation endpoint."""

    model_config = ConfigDict(extra="forbid")

    year: int = Field(..., ge=0)
    employee_id: str = ""
    period: str = ""
    gross_salary: Decimal = Field(..., ge=0)
    is_executive: bool = False
    contracted_hours: Decimal | None = Field(default=None, gt=0)
    tax_withholding_rate: Decimal = Field(default=Decimal("0"), ge=0, le=100)
    social_security_ceiling: Decimal | None = Field(default=None, gt=0)
    rate_table: list[RateDefinition] | None = None

    @field_validator(
        "gross_salary",
        "contracted_hours",
        "tax_withholding_rate",
        "social_security_ceiling",
        mode="before",
    )
    @classmethod
    def _reject_boolean_amounts(cls, value: Any) -> Any:
        return _reject_boolean(value)

    @field_validator("employee_id", "period", mode="before")
    @classmethod
    def _normalise_identifier(cls, value: Any) -> str:
        if value is None:
            return ""
        return str(value).strip()


class EstimateRequest(BaseModel):
    """Payload for the flat-rate estimate endpoint."""

    model_config = ConfigDict(extra="forbid")

    year: int | None = Field(default=None, ge=0)
    gross_salary: Decimal = Field(..., ge=0)

    @field_validator("gross_salary", mode="before")
    @classmethod
    def _reject_boolean_amounts(cls, value: Any) -> Any:
        return _reject_boolean(value)


class GrossSalaryRequest(BaseModel):
    """Payload for the gross salary builder endpoint."""

    model_config = ConfigDict(extra="forbid")

    year: int | None = Field(default=None, ge=0)
    base_salary: Decimal = Field(..., ge=0)
    overtime_hours_25: Decimal = Field(default=Decimal("0"), ge=0)
    overtime_hours_50: Decimal = Field(default=Decimal("0"), ge=0)
    bonuses: Decimal = Field(default=Decimal("0"), ge=0)

    @field_validator(
        "base_salary", "overtime_hours_25", "overtime_hours_50", "bonuses", mode="before"
    )
    @classmethod
    def _reject_boolean_amounts(cls, value: Any) -> Any:
        return _reject_boolean(value)


class ContributionEntry(BaseModel):
    """A rounded contribution line in the response."""

    model_config = _AMOUNT_CONFIG

    code: str | None = None
    category: str
    label: str
    base_type: str
    base_amount: Decimal
    employer_rate_percent: Decimal
    employee_rate_percent: Decimal
    employer_amount: Decimal
    employee_amount: Decimal
    non_deductible: bool
    executive_only: bool


class ResponseMeta(BaseModel):
    """Metadata returned alongside a calculation."""

    model_config = ConfigDict(extra="forbid")

    year: int | None = None
    currency: str = "EUR"
    social_security_ceiling: Decimal | None = None
    rate_table_source: str | None = None
    is_estimate: bool = False


class PayslipResponse(BaseModel):
    """Full payslip computation returned by the API."""

    model_config = _AMOUNT_CONFIG

    employee_id: str
    period: str
    effective_gross_salary: Decimal
    reduced_base: Decimal
    ceiling_capped_base: Decimal
    above_ceiling_base: Decimal
    contributions: list[ContributionEntry]
    total_employee_contributions: Decimal
    total_employer_contributions: Decimal
    taxable_income: Decimal
    net_before_tax: Decimal
    tax_withholding_rate_percent: Decimal
    tax_amount: Decimal
    net_salary: Decimal
    employer_cost: Decimal
    meta: ResponseMeta


class EstimateResponse(BaseModel):
    """Flat-rate estimate, explicitly flagged as such."""

    model_config = _AMOUNT_CONFIG

    gross_salary: Decimal
    employee_rate_percent: Decimal
    employer_rate_percent: Decimal
    employee_contributions: Decimal
    employer_contributions: Decimal
    net_salary: Decimal
    employer_cost: Decimal
    is_estimate: bool
    meta: ResponseMeta


class GrossSalaryResponse(BaseModel):
    model_config = _AMOUNT_CONFIG

    base_salary: Decimal
    hourly_rate: Decimal
    overtime_25_amount: Decimal
    overtime_50_amount: Decimal
    bonuses: Decimal
    gross_salary: Decimal
    meta: ResponseMeta


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
    return f"Invalid calculation payload: {details}"
