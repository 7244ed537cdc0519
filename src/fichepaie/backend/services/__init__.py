"""Service-layer helpers for the fichepaie backend."""

from .calculation_service import (
    build_gross_salary_for_request,
    calculate_payslip_for_request,
    estimate_for_request,
)
from .request_parser import parse_calculation_payload
from .response_builder import build_calculation_response

__all__ = [
    "build_gross_salary_for_request",
    "calculate_payslip_for_request",
    "estimate_for_request",
    "parse_calculation_payload",
    "build_calculation_response",
]
