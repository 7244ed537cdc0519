"""REST endpoints for payslip calculations."""

from __future__ import annotations

from typing import Any

from flask import Blueprint, request

from fichepaie.backend.app.http import not_found
from fichepaie.backend.services import (
    build_calculation_response,
    build_gross_salary_for_request,
    calculate_payslip_for_request,
    estimate_for_request,
    parse_calculation_payload,
)

blueprint = Blueprint("payslips", __name__, url_prefix="/api/v1/payslips")


@blueprint.post("/calculations")
def create_calculation() -> tuple[Any, int]:
    """Compute an itemised payslip from the submitted JSON payload."""

    payload = parse_calculation_payload(request)
    try:
        result = calculate_payslip_for_request(payload)
    except FileNotFoundError as exc:
        return not_found(exc).to_response()

    return build_calculation_response(result)


@blueprint.post("/estimates")
def create_estimate() -> tuple[Any, int]:
    """Return a flat-rate net salary preview flagged as an estimate."""

    payload = parse_calculation_payload(request)
    try:
        result = estimate_for_request(payload)
    except FileNotFoundError as exc:
        return not_found(exc).to_response()

    return build_calculation_response(result)


@blueprint.post("/gross-salary")
def create_gross_salary() -> tuple[Any, int]:
    """Build a gross salary from base pay, overtime hours, and bonuses."""

    payload = parse_calculation_payload(request)
    try:
        result = build_gross_salary_for_request(payload)
    except FileNotFoundError as exc:
        return not_found(exc).to_response()

    return build_calculation_response(result)
