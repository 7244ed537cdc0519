"""Orchestrate request validation, fiscal-year lookup, and payslip calculations.

The service layer is the only place that touches configuration files, logs, or
timers. It resolves the rate table and ceiling for the requested year, hands a
validated :class:`CalculationInput` to the pure engine, and shapes the frozen
result into the JSON payload returned by the routes.
"""

from __future__ import annotations

import logging
import os
from collections.abc import Mapping
from contextlib import contextmanager
from time import perf_counter
from typing import Any

from pydantic import ValidationError

from fichepaie.backend.app.models import (
    EstimateRequest,
    EstimateResponse,
    GrossSalaryRequest,
    GrossSalaryResponse,
    PayslipRequest,
    PayslipResponse,
    ResponseMeta,
    format_validation_error,
)
from fichepaie.backend.config.year_config import (
    FiscalYearConfiguration,
    available_years,
    load_year_configuration,
)
from fichepaie.backend.engine import (
    CalculationInput,
    CalculationResult,
    calculate_payslip,
    compute_gross_salary,
    estimate_net_salary,
)

_LOGGER = logging.getLogger(__name__)


def _profiling_enabled() -> bool:
    """Return ``True`` when calculation profiling should be captured."""

    flag = os.getenv("FICHEPAIE_PROFILE_CALCULATIONS", "")
    return flag.strip().lower() in {"1", "true", "yes", "on"}


@contextmanager
def _profile_section(name: str, store: dict[str, float] | None):
    """Capture the duration of a named section when profiling is enabled."""

    if store is None:
        yield
        return

    start = perf_counter()
    try:
        yield
    finally:
        store[name] = perf_counter() - start


def _validate_request(model: type[Any], payload: Mapping[str, Any]) -> Any:
    if not isinstance(payload, Mapping):
        raise ValueError("Calculation payload must be a mapping")
    try:
        return model.model_validate(payload)
    except ValidationError as exc:
        raise ValueError(format_validation_error(exc)) from exc


def _resolve_configuration(year: int | None) -> FiscalYearConfiguration:
    """Load ``year`` or fall back to the latest configured year."""

    if year is None:
        years = available_years()
        if not years:
            raise FileNotFoundError("No fiscal years are configured")
        year = years[-1]
    return load_year_configuration(year)


def _build_meta(
    config: FiscalYearConfiguration, *, is_estimate: bool = False, ceiling: Any = None
) -> ResponseMeta:
    return ResponseMeta(
        year=config.year,
        currency=str(config.meta.get("currency", "EUR")),
        social_security_ceiling=(
            ceiling if ceiling is not None else config.social_security_ceiling
        ),
        rate_table_source=config.meta.get("source"),
        is_estimate=is_estimate,
    )


def _build_calculation_input(
    request: PayslipRequest, config: FiscalYearConfiguration
) -> CalculationInput:
    rate_table = (
        tuple(request.rate_table)
        if request.rate_table is not None
        else config.to_rate_table()
    )
    ceiling = request.social_security_ceiling or config.social_security_ceiling
    contracted_hours = request.contracted_hours or config.reference_hours

    return CalculationInput(
        employee_id=request.employee_id,
        period=request.period,
        gross_salary=request.gross_salary,
        is_executive=request.is_executive,
        contracted_hours=contracted_hours,
        reference_hours=config.reference_hours,
        tax_withholding_rate_percent=request.tax_withholding_rate,
        social_security_ceiling=ceiling,
        rate_table=rate_table,
    )


def _serialise_result(
    result: CalculationResult, meta: ResponseMeta
) -> dict[str, Any]:
    response = PayslipResponse.model_validate({**result.as_dict(), "meta": meta})
    # JSON mode renders every Decimal as its exact string form.
    return response.model_dump(mode="json")


def calculate_payslip_for_request(payload: Mapping[str, Any]) -> dict[str, Any]:
    """Validate ``payload``, run the engine, and return a JSON-ready payslip."""

    timings: dict[str, float] | None = {} if _profiling_enabled() else None
    overall_start = perf_counter() if timings is not None else None

    with _profile_section("validation", timings):
        request = _validate_request(PayslipRequest, payload)

    with _profile_section("configuration", timings):
        config = load_year_configuration(request.year)
        calculation_input = _build_calculation_input(request, config)

    with _profile_section("engine", timings):
        result = calculate_payslip(calculation_input)

    _LOGGER.debug(
        "Computed payslip employee=%s period=%s year=%s lines=%d",
        result.employee_id or "-",
        result.period or "-",
        config.year,
        len(result.contributions),
    )

    meta = _build_meta(config, ceiling=calculation_input.social_security_ceiling)
    payload_out = _serialise_result(result, meta)

    if timings is not None and overall_start is not None:
        timings["total"] = perf_counter() - overall_start
        _LOGGER.debug(
            "calculate_payslip timings (ms): %s",
            {name: round(duration * 1000, 3) for name, duration in timings.items()},
        )

    return payload_out


def estimate_for_request(payload: Mapping[str, Any]) -> dict[str, Any]:
    """Return a flat-rate preview using the year's configured estimate rates."""

    request = _validate_request(EstimateRequest, payload)
    config = _resolve_configuration(request.year)
    rates = config.quick_estimate

    estimate = estimate_net_salary(
        request.gross_salary,
        rates.employee_rate_percent,
        rates.employer_rate_percent,
    )
    _LOGGER.debug("Computed flat-rate estimate for year %s", config.year)

    response = EstimateResponse.model_validate(
        {**estimate.as_dict(), "meta": _build_meta(config, is_estimate=True)}
    )
    return response.model_dump(mode="json")


def build_gross_salary_for_request(payload: Mapping[str, Any]) -> dict[str, Any]:
    """Return the gross salary built from base pay, overtime, and bonuses."""

    request = _validate_request(GrossSalaryRequest, payload)
    config = _resolve_configuration(request.year)

    breakdown = compute_gross_salary(
        request.base_salary,
        overtime_hours_25=request.overtime_hours_25,
        overtime_hours_50=request.overtime_hours_50,
        bonuses=request.bonuses,
        monthly_reference_hours=config.monthly_reference_hours,
    )

    response = GrossSalaryResponse.model_validate(
        {**breakdown.as_dict(), "meta": _build_meta(config)}
    )
    return response.model_dump(mode="json")


__all__ = [
    "build_gross_salary_for_request",
    "calculate_payslip_for_request",
    "estimate_for_request",
]
