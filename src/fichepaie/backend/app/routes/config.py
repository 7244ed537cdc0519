"""Expose fiscal-year configuration consumed by payroll front-ends.

These endpoints bridge the YAML-backed rate tables and any client form so that
contribution labels, ceilings, and estimate rates are never duplicated outside
the configuration files.
"""

from __future__ import annotations

from typing import Any

from flask import Blueprint, jsonify

from fichepaie.backend.app.http import not_found
from fichepaie.backend.config.year_config import (
    FiscalYearConfiguration,
    RateDefinition,
    load_manifest,
    load_year_configuration,
    manifest_entries,
)
from fichepaie.backend.version import get_project_version

blueprint = Blueprint("config", __name__, url_prefix="/api/v1/config")


def get_configuration_metadata() -> dict[str, Any]:
    """Expose runtime metadata derived from the configuration manifest."""

    manifest = load_manifest()
    supported_years = list(manifest.supported_years)
    default_year = supported_years[-1] if supported_years else None
    return {
        "version": get_project_version(),
        "supported_years": supported_years,
        "default_year": default_year,
    }


def _serialise_rate(entry: RateDefinition) -> dict[str, Any]:
    return {
        "code": entry.code,
        "category": entry.category.value,
        "label": entry.label,
        "base_type": entry.base_type.value,
        "employer_rate_percent": str(entry.employer_rate_percent),
        "employee_rate_percent": str(entry.employee_rate_percent),
        "executive_only": entry.executive_only,
        "non_deductible": entry.non_deductible,
    }


def _serialise_year(config: FiscalYearConfiguration) -> dict[str, Any]:
    return {
        "year": config.year,
        "meta": dict(config.meta),
        "social_security_ceiling": str(config.social_security_ceiling),
        "reference_hours": str(config.reference_hours),
        "monthly_reference_hours": str(config.monthly_reference_hours),
        "quick_estimate": {
            "employee_rate_percent": str(config.quick_estimate.employee_rate_percent),
            "employer_rate_percent": str(config.quick_estimate.employer_rate_percent),
        },
    }


@blueprint.get("/meta")
def get_application_metadata() -> tuple[Any, int]:
    """Expose lightweight application metadata such as the version identifier."""

    payload = get_configuration_metadata()
    return jsonify(payload), 200


@blueprint.get("/years")
def list_years() -> tuple[Any, int]:
    """Return all configured years with their ceilings and estimate rates."""

    years = [
        {
            **_serialise_year(load_year_configuration(entry.year)),
            "status": entry.status,
            "notes_url": entry.notes_url,
        }
        for entry in sorted(manifest_entries(), key=lambda item: item.year)
    ]
    metadata = get_configuration_metadata()
    payload = {
        "years": years,
        "default_year": metadata["default_year"],
        "supported_years": metadata["supported_years"],
    }
    return jsonify(payload), 200


@blueprint.get("/<int:year>/rate-table")
def get_rate_table(year: int) -> tuple[Any, int]:
    """Expose the contribution rate table configured for ``year``."""

    try:
        configuration = load_year_configuration(year)
    except FileNotFoundError as exc:
        return not_found(exc).to_response()

    payload = {
        **_serialise_year(configuration),
        "rate_table": [_serialise_rate(entry) for entry in configuration.rate_table],
    }
    return jsonify(payload), 200
