"""Integration tests for the payslip REST endpoints."""

from __future__ import annotations

import json
from http import HTTPStatus
from pathlib import Path
from typing import Dict, Iterable

import pytest
from flask.testing import FlaskClient

DATA_PATH = Path(__file__).resolve().parents[1] / "data" / "regression_scenarios.json"


def _load_scenarios() -> Iterable[Dict[str, object]]:
    with DATA_PATH.open("r", encoding="utf-8") as handle:
        return json.load(handle)


@pytest.mark.parametrize("scenario", _load_scenarios(), ids=lambda item: item["name"])
def test_calculation_endpoint_matches_regression_scenarios(
    client: FlaskClient, scenario: Dict[str, object]
) -> None:
    """Each regression scenario should remain stable over time."""

    response = client.post("/api/v1/payslips/calculations", json=scenario["payload"])
    assert response.status_code == HTTPStatus.OK

    result = response.get_json()
    expected = scenario["expectations"]

    for key, value in expected["summary"].items():
        assert result[key] == value, key

    lines = {item["code"]: item for item in result["contributions"]}
    for code, expectations in expected["contributions"].items():
        assert code in lines, f"Missing contribution line {code}"
        for field, value in expectations.items():
            assert lines[code][field] == value


def test_calculation_endpoint_returns_identifiers(client: FlaskClient) -> None:
    response = client.post(
        "/api/v1/payslips/calculations",
        json={"year": 2024, "employee_id": 42, "period": "2024-05", "gross_salary": 2800},
    )

    assert response.status_code == HTTPStatus.OK
    payload = response.get_json()
    assert payload["employee_id"] == "42"
    assert payload["period"] == "2024-05"
    assert payload["effective_gross_salary"] == "2800.00"


def test_calculation_endpoint_accepts_float_amounts(client: FlaskClient) -> None:
    response = client.post(
        "/api/v1/payslips/calculations",
        json={"year": 2021, "gross_salary": 3000.0, "tax_withholding_rate": 10},
    )

    assert response.status_code == HTTPStatus.OK
    payload = response.get_json()
    assert payload["net_salary"] == "2128.77"


def test_calculation_endpoint_rejects_negative_salary(client: FlaskClient) -> None:
    response = client.post(
        "/api/v1/payslips/calculations",
        json={"year": 2024, "gross_salary": -100},
    )

    assert response.status_code == HTTPStatus.BAD_REQUEST
    payload = response.get_json()
    assert payload["error"] == "validation_error"
    assert "gross_salary" in payload["message"]


def test_calculation_endpoint_rejects_invalid_rate_table(client: FlaskClient) -> None:
    response = client.post(
        "/api/v1/payslips/calculations",
        json={
            "year": 2024,
            "gross_salary": 3000,
            "rate_table": [
                {"category": "other", "label": "Bad", "base": "total", "employee_rate": 120}
            ],
        },
    )

    assert response.status_code == HTTPStatus.BAD_REQUEST
    assert response.get_json()["error"] == "validation_error"


def test_calculation_endpoint_rejects_malformed_json(client: FlaskClient) -> None:
    response = client.post(
        "/api/v1/payslips/calculations",
        data="{not-json",
        content_type="application/json",
    )

    assert response.status_code == HTTPStatus.BAD_REQUEST
    assert response.get_json()["error"] == "bad_request"


def test_calculation_endpoint_unknown_year(client: FlaskClient) -> None:
    response = client.post(
        "/api/v1/payslips/calculations",
        json={"year": 1999, "gross_salary": 3000},
    )

    assert response.status_code == HTTPStatus.NOT_FOUND
    assert response.get_json()["error"] == "not_found"


def test_estimate_endpoint_is_labelled(client: FlaskClient) -> None:
    response = client.post("/api/v1/payslips/estimates", json={"gross_salary": "3000"})

    assert response.status_code == HTTPStatus.OK
    payload = response.get_json()
    assert payload["is_estimate"] is True
    assert payload["net_salary"] == "2340.00"


def test_gross_salary_endpoint(client: FlaskClient) -> None:
    response = client.post(
        "/api/v1/payslips/gross-salary",
        json={"year": 2023, "base_salary": "1516.70", "overtime_hours_50": "2"},
    )

    assert response.status_code == HTTPStatus.OK
    payload = response.get_json()
    assert payload["overtime_50_amount"] == "30.00"
    assert payload["gross_salary"] == "1546.70"
    assert payload["meta"]["year"] == 2023


def test_gross_salary_endpoint_unknown_year(client: FlaskClient) -> None:
    response = client.post(
        "/api/v1/payslips/gross-salary",
        json={"year": 1999, "base_salary": "2000"},
    )

    assert response.status_code == HTTPStatus.NOT_FOUND
