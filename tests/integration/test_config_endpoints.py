"""Integration coverage for configuration metadata endpoints."""

from http import HTTPStatus

from flask.testing import FlaskClient

from fichepaie.backend.config import year_config
from fichepaie.backend.version import get_project_version


def test_meta_endpoint(client: FlaskClient) -> None:
    response = client.get("/api/v1/config/meta")

    assert response.status_code == HTTPStatus.OK
    payload = response.get_json()
    assert payload == {
        "version": get_project_version(),
        "supported_years": [2021, 2023, 2024],
        "default_year": 2024,
    }


def test_list_years_endpoint(client: FlaskClient) -> None:
    response = client.get("/api/v1/config/years")

    assert response.status_code == HTTPStatus.OK
    payload = response.get_json()
    assert payload["default_year"] == 2024
    assert payload["supported_years"] == list(year_config.available_years())

    years = {entry["year"]: entry for entry in payload["years"]}
    assert years[2021]["social_security_ceiling"] == "3428.00"
    assert years[2023]["social_security_ceiling"] == "3666.00"
    assert years[2024]["reference_hours"] == "35"
    assert years[2024]["quick_estimate"] == {
        "employee_rate_percent": "22",
        "employer_rate_percent": "42",
    }
    assert years[2024]["meta"]["currency"] == "EUR"
    assert years[2024]["status"] == "active"
    assert years[2024]["notes_url"] is None
    assert years[2021]["notes_url"].startswith("https://")


def test_rate_table_endpoint(client: FlaskClient) -> None:
    response = client.get("/api/v1/config/2021/rate-table")

    assert response.status_code == HTTPStatus.OK
    payload = response.get_json()
    assert payload["year"] == 2021
    table = payload["rate_table"]
    assert len(table) == 12
    assert table[0] == {
        "code": "csg_deductible",
        "category": "csg_crds",
        "label": "CSG déductible",
        "base_type": "reduced",
        "employer_rate_percent": "0",
        "employee_rate_percent": "6.8",
        "executive_only": False,
        "non_deductible": False,
    }
    assert table[-1]["code"] == "apec"
    assert table[-1]["executive_only"] is True


def test_rate_table_endpoint_unknown_year(client: FlaskClient) -> None:
    response = client.get("/api/v1/config/1999/rate-table")

    assert response.status_code == HTTPStatus.NOT_FOUND
    payload = response.get_json()
    assert payload["error"] == "not_found"
    assert "1999" in payload["message"]
