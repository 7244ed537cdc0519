"""Test configuration utilities and shared fixtures."""

import sys
from pathlib import Path

# Ensure the ``src`` directory is importable when tests are executed without an
# editable install. This keeps developer experience smooth for first-time
# contributors running ``pytest`` directly in VS Code.
ROOT = Path(__file__).resolve().parents[1]
SRC = ROOT / "src"
if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))

import pytest  # noqa: E402
from flask import Flask  # noqa: E402
from flask.testing import FlaskClient  # noqa: E402

from fichepaie.backend.app import create_app  # noqa: E402
from fichepaie.backend.config.year_config import (  # noqa: E402
    RateDefinition,
    load_year_configuration,
)

# Fiscal year whose 3428.00 ceiling the worked payslip examples use.
REFERENCE_YEAR = 2021


@pytest.fixture()
def app() -> Flask:
    """Return a configured Flask application for integration tests."""

    application = create_app()
    application.config.update(TESTING=True)
    return application


@pytest.fixture()
def client(app: Flask) -> FlaskClient:
    """Provide a test client bound to the configured Flask app."""

    return app.test_client()


@pytest.fixture()
def default_rate_table() -> tuple[RateDefinition, ...]:
    """Return the shipped 2021 contribution rate table."""

    return load_year_configuration(REFERENCE_YEAR).to_rate_table()


@pytest.fixture()
def calculation_payload(default_rate_table: tuple[RateDefinition, ...]) -> dict[str, object]:
    """Return a full-time, non-executive payload at 3000.00 gross."""

    return {
        "employee_id": "E-001",
        "period": "2021-06",
        "gross_salary": "3000.00",
        "is_executive": False,
        "contracted_hours": "35",
        "tax_withholding_rate_percent": "0",
        "social_security_ceiling": "3428.00",
        "rate_table": default_rate_table,
    }
