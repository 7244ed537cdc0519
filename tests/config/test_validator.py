from decimal import Decimal

import pytest

from fichepaie.backend.config.validator import (
    main,
    validate_all_years,
    validate_year_configuration,
)
from fichepaie.backend.config.year_config import load_year_configuration


def test_current_configurations_are_valid() -> None:
    results = validate_all_years()
    assert set(results) == {2021, 2023, 2024}
    assert all(not issues for issues in results.values()), results


def test_validator_flags_duplicate_codes() -> None:
    config = load_year_configuration(2024)
    table = config.to_rate_table()
    duplicate = table[3].model_copy(update={"label": "Allocations bis"})
    broken = config.model_copy(update={"rate_table": (*table, duplicate)})

    errors = validate_year_configuration(broken)

    assert any("duplicate contribution codes" in error for error in errors)


def test_validator_flags_entries_without_rates() -> None:
    config = load_year_configuration(2024)
    table = config.to_rate_table()
    empty = table[2].model_copy(
        update={"employer_rate_percent": Decimal("0"), "employee_rate_percent": Decimal("0")}
    )
    broken = config.model_copy(update={"rate_table": (empty, *table[3:])})

    errors = validate_year_configuration(broken)

    assert any("rate_table[maladie]" in error and "zero" in error for error in errors)


def test_validator_flags_out_of_range_rates() -> None:
    config = load_year_configuration(2024)
    table = config.to_rate_table()
    broken_entry = table[4].model_copy(update={"employee_rate_percent": Decimal("150")})
    broken = config.model_copy(update={"rate_table": (*table[:4], broken_entry, *table[5:])})

    errors = validate_year_configuration(broken)

    assert any("between 0 and 100" in error for error in errors)


def test_validator_flags_multiple_non_deductible_entries() -> None:
    config = load_year_configuration(2024)
    table = config.to_rate_table()
    second = table[1].model_copy(update={"code": "crds_extra", "label": "CRDS bis"})
    broken = config.model_copy(update={"rate_table": (*table, second)})

    errors = validate_year_configuration(broken)

    assert any("more than one non-deductible" in error for error in errors)


def test_validator_flags_empty_rate_table() -> None:
    config = load_year_configuration(2024)
    broken = config.model_copy(update={"rate_table": ()})

    errors = validate_year_configuration(broken)

    assert errors == ["rate_table: no contribution entries defined"]


def test_validator_flags_implausible_ceiling() -> None:
    config = load_year_configuration(2024)
    broken = config.model_copy(update={"social_security_ceiling": Decimal("46368")})

    errors = validate_year_configuration(broken)

    assert any(error.startswith("social_security_ceiling") for error in errors)


def test_cli_reports_success(capsys: pytest.CaptureFixture[str]) -> None:
    exit_code = main(["2021", "2024"])

    output = capsys.readouterr().out
    assert exit_code == 0
    assert "[2021] OK" in output
    assert "[2024] OK" in output


def test_cli_reports_unknown_year(capsys: pytest.CaptureFixture[str]) -> None:
    exit_code = main(["1999"])

    assert exit_code == 1
    assert "failed to load configuration" in capsys.readouterr().out
