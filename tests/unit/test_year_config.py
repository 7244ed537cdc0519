"""Unit coverage for fiscal-year configuration discovery and parsing utilities."""

from __future__ import annotations

from decimal import Decimal
from pathlib import Path
from shutil import copy2

import pytest
import yaml
from pydantic import ValidationError

from fichepaie.backend.config import year_config
from fichepaie.backend.config.schema import (
    BaseType,
    ConfigurationError,
    ContributionCategory,
    RateDefinition,
)


@pytest.fixture()
def isolated_config_directory(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Return a temporary configuration directory patched into ``year_config``."""

    original_directory = year_config.CONFIG_DIRECTORY
    for filename in ("2021.yaml", "2023.yaml", "2024.yaml"):
        copy2(original_directory / filename, tmp_path / filename)

    manifest_path = tmp_path / "manifest.yaml"
    copy2(original_directory / "manifest.yaml", manifest_path)

    monkeypatch.setattr(year_config, "CONFIG_DIRECTORY", tmp_path)
    monkeypatch.setattr(year_config, "MANIFEST_FILE", manifest_path)
    year_config.load_year_configuration.cache_clear()
    year_config.load_manifest.cache_clear()

    yield tmp_path

    year_config.load_year_configuration.cache_clear()
    year_config.load_manifest.cache_clear()


def _append_manifest_year(directory: Path, entry: dict[str, object]) -> None:
    manifest_path = directory / "manifest.yaml"
    manifest = yaml.safe_load(manifest_path.read_text(encoding="utf-8"))
    manifest.setdefault("years", []).append(entry)
    manifest_path.write_text(
        yaml.safe_dump(manifest, sort_keys=False, allow_unicode=True), encoding="utf-8"
    )
    year_config.load_manifest.cache_clear()


def test_shipped_years() -> None:
    assert tuple(year_config.available_years()) == (2021, 2023, 2024)


def test_load_year_configuration_parses_rate_table() -> None:
    config = year_config.load_year_configuration(2021)

    assert config.year == 2021
    assert config.social_security_ceiling == Decimal("3428.00")
    assert config.reference_hours == Decimal("35")
    assert config.monthly_reference_hours == Decimal("151.67")
    assert config.quick_estimate.employee_rate_percent == Decimal("22")

    table = config.to_rate_table()
    assert isinstance(table, tuple)
    assert len(table) == 12
    assert table[0].base_type is BaseType.REDUCED
    assert [entry.code for entry in table if entry.non_deductible] == [
        "csg_crds_non_deductible"
    ]
    apec = next(entry for entry in table if entry.code == "apec")
    assert apec.executive_only
    assert apec.base_type is BaseType.CEILING_CAPPED
    assert apec.category is ContributionCategory.OTHER


def test_ceilings_change_per_year() -> None:
    ceilings = {
        year: year_config.load_year_configuration(year).social_security_ceiling
        for year in year_config.available_years()
    }

    assert ceilings == {
        2021: Decimal("3428.00"),
        2023: Decimal("3666.00"),
        2024: Decimal("3864.00"),
    }


def test_available_years_discovers_new_manifest_entry(
    isolated_config_directory: Path,
) -> None:
    """A new year only needs a YAML file and a manifest line."""

    new_year_path = isolated_config_directory / "2030.yaml"
    new_year_path.write_text(
        (isolated_config_directory / "2024.yaml").read_text(encoding="utf-8"),
        encoding="utf-8",
    )
    _append_manifest_year(isolated_config_directory, {"year": 2030})

    assert tuple(year_config.available_years()) == (2021, 2023, 2024, 2030)
    assert year_config.load_year_configuration(2030).year == 2030


def test_unknown_year_raises_file_not_found() -> None:
    with pytest.raises(FileNotFoundError):
        year_config.load_year_configuration(1999)


def test_missing_year_file_raises_file_not_found(
    isolated_config_directory: Path,
) -> None:
    _append_manifest_year(isolated_config_directory, {"year": 2031, "filename": "gone.yaml"})

    with pytest.raises(FileNotFoundError):
        year_config.load_year_configuration(2031)


def test_invalid_rate_raises_configuration_error(
    isolated_config_directory: Path,
) -> None:
    data = yaml.safe_load((isolated_config_directory / "2024.yaml").read_text(encoding="utf-8"))
    data["rate_table"][0]["employee_rate"] = "150"
    (isolated_config_directory / "2032.yaml").write_text(
        yaml.safe_dump(data, allow_unicode=True), encoding="utf-8"
    )
    _append_manifest_year(isolated_config_directory, {"year": 2032})

    with pytest.raises(ConfigurationError):
        year_config.load_year_configuration(2032)


def test_mismatched_year_raises_configuration_error(
    isolated_config_directory: Path,
) -> None:
    data = yaml.safe_load((isolated_config_directory / "2024.yaml").read_text(encoding="utf-8"))
    data["year"] = 2024
    (isolated_config_directory / "2033.yaml").write_text(
        yaml.safe_dump(data, allow_unicode=True), encoding="utf-8"
    )
    _append_manifest_year(isolated_config_directory, {"year": 2033})

    with pytest.raises(ConfigurationError):
        year_config.load_year_configuration(2033)


def test_duplicate_manifest_years_are_rejected(
    isolated_config_directory: Path,
) -> None:
    _append_manifest_year(isolated_config_directory, {"year": 2024})

    with pytest.raises(ConfigurationError):
        year_config.load_manifest()


def test_base_type_aliases() -> None:
    for alias, expected in {
        "plafond": BaseType.CEILING_CAPPED,
        "tranche-1": BaseType.CEILING_CAPPED,
        "Tranche 2": BaseType.ABOVE_CEILING,
        "csg_crds": BaseType.REDUCED,
        "total": BaseType.TOTAL,
    }.items():
        entry = RateDefinition.model_validate(
            {"category": "other", "label": "x", "base": alias, "employee_rate": "1"}
        )
        assert entry.base_type is expected


def test_category_aliases() -> None:
    entry = RateDefinition.model_validate(
        {"category": "Retraite", "label": "x", "base": "total", "employee_rate": "1"}
    )

    assert entry.category is ContributionCategory.RETIREMENT


def test_unknown_base_type_is_rejected() -> None:
    with pytest.raises(ValidationError):
        RateDefinition.model_validate(
            {"category": "other", "label": "x", "base": "tranche_c", "employee_rate": "1"}
        )


def test_non_deductible_requires_csg_category() -> None:
    with pytest.raises(ValidationError):
        RateDefinition.model_validate(
            {
                "category": "retirement",
                "label": "x",
                "base": "total",
                "employee_rate": "1",
                "non_deductible": True,
            }
        )


def test_rate_definition_is_frozen() -> None:
    entry = year_config.load_year_configuration(2021).rate_table[0]

    with pytest.raises(ValidationError):
        entry.employee_rate_percent = Decimal("0")  # type: ignore[misc]
