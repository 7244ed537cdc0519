"""Utilities for validating fiscal-year rate tables and surfacing issues."""

from __future__ import annotations

import argparse
from collections import Counter
from decimal import Decimal
from typing import Sequence

from .year_config import (
    ContributionCategory,
    FiscalYearConfiguration,
    QuickEstimateRates,
    RateDefinition,
    available_years,
    load_year_configuration,
)

# Ceilings outside this range almost certainly carry a typo (annual vs monthly).
_CEILING_SANITY_RANGE = (Decimal("1000"), Decimal("10000"))


def _format_scope(scope: str, message: str) -> str:
    return f"{scope}: {message}"


def _validate_rate_table(rate_table: Sequence[RateDefinition]) -> list[str]:
    errors: list[str] = []

    if not rate_table:
        errors.append(_format_scope("rate_table", "no contribution entries defined"))
        return errors

    codes = [entry.code for entry in rate_table if entry.code]
    duplicates = [code for code, count in Counter(codes).items() if count > 1]
    if duplicates:
        errors.append(
            _format_scope(
                "rate_table",
                f"duplicate contribution codes detected: {sorted(duplicates)}",
            )
        )

    labels = [entry.label for entry in rate_table]
    duplicate_labels = [label for label, count in Counter(labels).items() if count > 1]
    if duplicate_labels:
        errors.append(
            _format_scope(
                "rate_table",
                f"duplicate contribution labels detected: {sorted(duplicate_labels)}",
            )
        )

    for index, entry in enumerate(rate_table):
        scope = f"rate_table[{entry.code or index}]"
        if entry.employee_rate_percent == 0 and entry.employer_rate_percent == 0:
            errors.append(_format_scope(scope, "both employee and employer rates are zero"))
        for label, value in {
            "employee": entry.employee_rate_percent,
            "employer": entry.employer_rate_percent,
        }.items():
            if value < 0 or value > 100:
                errors.append(
                    _format_scope(scope, f"{label} rate {value} must be between 0 and 100")
                )

    non_deductible = [entry for entry in rate_table if entry.non_deductible]
    if len(non_deductible) > 1:
        errors.append(
            _format_scope("rate_table", "more than one non-deductible CSG/CRDS entry defined")
        )
    for entry in non_deductible:
        if entry.category is not ContributionCategory.CSG_CRDS:
            errors.append(
                _format_scope(
                    "rate_table",
                    f"non-deductible entry '{entry.label}' must use the CSG/CRDS category",
                )
            )

    return errors


def _validate_ceiling(config: FiscalYearConfiguration) -> list[str]:
    lower, upper = _CEILING_SANITY_RANGE
    ceiling = config.social_security_ceiling
    if ceiling < lower or ceiling > upper:
        return [
            _format_scope(
                "social_security_ceiling",
                f"monthly ceiling {ceiling} is outside the expected range {lower}-{upper}",
            )
        ]
    return []


def _validate_quick_estimate(rates: QuickEstimateRates) -> list[str]:
    errors: list[str] = []
    for label, value in {
        "employee": rates.employee_rate_percent,
        "employer": rates.employer_rate_percent,
    }.items():
        if value < 0 or value > 100:
            errors.append(
                _format_scope(
                    "quick_estimate",
                    f"{label} rate {value} must be between 0 and 100",
                )
            )
    return errors


def validate_year_configuration(config: FiscalYearConfiguration) -> list[str]:
    """Return a list of validation issues for the provided configuration."""

    errors: list[str] = []

    errors.extend(_validate_ceiling(config))
    if config.reference_hours <= 0:
        errors.append(_format_scope("reference_hours", "must be positive"))
    errors.extend(_validate_quick_estimate(config.quick_estimate))
    errors.extend(_validate_rate_table(config.rate_table))

    return errors


def validate_all_years(years: Sequence[int] | None = None) -> dict[int, list[str]]:
    """Validate all configured years and return issues keyed by year."""

    targets = years or available_years()
    results: dict[int, list[str]] = {}

    for year in targets:
        config = load_year_configuration(year)
        results[int(year)] = validate_year_configuration(config)

    return results


def _build_argument_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Validate configured fiscal-year rate tables and report issues."
    )
    parser.add_argument(
        "years",
        nargs="*",
        type=int,
        help="Specific years to validate (defaults to all configured years)",
    )
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    """Entry point for running validations from the command line."""

    parser = _build_argument_parser()
    args = parser.parse_args(argv)
    years = args.years or available_years()

    if not years:
        parser.print_help()
        return 1

    exit_code = 0

    for year in years:
        try:
            config = load_year_configuration(year)
        except FileNotFoundError as error:
            print(f"[{year}] failed to load configuration: {error}")
            exit_code = 1
            continue

        issues = validate_year_configuration(config)
        if issues:
            exit_code = 1
            print(f"[{year}] {len(issues)} issue(s) detected:")
            for issue in issues:
                print(f"  - {issue}")
        else:
            print(f"[{year}] OK")

    return exit_code


if __name__ == "__main__":  # pragma: no cover - CLI invocation
    raise SystemExit(main())
