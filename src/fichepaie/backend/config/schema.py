"""Pydantic models describing contribution rate tables and fiscal-year files."""

from __future__ import annotations

from decimal import Decimal
from enum import Enum
from typing import Any, Iterable, Mapping, Sequence

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    ValidationError,
    computed_field,
    field_validator,
    model_validator,
)
from typing_extensions import Self


class ConfigurationError(ValueError):
    """Raised when configuration values violate schema expectations."""


class ImmutableModel(BaseModel):
    """Base class that freezes instances and rejects unknown fields."""

    model_config = ConfigDict(frozen=True, extra="forbid", populate_by_name=True)


class ContributionCategory(str, Enum):
    """Families of social contributions shown on a payslip."""

    SOCIAL_SECURITY = "social_security"
    RETIREMENT = "retirement"
    COMPLEMENTARY_RETIREMENT = "complementary_retirement"
    UNEMPLOYMENT = "unemployment"
    CSG_CRDS = "csg_crds"
    OTHER = "other"


class BaseType(str, Enum):
    """Salary slice a contribution is computed against."""

    TOTAL = "total"
    CEILING_CAPPED = "ceiling_capped"
    ABOVE_CEILING = "above_ceiling"
    REDUCED = "reduced"


_BASE_TYPE_ALIASES: Mapping[str, BaseType] = {
    "total": BaseType.TOTAL,
    "ceiling_capped": BaseType.CEILING_CAPPED,
    "plafond": BaseType.CEILING_CAPPED,
    "tranche_1": BaseType.CEILING_CAPPED,
    "tranche_a": BaseType.CEILING_CAPPED,
    "above_ceiling": BaseType.ABOVE_CEILING,
    "tranche_2": BaseType.ABOVE_CEILING,
    "tranche_b": BaseType.ABOVE_CEILING,
    "reduced": BaseType.REDUCED,
    "csg_crds": BaseType.REDUCED,
}

_CATEGORY_ALIASES: Mapping[str, ContributionCategory] = {
    "securite_sociale": ContributionCategory.SOCIAL_SECURITY,
    "retraite": ContributionCategory.RETIREMENT,
    "complementaire": ContributionCategory.COMPLEMENTARY_RETIREMENT,
    "chomage": ContributionCategory.UNEMPLOYMENT,
    "autres": ContributionCategory.OTHER,
}


def _normalise_key(value: Any) -> str:
    return str(value).strip().lower().replace("-", "_").replace(" ", "_")


def _coerce_boolean(value: Any) -> bool:
    if isinstance(value, bool):
        return value
    if value in {0, "0", "false", "False", None}:
        return False
    if value in {1, "1", "true", "True"}:
        return True
    raise ConfigurationError("Boolean flags must be explicit true/false values")


def _coerce_decimal(value: Any, field_name: str) -> Decimal:
    if isinstance(value, bool) or value is None:
        raise ConfigurationError(f"'{field_name}' must be a decimal number")
    if isinstance(value, Decimal):
        result = value
    else:
        try:
            result = Decimal(str(value).strip())
        except ArithmeticError as exc:
            raise ConfigurationError(f"'{field_name}' must be a decimal number") from exc
    if not result.is_finite():
        raise ConfigurationError(f"'{field_name}' must be a finite number")
    return result


class RateDefinition(ImmutableModel):
    """One line of a contribution rate table.

    Rates are percentages (``6.9`` means 6.9%). Instances are immutable and
    validated on construction, so a malformed definition never reaches the
    contribution engine.
    """

    category: ContributionCategory
    label: str = Field(min_length=1)
    base_type: BaseType = Field(alias="base")
    employer_rate_percent: Decimal = Field(default=Decimal("0"), alias="employer_rate")
    employee_rate_percent: Decimal = Field(default=Decimal("0"), alias="employee_rate")
    executive_only: bool = False
    non_deductible: bool = False
    code: str | None = None

    @field_validator("category", mode="before")
    @classmethod
    def _coerce_category(cls, value: Any) -> Any:
        if isinstance(value, ContributionCategory):
            return value
        key = _normalise_key(value)
        return _CATEGORY_ALIASES.get(key, key)

    @field_validator("base_type", mode="before")
    @classmethod
    def _coerce_base_type(cls, value: Any) -> BaseType:
        if isinstance(value, BaseType):
            return value
        base_type = _BASE_TYPE_ALIASES.get(_normalise_key(value))
        if base_type is None:
            raise ConfigurationError(f"Unknown contribution base type: {value!r}")
        return base_type

    @field_validator("employer_rate_percent", "employee_rate_percent", mode="before")
    @classmethod
    def _coerce_rates(cls, value: Any) -> Decimal:
        return _coerce_decimal(value, "rate")

    @field_validator("executive_only", "non_deductible", mode="before")
    @classmethod
    def _coerce_flags(cls, value: Any) -> bool:
        return _coerce_boolean(value)

    @model_validator(mode="after")
    def _validate_rates(self) -> Self:
        for rate in (self.employer_rate_percent, self.employee_rate_percent):
            if rate < 0 or rate > 100:
                raise ConfigurationError(
                    f"Contribution rates for '{self.label}' must be between 0 and 100"
                )
        if self.non_deductible and self.category is not ContributionCategory.CSG_CRDS:
            raise ConfigurationError(
                "Only CSG/CRDS contributions can be flagged as non-deductible"
            )
        return self


class QuickEstimateRates(ImmutableModel):
    """Flat rates backing the gross-to-net preview."""

    employee_rate_percent: Decimal = Field(default=Decimal("22"), alias="employee_rate")
    employer_rate_percent: Decimal = Field(default=Decimal("42"), alias="employer_rate")

    @field_validator("employee_rate_percent", "employer_rate_percent", mode="before")
    @classmethod
    def _coerce_rates(cls, value: Any) -> Decimal:
        return _coerce_decimal(value, "quick_estimate rate")

    @model_validator(mode="after")
    def _validate_rates(self) -> Self:
        for rate in (self.employee_rate_percent, self.employer_rate_percent):
            if rate < 0 or rate > 100:
                raise ConfigurationError("Quick estimate rates must be between 0 and 100")
        return self


class FiscalYearConfiguration(ImmutableModel):
    """Structured representation of one fiscal-year configuration file."""

    year: int
    meta: Mapping[str, Any] = Field(default_factory=dict)
    social_security_ceiling: Decimal
    reference_hours: Decimal = Decimal("35")
    monthly_reference_hours: Decimal = Decimal("151.67")
    quick_estimate: QuickEstimateRates = Field(default_factory=QuickEstimateRates)
    rate_table: Sequence[RateDefinition] = Field(default_factory=tuple)

    @model_validator(mode="before")
    @classmethod
    def _prepare_sections(cls, data: Any) -> Mapping[str, Any]:
        if not isinstance(data, Mapping):
            raise ConfigurationError("Configuration file must define a mapping at the top level")

        prepared = dict(data)
        meta = prepared.get("meta")
        if meta is None:
            prepared["meta"] = {}
        elif not isinstance(meta, Mapping):
            raise ConfigurationError("'meta' section must be a mapping if provided")

        if prepared.get("quick_estimate") is None:
            prepared["quick_estimate"] = {}

        rate_table = prepared.get("rate_table")
        if rate_table is None:
            prepared["rate_table"] = ()
        elif isinstance(rate_table, Iterable) and not isinstance(rate_table, (str, Mapping)):
            prepared["rate_table"] = tuple(rate_table)
        else:
            raise ConfigurationError("'rate_table' must be a list of contribution entries")

        return prepared

    @field_validator(
        "social_security_ceiling", "reference_hours", "monthly_reference_hours", mode="before"
    )
    @classmethod
    def _coerce_amounts(cls, value: Any) -> Decimal:
        return _coerce_decimal(value, "amount")

    @model_validator(mode="after")
    def _validate_year(self) -> Self:
        if self.year <= 0:
            raise ConfigurationError("Fiscal year must be a positive integer")
        if self.social_security_ceiling <= 0:
            raise ConfigurationError("'social_security_ceiling' must be positive")
        if self.reference_hours <= 0 or self.monthly_reference_hours <= 0:
            raise ConfigurationError("Reference hours must be positive")
        return self

    def to_rate_table(self) -> tuple[RateDefinition, ...]:
        """Return the ordered rate table as an immutable tuple."""

        return tuple(self.rate_table)


class FiscalYearManifestEntry(ImmutableModel):
    """Entry describing a supported fiscal year in the manifest."""

    year: int
    filename: str | None = None
    status: str = "active"
    notes_url: str | None = None

    @computed_field
    @property
    def resolved_filename(self) -> str:
        return self.filename or f"{self.year}.yaml"


class FiscalYearManifest(ImmutableModel):
    """Manifest describing the available fiscal-year configuration files."""

    years: Sequence[FiscalYearManifestEntry]

    @model_validator(mode="after")
    def _validate_years(self) -> Self:
        seen: set[int] = set()
        for entry in self.years:
            if entry.year in seen:
                raise ConfigurationError(
                    f"Duplicate year {entry.year} declared in the configuration manifest"
                )
            seen.add(entry.year)
        return self

    def get_entry(self, year: int) -> FiscalYearManifestEntry:
        for entry in self.years:
            if entry.year == year:
                return entry
        raise KeyError(year)

    @computed_field
    @property
    def supported_years(self) -> tuple[int, ...]:
        return tuple(sorted(entry.year for entry in self.years))


__all__ = [
    "BaseType",
    "ConfigurationError",
    "ContributionCategory",
    "FiscalYearConfiguration",
    "FiscalYearManifest",
    "FiscalYearManifestEntry",
    "ImmutableModel",
    "QuickEstimateRates",
    "RateDefinition",
    "ValidationError",
]
