"""Apply a rate table to a salary, one generic pass over the entries."""

from __future__ import annotations

from typing import Iterable

from fichepaie.backend.config.schema import RateDefinition

from .decimal_utils import percent_of
from .models import ContributionBases, ContributionLine


def is_applicable(definition: RateDefinition, is_executive: bool) -> bool:
    """Executive-only entries apply to executives only; all others always apply."""

    return is_executive or not definition.executive_only


def apply_rate(definition: RateDefinition, bases: ContributionBases) -> ContributionLine:
    """Compute the unrounded line item for ``definition``."""

    base_amount = bases.for_type(definition.base_type)
    return ContributionLine(
        category=definition.category,
        label=definition.label,
        base_type=definition.base_type,
        base_amount=base_amount,
        employer_rate_percent=definition.employer_rate_percent,
        employee_rate_percent=definition.employee_rate_percent,
        employer_amount=percent_of(base_amount, definition.employer_rate_percent),
        employee_amount=percent_of(base_amount, definition.employee_rate_percent),
        non_deductible=definition.non_deductible,
        executive_only=definition.executive_only,
        code=definition.code,
    )


def apply_rate_table(
    rate_table: Iterable[RateDefinition],
    is_executive: bool,
    bases: ContributionBases,
) -> list[ContributionLine]:
    """Return one unrounded ``ContributionLine`` per applicable entry, in table order."""

    return [
        apply_rate(definition, bases)
        for definition in rate_table
        if is_applicable(definition, is_executive)
    ]


__all__ = ["apply_rate", "apply_rate_table", "is_applicable"]
