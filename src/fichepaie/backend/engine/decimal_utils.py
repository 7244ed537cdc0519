"""Exact decimal arithmetic for monetary values.

Every amount that flows through the payroll engine is a :class:`decimal.Decimal`.
Arithmetic runs in a dedicated context copied from :data:`MONEY_CONTEXT` so the
result never depends on the caller's thread-local decimal settings. Rounding
to cents happens only through :func:`round_currency`, which the engine calls
when it places a value into a result object.
"""

from __future__ import annotations

from contextlib import contextmanager
from decimal import (
    ROUND_HALF_UP,
    Context,
    Decimal,
    DivisionByZero,
    InvalidOperation,
    Overflow,
    localcontext,
)
from typing import Iterable, Iterator, Union

DecimalValue = Union[Decimal, int, float, str]

ZERO = Decimal("0")
HUNDRED = Decimal("100")
CENT = Decimal("0.01")

# 28 significant digits keeps at least 4 decimals on any salary-scale amount.
MONEY_CONTEXT = Context(
    prec=28,
    rounding=ROUND_HALF_UP,
    traps=[InvalidOperation, DivisionByZero, Overflow],
)


def _context() -> Context:
    return MONEY_CONTEXT.copy()


@contextmanager
def money_context() -> Iterator[Context]:
    """Run a block of plain ``Decimal`` operators under the money context."""

    with localcontext(MONEY_CONTEXT) as context:
        yield context


def to_decimal(value: DecimalValue) -> Decimal:
    """Convert ``value`` to ``Decimal`` without binary floating point error.

    Floats are converted through their shortest ``repr`` so ``0.1`` becomes
    ``Decimal("0.1")`` rather than its exact binary expansion.
    """

    if isinstance(value, Decimal):
        result = value
    elif isinstance(value, bool):
        raise TypeError("Booleans are not monetary values")
    elif isinstance(value, int):
        result = Decimal(value)
    elif isinstance(value, float):
        result = Decimal(repr(value))
    elif isinstance(value, str):
        try:
            result = Decimal(value.strip())
        except InvalidOperation as exc:
            raise ValueError(f"Invalid decimal value: {value!r}") from exc
    else:
        raise TypeError(f"Unsupported monetary value type: {type(value).__name__}")

    if not result.is_finite():
        raise ValueError(f"Monetary values must be finite, got {value!r}")
    return result


def add(left: DecimalValue, right: DecimalValue) -> Decimal:
    return _context().add(to_decimal(left), to_decimal(right))


def subtract(left: DecimalValue, right: DecimalValue) -> Decimal:
    return _context().subtract(to_decimal(left), to_decimal(right))


def multiply(left: DecimalValue, right: DecimalValue) -> Decimal:
    return _context().multiply(to_decimal(left), to_decimal(right))


def divide(dividend: DecimalValue, divisor: DecimalValue) -> Decimal:
    """Divide under the money context; a zero divisor raises ``DivisionByZero``."""

    return _context().divide(to_decimal(dividend), to_decimal(divisor))


def minimum(left: DecimalValue, right: DecimalValue) -> Decimal:
    return _context().min(to_decimal(left), to_decimal(right))


def percent_of(base: DecimalValue, rate_percent: DecimalValue) -> Decimal:
    """Return ``base * rate_percent / 100`` without intermediate rounding."""

    context = _context()
    return context.divide(
        context.multiply(to_decimal(base), to_decimal(rate_percent)), HUNDRED
    )


def total(values: Iterable[DecimalValue]) -> Decimal:
    """Sum ``values`` exactly; an empty iterable sums to zero."""

    context = _context()
    result = ZERO
    for value in values:
        result = context.add(result, to_decimal(value))
    return result


def round_currency(value: DecimalValue) -> Decimal:
    """Round to cents using round-half-up."""

    return _context().quantize(to_decimal(value), CENT)


__all__ = [
    "CENT",
    "DecimalValue",
    "HUNDRED",
    "MONEY_CONTEXT",
    "ZERO",
    "add",
    "divide",
    "minimum",
    "money_context",
    "multiply",
    "percent_of",
    "round_currency",
    "subtract",
    "to_decimal",
    "total",
]
