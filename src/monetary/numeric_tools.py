from __future__ import annotations

import numbers
from decimal import Decimal
from fractions import Fraction
from typing import TypeAlias

from monetary.errors import InvalidArgumentError

BASE = 10

# Use where a plain (non-money) exact number is accepted: multiplier, divisor or conversion rate
ScalarLike: TypeAlias = int | Fraction | Decimal


def is_integer(value: object) -> bool:
    """Check that $value is an `int` (bools are not accepted as integers)."""
    return isinstance(value, int) and not isinstance(value, bool)


def is_rational(value: object) -> bool:
    """Check that $value is a non-integer rational number (for example `Fraction`)."""
    return isinstance(value, numbers.Rational) and not isinstance(value, int)


def is_numeric_zero(value: object) -> bool:
    """Check whether $value is a plain number equal to zero.

    Any numeric type counts (`int`, `float`, `Fraction`, `Decimal`), because zero is the
    additive identity regardless of its type.
    """
    if isinstance(value, bool) or not isinstance(value, numbers.Number):
        return False
    return value == 0


def pow10(exponent: int) -> int:
    """Return `10 ** $exponent` as an integer."""
    return BASE**exponent


def decompose_decimal(value: Decimal) -> tuple[int, int]:
    """Decompose a finite `Decimal` into an exact (magnitude, scale) pair.

    The decimal is split into sign, significant digits and exponent. A positive exponent
    scales the magnitude up and yields scale 0; a negative exponent becomes the scale.

    Args:
        value: Finite decimal to decompose.

    Returns:
        Tuple of (magnitude, scale) such that value == magnitude * 10 ** -scale.

    Raises:
        InvalidArgumentError: If $value is NaN or infinite.
    """
    if not value.is_finite():
        raise InvalidArgumentError(f"Cannot decompose $value ({value}) because it is not a finite Decimal")

    sign, digits, exponent = value.as_tuple()
    magnitude = int("".join(str(digit) for digit in digits)) if digits else 0
    if sign:
        magnitude = -magnitude

    if exponent >= 0:
        return magnitude * pow10(exponent), 0
    return magnitude, -exponent
