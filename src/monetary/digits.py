"""Digit codec: converts Money to and from its decimal digit string.

`dump` renders the magnitude with an optional fixed number of fractional digits,
decimal separator and thousands separator. `load` reads canonical strings such as
"-1.99" back, so that `load(dump(value), value.currency) == value` for every value.
"""

from __future__ import annotations

import re

from monetary.errors import ParseError
from monetary.money import Money
from monetary.numeric_tools import pow10

CANONICAL_PATTERN = re.compile(r"-?\d+(\.\d+)?", re.ASCII)


def dump(
    value: Money,
    scale: int | None = None,
    zero: str = "0",
    separator: str = ".",
    thousands_separator: str | None = None,
) -> str:
    """Render $value as a decimal digit string.

    Args:
        value: Money to render.
        scale: Exact count of fractional digits to output. Missing digits are padded
            with zeros and extra digits are cut off (truncated, never rounded). When
            None, all `value.scale` fractional digits are output.
        zero: String returned for a zero value.
        separator: Decimal separator.
        thousands_separator: Separator inserted between groups of three integral
            digits; no grouping when None.

    Returns:
        str: Digits such as "1,234.56" or "-0.75".
    """
    if value.is_zero:
        return zero

    digits = str(abs(value.magnitude))
    integral_length = len(digits) - value.scale

    if integral_length > 0:
        integral, fractional = digits[:integral_length], digits[integral_length:]
    else:
        # Value below 1: pad fractional digits with leading zeros
        integral, fractional = "0", digits.rjust(value.scale, "0")

    if thousands_separator is not None:
        groups = []
        while len(integral) > 3:
            groups.insert(0, integral[-3:])
            integral = integral[:-3]
        integral = thousands_separator.join([integral, *groups])

    if scale is not None:
        fractional = fractional[:scale].ljust(scale, "0")

    string = f"{integral}{separator}{fractional}" if fractional else integral

    if value.is_negative:
        string = "-" + string
    return string


def load(string: str, currency: str) -> Money:
    """Read a canonical digit string (e.g. "-0.066") as Money in $currency.

    The scale equals the number of fractional digits in $string; fractional digits
    carry the sign of the whole string, so "-0.11" is `Money(-11, 2, currency)`.

    Raises:
        ParseError: If $string is not in canonical digit form.
    """
    # Raise: only canonical digit strings are accepted
    if not is_canonical(string):
        raise ParseError(f"Cannot call `load` because $string ({string!r}) is not a canonical digit string")

    integral_digits, _, fractional_digits = string.partition(".")
    magnitude = int(integral_digits)

    if not fractional_digits:
        return Money(magnitude, 0, currency)

    scale = len(fractional_digits)
    magnitude *= pow10(scale)
    if string.startswith("-"):
        magnitude -= int(fractional_digits)
    else:
        magnitude += int(fractional_digits)

    return Money(magnitude, scale, currency)


def is_canonical(string: object) -> bool:
    """Check that $string looks like "123", "-1.99" or "0.001"."""
    return isinstance(string, str) and CANONICAL_PATTERN.fullmatch(string) is not None
