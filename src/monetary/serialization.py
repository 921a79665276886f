"""Wire and persistence formats for Money.

Two string forms exist:

* human form ``"<digits> <currency>"`` (e.g. ``"1.23 GBP"``), produced by `dump` and
  read by `load`; used for untyped string columns.
* raw form ``"<magnitude> <scale> <currency>"`` (e.g. ``"123 2 GBP"``), produced by
  `dump_raw` and read by `load_raw`; it keeps the exact scale.

`serialize` and `deserialize` are the narrow contract used by column adapters: they
map Money to a string or `Decimal` column value, optionally with the currency pinned
by configuration or kept in a sibling column.
"""

from __future__ import annotations

from decimal import Decimal
from typing import Literal

from monetary import digits
from monetary.errors import CurrencyMismatchError, InvalidArgumentError, ParseError
from monetary.money import Money, as_money
from monetary.numeric_tools import is_integer

ColumnType = Literal["string", "decimal"]


def dump(value):
    """Return ``"<digits> <currency>"`` for Money; any other value is returned unchanged."""
    if not isinstance(value, Money):
        return value
    return f"{digits.dump(value)} {value.currency}"


def load(string: str | None) -> Money | None:
    """Read the ``"<digits> <currency>"`` form; None gives None.

    Raises:
        ParseError: If $string is not in the expected form.
    """
    if string is None:
        return None

    parts = string.split() if isinstance(string, str) else []
    # Raise: exactly digits and currency are expected
    if len(parts) != 2:
        raise ParseError(f"Cannot call `load` because $string ({string!r}) must be in format '<digits> <currency>'")

    value_part, currency_part = parts
    return digits.load(value_part, currency_part)


def dump_raw(value: Money) -> str:
    """Return the exact ``"<magnitude> <scale> <currency>"`` form."""
    return f"{value.magnitude} {value.scale} {value.currency}"


def load_raw(string: str) -> Money:
    """Read the ``"<magnitude> <scale> <currency>"`` form.

    Raises:
        ParseError: If $string is not in the expected form.
    """
    parts = string.split() if isinstance(string, str) else []
    # Raise: exactly magnitude, scale and currency are expected
    if len(parts) != 3:
        raise ParseError(f"Cannot call `load_raw` because $string ({string!r}) must be in format '<magnitude> <scale> <currency>'")

    magnitude, scale, currency = parts
    try:
        return Money(int(magnitude), int(scale), currency)
    except (ValueError, InvalidArgumentError) as e:
        raise ParseError(f"Cannot call `load_raw` because $string ({string!r}) has invalid magnitude or scale") from e


def serialize(value: Money | None, column_type: ColumnType = "string", currency: str | None = None) -> str | Decimal | None:
    """Convert $value into a column value.

    Args:
        value: Money to store; None is stored as None.
        column_type: "string" or "decimal".
        currency: Currency pinned for the column (by configuration or a sibling column
            value). When set, the stored value carries no currency of its own.

    Returns:
        str | Decimal | None: ``"1.23 GBP"`` for a string column without pinned
        currency, ``"1.23"`` for a string column with pinned currency, or
        ``Decimal("1.23")`` for a decimal column. String forms are written reduced, so
        `Money(1990, 3, "GBP")` is stored as ``"1.99 GBP"``.

    Raises:
        CurrencyMismatchError: If $value's currency differs from the pinned $currency.
        InvalidArgumentError: If $column_type is unknown, or a decimal column has no
            pinned $currency.
    """
    # Raise: column type must be supported
    if column_type not in ("string", "decimal"):
        raise InvalidArgumentError(f"Cannot call `serialize` because $column_type ({column_type!r}) is not 'string' or 'decimal'")

    if value is None:
        return None

    # Raise: a pinned currency only accepts values in that currency
    if currency is not None and value.currency != currency:
        raise CurrencyMismatchError(f"Cannot serialize {value.currency} value to column with currency {currency}")

    if column_type == "decimal":
        # Raise: a bare number cannot be read back without knowing its currency
        if currency is None:
            raise InvalidArgumentError(f"Cannot serialize {value!r} to a decimal column without $currency")
        return value.to_decimal()

    # Stored text is reduced so that equal values always compare equal as strings
    value = value.reduce()
    if currency is None:
        return dump(value)
    return digits.dump(value)


def deserialize(raw: str | Decimal | int | None, currency: str | None = None) -> Money | None:
    """Convert a column value back to Money.

    Args:
        raw: Stored value: ``"<digits> <currency>"`` or ``"<digits>"`` string, `Decimal`
            or `int`.
        currency: Pinned currency; required for anything but the ``"<digits> <currency>"``
            string form.

    Raises:
        InvalidArgumentError: If $currency is missing for a numeric $raw value.
        ParseError: If a string $raw value cannot be read.
    """
    if raw is None:
        return None

    if isinstance(raw, str):
        if currency is None:
            return load(raw)
        return digits.load(raw, currency)

    if isinstance(raw, Decimal) or is_integer(raw):
        # Raise: numeric column values carry no currency of their own
        if currency is None:
            raise InvalidArgumentError(f"Cannot call `deserialize` for $raw ({raw!r}) without $currency")
        return as_money(raw, currency)

    raise InvalidArgumentError(f"Cannot call `deserialize` because $raw ({raw!r}) has unsupported type {type(raw).__name__}")
