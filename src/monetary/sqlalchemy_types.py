"""SQLAlchemy column adapters for Money.

* `MoneyString` stores ``"1.23 GBP"`` (or ``"1.23"`` when the column currency is pinned).
* `MoneyNumeric` stores a `Decimal` amount for a pinned currency.
* `money_column_values` / `money_from_row` bind an amount column to a sibling
  currency column.
* `money_equals` builds equality predicates and rejects values whose currency does
  not match the column before any SQL is built.
"""

from __future__ import annotations

from typing import Any, Mapping

from sqlalchemy import Numeric, String, and_
from sqlalchemy.sql.elements import ColumnElement
from sqlalchemy.types import TypeDecorator

from monetary.errors import CurrencyMismatchError, InvalidArgumentError, TypeMismatchError
from monetary.money import Money
from monetary.serialization import deserialize, serialize


class MoneyString(TypeDecorator):
    """String column holding Money.

    Without $currency the value is stored with its currency code (``"1.23 GBP"``). With
    $currency the column only accepts that currency and stores digits (``"1.23"``).
    """

    impl = String
    cache_ok = True

    def __init__(self, currency: str | None = None, length: int | None = None):
        super().__init__(length=length)
        self.currency = currency

    def process_bind_param(self, value, dialect):
        return serialize(value, "string", self.currency)

    def process_result_value(self, value, dialect):
        return deserialize(value, self.currency)


class MoneyNumeric(TypeDecorator):
    """Numeric column holding Money amounts of one pinned $currency."""

    impl = Numeric
    cache_ok = True

    def __init__(self, currency: str, precision: int = 38, scale: int = 18):
        # Raise: numeric columns cannot store a currency code
        if not isinstance(currency, str) or not currency:
            raise InvalidArgumentError(f"Cannot create `MoneyNumeric` because $currency ({currency!r}) is not a non-empty string; numeric columns need a pinned currency")

        super().__init__(precision=precision, scale=scale, asdecimal=True)
        self.currency = currency

    def process_bind_param(self, value, dialect):
        return serialize(value, "decimal", self.currency)

    def process_result_value(self, value, dialect):
        return deserialize(value, self.currency)


def money_column_values(value: Money | None, amount_key: str, currency_key: str, column_type: str = "decimal") -> dict[str, Any]:
    """Build the column values of $value for an amount column plus a sibling currency column.

    Returns:
        dict: ``{amount_key: <amount>, currency_key: <currency code>}``; both None for a
        None $value.
    """
    if value is None:
        return {amount_key: None, currency_key: None}

    return {
        amount_key: serialize(value, column_type, value.currency),
        currency_key: value.currency,
    }


def money_from_row(row: Mapping[str, Any], amount_key: str, currency_key: str) -> Money | None:
    """Read Money from a row mapping holding an amount column and a sibling currency column."""
    amount = row[amount_key]
    if amount is None:
        return None
    return deserialize(amount, row[currency_key])


def money_equals(column: ColumnElement, value: Money | None, currency: str | None = None, currency_column: ColumnElement | None = None) -> ColumnElement:
    """Build ``column = value`` for a Money $value.

    Args:
        column: Amount column. When it is typed `MoneyString` or `MoneyNumeric`, the
            column type serializes the value; otherwise the value is serialized here,
            as a `Decimal` for numeric columns and as a string for everything else.
        value: Money to compare with; None builds ``IS NULL``.
        currency: Currency pinned for the column; defaults to the column type's
            currency.
        currency_column: Sibling currency column; adds ``currency_column = value.currency``.

    Raises:
        CurrencyMismatchError: If $value's currency differs from the pinned currency or
            from the currency of a typed $column.
        InvalidArgumentError: If both $currency and $currency_column are given, or a plain
            numeric $column has no currency source.
        TypeMismatchError: If $value is not Money.
    """
    if value is None:
        return column.is_(None)

    if not isinstance(value, Money):
        raise TypeMismatchError(f"Cannot call `money_equals` because $value ({value!r}) is not Money")

    # Raise: currency source must be unambiguous
    if currency is not None and currency_column is not None:
        raise InvalidArgumentError("Cannot call `money_equals` with both $currency and $currency_column")

    column_type = column.type
    if currency_column is not None:
        pinned = value.currency
    elif currency is not None:
        pinned = currency
    else:
        pinned = getattr(column_type, "currency", None)

    # Raise: never build a predicate that silently compares another currency
    if pinned is not None and value.currency != pinned:
        raise CurrencyMismatchError(f"Cannot compare {value.currency} value with column {column} of currency {pinned}")

    # Raise: a typed column keeps its own currency even when a sibling column is given
    column_currency = getattr(column_type, "currency", None)
    if column_currency is not None and value.currency != column_currency:
        raise CurrencyMismatchError(f"Cannot compare {value.currency} value with column {column} of currency {column_currency}")

    if isinstance(column_type, (MoneyString, MoneyNumeric)):
        clause = column == value
    elif isinstance(column_type, Numeric):
        clause = column == serialize(value, "decimal", pinned)
    else:
        clause = column == serialize(value, "string", pinned)

    if currency_column is not None:
        clause = and_(clause, currency_column == value.currency)
    return clause
