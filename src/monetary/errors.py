"""Exception types raised by the monetary package.

Every error derives from `MonetaryError` and also from the closest builtin
exception, so callers can catch either the package-specific type or the
builtin one (for example `ValueError`).
"""


class MonetaryError(Exception):
    """Base class for all errors raised by the monetary package."""


class InvalidArgumentError(MonetaryError, ValueError):
    """Raised when an argument is malformed (bad value, scale, digits, mode, ...)."""


class CurrencyMismatchError(MonetaryError, ValueError):
    """Raised when an operation combines values with different currencies."""


class TypeMismatchError(MonetaryError, TypeError):
    """Raised when an operand type cannot be combined with a Money value."""


class DivisionByZeroError(MonetaryError, ZeroDivisionError):
    """Raised when dividing by zero."""


class ParseError(MonetaryError, ValueError):
    """Raised when a string cannot be parsed into a Money value."""


class NotFoundError(MonetaryError, KeyError):
    """Raised when a currency symbol, code or format name is not registered."""

    def __str__(self) -> str:
        # KeyError quotes its message by default
        return str(self.args[0]) if self.args else ""
