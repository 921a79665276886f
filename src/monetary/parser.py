from __future__ import annotations

import re

from monetary.config import MonetaryConfig, get_default_config
from monetary.errors import InvalidArgumentError, ParseError
from monetary.money import Money

DIGITS = re.compile(r"\d+", re.ASCII)
MINUS = re.compile(r"-")
SPACE = re.compile(r"\s")
POINT = re.compile(r"\.")
COMMA = re.compile(r",")
COMMA_TWO_DIGITS = re.compile(r",\d{2}\b", re.ASCII)
# Thousands separator in comma-decimal locales: period or thin space (U+2009)
POINT_THINSP = re.compile("[.\u2009]")


class MoneyParser:
    """Single-pass tokenizer turning human input such as "£1,999.00" into Money.

    Scan order: optional minus, optional currency symbol, optional minus, integral
    digits (with thousands groups), optional decimal separator and fractional digits,
    optional whitespace, optional currency code.

    The decimal separator is guessed from the input: a comma followed by exactly two
    digits, or a comma after a period, means comma-decimal (with period or thin-space
    thousands); otherwise period-decimal with comma thousands. A lone separator followed
    by three digits is therefore read as decimal ("€123.456" is 123.456 EUR).
    """

    def __init__(self, string: str, config: MonetaryConfig | None = None):
        # Raise: input must be a string
        if not isinstance(string, str):
            raise InvalidArgumentError(f"Cannot parse $string ({string!r}) because it is not a string")

        self._string = string.strip()
        self._config = config if config is not None else get_default_config()
        self._pos = 0

        if self._is_comma_decimal_separator():
            self._decimal_separator, self._thousands_separator = COMMA, POINT_THINSP
        else:
            self._decimal_separator, self._thousands_separator = POINT, COMMA

    def parse(self) -> Money:
        """Parse the whole input.

        Returns:
            Money: Parsed value, constructed from the scanned digits as is (not reduced).

        Raises:
            ParseError: If there are no integral digits, unexpected trailing input, or
                no currency can be determined.
        """
        symbols = self._config.symbols

        minus_sign = self._scan(MINUS)
        currency_symbol = self._scan_longest(symbols.match_symbol)
        if minus_sign is None:
            minus_sign = self._scan(MINUS)

        integral_digits = self._scan(DIGITS)
        # Raise: a number needs integral digits
        if integral_digits is None:
            raise ParseError(f"Cannot parse {self._string!r}: no digits found")

        while self._scan(self._thousands_separator) is not None:
            group = self._scan(DIGITS)
            if group is None:
                raise ParseError(f"Cannot parse {self._string!r}: expected digits after thousands separator at position {self._pos}")
            integral_digits += group

        fractional_digits = None
        if self._scan(self._decimal_separator) is not None:
            fractional_digits = self._scan(DIGITS)

        self._scan(SPACE)
        currency_code = self._scan_longest(symbols.match_code)

        # Raise: the whole input must be consumed
        if self._pos != len(self._string):
            raise ParseError(f"Cannot parse {self._string!r}: unexpected input at position {self._pos}")

        currency = self._resolve_currency(currency_code, currency_symbol)

        if fractional_digits is None:
            magnitude, scale = int(integral_digits), 0
        else:
            magnitude, scale = int(integral_digits + fractional_digits), len(fractional_digits)

        if minus_sign is not None:
            magnitude = -magnitude
        return Money(magnitude, scale, currency)

    def _resolve_currency(self, currency_code: str | None, currency_symbol: str | None) -> str:
        if currency_code is not None:
            return currency_code
        if currency_symbol is not None:
            return self._config.symbols.lookup(currency_symbol)
        if self._config.currency is not None:
            return self._config.currency
        raise ParseError(f"Cannot parse {self._string!r} without currency: no currency code or symbol found and no default currency is configured")

    def _is_comma_decimal_separator(self) -> bool:
        if COMMA_TWO_DIGITS.search(self._string):
            return True

        point = POINT.search(self._string)
        comma = COMMA.search(self._string)
        return point is not None and comma is not None and comma.start() > point.start()

    def _scan(self, pattern: re.Pattern) -> str | None:
        match = pattern.match(self._string, self._pos)
        if match is None:
            return None
        self._pos = match.end()
        return match.group()

    def _scan_longest(self, matcher) -> str | None:
        token = matcher(self._string, self._pos)
        if token is not None:
            self._pos += len(token)
        return token


def parse_money(string: str, config: MonetaryConfig | None = None) -> Money:
    """Parse human input such as "1.99 GBP", "£-1.99" or "1.999,00 EUR" into Money."""
    return MoneyParser(string, config).parse()
