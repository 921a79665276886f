from __future__ import annotations

import logging
import re
from typing import Iterable, Mapping

from monetary.errors import InvalidArgumentError, NotFoundError

logger = logging.getLogger(__name__)


class CurrencySymbols:
    """Bidirectional table between currency symbols ("$", "€") and codes ("USD", "EUR").

    Several symbols may map to the same code; the inverse lookup then returns the symbol
    registered last. Longest-match patterns over all symbols and all codes are built
    lazily and rebuilt after every write, so "HK$" wins over "$" when scanning "HK$10".
    """

    # region Init

    def __init__(self, mapping: Mapping[str, str] | None = None):
        """Initialize the table, optionally seeded from a symbol -> code $mapping."""
        self._code_by_symbol: dict[str, str] = {}
        self._symbol_by_code: dict[str, str] = {}
        self._symbol_pattern: re.Pattern | None = None
        self._code_pattern: re.Pattern | None = None

        if mapping is not None:
            self.update(mapping)

    def copy(self) -> CurrencySymbols:
        """Return an independent copy of this table."""
        result = CurrencySymbols()
        result._code_by_symbol = dict(self._code_by_symbol)
        result._symbol_by_code = dict(self._symbol_by_code)
        return result

    # endregion

    # region Registration

    def register(self, symbol: str, code: str) -> None:
        """Register $symbol for currency $code (overwrites an existing $symbol).

        Raises:
            InvalidArgumentError: If $symbol or $code is not a non-empty string.
        """
        # Raise: both sides must be non-empty strings
        if not isinstance(symbol, str) or not symbol:
            raise InvalidArgumentError(f"Cannot call `register` because $symbol ({symbol!r}) is not a non-empty string")
        if not isinstance(code, str) or not code:
            raise InvalidArgumentError(f"Cannot call `register` because $code ({code!r}) is not a non-empty string")

        previous_code = self._code_by_symbol.get(symbol)
        if previous_code is not None and previous_code != code and self._symbol_by_code.get(previous_code) == symbol:
            # The symbol moves to another code; keep the old code reachable through another symbol if any
            del self._symbol_by_code[previous_code]
            for other_symbol, other_code in self._code_by_symbol.items():
                if other_code == previous_code and other_symbol != symbol:
                    self._symbol_by_code[previous_code] = other_symbol

        self._code_by_symbol[symbol] = code
        self._symbol_by_code[code] = symbol
        self._invalidate_patterns()
        logger.debug(f"Registered currency symbol '{symbol}' for code '{code}'")

    def update(self, mapping: Mapping[str, str]) -> CurrencySymbols:
        """Register every symbol -> code pair of $mapping, in iteration order."""
        for symbol, code in mapping.items():
            self.register(symbol, code)
        return self

    # endregion

    # region Lookup

    def lookup(self, symbol: str) -> str:
        """Return the currency code registered for $symbol.

        Raises:
            NotFoundError: If $symbol is not registered.
        """
        try:
            return self._code_by_symbol[symbol]
        except KeyError:
            raise NotFoundError(f"Currency symbol '{symbol}' is not registered. Available symbols: {self.symbols()}") from None

    def reverse_lookup(self, code: str) -> str:
        """Return the symbol registered (last) for currency $code.

        Raises:
            NotFoundError: If no symbol is registered for $code.
        """
        try:
            return self._symbol_by_code[code]
        except KeyError:
            raise NotFoundError(f"No currency symbol is registered for code '{code}'. Available codes: {self.codes()}") from None

    def symbols(self) -> list[str]:
        """List registered symbols in registration order."""
        return list(self._code_by_symbol.keys())

    def codes(self) -> list[str]:
        """List distinct registered codes."""
        return list(self._symbol_by_code.keys())

    def __contains__(self, symbol: object) -> bool:
        return symbol in self._code_by_symbol

    def __len__(self) -> int:
        return len(self._code_by_symbol)

    # endregion

    # region Matching

    def match_symbol(self, string: str, pos: int = 0) -> str | None:
        """Return the longest registered symbol found at $pos of $string, or None."""
        if self._symbol_pattern is None:
            self._symbol_pattern = _longest_match_pattern(self._code_by_symbol.keys())
        return _match(self._symbol_pattern, string, pos)

    def match_code(self, string: str, pos: int = 0) -> str | None:
        """Return the longest registered currency code found at $pos of $string, or None."""
        if self._code_pattern is None:
            self._code_pattern = _longest_match_pattern(self._code_by_symbol.values())
        return _match(self._code_pattern, string, pos)

    def _invalidate_patterns(self) -> None:
        self._symbol_pattern = None
        self._code_pattern = None

    # endregion


def _longest_match_pattern(alternatives: Iterable[str]) -> re.Pattern | None:
    # Python alternation picks the first branch that matches, so try longer ones first
    ordered = sorted(set(alternatives), key=len, reverse=True)
    if not ordered:
        return None
    return re.compile("|".join(re.escape(alternative) for alternative in ordered))


def _match(pattern: re.Pattern | None, string: str, pos: int) -> str | None:
    if pattern is None:
        return None
    match = pattern.match(string, pos)
    return match.group() if match else None
