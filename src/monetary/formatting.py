from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from monetary import digits
from monetary.errors import InvalidArgumentError, TypeMismatchError
from monetary.money import Money
from monetary.numeric_tools import is_numeric_zero

if TYPE_CHECKING:
    from monetary.config import MonetaryConfig
    from monetary.symbols import CurrencySymbols


@dataclass(frozen=True)
class MoneyFormat:
    """Named display preset for Money.

    Attributes:
        name: Preset name used for lookup (e.g. "en").
        scale: Exact number of fractional digits shown (extra digits are truncated).
        zero: String shown for a zero amount.
        separator: Decimal separator.
        thousands_separator: Separator between groups of three integral digits.
    """

    name: str
    scale: int
    zero: str
    separator: str
    thousands_separator: str | None

    def __call__(self, value: Money, symbols: CurrencySymbols, symbol: bool = False, code: bool = False) -> str:
        """Format $value with this preset.

        Args:
            value: Money to format.
            symbols: Table used to look up the currency symbol when $symbol is True.
            symbol: Prefix the currency symbol (e.g. "£1.99").
            code: Append the currency code (e.g. "1.99 GBP").

        Raises:
            InvalidArgumentError: If both $symbol and $code are requested.
            NotFoundError: If $symbol is requested and the currency has no symbol.
        """
        # Raise: symbol and code are mutually exclusive
        if symbol and code:
            raise InvalidArgumentError("Cannot format with both $symbol and $code set to True")

        text = digits.dump(value, scale=self.scale, zero=self.zero, separator=self.separator, thousands_separator=self.thousands_separator)

        if symbol:
            return symbols.reverse_lookup(value.currency) + text
        if code:
            return f"{text} {value.currency}"
        return text


EN = MoneyFormat(name="en", scale=2, zero="0.00", separator=".", thousands_separator=",")
EU = MoneyFormat(name="eu", scale=2, zero="0,00", separator=",", thousands_separator=".")


def format_money(value: Money | int | None, name: str = "default", symbol: bool = False, code: bool = False, config: MonetaryConfig | None = None) -> str | None:
    """Format $value with the preset registered under $name.

    Args:
        value: Money to format. None gives None, and a plain zero gives the preset's
            zero string.
        name: Registered preset name ("default", "en", "eu", ...).
        symbol: Prefix the currency symbol.
        code: Append the currency code.
        config: Registry configuration; the process-wide default when omitted.

    Returns:
        str | None: Formatted amount such as "1,234.56".

    Raises:
        NotFoundError: If no preset is registered under $name.
        InvalidArgumentError: If both $symbol and $code are requested.
    """
    if config is None:
        from monetary.config import get_default_config

        config = get_default_config()

    fmt = config.get_format(name)

    if value is None:
        return None

    if not isinstance(value, Money):
        # Only a plain zero can be shown without knowing its currency
        if is_numeric_zero(value) and not symbol and not code:
            return fmt.zero
        raise TypeMismatchError(f"Cannot call `format_money` because $value ({value!r}) is not Money")

    return fmt(value, config.symbols, symbol=symbol, code=code)

