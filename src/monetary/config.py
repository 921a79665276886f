from __future__ import annotations

import logging
from typing import Mapping

from monetary.errors import InvalidArgumentError, NotFoundError
from monetary.formatting import EN, EU, MoneyFormat
from monetary.symbols import CurrencySymbols

logger = logging.getLogger(__name__)

DEFAULT_SYMBOLS: dict[str, str] = {
    "$": "USD",
    "€": "EUR",
    "¥": "JPY",
    "£": "GBP",
    "A$": "AUD",
    "C$": "CAD",
    "CHF": "CHF",
    "元": "CNY",
    "HK$": "HKD",
    "NZ$": "NZD",
    "S$": "SGD",
    "₹": "INR",
    "MX$": "MXN",
}


class MonetaryConfig:
    """Lookup configuration shared by parsing and formatting.

    Holds the currency symbol table, the named format presets and the default
    currency used for input without an explicit currency. Build isolated instances
    (e.g. in tests) with `create_default`, or use the process-wide instance from
    `get_default_config`.

    The configuration is meant to be set up once at start-up. Concurrent writes are not
    synchronized.
    """

    def __init__(self, symbols: CurrencySymbols | None = None, formats: Mapping[str, MoneyFormat] | None = None, currency: str | None = None):
        """Initialize the configuration.

        Args:
            symbols: Currency symbol table; a new empty table when None.
            formats: Format presets by name; no presets when None.
            currency: Default currency code, or None for no default.
        """
        self._symbols = symbols if symbols is not None else CurrencySymbols()
        self._formats: dict[str, MoneyFormat] = dict(formats) if formats is not None else {}
        self._currency: str | None = None
        self.currency = currency

    @classmethod
    def create_default(cls) -> MonetaryConfig:
        """Create a new configuration seeded with the default symbols and presets."""
        formats = {"default": EN, EN.name: EN, EU.name: EU}
        return cls(symbols=CurrencySymbols(DEFAULT_SYMBOLS), formats=formats)

    # region Currency

    @property
    def currency(self) -> str | None:
        """Get the default currency code (None when not set)."""
        return self._currency

    @currency.setter
    def currency(self, code: str | None) -> None:
        # Raise: default currency must be None or a non-empty string
        if code is not None and (not isinstance(code, str) or not code):
            raise InvalidArgumentError(f"Cannot set default currency because $code ({code!r}) is not a non-empty string")

        self._currency = code
        logger.debug(f"Default currency set to {code!r}")

    # endregion

    # region Symbols

    @property
    def symbols(self) -> CurrencySymbols:
        return self._symbols

    def register_symbol(self, symbol: str, code: str) -> None:
        """Register a currency $symbol for currency $code."""
        self._symbols.register(symbol, code)

    # endregion

    # region Formats

    @property
    def formats(self) -> dict[str, MoneyFormat]:
        """Get a copy of the registered format presets keyed by name."""
        return dict(self._formats)

    def register_format(self, fmt: MoneyFormat, name: str | None = None) -> None:
        """Register a format preset under $name (defaults to `fmt.name`), replacing any existing one.

        Raises:
            InvalidArgumentError: If $fmt is not a MoneyFormat.
        """
        if not isinstance(fmt, MoneyFormat):
            raise InvalidArgumentError(f"Cannot call `register_format` because $fmt ({fmt!r}) is not a MoneyFormat")

        name = name or fmt.name
        self._formats[name] = fmt
        logger.debug(f"Registered format '{name}'")

    def get_format(self, name: str) -> MoneyFormat:
        """Return the preset registered under $name.

        Raises:
            NotFoundError: If no preset is registered under $name.
        """
        try:
            return self._formats[name]
        except KeyError:
            raise NotFoundError(f"Format '{name}' is not registered. Available formats: {list(self._formats.keys())}") from None

    # endregion


_default_config: MonetaryConfig = MonetaryConfig.create_default()


def get_default_config() -> MonetaryConfig:
    """Return the process-wide configuration."""
    return _default_config


def set_default_config(config: MonetaryConfig) -> MonetaryConfig:
    """Replace the process-wide configuration and return the previous one."""
    global _default_config

    if not isinstance(config, MonetaryConfig):
        raise InvalidArgumentError(f"Cannot call `set_default_config` because $config ({config!r}) is not a MonetaryConfig")

    previous, _default_config = _default_config, config
    return previous


def set_default_currency(code: str | None) -> None:
    """Set the default currency of the process-wide configuration."""
    _default_config.currency = code
