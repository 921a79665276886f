__version__ = "0.1.0"

from monetary.errors import (
    CurrencyMismatchError,
    DivisionByZeroError,
    InvalidArgumentError,
    MonetaryError,
    NotFoundError,
    ParseError,
    TypeMismatchError,
)
from monetary.money import Money, as_money
from monetary.rounding import RoundingMode
from monetary.symbols import CurrencySymbols
from monetary.formatting import MoneyFormat, format_money
from monetary.config import MonetaryConfig, get_default_config, set_default_config, set_default_currency
from monetary.parser import MoneyParser, parse_money

__all__ = [
    "CurrencyMismatchError",
    "CurrencySymbols",
    "DivisionByZeroError",
    "InvalidArgumentError",
    "MonetaryConfig",
    "MonetaryError",
    "Money",
    "MoneyFormat",
    "MoneyParser",
    "NotFoundError",
    "ParseError",
    "RoundingMode",
    "TypeMismatchError",
    "as_money",
    "format_money",
    "get_default_config",
    "parse_money",
    "set_default_config",
    "set_default_currency",
]
