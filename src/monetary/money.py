from __future__ import annotations

from decimal import Decimal
from fractions import Fraction
from typing import TYPE_CHECKING

from monetary.errors import CurrencyMismatchError, DivisionByZeroError, InvalidArgumentError, TypeMismatchError
from monetary.numeric_tools import BASE, ScalarLike, decompose_decimal, is_integer, is_numeric_zero, is_rational, pow10
from monetary.rounding import RoundingMode, round_magnitude

if TYPE_CHECKING:
    from monetary.config import MonetaryConfig

DEFAULT_DIVISION_DIGITS = 16


class Money:
    """Represents an exact monetary amount tagged with a currency code.

    The amount is stored as a signed integer $magnitude and a non-negative $scale
    (count of implied fractional digits), so the represented value is
    `magnitude * 10 ** -scale`. No floating point is involved anywhere.

    Instances are immutable. Arithmetic results are reduced: trailing zero digits are
    stripped while the scale is positive, so `Money(1000, 1, "GBP") * 1` is
    `Money(100, 0, "GBP")`.
    """

    __slots__ = ("_magnitude", "_scale", "_currency")

    # region Init

    def __init__(self, magnitude: int, scale: int, currency: str):
        """Initialize Money from its exact triple.

        Args:
            magnitude: Signed integer digits of the amount, without decimal point.
            scale: Non-negative count of fractional digits.
            currency: Non-empty currency code (e.g. "GBP").

        Raises:
            InvalidArgumentError: If any argument is not valid.
        """
        # Raise: magnitude must be an integer
        if not is_integer(magnitude):
            raise InvalidArgumentError(f"Cannot init `Money` because $magnitude ({magnitude!r}) is not an integer")

        # Raise: scale must be a non-negative integer
        if not is_integer(scale) or scale < 0:
            raise InvalidArgumentError(f"Cannot init `Money` because $scale ({scale!r}) is not a non-negative integer")

        # Raise: currency must be a non-empty string
        if not isinstance(currency, str) or not currency:
            raise InvalidArgumentError(f"Cannot init `Money` because $currency ({currency!r}) is not a non-empty string")

        object.__setattr__(self, "_magnitude", magnitude)
        object.__setattr__(self, "_scale", scale)
        object.__setattr__(self, "_currency", currency)

    def __setattr__(self, name, value):
        raise AttributeError(f"`Money` is immutable; cannot set attribute '{name}'")

    def __delattr__(self, name):
        raise AttributeError(f"`Money` is immutable; cannot delete attribute '{name}'")

    def __reduce__(self):
        return self.__class__, (self._magnitude, self._scale, self._currency)

    @classmethod
    def from_decimal(cls, value: Decimal, currency: str) -> Money:
        """Create Money from a finite `Decimal`, keeping its exact value."""
        magnitude, scale = decompose_decimal(value)
        return cls._reduced(magnitude, scale, currency)

    @classmethod
    def from_str(cls, value_str: str) -> Money:
        """Parse Money from string like '1000.50 USD'.

        Args:
            value_str: Canonical digits and currency code separated by whitespace.

        Returns:
            Money: Money object.

        Raises:
            ParseError: If string format is invalid.
        """
        from monetary.serialization import load

        return load(value_str)

    # endregion

    # region Properties

    @property
    def magnitude(self) -> int:
        """Get the signed integer digits."""
        return self._magnitude

    @property
    def scale(self) -> int:
        """Get the count of fractional digits."""
        return self._scale

    @property
    def currency(self) -> str:
        """Get the currency code."""
        return self._currency

    @property
    def precision(self) -> int:
        """Get the number of decimal digits in the magnitude (0 for zero)."""
        if self._magnitude == 0:
            return 0
        return len(str(abs(self._magnitude)))

    @property
    def is_zero(self) -> bool:
        return self._magnitude == 0

    @property
    def is_nonzero(self) -> bool:
        return self._magnitude != 0

    @property
    def is_positive(self) -> bool:
        return self._magnitude > 0

    @property
    def is_negative(self) -> bool:
        return self._magnitude < 0

    # endregion

    # region Arithmetic

    def add(self, other: Money | ScalarLike) -> Money:
        """Add $other to this Money.

        Adding a zero (of any numeric type) returns this very instance, and adding
        any Money to a zero Money returns that other instance.

        Raises:
            TypeMismatchError: If $other is neither Money nor zero.
            CurrencyMismatchError: If currencies differ.
        """
        if _is_zero_operand(other):
            return self

        if not isinstance(other, Money):
            raise TypeMismatchError(f"Cannot call `add` because $other ({other!r}) is not Money")

        if self.is_zero:
            return other

        self._check_same_currency(other, "add")
        return self._add(other)

    def subtract(self, other: Money | ScalarLike) -> Money:
        """Subtract $other from this Money; same identity and currency rules as `add`."""
        if _is_zero_operand(other):
            return self

        if not isinstance(other, Money):
            raise TypeMismatchError(f"Cannot call `subtract` because $other ({other!r}) is not Money")

        if self.is_zero:
            return other.negate()

        self._check_same_currency(other, "subtract")
        return self._add(other.negate())

    def negate(self) -> Money:
        return self.__class__(-self._magnitude, self._scale, self._currency)

    def multiply(self, other: ScalarLike) -> Money:
        """Multiply this Money by an exact scalar.

        Args:
            other: `int`, rational (e.g. `Fraction`) or `Decimal` multiplier. Rational
                multipliers go through `divide`, so their result is limited to the
                default number of fractional digits.

        Returns:
            Money: Reduced product in the same currency.

        Raises:
            TypeMismatchError: If $other is Money (money times money is meaningless) or
                an unsupported type such as `float`.
        """
        if is_integer(other):
            return self._reduce(self._magnitude * other, self._scale)

        if is_rational(other):
            return self.multiply(other.numerator).divide(other.denominator)

        if isinstance(other, Decimal):
            magnitude, scale = decompose_decimal(other)
            return self._reduce(self._magnitude * magnitude, self._scale + scale)

        if isinstance(other, Money):
            raise TypeMismatchError(f"Cannot call `multiply` because $other ({other!r}) is Money; Money can only be multiplied by a number")

        raise TypeMismatchError(f"Cannot call `multiply` because $other ({other!r}) has unsupported type {type(other).__name__}")

    def divide(self, other: Money | ScalarLike, max_fractional_digits: int = DEFAULT_DIVISION_DIGITS) -> Money:
        """Divide this Money by $other using exact long division.

        The quotient gets fractional digits until the remainder is zero or the result
        has $max_fractional_digits fractional digits. When the scale the operands
        already imply reaches that cap, up to $max_fractional_digits further digits are
        generated instead. For example `Money(1, 0, "GBP").divide(9)` is
        `0.1111111111111111` and `Money(1, 16, "GBP").divide(3)` keeps 16 threes at
        scale 32.

        Args:
            other: Money of the same currency, `int`, rational or `Decimal` divisor.
            max_fractional_digits: Upper bound on generated fractional digits (>= 1).

        Returns:
            Money: Reduced quotient in this currency.

        Raises:
            InvalidArgumentError: If $max_fractional_digits is not an integer >= 1.
            DivisionByZeroError: If $other is zero.
            CurrencyMismatchError: If $other is Money in another currency.
            TypeMismatchError: If $other has an unsupported type.
        """
        # Raise: digits bound must be a positive integer
        if not is_integer(max_fractional_digits) or max_fractional_digits < 1:
            raise InvalidArgumentError(f"Cannot call `divide` because $max_fractional_digits ({max_fractional_digits!r}) must be an integer >= 1")

        # Raise: divisor cannot be zero
        if _is_zero_operand(other):
            raise DivisionByZeroError(f"Cannot call `divide` because $other ({other!r}) is zero")

        if isinstance(other, Money):
            self._check_same_currency(other, "divide")
            scale = self._scale - other._scale
            if scale < 0:
                return self._long_divide(self._magnitude * pow10(-scale), 0, other._magnitude, max_fractional_digits)
            return self._long_divide(self._magnitude, scale, other._magnitude, max_fractional_digits)

        if is_integer(other):
            return self._long_divide(self._magnitude, self._scale, other, max_fractional_digits)

        if is_rational(other):
            return self.multiply(other.denominator).divide(other.numerator, max_fractional_digits)

        if isinstance(other, Decimal):
            return self.divide(Money.from_decimal(other, self._currency), max_fractional_digits)

        raise TypeMismatchError(f"Cannot call `divide` because $other ({other!r}) has unsupported type {type(other).__name__}")

    def convert(self, rate: Money | ScalarLike, currency: str | None = None) -> Money:
        """Convert this Money into another currency using an exchange $rate.

        Args:
            rate: Either Money (price of one unit of this currency, expressed in the
                target currency) or a plain exact number.
            currency: Target currency; required for a plain-number $rate and forbidden
                for a Money $rate.

        Returns:
            Money: Converted amount. Converting with a Money rate in the same currency
            returns this very instance.

        Raises:
            InvalidArgumentError: If $currency is missing for a plain rate, or supplied
                together with a Money rate.
            TypeMismatchError: If $rate has an unsupported type.
        """
        if isinstance(rate, Money):
            # Raise: target currency is ambiguous when both are given
            if currency is not None:
                raise InvalidArgumentError(f"Cannot call `convert` with Money $rate ({rate!r}) and $currency ({currency!r}) at the same time")

            if rate.currency == self._currency:
                return self

            return rate.multiply(self.to_fraction())

        if not (is_integer(rate) or is_rational(rate) or isinstance(rate, Decimal)):
            raise TypeMismatchError(f"Cannot call `convert` because $rate ({rate!r}) has unsupported type {type(rate).__name__}")

        # Raise: plain number rate needs an explicit target currency
        if currency is None:
            raise InvalidArgumentError(f"Cannot call `convert` with plain $rate ({rate!r}) because $currency is not provided")

        product = self.multiply(rate)
        return self.__class__(product.magnitude, product.scale, currency)

    def allocate(self, parts: int, digits: int = 0) -> list[Money]:
        """Split this Money into $parts shares with at most $digits fractional digits.

        Every share except the last is the truncated quotient; the last share takes the
        remainder, so the shares always sum to this Money exactly.

        Raises:
            InvalidArgumentError: If $parts is not an integer >= 1.
        """
        # Raise: parts must be a positive integer
        if not is_integer(parts) or parts < 1:
            raise InvalidArgumentError(f"Cannot call `allocate` because $parts ({parts!r}) must be an integer >= 1")

        share = self.divide(parts, max(digits, 1)).truncate(digits)
        remainder = self.subtract(share.multiply(parts - 1))
        return [share] * (parts - 1) + [remainder]

    def abs(self) -> Money:
        if not self.is_negative:
            return self
        return self.negate()

    # endregion

    # region Rounding

    def round(self, digits: int = 0, mode: RoundingMode | str = RoundingMode.HALF_UP, half: str | None = None) -> Money:
        """Round to $digits fractional digits using $mode.

        Ties are decided on the whole dropped suffix, so 0.71364501 rounded to 4 digits
        with HALF_DOWN is 0.7137 (above half) while 0.713645 is 0.7136 (exactly half).

        Args:
            digits: Target count of fractional digits (>= 0).
            mode: `RoundingMode` member or mode name (aliases "truncate", "ceil",
                "default" and "banker" are accepted).
            half: Shorthand for the half modes: "up", "down" or "even". When given, it
                replaces $mode.

        Returns:
            Money: Rounded value, or this very instance if $digits >= `scale`.

        Raises:
            InvalidArgumentError: If $mode or $half is unknown or $digits is not an
                integer >= 0.
        """
        if half is not None:
            mode = RoundingMode.from_half(half)
        else:
            mode = RoundingMode.from_value(mode)

        # Raise: digits must be a non-negative integer
        if not is_integer(digits) or digits < 0:
            raise InvalidArgumentError(f"Cannot call `round` because $digits ({digits!r}) must be an integer >= 0")

        if digits >= self._scale:
            return self

        magnitude = round_magnitude(self._magnitude, self._scale - digits, mode)

        if digits == 0:
            return self.__class__(magnitude, 0, self._currency)
        return self._reduce(magnitude, digits)

    def ceil(self, digits: int = 0) -> Money:
        return self.round(digits, RoundingMode.CEILING)

    def floor(self, digits: int = 0) -> Money:
        return self.round(digits, RoundingMode.FLOOR)

    def truncate(self, digits: int = 0) -> Money:
        """Drop fractional digits below $digits (toward zero), without rounding."""
        # Raise: digits must be a non-negative integer
        if not is_integer(digits) or digits < 0:
            raise InvalidArgumentError(f"Cannot call `truncate` because $digits ({digits!r}) must be an integer >= 0")

        if digits >= self._scale:
            return self

        kept = abs(self._magnitude) // pow10(self._scale - digits)
        return self._reduce(-kept if self.is_negative else kept, digits)

    def fix(self) -> Money:
        """Return the integral part."""
        return self.truncate(0)

    def frac(self) -> Money:
        """Return the fractional part."""
        return self.subtract(self.fix())

    # endregion

    # region Comparison

    def compare(self, other: object) -> int | None:
        """Compare with $other.

        Returns:
            -1, 0 or 1 when $other is Money in the same currency or a plain zero, and
            None when $other is incomparable (any other object).

        Raises:
            CurrencyMismatchError: If $other is Money in another currency.
        """
        if isinstance(other, Money):
            self._check_same_currency(other, "compare")
            value, other_value = self._aligned(other)
            return (value > other_value) - (value < other_value)

        if is_numeric_zero(other):
            return (self._magnitude > 0) - (self._magnitude < 0)

        return None

    def __eq__(self, other) -> bool:
        """Check equality with another Money object (or with a plain zero)."""
        if isinstance(other, Money):
            if self._currency != other._currency:
                return False
            value, other_value = self._aligned(other)
            return value == other_value

        if is_numeric_zero(other):
            return self.is_zero

        return NotImplemented

    def __hash__(self) -> int:
        """Hash consistent with `__eq__` across scales (and with plain zero)."""
        if self.is_zero:
            return hash(0)

        magnitude, scale = self._magnitude, self._scale
        while scale > 0 and magnitude % BASE == 0:
            magnitude //= BASE
            scale -= 1
        return hash((magnitude, scale, self._currency))

    def __lt__(self, other) -> bool:
        result = self.compare(other)
        return NotImplemented if result is None else result < 0

    def __le__(self, other) -> bool:
        result = self.compare(other)
        return NotImplemented if result is None else result <= 0

    def __gt__(self, other) -> bool:
        result = self.compare(other)
        return NotImplemented if result is None else result > 0

    def __ge__(self, other) -> bool:
        result = self.compare(other)
        return NotImplemented if result is None else result >= 0

    # endregion

    # region Operators

    def __add__(self, other):
        return self.add(other)

    def __radd__(self, other):
        """Right addition: only `0 + Money` is supported (so `sum()` works)."""
        return self.add(other)

    def __sub__(self, other):
        return self.subtract(other)

    def __rsub__(self, other):
        """Right subtraction: only `0 - Money` is supported."""
        if is_numeric_zero(other):
            return self.negate()
        raise TypeMismatchError(f"Cannot subtract `Money` from $other ({other!r})")

    def __mul__(self, other):
        return self.multiply(other)

    def __rmul__(self, other):
        return self.multiply(other)

    def __truediv__(self, other):
        return self.divide(other)

    def __neg__(self):
        return self.negate()

    def __pos__(self):
        return self

    def __abs__(self):
        return self.abs()

    def __round__(self, ndigits=None):
        return self.round(ndigits or 0)

    def __bool__(self) -> bool:
        return self.is_nonzero

    def __int__(self) -> int:
        return self.to_int()

    # endregion

    # region Conversions

    def to_int(self) -> int:
        """Return the integral part as `int` (truncated toward zero)."""
        integral = abs(self._magnitude) // pow10(self._scale)
        return -integral if self.is_negative else integral

    def to_fraction(self) -> Fraction:
        return Fraction(self._magnitude, pow10(self._scale))

    def reduce(self) -> Money:
        """Return the equal value with trailing zero digits stripped (this very instance if there are none)."""
        if self._scale == 0 or self._magnitude % BASE != 0:
            return self
        return self._reduce(self._magnitude, self._scale)

    def to_decimal(self) -> Decimal:
        """Return the exact value as `Decimal` (string construction never rounds)."""
        return Decimal(f"{self._magnitude}E-{self._scale}")

    def __str__(self) -> str:
        """Return string like '1000.50 USD'."""
        from monetary.digits import dump

        return f"{dump(self)} {self._currency}"

    def __repr__(self) -> str:
        """Return string like "Money(100050, 2, 'USD')"."""
        return f"{self.__class__.__name__}({self._magnitude}, {self._scale}, {self._currency!r})"

    # endregion

    # region Helpers

    def _check_same_currency(self, other: Money, operation: str) -> None:
        """Check if two Money objects have the same currency.

        Raises:
            CurrencyMismatchError: If currencies don't match.
        """
        if self._currency != other._currency:
            raise CurrencyMismatchError(f"Cannot call `{operation}` on different currencies: {self._currency} and {other._currency}")

    def _aligned(self, other: Money) -> tuple[int, int]:
        """Return both magnitudes expressed at the larger of the two scales."""
        value, other_value = self._magnitude, other._magnitude
        if other._scale > self._scale:
            value *= pow10(other._scale - self._scale)
        elif other._scale < self._scale:
            other_value *= pow10(self._scale - other._scale)
        return value, other_value

    def _add(self, other: Money) -> Money:
        value, other_value = self._aligned(other)
        return self._reduce(value + other_value, max(self._scale, other._scale))

    def _long_divide(self, value: int, scale: int, divisor: int, max_scale: int) -> Money:
        negative = (value < 0) != (divisor < 0)
        divisor = abs(divisor)

        quotient, remainder = divmod(abs(value), divisor)

        # Operands already at or past the cap still get max_scale more digits
        if scale >= max_scale:
            max_scale += scale

        # Base-10 long division: one fractional digit per step
        while remainder and scale < max_scale:
            digit, remainder = divmod(remainder * BASE, divisor)
            quotient = quotient * BASE + digit
            scale += 1

        return self._reduce(-quotient if negative else quotient, scale)

    def _reduce(self, magnitude: int, scale: int) -> Money:
        return self._reduced(magnitude, scale, self._currency)

    @classmethod
    def _reduced(cls, magnitude: int, scale: int, currency: str) -> Money:
        """Create Money with trailing zero digits stripped while scale > 0."""
        while scale > 0 and magnitude % BASE == 0:
            magnitude //= BASE
            scale -= 1
        return cls(magnitude, scale, currency)

    # endregion


def _is_zero_operand(value: object) -> bool:
    if isinstance(value, Money):
        return value.is_zero
    return is_numeric_zero(value)


def as_money(value: Money | ScalarLike | str, currency: str | None = None, config: MonetaryConfig | None = None) -> Money:
    """Coerce $value into Money.

    Args:
        value: Money (returned as is), `int`, rational (e.g. `Fraction`), `Decimal`,
            or canonical digit string such as "-1.99".
        currency: Currency for non-Money values; defaults to the configured default
            currency.
        config: Configuration supplying the default currency; the process-wide default
            configuration is used when omitted.

    Returns:
        Money: Value in $currency.

    Raises:
        InvalidArgumentError: If no currency is available.
        ParseError: If a string value is not in canonical digit form.
        TypeMismatchError: If $value has an unsupported type.
    """
    if isinstance(value, Money):
        return value

    if currency is None:
        from monetary.config import get_default_config

        currency = (config or get_default_config()).currency

    # Raise: every value needs a currency
    if currency is None:
        raise InvalidArgumentError(f"Cannot call `as_money` for $value ({value!r}) because no $currency is provided and no default currency is configured")

    if is_integer(value):
        return Money(value, 0, currency)

    if is_rational(value):
        return Money(value.numerator, 0, currency).divide(value.denominator)

    if isinstance(value, Decimal):
        return Money.from_decimal(value, currency)

    if isinstance(value, str):
        from monetary.digits import load

        return load(value, currency)

    raise TypeMismatchError(f"Cannot convert $value ({value!r}) of type {type(value).__name__} into `Money`")
