from __future__ import annotations

import pickle
from decimal import Decimal
from fractions import Fraction

import pytest

from monetary.errors import CurrencyMismatchError, DivisionByZeroError, InvalidArgumentError, TypeMismatchError
from monetary.money import Money, as_money
from tests.helpers.helper_config import create_config


def gbp(magnitude: int, scale: int = 0) -> Money:
    return Money(magnitude, scale, "GBP")


SUBJECT = gbp(199, 2)


# region Construction


@pytest.mark.parametrize(
    "magnitude, scale, currency",
    [
        ("123", 2, "GBP"),
        (1.5, 2, "GBP"),
        (True, 2, "GBP"),
        (199, -1, "GBP"),
        (199, 1.0, "GBP"),
        (199, 2, 123),
        (199, 2, ""),
    ],
)
def test_init_rejects_invalid_arguments(magnitude, scale, currency):
    with pytest.raises(InvalidArgumentError):
        Money(magnitude, scale, currency)


def test_money_is_immutable():
    with pytest.raises(AttributeError):
        SUBJECT._magnitude = 1
    with pytest.raises(AttributeError):
        SUBJECT.extra = 1


def test_properties():
    assert SUBJECT.magnitude == 199
    assert SUBJECT.scale == 2
    assert SUBJECT.currency == "GBP"


def test_pickle_round_trip():
    restored = pickle.loads(pickle.dumps(SUBJECT))
    assert restored == SUBJECT
    assert restored.scale == 2


def test_str_and_repr():
    assert str(SUBJECT) == "1.99 GBP"
    assert repr(SUBJECT) == "Money(199, 2, 'GBP')"


def test_from_str():
    assert Money.from_str("1000.50 USD") == Money(100050, 2, "USD")


# endregion

# region Addition and subtraction


def test_add_zero_returns_same_instance():
    assert (SUBJECT + 0) is SUBJECT
    assert (0 + SUBJECT) is SUBJECT
    assert SUBJECT.add(Decimal("0")) is SUBJECT
    assert SUBJECT.add(Fraction(0)) is SUBJECT
    assert (SUBJECT + gbp(0)) is SUBJECT


def test_add_to_zero_money_returns_other_instance():
    assert (gbp(0, 3) + SUBJECT) is SUBJECT


def test_sum_of_money_values():
    assert sum([gbp(1), gbp(25, 1), gbp(5, 2)]) == gbp(355, 2)


@pytest.mark.parametrize(
    "other, expected",
    [
        (gbp(199, 2), gbp(398, 2)),
        (gbp(1, 0), gbp(299, 2)),
        (gbp(12345, 4), gbp(32245, 4)),
        (gbp(19999, 4), gbp(39899, 4)),
    ],
)
def test_add_aligns_scales(other, expected):
    assert SUBJECT + other == expected


def test_add_reduces_result():
    result = gbp(15, 1) + gbp(5, 1)
    assert (result.magnitude, result.scale) == (2, 0)


def test_add_with_another_currency_raises():
    with pytest.raises(CurrencyMismatchError):
        SUBJECT + Money(199, 2, "EUR")


def test_add_with_non_money_raises():
    with pytest.raises(TypeMismatchError):
        SUBJECT + 123
    with pytest.raises(TypeMismatchError):
        123 + SUBJECT


def test_subtract():
    result = SUBJECT - gbp(199, 2)
    assert result == gbp(0)
    assert (result.magnitude, result.scale) == (0, 0)
    assert SUBJECT - gbp(1) == gbp(99, 2)


def test_subtract_zero_returns_same_instance():
    assert (SUBJECT - 0) is SUBJECT


def test_subtract_from_zero():
    assert 0 - SUBJECT == gbp(-199, 2)
    assert gbp(0) - SUBJECT == gbp(-199, 2)


def test_subtract_with_another_currency_raises():
    with pytest.raises(CurrencyMismatchError):
        SUBJECT - Money(199, 2, "EUR")


def test_subtract_with_non_money_raises():
    with pytest.raises(TypeMismatchError):
        SUBJECT - 123


def test_add_is_commutative_and_associative():
    a, b, c = gbp(1234, 3), gbp(-5, 1), gbp(77, 0)
    assert a + b == b + a
    assert (a + b) + c == a + (b + c)


def test_negate():
    assert -SUBJECT == gbp(-199, 2)
    assert (-SUBJECT).scale == 2
    assert +SUBJECT is SUBJECT


# endregion

# region Multiplication


@pytest.mark.parametrize(
    "multiplier, expected",
    [
        (100, gbp(199, 0)),
        (Fraction(1, 5), gbp(398, 3)),
        (Decimal("0.2"), gbp(398, 3)),
        (Decimal("-0.2"), gbp(-398, 3)),
    ],
)
def test_multiply(multiplier, expected):
    assert SUBJECT * multiplier == expected
    assert multiplier * SUBJECT == expected


@pytest.mark.parametrize(
    "value, multiplier, expected",
    [
        (gbp(1000, 1), 1, (100, 0)),
        (gbp(151, 2), Fraction(1000), (1510, 0)),
        (gbp(151, 2), Decimal(1000), (1510, 0)),
        (gbp(151, 2), Decimal("1E+3"), (1510, 0)),
        (gbp(25, 1), Decimal("0.40"), (1, 0)),
    ],
)
def test_multiply_reduces_trailing_zeroes(value, multiplier, expected):
    result = value * multiplier
    assert (result.magnitude, result.scale) == expected


def test_multiply_by_money_raises():
    with pytest.raises(TypeMismatchError):
        SUBJECT * SUBJECT
    with pytest.raises(TypeMismatchError):
        SUBJECT * Money(199, 2, "EUR")


@pytest.mark.parametrize("multiplier", [1.5, "2", object(), None])
def test_multiply_by_unsupported_type_raises(multiplier):
    with pytest.raises(TypeMismatchError):
        SUBJECT * multiplier


# endregion

# region Division


@pytest.mark.parametrize(
    "dividend, divisor, expected",
    [
        (SUBJECT, gbp(100), gbp(199, 4)),
        (gbp(100), gbp(20), gbp(5)),
        (gbp(1002, 1), gbp(20), gbp(501, 2)),
        (gbp(92, 2), gbp(4, 1), gbp(23, 1)),
        (gbp(12, 5), gbp(8, 3), gbp(15, 3)),
        (gbp(1, 1), gbp(5, 4), gbp(200)),
        (gbp(100), gbp(-20), gbp(-5)),
        (gbp(-100), gbp(20), gbp(-5)),
        (gbp(-100), gbp(-20), gbp(5)),
    ],
)
def test_divide_by_money(dividend, divisor, expected):
    assert dividend / divisor == expected


@pytest.mark.parametrize(
    "dividend, divisor, expected",
    [
        (SUBJECT, 100, gbp(199, 4)),
        (gbp(888), 8, gbp(111)),
        (gbp(3052), 4, gbp(763)),
        (gbp(185184), 1500, gbp(123456, 3)),
        (gbp(7125, 2), 3, gbp(2375, 2)),
        (gbp(1224, 3), 8, gbp(153, 3)),
        (gbp(917), 6, gbp(1528333333333333333, 16)),
        (gbp(1999, 3), 3, gbp(6663333333333333, 16)),
        (gbp(888), -8, gbp(-111)),
        (gbp(-888), 8, gbp(-111)),
        (gbp(-888), -8, gbp(111)),
        (gbp(-1), 3, gbp(-3333333333333333, 16)),
    ],
)
def test_divide_by_integer(dividend, divisor, expected):
    assert dividend / divisor == expected


@pytest.mark.parametrize(
    "dividend, divisor, expected",
    [
        (SUBJECT, Fraction(100), gbp(199, 4)),
        (gbp(92, 2), Fraction(2, 5), gbp(23, 1)),
        (gbp(12, 5), Fraction(1, 125), gbp(15, 3)),
        (gbp(1, 1), Fraction(1, 2000), gbp(200)),
        (SUBJECT, Decimal(100), gbp(199, 4)),
        (gbp(92, 2), Decimal("0.4"), gbp(23, 1)),
        (gbp(12, 5), Decimal("0.008"), gbp(15, 3)),
        (gbp(1, 1), Decimal("0.0005"), gbp(200)),
    ],
)
def test_divide_by_rational_and_decimal(dividend, divisor, expected):
    assert dividend / divisor == expected


def test_divide_limits_fractional_digits_by_default():
    result = gbp(1) / 9
    assert (result.magnitude, result.scale) == (1111111111111111, 16)


def test_divide_with_max_fractional_digits():
    result = gbp(1).divide(9, 32)
    assert (result.magnitude, result.scale) == (int("1" * 32), 32)


def test_divide_stops_when_remainder_is_zero():
    result = gbp(1).divide(8, 32)
    assert (result.magnitude, result.scale) == (125, 3)


def test_divide_operand_at_digit_limit_keeps_further_digits():
    result = gbp(1, 16).divide(3)
    assert not result.is_zero
    assert (result.magnitude, result.scale) == (int("3" * 16), 32)

    result = gbp(1, 20) / 2
    assert (result.magnitude, result.scale) == (5, 21)


@pytest.mark.parametrize("digits", [0, -1, 1.5, None])
def test_divide_with_invalid_digits_raises(digits):
    with pytest.raises(InvalidArgumentError):
        SUBJECT.divide(3, digits)


@pytest.mark.parametrize("divisor", [0, Fraction(0), Decimal("0"), 0.0, gbp(0, 2)])
def test_divide_by_zero_raises(divisor):
    with pytest.raises(DivisionByZeroError):
        SUBJECT / divisor


def test_divide_by_zero_is_also_zero_division_error():
    with pytest.raises(ZeroDivisionError):
        SUBJECT / 0


def test_divide_with_another_currency_raises():
    with pytest.raises(CurrencyMismatchError):
        SUBJECT / Money(199, 2, "EUR")


def test_divide_by_unsupported_type_raises():
    with pytest.raises(TypeMismatchError):
        SUBJECT / 1.23


# endregion

# region Comparison


def test_compare_equal_values_across_scales():
    assert SUBJECT.compare(SUBJECT) == 0
    assert gbp(1).compare(gbp(100, 2)) == 0
    assert gbp(1) == gbp(100, 2)
    assert gbp(10, 1) == gbp(100, 2)


def test_compare_ordering():
    assert SUBJECT.compare(gbp(199, 1)) == -1
    assert SUBJECT.compare(gbp(199, 3)) == 1
    assert SUBJECT < gbp(199, 1)
    assert SUBJECT <= gbp(199, 1)
    assert SUBJECT > gbp(199, 3)
    assert SUBJECT >= gbp(1990, 3)


def test_compare_with_another_currency_raises():
    with pytest.raises(CurrencyMismatchError):
        SUBJECT.compare(Money(199, 1, "EUR"))
    with pytest.raises(CurrencyMismatchError):
        SUBJECT < Money(199, 1, "EUR")


def test_equality_with_another_currency_is_false():
    assert SUBJECT != Money(199, 2, "EUR")


def test_compare_with_zero():
    assert gbp(1, 2).compare(0) == 1
    assert gbp(0).compare(0) == 0
    assert gbp(-1, 2).compare(0) == -1
    assert gbp(-1, 2) < 0
    assert gbp(0, 2) == 0


def test_compare_with_other_objects_is_incomparable():
    assert SUBJECT.compare(None) is None
    assert SUBJECT.compare(123) is None
    assert SUBJECT != 123
    with pytest.raises(TypeError):
        SUBJECT < 123


def test_hash_is_consistent_with_equality():
    assert hash(gbp(1)) == hash(gbp(100, 2))
    assert hash(gbp(0, 3)) == hash(0)
    assert len({gbp(1), gbp(10, 1), gbp(100, 2)}) == 1


# endregion

# region Conversion between currencies


def test_convert_with_money_in_same_currency_returns_same_instance():
    assert SUBJECT.convert(SUBJECT) is SUBJECT


def test_convert_with_money_rate():
    assert SUBJECT.convert(Money(2, 0, "EUR")) == Money(398, 2, "EUR")


def test_convert_with_money_rate_and_currency_raises():
    with pytest.raises(InvalidArgumentError):
        SUBJECT.convert(SUBJECT, "GBP")


@pytest.mark.parametrize("rate", [2, Fraction(2), Decimal(2), Decimal("2.000")])
def test_convert_with_plain_rate(rate):
    result = SUBJECT.convert(rate, "EUR")
    assert result == Money(398, 2, "EUR")
    assert result.currency == "EUR"


@pytest.mark.parametrize("rate", [2, Fraction(2), Decimal(2)])
def test_convert_with_plain_rate_without_currency_raises(rate):
    with pytest.raises(InvalidArgumentError):
        SUBJECT.convert(rate)


def test_convert_with_unsupported_rate_raises():
    with pytest.raises(TypeMismatchError):
        SUBJECT.convert(1.23, "EUR")


# endregion

# region Other operations


def test_abs():
    assert SUBJECT.abs() is SUBJECT
    assert abs(gbp(-199, 2)) == SUBJECT


def test_allocate():
    assert gbp(100).allocate(3, 0) == [gbp(33), gbp(33), gbp(34)]
    assert gbp(100).allocate(3, 2) == [gbp(3333, 2), gbp(3333, 2), gbp(3334, 2)]
    assert gbp(5, 2).allocate(2, 2) == [gbp(2, 2), gbp(3, 2)]
    assert gbp(100).allocate(1) == [gbp(100)]


def test_allocate_shares_sum_to_original():
    value = gbp(-100001, 3)
    assert sum(value.allocate(7, 2)) == value


@pytest.mark.parametrize("parts", [0, -1, object(), 2.0])
def test_allocate_with_invalid_parts_raises(parts):
    with pytest.raises(InvalidArgumentError):
        gbp(100).allocate(parts, 0)


def test_fix_and_frac():
    assert gbp(123, 2).fix() == gbp(1)
    assert gbp(123, 1).fix() == gbp(12)
    assert gbp(123, 0).fix() == gbp(123)
    assert gbp(123, 2).frac() == gbp(23, 2)
    assert gbp(123, 1).frac() == gbp(3, 1)
    assert gbp(123, 0).frac() == gbp(0)
    assert gbp(-123, 2).fix() == gbp(-1)
    assert gbp(-123, 2).frac() == gbp(-23, 2)


def test_sign_predicates():
    assert gbp(-199, 2).is_negative
    assert not SUBJECT.is_negative
    assert SUBJECT.is_positive
    assert not gbp(-199, 2).is_positive
    assert gbp(0).is_zero
    assert not SUBJECT.is_zero
    assert SUBJECT.is_nonzero
    assert not gbp(0).is_nonzero
    assert bool(SUBJECT)
    assert not bool(gbp(0))


@pytest.mark.parametrize(
    "value, expected",
    [
        (gbp(0), 0),
        (gbp(1), 1),
        (gbp(12), 2),
        (gbp(12, 1), 2),
        (gbp(12, 2), 2),
        (gbp(123), 3),
        (gbp(123, 3), 3),
        (gbp(-123, 1), 3),
    ],
)
def test_precision(value, expected):
    assert value.precision == expected


@pytest.mark.parametrize(
    "value, expected",
    [
        (gbp(0), 0),
        (gbp(1), 1),
        (gbp(12, 2), 0),
        (gbp(123, 2), 1),
        (gbp(999, 2), 9),
        (gbp(-999, 2), -9),
    ],
)
def test_to_int(value, expected):
    assert value.to_int() == expected
    assert int(value) == expected


def test_to_fraction():
    assert SUBJECT.to_fraction() == Fraction(199, 100)


def test_reduce():
    assert gbp(1990, 3).reduce() == gbp(199, 2)
    assert (gbp(1990, 3).reduce().magnitude, gbp(1990, 3).reduce().scale) == (199, 2)
    assert (gbp(0, 4).reduce().magnitude, gbp(0, 4).reduce().scale) == (0, 0)
    assert (gbp(-500, 2).reduce().magnitude, gbp(-500, 2).reduce().scale) == (-5, 0)
    assert SUBJECT.reduce() is SUBJECT
    assert gbp(100).reduce() == gbp(100)


def test_to_decimal():
    assert SUBJECT.to_decimal() == Decimal("1.99")
    assert str(gbp(-1, 5).to_decimal()) == "-0.00001"
    assert gbp(10**40 + 1, 2).to_decimal() == Decimal(f"{10**40 + 1}E-2")


# endregion

# region Coercion


def test_as_money_returns_money_unchanged():
    assert as_money(SUBJECT) is SUBJECT


@pytest.mark.parametrize(
    "value, expected",
    [
        (199, gbp(199)),
        (Fraction(199, 1), gbp(199)),
        (Fraction(2, 5), gbp(4, 1)),
        (Fraction(1, 125), gbp(8, 3)),
        (Fraction(1, 2000), gbp(5, 4)),
        (Decimal("444"), gbp(444)),
        (Decimal("400"), gbp(400)),
        (Decimal("4"), gbp(4)),
        (Decimal("0.444"), gbp(444, 3)),
        (Decimal("0.400"), gbp(4, 1)),
        (Decimal("0.040"), gbp(4, 2)),
        (Decimal("0.004"), gbp(4, 3)),
        ("1.99", SUBJECT),
    ],
)
def test_as_money(value, expected):
    assert as_money(value, "GBP") == expected


def test_as_money_from_decimal_is_reduced():
    result = as_money(Decimal("0.400"), "GBP")
    assert (result.magnitude, result.scale) == (4, 1)


def test_as_money_with_invalid_string_raises():
    with pytest.raises(ValueError):
        as_money("", "GBP")


def test_as_money_with_unsupported_type_raises():
    with pytest.raises(TypeMismatchError):
        as_money(1.23, "GBP")


def test_as_money_uses_default_currency():
    assert as_money(5, config=create_config("EUR")) == Money(5, 0, "EUR")


def test_as_money_without_currency_raises():
    with pytest.raises(InvalidArgumentError):
        as_money(5, config=create_config())


def test_as_money_with_non_finite_decimal_raises():
    with pytest.raises(InvalidArgumentError):
        as_money(Decimal("NaN"), "GBP")


# endregion
