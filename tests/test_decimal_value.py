from decimal import Decimal

import pytest

from mpmath import mp

from fixedloom.decimal_value import DecimalValue, average_values, sum_values
from fixedloom.errors import (
    DivisionByZeroError,
    EmptyInputError,
    FixedLoomError,
    InvalidExponentError,
    InvalidScaleError,
    MalformedNumberError,
    NegativeOperandError,
    NonPositiveOperandError,
    ScaleMismatchError,
)
from fixedloom.rounding import RoundingMode


def dv(value, scale=2, rounding=RoundingMode.HALF_UP):
    return DecimalValue.value_of(value, scale, rounding)


@pytest.mark.parametrize("source", ["1.23456789", Decimal("-98.7654321"), 7, -42, 2.5, 0.1])
@pytest.mark.parametrize("scale", [0, 1, 2, 5, 12])
def test_scale_is_read_back_exactly(source, scale):
    v = dv(source, scale)
    assert v.scale == scale
    assert v.to_decimal().as_tuple().exponent == -scale
    fractional = str(v).partition(".")[2]
    assert len(fractional) == scale


def test_copy_at_new_scale():
    v = dv("3.14159", 5)
    copy = DecimalValue.value_of(v, 2)
    assert str(copy) == "3.14"
    assert v.scale == 5


@pytest.mark.parametrize(
    "text,mode,expected",
    [
        ("1.005", RoundingMode.HALF_UP, "1.01"),
        ("-1.005", RoundingMode.HALF_UP, "-1.01"),
        ("1.005", RoundingMode.HALF_DOWN, "1.00"),
        ("1.005", RoundingMode.HALF_EVEN, "1.00"),
        ("1.015", RoundingMode.HALF_EVEN, "1.02"),
        ("1.009", RoundingMode.DOWN, "1.00"),
        ("1.001", RoundingMode.UP, "1.01"),
        ("-1.001", RoundingMode.UP, "-1.01"),
        ("-1.009", RoundingMode.CEILING, "-1.00"),
        ("-1.001", RoundingMode.FLOOR, "-1.01"),
    ],
)
def test_construction_rounds_with_mode(text, mode, expected):
    assert str(dv(text, 2, mode)) == expected


def test_rounding_mode_accepts_names():
    assert str(dv("1.005", 2, "half_even")) == "1.00"
    assert RoundingMode.parse("ROUND_HALF_UP") is RoundingMode.HALF_UP
    with pytest.raises(ValueError):
        RoundingMode.parse("sideways")


def test_float_uses_shortest_repr():
    assert str(dv(0.1, 3)) == "0.100"
    assert str(dv(2.675, 2)) == "2.68"


def test_no_negative_zero():
    assert str(dv("-0.001", 2)) == "0.00"
    assert str(dv("0.00", 2).negate()) == "0.00"


def test_plain_notation():
    assert str(dv("0.0000001", 7)) == "0.0000001"
    assert str(dv("1E+3", 0)) == "1000"


def test_invalid_scale():
    with pytest.raises(InvalidScaleError):
        dv("1", -1)
    with pytest.raises(ValueError):
        dv("1", -3)
    with pytest.raises(TypeError):
        dv("1", "2")


@pytest.mark.parametrize("source", ["abc", "", "1.2.3", "NaN", "Infinity", float("nan"), float("inf"), Decimal("-Infinity")])
def test_malformed_number(source):
    with pytest.raises(MalformedNumberError):
        dv(source)


@pytest.mark.parametrize("source", [True, None, [1], object()])
def test_unsupported_source(source):
    with pytest.raises(TypeError):
        dv(source)


def test_add_carries_into_integer_part():
    result = dv("99.99").add(dv("0.01"))
    assert str(result) == "100.00"
    assert result.scale == 2
    assert result == dv(100)


def test_subtract():
    assert str(dv("1.00") - dv("2.50")) == "-1.50"


def test_scale_mismatch_is_never_coerced():
    a = dv("1.00", 2)
    b = dv("1.000", 3)
    with pytest.raises(ScaleMismatchError) as info:
        a.add(b)
    assert info.value.expected == 2
    assert info.value.actual == 3
    for op in (a.subtract, a.multiply, a.divide, a.remainder, a.compare_to):
        with pytest.raises(ScaleMismatchError):
            op(b)
    with pytest.raises(ScaleMismatchError):
        a < b


def test_multiply_rounds_full_product():
    assert str(dv("1.25") * dv("1.25")) == "1.56"
    assert str(dv("1.25").multiply(dv("1.25"), RoundingMode.UP)) == "1.57"
    assert str(dv("0.05").multiply(dv("0.10"))) == "0.01"
    assert str(dv("0.05").multiply(dv("0.10"), RoundingMode.HALF_EVEN)) == "0.00"


@pytest.mark.parametrize(
    "a,b,mode,expected",
    [
        ("1", "3", RoundingMode.HALF_UP, "0.33"),
        ("2", "3", RoundingMode.HALF_UP, "0.67"),
        ("2", "3", RoundingMode.DOWN, "0.66"),
        ("-2", "3", RoundingMode.HALF_UP, "-0.67"),
        ("-2", "3", RoundingMode.CEILING, "-0.66"),
        ("-2", "3", RoundingMode.FLOOR, "-0.67"),
        ("1", "8", RoundingMode.HALF_UP, "0.13"),
        ("1", "8", RoundingMode.HALF_EVEN, "0.12"),
        ("1", "8", RoundingMode.HALF_DOWN, "0.12"),
        ("-1", "8", RoundingMode.HALF_UP, "-0.13"),
        ("10", "4", RoundingMode.DOWN, "2.50"),
    ],
)
def test_divide(a, b, mode, expected):
    assert str(dv(a).divide(dv(b), mode)) == expected


def test_divide_at_large_scale():
    result = dv(1, 50) / dv(7, 50)
    assert str(result) == "0." + "142857" * 8 + "14"


def test_division_by_zero():
    with pytest.raises(DivisionByZeroError):
        DecimalValue.value_of(5, 2).divide(DecimalValue.value_of(0, 2))
    with pytest.raises(ZeroDivisionError):
        dv(5) / dv(0)


def test_remainder_follows_dividend_sign():
    assert str(dv("7.50") % dv("2.00")) == "1.50"
    assert str(dv("-7.50") % dv("2.00")) == "-1.50"
    assert str(dv("7.50") % dv("-2.00")) == "1.50"
    with pytest.raises(DivisionByZeroError):
        dv("7.50").remainder(dv(0))


def test_pow():
    assert str(dv("1.10").pow(2)) == "1.21"
    assert str(dv("1.05") ** 2) == "1.10"
    assert str(dv("1.5", 1).pow(3)) == "3.4"
    assert str(dv("1.5", 1).pow(3, RoundingMode.DOWN)) == "3.3"
    assert str(dv("7.25").pow(0)) == "1.00"
    assert str(dv("-2.00").pow(3)) == "-8.00"


def test_pow_rejects_negative_exponent():
    with pytest.raises(InvalidExponentError):
        dv("2.00").pow(-1)
    with pytest.raises(TypeError):
        dv("2.00").pow(1.5)


def test_sqrt():
    assert str(dv(2, 10).sqrt()) == "1.4142135624"
    assert str(dv(2, 10).sqrt(RoundingMode.DOWN)) == "1.4142135623"
    assert str(dv("6.25").sqrt()) == "2.50"
    assert str(dv(0, 3).sqrt()) == "0.000"


def test_sqrt_beyond_float_precision():
    assert str(dv(2, 50).sqrt()) == "1.41421356237309504880168872420969807856967187537695"


def test_sqrt_of_negative():
    with pytest.raises(NegativeOperandError):
        dv("-0.01").sqrt()


def test_log():
    assert str(dv(1, 5).log()) == "0.00000"
    assert str(dv(2, 10).log()) == "0.6931471806"
    assert str(dv(10, 20).log()) == "2.30258509299404568402"
    assert str(dv(10, 20).log(RoundingMode.DOWN)) == "2.30258509299404568401"


@pytest.mark.parametrize("value", ["0", "-1.5"])
def test_log_of_non_positive(value):
    with pytest.raises(NonPositiveOperandError):
        dv(value).log()


def test_named_rounds_keep_scale():
    v = dv("12.34")
    for r in (v.round_down(), v.round_up(), v.bankers_round(), v.round(RoundingMode.FLOOR)):
        assert r == v
        assert r.scale == 2


def test_resize_precision():
    v = dv("1.23456", 5)
    assert str(v.resize_precision(2)) == "1.23"
    assert str(v.resize_precision(3, RoundingMode.DOWN)) == "1.234"
    assert str(v.resize_precision(4)) == "1.2346"
    assert str(dv("1.23").resize_precision(5)) == "1.23000"
    assert str(v) == "1.23456"
    with pytest.raises(InvalidScaleError):
        v.resize_precision(-1)


@pytest.mark.parametrize("text", ["0.00", "1.23", "-45.67", "99999999999999999999.99"])
@pytest.mark.parametrize("wider", [2, 3, 10])
def test_widen_then_narrow_round_trip(text, wider):
    v = dv(text, 2)
    assert v.resize_precision(wider).resize_precision(2) == v


@pytest.mark.parametrize("a,b", [("1.25", "3.75"), ("-0.01", "99.99"), ("123.45", "-67.89")])
def test_commutativity(a, b):
    x, y = dv(a), dv(b)
    assert x.add(y) == y.add(x)
    assert x.multiply(y) == y.multiply(x)


@pytest.mark.parametrize("a,b,c", [("1.25", "3.75", "-2.10"), ("0.01", "0.02", "0.03")])
def test_associativity_of_add(a, b, c):
    x, y, z = dv(a), dv(b), dv(c)
    assert x.add(y).add(z) == x.add(y.add(z))


def test_comparison():
    a, b = dv("1.50"), dv("2.25")
    assert a.compare_to(b) == -1
    assert b.compare_to(a) == 1
    assert a.compare_to(dv("1.5")) == 0
    assert a < b and a <= b and b > a and b >= a
    assert a.is_less_than(b)
    assert b.is_greater_than(a)
    assert a.is_equal_to(dv("1.50"))
    assert DecimalValue.max_of(a, b) is b
    assert DecimalValue.min_of(a, b) is a


def test_equality_includes_scale():
    one = dv("1", 1)
    other = dv("1", 2)
    assert one != other
    assert one == dv("1.0", 1)
    assert len({one, other, dv("1.00", 2)}) == 2
    assert one != Decimal("1.0")


def test_sign_helpers():
    v = dv("-2.75")
    assert int(v) == -2
    assert float(v) == -2.75
    assert str(-v) == "2.75"
    assert str(abs(v)) == "2.75"
    assert v.signum() == -1
    assert not dv(0)
    assert dv("0.01")


def test_operators_reject_foreign_types():
    with pytest.raises(TypeError):
        dv("1.00") + 1
    with pytest.raises(TypeError):
        dv("1.00") < Decimal("2")


def test_format_delegates_to_host():
    assert dv("1234.5").format(",.2f") == "1,234.50"
    assert dv("0.5").format(".1%") == "50.0%"


def test_repr():
    assert repr(dv("1.5")) == "DecimalValue('1.50', scale=2)"


def test_sum_and_average():
    values = [dv("1.10"), dv("2.20"), dv("3.30")]
    assert str(sum_values(values)) == "6.60"
    assert str(DecimalValue.sum(values)) == "6.60"
    third = [dv("1.00"), dv("2.00"), dv("2.00")]
    assert str(average_values(third)) == "1.67"
    assert str(DecimalValue.average(third, RoundingMode.DOWN)) == "1.66"
    assert str(average_values(v for v in values)) == "2.20"


def test_aggregates_reject_empty_input():
    with pytest.raises(EmptyInputError):
        average_values([])
    with pytest.raises(EmptyInputError):
        sum_values(iter([]))


def test_aggregates_use_first_element_scale():
    with pytest.raises(ScaleMismatchError) as info:
        average_values([dv("1.00", 2), dv("1.000", 3)])
    assert info.value.expected == 2
    with pytest.raises(ScaleMismatchError):
        sum_values([dv("1.000", 3), dv("1.00", 2)])


def test_errors_share_a_base_class():
    with pytest.raises(FixedLoomError):
        dv("1").divide(dv("0"))
    with pytest.raises(FixedLoomError):
        dv("x")


def test_values_are_immutable():
    v = dv("1.00")
    with pytest.raises(AttributeError):
        v.scale = 3


# past the 4300-digit int/str conversion limit
HUGE_SCALE = 5000


def test_divide_at_huge_scale():
    result = dv(1, HUGE_SCALE) / dv(7, HUGE_SCALE)
    assert result.scale == HUGE_SCALE
    assert str(result) == "0." + "142857" * 833 + "14"


def test_pow_at_huge_scale():
    assert str(dv("1.5", HUGE_SCALE).pow(2)) == "2.25" + "0" * (HUGE_SCALE - 2)
    assert str(dv(2, HUGE_SCALE) ** 2) == "4." + "0" * HUGE_SCALE


def test_sqrt_at_huge_scale():
    result = dv(2, HUGE_SCALE).sqrt()
    with mp.workdps(HUGE_SCALE + 30):
        expected = dv(mp.nstr(mp.sqrt(2), HUGE_SCALE + 30), HUGE_SCALE)
    assert str(result).startswith("1.41421356237309504880168872420969807856967187537694")
    assert result == expected


def test_average_at_huge_scale():
    result = average_values([dv(1, HUGE_SCALE), dv(2, HUGE_SCALE)])
    assert str(result) == "1.5" + "0" * (HUGE_SCALE - 1)
    third = average_values([dv(1, HUGE_SCALE), dv(0, HUGE_SCALE), dv(0, HUGE_SCALE)])
    assert str(third) == "0." + "3" * HUGE_SCALE
