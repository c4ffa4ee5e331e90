from decimal import (
    MAX_EMAX,
    MAX_PREC,
    MIN_EMIN,
    ROUND_CEILING,
    ROUND_DOWN,
    ROUND_FLOOR,
    ROUND_HALF_DOWN,
    ROUND_HALF_EVEN,
    ROUND_HALF_UP,
    ROUND_UP,
    Context,
    Decimal,
)
from enum import Enum
from typing import Tuple, Union


# Large enough that add, subtract, multiply, remainder and quantize never round.
EXACT = Context(prec=MAX_PREC, rounding=ROUND_HALF_EVEN, Emax=MAX_EMAX, Emin=MIN_EMIN)

_ONE = Decimal(1)


class RoundingMode(Enum):
    HALF_UP = ROUND_HALF_UP
    HALF_DOWN = ROUND_HALF_DOWN
    HALF_EVEN = ROUND_HALF_EVEN
    UP = ROUND_UP
    DOWN = ROUND_DOWN
    CEILING = ROUND_CEILING
    FLOOR = ROUND_FLOOR

    @classmethod
    def parse(cls, mode: Union["RoundingMode", str]) -> "RoundingMode":
        if isinstance(mode, cls):
            return mode
        if not isinstance(mode, str):
            raise TypeError(f"rounding mode must be a RoundingMode or str, not {type(mode).__name__}")
        key = mode.strip().upper().replace("-", "_").replace(" ", "_")
        if key.startswith("ROUND_"):
            key = key[len("ROUND_"):]
        try:
            return cls[key]
        except KeyError:
            raise ValueError(f"unknown rounding mode: {mode!r}") from None


DEFAULT_ROUNDING = RoundingMode.HALF_UP


def scale_exponent(scale: int) -> Decimal:
    return Decimal((0, (1,), -scale))


def quantize(value: Decimal, scale: int, mode: RoundingMode = DEFAULT_ROUNDING) -> Decimal:
    result = value.quantize(scale_exponent(scale), rounding=mode.value, context=EXACT)
    if not result:
        # no negative zero
        result = result.copy_abs()
    return result


def split_decimal(value: Decimal) -> Tuple[int, int]:
    """Return ``(coefficient, exponent)`` with the sign carried by the coefficient."""
    exponent = value.as_tuple().exponent
    # int(Decimal) is not subject to the int/str digit limit
    return int(value.scaleb(-exponent, context=EXACT)), exponent


def round_ratio(numerator: int, denominator: int, mode: RoundingMode) -> int:
    """Round ``numerator / denominator`` to an integer with ``mode``.

    The quotient and remainder are exact, so the only information rounding needs
    is where the remainder sits relative to one half.  That position is encoded
    into a short decimal (x.25, x.5 or x.75) and handed to ``Decimal.quantize``,
    which keeps every rounding rule in one place.
    """
    if denominator == 0:
        raise ZeroDivisionError("denominator must be non-zero")
    negative = (numerator < 0) != (denominator < 0)
    whole, rem = divmod(abs(numerator), abs(denominator))
    if rem == 0:
        return -whole if negative else whole
    twice = 2 * rem
    if twice < abs(denominator):
        marker = "25"
    elif twice == abs(denominator):
        marker = "5"
    else:
        marker = "75"
    approx = EXACT.add(Decimal(whole), Decimal("0." + marker))
    if negative:
        approx = approx.copy_negate()
    return int(approx.quantize(_ONE, rounding=mode.value, context=EXACT))


def from_scaled_int(units: int, scale: int) -> Decimal:
    return Decimal(units).scaleb(-scale, context=EXACT)


def divide_to_scale(dividend: Decimal, divisor: Decimal, scale: int, mode: RoundingMode = DEFAULT_ROUNDING) -> Decimal:
    """Exact ``dividend / divisor`` rounded once to ``scale`` fractional digits."""
    num, num_exp = split_decimal(dividend)
    den, den_exp = split_decimal(divisor)
    shift = num_exp - den_exp + scale
    if shift >= 0:
        num *= 10**shift
    else:
        den *= 10 ** (-shift)
    return from_scaled_int(round_ratio(num, den, mode), scale)
