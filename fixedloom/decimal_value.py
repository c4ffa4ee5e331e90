"""Fixed-scale arbitrary-precision decimals.

Every DecimalValue carries a scale (digits right of the point) that is set at
construction and never changes except through ``resize_precision``.  Binary
operations refuse operands of different scales instead of promoting them.
"""

import math
from dataclasses import InitVar, dataclass
from decimal import Decimal, InvalidOperation
from typing import IO, Iterable, List, Optional, Union

from mpmath import mp

from .errors import (
    DivisionByZeroError,
    EmptyInputError,
    InvalidExponentError,
    InvalidScaleError,
    MalformedNumberError,
    NegativeOperandError,
    NonPositiveOperandError,
    ScaleMismatchError,
)
from .printing import DEFAULT_PRINTER, Printer
from .rounding import (
    DEFAULT_ROUNDING,
    EXACT,
    RoundingMode,
    divide_to_scale,
    from_scaled_int,
    quantize,
    round_ratio,
    split_decimal,
)


# Extra significant digits carried by mpmath before rounding a logarithm to scale.
LOG_GUARD_DIGITS = 20

Source = Union["DecimalValue", Decimal, str, int, float]


def _validate_scale(scale: int) -> int:
    if isinstance(scale, bool) or not isinstance(scale, int):
        raise TypeError(f"scale must be an int, not {type(scale).__name__}")
    if scale < 0:
        raise InvalidScaleError(f"scale must be >= 0, got {scale}")
    return scale


def _to_decimal(source: Source) -> Decimal:
    if isinstance(source, DecimalValue):
        return source.magnitude
    if isinstance(source, bool):
        raise TypeError("bool is not a numeric source")
    if isinstance(source, Decimal):
        value = source
    elif isinstance(source, int):
        return Decimal(source)
    elif isinstance(source, float):
        if not math.isfinite(source):
            raise MalformedNumberError(f"not a finite number: {source!r}")
        # shortest repr, so 0.1 becomes Decimal("0.1") rather than the binary expansion
        value = Decimal(repr(source))
    elif isinstance(source, str):
        try:
            value = Decimal(source.strip())
        except InvalidOperation:
            raise MalformedNumberError(f"not a decimal literal: {source!r}") from None
    else:
        raise TypeError(f"unsupported numeric source: {type(source).__name__}")
    if not value.is_finite():
        raise MalformedNumberError(f"not a finite number: {source!r}")
    return value


@dataclass(frozen=True, repr=False)
class DecimalValue:
    magnitude: Decimal
    scale: int
    rounding: InitVar[RoundingMode] = DEFAULT_ROUNDING

    def __post_init__(self, rounding: RoundingMode):
        scale = _validate_scale(self.scale)
        mode = RoundingMode.parse(rounding)
        object.__setattr__(self, "magnitude", quantize(_to_decimal(self.magnitude), scale, mode))

    @classmethod
    def value_of(cls, source: Source, scale: int, rounding: RoundingMode = DEFAULT_ROUNDING) -> "DecimalValue":
        return cls(source, scale, rounding)

    @classmethod
    def of_pi(cls, scale: int) -> "DecimalValue":
        from .chudnovsky import of_pi

        return of_pi(scale)

    @classmethod
    def sum(cls, values: Iterable["DecimalValue"], rounding: RoundingMode = DEFAULT_ROUNDING) -> "DecimalValue":
        return sum_values(values, rounding)

    @classmethod
    def average(cls, values: Iterable["DecimalValue"], rounding: RoundingMode = DEFAULT_ROUNDING) -> "DecimalValue":
        return average_values(values, rounding)

    @staticmethod
    def max_of(a: "DecimalValue", b: "DecimalValue") -> "DecimalValue":
        return a if a.compare_to(b) >= 0 else b

    @staticmethod
    def min_of(a: "DecimalValue", b: "DecimalValue") -> "DecimalValue":
        return a if a.compare_to(b) <= 0 else b

    def to_decimal(self) -> Decimal:
        return self.magnitude

    def _check_scale(self, other: "DecimalValue") -> None:
        if not isinstance(other, DecimalValue):
            raise TypeError(f"expected DecimalValue, not {type(other).__name__}")
        if self.scale != other.scale:
            raise ScaleMismatchError(self.scale, other.scale)

    def _new(self, magnitude: Decimal, rounding: RoundingMode) -> "DecimalValue":
        return DecimalValue(magnitude, self.scale, rounding)

    # arithmetic

    def add(self, other: "DecimalValue", rounding: RoundingMode = DEFAULT_ROUNDING) -> "DecimalValue":
        self._check_scale(other)
        return self._new(EXACT.add(self.magnitude, other.magnitude), rounding)

    def subtract(self, other: "DecimalValue", rounding: RoundingMode = DEFAULT_ROUNDING) -> "DecimalValue":
        self._check_scale(other)
        return self._new(EXACT.subtract(self.magnitude, other.magnitude), rounding)

    def multiply(self, other: "DecimalValue", rounding: RoundingMode = DEFAULT_ROUNDING) -> "DecimalValue":
        self._check_scale(other)
        return self._new(EXACT.multiply(self.magnitude, other.magnitude), rounding)

    def divide(self, other: "DecimalValue", rounding: RoundingMode = DEFAULT_ROUNDING) -> "DecimalValue":
        self._check_scale(other)
        if other.is_zero():
            raise DivisionByZeroError(f"cannot divide {self} by zero")
        mode = RoundingMode.parse(rounding)
        return self._new(divide_to_scale(self.magnitude, other.magnitude, self.scale, mode), mode)

    def remainder(self, other: "DecimalValue", rounding: RoundingMode = DEFAULT_ROUNDING) -> "DecimalValue":
        """Remainder of truncating division; the sign follows the dividend."""
        self._check_scale(other)
        if other.is_zero():
            raise DivisionByZeroError(f"cannot take remainder of {self} by zero")
        return self._new(EXACT.remainder(self.magnitude, other.magnitude), rounding)

    def pow(self, n: int, rounding: RoundingMode = DEFAULT_ROUNDING) -> "DecimalValue":
        if isinstance(n, bool) or not isinstance(n, int):
            raise TypeError(f"exponent must be an int, not {type(n).__name__}")
        if n < 0:
            raise InvalidExponentError(f"negative exponent not supported: {n}")
        units, exponent = split_decimal(self.magnitude)
        return self._new(from_scaled_int(units**n, -exponent * n), rounding)

    def sqrt(self, rounding: RoundingMode = DEFAULT_ROUNDING) -> "DecimalValue":
        """Square root rounded once to the value's scale.

        Works on the scaled integer with ``math.isqrt`` so the result is exact to
        the last digit at any scale.
        """
        if self.magnitude < 0:
            raise NegativeOperandError(f"sqrt of negative value: {self}")
        units, exponent = split_decimal(self.magnitude)
        radicand = units * 10 ** (exponent + 2 * self.scale)
        root = math.isqrt(radicand)
        rest = radicand - root * root
        if rest == 0:
            scaled = root
        else:
            # true root lies strictly inside (root, root + 1) and never on the half
            quarter = 3 if rest > root else 1
            scaled = round_ratio(4 * root + quarter, 4, RoundingMode.parse(rounding))
        return DecimalValue(from_scaled_int(scaled, self.scale), self.scale)

    def log(self, rounding: RoundingMode = DEFAULT_ROUNDING) -> "DecimalValue":
        """Natural logarithm, evaluated by mpmath with guard digits then rounded to scale."""
        if self.magnitude <= 0:
            raise NonPositiveOperandError(f"log of non-positive value: {self}")
        dps = self.scale + LOG_GUARD_DIGITS + len(str(abs(self.magnitude.adjusted())))
        with mp.workdps(dps):
            result = mp.log(mp.mpf(str(self.magnitude)))
            text = mp.nstr(result, dps)
        return self._new(Decimal(text), rounding)

    def negate(self) -> "DecimalValue":
        return DecimalValue(self.magnitude.copy_negate(), self.scale)

    def abs(self) -> "DecimalValue":
        return DecimalValue(self.magnitude.copy_abs(), self.scale)

    # rounding and scale

    def round(self, rounding: RoundingMode) -> "DecimalValue":
        return self._new(self.magnitude, rounding)

    def round_down(self) -> "DecimalValue":
        return self.round(RoundingMode.DOWN)

    def round_up(self) -> "DecimalValue":
        return self.round(RoundingMode.UP)

    def bankers_round(self) -> "DecimalValue":
        return self.round(RoundingMode.HALF_EVEN)

    def resize_precision(self, new_scale: int, rounding: RoundingMode = DEFAULT_ROUNDING) -> "DecimalValue":
        return DecimalValue(self.magnitude, new_scale, rounding)

    # comparison

    def compare_to(self, other: "DecimalValue") -> int:
        self._check_scale(other)
        return (self.magnitude > other.magnitude) - (self.magnitude < other.magnitude)

    def is_greater_than(self, other: "DecimalValue") -> bool:
        return self.compare_to(other) > 0

    def is_less_than(self, other: "DecimalValue") -> bool:
        return self.compare_to(other) < 0

    def is_equal_to(self, other: "DecimalValue") -> bool:
        return self.compare_to(other) == 0

    def is_zero(self) -> bool:
        return not self.magnitude

    def signum(self) -> int:
        return (self.magnitude > 0) - (self.magnitude < 0)

    # output

    def format(self, pattern: str) -> str:
        return format(self.magnitude, pattern)

    def print(self, printer: Optional[Printer] = None, out: Optional[IO[str]] = None) -> None:
        (printer or DEFAULT_PRINTER).print(self, out=out)

    def print_and_return(self, printer: Optional[Printer] = None, out: Optional[IO[str]] = None) -> "DecimalValue":
        self.print(printer, out)
        return self

    # python protocol

    def __str__(self) -> str:
        return format(self.magnitude, "f")

    def __repr__(self) -> str:
        return f"DecimalValue('{self}', scale={self.scale})"

    def __int__(self) -> int:
        return int(self.magnitude)

    def __float__(self) -> float:
        return float(self.magnitude)

    def __bool__(self) -> bool:
        return not self.is_zero()

    def __neg__(self) -> "DecimalValue":
        return self.negate()

    def __pos__(self) -> "DecimalValue":
        return self

    def __abs__(self) -> "DecimalValue":
        return self.abs()

    def __add__(self, other):
        if not isinstance(other, DecimalValue):
            return NotImplemented
        return self.add(other)

    def __sub__(self, other):
        if not isinstance(other, DecimalValue):
            return NotImplemented
        return self.subtract(other)

    def __mul__(self, other):
        if not isinstance(other, DecimalValue):
            return NotImplemented
        return self.multiply(other)

    def __truediv__(self, other):
        if not isinstance(other, DecimalValue):
            return NotImplemented
        return self.divide(other)

    def __mod__(self, other):
        if not isinstance(other, DecimalValue):
            return NotImplemented
        return self.remainder(other)

    def __pow__(self, n):
        if isinstance(n, bool) or not isinstance(n, int):
            return NotImplemented
        return self.pow(n)

    def __lt__(self, other):
        if not isinstance(other, DecimalValue):
            return NotImplemented
        return self.compare_to(other) < 0

    def __le__(self, other):
        if not isinstance(other, DecimalValue):
            return NotImplemented
        return self.compare_to(other) <= 0

    def __gt__(self, other):
        if not isinstance(other, DecimalValue):
            return NotImplemented
        return self.compare_to(other) > 0

    def __ge__(self, other):
        if not isinstance(other, DecimalValue):
            return NotImplemented
        return self.compare_to(other) >= 0


def _same_scale(values: Iterable[DecimalValue]) -> List[DecimalValue]:
    items = list(values)
    if not items:
        raise EmptyInputError("values must not be empty")
    first = items[0]
    if not isinstance(first, DecimalValue):
        raise TypeError(f"expected DecimalValue, not {type(first).__name__}")
    for v in items:
        first._check_scale(v)
    return items


def sum_values(values: Iterable[DecimalValue], rounding: RoundingMode = DEFAULT_ROUNDING) -> DecimalValue:
    items = _same_scale(values)
    total = Decimal(0)
    for v in items:
        total = EXACT.add(total, v.magnitude)
    return DecimalValue(total, items[0].scale, rounding)


def average_values(values: Iterable[DecimalValue], rounding: RoundingMode = DEFAULT_ROUNDING) -> DecimalValue:
    items = _same_scale(values)
    scale = items[0].scale
    mode = RoundingMode.parse(rounding)
    total = sum_values(items).magnitude
    return DecimalValue(divide_to_scale(total, Decimal(len(items)), scale, mode), scale, mode)
