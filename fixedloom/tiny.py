from dataclasses import dataclass

from .errors import DivisionByZeroError


MIN_VALUE = 0
MAX_VALUE = 255
SIGNED_MIN_VALUE = -128
SIGNED_MAX_VALUE = 127


def _wrap(value: int, signed: bool) -> int:
    low = SIGNED_MIN_VALUE if signed else MIN_VALUE
    span = MAX_VALUE - MIN_VALUE + 1
    return (value - low) % span + low


@dataclass(frozen=True)
class TinyInteger:
    """An 8-bit integer that wraps around instead of overflowing."""

    value: int
    signed: bool = False

    def __post_init__(self):
        if isinstance(self.value, bool) or not isinstance(self.value, int):
            raise TypeError(f"value must be an int, not {type(self.value).__name__}")
        object.__setattr__(self, "value", _wrap(self.value, bool(self.signed)))
        object.__setattr__(self, "signed", bool(self.signed))

    @classmethod
    def value_of(cls, value: int) -> "TinyInteger":
        return cls(value)

    @classmethod
    def signed_value_of(cls, value: int) -> "TinyInteger":
        return cls(value, signed=True)

    def add(self, other: "TinyInteger") -> "TinyInteger":
        return TinyInteger(self.value + other.value, self.signed)

    def subtract(self, other: "TinyInteger") -> "TinyInteger":
        return TinyInteger(self.value - other.value, self.signed)

    def multiply(self, other: "TinyInteger") -> "TinyInteger":
        return TinyInteger(self.value * other.value, self.signed)

    def divide(self, other: "TinyInteger") -> "TinyInteger":
        if other.value == 0:
            raise DivisionByZeroError("division by zero")
        quotient = abs(self.value) // abs(other.value)
        if (self.value < 0) != (other.value < 0):
            quotient = -quotient
        return TinyInteger(quotient, self.signed)

    def compare_to(self, other: "TinyInteger") -> int:
        return (self.value > other.value) - (self.value < other.value)

    def __int__(self) -> int:
        return self.value

    def __index__(self) -> int:
        return self.value

    def __float__(self) -> float:
        return float(self.value)

    def __str__(self) -> str:
        return str(self.value)

    def __add__(self, other):
        if not isinstance(other, TinyInteger):
            return NotImplemented
        return self.add(other)

    def __sub__(self, other):
        if not isinstance(other, TinyInteger):
            return NotImplemented
        return self.subtract(other)

    def __mul__(self, other):
        if not isinstance(other, TinyInteger):
            return NotImplemented
        return self.multiply(other)

    def __floordiv__(self, other):
        if not isinstance(other, TinyInteger):
            return NotImplemented
        return self.divide(other)

    def __lt__(self, other):
        if not isinstance(other, TinyInteger):
            return NotImplemented
        return self.value < other.value

    def __le__(self, other):
        if not isinstance(other, TinyInteger):
            return NotImplemented
        return self.value <= other.value

    def __gt__(self, other):
        if not isinstance(other, TinyInteger):
            return NotImplemented
        return self.value > other.value

    def __ge__(self, other):
        if not isinstance(other, TinyInteger):
            return NotImplemented
        return self.value >= other.value


ZERO = TinyInteger(0)
ONE = TinyInteger(1)
