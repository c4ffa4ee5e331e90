__all__ = [
    "DecimalValue",
    "RoundingMode",
    "of_pi",
    "sum_values",
    "average_values",
    "verify_pi",
    "reference_pi",
    "Printer",
    "PrintingMethod",
    "TinyInteger",
    "FixedLoomError",
    "InvalidScaleError",
    "ScaleMismatchError",
    "MalformedNumberError",
    "DivisionByZeroError",
    "InvalidExponentError",
    "NegativeOperandError",
    "NonPositiveOperandError",
    "EmptyInputError",
]

from .chudnovsky import of_pi
from .decimal_value import DecimalValue, average_values, sum_values
from .errors import (
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
from .printing import Printer, PrintingMethod
from .rounding import RoundingMode
from .tiny import TinyInteger
from .verify import reference_pi, verify_pi
