class FixedLoomError(Exception):
    """Base class for every error raised by fixedloom."""


class InvalidScaleError(FixedLoomError, ValueError):
    pass


class ScaleMismatchError(FixedLoomError, ValueError):
    def __init__(self, expected: int, actual: int):
        super().__init__(f"scales must match: {expected} != {actual}")
        self.expected = expected
        self.actual = actual


class MalformedNumberError(FixedLoomError, ValueError):
    pass


class DivisionByZeroError(FixedLoomError, ZeroDivisionError):
    pass


class InvalidExponentError(FixedLoomError, ValueError):
    pass


class NegativeOperandError(FixedLoomError, ValueError):
    pass


class NonPositiveOperandError(FixedLoomError, ValueError):
    pass


class EmptyInputError(FixedLoomError, ValueError):
    pass
