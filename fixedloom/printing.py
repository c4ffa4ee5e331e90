import logging
import sys
from dataclasses import dataclass
from enum import Enum
from typing import IO, Optional, TypeVar


logger = logging.getLogger(__name__)

T = TypeVar("T")


class PrintingMethod(Enum):
    STDOUT = "stdout"
    STDERR = "stderr"
    LOGGER = "logger"


@dataclass(frozen=True)
class Printer:
    """Where ``print`` sends a value.

    Passed explicitly to whatever does the reporting; there is no process-wide
    default that can be swapped at runtime.
    """

    method: PrintingMethod = PrintingMethod.STDOUT
    logger: Optional[logging.Logger] = None

    def print(self, value, out: Optional[IO[str]] = None) -> None:
        text = str(value)
        if out is not None:
            out.write(text + "\n")
            return
        if self.method is PrintingMethod.STDOUT:
            sys.stdout.write(text + "\n")
        elif self.method is PrintingMethod.STDERR:
            sys.stderr.write(text + "\n")
        elif self.method is PrintingMethod.LOGGER:
            (self.logger or logger).info(text)
        else:
            raise ValueError(f"unsupported printing method: {self.method!r}")

    def print_and_return(self, value: T, out: Optional[IO[str]] = None) -> T:
        self.print(value, out=out)
        return value


DEFAULT_PRINTER = Printer()
