import logging
from typing import Tuple

from mpmath import mp

from .decimal_value import DecimalValue, _validate_scale


logger = logging.getLogger(__name__)

REFERENCE_KIND = "mp reference"


def compute_precision(scale: int, guard: int = 30) -> int:
    # one integer digit for values in [1, 10), plus guard digits
    return int(scale) + 1 + int(guard)


def extract_fractional_digits(display: str) -> str:
    if "." not in display:
        return ""
    return display.split(".", 1)[1]


def reference_pi(scale: int) -> Tuple[DecimalValue, str]:
    scale = _validate_scale(scale)
    p = compute_precision(scale)
    with mp.workdps(p):
        text = mp.nstr(mp.pi, p)
    return DecimalValue(text, scale), REFERENCE_KIND


def matching_digits(value: DecimalValue, reference: DecimalValue) -> int:
    """Number of leading fractional digits the two values share."""
    if int(value) != int(reference):
        return 0
    a = extract_fractional_digits(str(value))
    b = extract_fractional_digits(str(reference))
    n = 0
    for x, y in zip(a, b):
        if x != y:
            break
        n += 1
    return n


def verify_pi(value: DecimalValue) -> Tuple[bool, str]:
    expected, kind = reference_pi(value.scale)
    ok = value == expected
    if not ok:
        logger.warning(
            "pi mismatch at scale %d (%s): %d leading digits agree",
            value.scale,
            kind,
            matching_digits(value, expected),
        )
    return ok, kind
