import logging
from decimal import Decimal, localcontext

from .decimal_value import DecimalValue, _validate_scale
from .rounding import RoundingMode


logger = logging.getLogger(__name__)

_A = 13591409
_B = 545140134
_C = 640320
_X_MULT = -(_C**3)  # -262537412640768000
_SQRT_C = 426880
_RADICAND = 10005

GUARD_DIGITS = 20


def series_terms(scale: int) -> int:
    # each term adds log10(640320**3 / 1728) ~ 14.18 digits; two spare terms cover the tail
    return scale // 14 + 2


def pi_series_sum(terms: int, prec: int) -> Decimal:
    """Sum of ``M_k * L_k / X_k`` for ``k < terms`` at ``prec`` significant digits.

    ``M_k = (6k)! / ((3k)! (k!)^3)``, ``L_k = A + B k`` and ``X_k = (-C^3)^k`` are
    kept as exact integers and advanced incrementally; only the per-term
    division is rounded.
    """
    total = Decimal(0)
    m, l, x = 1, _A, 1
    with localcontext() as ctx:
        ctx.prec = prec
        for k in range(terms):
            total += Decimal(m * l) / Decimal(x)
            l += _B
            x *= _X_MULT
            m = m * (12 * k + 2) * (12 * k + 6) * (12 * k + 10) // (k + 1) ** 3
    return total


def of_pi(scale: int) -> DecimalValue:
    scale = _validate_scale(scale)
    terms = series_terms(scale)
    prec = scale + GUARD_DIGITS
    logger.debug("pi series: scale=%d terms=%d prec=%d", scale, terms, prec)
    total = pi_series_sum(terms, prec)
    with localcontext() as ctx:
        ctx.prec = prec
        pi = Decimal(_SQRT_C) * Decimal(_RADICAND).sqrt() / total
    return DecimalValue(pi, scale, RoundingMode.HALF_UP)
