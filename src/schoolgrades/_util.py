"""Private helper utilities."""

import decimal
import logging

logger = logging.getLogger(__name__)


def safe_divide(numerator: float, denominator: float) -> float:
    """Divide, returning zero instead of `inf` or `NaN` when the denominator is zero."""
    if denominator == 0:
        return 0.0
    return numerator / denominator


def clamp_percentage(percentage: float, clamp: bool = True) -> float:
    """Clamp a percentage into [0, 100], logging a warning when it was out of range."""
    if not clamp or 0 <= percentage <= 100:
        return percentage

    clamped = min(max(percentage, 0.0), 100.0)
    logger.warning("Percentage %r is out of range; clamped to %r.", percentage, clamped)
    return clamped


def round_half_up(value: float, digits: int = 1) -> float:
    """Round to `digits` decimal places, with halves rounded away from zero.

    Python's builtin :func:`round` rounds halves to even, so ``round(82.25, 1)``
    is ``82.2``. Report cards round ``82.25`` to ``82.3``.

    """
    quantum = decimal.Decimal(1).scaleb(-digits)
    rounded = decimal.Decimal(str(value)).quantize(quantum, rounding=decimal.ROUND_HALF_UP)
    return float(rounded)
