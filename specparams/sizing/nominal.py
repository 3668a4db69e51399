"""Nominal pipe sizes in inches, keyed by their millimetre equivalent."""

from __future__ import annotations

from specparams.config import INCH_TOLERANCE

# Ordered: the first entry inside the tolerance window wins.
NOMINAL_INCH_SIZES: tuple[tuple[float, str], ...] = (
    (6.35, '1/4"'),
    (9.53, '3/8"'),
    (12.7, '1/2"'),
    (19.05, '3/4"'),
    (25.4, '1"'),
    (31.75, '1-1/4"'),
    (38.1, '1-1/2"'),
    (50.8, '2"'),
    (63.5, '2-1/2"'),
    (76.2, '3"'),
    (88.9, '3-1/2"'),
    (101.6, '4"'),
    (127.0, '5"'),
    (152.4, '6"'),
    (203.2, '8"'),
    (254.0, '10"'),
    (304.8, '12"'),
)


def lookup_nominal(mm: float, tolerance: float = INCH_TOLERANCE) -> str | None:
    """Return the inch label whose millimetre value lies within *tolerance* of *mm*."""
    for nominal_mm, label in NOMINAL_INCH_SIZES:
        if abs(mm - nominal_mm) < tolerance:
            return label
    return None
