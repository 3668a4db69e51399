"""Numeric token parsing for free-form size strings."""

from __future__ import annotations

import math
import re

# Everything except digits, signs, decimal marks and the fraction slash
_NOISE_RE = re.compile(r"[^\d\-+,./]")

_MIN_DENOMINATOR = 1e-12


def _to_float(text: str) -> float | None:
    """Parse *text* with ``.`` or ``,`` as decimal mark; finite values only."""
    if not text:
        return None
    try:
        value = float(text.replace(",", "."))
    except ValueError:
        return None
    if not math.isfinite(value):
        return None
    return value


def parse_number(token: str | None) -> float | None:
    """Parse a numeric token such as ``"12,7"``, ``"3/4"`` or ``"50mm"``.

    Noise characters are stripped first.  A single ``/`` makes the token a
    vulgar fraction whose denominator must be non-zero.  Returns ``None``
    when nothing numeric can be recovered.
    """
    if token is None:
        return None

    clean = _NOISE_RE.sub("", token.strip())
    if not clean:
        return None

    if "/" in clean:
        parts = clean.split("/")
        if len(parts) != 2:
            return None
        num = _to_float(parts[0])
        den = _to_float(parts[1])
        if num is None or den is None or abs(den) < _MIN_DENOMINATOR:
            return None
        return num / den

    return _to_float(clean)
