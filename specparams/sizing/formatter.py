"""Canonical SPEC_SIZE rendering for pipe, duct, tray and conduit sizes.

Entry point: ``format_size(raw, category_name)``

Round sizes come out as an inch label (``3/4"``), a small decimal inch
value (``4.5``) or ``DN<mm>``.  Rectangular sizes come out as
``DN<w>x<h>`` with the larger dimension first.  Anything that cannot be
parsed is passed through, dimension by dimension where possible.
"""

from __future__ import annotations

import logging
import re

from specparams.config import INCH_TOLERANCE
from specparams.sizing.classifier import FRACTION_RE, SizeKind, classify_size
from specparams.sizing.nominal import lookup_nominal
from specparams.sizing.numbers import parse_number

logger = logging.getLogger(__name__)

_WHITESPACE_RE = re.compile(r"\s+")
_PREFIX_RE = re.compile(r"DN|NW", re.IGNORECASE)
_UNIT_RE = re.compile(r"mm|in", re.IGNORECASE)
_SEPARATOR_RE = re.compile(r"[×x\-*]")

SEPARATORS = ("x", "×", "-", "*")

# Values below this are taken to be inches already, not millimetres
_INCH_THRESHOLD = 6.0

# Leading dimensions closer than this collapse a 3-part duct size
_COLLAPSE_DELTA = 1.0


def _has_separator(value: str) -> bool:
    return any(sep in value for sep in SEPARATORS)


def _split_dimensions(value: str) -> list[str]:
    """Split on any separator, dropping empty parts."""
    return [p.strip() for p in _SEPARATOR_RE.split(value) if p.strip()]


def _round_int(value: float) -> int:
    return int(round(value))


def format_pipe_dimension(mm: float, tolerance: float = INCH_TOLERANCE) -> str:
    """Render a single round dimension."""
    label = lookup_nominal(mm, tolerance)
    if label is not None:
        return label

    if mm < _INCH_THRESHOLD:
        return f"{mm:.1f}".rstrip("0").rstrip(".")

    return f"DN{_round_int(mm)}"


def _format_round(raw: str, value: str, tolerance: float) -> str:
    clean = _UNIT_RE.sub("", value).replace('"', "").strip()

    fraction = FRACTION_RE.search(clean)
    if fraction:
        return f'{fraction.group(1)}/{fraction.group(2)}"'

    if _has_separator(clean):
        dims: list[str] = []
        for part in _split_dimensions(clean):
            parsed = parse_number(part)
            if parsed is None:
                dims.append(part)
            else:
                dims.append(format_pipe_dimension(parsed, tolerance))
        return "x".join(dims)

    single = parse_number(clean)
    if single is not None:
        return format_pipe_dimension(single, tolerance)

    logger.debug("Unparseable round size %r left as is", raw)
    return raw


def _format_rectangular(value: str) -> str:
    clean = _PREFIX_RE.sub("", value).strip()

    if _has_separator(clean):
        parts = _split_dimensions(clean)
        parsed = [parse_number(p) for p in parts]
        dims = [
            p if v is None else str(_round_int(v))
            for p, v in zip(parts, parsed)
        ]

        if len(dims) >= 2 and parsed[0] is not None and parsed[1] is not None:
            first, second = parsed[0], parsed[1]
            if len(dims) == 2 and first < second:
                dims.reverse()
            elif len(dims) == 3 and abs(first - second) < _COLLAPSE_DELTA:
                del dims[1]

        return "DN" + "x".join(dims)

    single = parse_number(clean)
    if single is not None:
        return f"DN{_round_int(single)}"

    return "DN" + clean


def format_size(
    raw: str | None,
    category_name: str | None = None,
    *,
    inch_tolerance: float = INCH_TOLERANCE,
) -> str:
    """Normalise a raw size string into its canonical display form.

    Parameters
    ----------
    raw:
        Size as entered or reported by the host, e.g. ``" DN 12.7mm "``,
        ``"200 x 100"`` or ``'3/4"'``.
    category_name:
        Display name of the element category.  Names containing ``Pipe``
        or ``Rohr`` force round formatting.
    inch_tolerance:
        Window (mm) for matching the nominal inch series.

    Never raises; unparseable input degrades to a pass-through.
    """
    if raw is None:
        return ""
    trimmed = raw.strip()
    if not trimmed:
        return trimmed

    clean = _WHITESPACE_RE.sub(" ", trimmed)
    clean = _PREFIX_RE.sub("", clean).strip()

    kind = classify_size(category_name, clean)
    if kind is SizeKind.ROUND:
        return _format_round(raw, clean, inch_tolerance)
    return _format_rectangular(clean)
