"""Round vs. rectangular classification of size strings."""

from __future__ import annotations

import re
from enum import Enum

_ROUND_CATEGORY_MARKERS = ("pipe", "rohr")

FRACTION_RE = re.compile(r"\b(\d+)\s*/\s*(\d+)\b")


class SizeKind(str, Enum):
    """Shape family a size string belongs to."""

    ROUND = "round"
    RECTANGULAR = "rectangular"


def classify_size(category_name: str | None, cleaned: str) -> SizeKind:
    """Classify a cleaned size string.

    The category name decides when it names a pipe (``Pipe``/``Rohr``).
    Otherwise inch marks, ``mm`` or a vulgar fraction in the text mark the
    size as round; anything else is rectangular.
    """
    if category_name:
        lowered = category_name.lower()
        if any(marker in lowered for marker in _ROUND_CATEGORY_MARKERS):
            return SizeKind.ROUND

    if '"' in cleaned or "mm" in cleaned or FRACTION_RE.search(cleaned):
        return SizeKind.ROUND

    return SizeKind.RECTANGULAR
