"""Typed value extraction and idempotent parameter updates.

Reads convert whatever the host stores into the requested shape; writes
happen only when the stored value differs from the new one under the
comparison rule of the parameter's storage kind.  A failed write on the
resolved parameter is retried once against the owning type's parameter
of the same name.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from enum import Enum

from specparams.config import DOUBLE_TOLERANCE
from specparams.parameters.base import ModelElement, Parameter, StorageKind
from specparams.parameters.cache import ParameterCache

logger = logging.getLogger(__name__)


class UpdateOutcome(str, Enum):
    """Result of an update attempt."""

    UPDATED = "updated"
    UNCHANGED = "unchanged"
    FAILED = "failed"


def format_invariant(value: float) -> str:
    """Render *value* with ``.`` as decimal mark and no trailing ``.0``."""
    if value.is_integer():
        return str(int(value))
    return repr(value)


# ---------------------------------------------------------------------------
# Reads
# ---------------------------------------------------------------------------

_NUMERIC_AS_TEXT: dict[StorageKind, Callable[[Parameter], str | None]] = {
    StorageKind.TEXT: lambda p: None,
    StorageKind.NUMBER: lambda p: format_invariant(p.as_number()),
    StorageKind.INTEGER: lambda p: str(p.as_integer()),
}


def get_string(param: Parameter | None) -> str | None:
    """Return the stored value as text.

    Native text first, then the host's display string, then the numeric
    value rendered culture-invariant.
    """
    if param is None:
        return None
    try:
        if not param.has_value:
            return None
        kind = param.storage_kind
        if kind is StorageKind.TEXT:
            text = param.as_text()
            if text is not None:
                return text
        display = param.as_value_string()
        if display and display.strip():
            return display
        return _NUMERIC_AS_TEXT[kind](param)
    except Exception:
        logger.debug("Could not read %s as text", _safe_name(param), exc_info=True)
        return None


def try_get_string(param: Parameter | None) -> str | None:
    """Like :func:`get_string` but ``None`` for blank values."""
    value = get_string(param)
    if value is None or not value.strip():
        return None
    return value


def get_double(param: Parameter | None, default: float = 0.0) -> float:
    """Return the stored value as float, or *default*."""
    if param is None:
        return default
    try:
        if not param.has_value:
            return default
        kind = param.storage_kind
        if kind is StorageKind.NUMBER:
            return param.as_number()
        if kind is StorageKind.INTEGER:
            return float(param.as_integer())
        text = param.as_text()
        return float(text.strip()) if text else default
    except Exception:
        logger.debug("Could not read %s as number", _safe_name(param), exc_info=True)
        return default


def _safe_name(param: Parameter) -> str:
    try:
        return param.name
    except Exception:
        return "<unnamed>"


# ---------------------------------------------------------------------------
# Text updates
# ---------------------------------------------------------------------------


def _type_fallback(
    param: Parameter,
    element: ModelElement,
    cache: ParameterCache,
) -> Parameter | None:
    """Writable type-level parameter sharing *param*'s name."""
    try:
        type_param = cache.get_type_parameter(element, param.name)
        if type_param is None or type_param.is_read_only:
            return None
        return type_param
    except Exception:
        logger.debug("Type fallback lookup failed", exc_info=True)
        return None


def apply_text(
    param: Parameter | None,
    element: ModelElement,
    new_value: str | None,
    cache: ParameterCache,
) -> UpdateOutcome:
    """Write *new_value* unless the stored text already matches it.

    Comparison is trimmed and case-insensitive.  Blank values are never
    written.
    """
    if not new_value or not new_value.strip():
        return UpdateOutcome.UNCHANGED
    if param is None:
        return UpdateOutcome.FAILED

    current = get_string(param) or ""
    if current.strip().casefold() == new_value.strip().casefold():
        return UpdateOutcome.UNCHANGED

    try:
        param.set(new_value)
        return UpdateOutcome.UPDATED
    except Exception:
        logger.debug("Write to %s failed, trying type parameter", _safe_name(param), exc_info=True)

    type_param = _type_fallback(param, element, cache)
    if type_param is None:
        return UpdateOutcome.FAILED
    try:
        type_param.set(new_value)
        return UpdateOutcome.UPDATED
    except Exception:
        logger.debug("Type-level write to %s failed", _safe_name(param), exc_info=True)
        return UpdateOutcome.FAILED


def update_text(
    param: Parameter | None,
    element: ModelElement,
    new_value: str | None,
    cache: ParameterCache,
) -> bool:
    """Return True iff :func:`apply_text` wrote a value."""
    return apply_text(param, element, new_value, cache) is UpdateOutcome.UPDATED


# ---------------------------------------------------------------------------
# Numeric updates
# ---------------------------------------------------------------------------


def _write_number(param: Parameter, value: float, tolerance: float) -> UpdateOutcome:
    if abs(param.as_number() - value) <= tolerance:
        return UpdateOutcome.UNCHANGED
    param.set(value)
    return UpdateOutcome.UPDATED


def _write_integer(param: Parameter, value: float, tolerance: float) -> UpdateOutcome:
    new_int = int(round(value))
    if param.as_integer() == new_int:
        return UpdateOutcome.UNCHANGED
    param.set(new_int)
    return UpdateOutcome.UPDATED


def _write_text_number(param: Parameter, value: float, tolerance: float) -> UpdateOutcome:
    new_str = f"{value:.2f}"
    current = param.as_text() or ""
    if current.strip() == new_str:
        return UpdateOutcome.UNCHANGED
    param.set(new_str)
    return UpdateOutcome.UPDATED


_NUMERIC_WRITERS: dict[StorageKind, Callable[[Parameter, float, float], UpdateOutcome]] = {
    StorageKind.NUMBER: _write_number,
    StorageKind.INTEGER: _write_integer,
    StorageKind.TEXT: _write_text_number,
}


def _write_numeric(param: Parameter, value: float, tolerance: float) -> UpdateOutcome:
    return _NUMERIC_WRITERS[param.storage_kind](param, value, tolerance)


def apply_numeric(
    param: Parameter | None,
    element: ModelElement,
    new_value: float,
    cache: ParameterCache,
    tolerance: float = DOUBLE_TOLERANCE,
) -> UpdateOutcome:
    """Write *new_value* using the comparison rule of the storage kind.

    Floats compare within *tolerance*, integers after rounding, text as
    the value formatted with two decimals.
    """
    if param is None:
        return UpdateOutcome.FAILED

    try:
        return _write_numeric(param, new_value, tolerance)
    except Exception:
        logger.debug("Write to %s failed, trying type parameter", _safe_name(param), exc_info=True)

    type_param = _type_fallback(param, element, cache)
    if type_param is None:
        return UpdateOutcome.FAILED
    try:
        return _write_numeric(type_param, new_value, tolerance)
    except Exception:
        logger.debug("Type-level write to %s failed", _safe_name(param), exc_info=True)
        return UpdateOutcome.FAILED


def update_numeric(
    param: Parameter | None,
    element: ModelElement,
    new_value: float,
    cache: ParameterCache,
    tolerance: float = DOUBLE_TOLERANCE,
) -> bool:
    """Return True iff :func:`apply_numeric` wrote a value."""
    outcome = apply_numeric(param, element, new_value, cache, tolerance)
    return outcome is UpdateOutcome.UPDATED
