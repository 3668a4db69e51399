"""Per-element updates of SPEC_SYSTEM, SPEC_SIZE and SPEC_QUANTITY.

Each function resolves its target parameter, derives the new value from
the element's own data and writes it through the idempotent update
helpers.  A missing or read-only target, or a missing source value,
skips the field without recording an outcome.
"""

from __future__ import annotations

import logging
from collections.abc import Collection, Sequence

from specparams import config
from specparams.config import SpecParams
from specparams.parameters.base import ModelElement, Parameter
from specparams.parameters.cache import ParameterCache
from specparams.parameters.values import (
    UpdateOutcome,
    apply_numeric,
    apply_text,
    get_double,
    get_string,
    try_get_string,
)
from specparams.sizing.formatter import format_size

logger = logging.getLogger(__name__)


def _builtin(element: ModelElement, key: str) -> Parameter | None:
    try:
        return element.builtin_parameter(key)
    except Exception:
        logger.debug("Built-in %s unavailable on %s", key, element.element_id, exc_info=True)
        return None


def _writable(param: Parameter | None) -> bool:
    return param is not None and not param.is_read_only


def _with_value(param: Parameter | None) -> bool:
    return param is not None and param.has_value


def get_system_value(element: ModelElement, cache: ParameterCache) -> str | None:
    """System abbreviation, else system name, else system classification."""
    abbrev = try_get_string(cache.get_instance_or_type(element, config.SYSTEM_ABBREVIATION))
    if abbrev is not None:
        return abbrev.strip()

    for key in (config.BUILTIN_SYSTEM_NAME, config.BUILTIN_SYSTEM_CLASSIFICATION):
        value = try_get_string(_builtin(element, key))
        if value is not None:
            return value.strip()
    return None


def find_size_parameter(
    element: ModelElement,
    cache: ParameterCache,
    names: Sequence[str] = config.SIZE_SOURCE_NAMES,
) -> Parameter | None:
    """First parameter carrying a size value.

    Order: calculated size built-in, instance parameters by *names*, then
    type parameters by *names*.
    """
    calculated = _builtin(element, config.BUILTIN_CALCULATED_SIZE)
    if _with_value(calculated):
        return calculated

    for name in names:
        param = element.lookup_parameter(name)
        if _with_value(param):
            return param

    for name in names:
        param = cache.get_type_parameter(element, name)
        if _with_value(param):
            return param

    return None


def compute_quantity(length: float, to_meters: float = config.LENGTH_TO_METERS) -> float:
    """Length in meters rounded to cm; one unit for anything up to a meter."""
    meters = length * to_meters
    if meters > config.MIN_QUANTITY:
        return round(meters, 2)
    return config.MIN_QUANTITY


def update_system(element: ModelElement, cache: ParameterCache) -> UpdateOutcome | None:
    target = cache.get_instance_or_type(element, SpecParams.SYSTEM)
    if not _writable(target):
        return None

    value = get_system_value(element, cache)
    if not value:
        return None
    return apply_text(target, element, value, cache)


def _in_categories(element: ModelElement, categories: Collection[str]) -> bool:
    key = element.category_key
    return key is not None and key in categories


def update_size(
    element: ModelElement,
    cache: ParameterCache,
    categories: Collection[str] = config.SIZE_QUANTITY_CATEGORIES,
    inch_tolerance: float = config.INCH_TOLERANCE,
) -> UpdateOutcome | None:
    if not _in_categories(element, categories):
        return None

    source = find_size_parameter(element, cache)
    target = cache.get_instance_or_type(element, SpecParams.SIZE)
    if not _writable(target) or source is None:
        return None

    raw = get_string(source)
    if not raw or not raw.strip():
        return None

    formatted = format_size(raw, element.category_name, inch_tolerance=inch_tolerance)
    logger.debug("%s: size %r -> %r", element.element_id, raw, formatted)
    return apply_text(target, element, formatted, cache)


def update_quantity(
    element: ModelElement,
    cache: ParameterCache,
    categories: Collection[str] = config.SIZE_QUANTITY_CATEGORIES,
    tolerance: float = config.DOUBLE_TOLERANCE,
    to_meters: float = config.LENGTH_TO_METERS,
) -> UpdateOutcome | None:
    if not _in_categories(element, categories):
        return None

    length = _builtin(element, config.BUILTIN_CURVE_LENGTH)
    if length is None:
        length = cache.get_instance_or_type(element, config.LENGTH)

    target = cache.get_instance_or_type(element, SpecParams.QUANTITY)
    if not _writable(target) or not _with_value(length):
        return None

    quantity = compute_quantity(get_double(length), to_meters)
    return apply_numeric(target, element, quantity, cache, tolerance)
