"""Parameter access, type-level caching and idempotent updates."""

from specparams.parameters.base import (
    ModelDocument,
    ModelElement,
    Parameter,
    ParameterAccessError,
    StorageKind,
)
from specparams.parameters.cache import ParameterCache
from specparams.parameters.memory import MemoryDocument, MemoryElement, MemoryParameter
from specparams.parameters.values import (
    UpdateOutcome,
    apply_numeric,
    apply_text,
    format_invariant,
    get_double,
    get_string,
    try_get_string,
    update_numeric,
    update_text,
)

__all__ = [
    "MemoryDocument",
    "MemoryElement",
    "MemoryParameter",
    "ModelDocument",
    "ModelElement",
    "Parameter",
    "ParameterAccessError",
    "ParameterCache",
    "StorageKind",
    "UpdateOutcome",
    "apply_numeric",
    "apply_text",
    "format_invariant",
    "get_double",
    "get_string",
    "try_get_string",
    "update_numeric",
    "update_text",
]
