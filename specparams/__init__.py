"""specparams — canonical SPEC_SIZE / SPEC_SYSTEM / SPEC_QUANTITY values for MEP models."""

__version__ = "1.0.0"

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
    get_double,
    get_string,
    try_get_string,
    update_numeric,
    update_text,
)
from specparams.settings import ConfigManager, UpdaterSettings
from specparams.sizing import SizeKind, classify_size, format_size, lookup_nominal, parse_number
from specparams.updater import SpecUpdater, UpdateReport, UpdateStats, collect_elements

__all__ = [
    "__version__",
    # Sizing
    "SizeKind",
    "classify_size",
    "format_size",
    "lookup_nominal",
    "parse_number",
    # Parameters
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
    "get_double",
    "get_string",
    "try_get_string",
    "update_numeric",
    "update_text",
    # Updater
    "ConfigManager",
    "SpecUpdater",
    "UpdateReport",
    "UpdateStats",
    "UpdaterSettings",
    "collect_elements",
]
