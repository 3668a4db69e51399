"""Batch update of SPEC_SYSTEM, SPEC_SIZE and SPEC_QUANTITY."""

from specparams.updater.fields import (
    compute_quantity,
    find_size_parameter,
    get_system_value,
    update_quantity,
    update_size,
    update_system,
)
from specparams.updater.report import UpdateReport
from specparams.updater.runner import SpecUpdater, collect_elements
from specparams.updater.stats import UpdateStats

__all__ = [
    "SpecUpdater",
    "UpdateReport",
    "UpdateStats",
    "collect_elements",
    "compute_quantity",
    "find_size_parameter",
    "get_system_value",
    "update_quantity",
    "update_size",
    "update_system",
]
