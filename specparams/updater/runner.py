"""SpecUpdater — batch update of SPEC parameters over a model.

Usage::

    from specparams import MemoryDocument, SpecUpdater

    updater = SpecUpdater(document)
    report = updater.run()
    print(report.to_text())

Elements are processed one at a time.  Each field of each element is
isolated: an error is recorded in the run statistics and processing
moves on.  Every run gets a fresh :class:`ParameterCache`.
"""

from __future__ import annotations

import logging
import time
from collections.abc import Callable, Collection, Hashable, Iterable
from typing import Optional

from specparams import config
from specparams.config import SpecParams
from specparams.parameters.base import ModelDocument, ModelElement
from specparams.parameters.cache import ParameterCache
from specparams.parameters.values import UpdateOutcome
from specparams.settings import UpdaterSettings
from specparams.updater.fields import update_quantity, update_size, update_system
from specparams.updater.report import UpdateReport
from specparams.updater.stats import UpdateStats

logger = logging.getLogger(__name__)

FieldUpdate = Callable[[ModelElement, ParameterCache], Optional[UpdateOutcome]]


def collect_elements(
    document: ModelDocument,
    selection: Iterable[Hashable] | None = None,
    categories: Iterable[str] = config.PROCESSED_CATEGORIES,
) -> list[ModelElement]:
    """Elements to process, de-duplicated by id in first-seen order.

    An explicit *selection* of element ids wins over *categories*.
    """
    found: dict[Hashable, ModelElement] = {}

    if selection is not None:
        for element_id in selection:
            element = document.get_element(element_id)
            if element is not None and element_id not in found:
                found[element_id] = element
        return list(found.values())

    for category in categories:
        try:
            members = list(document.elements_of_category(category))
        except Exception:
            logger.debug("Could not collect category %s", category, exc_info=True)
            continue
        for element in members:
            found.setdefault(element.element_id, element)
    return list(found.values())


class SpecUpdater:
    """Update SPEC_SYSTEM, SPEC_SIZE and SPEC_QUANTITY across a document.

    Parameters
    ----------
    document:
        Model to update.
    settings:
        Tolerances and unit scale; defaults from :mod:`specparams.config`.
    size_categories:
        Category keys that receive size and quantity updates.
    """

    def __init__(
        self,
        document: ModelDocument,
        settings: UpdaterSettings | None = None,
        size_categories: Collection[str] = config.SIZE_QUANTITY_CATEGORIES,
    ) -> None:
        self.document = document
        self.settings = settings or UpdaterSettings()
        self.size_categories = size_categories
        scale = self.settings.length_to_meters
        self.length_to_meters = scale if scale is not None else document.length_to_meters
        logging.getLogger("specparams").setLevel(self.settings.log_level.upper())

    def _field_updates(self) -> list[tuple[str, str, FieldUpdate]]:
        s = self.settings
        return [
            ("system", SpecParams.SYSTEM, update_system),
            (
                "size",
                SpecParams.SIZE,
                lambda e, c: update_size(e, c, self.size_categories, s.inch_tolerance),
            ),
            (
                "quantity",
                SpecParams.QUANTITY,
                lambda e, c: update_quantity(
                    e, c, self.size_categories, s.double_tolerance, self.length_to_meters
                ),
            ),
        ]

    def _check_targets(
        self,
        element: ModelElement,
        cache: ParameterCache,
        stats: UpdateStats,
    ) -> None:
        """Warn when a sized element has no SPEC_SIZE or SPEC_QUANTITY to write."""
        try:
            if element.category_key not in self.size_categories:
                return
        except Exception:
            logger.debug("Could not read category", exc_info=True)
            return
        missing = [
            name
            for name in (SpecParams.SIZE, SpecParams.QUANTITY)
            if cache.get_instance_or_type(element, name) is None
        ]
        if missing:
            stats.add_warning(element.element_id, "missing " + ", ".join(missing))

    def update_element(
        self,
        element: ModelElement,
        cache: ParameterCache,
        stats: UpdateStats,
    ) -> None:
        """Run every field update on *element*, recording outcomes and errors."""
        for field, param_name, update in self._field_updates():
            try:
                outcome = update(element, cache)
            except Exception as exc:
                element_id = getattr(element, "element_id", "?")
                logger.warning("%s failed for %s", param_name, element_id, exc_info=True)
                stats.add_error(param_name, element_id, str(exc))
                continue
            if outcome is not None:
                stats.record(field, outcome)
        self._check_targets(element, cache, stats)
        stats.elements_processed += 1

    def update_elements(
        self,
        elements: Iterable[ModelElement],
        cache: ParameterCache | None = None,
    ) -> UpdateStats:
        """Update *elements* in order and return the statistics."""
        if cache is None:
            cache = ParameterCache(self.document)
        stats = UpdateStats()
        for element in elements:
            if element is None:
                continue
            self.update_element(element, cache, stats)
        return stats

    def run(
        self,
        selection: Iterable[Hashable] | None = None,
        categories: Iterable[str] = config.PROCESSED_CATEGORIES,
    ) -> UpdateReport:
        """Collect elements, update them and summarise the run."""
        start = time.perf_counter()
        selection = list(selection) if selection is not None else None
        use_selection = bool(selection)

        elements = collect_elements(
            self.document, selection if use_selection else None, categories
        )
        logger.info("Updating SPEC parameters on %d elements", len(elements))

        stats = self.update_elements(elements, ParameterCache(self.document))
        elapsed = time.perf_counter() - start

        logger.info(
            "Update complete: %d updates, %d unchanged, %d failed, %d errors in %.2fs",
            stats.total_updates,
            stats.unchanged,
            stats.failed_writes,
            len(stats.errors),
            elapsed,
        )
        return UpdateReport(
            stats=stats,
            document_title=self.document.title,
            elapsed_seconds=elapsed,
            used_selection=use_selection,
        )
