"""ParameterCache — instance-or-type parameter resolution.

The owning type's parameters are indexed once per type and reused for
every element of that type, so a run costs one enumeration per type
rather than one per element.  The index is never invalidated during a
run; call :meth:`ParameterCache.clear` before reusing a cache against a
model whose type parameters may have changed.
"""

from __future__ import annotations

import logging
from collections.abc import Hashable

from specparams.parameters.base import ModelDocument, ModelElement, Parameter

logger = logging.getLogger(__name__)


class ParameterCache:
    """Per-run cache of type-level parameters.

    Parameters
    ----------
    document:
        Document used to enumerate owning-type parameters.
    """

    def __init__(self, document: ModelDocument) -> None:
        self._document = document
        self._type_index: dict[Hashable, dict[str, Parameter]] = {}

    def __len__(self) -> int:
        return len(self._type_index)

    def is_indexed(self, type_id: Hashable) -> bool:
        return type_id in self._type_index

    def clear(self) -> None:
        """Drop every type index."""
        self._type_index.clear()

    def _build_index(self, type_id: Hashable) -> dict[str, Parameter]:
        index: dict[str, Parameter] = {}
        try:
            for param in self._document.type_parameters(type_id):
                name = getattr(param, "name", None)
                if not name:
                    continue
                index.setdefault(name.lower(), param)
        except Exception:
            logger.debug("Could not enumerate parameters of type %s", type_id, exc_info=True)
        logger.debug("Indexed %d parameters for type %s", len(index), type_id)
        return index

    def get_type_parameter(self, element: ModelElement, name: str) -> Parameter | None:
        """Type-level parameter *name* (case-insensitive) of *element*'s owning type."""
        try:
            type_id = element.type_id
        except Exception:
            logger.debug("Could not resolve owning type", exc_info=True)
            return None
        if type_id is None:
            return None

        index = self._type_index.get(type_id)
        if index is None:
            index = self._build_index(type_id)
            self._type_index[type_id] = index

        return index.get(name.lower())

    def get_instance_or_type(self, element: ModelElement, name: str) -> Parameter | None:
        """Instance parameter *name*, falling back to the owning type's."""
        try:
            param = element.lookup_parameter(name)
        except Exception:
            logger.debug("Instance lookup of %r failed", name, exc_info=True)
            param = None
        if param is not None:
            return param
        return self.get_type_parameter(element, name)
