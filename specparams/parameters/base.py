"""Accessor interfaces the update engine consumes.

A host model (Revit document, IFC file, in-memory fixture) exposes its
elements through :class:`ModelElement`, its type-level property sets
through :class:`ModelDocument` and every individual value slot through
:class:`Parameter`.  Implementations signal any failed read or write by
raising :class:`ParameterAccessError`.
"""

from __future__ import annotations

import abc
from collections.abc import Hashable, Iterable
from enum import Enum

from specparams.config import LENGTH_TO_METERS


class StorageKind(str, Enum):
    """How a parameter stores its value."""

    TEXT = "text"
    NUMBER = "number"
    INTEGER = "integer"


class ParameterAccessError(Exception):
    """Raised by accessor implementations when a read or write fails."""


class Parameter(abc.ABC):
    """A named, typed value slot on an element or its owning type."""

    @property
    @abc.abstractmethod
    def name(self) -> str:
        """Definition name of the parameter."""

    @property
    @abc.abstractmethod
    def storage_kind(self) -> StorageKind:
        """Storage kind of the underlying value."""

    @property
    @abc.abstractmethod
    def is_read_only(self) -> bool:
        """True if the host refuses writes to this parameter."""

    @property
    @abc.abstractmethod
    def has_value(self) -> bool:
        """True if a value has been assigned."""

    @abc.abstractmethod
    def as_text(self) -> str | None:
        """Native text value; ``None`` for non-text storage."""

    @abc.abstractmethod
    def as_value_string(self) -> str | None:
        """Formatted display value (with units), if the host provides one."""

    @abc.abstractmethod
    def as_number(self) -> float:
        """Value as float.  Raises :class:`ParameterAccessError` for text."""

    @abc.abstractmethod
    def as_integer(self) -> int:
        """Value as int.  Raises :class:`ParameterAccessError` for text."""

    @abc.abstractmethod
    def set(self, value: str | float | int) -> None:
        """Write *value*.  Raises :class:`ParameterAccessError` on failure."""


class ModelElement(abc.ABC):
    """A model element (instance) as seen by the update engine."""

    @property
    @abc.abstractmethod
    def element_id(self) -> Hashable:
        """Stable identity of the element."""

    @property
    @abc.abstractmethod
    def category_key(self) -> str | None:
        """Language-neutral category key (``OST_PipeCurves``, ``IfcPipeSegment``)."""

    @property
    @abc.abstractmethod
    def category_name(self) -> str | None:
        """Display name of the category (``Pipes``, ``Rohre``)."""

    @property
    @abc.abstractmethod
    def type_id(self) -> Hashable | None:
        """Identity of the owning type, or ``None`` if the element is untyped."""

    @abc.abstractmethod
    def lookup_parameter(self, name: str) -> Parameter | None:
        """Instance-level parameter called *name*, if any."""

    @abc.abstractmethod
    def builtin_parameter(self, key: str) -> Parameter | None:
        """Host built-in parameter such as ``RBS_CALCULATED_SIZE``, if any."""


class ModelDocument(abc.ABC):
    """The host model holding elements and their owning types."""

    @property
    def title(self) -> str:
        return ""

    @property
    def length_to_meters(self) -> float:
        """Factor converting the model's length unit to meters."""
        return LENGTH_TO_METERS

    @abc.abstractmethod
    def type_parameters(self, type_id: Hashable) -> Iterable[Parameter]:
        """Every parameter exposed by the owning type *type_id*."""

    @abc.abstractmethod
    def get_element(self, element_id: Hashable) -> ModelElement | None:
        """Element by id, or ``None``."""

    @abc.abstractmethod
    def elements_of_category(self, category_key: str) -> Iterable[ModelElement]:
        """All non-type elements in *category_key*."""
