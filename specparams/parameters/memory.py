"""In-memory model accessor.

Plain Python objects implementing the accessor interfaces, for scripted
runs over data exported from a host application and for tests.
"""

from __future__ import annotations

from collections.abc import Hashable, Iterable
from typing import Any

from specparams.config import LENGTH_TO_METERS
from specparams.parameters.base import (
    ModelDocument,
    ModelElement,
    Parameter,
    ParameterAccessError,
    StorageKind,
)


def _coerce(kind: StorageKind, value: Any) -> str | float | int:
    """Convert *value* to the Python type backing *kind*."""
    if kind is StorageKind.TEXT:
        if not isinstance(value, str):
            raise ParameterAccessError(f"Text parameter cannot store {type(value).__name__}")
        return value
    if isinstance(value, str) or isinstance(value, bool):
        raise ParameterAccessError(f"{kind.value} parameter cannot store {value!r}")
    if kind is StorageKind.INTEGER:
        if isinstance(value, float) and not value.is_integer():
            raise ParameterAccessError(f"Integer parameter cannot store {value!r}")
        return int(value)
    return float(value)


class MemoryParameter(Parameter):
    """A parameter holding its value in memory.

    Parameters
    ----------
    name:
        Definition name.
    storage_kind:
        Storage kind; written values are coerced to it.
    value:
        Initial value, or ``None`` for an unset parameter.
    read_only:
        Reject every write.
    locked:
        Reject writes although the parameter is not read-only, as a host
        does for elements checked out by another user.
    display:
        Formatted display string returned by :meth:`as_value_string`.
    """

    def __init__(
        self,
        name: str,
        storage_kind: StorageKind | str = StorageKind.TEXT,
        value: str | float | int | None = None,
        *,
        read_only: bool = False,
        locked: bool = False,
        display: str | None = None,
    ) -> None:
        self._name = name
        self._kind = StorageKind(storage_kind)
        self._value = None if value is None else _coerce(self._kind, value)
        self.read_only = read_only
        self.locked = locked
        self.display = display
        self.write_count = 0

    def __repr__(self) -> str:
        return f"MemoryParameter({self._name!r}, {self._kind.value}, {self._value!r})"

    @property
    def name(self) -> str:
        return self._name

    @property
    def storage_kind(self) -> StorageKind:
        return self._kind

    @property
    def is_read_only(self) -> bool:
        return self.read_only

    @property
    def has_value(self) -> bool:
        return self._value is not None

    @property
    def value(self) -> str | float | int | None:
        return self._value

    def as_text(self) -> str | None:
        if self._kind is StorageKind.TEXT:
            return self._value  # type: ignore[return-value]
        return None

    def as_value_string(self) -> str | None:
        return self.display

    def as_number(self) -> float:
        if self._kind is StorageKind.TEXT:
            raise ParameterAccessError(f"{self._name} stores text")
        return float(self._value or 0)

    def as_integer(self) -> int:
        if self._kind is StorageKind.TEXT:
            raise ParameterAccessError(f"{self._name} stores text")
        return int(self._value or 0)

    def set(self, value: str | float | int) -> None:
        if self.read_only:
            raise ParameterAccessError(f"{self._name} is read-only")
        if self.locked:
            raise ParameterAccessError(f"{self._name} is locked")
        self._value = _coerce(self._kind, value)
        self.display = None
        self.write_count += 1


class MemoryElement(ModelElement):
    """An element with instance and built-in parameters held in memory."""

    def __init__(
        self,
        element_id: Hashable,
        *,
        category_key: str | None = None,
        category_name: str | None = None,
        type_id: Hashable | None = None,
        parameters: Iterable[MemoryParameter] = (),
        builtins: dict[str, MemoryParameter] | None = None,
    ) -> None:
        self._element_id = element_id
        self._category_key = category_key
        self._category_name = category_name
        self._type_id = type_id
        self.parameters: list[MemoryParameter] = list(parameters)
        self.builtins: dict[str, MemoryParameter] = dict(builtins or {})

    def __repr__(self) -> str:
        return f"MemoryElement({self._element_id!r}, {self._category_key!r})"

    @property
    def element_id(self) -> Hashable:
        return self._element_id

    @property
    def category_key(self) -> str | None:
        return self._category_key

    @property
    def category_name(self) -> str | None:
        return self._category_name

    @property
    def type_id(self) -> Hashable | None:
        return self._type_id

    def lookup_parameter(self, name: str) -> MemoryParameter | None:
        for param in self.parameters:
            if param.name == name:
                return param
        return None

    def builtin_parameter(self, key: str) -> MemoryParameter | None:
        return self.builtins.get(key)

    def add_parameter(self, param: MemoryParameter) -> MemoryParameter:
        self.parameters.append(param)
        return param


class MemoryDocument(ModelDocument):
    """A document of :class:`MemoryElement` objects and type parameter lists."""

    def __init__(
        self,
        title: str = "",
        length_to_meters: float = LENGTH_TO_METERS,
    ) -> None:
        self._title = title
        self._length_to_meters = length_to_meters
        self._elements: dict[Hashable, MemoryElement] = {}
        self._types: dict[Hashable, list[MemoryParameter]] = {}

    @property
    def title(self) -> str:
        return self._title

    @property
    def length_to_meters(self) -> float:
        return self._length_to_meters

    def add_type(
        self,
        type_id: Hashable,
        parameters: Iterable[MemoryParameter] = (),
    ) -> list[MemoryParameter]:
        """Register an owning type and its parameters."""
        params = self._types.setdefault(type_id, [])
        params.extend(parameters)
        return params

    def add_element(self, element: MemoryElement) -> MemoryElement:
        self._elements[element.element_id] = element
        return element

    def elements(self) -> list[MemoryElement]:
        return list(self._elements.values())

    def type_parameters(self, type_id: Hashable) -> list[MemoryParameter]:
        try:
            return list(self._types[type_id])
        except KeyError:
            raise ParameterAccessError(f"Unknown type {type_id!r}") from None

    def get_element(self, element_id: Hashable) -> MemoryElement | None:
        return self._elements.get(element_id)

    def elements_of_category(self, category_key: str) -> list[MemoryElement]:
        return [e for e in self._elements.values() if e.category_key == category_key]
