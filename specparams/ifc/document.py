"""IFC-backed model accessor.

Elements are ``IfcElement`` occurrences.  Instance parameters are the
properties of an occurrence's own property sets; type parameters are the
properties of its ``IfcTypeObject``.  Quantity sets are exposed read-only.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

import ifcopenshell
import ifcopenshell.api
import ifcopenshell.util.element
import ifcopenshell.util.unit

from specparams.parameters.base import (
    ModelDocument,
    ModelElement,
    Parameter,
    ParameterAccessError,
    StorageKind,
)

logger = logging.getLogger(__name__)


def _storage_kind(value: Any) -> StorageKind:
    if isinstance(value, bool):
        return StorageKind.INTEGER
    if isinstance(value, int):
        return StorageKind.INTEGER
    if isinstance(value, float):
        return StorageKind.NUMBER
    return StorageKind.TEXT


class IfcParameter(Parameter):
    """A single property of an IFC property or quantity set."""

    def __init__(
        self,
        ifc_file: ifcopenshell.file,
        pset_id: int,
        name: str,
        value: Any,
        *,
        read_only: bool = False,
    ) -> None:
        self._file = ifc_file
        self._pset_id = pset_id
        self._name = name
        self._value = value
        self._kind = _storage_kind(value)
        # Booleans have no numeric write path
        self._read_only = read_only or isinstance(value, bool)

    def __repr__(self) -> str:
        return f"IfcParameter({self._name!r}, #{self._pset_id}, {self._value!r})"

    @property
    def name(self) -> str:
        return self._name

    @property
    def storage_kind(self) -> StorageKind:
        return self._kind

    @property
    def is_read_only(self) -> bool:
        return self._read_only

    @property
    def has_value(self) -> bool:
        return self._value is not None

    def as_text(self) -> str | None:
        if self._kind is StorageKind.TEXT and self._value is not None:
            return str(self._value)
        return None

    def as_value_string(self) -> str | None:
        return None

    def as_number(self) -> float:
        if self._kind is StorageKind.TEXT:
            raise ParameterAccessError(f"{self._name} stores text")
        return float(self._value or 0)

    def as_integer(self) -> int:
        if self._kind is StorageKind.TEXT:
            raise ParameterAccessError(f"{self._name} stores text")
        return int(self._value or 0)

    def set(self, value: str | float | int) -> None:
        if self._read_only:
            raise ParameterAccessError(f"{self._name} is read-only")
        if self._kind is StorageKind.TEXT:
            if not isinstance(value, str):
                raise ParameterAccessError(f"{self._name} stores text")
        elif isinstance(value, str):
            raise ParameterAccessError(f"{self._name} stores numbers")
        elif self._kind is StorageKind.NUMBER:
            value = float(value)
        else:
            value = int(value)

        try:
            pset = self._file.by_id(self._pset_id)
            ifcopenshell.api.run(
                "pset.edit_pset",
                self._file,
                pset=pset,
                properties={self._name: value},
            )
        except Exception as exc:
            raise ParameterAccessError(f"Could not write {self._name}: {exc}") from exc
        self._value = value


def _collect_parameters(
    ifc_file: ifcopenshell.file,
    entity: ifcopenshell.entity_instance,
    should_inherit: bool,
) -> list[IfcParameter]:
    """Flatten the property and quantity sets of *entity*."""
    params: list[IfcParameter] = []
    groups = (
        (False, ifcopenshell.util.element.get_psets(
            entity, psets_only=True, should_inherit=should_inherit)),
        (True, ifcopenshell.util.element.get_psets(
            entity, qtos_only=True, should_inherit=should_inherit)),
    )
    for read_only, sets in groups:
        for props in sets.values():
            pset_id = props.get("id")
            for key, value in props.items():
                if key == "id" or isinstance(value, ifcopenshell.entity_instance):
                    continue
                params.append(
                    IfcParameter(ifc_file, pset_id, key, value, read_only=read_only)
                )
    return params


class IfcElement(ModelElement):
    """An ``IfcElement`` occurrence."""

    def __init__(self, entity: ifcopenshell.entity_instance, ifc_file: ifcopenshell.file) -> None:
        self._entity = entity
        self._file = ifc_file
        self._parameters: list[IfcParameter] | None = None

    def __repr__(self) -> str:
        return f"IfcElement({self._entity.GlobalId!r}, {self._entity.is_a()!r})"

    @property
    def entity(self) -> ifcopenshell.entity_instance:
        return self._entity

    @property
    def element_id(self) -> str:
        return self._entity.GlobalId

    @property
    def category_key(self) -> str:
        return self._entity.is_a()

    @property
    def category_name(self) -> str:
        return self._entity.is_a()

    @property
    def type_id(self) -> int | None:
        type_entity = ifcopenshell.util.element.get_type(self._entity)
        if type_entity is None:
            return None
        return type_entity.id()

    def lookup_parameter(self, name: str) -> IfcParameter | None:
        if self._parameters is None:
            self._parameters = _collect_parameters(self._file, self._entity, should_inherit=False)
        for param in self._parameters:
            if param.name == name:
                return param
        return None

    def builtin_parameter(self, key: str) -> Parameter | None:
        # IFC has no host built-ins; sources resolve by property name
        return None


class IfcDocument(ModelDocument):
    """Accessor over an open ``ifcopenshell.file``."""

    def __init__(self, ifc_file: ifcopenshell.file) -> None:
        self._file = ifc_file

    @classmethod
    def open(cls, ifc_path: str | Path) -> IfcDocument:
        logger.info("Opening %s", ifc_path)
        return cls(ifcopenshell.open(str(ifc_path)))

    @property
    def file(self) -> ifcopenshell.file:
        return self._file

    @property
    def title(self) -> str:
        projects = self._file.by_type("IfcProject")
        if projects and projects[0].Name:
            return projects[0].Name
        return ""

    @property
    def length_to_meters(self) -> float:
        """Scale of the project length unit to meters (1.0 without units)."""
        return ifcopenshell.util.unit.calculate_unit_scale(self._file)

    def type_parameters(self, type_id: int) -> list[IfcParameter]:
        try:
            type_entity = self._file.by_id(type_id)
        except Exception as exc:
            raise ParameterAccessError(f"Unknown type #{type_id}") from exc
        return _collect_parameters(self._file, type_entity, should_inherit=False)

    def get_element(self, element_id: str) -> IfcElement | None:
        try:
            entity = self._file.by_guid(element_id)
        except Exception:
            return None
        return IfcElement(entity, self._file)

    def elements_of_category(self, category_key: str) -> list[IfcElement]:
        try:
            entities = self._file.by_type(category_key)
        except Exception:
            logger.debug("%s is not in schema %s", category_key, self._file.schema)
            return []
        return [IfcElement(e, self._file) for e in entities]
