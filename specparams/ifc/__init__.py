"""IFC model access — requires ifcopenshell."""

from specparams.ifc.document import IfcDocument, IfcElement, IfcParameter

__all__ = ["IfcDocument", "IfcElement", "IfcParameter"]
