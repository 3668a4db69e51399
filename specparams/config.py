"""Global configuration: tolerances, parameter names, category tables."""

# Absolute tolerance when comparing floating-point parameter values
DOUBLE_TOLERANCE = 1e-6

# Window (mm) for matching a measured diameter against the nominal inch series
INCH_TOLERANCE = 0.6

# Host length unit -> meters (Revit stores lengths in decimal feet)
LENGTH_TO_METERS = 0.3048

# Quantities at or below one meter are reported as a single unit
MIN_QUANTITY = 1.0


class SpecParams:
    """Names of the shared SPEC_* parameters."""

    SYSTEM = "SPEC_SYSTEM"
    SIZE = "SPEC_SIZE"
    QUANTITY = "SPEC_QUANTITY"


# Built-in parameter keys an element accessor may resolve natively
BUILTIN_SYSTEM_NAME = "RBS_SYSTEM_NAME_PARAM"
BUILTIN_SYSTEM_CLASSIFICATION = "RBS_SYSTEM_CLASSIFICATION_PARAM"
BUILTIN_CALCULATED_SIZE = "RBS_CALCULATED_SIZE"
BUILTIN_CURVE_LENGTH = "CURVE_ELEM_LENGTH"

SYSTEM_ABBREVIATION = "System Abbreviation"
LENGTH = "Length"

# Candidate size sources, in lookup order
SIZE_SOURCE_NAMES = (
    "Size",
    "Diameter",
    "Width",
    "Height",
    "Tray Width",
    "Outside Diameter",
    "NW",
    "NominalDiameter",
)

# Revit built-in categories processed by a full run
REVIT_CATEGORIES = (
    "OST_PipeCurves",
    "OST_PipeFitting",
    "OST_PipeAccessory",
    "OST_PipeInsulations",
    "OST_FlexPipeCurves",
    "OST_PlumbingFixtures",
    "OST_DuctCurves",
    "OST_DuctFitting",
    "OST_DuctAccessory",
    "OST_DuctInsulations",
    "OST_FlexDuctCurves",
    "OST_MechanicalEquipment",
    "OST_CableTray",
    "OST_CableTrayFitting",
    "OST_Conduit",
    "OST_ConduitFitting",
    "OST_ElectricalEquipment",
    "OST_ElectricalFixtures",
    "OST_LightingFixtures",
)

# Revit categories that also receive SPEC_SIZE and SPEC_QUANTITY
REVIT_SIZE_QUANTITY_CATEGORIES = frozenset({
    "OST_DuctCurves",
    "OST_DuctInsulations",
    "OST_DuctFitting",
    "OST_CableTray",
    "OST_CableTrayFitting",
    "OST_Conduit",
    "OST_ConduitFitting",
    "OST_FlexDuctCurves",
    "OST_PipeCurves",
    "OST_PipeInsulations",
    "OST_FlexPipeCurves",
    "OST_PipeFitting",
    "OST_ElectricalEquipment",
})

# IFC equivalents of the tables above
IFC_CATEGORIES = (
    "IfcPipeSegment",
    "IfcPipeFitting",
    "IfcDuctSegment",
    "IfcDuctFitting",
    "IfcCableCarrierSegment",
    "IfcCableCarrierFitting",
    "IfcCableSegment",
    "IfcFlowTerminal",
    "IfcSanitaryTerminal",
    "IfcElectricDistributionBoard",
    "IfcLightFixture",
)

IFC_SIZE_QUANTITY_CATEGORIES = frozenset({
    "IfcPipeSegment",
    "IfcPipeFitting",
    "IfcDuctSegment",
    "IfcDuctFitting",
    "IfcCableCarrierSegment",
    "IfcCableCarrierFitting",
    "IfcCableSegment",
})

PROCESSED_CATEGORIES = REVIT_CATEGORIES + IFC_CATEGORIES
SIZE_QUANTITY_CATEGORIES = REVIT_SIZE_QUANTITY_CATEGORIES | IFC_SIZE_QUANTITY_CATEGORIES
