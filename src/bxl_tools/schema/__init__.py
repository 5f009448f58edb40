"""
Data models for BXL documents.

Modules:
    common: Point, net nodes and enumerations
    binding: Declarative field tables for the property reader
    library: Layers, text styles, pad stacks, patterns, symbols, components
    instance: Board and schematic instance data
    document: BxlDocument aggregate
"""

from .binding import FieldKind, FieldSpec, bxl_field, field_table, match_enum
from .common import LayerType, NetNode, PadShapeKind, PinType, Point, TextJustification
from .document import BxlDocument
from .instance import (
    ComponentInstance,
    InstArc,
    InstAttribute,
    InstCopperpour,
    InstItem,
    InstJunction,
    InstLine,
    InstPoly,
    InstPort,
    InstSymbol,
    InstText,
    InstWire,
    LayerNumber,
    NetInstance,
    Region,
    SchematicData,
    Sheet,
    ViaInstance,
    Workspace,
)
from .library import (
    AttachedSymbol,
    Component,
    CompPin,
    Layer,
    LibArc,
    LibAttribute,
    LibDeletedPad,
    LibItem,
    LibKeepoutPoly,
    LibLine,
    LibPad,
    LibPin,
    LibPoly,
    LibTemplateData,
    LibText,
    LibWizard,
    PadNum,
    PadShape,
    PadStack,
    Pattern,
    PinLabel,
    RelatedFile,
    Symbol,
    TextStyle,
)

__all__ = [
    # Binding
    "FieldKind",
    "FieldSpec",
    "bxl_field",
    "field_table",
    "match_enum",
    # Common
    "LayerType",
    "NetNode",
    "PadShapeKind",
    "PinType",
    "Point",
    "TextJustification",
    # Document
    "BxlDocument",
    # Library
    "AttachedSymbol",
    "Component",
    "CompPin",
    "Layer",
    "LibArc",
    "LibAttribute",
    "LibDeletedPad",
    "LibItem",
    "LibKeepoutPoly",
    "LibLine",
    "LibPad",
    "LibPin",
    "LibPoly",
    "LibTemplateData",
    "LibText",
    "LibWizard",
    "PadNum",
    "PadShape",
    "PadStack",
    "Pattern",
    "PinLabel",
    "RelatedFile",
    "Symbol",
    "TextStyle",
    # Instance
    "ComponentInstance",
    "InstArc",
    "InstAttribute",
    "InstCopperpour",
    "InstItem",
    "InstJunction",
    "InstLine",
    "InstPoly",
    "InstPort",
    "InstSymbol",
    "InstText",
    "InstWire",
    "LayerNumber",
    "NetInstance",
    "Region",
    "SchematicData",
    "Sheet",
    "ViaInstance",
    "Workspace",
]
