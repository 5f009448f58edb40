"""
Board and schematic instance entities.

These come from full design exports rather than part libraries: placed
components, vias, nets, schematic sheets and per-layer geometry.
:data:`InstItem` is the union of the drawable item variants found in sheet
and layer ``Data`` blocks.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import ClassVar, Optional, Union

from .binding import FieldKind, bxl_field, pair_binding
from .common import LayerType, NetNode, Point, TextJustification

F = FieldKind


@dataclass
class Region:
    """A rectangle given by its corners."""

    lower_left: Optional[Point] = bxl_field(F.POINT, default=None, aliases=("LL",))
    upper_right: Optional[Point] = bxl_field(F.POINT, default=None, aliases=("UR",))


@dataclass
class Workspace(Region):
    grid: float = bxl_field(F.REAL, default=0.0)


@dataclass
class SchematicData:
    """Schematic-wide settings from the ``SchematicData`` section."""

    units: str = "mil"
    workspace: Workspace = field(default_factory=Workspace)
    attributes: list[tuple[str, str]] = field(default_factory=list)
    sheets: list[tuple[int, str]] = field(default_factory=list)


# Instance item variants


@dataclass
class InstWire:
    kind: ClassVar[str] = "wire"

    layer: Optional[str] = bxl_field(F.STRING, default=None)
    origin: Optional[Point] = bxl_field(F.POINT, default=None)
    end_point: Optional[Point] = bxl_field(F.POINT, default=None)
    width: float = bxl_field(F.REAL, default=0.0)
    net: Optional[str] = bxl_field(F.STRING, default=None, aliases=("NetName",))


@dataclass
class InstPort:
    """An off-sheet or power port symbol on a schematic sheet."""

    kind: ClassVar[str] = "port"

    layer: Optional[str] = bxl_field(F.STRING, default=None)
    origin: Optional[Point] = bxl_field(F.POINT, default=None)
    port_type: Optional[str] = bxl_field(F.STRING, default=None)
    rotate: float = bxl_field(F.REAL, default=0.0, aliases=("Rotated",))
    is_flipped: bool = bxl_field(F.BOOLEAN, default=False, aliases=("Flipped",))
    net: Optional[str] = bxl_field(F.STRING, default=None, aliases=("NetName",))


@dataclass
class InstJunction:
    kind: ClassVar[str] = "junction"

    layer: Optional[str] = bxl_field(F.STRING, default=None)
    origin: Optional[Point] = bxl_field(F.POINT, default=None)
    net: Optional[str] = bxl_field(F.STRING, default=None, aliases=("NetName",))


@dataclass
class InstLine:
    kind: ClassVar[str] = "line"

    layer: Optional[str] = bxl_field(F.STRING, default=None)
    origin: Optional[Point] = bxl_field(F.POINT, default=None)
    point1: Optional[Point] = bxl_field(F.POINT, default=None, aliases=("Point2",))
    width: float = bxl_field(F.REAL, default=0.0)


@dataclass
class InstArc:
    kind: ClassVar[str] = "arc"

    layer: Optional[str] = bxl_field(F.STRING, default=None)
    origin: Optional[Point] = bxl_field(F.POINT, default=None)
    radius: float = bxl_field(F.REAL, default=0.0)
    start_angle: float = bxl_field(F.REAL, default=0.0)
    sweep_angle: float = bxl_field(F.REAL, default=0.0)
    width: float = bxl_field(F.REAL, default=0.0)


@dataclass
class InstPoly:
    kind: ClassVar[str] = "poly"

    layer: Optional[str] = bxl_field(F.STRING, default=None)
    origin: Optional[Point] = bxl_field(F.POINT, default=None)
    width: float = bxl_field(F.REAL, default=0.0)
    points: list[Point] = bxl_field(F.POINT_LIST, default_factory=list, aliases=("PPoint",))


@dataclass
class InstCopperpour(InstPoly):
    """A poured copper area with its thermal relief settings."""

    kind: ClassVar[str] = "copperpour"

    pour_type: Optional[str] = bxl_field(F.STRING, default=None)
    pour_spacing: float = bxl_field(F.REAL, default=0.0)
    use_design_rules: bool = bxl_field(F.BOOLEAN, default=False)
    thermal_type: Optional[str] = bxl_field(F.STRING, default=None)
    thermal_width: float = bxl_field(F.REAL, default=0.0)
    thermal_spokes: int = bxl_field(F.INTEGER, default=0)


@dataclass
class InstText:
    kind: ClassVar[str] = "text"

    layer: Optional[str] = bxl_field(F.STRING, default=None)
    origin: Optional[Point] = bxl_field(F.POINT, default=None)
    is_visible: bool = bxl_field(F.BOOLEAN, default=False, aliases=("Visible",))
    text: Optional[str] = bxl_field(F.STRING, default=None)
    rotate: float = bxl_field(F.REAL, default=0.0, aliases=("Rotated",))
    is_flipped: bool = bxl_field(F.BOOLEAN, default=False, aliases=("Flipped",))
    justify: TextJustification = bxl_field(
        F.ENUM, default=TextJustification.CENTER, enum_type=TextJustification
    )
    text_style: Optional[str] = bxl_field(F.STRING, default=None, aliases=("TextStyleRef",))


@dataclass
class InstAttribute(InstText):
    """An attribute of a placed component or symbol."""

    kind: ClassVar[str] = "attribute"
    bxl_bindings: ClassVar[tuple] = (
        pair_binding("Attribute", ("name", "text")),
        pair_binding("AttrName", ("name", "text")),
    )

    name: Optional[str] = bxl_field(F.STRING, default=None)
    ref_des: Optional[str] = bxl_field(F.STRING, default=None)
    gate_number: int = bxl_field(F.INTEGER, default=0)


@dataclass
class InstSymbol:
    """A placed symbol (one gate of a component) on a sheet."""

    kind: ClassVar[str] = "symbol"

    layer: Optional[str] = bxl_field(F.STRING, default=None)
    origin: Optional[Point] = bxl_field(F.POINT, default=None)
    rotate: float = bxl_field(F.REAL, default=0.0, aliases=("Rotated",))
    symbol_name: Optional[str] = bxl_field(F.STRING, default=None)
    ref_des: Optional[str] = bxl_field(F.STRING, default=None)
    gate_number: int = bxl_field(F.INTEGER, default=0)
    is_flipped: bool = bxl_field(F.BOOLEAN, default=False, aliases=("Flipped",))


InstItem = Union[
    InstWire,
    InstPort,
    InstJunction,
    InstLine,
    InstArc,
    InstPoly,
    InstCopperpour,
    InstText,
    InstSymbol,
    InstAttribute,
]


@dataclass
class Sheet:
    """One schematic page."""

    id: int = 0
    name: Optional[str] = None
    number: int = 0
    show_border: bool = False
    border_name: Optional[str] = None
    scale_factor: float = 0.0
    offset: Optional[Point] = None
    data: list[InstItem] = field(default_factory=list)


@dataclass
class LayerNumber:
    """Geometry drawn on one board layer."""

    id: int
    layer_name: Optional[str] = bxl_field(F.STRING, default=None)
    layer_num: int = bxl_field(F.INTEGER, default=0)
    layer_type: Optional[LayerType] = bxl_field(F.ENUM, default=None, enum_type=LayerType)
    order_number: int = bxl_field(F.INTEGER, default=0)
    data: list[InstItem] = field(default_factory=list)


@dataclass
class ComponentInstance:
    """A placed component on the board or a schematic."""

    designator: str
    comp_name: Optional[str] = bxl_field(F.STRING, default=None)
    point: Optional[Point] = bxl_field(F.POINT, default=None)
    rotate: float = bxl_field(F.REAL, default=0.0)
    pattern_ref: Optional[str] = bxl_field(F.STRING, default=None)
    attributes: list[InstAttribute] = field(default_factory=list)


@dataclass
class ViaInstance:
    kind: ClassVar[str] = "via"

    origin: Optional[Point] = bxl_field(F.POINT, default=None)
    via_style: Optional[str] = bxl_field(F.STRING, default=None)
    net: Optional[str] = bxl_field(F.STRING, default=None, aliases=("NetName",))


@dataclass
class NetInstance:
    """A net and the ``designator/pin`` nodes it connects."""

    name: str
    number: int = bxl_field(F.INTEGER, default=0)
    nodes: list[NetNode] = bxl_field(F.NODE_LIST, default_factory=list, aliases=("Node",))
