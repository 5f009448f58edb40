"""
Library entities: layers, text styles, pad stacks, patterns, symbols and components.

Library items (the contents of a pattern or symbol ``Data`` block) are plain
dataclasses tagged with a ``kind`` class attribute; :data:`LibItem` is the
union of all variants. Fields declared with :func:`bxl_field` can be set by the
generic property reader.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import ClassVar, Optional, Union

from .binding import FieldKind, bxl_field, pair_binding
from .common import LayerType, PadShapeKind, PinType, Point, TextJustification

F = FieldKind


@dataclass
class Layer:
    """A layer definition from the ``LayerData`` section."""

    id: int
    name: str = ""
    layer_type: Optional[LayerType] = None
    board_layer_type: Optional[str] = None
    layer_order: int = 0


@dataclass
class TextStyle:
    """A named font style referenced by text items."""

    name: str
    font_width: float = bxl_field(F.REAL, default=0.0)
    font_height: float = bxl_field(F.REAL, default=0.0)
    font_char_width: Optional[float] = bxl_field(F.REAL, default=None)
    font_family: Optional[str] = bxl_field(F.STRING, default=None)
    font_face: Optional[str] = bxl_field(F.STRING, default=None)


@dataclass
class PadShape:
    """Copper shape of a pad stack on one layer."""

    kind: PadShapeKind = PadShapeKind.ROUND
    width: float = bxl_field(F.REAL, default=0.0)
    height: float = bxl_field(F.REAL, default=0.0)
    pad_type: int = bxl_field(F.INTEGER, default=0)
    layer: Optional[str] = bxl_field(F.STRING, default=None)


@dataclass
class PadStack:
    """A named pad style with its per-layer shapes."""

    name: str
    hole_diam: float = bxl_field(F.REAL, default=0.0)
    surface: bool = bxl_field(F.BOOLEAN, default=False)
    plated: bool = bxl_field(F.BOOLEAN, default=False)
    no_paste: bool = bxl_field(F.BOOLEAN, default=False)
    start_range: int = bxl_field(F.INTEGER, default=0)
    end_range: int = bxl_field(F.INTEGER, default=0)
    is_via: bool = bxl_field(F.BOOLEAN, default=False)
    shapes: list[PadShape] = field(default_factory=list)


# Library item variants


@dataclass
class LibText:
    """Free text in a pattern or symbol."""

    kind: ClassVar[str] = "text"

    layer: Optional[str] = bxl_field(F.STRING, default=None)
    origin: Optional[Point] = bxl_field(F.POINT, default=None)
    is_visible: bool = bxl_field(F.BOOLEAN, default=False)
    text: Optional[str] = bxl_field(F.STRING, default=None)
    rotate: float = bxl_field(F.REAL, default=0.0)
    is_flipped: bool = bxl_field(F.BOOLEAN, default=False)
    justify: TextJustification = bxl_field(
        F.ENUM, default=TextJustification.CENTER, enum_type=TextJustification
    )
    text_style: Optional[str] = bxl_field(F.STRING, default=None, aliases=("TextStyleRef",))


@dataclass
class PinLabel(LibText):
    """Designator or name label drawn next to a symbol pin."""

    kind: ClassVar[str] = "pin_label"


@dataclass
class LibAttribute(LibText):
    """A named attribute, e.g. ``RefDes`` or ``Value``."""

    kind: ClassVar[str] = "attribute"
    bxl_bindings: ClassVar[tuple] = (pair_binding("Attr", ("name", "text")),)

    number: int = bxl_field(F.INTEGER, default=0)
    name: Optional[str] = bxl_field(F.STRING, default=None)


@dataclass
class LibPin:
    """A symbol pin with its designator and name labels."""

    kind: ClassVar[str] = "pin"

    layer: Optional[str] = bxl_field(F.STRING, default=None)
    origin: Optional[Point] = bxl_field(F.POINT, default=None)
    pin_num: int = bxl_field(F.INTEGER, default=0)
    pin_length: float = bxl_field(F.REAL, default=0.0)
    is_flipped: bool = bxl_field(F.BOOLEAN, default=False)
    is_visible: bool = bxl_field(F.BOOLEAN, default=False)
    rotate: float = bxl_field(F.REAL, default=0.0)
    width: float = bxl_field(F.REAL, default=0.0)
    pin_type: PinType = bxl_field(F.ENUM, default=PinType.NONE, enum_type=PinType)
    designator: PinLabel = field(default_factory=PinLabel)
    name: PinLabel = field(default_factory=PinLabel)


@dataclass
class LibPad:
    """A footprint pad placed from a pad stack."""

    kind: ClassVar[str] = "pad"

    layer: Optional[str] = bxl_field(F.STRING, default=None)
    origin: Optional[Point] = bxl_field(F.POINT, default=None)
    number: int = bxl_field(F.INTEGER, default=0)
    pin_name: Optional[str] = bxl_field(F.STRING, default=None)
    pad_style: Optional[str] = bxl_field(F.STRING, default=None)
    original_pad_style: Optional[str] = bxl_field(F.STRING, default=None)
    mechanical: bool = bxl_field(F.BOOLEAN, default=False)
    original_pin_number: int = bxl_field(F.INTEGER, default=0)
    rotate: float = bxl_field(F.REAL, default=0.0)


@dataclass
class LibDeletedPad(LibPad):
    kind: ClassVar[str] = "deleted_pad"


@dataclass
class LibPoly:
    """A filled polygon."""

    kind: ClassVar[str] = "poly"

    layer: Optional[str] = bxl_field(F.STRING, default=None)
    origin: Optional[Point] = bxl_field(F.POINT, default=None)
    property: Optional[str] = bxl_field(F.STRING, default=None)
    width: float = bxl_field(F.REAL, default=0.0)
    points: list[Point] = bxl_field(F.POINT_LIST, default_factory=list)


@dataclass
class LibKeepoutPoly(LibPoly):
    kind: ClassVar[str] = "keepout_poly"


@dataclass
class LibLine:
    kind: ClassVar[str] = "line"

    layer: Optional[str] = bxl_field(F.STRING, default=None)
    origin: Optional[Point] = bxl_field(F.POINT, default=None)
    end_point: Optional[Point] = bxl_field(F.POINT, default=None)
    width: float = bxl_field(F.REAL, default=0.0)


@dataclass
class LibArc:
    kind: ClassVar[str] = "arc"

    layer: Optional[str] = bxl_field(F.STRING, default=None)
    origin: Optional[Point] = bxl_field(F.POINT, default=None)
    radius: float = bxl_field(F.REAL, default=0.0)
    start_angle: float = bxl_field(F.REAL, default=0.0)
    sweep_angle: float = bxl_field(F.REAL, default=0.0)
    width: float = bxl_field(F.REAL, default=0.0)


@dataclass
class LibWizard:
    """A generator variable stored with the part, e.g. ``(VarName "D")``."""

    kind: ClassVar[str] = "wizard"

    origin: Optional[Point] = bxl_field(F.POINT, default=None)
    var_name: Optional[str] = bxl_field(F.STRING, default=None)
    var_data: Optional[str] = bxl_field(F.STRING, default=None)


@dataclass
class LibTemplateData:
    kind: ClassVar[str] = "template_data"

    origin: Optional[Point] = bxl_field(F.POINT, default=None)
    name: Optional[str] = bxl_field(F.STRING, default=None)
    data: Optional[str] = bxl_field(F.STRING, default=None)


LibItem = Union[
    LibPin,
    LibPad,
    LibDeletedPad,
    LibPoly,
    LibKeepoutPoly,
    LibLine,
    LibArc,
    LibText,
    LibAttribute,
    LibWizard,
    LibTemplateData,
]


def _find_attribute(data: list, name: str) -> Optional[LibAttribute]:
    wanted = name.lower()
    for item in data:
        if isinstance(item, LibAttribute) and item.name is not None and item.name.lower() == wanted:
            return item
    return None


@dataclass
class Pattern:
    """A footprint (land pattern)."""

    name: str
    origin_point: Optional[Point] = None
    pick_point: Optional[Point] = None
    glue_point: Optional[Point] = None
    pins_renamed: bool = False
    data: list[LibItem] = field(default_factory=list)

    def get_attribute(self, name: str) -> Optional[LibAttribute]:
        """Get an attribute item by name (case-insensitive)."""
        return _find_attribute(self.data, name)


@dataclass
class Symbol:
    """A schematic library symbol."""

    name: str
    origin_point: Optional[Point] = None
    original_name: Optional[str] = None
    edited: bool = False
    data: list[LibItem] = field(default_factory=list)

    def get_attribute(self, name: str) -> Optional[LibAttribute]:
        """Get an attribute item by name (case-insensitive)."""
        return _find_attribute(self.data, name)


@dataclass
class CompPin:
    """A component pin and the symbol pin it maps to."""

    pin_number: str
    name: str
    part_num: int = bxl_field(F.INTEGER, default=0)
    sym_pin_num: int = bxl_field(F.INTEGER, default=0)
    gate_eq: int = bxl_field(F.INTEGER, default=0)
    pin_eq: int = bxl_field(F.INTEGER, default=0)
    pin_type: PinType = bxl_field(F.ENUM, default=PinType.NONE, enum_type=PinType)
    side: Optional[str] = bxl_field(F.STRING, default=None)
    group: int = bxl_field(F.INTEGER, default=0)
    inner_graphic: Optional[str] = bxl_field(F.STRING, default=None)
    outer_graphic: Optional[str] = bxl_field(F.STRING, default=None)


@dataclass
class RelatedFile:
    file_name: Optional[str] = bxl_field(F.STRING, default=None)
    file_type: Optional[str] = bxl_field(F.STRING, default=None)
    path: Optional[str] = bxl_field(F.STRING, default=None)


@dataclass
class AttachedSymbol:
    """Symbol used for one part (gate) of a component."""

    part_num: int = bxl_field(F.INTEGER, default=0)
    alt_type: Optional[str] = bxl_field(F.STRING, default=None)
    symbol_name: Optional[str] = bxl_field(F.STRING, default=None)


@dataclass
class PadNum:
    """Pin map entry tying a pad number to a component pin."""

    number: int
    comp_pin_ref: Optional[str] = bxl_field(F.STRING, default=None)


@dataclass
class Component:
    """A library part tying a pattern, its symbols and the pin mapping together."""

    name: str
    pattern_name: Optional[str] = None
    alternate_patterns: list[str] = field(default_factory=list)
    original_name: Optional[str] = None
    source_library: Optional[str] = None
    ref_des_prefix: Optional[str] = None
    composition: Optional[str] = None
    alt_ieee: bool = False
    alt_demorgan: bool = False
    revision_level: Optional[str] = None
    revision_note: Optional[str] = None
    pins: list[CompPin] = field(default_factory=list)
    data: list[LibItem] = field(default_factory=list)
    related_files: list[RelatedFile] = field(default_factory=list)
    attached_symbols: list[AttachedSymbol] = field(default_factory=list)
    pin_map: list[PadNum] = field(default_factory=list)

    @property
    def number_of_pins(self) -> int:
        return len(self.pins)

    @property
    def num_parts(self) -> int:
        """Highest part index used by any pin or attached symbol, 0 if there are none."""
        return max(
            [p.part_num for p in self.pins] + [s.part_num for s in self.attached_symbols],
            default=0,
        )

    def get_attribute(self, name: str) -> Optional[LibAttribute]:
        """Get an attribute item by name (case-insensitive)."""
        return _find_attribute(self.data, name)
