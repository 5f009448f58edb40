"""
BXL document model.

A document holds the part library data found in most BXL files (footprints,
symbols, components and the layers, text styles and pad stacks they use) and,
for full design exports, board and schematic instance data.

Example::

    from bxl_tools import read_file

    doc, logs = read_file("LM358.bxl")
    footprint = doc.get_footprint("SOIC8")
    for component in doc.components:
        print(component.name, component.num_parts)
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field, fields
from typing import Optional, TypeVar

from .instance import ComponentInstance, LayerNumber, NetInstance, Region, SchematicData, Sheet
from .instance import ViaInstance
from .library import Component, Layer, PadStack, Pattern, Symbol, TextStyle

T = TypeVar("T")


def _by_name(items: Sequence[T], name: str) -> Optional[T]:
    wanted = name.lower()
    for item in items:
        item_name = getattr(item, "name", None)
        if item_name is not None and item_name.lower() == wanted:
            return item
    return None


@dataclass(frozen=True)
class BxlDocument:
    """Typed collections parsed from one BXL file.

    The document is read-only once built: every collection is stored as a tuple,
    whatever sequence it was created from.
    """

    # Library contents
    layer_data: tuple[Layer, ...] = ()
    text_styles: tuple[TextStyle, ...] = ()
    pad_styles: tuple[PadStack, ...] = ()
    footprints: tuple[Pattern, ...] = ()
    symbols: tuple[Symbol, ...] = ()
    components: tuple[Component, ...] = ()
    workspace_size: Region = field(default_factory=Region)
    schematic_data: SchematicData = field(default_factory=SchematicData)

    # Board and schematic instance contents
    component_instances: tuple[ComponentInstance, ...] = ()
    via_instances: tuple[ViaInstance, ...] = ()
    nets: tuple[NetInstance, ...] = ()
    schematic_component_instances: tuple[ComponentInstance, ...] = ()
    schematic_nets: tuple[NetInstance, ...] = ()
    schematic_sheets: tuple[Sheet, ...] = ()
    layers: tuple[LayerNumber, ...] = ()

    def __post_init__(self) -> None:
        for f in fields(self):
            value = getattr(self, f.name)
            if isinstance(value, list):
                object.__setattr__(self, f.name, tuple(value))

    def get_text_style(self, name: str) -> Optional[TextStyle]:
        """Get a text style by name (case-insensitive)."""
        return _by_name(self.text_styles, name)

    def get_pad_style(self, name: str) -> Optional[PadStack]:
        """Get a pad stack by name (case-insensitive)."""
        return _by_name(self.pad_styles, name)

    def get_footprint(self, name: str) -> Optional[Pattern]:
        """Get a footprint pattern by name (case-insensitive)."""
        return _by_name(self.footprints, name)

    def get_symbol(self, name: str) -> Optional[Symbol]:
        """Get a library symbol by name (case-insensitive)."""
        return _by_name(self.symbols, name)

    def get_component(self, name: str) -> Optional[Component]:
        """Get a component by name (case-insensitive)."""
        return _by_name(self.components, name)

    @property
    def is_empty(self) -> bool:
        return not any(self.counts().values())

    def counts(self) -> dict[str, int]:
        """Number of entries in each collection."""
        return {
            "layer_data": len(self.layer_data),
            "text_styles": len(self.text_styles),
            "pad_styles": len(self.pad_styles),
            "footprints": len(self.footprints),
            "symbols": len(self.symbols),
            "components": len(self.components),
            "component_instances": len(self.component_instances),
            "via_instances": len(self.via_instances),
            "nets": len(self.nets),
            "schematic_component_instances": len(self.schematic_component_instances),
            "schematic_nets": len(self.schematic_nets),
            "schematic_sheets": len(self.schematic_sheets),
            "layers": len(self.layers),
        }
