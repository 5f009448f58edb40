"""
Declarative field tables used by the generic property reader.

Entity dataclasses mark their bindable fields with :func:`bxl_field`. The
parser resolves a property name such as ``(PinLength 300)`` by looking it up in
the table returned by :func:`field_table`, which is built once per class.

Names are matched ignoring case and underscores, so the field ``pin_length``
binds ``PinLength``. Alternate spellings are listed as aliases and share the
canonical field's storage.

Example::

    @dataclass
    class InstLine:
        kind: ClassVar[str] = "line"
        end_point: Optional[Point] = bxl_field(FieldKind.POINT, default=None,
                                               aliases=("Point1", "Point2"))

    field_table(InstLine)["point2"].targets  # ("end_point",)
"""

from __future__ import annotations

import dataclasses
import functools
import re
from dataclasses import dataclass
from enum import Enum
from types import MappingProxyType
from typing import Any, Mapping, Optional

BINDING_KEY = "bxl"


class FieldKind(Enum):
    """How a property value is read from the token stream."""

    REAL = "real"
    INTEGER = "integer"
    BOOLEAN = "boolean"
    STRING = "string"
    POINT = "point"
    STRING_PAIR = "string_pair"
    INT_STRING_PAIR = "int_string_pair"
    ENUM = "enum"
    POINT_LIST = "point_list"
    NODE_LIST = "node_list"

    @property
    def is_collection(self) -> bool:
        """Collections accumulate repeated values and are exempt from duplicate checks."""
        return self in (FieldKind.POINT_LIST, FieldKind.NODE_LIST)


@dataclass(frozen=True)
class FieldSpec:
    """One entry of a field table.

    Attributes:
        kind: How the value is read
        name: Primary property name (defaults to the attribute name)
        targets: Attributes written by the binding; pairs may write two
        enum_type: Enum class for ENUM fields
        aliases: Alternate property names resolving to the same targets
    """

    kind: FieldKind
    name: str = ""
    targets: tuple[str, ...] = ()
    enum_type: Optional[type[Enum]] = None
    aliases: tuple[str, ...] = ()


def bxl_field(
    kind: FieldKind,
    *,
    default: Any = dataclasses.MISSING,
    default_factory: Any = dataclasses.MISSING,
    enum_type: Optional[type[Enum]] = None,
    aliases: tuple[str, ...] = (),
) -> Any:
    """Declare a dataclass field that the property reader can bind."""
    spec = FieldSpec(kind=kind, enum_type=enum_type, aliases=tuple(aliases))
    metadata = {BINDING_KEY: spec}
    if default_factory is not dataclasses.MISSING:
        return dataclasses.field(default_factory=default_factory, metadata=metadata)
    return dataclasses.field(default=default, metadata=metadata)


def pair_binding(
    name: str,
    targets: tuple[str, str],
    kind: FieldKind = FieldKind.STRING_PAIR,
    aliases: tuple[str, ...] = (),
) -> FieldSpec:
    """Declare a pair property that writes two existing attributes.

    Used in a class-level ``bxl_bindings`` tuple, e.g.
    ``pair_binding("Attr", ("name", "text"))`` for ``(Attr "Value", "10k")``.
    """
    return FieldSpec(kind=kind, name=name, targets=targets, aliases=tuple(aliases))


def normalize_name(name: str) -> str:
    """Normalize a property or attribute name for lookup."""
    return name.replace("_", "").lower()


@functools.cache
def field_table(cls: type) -> Mapping[str, FieldSpec]:
    """Build the read-only name -> FieldSpec table for an entity class."""
    table: dict[str, FieldSpec] = {}

    for f in dataclasses.fields(cls):
        spec = f.metadata.get(BINDING_KEY)
        if spec is None:
            continue
        spec = dataclasses.replace(spec, name=spec.name or f.name, targets=(f.name,))
        _register(table, spec)

    for spec in getattr(cls, "bxl_bindings", ()):
        _register(table, spec)

    return MappingProxyType(table)


def _register(table: dict[str, FieldSpec], spec: FieldSpec) -> None:
    for key in (spec.name, *spec.aliases):
        table[normalize_name(key)] = spec


def lookup_attribute(cls: type, attribute: str) -> Optional[FieldSpec]:
    """Find the spec whose canonical target is ``attribute``, ignoring aliases."""
    spec = field_table(cls).get(normalize_name(attribute))
    if spec is not None and spec.targets == (attribute,):
        return spec
    return None


_ENUM_SEPARATORS = re.compile(r"[-_\s]")


def normalize_enum_name(name: str) -> str:
    """Lowercase and drop hyphens, underscores and whitespace."""
    return _ENUM_SEPARATORS.sub("", name).lower()


def match_enum(enum_type: type[Enum], name: str) -> Optional[Enum]:
    """Find an enum member by name, ignoring case and separators.

    Aliases are considered, so ``Circle`` resolves to the member ``Round``
    shares its value with.
    """
    wanted = normalize_enum_name(name)
    for member_name, member in enum_type.__members__.items():
        if normalize_enum_name(member_name) == wanted:
            return member
    return None
