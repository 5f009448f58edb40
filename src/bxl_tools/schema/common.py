"""Shared value types and enumerations for BXL entities."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import NamedTuple

POINT_TOLERANCE = 1e-8


@dataclass(frozen=True, eq=False)
class Point:
    """A coordinate pair in file units.

    Equality is approximate, so points are not hashable.
    """

    x: float = 0.0
    y: float = 0.0

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Point):
            return NotImplemented
        return abs(self.x - other.x) < POINT_TOLERANCE and abs(self.y - other.y) < POINT_TOLERANCE

    __hash__ = None  # type: ignore[assignment]

    def __str__(self) -> str:
        return f"X:{self.x} Y:{self.y}"


class NetNode(NamedTuple):
    """One ``designator/pin`` reference of a net."""

    designator: str
    pin: str

    def __str__(self) -> str:
        return f"{self.designator}/{self.pin}"


class LayerType(Enum):
    """Electrical role of a board layer."""

    NON_SIGNAL = 0
    SIGNAL = 1
    PLANE = 2


class PinType(Enum):
    """Electrical type of a symbol or component pin."""

    NONE = 0
    INPUT = 1
    OUTPUT = 2
    BI_DIRECTIONAL = 3
    TRISTATE = 4
    OPEN_COLLECTOR = 5
    OPEN_EMITTER = 6
    POWER = 7
    GROUND = 8
    ANALOG = 9
    BEHAVIOUR = 10
    ANY = 11
    DIGITAL = 12
    NO_CONNECT = 13
    PASSIVE = 14


class PadShapeKind(Enum):
    """Copper shape of a pad stack layer.

    ``CIRCLE`` is an alias of ``ROUND``; files use both spellings.
    """

    ROUND = 0
    CIRCLE = 0
    SQUARE = 1
    OBLONG = 2
    RECTANGLE = 3
    POLYGON = 4
    THERMAL = 5
    THERMAL_X = 6


class TextJustification(Enum):
    """Anchor of a text item relative to its origin."""

    UPPER_LEFT = 0
    UPPER_CENTER = 1
    UPPER_RIGHT = 2
    LEFT = 3
    CENTER = 4
    RIGHT = 5
    LOWER_LEFT = 6
    LOWER_CENTER = 7
    LOWER_RIGHT = 8
