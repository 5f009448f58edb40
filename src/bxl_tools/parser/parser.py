"""
Recursive-descent parser for BXL text.

The parser never raises. Recoverable problems (unknown properties, duplicate
values, stray parentheses, unsupported sections) are logged and skipped.
A missing required token or unrecognized input is logged as an error and
ends the parse; whatever was assembled up to that point is kept.

Example::

    from bxl_tools.parser import BxlParser

    parser = BxlParser(text, "part.xlr")
    doc = parser.execute()
    if parser.logs.has_errors:
        for entry in parser.logs.errors:
            print(entry.message)
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Collection
from pathlib import PurePath
from typing import Any, NoReturn, Optional, TypeVar

from bxl_tools.core.logs import LogEntry, Logs, LogSeverity
from bxl_tools.exceptions import SyntaxViolation, TokenizationError
from bxl_tools.progress import ProgressCallback, ProgressThrottle
from bxl_tools.schema.binding import FieldKind, FieldSpec, field_table, lookup_attribute
from bxl_tools.schema.binding import match_enum, normalize_name
from bxl_tools.schema.common import LayerType, NetNode, PadShapeKind, Point
from bxl_tools.schema.document import BxlDocument
from bxl_tools.schema.instance import (
    ComponentInstance,
    InstArc,
    InstAttribute,
    InstCopperpour,
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
)
from bxl_tools.schema.library import (
    AttachedSymbol,
    Component,
    CompPin,
    Layer,
    LibArc,
    LibAttribute,
    LibDeletedPad,
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
    RelatedFile,
    Symbol,
    TextStyle,
)

from .tokenizer import DEFAULT_PATTERNS, KEYWORD_LEXEMES, PatternTable, Token, Tokenizer
from .tokenizer import TokenKind

logger = logging.getLogger(__name__)

K = TokenKind
T = TypeVar("T")

# Keywords the top level resynchronizes on after skipping input
ANCHORS = frozenset(
    {
        K.LAYER_DATA,
        K.TEXT_STYLES,
        K.PAD_STACKS,
        K.PATTERNS,
        K.SYMBOLS,
        K.COMPONENTS,
        K.WORKSPACE_SIZE,
        K.COMPONENT_INSTANCES,
        K.VIA_INSTANCES,
        K.NETS,
        K.SCHEMATIC_COMPONENT_INSTANCES,
        K.SCHEMATIC_NETS,
        K.SCHEMATIC_DATA,
        K.SHEETS,
        K.LAYERS,
        K.END_OF_FILE,
        K.TEXT_STYLE,
        K.PADSTACK,
        K.PATTERN,
        K.SYMBOL,
        K.COMPONENT,
    }
)

# Sections that are recognized but not modeled
UNSUPPORTED_SECTIONS = frozenset(
    {K.MODELS_3D, K.SUPER_COMPONENTS, K.ATTACHED_FILES, K.LAYER_TECHNICAL_DATA}
)

LIB_ITEM_TYPES: dict[TokenKind, type] = {
    K.PAD: LibPad,
    K.DELETED_PAD: LibDeletedPad,
    K.POLY: LibPoly,
    K.POLY_KEEPOUT: LibKeepoutPoly,
    K.LINE: LibLine,
    K.ARC: LibArc,
    K.TEXT: LibText,
    K.ATTRIBUTE: LibAttribute,
    K.WIZARD: LibWizard,
    K.TEMPLATE_DATA: LibTemplateData,
}

INST_ITEM_TYPES: dict[TokenKind, type] = {
    K.WIRE: InstWire,
    K.PORT: InstPort,
    K.JUNCTION: InstJunction,
    K.LINE: InstLine,
    K.ARC: InstArc,
    K.POLY: InstPoly,
    K.COPPERPOUR: InstCopperpour,
    K.TEXT: InstText,
    K.SYMBOL: InstSymbol,
    K.ATTRIBUTE: InstAttribute,
}

NUMERIC = (K.LIT_DECIMAL, K.LIT_INTEGER)


class BxlParser:
    """Parser for one BXL text.

    A parser instance belongs to a single parse; create a new one per document.

    Args:
        text: Decoded BXL text
        reference_name: File name used in diagnostics
        patterns: Tokenizer pattern table
    """

    def __init__(
        self,
        text: str,
        reference_name: str = "",
        patterns: PatternTable = DEFAULT_PATTERNS,
    ):
        self._text = text
        self._reference_name = reference_name
        self._display_name = PurePath(reference_name).name if reference_name else ""
        self._tokenizer = Tokenizer(text, patterns)
        self._entries: list[LogEntry] = []
        self._document = BxlDocument()
        self._collections: dict[str, list] = {}
        self._workspace_size = Region()
        self._schematic_data = SchematicData()
        self._progress = ProgressThrottle(None, len(text))

        # Counted sections: header keyword -> (item reader, document collection)
        self._sections: dict[TokenKind, tuple[Callable[[], Any], str]] = {
            K.LAYER_DATA: (self._read_layer, "layer_data"),
            K.TEXT_STYLES: (self._read_text_style, "text_styles"),
            K.PAD_STACKS: (self._read_pad_stack, "pad_styles"),
            K.PATTERNS: (self._read_pattern, "footprints"),
            K.SYMBOLS: (self._read_symbol, "symbols"),
            K.COMPONENTS: (self._read_component, "components"),
            K.COMPONENT_INSTANCES: (self._read_component_instance, "component_instances"),
            K.VIA_INSTANCES: (self._read_via, "via_instances"),
            K.NETS: (self._read_net, "nets"),
            K.SCHEMATIC_COMPONENT_INSTANCES: (
                self._read_component_instance,
                "schematic_component_instances",
            ),
            K.SCHEMATIC_NETS: (self._read_net, "schematic_nets"),
            K.SHEETS: (self._read_sheet, "schematic_sheets"),
            K.LAYERS: (self._read_layer_number, "layers"),
        }

        # Items that may also appear on their own at the top level
        self._singular_items: dict[TokenKind, tuple[Callable[[], Any], str]] = {
            K.TEXT_STYLE: (self._read_text_style, "text_styles"),
            K.PADSTACK: (self._read_pad_stack, "pad_styles"),
            K.PATTERN: (self._read_pattern, "footprints"),
            K.SYMBOL: (self._read_symbol, "symbols"),
            K.COMPONENT: (self._read_component, "components"),
        }

    @property
    def document(self) -> BxlDocument:
        return self._document

    @property
    def logs(self) -> Logs:
        """Snapshot of the log entries produced so far."""
        return Logs(tuple(self._entries))

    def execute(self, progress: Optional[ProgressCallback] = None) -> BxlDocument:
        """Parse the whole text.

        Args:
            progress: Optional callback receiving percentages from 0 to 100

        Returns:
            The document, possibly partial if the log has errors
        """
        self._entries = []
        self._collections = {}
        self._workspace_size = Region()
        self._schematic_data = SchematicData()
        self._progress = ProgressThrottle(progress, len(self._text))
        self._progress.start()

        try:
            self._tokenizer.reset()
            self._read_document()
        except TokenizationError as e:
            self._log(LogSeverity.ERROR, e.message, e.line, e.column)
        except SyntaxViolation:
            # Logged where it was raised
            pass
        except Exception as e:
            logger.debug("Unexpected failure while parsing", exc_info=True)
            self._log(LogSeverity.INTERNAL_ERROR, f"Internal error: {e!r}")

        self._progress.finish()
        logs = self.logs
        logger.info(
            f"Parsed {self._display_name or 'BXL text'}: {len(logs)} log entries, "
            f"{logs.error_count} errors"
        )
        self._document = BxlDocument(
            workspace_size=self._workspace_size,
            schematic_data=self._schematic_data,
            **self._collections,
        )
        return self._document

    # Diagnostics

    def _log(
        self,
        severity: LogSeverity,
        message: str,
        line: Optional[int] = None,
        column: Optional[int] = None,
    ) -> None:
        if line is None:
            line = self._tokenizer.line
        if column is None:
            column = self._tokenizer.column
        text = f"{self._display_name}:{line}:{column} {message}"
        logger.debug(f"{severity.value}: {text}")
        self._entries.append(LogEntry(severity, text))

    def _information(self, message: str) -> None:
        self._log(LogSeverity.INFORMATION, message)

    def _warning(self, message: str) -> None:
        self._log(LogSeverity.WARNING, message)

    def _error(self, message: str) -> NoReturn:
        """Log an error and abort the parse."""
        line, column = self._tokenizer.line, self._tokenizer.column
        self._log(LogSeverity.ERROR, message, line, column)
        raise SyntaxViolation(
            message, line=line, column=column, file_path=self._reference_name or None
        )

    # Token primitives

    @property
    def _peek(self) -> TokenKind:
        return self._tokenizer.kind

    def _accept(self, kind: TokenKind) -> Optional[Token]:
        """Consume the current token if it is of the given kind."""
        if self._tokenizer.kind is not kind:
            return None
        token = self._tokenizer.current
        self._tokenizer.advance()
        self._progress.update(self._tokenizer.position)
        return token

    def _expect(self, kind: TokenKind) -> Any:
        """Consume a required token and return its value."""
        token = self._accept(kind)
        if token is None:
            self._error(f"Expected {kind.name}, actual {self._peek.name}.")
        return token.value

    def _skip_until(
        self, kinds: Collection[TokenKind], warn: bool, allow_eof: bool = False
    ) -> bool:
        """Discard tokens until one of ``kinds`` is current.

        Returns:
            False if the end of input was reached instead (only with ``allow_eof``)
        """
        start = self._tokenizer.state
        while not self._tokenizer.is_eof and self._peek not in kinds:
            self._tokenizer.advance()

        found = not self._tokenizer.is_eof
        if not found and not allow_eof:
            self._error(f"Expected {' or '.join(sorted(k.name for k in kinds))}")

        end = self._tokenizer.state
        if warn and end.position != start.position:
            self._warning(f"Ignored from {start.line}:{start.column} to {end.line}:{end.column}")
        return found

    # Value readers

    def _read_integer(self) -> int:
        return self._expect(K.LIT_INTEGER)

    def _read_real(self) -> float:
        token = self._accept(K.LIT_DECIMAL)
        if token is not None:
            return token.value
        return float(self._expect(K.LIT_INTEGER))

    def _read_boolean(self) -> bool:
        return self._expect(K.LIT_BOOLEAN)

    def _read_string(self) -> str:
        return self._expect(K.LIT_STRING)

    def _read_identifier(self) -> str:
        return self._expect(K.IDENTIFIER)

    def _read_text(self) -> str:
        """Read a bare identifier, or a quoted string if there is none."""
        token = self._accept(K.IDENTIFIER)
        if token is not None:
            return token.value
        return self._read_string()

    def _read_optional_text(self) -> Optional[str]:
        token = self._accept(K.IDENTIFIER) or self._accept(K.LIT_STRING)
        return token.value if token is not None else None

    def _read_int_or_identifier(self) -> str:
        token = self._accept(K.LIT_INTEGER)
        if token is not None:
            return token.lexeme
        return self._read_identifier()

    def _read_point_coords(self) -> Point:
        x = self._read_real()
        self._expect(K.COMMA)
        y = self._read_real()
        return Point(x, y)

    def _read_point(self) -> Point:
        self._expect(K.PAREN_L)
        point = self._read_point_coords()
        self._expect(K.PAREN_R)
        return point

    def _read_nodes(self) -> list[NetNode]:
        nodes = []
        while True:
            designator = self._read_int_or_identifier()
            self._expect(K.SLASH)
            pin = self._read_int_or_identifier()
            nodes.append(NetNode(designator, pin))
            if not self._accept(K.COMMA):
                return nodes

    def _read_enum(self, enum_type: type, property_name: str) -> Any:
        """Read an enum by raw value or by name; None if unsupported."""
        token = self._accept(K.LIT_INTEGER)
        if token is not None:
            try:
                return enum_type(token.value)
            except ValueError:
                self._warning(f"Unsupported {property_name} value: {token.value}")
                return None

        name = self._read_text()
        member = match_enum(enum_type, name)
        if member is None:
            self._warning(f"Unsupported {property_name} value: {name}")
        return member

    # Generic properties

    def _read_properties(
        self,
        on_property: Callable[[str], Optional[bool]],
        on_point: Callable[[Point], None],
    ) -> None:
        """Read a sequence of ``(Name value...)`` and ``(x, y)`` entries.

        ``on_property`` consumes the value and returns whether the property
        accumulates (True), is a scalar (False) or was not recognized (None).
        """
        seen: set[str] = set()

        while self._accept(K.PAREN_L):
            name = ""
            duplicate = False
            recognized = True
            start = self._tokenizer.position

            if self._peek in NUMERIC:
                on_point(self._read_point_coords())
            else:
                name = self._read_identifier()
                start = self._tokenizer.position
                outcome = on_property(name)
                recognized = outcome is not None
                key = normalize_name(name)
                duplicate = outcome is False and key in seen
                seen.add(key)

            has_read_data = self._tokenizer.position != start
            if has_read_data and duplicate:
                self._information(f"Duplicate value for {name}")

            if self._peek is K.PAREN_L:
                self._information("Missing closing parenthesis")
                continue

            if has_read_data and self._peek is not K.PAREN_R:
                self._warning("Excess or poorly formatted property value")
                self._tokenizer.skip_until(")")

            self._skip_until((K.PAREN_R,), warn=recognized)
            self._expect(K.PAREN_R)

    def _read_field(self, instance: Any, name: str) -> Optional[bool]:
        spec = field_table(type(instance)).get(normalize_name(name))
        if spec is None:
            self._warning(f"{type(instance).__name__} missing property: {name}")
            return None
        self._bind_value(instance, spec, name)
        return spec.kind.is_collection

    def _bind_value(self, instance: Any, spec: FieldSpec, name: str) -> None:
        kind = spec.kind
        target = spec.targets[0]

        if kind is FieldKind.REAL:
            setattr(instance, target, self._read_real())
        elif kind is FieldKind.INTEGER:
            setattr(instance, target, self._read_integer())
        elif kind is FieldKind.BOOLEAN:
            setattr(instance, target, self._read_boolean())
        elif kind is FieldKind.STRING:
            setattr(instance, target, self._read_text())
        elif kind is FieldKind.POINT:
            setattr(instance, target, self._read_point_coords())
        elif kind in (FieldKind.STRING_PAIR, FieldKind.INT_STRING_PAIR):
            key = self._read_integer() if kind is FieldKind.INT_STRING_PAIR else self._read_text()
            self._accept(K.COMMA)
            value = self._read_text()
            if len(spec.targets) == 2:
                setattr(instance, spec.targets[0], key)
                setattr(instance, spec.targets[1], value)
            else:
                setattr(instance, target, (key, value))
        elif kind is FieldKind.ENUM:
            member = self._read_enum(spec.enum_type, name)
            if member is not None:
                setattr(instance, target, member)
        elif kind is FieldKind.POINT_LIST:
            getattr(instance, target).append(self._read_point_coords())
        elif kind is FieldKind.NODE_LIST:
            getattr(instance, target).extend(self._read_nodes())

    def _read_properties_into(self, instance: Any) -> None:
        """Bind properties to an entity and place any bare coordinate pairs."""
        points: list[Point] = []
        self._read_properties(lambda name: self._read_field(instance, name), points.append)
        if not points:
            return

        cls = type(instance)
        origin = lookup_attribute(cls, "origin")
        point_list = lookup_attribute(cls, "points")
        if len(points) == 1 and origin is not None and origin.kind is FieldKind.POINT:
            instance.origin = points[0]
        elif point_list is not None and point_list.kind is FieldKind.POINT_LIST:
            instance.points.extend(points)
        else:
            self._warning(f"{cls.__name__} missing property: Origin or Points[{len(points)}]")

    def _ignore_properties(self) -> None:
        def on_property(name: str) -> None:
            self._warning(f"Ignored property: {name}")

        self._read_properties(on_property, lambda _: self._warning("Ignored coordinates"))

    # Collections

    def _read_count(self, marker: TokenKind) -> int:
        """Read a ``Marker : count`` header."""
        self._expect(marker)
        self._expect(K.COLON)
        return self._read_integer()

    def _read_collection(
        self,
        start: TokenKind,
        end: Optional[TokenKind],
        read_item: Callable[[], Optional[T]],
    ) -> list[T]:
        """Read a counted collection.

        Without an end marker exactly ``count`` items are read. With one,
        items are read until the marker and a differing count is only noted.
        """
        count = self._read_count(start)
        items: list[T] = []
        read = 0

        if end is None:
            for _ in range(count):
                _append(items, read_item())
            return items

        while self._peek is not end:
            _append(items, read_item())
            read += 1
        self._expect(end)

        if read != count:
            self._information(f"Collection size mis-match, expected {count}, actual {read}")
        return items

    # Document

    def _read_document(self) -> None:
        while not self._tokenizer.is_eof:
            kind = self._peek

            if kind in self._sections:
                reader, collection = self._sections[kind]
                self._collection(collection).extend(self._read_collection(kind, None, reader))
            elif kind in self._singular_items:
                reader, collection = self._singular_items[kind]
                self._collection(collection).append(reader())
            elif kind is K.WORKSPACE_SIZE:
                self._expect(K.WORKSPACE_SIZE)
                self._read_properties_into(self._workspace_size)
            elif kind is K.SCHEMATIC_DATA:
                self._read_schematic_data()
            elif kind is K.END_OF_FILE:
                return
            elif kind in UNSUPPORTED_SECTIONS:
                count = self._read_count(kind)
                if count > 0:
                    self._warning(f"Ignored unsupported {KEYWORD_LEXEMES[kind]} with {count} items")
                if not self._skip_until(ANCHORS, warn=False, allow_eof=True):
                    return
            else:
                if not self._skip_until(ANCHORS, warn=True, allow_eof=True):
                    return

    def _collection(self, name: str) -> list:
        return self._collections.setdefault(name, [])

    def _read_simple_item(self, item_type: type[T], keyword: TokenKind) -> T:
        self._expect(keyword)
        item = item_type()
        self._read_properties_into(item)
        return item

    # Library sections

    def _read_layer(self) -> Layer:
        layer = Layer(self._read_count(K.LAYER))
        self._expect(K.NAME)
        layer.name = self._read_text()

        if self._accept(K.LAYER_TYPE):
            text = self._read_optional_text()
            if text is not None:
                layer.layer_type = match_enum(LayerType, text)
                if layer.layer_type is None:
                    self._warning(f"Unsupported LayerType value: {text}")
        if self._accept(K.BOARD_LAYER_TYPE):
            layer.board_layer_type = self._read_optional_text()
        if self._accept(K.LAYER_ORDER):
            layer.layer_order = self._read_integer()
        return layer

    def _read_text_style(self) -> TextStyle:
        self._expect(K.TEXT_STYLE)
        style = TextStyle(self._read_string())
        self._read_properties_into(style)
        return style

    def _read_pad_stack(self) -> PadStack:
        self._expect(K.PADSTACK)
        stack = PadStack(self._read_string())
        self._read_properties_into(stack)
        stack.shapes.extend(self._read_collection(K.SHAPES, None, self._read_pad_shape))
        self._expect(K.END_PADSTACK)
        return stack

    def _read_pad_shape(self) -> PadShape:
        self._expect(K.PAD_SHAPE)
        name = self._read_string()
        shape = PadShape()
        kind = match_enum(PadShapeKind, name)
        if kind is None:
            self._warning(f"Unsupported PadShape value: {name}")
        else:
            shape.kind = kind
        self._read_properties_into(shape)
        return shape

    def _read_lib_pin(self) -> LibPin:
        pin = self._read_simple_item(LibPin, K.PIN)

        self._expect(K.PIN_DES)
        pin.designator.text = self._read_string()
        self._read_properties_into(pin.designator)

        self._expect(K.PIN_NAME)
        pin.name.text = self._read_string()
        self._read_properties_into(pin.name)
        return pin

    def _read_lib_item(self) -> Any:
        kind = self._peek
        if kind is K.PIN:
            return self._read_lib_pin()

        item_type = LIB_ITEM_TYPES.get(kind)
        if item_type is not None:
            return self._read_simple_item(item_type, kind)

        name = self._read_identifier()
        self._warning(f"Unsupported library item: {name}")
        self._ignore_properties()
        return None

    def _skip_header_property(self, owner: str, data_marker: TokenKind) -> None:
        name = self._read_identifier()
        self._warning(f"{owner} ignored property: {name}")
        self._skip_until((data_marker,), warn=True)

    def _read_pattern(self) -> Pattern:
        self._expect(K.PATTERN)
        pattern = Pattern(self._read_string())

        while self._peek is not K.DATA:
            if self._accept(K.ORIGIN_POINT):
                pattern.origin_point = self._read_point()
            elif self._accept(K.PICK_POINT):
                pattern.pick_point = self._read_point()
            elif self._accept(K.GLUE_POINT):
                pattern.glue_point = self._read_point()
            elif self._accept(K.PINS_RENAMED):
                pattern.pins_renamed = self._read_boolean()
            else:
                self._skip_header_property("Pattern", K.DATA)

        pattern.data.extend(self._read_collection(K.DATA, K.END_DATA, self._read_lib_item))
        self._expect(K.END_PATTERN)
        return pattern

    def _read_symbol(self) -> Symbol:
        self._expect(K.SYMBOL)
        symbol = Symbol(self._read_string())

        while self._peek is not K.DATA:
            if self._accept(K.ORIGIN_POINT):
                symbol.origin_point = self._read_point()
            elif self._accept(K.ORIGINAL_NAME):
                symbol.original_name = self._read_text()
            elif self._accept(K.EDITED):
                symbol.edited = self._read_boolean()
            else:
                self._skip_header_property("Symbol", K.DATA)

        symbol.data.extend(self._read_collection(K.DATA, K.END_DATA, self._read_lib_item))
        self._expect(K.END_SYMBOL)
        return symbol

    def _read_component(self) -> Component:
        self._expect(K.COMPONENT)
        comp = Component(self._read_string())

        while self._peek is not K.COMP_PINS:
            if self._accept(K.PATTERN_NAME):
                comp.pattern_name = self._read_text()
            elif self._accept(K.ALTERNATE_PATTERN):
                comp.alternate_patterns.append(self._read_text())
            elif self._accept(K.ORIGINAL_NAME):
                comp.original_name = self._read_text()
            elif self._accept(K.SOURCE_LIBRARY):
                comp.source_library = self._read_text()
            elif self._accept(K.REF_DES_PREFIX):
                comp.ref_des_prefix = self._read_text()
            elif self._accept(K.NUMBER_OF_PINS) or self._accept(K.NUM_PARTS):
                # Derived from the pin and attached symbol lists
                self._read_integer()
            elif self._accept(K.PATTERN_PINS):
                self._read_integer()
            elif self._accept(K.COMPOSITION):
                comp.composition = self._read_text()
            elif self._accept(K.ALT_IEEE):
                comp.alt_ieee = self._read_boolean()
            elif self._accept(K.ALT_DEMORGAN):
                comp.alt_demorgan = self._read_boolean()
            elif self._accept(K.REVISION_LEVEL):
                comp.revision_level = self._read_optional_text()
            elif self._accept(K.REVISION_NOTE):
                comp.revision_note = self._read_optional_text()
            else:
                self._skip_header_property("Component", K.COMP_PINS)

        comp.pins.extend(
            self._read_collection(K.COMP_PINS, K.END_COMP_PINS, self._read_comp_pin)
        )
        comp.data.extend(
            self._read_collection(K.COMP_DATA, K.END_COMP_DATA, self._read_comp_data_item)
        )

        while self._peek is K.RELATED_FILES:
            self._read_count(K.RELATED_FILES)
            related = RelatedFile()
            self._read_properties_into(related)
            comp.related_files.append(related)

        comp.attached_symbols.extend(
            self._read_collection(
                K.ATTACHED_SYMBOLS,
                K.END_ATTACHED_SYMBOLS,
                lambda: self._read_simple_item(AttachedSymbol, K.ATTACHED_SYMBOL),
            )
        )
        comp.pin_map.extend(self._read_collection(K.PIN_MAP, K.END_PIN_MAP, self._read_pad_num))
        self._expect(K.END_COMPONENT)
        return comp

    def _read_comp_pin(self) -> CompPin:
        self._expect(K.COMP_PIN)
        pin = CompPin(self._read_int_or_identifier(), self._read_string())
        self._read_properties_into(pin)
        return pin

    def _read_comp_data_item(self) -> Any:
        kind = self._peek
        if kind is K.ATTRIBUTE:
            return self._read_simple_item(LibAttribute, K.ATTRIBUTE)
        if kind is K.WIZARD:
            return self._read_simple_item(LibWizard, K.WIZARD)
        self._error(f"Expected ATTRIBUTE or WIZARD, actual {kind.name}.")

    def _read_pad_num(self) -> PadNum:
        self._expect(K.PAD_NUM)
        pad_num = PadNum(self._read_integer())
        self._read_properties_into(pad_num)
        return pad_num

    # Board and schematic sections

    def _read_component_instance(self) -> ComponentInstance:
        self._expect(K.COMPONENT)
        instance = ComponentInstance(self._read_string())
        self._read_properties_into(instance)
        while self._peek is K.ATTRIBUTE:
            instance.attributes.append(self._read_simple_item(InstAttribute, K.ATTRIBUTE))
        return instance

    def _read_via(self) -> ViaInstance:
        return self._read_simple_item(ViaInstance, K.VIA)

    def _read_net(self) -> NetInstance:
        self._expect(K.NET)
        net = NetInstance(self._read_string())
        self._read_properties_into(net)
        return net

    def _read_schematic_data(self) -> None:
        data = self._schematic_data
        self._expect(K.SCHEMATIC_DATA)
        self._expect(K.COLON)
        # A number sometimes follows the colon; it has no known meaning
        self._accept(K.LIT_INTEGER)

        self._expect(K.UNITS)
        data.units = self._read_text()
        self._expect(K.WORKSPACE)
        self._read_properties_into(data.workspace)

        while self._accept(K.ATTRIBUTE):
            key = self._read_string()
            self._expect(K.COMMA)
            data.attributes.append((key, self._read_string()))

        while self._accept(K.SHEET):
            self._expect(K.PAREN_L)
            self._expect(K.IDENTIFIER)
            sheet_id = self._read_integer()
            self._expect(K.COMMA)
            data.sheets.append((sheet_id, self._read_string()))
            self._expect(K.PAREN_R)

    def _read_sheet(self) -> Sheet:
        sheet = Sheet(id=self._read_count(K.SHEET))

        while self._peek is not K.DATA:
            if self._accept(K.NAME):
                sheet.name = self._read_text()
            elif self._accept(K.NUMBER):
                sheet.number = self._read_integer()
            elif self._accept(K.SHOW_BORDER):
                token = self._accept(K.LIT_BOOLEAN)
                if token is not None:
                    sheet.show_border = token.value
                else:
                    sheet.show_border = self._read_text().lower() == "true"
            elif self._accept(K.BORDER_NAME):
                sheet.border_name = self._read_text()
            elif self._accept(K.SCALE_FACTOR):
                sheet.scale_factor = self._read_real()
            elif self._accept(K.OFFSET):
                sheet.offset = self._read_point_coords()
            else:
                self._skip_header_property("Sheet", K.DATA)

        sheet.data.extend(self._read_collection(K.DATA, None, self._read_inst_item))
        self._accept(K.END_DATA)
        return sheet

    def _read_inst_item(self) -> Any:
        kind = self._peek
        item_type = INST_ITEM_TYPES.get(kind)
        if item_type is not None:
            return self._read_simple_item(item_type, kind)

        name = self._read_identifier()
        self._warning(f"Unsupported instance item: {name}")
        self._ignore_properties()
        return None

    def _read_layer_number(self) -> LayerNumber:
        layer = LayerNumber(self._read_count(K.LAYER_NUMBER))
        self._read_properties_into(layer)
        while self._peek in INST_ITEM_TYPES:
            _append(layer.data, self._read_inst_item())
        return layer


def _append(items: list, item: Any) -> None:
    if item is not None:
        items.append(item)


def parse_text(
    text: str, reference_name: str = "", progress: Optional[ProgressCallback] = None
) -> tuple[BxlDocument, Logs]:
    """Parse BXL text into a document and its log."""
    parser = BxlParser(text, reference_name)
    document = parser.execute(progress)
    return document, parser.logs
