"""Pytest fixtures for bxl-tools tests."""

import pytest
from pathlib import Path

from bxl_tools.core.huffman import build_tree

# Part library with one of each library section
LIBRARY_TEXT = """# Sample part library
TextStyles : 1
TextStyle "H80s8" (FontWidth 8) (FontHeight 80) (FontCharWidth 53)

PadStacks : 1
PadStack "r60_25" (HoleDiam 0) (Surface True) (Plated False) (NoPaste False)
Shapes : 1
PadShape "Rectangle" (Width 25) (Height 60) (PadType 0) (Layer TOP)
EndPadStack

Patterns : 1
Pattern "SOIC8"
OriginPoint (0, 0)
PickPoint (0, 0)
GluePoint (0, 0)
Data : 3
Pad (Number 1) (PinName "1") (PadStyle "r60_25") (OriginalPadStyle "r60_25") (Origin -150, 75) (OriginalPinNumber 1) (Rotate 90)
Line (Layer TOP_ASSEMBLY) (Origin -75, -100) (EndPoint 75, -100) (Width 6)
Attribute (Layer TOP_SILK) (Origin 0, 0) (Attr "RefDes", "RefDes") (Justify Center) (TextStyleRef "H80s8") (IsVisible True)
EndData
EndPattern

Symbols : 1
Symbol "LM358_A"
OriginPoint (0, 0)
OriginalName "LM358_A"
Data : 2
Pin (PinNum 1) (Origin 0, 0) (PinLength 200) (Rotate 180) (Width 10) (IsVisible True)
PinDes "1" (Origin -100, 10) (Rotate 0) (IsVisible True) (Justify "UpperLeft") (TextStyleRef "H80s8")
PinName "OUT" (Origin 50, 0) (Rotate 0) (IsVisible True) (Justify Left) (TextStyleRef "H80s8")
Line (Layer TOP_ASSEMBLY) (Origin 200, 300) (EndPoint 200, -300) (Width 10)
EndData
EndSymbol

Components : 1
Component "LM358"
PatternName "SOIC8"
OriginalName "LM358"
SourceLibrary "TI"
RefDesPrefix "U"
NumberofPins 2
NumParts 2
Composition Heterogeneous
AltIEEE False
AltDeMorgan False
PatternPins 8
Revision Level "A"
Revision Note "Initial"
CompPins : 2
CompPin 1 "OUT1" (PartNum 1) (SymPinNum 1) (GateEq 0) (PinEq 0) (PinType Output) (Side Right) (Group 1)
CompPin 2 "IN1-" (PartNum 2) (SymPinNum 1) (PinType Input)
EndCompPins
CompData : 1
Attribute (Attr "Manufacturer_Name", "Texas Instruments")
EndCompData
AttachedSymbols : 2
AttachedSymbol (PartNum 1) (AltType Normal) (SymbolName "LM358_A")
AttachedSymbol (PartNum 2) (AltType Normal) (SymbolName "LM358_A")
EndAttachedSymbols
PinMap : 2
PadNum 1 (CompPinRef "1")
PadNum 2 (CompPinRef "2")
EndPinMap
EndComponent

End of File
"""

# Layer definitions as exported with full designs
LAYER_DATA_TEXT = """LayerData : 2
Layer : 1 Name TOP LayerType Signal BoardLayerType Top_Assembly LayerOrder 1
Layer : 2 Name BOTTOM LayerType Bogus
"""

# Board instance sections
BOARD_TEXT = """WorkSpaceSize (LL 0, 0) (UR 1000, 800)
ComponentInstances : 1
Component "U1" (CompName "LM358") (PatternRef "SOIC8") (Point 100, 200) (Rotate 90)
Attribute (Layer TOP_SILK) (Attribute "RefDes", "U1") (Origin 10, 20) (IsVisible True)
ViaInstances : 1
Via (ViaStyle "v1") (Origin 5, 5) (NetName "GND")
Nets : 1
Net "GND" (Number 3) (Node U1/4, R1/2, 5/A)
Layers : 1
LayerNumber : 1 (LayerName "TOP") (LayerNum 1) (LayerType Signal)
Line (Layer TOP) (Origin 0, 0) (Point1 10, 10) (Width 5)
Poly (Layer TOP) (Width 1) (0, 0) (10, 0) (10, 10)
End of File
"""

# Schematic settings and one sheet
SCHEMATIC_TEXT = """SchematicData : 1
Units mil
Workspace (LL 0, 0) (UR 11000, 8500) (Grid 100)
Attribute "Title", "Amplifier"
Sheet (Id 1, "Main")
Sheets : 1
Sheet : 1
Name "Main"
Number 1
ShowBorder True
ScaleFactor 1.0
OffSet 0, 0
Data : 2
Wire (Layer SCH_WIRE) (Origin 0, 0) (EndPoint 100, 0) (Width 1) (NetName "N1")
Junction (Origin 100, 0)
EndData
End of File
"""

# Library that stops inside a pattern's data block
TRUNCATED_TEXT = """TextStyles : 1
TextStyle "H80s8" (FontWidth 8) (FontHeight 80)
Patterns : 1
Pattern "SOIC8"
Data : 1
Line (Layer TOP) (Width 1)
"""

# Binary container decoding to "AB"
BINARY_AB = bytes([0x40, 0x00, 0x00, 0x00, 0x82, 0x30])


def encode_bxl(data: bytes) -> bytes:
    """Compress bytes into a binary BXL container.

    Codes are read off the same adaptive tree the decoder uses, updated after
    every symbol. The decoder supplies the first bit of the stream itself, so
    the first byte must be below 0x80. A trailing zero byte keeps the last
    code from ending on the final byte the decoder fetches.
    """
    root = build_tree()
    leaves = {}
    stack = [root]
    while stack:
        node = stack.pop()
        if node.is_leaf:
            leaves[node.symbol] = node
        else:
            stack.extend((node.left, node.right))

    bits = []
    for byte in data:
        leaf = leaves[byte]
        code = []
        node = leaf
        while node.parent is not None:
            code.append(1 if node.parent.left is node else 0)
            node = node.parent
        bits.extend(reversed(code))
        leaf.weight += 1
        leaf.update_tree()

    if bits:
        assert bits[0] == 0, "first byte must be below 0x80"
        del bits[0]
    bits.extend([0] * (-len(bits) % 8 + 8))

    header = bytes(int(f"{(len(data) >> (8 * i)) & 0xFF:08b}"[::-1], 2) for i in range(4))
    payload = bytes(
        int("".join(str(bit) for bit in bits[i : i + 8]), 2) for i in range(0, len(bits), 8)
    )
    return header + payload


@pytest.fixture
def library_file(tmp_path: Path) -> Path:
    """Create a text library file for testing."""
    xlr_file = tmp_path / "LM358.xlr"
    xlr_file.write_text(LIBRARY_TEXT)
    return xlr_file


@pytest.fixture
def truncated_file(tmp_path: Path) -> Path:
    """Create a text library file that ends mid-pattern."""
    xlr_file = tmp_path / "broken.xlr"
    xlr_file.write_text(TRUNCATED_TEXT)
    return xlr_file


@pytest.fixture
def binary_file(tmp_path: Path) -> Path:
    """Create a small binary BXL file for testing."""
    bxl_file = tmp_path / "tiny.bxl"
    bxl_file.write_bytes(BINARY_AB)
    return bxl_file


@pytest.fixture
def isolated_config(tmp_path: Path, monkeypatch) -> Path:
    """Run from an empty project with no user config."""
    (tmp_path / ".git").mkdir()
    monkeypatch.chdir(tmp_path)
    monkeypatch.setattr("bxl_tools.config.USER_CONFIG_PATH", tmp_path / "no-exist.toml")
    return tmp_path
