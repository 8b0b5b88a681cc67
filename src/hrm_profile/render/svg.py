"""
SVG Rendering
=============

Draws a disassembled program the way the game's editor shows it:
coloured instruction blocks in a column, a line-number gutter on the
left, jump arrows curving out to the right and back to their targets,
and comment cards holding the player's drawings.

Layout
------
Every entry takes one row of INST_Y_STEP pixels, except comments which
take COMMENT_Y_STEP; the rows below a comment shift down accordingly.
Jump arrows are drawn first so that the blocks sit on top of them.

Comment drawings use a 0..65535 coordinate space on both axes and are
scaled to the card. A stroke with a single point is drawn as a dot.
"""

from dataclasses import dataclass
import io
import xml.etree.ElementTree as ET
from typing import BinaryIO, Sequence

from hrm_profile.errors import FormatError
from hrm_profile.instructions import (
    Comment,
    DisassembledEntry,
    EntryKind,
    OpCode,
    decode_comments,
    decode_instructions,
    decode_raw_comments,
    disassemble,
)
from hrm_profile.instructions.comments import COORDINATE_MAX
from hrm_profile.profile.layout import INSTRUCTIONS_SIZE


# =============================================================================
# Style
# =============================================================================

IO_COLOUR = "rgb(156, 182, 92)"
JUMP_COLOUR = "rgb(141, 141, 193)"
COPY_COLOUR = "rgb(200, 106, 84)"
ARITH_COLOUR = "rgb(197, 139, 97)"
COMMENT_COLOUR = "rgb(227, 219, 198)"
CANVAS_COLOUR = "rgb(188, 160, 139)"
TEXT_COLOUR = "rgb(68, 80, 37)"
LINE_NO_COLOUR = "rgb(125, 106, 92)"

FONT = "font-family:'Arial Black';font-size:{size};fill:{colour}"


@dataclass(frozen=True)
class BlockStyle:
    """How an opcode's block is drawn."""
    width: int
    label: str
    colour: str


BLOCK_STYLES: dict[OpCode, BlockStyle] = {
    OpCode.INBOX: BlockStyle(90, "inbox", IO_COLOUR),
    OpCode.OUTBOX: BlockStyle(90, "outbox", IO_COLOUR),
    OpCode.COPYFROM: BlockStyle(110, "copyfrom", COPY_COLOUR),
    OpCode.COPYTO: BlockStyle(90, "copyto", COPY_COLOUR),
    OpCode.ADD: BlockStyle(60, "add", ARITH_COLOUR),
    OpCode.SUB: BlockStyle(60, "sub", ARITH_COLOUR),
    OpCode.BUMPDN: BlockStyle(85, "bump -", ARITH_COLOUR),
    OpCode.BUMPUP: BlockStyle(85, "bump +", ARITH_COLOUR),
    OpCode.JUMP: BlockStyle(75, "jump", JUMP_COLOUR),
    OpCode.JUMPZ: BlockStyle(95, "jump", JUMP_COLOUR),
    OpCode.JUMPN: BlockStyle(120, "jump", JUMP_COLOUR),
}

JUMP_CONDITIONS: dict[OpCode, str] = {
    OpCode.JUMP: "",
    OpCode.JUMPZ: "zero",
    OpCode.JUMPN: "negative",
}

# Geometry (pixels)
LINE_NUMBER_COLUMN_WIDTH = 35
INST_X_OFFSET = 10
INST_Y_OFFSET = 10
INST_Y_STEP = 30
INST_HEIGHT = 25
COMMENT_Y_STEP = 45
COMMENT_HEIGHT = 40
COMMENT_WIDTH = 120
ARGUMENT_WIDTH = 50
TARGET_LABEL_WIDTH = 75
CANVAS_WIDTH = 300

CENTRED = {"alignment-baseline": "central", "text-anchor": "middle"}
LEFT = {"alignment-baseline": "central", "text-anchor": "start"}


# =============================================================================
# Drawing Helpers
# =============================================================================

def _attrs(**values) -> dict[str, str]:
    """Convert keyword values to SVG attributes (x_y -> x-y, numbers -> str)."""
    return {key.replace("_", "-"): str(value) for key, value in values.items()}


def _text(parent: ET.Element, x: int, y: int, text: str, size: str,
          colour: str = TEXT_COLOUR, anchor: dict = CENTRED) -> ET.Element:
    element = ET.SubElement(
        parent, "text",
        _attrs(x=x, y=y, style=FONT.format(size=size, colour=colour)),
        **anchor,
    )
    element.text = text
    return element


def _block(parent: ET.Element, x: int, y: int, w: int, h: int, colour: str) -> ET.Element:
    """Add a translated group holding a rounded, shadowed block."""
    group = ET.SubElement(parent, "g", transform=f"translate({x}, {y})")
    ET.SubElement(
        group, "rect",
        _attrs(x=0, y=0, width=w, height=h, rx=2, ry=2),
        style=f"fill:{colour}", filter="url(#dropShadow)",
    )
    return group


def _instruction(parent, x, y, style: BlockStyle) -> None:
    group = _block(parent, x, y, style.width, INST_HEIGHT, style.colour)
    _text(group, style.width // 2, INST_HEIGHT // 2, style.label, "16px")


def _jump_instruction(parent, x, y, style: BlockStyle, condition: str) -> None:
    group = _block(parent, x, y, style.width, INST_HEIGHT, style.colour)
    if condition:
        _text(group, 15, INST_HEIGHT // 2, style.label, "16px", anchor=LEFT)
        _text(group, 15 + 45, INST_HEIGHT // 3, "if", "10px", anchor=LEFT)
        _text(group, 15 + 45, (INST_HEIGHT // 3) * 2, condition, "10px", anchor=LEFT)
    else:
        _text(group, style.width // 2, INST_HEIGHT // 2, style.label, "16px")


def _argument(parent, x, y, colour: str, operand: str) -> None:
    group = _block(parent, x, y, ARGUMENT_WIDTH, INST_HEIGHT, colour)
    _text(group, ARGUMENT_WIDTH // 2, INST_HEIGHT // 2, operand, "22px")


def _line_number(parent, y: int, line: int) -> None:
    _text(
        parent, LINE_NUMBER_COLUMN_WIDTH // 2, y + INST_HEIGHT // 2,
        f"{line:02d}", "16px", colour=LINE_NO_COLOUR,
    )


def _comment(parent, x: int, y: int, comment: Comment, clip_id: str) -> None:
    group = _block(parent, x, y, COMMENT_WIDTH, COMMENT_HEIGHT, COMMENT_COLOUR)
    defs = ET.SubElement(group, "defs")
    clip = ET.SubElement(defs, "clipPath", id=clip_id)
    ET.SubElement(
        clip, "rect",
        _attrs(x=0, y=0, width=COMMENT_WIDTH, height=COMMENT_HEIGHT, rx=2, ry=2),
    )

    scale_x = COMMENT_WIDTH / COORDINATE_MAX
    scale_y = COMMENT_HEIGHT / COORDINATE_MAX
    clip_ref = f"url(#{clip_id})"
    for line in comment:
        points = [(int(p.x * scale_x), int(p.y * scale_y)) for p in line]
        if not points:
            continue
        if len(points) == 1:
            cx, cy = points[0]
            ET.SubElement(
                group, "circle", _attrs(cx=cx, cy=cy, r=2), **{"clip-path": clip_ref}
            )
        else:
            ET.SubElement(
                group, "polyline",
                _attrs(
                    points=" ".join(f"{px},{py}" for px, py in points),
                    fill="none", stroke="black", stroke_width=3,
                    stroke_linecap="round", stroke_linejoin="round",
                    clip_path=clip_ref,
                ),
            )


def _defs(root: ET.Element) -> None:
    defs = ET.SubElement(root, "defs")

    shadow = ET.SubElement(defs, "filter", id="dropShadow", width="200%", height="200%")
    ET.SubElement(shadow, "feOffset", {"in": "SourceAlpha", "result": "offOut", "dx": "1", "dy": "1"})
    ET.SubElement(
        shadow, "feColorMatrix",
        {"in": "offOut", "result": "matrixOut", "type": "matrix",
         "values": "0.2 0 0 0 0 0 0.2 0 0 0 0 0 0.2 0 0 0 0 0 0.5 0"},
    )
    ET.SubElement(shadow, "feGaussianBlur", {"in": "matrixOut", "result": "blurOut", "stdDeviation": "1"})
    ET.SubElement(shadow, "feBlend", {"in": "SourceGraphic", "in2": "blurOut", "mode": "normal"})

    marker = ET.SubElement(
        defs, "marker",
        _attrs(id="arrow", refX=3, refY=3, markerWidth=10, markerHeight=10, orient="auto"),
    )
    ET.SubElement(marker, "path", d="M10 0 10 6 1 3z", style=f"fill:{JUMP_COLOUR}")

    gradient = ET.SubElement(
        defs, "linearGradient", id="lineNumberColumn", x1="0%", y1="0%", x2="100%", y2="0%"
    )
    for offset, colour in ((0, "rgb(140,119,104)"), (40, "rgb(172,146,127)"), (100, "rgb(172,146,127)")):
        ET.SubElement(gradient, "stop", offset=f"{offset}%", style=f"stop-color:{colour};stop-opacity:1")


# =============================================================================
# Rendering
# =============================================================================

def render_svg(entries: Sequence[DisassembledEntry], comments: Sequence[Comment]) -> str:
    """
    Render a program and its comment drawings as an SVG document.

    Args:
        entries: The disassembly, as returned by disassemble()
        comments: The tab's decoded comments, indexed by COMMENT n

    Returns:
        The SVG document as a string

    Raises:
        FormatError: If a COMMENT entry refers to a comment that is not present
    """
    comment_shift = COMMENT_Y_STEP - INST_Y_STEP

    # Comments above each row push it down
    comments_before = []
    seen = 0
    for entry in entries:
        comments_before.append(seen)
        if entry.kind is EntryKind.COMMENT:
            seen += 1

    def row_y(index: int) -> int:
        return INST_Y_OFFSET + index * INST_Y_STEP + comments_before[index] * comment_shift

    height = len(entries) * INST_Y_STEP + INST_Y_OFFSET * 2 + seen * comment_shift
    root = ET.Element(
        "svg",
        _attrs(width=CANVAS_WIDTH, height=height),
        xmlns="http://www.w3.org/2000/svg",
    )
    _defs(root)
    ET.SubElement(root, "rect", _attrs(x=0, y=0, width=CANVAS_WIDTH, height=height),
                  style=f"fill:{CANVAS_COLOUR}")
    ET.SubElement(root, "rect", _attrs(x=0, y=0, width=LINE_NUMBER_COLUMN_WIDTH, height=height),
                  style="fill:url(#lineNumberColumn)")

    inst_x = LINE_NUMBER_COLUMN_WIDTH + INST_X_OFFSET

    # Jump arrows first, under the blocks
    for i, entry in enumerate(entries):
        if entry.kind is not EntryKind.JUMP:
            continue
        sx = inst_x + BLOCK_STYLES[entry.op].width
        sy = row_y(i) + INST_HEIGHT // 2
        ex = inst_x + TARGET_LABEL_WIDTH + 10
        ey = row_y(entry.target_index) + INST_HEIGHT // 2
        ET.SubElement(
            root, "path",
            d=f"M{sx},{sy} C{CANVAS_WIDTH},{sy} {CANVAS_WIDTH},{ey} {ex},{ey}",
            fill="none", stroke=JUMP_COLOUR, **{
                "stroke-width": "3",
                "marker-end": "url(#arrow)",
                "filter": "url(#dropShadow)",
            },
        )

    for i, entry in enumerate(entries):
        y = row_y(i)
        kind = entry.kind
        if kind is EntryKind.COMMENT:
            if entry.index >= len(comments):
                raise FormatError(
                    f"COMMENT {entry.index} refers to a missing comment "
                    f"({len(comments)} defined)"
                )
            _comment(root, inst_x, y, comments[entry.index], f"comment-clip-{i}")
        elif kind is EntryKind.JUMP_TARGET:
            _block(root, inst_x, y, TARGET_LABEL_WIDTH, INST_HEIGHT, JUMP_COLOUR)
        elif kind is EntryKind.JUMP:
            _line_number(root, y, entry.line)
            _jump_instruction(root, inst_x, y, BLOCK_STYLES[entry.op], JUMP_CONDITIONS[entry.op])
        elif kind is EntryKind.ARG:
            style = BLOCK_STYLES[entry.op]
            _line_number(root, y, entry.line)
            _instruction(root, inst_x, y, style)
            operand = f"[{entry.argument}]" if entry.indirect else str(entry.argument)
            _argument(root, inst_x + style.width + 10, y, style.colour, operand)
        elif kind is EntryKind.PLAIN:
            _line_number(root, y, entry.line)
            _instruction(root, inst_x, y, BLOCK_STYLES[entry.op])

    return '<?xml version="1.0"?>\n' + ET.tostring(root, encoding="unicode") + "\n"


def render_tab_svg(stream: BinaryIO) -> str:
    """
    Decode the tab at the current stream position and render it as SVG.

    Args:
        stream: Seekable stream positioned at the start of a tab
    """
    tab_start = stream.tell()
    entries = disassemble(decode_instructions(stream))

    stream.seek(tab_start + INSTRUCTIONS_SIZE, io.SEEK_SET)
    comments = decode_comments(decode_raw_comments(stream))
    return render_svg(entries, comments)
