"""
Text Rendering
==============

Renders a disassembled program as the text the game produces when a
program is copied out of its editor. The default output can be pasted
straight back into the game; extra columns (instruction numbers, line
numbers, raw record words) are available for inspection but make the
text unsuitable for pasting.

Example output:

    b:
    INBOX
    COPYTO 0
    JUMPZ a
    COMMENT 0
    OUTBOX
    JUMP b
    a:

    DEFINE COMMENT 0
    <base64 payload>;

Comment definitions carry the comment's point slot, zlib-compressed and
base64-encoded without padding, exactly as the game expects.
"""

import base64
from dataclasses import dataclass, replace
import io
import zlib
from typing import BinaryIO, Optional, Sequence

from hrm_profile.instructions import (
    DisassembledEntry,
    EntryKind,
    RawComment,
    RawInstruction,
    decode_instructions,
    decode_raw_comments,
    disassemble,
)
from hrm_profile.profile.layout import INSTRUCTIONS_SIZE


# Width used when wrapping comment definitions
DEFAULT_WRAP_WIDTH = 80

# zlib level the game itself uses for comment payloads
COMMENT_COMPRESSION_LEVEL = 6


# =============================================================================
# Options
# =============================================================================

@dataclass
class TextOptions:
    """
    Options for render_instructions_text().

    Attributes:
        show_instruction_numbers: Prefix every entry with its slot index
            (comments and jump targets included)
        show_line_numbers: Prefix instructions with the line number the
            game shows
        show_raw_instructions: Prefix every entry with its raw record as
            hex words; requires raw_instructions
        raw_instructions: The raw records the listing was made from
    """
    show_instruction_numbers: bool = False
    show_line_numbers: bool = False
    show_raw_instructions: bool = False
    raw_instructions: Optional[Sequence[RawInstruction]] = None

    def validate(self) -> None:
        """Raise ValueError if the options cannot be honoured."""
        if self.show_raw_instructions and self.raw_instructions is None:
            raise ValueError(
                "raw_instructions must be given when show_raw_instructions is set"
            )


# =============================================================================
# Program Listing
# =============================================================================

def render_entry(entry: DisassembledEntry) -> str:
    """Render one entry in the game's paste format."""
    kind = entry.kind
    if kind is EntryKind.COMMENT:
        return f"COMMENT {entry.index}"
    if kind is EntryKind.JUMP_TARGET:
        return f"{entry.label}:" if entry.label else ""
    if kind is EntryKind.JUMP:
        return f"{entry.op.mnemonic} {entry.target_label}"
    if kind is EntryKind.ARG:
        operand = f"[{entry.argument}]" if entry.indirect else str(entry.argument)
        return f"{entry.op.mnemonic} {operand}"
    if kind is EntryKind.PLAIN:
        return entry.op.mnemonic
    raise ValueError(f"unknown entry kind {kind!r}")


def render_instructions_text(
    entries: Sequence[DisassembledEntry],
    options: Optional[TextOptions] = None,
) -> str:
    """
    Render a disassembled program, one entry per line.

    Args:
        entries: The disassembly, as returned by disassemble()
        options: Extra columns to show (default: none, paste-compatible)

    Returns:
        The listing, each line terminated by a newline
    """
    options = options or TextOptions()
    options.validate()

    width = len(str(len(entries)))
    lines = []
    for i, entry in enumerate(entries):
        prefix = ""
        if options.show_instruction_numbers:
            prefix += f"{i:>{width}} "
        if options.show_line_numbers:
            if entry.kind in (EntryKind.COMMENT, EntryKind.JUMP_TARGET):
                prefix += " " * width + " "
            else:
                prefix += f"{entry.line:>{width}} "
        if options.show_raw_instructions:
            prefix += options.raw_instructions[i].to_hex() + " "
        lines.append(prefix + render_entry(entry))

    return "".join(line + "\n" for line in lines)


# =============================================================================
# Comment Definitions
# =============================================================================

def encode_comment(raw: RawComment) -> str:
    """Encode one comment's point slot as a DEFINE COMMENT payload."""
    compressed = zlib.compress(raw.to_slot_bytes(), COMMENT_COMPRESSION_LEVEL)
    return base64.b64encode(compressed).decode("ascii").rstrip("=")


def render_comments_text(
    raw_comments: Sequence[RawComment],
    width: Optional[int] = None,
) -> str:
    """
    Render comment definitions to append after a program listing.

    Args:
        raw_comments: The tab's comments, in index order
        width: Line length for the payloads (default: unwrapped)

    Only the base64 payload is wrapped. The DEFINE COMMENT lines are
    never split, whatever the width, or the game rejects the paste.
    """
    blocks = []
    for index, raw in enumerate(raw_comments):
        payload = encode_comment(raw) + ";"
        if width is not None:
            payload = wrap(payload, width)
        blocks.append(f"DEFINE COMMENT {index}\n{payload}\n\n")
    return "".join(blocks)


def wrap(text: str, width: int = DEFAULT_WRAP_WIDTH) -> str:
    """
    Hard-wrap every line of text longer than width characters.

    Lines are cut at exactly width characters, spaces included, so
    unbroken base64 payloads are wrapped too. Existing line breaks are
    kept.
    """
    if width < 1:
        raise ValueError(f"wrap width must be positive, got {width}")
    wrapped = []
    for line in text.split("\n"):
        if not line:
            wrapped.append(line)
            continue
        wrapped.extend(line[i:i + width] for i in range(0, len(line), width))
    return "\n".join(wrapped)


# =============================================================================
# Stream Convenience
# =============================================================================

def render_tab_text(
    stream: BinaryIO,
    options: Optional[TextOptions] = None,
    wrap_width: int = DEFAULT_WRAP_WIDTH,
) -> str:
    """
    Decode the tab at the current stream position and render it.

    Args:
        stream: Seekable stream positioned at the start of a tab
        options: Extra columns for the program listing; not modified
        wrap_width: Line length for comment payloads

    Returns:
        The program listing, followed by the comment definitions if the
        tab has any
    """
    tab_start = stream.tell()
    instructions = decode_instructions(stream)
    entries = disassemble(instructions)

    options = options or TextOptions()
    if options.show_raw_instructions:
        options = replace(options, raw_instructions=instructions)
    text = render_instructions_text(entries, options)

    stream.seek(tab_start + INSTRUCTIONS_SIZE, io.SEEK_SET)
    comments = render_comments_text(decode_raw_comments(stream), wrap_width)
    if comments:
        text += "\n" + comments
    return text
