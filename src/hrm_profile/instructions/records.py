"""
Raw Instruction and Comment Records
===================================

This module reads the two record arrays stored in every program tab of a
profile: the instruction block and the comment block. Records are
returned exactly as stored; turning them into a program is the job of
the disassembler, and turning comments into strokes is the job of the
comments module.

Instruction Block (4100 bytes)
------------------------------
    Offset  Size    Description
    ------  ----    -----------
    0       4       Record count N (uint32)
    4       16*N    N instruction records

    Instruction record (16 bytes, four little-endian uint32):
        0   comment flag (non-zero: slot is a comment placeholder)
        4   opcode (or the comment index when the flag is set)
        8   operand mode (1 = direct, 2 = indirect)
        12  argument (tile number, or jump target slot index)

Comment Block
-------------
    Offset  Size    Description
    ------  ----    -----------
    0       4       Comment count M (uint32)
    4       ...     M comment entries

    Comment entry:
        0   4       Point entry count K (uint32)
        4   1024    Point slot: K 4-byte entries, then zero padding

Padding is never decoded; it is skipped with a relative seek.

All multi-byte integers are little-endian.
"""

from dataclasses import dataclass
import io
import logging
import struct
from typing import BinaryIO

from hrm_profile.errors import DecodeError


# Logger for this module
logger = logging.getLogger(__name__)


# =============================================================================
# Record Format Constants
# =============================================================================

COUNT_FORMAT = "<I"
COUNT_SIZE = struct.calcsize(COUNT_FORMAT)          # 4 bytes

INSTRUCTION_FORMAT = "<IIII"
INSTRUCTION_RECORD_SIZE = struct.calcsize(INSTRUCTION_FORMAT)   # 16 bytes

# The instruction block is 4100 bytes: the count word plus 256 records
MAX_INSTRUCTIONS = 256

POINT_ENTRY_SIZE = 4
COMMENT_SLOT_SIZE = 1024
MAX_POINT_ENTRIES = COMMENT_SLOT_SIZE // POINT_ENTRY_SIZE      # 256 entries

SENTINEL_ENTRY = b"\x00\x00\x00\x00"

# Comment slots that fit in a tab after the instruction block:
# (46252 - 4100 - 4) // (4 + 1024)
MAX_COMMENTS = 41


# =============================================================================
# Stream Helpers
# =============================================================================

def _read_exact(stream: BinaryIO, size: int, what: str) -> bytes:
    """
    Read exactly size bytes or fail.

    Raises:
        DecodeError: If the stream ends before size bytes were read
    """
    offset = stream.tell() if stream.seekable() else None
    data = stream.read(size)
    if data is None or len(data) < size:
        raise DecodeError(
            f"truncated {what}",
            offset=offset,
            expected=size,
            actual=0 if data is None else len(data),
        )
    return data


def read_count(stream: BinaryIO, what: str = "count word") -> int:
    """Read one little-endian uint32."""
    (value,) = struct.unpack(COUNT_FORMAT, _read_exact(stream, COUNT_SIZE, what))
    return value


# =============================================================================
# Instruction Records
# =============================================================================

@dataclass(frozen=True)
class RawInstruction:
    """
    One 16-byte instruction record, undecoded.

    Attributes:
        comment_flag: Non-zero marks the slot as a comment placeholder
        opcode: The opcode (or comment index when comment_flag is set)
        mode: Operand mode (see Mode); meaningful for argument opcodes only
        argument: Tile number, or target slot index for jumps
    """
    comment_flag: int
    opcode: int
    mode: int
    argument: int

    @property
    def is_comment(self) -> bool:
        return self.comment_flag != 0

    @classmethod
    def from_bytes(cls, data: bytes) -> "RawInstruction":
        """Decode a record from its 16 stored bytes."""
        if len(data) < INSTRUCTION_RECORD_SIZE:
            raise DecodeError(
                "truncated instruction record",
                expected=INSTRUCTION_RECORD_SIZE,
                actual=len(data),
            )
        return cls(*struct.unpack_from(INSTRUCTION_FORMAT, data))

    def to_bytes(self) -> bytes:
        return struct.pack(
            INSTRUCTION_FORMAT,
            self.comment_flag, self.opcode, self.mode, self.argument,
        )

    def to_hex(self) -> str:
        """Format as four 8-digit hex words, as shown in raw listings."""
        return (
            f"{self.comment_flag:08X} {self.opcode:08X} "
            f"{self.mode:08X} {self.argument:08X}"
        )


def decode_instructions(stream: BinaryIO) -> tuple[RawInstruction, ...]:
    """
    Decode the instruction records of one tab.

    The stream must be positioned on the record count, i.e. at the start
    of a tab. On return the stream sits immediately after the last record.

    Args:
        stream: A readable binary stream

    Returns:
        The raw records in slot order; the position of a record is the
        address jump instructions use to refer to it

    Raises:
        DecodeError: If the count exceeds the block or the stream is short
    """
    count = read_count(stream, "instruction count")
    if count > MAX_INSTRUCTIONS:
        raise DecodeError(
            f"instruction count {count} exceeds block capacity of "
            f"{MAX_INSTRUCTIONS} records"
        )

    data = _read_exact(stream, count * INSTRUCTION_RECORD_SIZE, "instruction block")
    instructions = tuple(
        RawInstruction(*fields)
        for fields in struct.iter_unpack(INSTRUCTION_FORMAT, data)
    )
    logger.debug(f"Decoded {count} instruction records")
    return instructions


# =============================================================================
# Comment Records
# =============================================================================

@dataclass(frozen=True)
class RawComment:
    """
    The point entries of one drawn comment, undecoded.

    Each entry is 4 bytes: either a point (x, y as little-endian uint16)
    or four zero bytes separating two strokes.
    """
    entries: tuple[bytes, ...] = ()

    def __len__(self) -> int:
        return len(self.entries)

    def to_slot_bytes(self) -> bytes:
        """
        Serialize as stored on disk: count word plus the padded point slot.

        This is the payload the game expects inside a pasted
        DEFINE COMMENT block.
        """
        body = b"".join(self.entries)
        padding = COMMENT_SLOT_SIZE - len(body)
        return struct.pack(COUNT_FORMAT, len(self.entries)) + body + bytes(padding)


def decode_raw_comments(stream: BinaryIO) -> tuple[RawComment, ...]:
    """
    Decode the comment block of one tab.

    The stream must be positioned on the comment count (4100 bytes after
    the start of the tab). Every comment occupies a fixed-size point slot
    whatever its entry count, so the padding after the stored entries is
    skipped with a relative seek.

    Args:
        stream: A readable, seekable binary stream

    Returns:
        The raw comments in index order (COMMENT n refers to element n)

    Raises:
        DecodeError: If the comment count exceeds the block, an entry count
            exceeds its slot, or the stream is short
    """
    count = read_count(stream, "comment count")
    if count > MAX_COMMENTS:
        raise DecodeError(
            f"comment count {count} exceeds block capacity of {MAX_COMMENTS} comments"
        )
    comments = []
    for index in range(count):
        entry_count = read_count(stream, f"comment {index} entry count")
        if entry_count > MAX_POINT_ENTRIES:
            raise DecodeError(
                f"comment {index} declares {entry_count} point entries, "
                f"slot holds {MAX_POINT_ENTRIES}"
            )
        data = _read_exact(
            stream, entry_count * POINT_ENTRY_SIZE, f"comment {index} points"
        )
        entries = tuple(
            data[i:i + POINT_ENTRY_SIZE]
            for i in range(0, len(data), POINT_ENTRY_SIZE)
        )
        stream.seek(COMMENT_SLOT_SIZE - len(data), io.SEEK_CUR)
        comments.append(RawComment(entries))

    logger.debug(f"Decoded {count} raw comments")
    return tuple(comments)
