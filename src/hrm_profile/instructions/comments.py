"""
Comment Geometry
================

Comments in Human Resource Machine are small hand-drawn pictures. Each
one is stored as a flat list of 4-byte point entries; this module turns
that list back into the strokes the player drew.

Point Stream
------------
Entries are read left to right:

- Four zero bytes end the current stroke, even an empty one.
- Anything else is a point: x in bytes 0-1, y in bytes 2-3, both
  little-endian uint16 in a 0..65535 coordinate space.

A stroke with a single point is a dot. The stream does not need to end
with a separator; points left over at the end form the last stroke.
"""

from dataclasses import dataclass
import struct
from typing import Iterable

from hrm_profile.instructions.records import RawComment, SENTINEL_ENTRY


# Maximum coordinate on either axis
COORDINATE_MAX = 0xFFFF


@dataclass(frozen=True)
class CommentPoint:
    """A point of a comment stroke."""
    x: int
    y: int

    @classmethod
    def from_bytes(cls, data: bytes) -> "CommentPoint":
        return cls(*struct.unpack("<HH", data))


# A single unbroken stroke; length one is a dot, length zero draws nothing
CommentLine = tuple[CommentPoint, ...]

# One drawn comment, made of one or more strokes
Comment = tuple[CommentLine, ...]


def decode_comment(raw: RawComment) -> Comment:
    """
    Decode the point entries of one comment into strokes.

    Args:
        raw: The comment as read by decode_raw_comments()

    Returns:
        The strokes in drawing order
    """
    lines: list[CommentLine] = []
    line: list[CommentPoint] = []
    for entry in raw.entries:
        if entry == SENTINEL_ENTRY:
            lines.append(tuple(line))
            line = []
            continue
        line.append(CommentPoint.from_bytes(entry))

    if line:
        lines.append(tuple(line))
    return tuple(lines)


def decode_comments(raws: Iterable[RawComment]) -> tuple[Comment, ...]:
    """Decode every comment of a tab, keeping index order."""
    return tuple(decode_comment(raw) for raw in raws)
