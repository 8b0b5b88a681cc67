"""
HRM Profile Tool - Test Configuration
=====================================

Fixtures for building synthetic profile data. Nothing here reads a real
save file: tabs, floors and whole profiles are assembled byte by byte
with struct, using the same record layout the game writes.

It provides:
- ``builder``: a ProfileBuilder for records, tabs and full profiles
- ``sample_program``: a short program exercising every entry kind
- ``profile_file``: a profiles.bin on disk holding the sample program
"""

import io
import struct
from pathlib import Path

import pytest

from hrm_profile.instructions import OpCode, Mode, RawInstruction
from hrm_profile.instructions.records import COMMENT_SLOT_SIZE
from hrm_profile.profile.layout import (
    FILE_HEADER_SIZE,
    FLOOR_HEADER_SIZE,
    FLOOR_SIZE,
    INSTRUCTIONS_SIZE,
    NUM_FLOORS,
    TAB_SIZE,
    floor_to_index,
)


# =============================================================================
# Record Builders
# =============================================================================

class ProfileBuilder:
    """Assemble raw profile bytes for tests."""

    # -------------------------------------------------------------------------
    # Single records
    # -------------------------------------------------------------------------

    @staticmethod
    def inst(op: int, argument: int = 0, mode: int = Mode.DIRECT) -> RawInstruction:
        return RawInstruction(0, int(op), int(mode), argument)

    @staticmethod
    def plain(op: int) -> RawInstruction:
        return RawInstruction(0, int(op), 0, 0)

    @staticmethod
    def jump(target: int, op: int = OpCode.JUMP) -> RawInstruction:
        return RawInstruction(0, int(op), 0, target)

    @staticmethod
    def target() -> RawInstruction:
        return RawInstruction(0, int(OpCode.JUMP_TARGET), 0, 0)

    @staticmethod
    def comment(index: int) -> RawInstruction:
        return RawInstruction(1, index, 0, 0)

    @staticmethod
    def point(x: int, y: int) -> bytes:
        return struct.pack("<HH", x, y)

    SENTINEL = b"\x00\x00\x00\x00"

    # -------------------------------------------------------------------------
    # Blocks
    # -------------------------------------------------------------------------

    def instruction_block(self, records) -> bytes:
        """Count word, records, zero padding up to the 4100-byte block."""
        data = struct.pack("<I", len(records))
        data += b"".join(record.to_bytes() for record in records)
        return data + bytes(INSTRUCTIONS_SIZE - len(data))

    def comment_block(self, comments) -> bytes:
        """Comment count, then each comment's entry count and padded slot."""
        data = struct.pack("<I", len(comments))
        for entries in comments:
            body = b"".join(entries)
            data += struct.pack("<I", len(entries))
            data += body + bytes(COMMENT_SLOT_SIZE - len(body))
        return data

    def tab(self, records=(), comments=()) -> bytes:
        """A complete TAB_SIZE tab."""
        data = self.instruction_block(list(records)) + self.comment_block(list(comments))
        return data + bytes(TAB_SIZE - len(data))

    def floor_header(self, size=None, speed=None) -> bytes:
        """A floor header with optional challenge results."""
        return struct.pack(
            "<IIIIiiIIII",
            0, 0, 0, 0,
            1 if size is not None else 0,
            1 if speed is not None else 0,
            size or 0,
            speed or 0,
            0, 0,
        )

    def profile(self, tabs=None, headers=None) -> bytes:
        """
        A full profile for slot 1.

        Args:
            tabs: {(floor number, tab index): tab bytes}
            headers: {floor number: floor header bytes}
        """
        data = bytearray(FILE_HEADER_SIZE + NUM_FLOORS * FLOOR_SIZE)
        for floor, header in (headers or {}).items():
            start = FILE_HEADER_SIZE + floor_to_index(floor) * FLOOR_SIZE
            data[start:start + FLOOR_HEADER_SIZE] = header
        for (floor, tab), tab_data in (tabs or {}).items():
            start = (
                FILE_HEADER_SIZE + floor_to_index(floor) * FLOOR_SIZE
                + FLOOR_HEADER_SIZE + tab * TAB_SIZE
            )
            data[start:start + TAB_SIZE] = tab_data
        return bytes(data)

    def stream(self, data: bytes) -> io.BytesIO:
        return io.BytesIO(data)


@pytest.fixture
def builder() -> ProfileBuilder:
    """Fixture: a ProfileBuilder."""
    return ProfileBuilder()


# =============================================================================
# Sample Program
# =============================================================================

@pytest.fixture
def sample_program(builder):
    """
    Fixture: (records, comments) for a small program.

    Listing:
        0  b:
        1  INBOX
        2  COPYTO 0
        3  JUMPZ a
        4  COMMENT 0
        5  COPYFROM [0]
        6  OUTBOX
        7  JUMP b
        8  a:
    """
    b = builder
    records = [
        b.target(),
        b.plain(OpCode.INBOX),
        b.inst(OpCode.COPYTO, 0),
        b.jump(8, OpCode.JUMPZ),
        b.comment(0),
        b.inst(OpCode.COPYFROM, 0, Mode.INDIRECT),
        b.plain(OpCode.OUTBOX),
        b.jump(0),
        b.target(),
    ]
    comments = [
        [b.point(100, 200), b.point(300, 400), b.SENTINEL, b.point(65535, 65535)],
    ]
    return records, comments


@pytest.fixture
def profile_file(tmp_path, builder, sample_program) -> Path:
    """Fixture: profiles.bin with the sample program on floor 2, tab 0."""
    records, comments = sample_program
    data = builder.profile(
        tabs={(2, 0): builder.tab(records, comments)},
        headers={2: builder.floor_header(size=6, speed=25)},
    )
    path = tmp_path / "profiles.bin"
    path.write_bytes(data)
    return path
