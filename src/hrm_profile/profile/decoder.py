"""
Profile Decoder
===============

Walks a whole profiles.bin (or a single floor or tab of it) and returns
fully decoded programs together with each floor's challenge results.

The decoder only seeks and reads; opening the file is the caller's job.
Every decode call takes over the stream position for its duration.

Usage:
    with open("profiles.bin", "rb") as f:
        profile = decode_profile(f)

    floor = profile.get_floor(12)
    for entry in floor.tabs[0].code:
        print(entry)
"""

from dataclasses import dataclass
import io
import logging
import struct
from typing import BinaryIO, Optional

from hrm_profile.errors import DecodeError
from hrm_profile.instructions import (
    Comment,
    DisassembledEntry,
    RawComment,
    RawInstruction,
    decode_comments,
    decode_instructions,
    decode_raw_comments,
    disassemble,
)
from hrm_profile.profile.layout import (
    FLOOR_HEADER_SIZE,
    NUM_FLOORS,
    TABS_PER_FLOOR,
    check_profile,
    comments_start_addr,
    floor_start_addr,
    floor_to_index,
    index_to_floor,
    tab_start_addr,
)


# Logger for this module
logger = logging.getLogger(__name__)


# =============================================================================
# Floor Header
# =============================================================================

@dataclass(frozen=True)
class FloorHeader:
    """
    The 40-byte header at the start of each floor record.

    Structure (little-endian):
        Offset  Size    Description
        ------  ----    -----------
        0       16      Unknown (4 x uint32)
        16      4       Size challenge completed (int32, > 0 when met)
        20      4       Speed challenge completed (int32, > 0 when met)
        24      4       Size challenge: command count (uint32)
        28      4       Speed challenge: step count (uint32)
        32      8       Unknown (2 x uint32)
    """
    unknown0: int
    unknown1: int
    unknown2: int
    unknown3: int
    size_challenge_completed: int
    speed_challenge_completed: int
    size_challenge_commands: int
    speed_challenge_steps: int
    unknown8: int
    unknown9: int

    FORMAT = "<IIIIiiIIII"

    @classmethod
    def from_bytes(cls, data: bytes) -> "FloorHeader":
        if len(data) < FLOOR_HEADER_SIZE:
            raise DecodeError(
                "truncated floor header",
                expected=FLOOR_HEADER_SIZE,
                actual=len(data),
            )
        return cls(*struct.unpack_from(cls.FORMAT, data))

    @classmethod
    def read(cls, stream: BinaryIO) -> "FloorHeader":
        """Read a floor header from a positioned stream."""
        offset = stream.tell()
        data = stream.read(FLOOR_HEADER_SIZE)
        if len(data) < FLOOR_HEADER_SIZE:
            raise DecodeError(
                "truncated floor header",
                offset=offset,
                expected=FLOOR_HEADER_SIZE,
                actual=len(data),
            )
        return cls.from_bytes(data)

    @property
    def size_challenge(self) -> Optional[int]:
        """Command count achieved, or None if the size challenge is not met."""
        if self.size_challenge_completed > 0:
            return self.size_challenge_commands
        return None

    @property
    def speed_challenge(self) -> Optional[int]:
        """Step count achieved, or None if the speed challenge is not met."""
        if self.speed_challenge_completed > 0:
            return self.speed_challenge_steps
        return None


# =============================================================================
# Decoded Structures
# =============================================================================

@dataclass(frozen=True)
class Tab:
    """
    A decoded program tab.

    Attributes:
        offset: File offset of the tab
        instructions: Raw instruction records
        code: Disassembled program (one entry per record)
        raw_comments: Raw comment point slots
        comments: Decoded comment strokes
    """
    offset: int
    instructions: tuple[RawInstruction, ...]
    code: tuple[DisassembledEntry, ...]
    raw_comments: tuple[RawComment, ...]
    comments: tuple[Comment, ...]

    @property
    def is_empty(self) -> bool:
        return not self.instructions


@dataclass(frozen=True)
class Floor:
    """
    A decoded floor.

    Attributes:
        number: Floor number as shown in the game
        index: Storage index in the file
        offset: File offset of the floor record
        header: The raw floor header
        tabs: The three program tabs
    """
    number: int
    index: int
    offset: int
    header: FloorHeader
    tabs: tuple[Tab, ...]

    @property
    def size_challenge(self) -> Optional[int]:
        return self.header.size_challenge

    @property
    def speed_challenge(self) -> Optional[int]:
        return self.header.speed_challenge


@dataclass(frozen=True)
class Profile:
    """A decoded profile: every stored floor, in storage order."""
    floors: tuple[Floor, ...]

    def get_floor(self, number: int) -> Floor:
        """Return a floor by its in-game number."""
        return self.floors[floor_to_index(number)]

    def __iter__(self):
        """Iterate floors in display order."""
        return iter(sorted(self.floors, key=lambda floor: floor.number))


# =============================================================================
# Decoding
# =============================================================================

def decode_tab(stream: BinaryIO, tab_start: int) -> Tab:
    """
    Decode one tab.

    Args:
        stream: Seekable binary stream over the profile
        tab_start: File offset of the tab, e.g. from tab_start_addr()

    Raises:
        DecodeError: If the tab cannot be decoded
    """
    stream.seek(tab_start, io.SEEK_SET)
    instructions = decode_instructions(stream)
    code = disassemble(instructions)

    stream.seek(comments_start_addr(tab_start), io.SEEK_SET)
    raw_comments = decode_raw_comments(stream)
    comments = decode_comments(raw_comments)

    return Tab(
        offset=tab_start,
        instructions=instructions,
        code=code,
        raw_comments=raw_comments,
        comments=comments,
    )


def decode_floor(stream: BinaryIO, floor_index: int, profile: int = 1) -> Floor:
    """
    Decode one floor record: its header and all three tabs.

    Args:
        stream: Seekable binary stream over the profile
        floor_index: Storage index, e.g. from floor_to_index()
        profile: Save slot (only 1 is supported)
    """
    floor_start = floor_start_addr(profile, floor_index)
    stream.seek(floor_start, io.SEEK_SET)
    header = FloorHeader.read(stream)

    tabs = tuple(
        decode_tab(stream, tab_start_addr(profile, floor_index, tab))
        for tab in range(TABS_PER_FLOOR)
    )
    number = index_to_floor(floor_index)
    logger.debug(f"Decoded floor {number} (index {floor_index}) at 0x{floor_start:X}")

    return Floor(
        number=number,
        index=floor_index,
        offset=floor_start,
        header=header,
        tabs=tabs,
    )


def decode_profile(stream: BinaryIO, profile: int = 1) -> Profile:
    """
    Decode every floor of a profile.

    Args:
        stream: Seekable binary stream over profiles.bin
        profile: Save slot (only 1 is supported)

    Returns:
        The decoded profile

    Raises:
        PreconditionError: If the profile slot is not supported
        DecodeError: If any tab cannot be decoded
    """
    check_profile(profile)
    floors = tuple(
        decode_floor(stream, floor_index, profile)
        for floor_index in range(NUM_FLOORS)
    )
    logger.info(f"Decoded {len(floors)} floors from profile slot {profile}")
    return Profile(floors=floors)
