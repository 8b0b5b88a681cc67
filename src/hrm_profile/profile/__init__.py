"""
Profile Handling for Human Resource Machine
===========================================

Human Resource Machine keeps every program the player has written in a
single save file, profiles.bin. This package locates data inside that
file and decodes it.

- **layout**: byte offsets of floors and tabs, floor number mapping
- **decoder**: decode a tab, a floor or the whole profile

Quick Start
-----------
Decode a single tab:

    >>> from hrm_profile.profile import tab_address, decode_tab
    >>> with open("profiles.bin", "rb") as f:
    ...     tab = decode_tab(f, tab_address(floor=2, tab=0))
    >>> for entry in tab.code:
    ...     print(entry)

Walk the whole profile:

    >>> from hrm_profile.profile import decode_profile
    >>> with open("profiles.bin", "rb") as f:
    ...     profile = decode_profile(f)
    >>> for floor in profile:
    ...     print(floor.number, floor.size_challenge, floor.speed_challenge)
"""

from hrm_profile.profile.layout import (
    FILE_HEADER_OFFSET,
    FILE_HEADER_SIZE,
    FLOOR_HEADER_SIZE,
    FLOOR_SIZE,
    INSTRUCTIONS_SIZE,
    MAX_FLOOR,
    MISSING_FLOORS,
    NUM_FLOORS,
    SUPPORTED_PROFILES,
    TAB_SIZE,
    TABS_PER_FLOOR,
    check_floor,
    check_floor_index,
    check_profile,
    check_tab,
    comments_start_addr,
    floor_numbers,
    floor_start_addr,
    floor_to_index,
    index_to_floor,
    tab_address,
    tab_start_addr,
)
from hrm_profile.profile.decoder import (
    Floor,
    FloorHeader,
    Profile,
    Tab,
    decode_floor,
    decode_profile,
    decode_tab,
)

__all__ = [
    # Layout constants
    "FILE_HEADER_OFFSET",
    "FILE_HEADER_SIZE",
    "FLOOR_HEADER_SIZE",
    "FLOOR_SIZE",
    "INSTRUCTIONS_SIZE",
    "TAB_SIZE",
    "TABS_PER_FLOOR",
    "NUM_FLOORS",
    "MISSING_FLOORS",
    "MAX_FLOOR",
    "SUPPORTED_PROFILES",
    # Preconditions
    "check_profile",
    "check_floor",
    "check_floor_index",
    "check_tab",
    # Addressing
    "floor_to_index",
    "index_to_floor",
    "floor_numbers",
    "floor_start_addr",
    "tab_start_addr",
    "tab_address",
    "comments_start_addr",
    # Decoding
    "FloorHeader",
    "Tab",
    "Floor",
    "Profile",
    "decode_tab",
    "decode_floor",
    "decode_profile",
]
