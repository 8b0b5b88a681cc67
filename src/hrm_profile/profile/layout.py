"""
Profile Byte Layout
===================

Pure address arithmetic for profiles.bin. Nothing here reads data: every
size is a constant of the format.

File Structure
--------------
    Offset  Size        Description
    ------  ----        -----------
    0       36          File header
    36      ...         36 floor records, in storage order

    Floor record (40 + 3 * 46252 bytes):
        0       40      Floor header (challenge results)
        40      46252   Tab 0
        46292   46252   Tab 1
        92544   46252   Tab 2

    Tab (46252 bytes):
        0       4100    Instruction block
        4100    ...     Comment block

Floor Numbering
---------------
Floors are numbered 1-41 in the game, but only 36 are stored: the
cut-scene floors (5, 15, 18, 27, 33) have no program. The last six
floors are also stored in a different order from the one the game shows.
floor_to_index() and index_to_floor() translate between the two.
"""

from hrm_profile.errors import PreconditionError


# =============================================================================
# Format Constants
# =============================================================================

FILE_HEADER_OFFSET = 0
FILE_HEADER_SIZE = 36
FLOOR_HEADER_SIZE = 40
TAB_SIZE = 46252
INSTRUCTIONS_SIZE = 4100
TABS_PER_FLOOR = 3
FLOOR_SIZE = FLOOR_HEADER_SIZE + TABS_PER_FLOOR * TAB_SIZE

# Floors present in the save file
NUM_FLOORS = 36

# Highest floor number shown in the game
MAX_FLOOR = 41

# Cut-scene floors, never stored
MISSING_FLOORS = (5, 15, 18, 27, 33)

# Storage order of the last floors differs from the display order; this
# maps a display number to the number that occupies its storage position
FLOOR_PERMUTATION = {
    36: 39,
    37: 36,
    38: 40,
    39: 37,
    40: 41,
    41: 38,
}

_INVERSE_PERMUTATION = {v: k for k, v in FLOOR_PERMUTATION.items()}

# Only the first save slot can be located currently
SUPPORTED_PROFILES = (1,)


# =============================================================================
# Validation
# =============================================================================

def check_profile(profile: int) -> None:
    """
    Check the profile slot is supported.

    The file holds several save slots but their placement is not known,
    so only slot 1 is accepted.

    Raises:
        PreconditionError: For any slot other than 1
    """
    if profile not in SUPPORTED_PROFILES:
        raise PreconditionError(
            f"profile slot {profile} is not supported; only slot 1 can be decoded currently"
        )


def check_floor(floor: int) -> None:
    """Raise PreconditionError unless floor is a stored, in-game floor number."""
    if not 1 <= floor <= MAX_FLOOR:
        raise PreconditionError(f"floor {floor} is out of range (1-{MAX_FLOOR})")
    if floor in MISSING_FLOORS:
        raise PreconditionError(f"floor {floor} is a cut-scene and holds no program")


def check_floor_index(floor_index: int) -> None:
    """Raise PreconditionError unless floor_index addresses a stored floor."""
    if not 0 <= floor_index < NUM_FLOORS:
        raise PreconditionError(
            f"floor index {floor_index} is out of range (0-{NUM_FLOORS - 1})"
        )


def check_tab(tab: int) -> None:
    """Raise PreconditionError unless tab is 0, 1 or 2."""
    if not 0 <= tab < TABS_PER_FLOOR:
        raise PreconditionError(
            f"tab {tab} is out of range (0-{TABS_PER_FLOOR - 1})"
        )


# =============================================================================
# Floor Number Mapping
# =============================================================================

def floor_to_index(floor: int) -> int:
    """
    Convert an in-game floor number to its storage index.

    Args:
        floor: Floor number as shown in the game (1-41, not a cut-scene)

    Returns:
        Index of the floor record in the file (0-35)

    Example:
        >>> floor_to_index(1)
        0
        >>> floor_to_index(6)
        4
    """
    check_floor(floor)
    floor = FLOOR_PERMUTATION.get(floor, floor)
    skipped = sum(1 for missing in MISSING_FLOORS if missing <= floor)
    return floor - skipped - 1


def index_to_floor(floor_index: int) -> int:
    """
    Convert a storage index to the in-game floor number.

    This is the exact inverse of floor_to_index().

    Args:
        floor_index: Index of the floor record in the file (0-35)

    Returns:
        Floor number as shown in the game
    """
    check_floor_index(floor_index)
    floor = floor_index + 1
    for missing in MISSING_FLOORS:
        if floor >= missing:
            floor += 1
    return _INVERSE_PERMUTATION.get(floor, floor)


def floor_numbers() -> list[int]:
    """Return every stored floor number, in display order."""
    return [
        floor for floor in range(1, MAX_FLOOR + 1)
        if floor not in MISSING_FLOORS
    ]


# =============================================================================
# Addresses
# =============================================================================

def floor_start_addr(profile: int, floor_index: int) -> int:
    """
    Return the file offset of a floor record.

    Args:
        profile: Save slot (only 1 is supported)
        floor_index: Storage index, e.g. from floor_to_index()
    """
    check_profile(profile)
    check_floor_index(floor_index)
    return FILE_HEADER_OFFSET + FILE_HEADER_SIZE + floor_index * FLOOR_SIZE


def tab_start_addr(profile: int, floor_index: int, tab: int) -> int:
    """
    Return the file offset of a tab (its instruction count word).

    Args:
        profile: Save slot (only 1 is supported)
        floor_index: Storage index, e.g. from floor_to_index()
        tab: Tab index, 0-2
    """
    check_tab(tab)
    return floor_start_addr(profile, floor_index) + FLOOR_HEADER_SIZE + tab * TAB_SIZE


def tab_address(floor: int, tab: int, profile: int = 1) -> int:
    """Return the file offset of a tab given the in-game floor number."""
    return tab_start_addr(profile, floor_to_index(floor), tab)


def comments_start_addr(tab_start: int) -> int:
    """Return the file offset of a tab's comment block."""
    return tab_start + INSTRUCTIONS_SIZE
