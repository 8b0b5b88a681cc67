"""
Tests for Profile Layout Addressing
===================================

Covers the floor number mapping (permutation and missing floors), the
byte offsets of floors and tabs, and the addressing preconditions.
"""

import pytest

from hrm_profile.errors import PreconditionError
from hrm_profile.profile.layout import (
    FILE_HEADER_SIZE,
    FLOOR_HEADER_SIZE,
    FLOOR_SIZE,
    INSTRUCTIONS_SIZE,
    MISSING_FLOORS,
    NUM_FLOORS,
    TAB_SIZE,
    check_profile,
    comments_start_addr,
    floor_numbers,
    floor_start_addr,
    floor_to_index,
    index_to_floor,
    tab_address,
    tab_start_addr,
)


# =============================================================================
# Constants
# =============================================================================

class TestConstants:
    """Tests for the fixed layout sizes."""

    def test_floor_size(self):
        """A floor is its header plus three tabs."""
        assert FLOOR_SIZE == 40 + 3 * 46252

    def test_tab_holds_instructions_and_comments(self):
        """The tab size fits the instruction block and 41 comment slots."""
        assert TAB_SIZE == INSTRUCTIONS_SIZE + 4 + 41 * (4 + 1024)

    def test_stored_floor_count(self):
        """Every displayed floor except the cut-scenes is stored."""
        assert len(floor_numbers()) == NUM_FLOORS
        assert not set(floor_numbers()) & set(MISSING_FLOORS)


# =============================================================================
# Floor Number Mapping
# =============================================================================

class TestFloorMapping:
    """Tests for floor_to_index() and index_to_floor()."""

    @pytest.mark.parametrize("floor,index", [
        (1, 0),
        (4, 3),
        (6, 4),
        (13, 11),
        (16, 13),
        (19, 15),
        (32, 27),
        (34, 28),
        (35, 29),
        (37, 30),
        (39, 31),
        (41, 32),
        (36, 33),
        (38, 34),
        (40, 35),
    ])
    def test_known_indices(self, floor, index):
        assert floor_to_index(floor) == index

    def test_round_trip_every_floor(self):
        """index_to_floor() undoes floor_to_index() for every stored floor."""
        for floor in floor_numbers():
            assert index_to_floor(floor_to_index(floor)) == floor

    def test_round_trip_every_index(self):
        """floor_to_index() undoes index_to_floor() for every index."""
        for index in range(NUM_FLOORS):
            assert floor_to_index(index_to_floor(index)) == index

    def test_indices_are_a_permutation(self):
        """Stored floors fill every index exactly once."""
        indices = sorted(floor_to_index(floor) for floor in floor_numbers())
        assert indices == list(range(NUM_FLOORS))

    def test_monotonic_outside_permuted_block(self):
        """Below the permuted block, higher floors are stored later."""
        floors = [f for f in floor_numbers() if f < 36]
        indices = [floor_to_index(f) for f in floors]
        assert indices == sorted(indices)

    @pytest.mark.parametrize("floor", MISSING_FLOORS)
    def test_cut_scene_floors_rejected(self, floor):
        with pytest.raises(PreconditionError, match="cut-scene"):
            floor_to_index(floor)

    @pytest.mark.parametrize("floor", [0, -1, 42, 100])
    def test_out_of_range_floor_rejected(self, floor):
        with pytest.raises(PreconditionError):
            floor_to_index(floor)

    @pytest.mark.parametrize("index", [-1, NUM_FLOORS])
    def test_out_of_range_index_rejected(self, index):
        with pytest.raises(PreconditionError):
            index_to_floor(index)


# =============================================================================
# Addresses
# =============================================================================

class TestAddresses:
    """Tests for floor and tab byte offsets."""

    def test_first_floor_follows_file_header(self):
        assert floor_start_addr(1, 0) == FILE_HEADER_SIZE

    def test_first_tab(self):
        assert tab_start_addr(1, 0, 0) == FILE_HEADER_SIZE + FLOOR_HEADER_SIZE

    def test_tab_addresses(self):
        """Offsets match the fixed sizes for a floor past the missing ones."""
        index = floor_to_index(20)
        expected = 36 + index * FLOOR_SIZE + 40 + 2 * 46252
        assert tab_start_addr(1, index, 2) == expected
        assert tab_address(20, 2) == expected

    def test_comments_follow_instruction_block(self):
        start = tab_address(2, 1)
        assert comments_start_addr(start) == start + 4100

    def test_last_tab_ends_at_file_end(self):
        last = tab_start_addr(1, NUM_FLOORS - 1, 2) + TAB_SIZE
        assert last == FILE_HEADER_SIZE + NUM_FLOORS * FLOOR_SIZE

    @pytest.mark.parametrize("tab", [-1, 3])
    def test_bad_tab_rejected(self, tab):
        with pytest.raises(PreconditionError):
            tab_start_addr(1, 0, tab)

    @pytest.mark.parametrize("profile", [0, 2, 3])
    def test_unsupported_profile_rejected(self, profile):
        with pytest.raises(PreconditionError, match="only slot 1"):
            check_profile(profile)
        with pytest.raises(PreconditionError):
            floor_start_addr(profile, 0)

    def test_precondition_is_value_error(self):
        """Callers may treat bad addressing as a plain ValueError."""
        with pytest.raises(ValueError):
            tab_address(5, 0)
