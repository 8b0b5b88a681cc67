"""
HRM Profile Tool - Human Resource Machine Save File Decoder
===========================================================

This package reads the programs a player has written in Human Resource
Machine out of the game's save file, profiles.bin.

The save file holds one block per floor. Each floor has three program
tabs, and each tab stores up to 256 instruction records followed by the
comments (hand-drawn labels) the player attached to the program.

Main Components
---------------
- **profile**: floor and tab addressing, whole-profile decoding
- **instructions**: raw record decoding, disassembly, comment geometry
- **render**: text (game copy/paste format) and SVG output
- **config**: environment configuration and save-file discovery

Quick Start
-----------
Print a program in the game's copy/paste format:
    >>> from hrm_profile.profile import tab_address
    >>> from hrm_profile.render import TextOptions, render_tab_text
    >>> with open("profiles.bin", "rb") as f:
    ...     f.seek(tab_address(floor=2, tab=0))
    ...     print(render_tab_text(f, TextOptions()))

Or use the command-line tool:
    $ hrm text 1 2 1
    $ hrm svg 1 2 1 -o floor2.svg

Version History
---------------
1.0.0 - Initial release with text and SVG output
"""

__version__ = "1.0.0"

# =============================================================================
# Public API Exports
# =============================================================================

from hrm_profile.errors import (
    HRMError,
    ProfileError,
    FormatError,
    DecodeError,
    ProfileNotFoundError,
    PreconditionError,
)
from hrm_profile.instructions import (
    OpCode,
    Mode,
    RawInstruction,
    RawComment,
    decode_instructions,
    decode_raw_comments,
    decode_comments,
    disassemble,
)
from hrm_profile.profile import (
    decode_tab,
    decode_floor,
    decode_profile,
    tab_address,
    floor_to_index,
    index_to_floor,
)
from hrm_profile.render import (
    TextOptions,
    render_tab_text,
    render_tab_svg,
)
from hrm_profile.config import ToolConfig, find_profile

__all__ = [
    # Version
    "__version__",
    # Errors
    "HRMError",
    "ProfileError",
    "FormatError",
    "DecodeError",
    "ProfileNotFoundError",
    "PreconditionError",
    # Instructions
    "OpCode",
    "Mode",
    "RawInstruction",
    "RawComment",
    "decode_instructions",
    "decode_raw_comments",
    "decode_comments",
    "disassemble",
    # Profile
    "decode_tab",
    "decode_floor",
    "decode_profile",
    "tab_address",
    "floor_to_index",
    "index_to_floor",
    # Rendering
    "TextOptions",
    "render_tab_text",
    "render_tab_svg",
    # Configuration
    "ToolConfig",
    "find_profile",
]
