"""
HRM Profile Tool Error Hierarchy
================================

This module defines the exception hierarchy for the whole package.
All exceptions inherit from HRMError, allowing callers to catch every
tool-related error with a single except clause if desired.

Exception Hierarchy
-------------------
HRMError (base)
├── ProfileError (profile file handling)
│   ├── FormatError - the binary data does not match the expected layout
│   │   └── DecodeError - a record could not be decoded (short read, bad count)
│   └── ProfileNotFoundError - no profiles.bin could be located
└── PreconditionError - caller asked for a floor/tab/profile that cannot exist

Design Philosophy
-----------------
A truncated or malformed record cannot be meaningfully interpreted, so
decoding never returns partial results: a tab either decodes fully or the
call raises. Out-of-range addressing requests are programming errors at
the caller's boundary; PreconditionError therefore also derives from
ValueError.
"""

from typing import Optional


# =============================================================================
# Base Exception Class
# =============================================================================

class HRMError(Exception):
    """
    Base exception for all HRM profile tool errors.

    Example:

        try:
            profile = decode_profile(stream)
        except HRMError as e:
            print(f"Error: {e}")
    """
    pass


# =============================================================================
# Profile Exceptions
# =============================================================================

class ProfileError(HRMError):
    """Base exception for profile file handling errors."""
    pass


class FormatError(ProfileError):
    """
    The profile data does not follow the fixed on-disk layout.

    Raised when:
    - A declared length exceeds the bytes available in the stream
    - A declared count exceeds the fixed block that holds it
    - A record carries a value outside its closed set (unknown opcode)
    - A jump refers to a slot outside the instruction sequence
    """
    pass


class DecodeError(FormatError):
    """
    A record could not be decoded from the stream.

    Attributes:
        offset: Stream position where the failing read started (if known)
        expected: Number of bytes the record needed
        actual: Number of bytes that were actually available
    """

    def __init__(
        self,
        message: str,
        offset: Optional[int] = None,
        expected: Optional[int] = None,
        actual: Optional[int] = None,
    ):
        self.message = message
        self.offset = offset
        self.expected = expected
        self.actual = actual
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        parts = [self.message]
        if self.expected is not None and self.actual is not None:
            parts.append(f"(needed {self.expected} bytes, got {self.actual})")
        if self.offset is not None:
            parts.append(f"at offset 0x{self.offset:X}")
        return " ".join(parts)


class ProfileNotFoundError(ProfileError):
    """
    No profile file could be located.

    Raised when none of the default locations hold a profiles.bin, or
    when several do and the choice would be ambiguous.

    Attributes:
        candidates: The paths that were considered
    """

    def __init__(self, message: str, candidates: Optional[list[str]] = None):
        self.candidates = candidates or []
        super().__init__(message)


# =============================================================================
# Caller Contract Violations
# =============================================================================

class PreconditionError(HRMError, ValueError):
    """
    The caller asked for something the layout cannot contain.

    Examples:
        - Floor number 5 (a cut-scene, never stored on disk)
        - Tab index 3 (floors hold tabs 0, 1 and 2)
        - Profile slot 2 (only slot 1 is supported currently)
    """
    pass
