"""
Human Resource Machine Instruction Set
======================================

This module defines the opcodes and operand modes stored in the
instruction records of a profile, together with the mnemonic names the
game uses when a program is copied out of the editor.

Opcodes
-------
The set is closed. Eleven opcodes are real instructions; one more value
(JUMP_TARGET, $0D) never executes and only reserves the slot a jump
lands on.

    $00 INBOX      $04 ADD      $08 JUMP
    $01 OUTBOX     $05 SUB      $09 JUMPZ
    $02 COPYFROM   $06 BUMPDN   $0A JUMPN
    $03 COPYTO     $07 BUMPUP   $0D (jump target)

Operand Modes
-------------
Only instructions that take a floor-tile argument use the mode field:

1. **DIRECT**: the argument is the tile number (COPYFROM 3)
2. **INDIRECT**: the argument names the tile holding the tile number
   (COPYFROM [3])
"""

from enum import IntEnum
from typing import Optional


# =============================================================================
# Opcode and Mode Enumerations
# =============================================================================

class OpCode(IntEnum):
    """Instruction opcodes as stored in the second word of a record."""
    INBOX = 0x0
    OUTBOX = 0x1
    COPYFROM = 0x2
    COPYTO = 0x3
    ADD = 0x4
    SUB = 0x5
    BUMPDN = 0x6
    BUMPUP = 0x7
    JUMP = 0x8
    JUMPZ = 0x9
    JUMPN = 0xA
    JUMP_TARGET = 0xD   # Placeholder slot, never rendered as an instruction

    @property
    def mnemonic(self) -> str:
        """Return the in-game mnemonic (empty for the jump-target marker)."""
        return MNEMONICS.get(self, "")

    def __str__(self) -> str:
        return self.mnemonic or self.name


class Mode(IntEnum):
    """Operand mode as stored in the third word of a record."""
    DIRECT = 0x1
    INDIRECT = 0x2


# =============================================================================
# Instruction Set Reference Tables
# =============================================================================

# Mnemonics of every real instruction, as the game prints them
MNEMONICS: dict[OpCode, str] = {
    OpCode.INBOX: "INBOX",
    OpCode.OUTBOX: "OUTBOX",
    OpCode.COPYFROM: "COPYFROM",
    OpCode.COPYTO: "COPYTO",
    OpCode.ADD: "ADD",
    OpCode.SUB: "SUB",
    OpCode.BUMPDN: "BUMPDN",
    OpCode.BUMPUP: "BUMPUP",
    OpCode.JUMP: "JUMP",
    OpCode.JUMPZ: "JUMPZ",
    OpCode.JUMPN: "JUMPN",
}

# Instructions taking a floor-tile argument
ARG_INSTRUCTIONS: frozenset[OpCode] = frozenset({
    OpCode.COPYFROM, OpCode.COPYTO,
    OpCode.ADD, OpCode.SUB,
    OpCode.BUMPDN, OpCode.BUMPUP,
})

# Instructions whose argument is the index of another slot
JUMP_INSTRUCTIONS: frozenset[OpCode] = frozenset({
    OpCode.JUMP, OpCode.JUMPZ, OpCode.JUMPN,
})


# =============================================================================
# Lookup Functions
# =============================================================================

def lookup_opcode(value: int) -> Optional[OpCode]:
    """
    Convert a raw opcode word to an OpCode.

    Args:
        value: The raw 32-bit opcode field

    Returns:
        The matching OpCode, or None if the value is outside the set
    """
    try:
        return OpCode(value)
    except ValueError:
        return None


def is_jump(op: int) -> bool:
    """Check if an opcode is one of the jump family (JUMP, JUMPZ, JUMPN)."""
    return op in JUMP_INSTRUCTIONS


def takes_argument(op: int) -> bool:
    """Check if an opcode takes a floor-tile argument."""
    return op in ARG_INSTRUCTIONS
