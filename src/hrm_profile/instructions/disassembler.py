"""
Human Resource Machine Disassembler
===================================

Turns the raw instruction records of a tab into a symbolic program: the
same listing the game shows in its editor, with line numbers, jump
labels and comment references.

Output Shape
------------
The output has exactly one entry per raw slot, so a jump's target index
is also a valid index into the disassembly. Each entry is one of:

    CommentEntry      COMMENT 2        (no line number)
    JumpTarget        a:               (no line number)
    PlainInstruction  INBOX
    ArgInstruction    COPYFROM [3]
    JumpInstruction   JUMPZ a

Consumers dispatch on ``entry.kind`` (an EntryKind).

Algorithm
---------
Two passes over the raw records:

1. **Labels**: every jump's argument is a slot index; the first time a
   slot is seen as a target it gets the next label in the sequence
   a, b, ..., z, aa, ab, ...
2. **Emission**: a running line counter starting at 1 numbers the real
   instructions. Comments and jump-target slots never take a line
   number, which keeps the numbering identical to the game's. When a
   jump is emitted it also fills in its target slot.

Labels must exist before emission because a jump may come after the
slot it targets.

Usage:
    records = decode_instructions(stream)
    for entry in disassemble(records):
        print(entry)
"""

from dataclasses import dataclass
from enum import Enum, auto
import logging
from typing import ClassVar, Optional, Sequence, Union

from hrm_profile.errors import DecodeError
from hrm_profile.instructions.opcodes import (
    Mode,
    OpCode,
    is_jump,
    lookup_opcode,
    takes_argument,
)
from hrm_profile.instructions.records import RawInstruction


# Logger for this module
logger = logging.getLogger(__name__)


# =============================================================================
# Disassembled Entries
# =============================================================================

class EntryKind(Enum):
    """Tag identifying the variant of a disassembled entry."""
    COMMENT = auto()
    JUMP_TARGET = auto()
    PLAIN = auto()
    ARG = auto()
    JUMP = auto()


@dataclass(frozen=True)
class CommentEntry:
    """
    A comment placeholder.

    Attributes:
        index: Index of the drawn comment in the tab's comment block
    """
    index: int
    kind: ClassVar[EntryKind] = EntryKind.COMMENT

    def __str__(self) -> str:
        return f"COMMENT {self.index}"


@dataclass(frozen=True)
class JumpTarget:
    """
    A jump destination.

    Attributes:
        label: Label name, or None if no jump refers to this slot
        source_index: Slot index of the jump that lands here (None if orphaned)
    """
    label: Optional[str] = None
    source_index: Optional[int] = None
    kind: ClassVar[EntryKind] = EntryKind.JUMP_TARGET

    def __str__(self) -> str:
        return f"{self.label}:" if self.label else ""


@dataclass(frozen=True)
class PlainInstruction:
    """An instruction without an argument (INBOX, OUTBOX)."""
    line: int
    op: OpCode
    kind: ClassVar[EntryKind] = EntryKind.PLAIN

    def __str__(self) -> str:
        return self.op.mnemonic


@dataclass(frozen=True)
class ArgInstruction:
    """
    An instruction with a floor-tile argument.

    Attributes:
        line: Visible line number
        op: The opcode
        argument: Tile number
        indirect: True if the tile holds the address of the operand
    """
    line: int
    op: OpCode
    argument: int
    indirect: bool = False
    kind: ClassVar[EntryKind] = EntryKind.ARG

    @property
    def operand_str(self) -> str:
        return f"[{self.argument}]" if self.indirect else str(self.argument)

    def __str__(self) -> str:
        return f"{self.op.mnemonic} {self.operand_str}"


@dataclass(frozen=True)
class JumpInstruction:
    """
    A JUMP, JUMPZ or JUMPN.

    Attributes:
        line: Visible line number
        op: The opcode
        target_label: Label of the destination slot
        target_index: Slot index of the destination
    """
    line: int
    op: OpCode
    target_label: str
    target_index: int
    kind: ClassVar[EntryKind] = EntryKind.JUMP

    def __str__(self) -> str:
        return f"{self.op.mnemonic} {self.target_label}"


DisassembledEntry = Union[
    CommentEntry, JumpTarget, PlainInstruction, ArgInstruction, JumpInstruction
]

# Kinds that carry a visible line number
NUMBERED_KINDS = frozenset({EntryKind.PLAIN, EntryKind.ARG, EntryKind.JUMP})


# =============================================================================
# Labels
# =============================================================================

FIRST_LABEL = "a"


def next_label(label: str) -> str:
    """
    Return the label following the given one.

    Labels count in base 26 with digits a-z: "a" -> "b", "z" -> "aa",
    "az" -> "ba", "zz" -> "aaa".
    """
    chars = list(label)
    for i in range(len(chars) - 1, -1, -1):
        if chars[i] != "z":
            chars[i] = chr(ord(chars[i]) + 1)
            return "".join(chars)
        chars[i] = "a"
    return "a" + "".join(chars)


def make_labels(instructions: Sequence[RawInstruction]) -> dict[int, str]:
    """
    Assign a label to every slot that some jump refers to.

    Labels are handed out in the order targets are first discovered,
    scanning the jumps left to right. Several jumps to the same slot
    share its label.

    Args:
        instructions: The raw records of a tab

    Returns:
        Mapping of slot index to label name
    """
    labels: dict[int, str] = {}
    label = FIRST_LABEL
    for inst in instructions:
        if inst.is_comment or not is_jump(inst.opcode):
            continue
        if inst.argument not in labels:
            labels[inst.argument] = label
            label = next_label(label)
    return labels


# =============================================================================
# Disassembly
# =============================================================================

def disassemble(instructions: Sequence[RawInstruction]) -> tuple[DisassembledEntry, ...]:
    """
    Disassemble the raw records of a tab.

    Args:
        instructions: The raw records, as returned by decode_instructions()

    Returns:
        One entry per record, in slot order

    Raises:
        DecodeError: If a record holds an unknown opcode or a jump refers
            to a slot outside the sequence
    """
    count = len(instructions)
    labels = make_labels(instructions)
    entries: list[Optional[DisassembledEntry]] = [None] * count

    line = 1
    for i, inst in enumerate(instructions):
        # Comment index lives in the opcode word of a flagged slot
        if inst.is_comment:
            entries[i] = CommentEntry(inst.opcode)
            continue

        op = lookup_opcode(inst.opcode)
        if op is None:
            raise DecodeError(
                f"unknown opcode 0x{inst.opcode:X} in instruction slot {i}"
            )

        if op is OpCode.JUMP_TARGET:
            # Filled in by the jump that targets it
            if entries[i] is None:
                entries[i] = JumpTarget()
            continue

        if is_jump(op):
            target = inst.argument
            if target >= count:
                raise DecodeError(
                    f"{op.mnemonic} in slot {i} targets slot {target}, "
                    f"but the program has {count} slots"
                )
            label = labels[target]
            entries[i] = JumpInstruction(line, op, label, target)
            target_inst = instructions[target]
            if not target_inst.is_comment and target_inst.opcode == OpCode.JUMP_TARGET:
                entries[target] = JumpTarget(label, i)
        elif takes_argument(op):
            entries[i] = ArgInstruction(
                line, op, inst.argument, inst.mode == Mode.INDIRECT
            )
        else:
            entries[i] = PlainInstruction(line, op)

        line += 1

    logger.debug(
        f"Disassembled {count} slots into {line - 1} lines with {len(labels)} labels"
    )
    return tuple(entries)


def line_count(entries: Sequence[DisassembledEntry]) -> int:
    """Return the number of visible (numbered) lines in a disassembly."""
    return sum(1 for entry in entries if entry.kind in NUMBERED_KINDS)
