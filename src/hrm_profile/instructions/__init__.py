"""
Instruction Decoding and Disassembly
====================================

This package decodes the program stored in one tab of a profile:

- **records**: the raw 16-byte instruction records and the raw comment
  point slots, read from a positioned stream
- **disassembler**: raw records -> numbered, labelled program listing
- **comments**: raw comment point entries -> drawn strokes
- **opcodes**: the instruction set

Usage:
    from hrm_profile.instructions import decode_instructions, disassemble

    stream.seek(tab_start)
    program = disassemble(decode_instructions(stream))
"""

from hrm_profile.instructions.opcodes import (
    ARG_INSTRUCTIONS,
    JUMP_INSTRUCTIONS,
    MNEMONICS,
    Mode,
    OpCode,
)
from hrm_profile.instructions.records import (
    COMMENT_SLOT_SIZE,
    INSTRUCTION_RECORD_SIZE,
    MAX_COMMENTS,
    MAX_INSTRUCTIONS,
    RawComment,
    RawInstruction,
    decode_instructions,
    decode_raw_comments,
)
from hrm_profile.instructions.comments import (
    Comment,
    CommentLine,
    CommentPoint,
    decode_comment,
    decode_comments,
)
from hrm_profile.instructions.disassembler import (
    ArgInstruction,
    CommentEntry,
    DisassembledEntry,
    EntryKind,
    JumpInstruction,
    JumpTarget,
    PlainInstruction,
    disassemble,
    line_count,
    make_labels,
    next_label,
)

__all__ = [
    # Opcodes
    "OpCode",
    "Mode",
    "MNEMONICS",
    "ARG_INSTRUCTIONS",
    "JUMP_INSTRUCTIONS",
    # Raw records
    "RawInstruction",
    "RawComment",
    "decode_instructions",
    "decode_raw_comments",
    "INSTRUCTION_RECORD_SIZE",
    "MAX_INSTRUCTIONS",
    "MAX_COMMENTS",
    "COMMENT_SLOT_SIZE",
    # Comment geometry
    "CommentPoint",
    "CommentLine",
    "Comment",
    "decode_comment",
    "decode_comments",
    # Disassembly
    "EntryKind",
    "CommentEntry",
    "JumpTarget",
    "PlainInstruction",
    "ArgInstruction",
    "JumpInstruction",
    "DisassembledEntry",
    "disassemble",
    "make_labels",
    "next_label",
    "line_count",
]
