"""
hackasm CPU Package
===================

Hack architecture definitions shared by the assembler: instruction word
layout, the destination/computation/jump encoding tables and the
predefined memory map symbols.

Usage:
    from hackasm.cpu import (
        COMP_TABLE,
        encode_compute,
        encode_address,
    )
"""

from hackasm.cpu.hack import (
    # Word layout
    WORD_BITS,
    ADDRESS_BITS,
    MAX_ADDRESS,
    A_INSTRUCTION_PREFIX,
    C_INSTRUCTION_PREFIX,
    # Memory map
    VARIABLE_BASE,
    SCREEN_ADDRESS,
    KEYBOARD_ADDRESS,
    PREDEFINED_SYMBOLS,
    # Encoding tables
    DEST_TABLE,
    COMP_TABLE,
    JUMP_TABLE,
    # Encoders
    encode_dest,
    encode_comp,
    encode_jump,
    encode_compute,
    encode_address,
    is_predefined_symbol,
)

__all__ = [
    "WORD_BITS",
    "ADDRESS_BITS",
    "MAX_ADDRESS",
    "A_INSTRUCTION_PREFIX",
    "C_INSTRUCTION_PREFIX",
    "VARIABLE_BASE",
    "SCREEN_ADDRESS",
    "KEYBOARD_ADDRESS",
    "PREDEFINED_SYMBOLS",
    "DEST_TABLE",
    "COMP_TABLE",
    "JUMP_TABLE",
    "encode_dest",
    "encode_comp",
    "encode_jump",
    "encode_compute",
    "encode_address",
    "is_predefined_symbol",
]
