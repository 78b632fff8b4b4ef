"""
Hack Instruction Set Definition
===============================

This module defines the Hack machine-language encoding: the fixed-width
16-bit instruction formats, the destination/computation/jump bit tables,
and the memory map symbols every Hack program can use.

Instruction Formats
-------------------
The Hack CPU has exactly two instruction formats, both 16 bits wide:

1. **A-instruction** (address): ``@value``
   - ``0vvvvvvvvvvvvvvv``
   - Bit 15 is 0; bits 14-0 are an unsigned 15-bit value (0-32767)
   - Example: @21 -> 0000000000010101

2. **C-instruction** (compute): ``dest=comp;jump``
   - ``111accccccdddjjj``
   - Bits 15-13 are fixed 1s
   - ``a`` selects the A register (0) or memory M (1) as ALU input
   - ``cccccc`` are the six ALU control bits
   - ``ddd`` selects the destination registers (A, D, M)
   - ``jjj`` selects the jump condition
   - Example: D=D+1 -> 1110011111010000

The ``a`` bit and the six ALU bits are stored together as one 7-bit
computation code in COMP_TABLE.

Memory Map
----------
| Symbol        | Address | Purpose                             |
|---------------|---------|-------------------------------------|
| SP            | 0       | Stack pointer                       |
| LCL           | 1       | Local segment base                  |
| ARG           | 2       | Argument segment base               |
| THIS          | 3       | This segment base                   |
| THAT          | 4       | That segment base                   |
| R0-R15        | 0-15    | Virtual registers                   |
| SCREEN        | 16384   | Memory-mapped screen (8K words)     |
| KBD           | 24576   | Memory-mapped keyboard              |

User variables are allocated from address 16 upwards.
"""

from types import MappingProxyType
from typing import Mapping

from hackasm.errors import AddressRangeError, SourceLocation, UnknownMnemonicError


# =============================================================================
# Word Layout Constants
# =============================================================================

WORD_BITS = 16
ADDRESS_BITS = 15
MAX_ADDRESS = (1 << ADDRESS_BITS) - 1

# Leading bits of each instruction format
A_INSTRUCTION_PREFIX = "0"
C_INSTRUCTION_PREFIX = "111"

# First RAM address handed out to user variables
VARIABLE_BASE = 16

SCREEN_ADDRESS = 16384
KEYBOARD_ADDRESS = 24576


# =============================================================================
# Predefined Symbols
# =============================================================================

PREDEFINED_SYMBOLS: Mapping[str, int] = MappingProxyType({
    "SP": 0,
    "LCL": 1,
    "ARG": 2,
    "THIS": 3,
    "THAT": 4,
    **{f"R{i}": i for i in range(16)},
    "SCREEN": SCREEN_ADDRESS,
    "KBD": KEYBOARD_ADDRESS,
})


# =============================================================================
# Encoding Tables
# =============================================================================
# Key: mnemonic text exactly as written in source (after whitespace removal)
# Value: bit string for the field
#
# The empty string is a valid key in DEST_TABLE and JUMP_TABLE: it stands
# for an absent "dest=" or ";jump" part.
# =============================================================================

DEST_TABLE: Mapping[str, str] = MappingProxyType({
    "": "000",
    "M": "001",
    "D": "010",
    "MD": "011",
    "A": "100",
    "AM": "101",
    "AD": "110",
    "AMD": "111",
})

COMP_TABLE: Mapping[str, str] = MappingProxyType({
    # a = 0: ALU operates on A
    "0": "0101010",
    "1": "0111111",
    "-1": "0111010",
    "D": "0001100",
    "A": "0110000",
    "!D": "0001101",
    "!A": "0110001",
    "-D": "0001111",
    "-A": "0110011",
    "D+1": "0011111",
    "A+1": "0110111",
    "D-1": "0001110",
    "A-1": "0110010",
    "D+A": "0000010",
    "D-A": "0010011",
    "A-D": "0000111",
    "D&A": "0000000",
    "D|A": "0010101",
    # a = 1: ALU operates on M
    "M": "1110000",
    "!M": "1110001",
    "-M": "1110011",
    "M+1": "1110111",
    "M-1": "1110010",
    "D+M": "1000010",
    "D-M": "1010011",
    "M-D": "1000111",
    "D&M": "1000000",
    "D|M": "1010101",
})

JUMP_TABLE: Mapping[str, str] = MappingProxyType({
    "": "000",
    "JGT": "001",
    "JEQ": "010",
    "JGE": "011",
    "JLT": "100",
    "JNE": "101",
    "JLE": "110",
    "JMP": "111",
})


# =============================================================================
# Lookup Functions
# =============================================================================

def _lookup(
    table: Mapping[str, str],
    field: str,
    mnemonic: str,
    location: SourceLocation | None,
    source_line: str | None,
) -> str:
    try:
        return table[mnemonic]
    except KeyError:
        raise UnknownMnemonicError(
            field,
            mnemonic,
            location=location,
            source_line=source_line,
            valid_mnemonics=list(table),
        ) from None


def encode_dest(
    mnemonic: str,
    location: SourceLocation | None = None,
    source_line: str | None = None,
) -> str:
    """
    Encode a destination mnemonic ("", "M", "D", ..., "AMD") as 3 bits.

    Raises:
        UnknownMnemonicError: If the mnemonic is not a Hack destination
    """
    return _lookup(DEST_TABLE, "destination", mnemonic, location, source_line)


def encode_comp(
    mnemonic: str,
    location: SourceLocation | None = None,
    source_line: str | None = None,
) -> str:
    """
    Encode a computation mnemonic as 7 bits (a-bit + 6 ALU control bits).

    The computation is mandatory, so the empty string is rejected.

    Raises:
        UnknownMnemonicError: If the mnemonic is not a Hack computation
    """
    return _lookup(COMP_TABLE, "computation", mnemonic, location, source_line)


def encode_jump(
    mnemonic: str,
    location: SourceLocation | None = None,
    source_line: str | None = None,
) -> str:
    """
    Encode a jump mnemonic ("", "JGT", ..., "JMP") as 3 bits.

    Raises:
        UnknownMnemonicError: If the mnemonic is not a Hack jump condition
    """
    return _lookup(JUMP_TABLE, "jump", mnemonic, location, source_line)


def encode_compute(
    dest: str,
    comp: str,
    jump: str,
    location: SourceLocation | None = None,
    source_line: str | None = None,
) -> str:
    """
    Build a 16-bit C-instruction word.

    Field order is fixed: prefix (3) + comp (7) + dest (3) + jump (3).

    Args:
        dest: Destination mnemonic ("" when absent)
        comp: Computation mnemonic
        jump: Jump mnemonic ("" when absent)
        location: Source location for error messages
        source_line: Source text for error messages

    Returns:
        16-character string of '0'/'1'
    """
    return (
        C_INSTRUCTION_PREFIX
        + encode_comp(comp, location, source_line)
        + encode_dest(dest, location, source_line)
        + encode_jump(jump, location, source_line)
    )


def encode_address(
    value: int,
    location: SourceLocation | None = None,
    source_line: str | None = None,
) -> str:
    """
    Build a 16-bit A-instruction word for an address value.

    Raises:
        AddressRangeError: If value is outside 0..MAX_ADDRESS
    """
    if value < 0 or value > MAX_ADDRESS:
        raise AddressRangeError(value, MAX_ADDRESS, location=location, source_line=source_line)
    return A_INSTRUCTION_PREFIX + format(value, f"0{ADDRESS_BITS}b")


def is_predefined_symbol(name: str) -> bool:
    """Check if a name is one of the built-in Hack symbols."""
    return name in PREDEFINED_SYMBOLS
