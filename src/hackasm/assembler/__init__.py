"""
Hack Assembler
==============

This module provides a two-pass assembler for the Hack computer, turning
symbolic Hack assembly (.asm) into the textual binary .hack format.

Main Components
---------------
- **Assembler**: Main assembler class that reads source and writes output
- **Parser**: decode_line / parse_source classify each line as a Command
- **SymbolTable**: Predefined symbols, labels and variables
- **CodeGenerator**: Two-pass label collection and code generation

Assembly Process
----------------
1. **Pass 1 (CodeGenerator)**:
   - Decode each line (comments and whitespace removed)
   - Count A- and C-instructions; bind each (LABEL) to the next address

2. **Pass 2 (CodeGenerator)**:
   - Decode each line again from the start
   - Resolve @operands (literal, symbol, or new variable from 16 upwards)
   - Emit one 16-bit word per instruction

Example Usage
-------------
>>> from hackasm.assembler import Assembler
>>> asm = Assembler()
>>> print(asm.assemble_string('''
... (LOOP)
...     @LOOP
...     0;JMP     // spin forever
... '''), end="")
0000000000000000
1110101010000111

Supported Features
------------------
- Full Hack instruction set (all 28 computations, 8 destinations, 8 jumps)
- Predefined symbols (SP, LCL, ARG, THIS, THAT, R0-R15, SCREEN, KBD)
- Labels with forward references
- Variables allocated from RAM address 16
- Listing file generation
- Symbol table output
"""

from hackasm.assembler.assembler import Assembler, assemble, assemble_file
from hackasm.assembler.parser import (
    Command,
    CommandType,
    decode_line,
    parse_source,
    split_compute,
    strip_line,
)
from hackasm.assembler.symbols import Symbol, SymbolKind, SymbolTable
from hackasm.assembler.codegen import CodeGenerator, PassState

__all__ = [
    # Main class and functions
    "Assembler",
    "assemble",
    "assemble_file",
    # Parser
    "Command",
    "CommandType",
    "decode_line",
    "parse_source",
    "split_compute",
    "strip_line",
    # Symbols
    "Symbol",
    "SymbolKind",
    "SymbolTable",
    # Code generator
    "CodeGenerator",
    "PassState",
]
