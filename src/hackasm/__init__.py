"""
hackasm - Assembler for the Hack Computer
=========================================

This package translates Hack assembly language into Hack machine code.

The Hack computer is a 16-bit machine with two instruction formats: the
A-instruction (@value) loads a 15-bit address, and the C-instruction
(dest=comp;jump) drives the ALU, stores results and branches. Machine
code is distributed as .hack text files holding one 16-character binary
word per line.

Main Components
---------------
- **assembler**: Two-pass Hack assembler (hackasm)
    Converts assembly source files (.asm) to machine code (.hack)

- **cpu**: Hack architecture definitions
    Encoding tables, word layout and predefined symbols

Quick Start
-----------
Assemble a program:
    >>> from hackasm.assembler import Assembler
    >>> asm = Assembler()
    >>> code = asm.assemble_file("Add.asm")
    >>> asm.write_hack("Add.hack")

Or use the command-line tool:
    $ hackasm Add.asm Add.hack

Version History
---------------
1.0.0 - Initial release with two-pass assembler, listing and symbol output
"""

__version__ = "1.0.0"

# =============================================================================
# Public API Exports
# =============================================================================

from hackasm.assembler import Assembler, assemble, assemble_file
from hackasm.errors import (
    HackError,
    AssemblerError,
    AssemblySyntaxError,
    UndefinedSymbolError,
    UnknownMnemonicError,
    AddressRangeError,
)

__all__ = [
    # Version info
    "__version__",
    # Assembler
    "Assembler",
    "assemble",
    "assemble_file",
    # Exception hierarchy
    "HackError",
    "AssemblerError",
    "AssemblySyntaxError",
    "UndefinedSymbolError",
    "UnknownMnemonicError",
    "AddressRangeError",
]
