"""
Hack Code Generator
===================

This module turns Hack assembly source into 16-bit machine words. It
implements the classic two-pass assembly process:

Pass 1 (Label Collection)
-------------------------
- Decode every line
- Count real instructions (A and C) to know each ROM address
- Bind each (LABEL) to the address of the instruction that follows it
- Record unrecognised lines as warnings (or errors in strict mode)

Pass 2 (Code Generation)
------------------------
- Decode every line again, from the start
- Resolve @operands: numeric literal, predefined symbol, label, or a new
  variable allocated from address 16 in first-use order
- Encode A- and C-instructions as 16-character binary strings

Both passes iterate the same in-memory line sequence independently, so
pass 2 always starts at the first line no matter how pass 1 ended.

Output Format
-------------
The .hack format is plain text, one instruction per line:
```
0000000000000010
1110110000010000
0000000000000011
1110000010010000
```
"""

import logging
from enum import Enum, auto
from pathlib import Path
from typing import Optional, Sequence

from hackasm.assembler.parser import Command, CommandType, decode_line, iter_commands
from hackasm.assembler.symbols import SymbolKind, SymbolTable
from hackasm.cpu import encode_address, encode_compute
from hackasm.errors import (
    AssemblerError,
    AssemblySyntaxError,
    ErrorCollector,
)

logger = logging.getLogger(__name__)


class PassState(Enum):
    """Lifecycle of a CodeGenerator. Transitions only move forward."""
    READY = auto()
    FIRST_PASS = auto()
    SECOND_PASS = auto()
    DONE = auto()
    FAILED = auto()


# =============================================================================
# Code Generator
# =============================================================================

class CodeGenerator:
    """
    Generates Hack machine words from source lines.

    A CodeGenerator owns one SymbolTable and runs exactly once. Create a
    new generator for every translation.

    Usage:
        codegen = CodeGenerator()
        words = codegen.generate(source.splitlines(), "Prog.asm")
        codegen.write_hack("Prog.hack")
    """

    def __init__(self, strict: bool = False, max_errors: int = 100):
        """
        Initialize the code generator.

        Args:
            strict: If True, unrecognised lines are errors instead of being
                    dropped with a warning.
            max_errors: Errors collected in one pass before giving up.
        """
        self._strict = strict
        self._symbols = SymbolTable()
        self._errors = ErrorCollector(max_errors=max_errors)
        self._words: list[str] = []
        self._listing_lines: list[str] = []
        self._rom_address = 0
        self._state = PassState.READY

    # =========================================================================
    # Public Interface
    # =========================================================================

    @property
    def state(self) -> PassState:
        """Current lifecycle state."""
        return self._state

    def generate(self, lines: Sequence[str], filename: str = "<input>") -> list[str]:
        """
        Translate source lines into machine words.

        Args:
            lines: Source lines. The sequence is iterated once per pass, so
                   it must be re-iterable (a list or tuple, not a file object).
            filename: Source filename for error messages

        Returns:
            List of 16-character '0'/'1' strings, one per real instruction

        Raises:
            AssemblerError: If any line fails to assemble (see get_error_report())
        """
        if self._state is not PassState.READY:
            raise AssemblerError(
                "code generator has already been used",
                hint="create a new CodeGenerator for each translation",
            )

        try:
            self._state = PassState.FIRST_PASS
            logger.debug(f"Pass 1: collecting labels from {filename}")
            self._pass1(lines, filename)
            self._check_errors()

            self._state = PassState.SECOND_PASS
            logger.debug(
                f"Pass 2: generating code for {self._rom_address} instructions"
            )
            self._pass2(lines, filename)
            self._check_errors()
        except AssemblerError:
            # No partial output from a failed run
            self._state = PassState.FAILED
            self._words.clear()
            self._listing_lines.clear()
            raise

        self._state = PassState.DONE
        logger.debug(
            f"Generated {len(self._words)} words, "
            f"{len(self._symbols.variables())} variables"
        )
        return list(self._words)

    def get_words(self) -> list[str]:
        """Return the generated machine words."""
        return list(self._words)

    def get_output(self) -> str:
        """Return the .hack text: one word per line, each newline-terminated."""
        return "".join(f"{word}\n" for word in self._words)

    def get_symbol_table(self) -> SymbolTable:
        """Return the symbol table (predefined, labels and variables)."""
        return self._symbols

    def get_symbols(self) -> dict[str, int]:
        """Return a dictionary of symbol names to addresses."""
        return self._symbols.symbols()

    def has_errors(self) -> bool:
        """Check if any errors occurred during assembly."""
        return self._errors.has_errors()

    def get_error_report(self) -> str:
        """Get formatted error report."""
        return self._errors.report()

    def get_warnings(self) -> list[str]:
        """Return warning messages collected during assembly."""
        return list(self._errors.warnings)

    # =========================================================================
    # Output File Writing
    # =========================================================================

    def write_hack(self, filepath: str | Path) -> None:
        """Write the generated words to a .hack file."""
        with open(filepath, "w", newline="\n") as f:
            f.write(self.get_output())

    def get_listing(self) -> str:
        """
        Get the assembly listing as a string.

        Returns:
            The listing showing ROM addresses, generated words and source lines.
        """
        lines = []
        lines.append("Hack Assembler Listing")
        lines.append("=" * 60)
        lines.append("")
        lines.append("ROM    Word              Line  Source")
        lines.append("-" * 60)
        lines.extend(self._listing_lines)
        lines.append("")
        lines.append("Symbol Table")
        lines.append("-" * 30)
        for sym in sorted(self._user_symbols(), key=lambda s: s.name):
            lines.append(f"{sym.name:20s} = {sym.address:5d}  {sym.kind.name.lower()}")
        return "\n".join(lines) + "\n"

    def write_listing(self, filepath: str | Path) -> None:
        """Write assembly listing file."""
        with open(filepath, "w") as f:
            f.write(self.get_listing())

    def write_symbols(self, filepath: str | Path) -> None:
        """
        Write symbol table file.

        Format: name address (one per line, decimal). Predefined symbols
        are left out.
        """
        with open(filepath, "w") as f:
            f.write("# Symbol table\n")
            f.write("# Generated by hackasm\n")
            for sym in sorted(self._user_symbols(), key=lambda s: s.name):
                f.write(f"{sym.name} {sym.address}\n")

    def _user_symbols(self):
        return [
            sym for sym in self._symbols.entries()
            if sym.kind is not SymbolKind.PREDEFINED
        ]

    # =========================================================================
    # Pass 1: Label Collection
    # =========================================================================

    def _pass1(self, lines: Sequence[str], filename: str) -> None:
        """
        First pass: bind every label to the ROM address that follows it.

        Labels never take an address themselves, so "(LOOP)" followed by
        "@i" binds LOOP to the address of "@i".
        """
        self._rom_address = 0

        for line_number, raw in enumerate(lines, start=1):
            try:
                command = decode_line(raw, line_number, filename)
                if command is not None:
                    self._pass1_command(command)
            except AssemblerError as e:
                self._errors.add(e)

    def _pass1_command(self, command: Command) -> None:
        """Process a single command in pass 1."""
        if command.type is CommandType.LABEL:
            self._symbols.bind(command.symbol, self._rom_address, command.location)
            logger.debug(f"Label '{command.symbol}' = {self._rom_address}")

        elif command.is_instruction:
            self._rom_address += 1

        elif command.type is CommandType.INVALID:
            if self._strict:
                self._errors.add(AssemblySyntaxError(
                    f"unrecognised instruction '{command.text}'",
                    location=command.location,
                    hint="expected @value, (LABEL) or dest=comp;jump",
                    source_line=command.source_line,
                ))
            else:
                message = f"{command.location}: ignored unrecognised line '{command.text}'"
                self._errors.add_warning(message)
                logger.debug(message)

    # =========================================================================
    # Pass 2: Code Generation
    # =========================================================================

    def _pass2(self, lines: Sequence[str], filename: str) -> None:
        """
        Second pass: encode every real instruction.

        Variables are allocated here, in the order their first reference
        appears in the source.
        """
        self._rom_address = 0
        self._words.clear()
        self._listing_lines.clear()

        for command in iter_commands(lines, filename):
            try:
                self._pass2_command(command)
            except AssemblerError as e:
                self._errors.add(e)

    def _pass2_command(self, command: Command) -> None:
        """Process a single command in pass 2."""
        if command.type is CommandType.ADDRESS:
            address = self._resolve_address(command)
            self._emit(
                encode_address(address, command.location, command.source_line),
                command,
            )

        elif command.type is CommandType.COMPUTE:
            self._emit(
                encode_compute(
                    command.dest, command.comp, command.jump,
                    command.location, command.source_line,
                ),
                command,
            )

        elif command.type is CommandType.LABEL:
            self._listing_lines.append(
                f"{'':6s} {'':16s}  {command.location.line:4d}  "
                f"{command.text} = {self._symbols.address(command.symbol)}"
            )

    def _resolve_address(self, command: Command) -> int:
        """
        Resolve an A-instruction operand to a number.

        A run of ASCII digits is a literal. Anything else is a symbol:
        predefined names and labels return their binding, unknown names
        become new variables.
        """
        operand = command.symbol

        if operand.isascii() and operand.isdigit():
            return int(operand)

        return self._symbols.bind_variable(operand, command.location)

    def _emit(self, word: str, command: Command) -> None:
        self._listing_lines.append(
            f"{self._rom_address:5d}  {word}  {command.location.line:4d}  {command.text}"
        )
        self._words.append(word)
        self._rom_address += 1

    def _check_errors(self) -> None:
        if self._errors.has_errors():
            count = self._errors.error_count()
            error_word = "error" if count == 1 else "errors"
            raise AssemblerError(
                f"Assembly failed with {count} {error_word}:\n\n"
                f"{self._errors.report()}"
            )
