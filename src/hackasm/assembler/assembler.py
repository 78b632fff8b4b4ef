"""
Hack Assembler - Main Interface
===============================

This module provides the main Assembler class, which is the primary interface
for assembling Hack source code. It reads the source, runs a fresh
CodeGenerator over it and keeps the result for the output methods.

Example Usage
-------------
>>> from hackasm.assembler import Assembler
>>>
>>> asm = Assembler()
>>> asm.assemble_string('''
...     @2
...     D=A
...     @3
...     D=D+A
...     @0
...     M=D
... ''')
>>>
>>> words = asm.get_words()
>>> print(f"Generated {len(words)} instructions")
>>>
>>> asm.write_hack("Add.hack")

Command-Line Usage
------------------
The assembler can also be invoked from the command line:

    $ hackasm Add.asm Add.hack -l Add.lst -s Add.sym

Options:
    -l, --listing FILE     Generate listing file
    -s, --symbols FILE     Generate symbol file
    --strict               Treat unrecognised lines as errors
    -v, --verbose          Verbose output
"""

from pathlib import Path
from typing import Optional

from hackasm.assembler.codegen import CodeGenerator
from hackasm.errors import AssemblerError


class Assembler:
    """
    Main Hack assembler class.

    Every assemble_* call runs on a new CodeGenerator (and so a new symbol
    table); the Assembler keeps the most recent one for the getters and
    write_* methods.

    Attributes:
        verbose: If True, print progress messages
        strict: If True, unrecognised lines are errors rather than dropped
    """

    def __init__(self, verbose: bool = False, strict: bool = False):
        """
        Initialize the assembler.

        Args:
            verbose: Enable verbose output
            strict: Reject lines that are not @value, (LABEL) or
                    dest=comp;jump instead of silently skipping them
        """
        self._verbose = verbose
        self._strict = strict
        self._source_file: Optional[Path] = None
        self._codegen: Optional[CodeGenerator] = None

    # =========================================================================
    # Assembly Methods
    # =========================================================================

    def assemble_string(self, source: str, filename: str = "<input>") -> str:
        """
        Assemble source code from a string.

        Args:
            source: Hack assembly source code
            filename: Virtual filename for error messages

        Returns:
            The .hack text (one 16-bit word per line)

        Raises:
            AssemblerError: If assembly fails
        """
        if self._verbose:
            print(f"Assembling {filename}...")

        lines = source.splitlines()
        self._codegen = CodeGenerator(strict=self._strict)
        words = self._codegen.generate(lines, filename)

        if self._verbose:
            print(f"Generated {len(words)} instructions")
            for warning in self._codegen.get_warnings():
                print(f"Warning: {warning}")

        return self._codegen.get_output()

    def assemble_lines(self, lines: list[str], filename: str = "<input>") -> list[str]:
        """
        Assemble an already split list of source lines.

        Returns:
            List of 16-character machine words
        """
        self._codegen = CodeGenerator(strict=self._strict)
        return self._codegen.generate(list(lines), filename)

    def assemble_file(self, filepath: str | Path) -> str:
        """
        Assemble source code from a file.

        Args:
            filepath: Path to assembly source file

        Returns:
            The .hack text

        Raises:
            AssemblerError: If assembly fails
            FileNotFoundError: If source file not found
        """
        filepath = Path(filepath)
        self._source_file = filepath

        source = filepath.read_text()

        return self.assemble_string(source, str(filepath))

    # =========================================================================
    # Output Methods
    # =========================================================================

    def _require_codegen(self) -> CodeGenerator:
        if self._codegen is None:
            raise AssemblerError("nothing has been assembled yet")
        return self._codegen

    def get_words(self) -> list[str]:
        """Get the generated machine words."""
        return self._require_codegen().get_words()

    def get_output(self) -> str:
        """Get the .hack text of the last assembly."""
        return self._require_codegen().get_output()

    def get_symbols(self) -> dict[str, int]:
        """
        Get the symbol table.

        Returns:
            Dictionary mapping symbol names (predefined included) to addresses
        """
        return self._require_codegen().get_symbols()

    def get_variables(self) -> list[str]:
        """Get variable names in the order their addresses were allocated."""
        return self._require_codegen().get_symbol_table().variables()

    def get_listing(self) -> str:
        """Get the assembly listing as a string."""
        return self._require_codegen().get_listing()

    def get_warnings(self) -> list[str]:
        """Get warnings from the last assembly (e.g. ignored lines)."""
        return self._require_codegen().get_warnings()

    def write_hack(self, filepath: str | Path) -> None:
        """
        Write the machine words to a .hack file.

        Args:
            filepath: Output file path
        """
        self._require_codegen().write_hack(filepath)

        if self._verbose:
            print(f"Wrote {filepath}")

    def write_listing(self, filepath: str | Path) -> None:
        """
        Write assembly listing file.

        Args:
            filepath: Output file path
        """
        self._require_codegen().write_listing(filepath)

        if self._verbose:
            print(f"Wrote listing to {filepath}")

    def write_symbols(self, filepath: str | Path) -> None:
        """
        Write symbol table file.

        Args:
            filepath: Output file path
        """
        self._require_codegen().write_symbols(filepath)

        if self._verbose:
            print(f"Wrote symbols to {filepath}")

    # =========================================================================
    # Error Handling
    # =========================================================================

    def has_errors(self) -> bool:
        """Check if the last assembly produced errors."""
        return self._codegen is not None and self._codegen.has_errors()

    def get_error_report(self) -> str:
        """Get formatted error report."""
        return self._require_codegen().get_error_report()


# =============================================================================
# Convenience Functions
# =============================================================================

def assemble(source: str, filename: str = "<input>", strict: bool = False) -> str:
    """
    Convenience function to assemble source code.

    Args:
        source: Hack assembly source code
        filename: Virtual filename for errors
        strict: Treat unrecognised lines as errors

    Returns:
        The .hack text

    Raises:
        AssemblerError: If assembly fails
    """
    asm = Assembler(strict=strict)
    return asm.assemble_string(source, filename)


def assemble_file(filepath: str | Path, strict: bool = False) -> str:
    """
    Convenience function to assemble a file.

    Args:
        filepath: Path to source file
        strict: Treat unrecognised lines as errors

    Returns:
        The .hack text

    Raises:
        AssemblerError: If assembly fails
    """
    asm = Assembler(strict=strict)
    return asm.assemble_file(filepath)
