"""
hackasm Error Hierarchy
=======================

This module defines the exception hierarchy for the Hack assembler.
All exceptions inherit from HackError, allowing callers to catch every
assembler-related error with a single except clause if desired.

Exception Hierarchy
-------------------
HackError (base)
└── AssemblerError (assembler-related)
    ├── AssemblySyntaxError - malformed instruction text
    ├── UndefinedSymbolError - lookup of an unbound symbol
    ├── UnknownMnemonicError - dest/comp/jump not in the encoding tables
    ├── AddressRangeError - address literal outside the 15-bit range
    └── TooManyErrors - error limit reached during a pass

Error messages follow this format:
    filename:line:column: error: description
        source_line_text
        ^ (pointer to error location)
    hint: suggestion for fixing (when available)
"""

from dataclasses import dataclass
from typing import Optional


# =============================================================================
# Base Exception Class
# =============================================================================

class HackError(Exception):
    """
    Base exception for all hackasm errors.

        try:
            assembler.assemble_file("Prog.asm")
        except HackError as e:
            print(f"Error: {e}")
    """
    pass


# =============================================================================
# Source Location Tracking
# =============================================================================

@dataclass(frozen=True)
class SourceLocation:
    """
    Represents a location in source code for error reporting.

    Attributes:
        filename: Name of the source file (or "<input>" for string input)
        line: Line number (1-indexed)
        column: Column number (1-indexed)
    """
    filename: str
    line: int
    column: int = 1

    def __str__(self) -> str:
        """Format as 'filename:line:column' for error messages."""
        return f"{self.filename}:{self.line}:{self.column}"


# =============================================================================
# Assembler Exceptions
# =============================================================================

class AssemblerError(HackError):
    """
    Base exception for all assembler-related errors.

    Attributes:
        message: The error description
        location: Where in the source the error occurred (optional)
        hint: A suggestion for fixing the error (optional)
        source_line: The actual source text at the error location (optional)
    """

    def __init__(
        self,
        message: str,
        location: Optional[SourceLocation] = None,
        hint: Optional[str] = None,
        source_line: Optional[str] = None,
    ):
        self.message = message
        self.location = location
        self.hint = hint
        self.source_line = source_line
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        """
        Format the error message with location, source context, and hint.

        Example output:
            Prog.asm:7:1: error: unknown computation 'D+2'
                D=D+2
                ^
            hint: valid computations: 0, 1, -1, D, A, ...
        """
        parts = []

        if self.location:
            parts.append(f"{self.location}: error: {self.message}")
        else:
            parts.append(f"error: {self.message}")

        if self.source_line is not None and self.location is not None:
            parts.append(f"    {self.source_line}")
            if self.location.column > 0:
                padding = " " * (4 + self.location.column - 1)
                parts.append(f"{padding}^")

        if self.hint:
            parts.append(f"hint: {self.hint}")

        return "\n".join(parts)


class AssemblySyntaxError(AssemblerError):
    """
    Malformed instruction text.

    Examples:
        - Address instruction without an operand ("@")
        - Label declaration without a name ("()")
        - Numeric operand with trailing garbage ("@12x")
        - Unrecognised line when assembling in strict mode
    """
    pass


class UndefinedSymbolError(AssemblerError):
    """
    Lookup of a symbol that has never been bound.

    Address instructions never raise this: unknown operands are allocated
    as variables. It is raised by direct SymbolTable.address() queries.
    """

    def __init__(
        self,
        symbol: str,
        location: Optional[SourceLocation] = None,
        hint: Optional[str] = None,
        source_line: Optional[str] = None,
    ):
        self.symbol = symbol
        super().__init__(
            f"undefined symbol '{symbol}'",
            location=location,
            hint=hint,
            source_line=source_line,
        )


class UnknownMnemonicError(AssemblerError):
    """
    A destination, computation or jump field that is not in the closed
    encoding tables.

    Example:
        D=D+2   ; Error: 'D+2' is not a Hack computation
    """

    def __init__(
        self,
        field: str,
        mnemonic: str,
        location: Optional[SourceLocation] = None,
        source_line: Optional[str] = None,
        valid_mnemonics: Optional[list[str]] = None,
    ):
        self.field = field
        self.mnemonic = mnemonic
        self.valid_mnemonics = valid_mnemonics or []

        hint = None
        if self.valid_mnemonics:
            shown = ", ".join(m if m else "(none)" for m in self.valid_mnemonics)
            hint = f"valid {field}s: {shown}"

        super().__init__(
            f"unknown {field} '{mnemonic}'",
            location=location,
            hint=hint,
            source_line=source_line,
        )


class AddressRangeError(AssemblerError):
    """
    Address literal does not fit in the 15-bit address field.

    Hack address instructions carry a 15-bit unsigned value, so literals
    must be in the range 0 to 32767.
    """

    def __init__(
        self,
        value: int,
        maximum: int,
        location: Optional[SourceLocation] = None,
        source_line: Optional[str] = None,
    ):
        self.value = value
        self.maximum = maximum
        super().__init__(
            f"address {value} is out of range",
            location=location,
            hint=f"address operands must be between 0 and {maximum}",
            source_line=source_line,
        )


# =============================================================================
# Error Collection for Multiple Error Reporting
# =============================================================================

class ErrorCollector:
    """
    Collects multiple errors for batch reporting.

    The code generator keeps going after a bad line so that one run
    reports every problem in the source, then fails the whole pass.

    Example:
        collector = ErrorCollector(max_errors=100)
        collector.add(UnknownMnemonicError("jump", "JMPX"))
        if collector.has_errors():
            print(collector.report())
    """

    def __init__(self, max_errors: int = 100):
        """
        Initialize the error collector.

        Args:
            max_errors: Maximum errors to collect before raising TooManyErrors
        """
        self.errors: list[AssemblerError] = []
        self.warnings: list[str] = []
        self.max_errors = max_errors

    def add(self, error: AssemblerError) -> None:
        """
        Add an error to the collection.

        Raises:
            TooManyErrors: If max_errors has been reached
        """
        self.errors.append(error)
        if len(self.errors) >= self.max_errors:
            raise TooManyErrors(f"Too many errors ({self.max_errors}), stopping")

    def add_warning(self, message: str) -> None:
        """Add a warning message."""
        self.warnings.append(message)

    def has_errors(self) -> bool:
        """Return True if any errors have been collected."""
        return len(self.errors) > 0

    def error_count(self) -> int:
        """Return the number of collected errors."""
        return len(self.errors)

    def report(self) -> str:
        """
        Format all errors and warnings for display.

        Returns:
            Formatted string with all errors and warnings
        """
        lines = []

        for error in self.errors:
            lines.append(str(error))
            lines.append("")

        if self.warnings:
            lines.append("Warnings:")
            for warning in self.warnings:
                lines.append(f"  {warning}")

        error_word = "error" if len(self.errors) == 1 else "errors"
        warning_word = "warning" if len(self.warnings) == 1 else "warnings"
        lines.append(
            f"\n{len(self.errors)} {error_word}, {len(self.warnings)} {warning_word}"
        )

        return "\n".join(lines)


class TooManyErrors(AssemblerError):
    """
    Raised when too many errors have been encountered in one pass.
    """

    def __init__(self, message: str = "Too many errors"):
        super().__init__(message)
