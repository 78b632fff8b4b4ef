"""
Hack Assembly Language Parser
=============================

This module decodes Hack assembly source one line at a time. Each line is
reduced to a Command describing what kind of instruction it holds and the
fields the code generator needs.

Command Types
-------------
1. **ADDRESS**: A-instruction
   ```asm
   @21             // literal address
   @LOOP           // label reference
   @counter        // variable (allocated on first use)
   ```

2. **COMPUTE**: C-instruction, ``dest=comp;jump`` with dest and jump optional
   ```asm
   D=M
   M=M+1
   0;JMP
   AM=M-1;JNE
   ```

3. **LABEL**: Label pseudo-instruction, names the next real instruction
   ```asm
   (LOOP)
   ```

4. **INVALID**: Anything else that is not blank. Invalid lines produce no
   code and take no address.

Line Normalisation
------------------
Before classification a line has everything from the first ``//`` removed,
then every whitespace character removed, so ``  D = D + A  // add``
decodes exactly like ``D=D+A``. A line that is empty after this has no
command at all.

Example
-------
>>> from hackasm.assembler.parser import decode_line
>>> decode_line("  AM=M-1;JNE  // pop and test")
Command(COMPUTE, dest='AM', comp='M-1', jump='JNE', 1:3)
"""

from dataclasses import dataclass
from enum import Enum, auto
from typing import Iterator, Optional

from hackasm.errors import SourceLocation


COMMENT_MARKER = "//"


# =============================================================================
# Command Type Enumeration
# =============================================================================

class CommandType(Enum):
    """Syntactic classification of a non-blank source line."""
    ADDRESS = auto()   # @value
    COMPUTE = auto()   # dest=comp;jump
    LABEL = auto()     # (NAME)
    INVALID = auto()   # none of the above

    def __str__(self) -> str:
        return self.name.lower()


# =============================================================================
# Command Data Class
# =============================================================================

@dataclass(frozen=True)
class Command:
    """
    One decoded source line.

    Attributes:
        type: The CommandType classification
        text: The line after comment and whitespace removal
        location: Where the line sits in the source
        source_line: The original line text (for error messages)
        symbol: Address operand (ADDRESS) or label name (LABEL)
        dest: Destination mnemonic, "" when absent (COMPUTE)
        comp: Computation mnemonic (COMPUTE)
        jump: Jump mnemonic, "" when absent (COMPUTE)
    """
    type: CommandType
    text: str
    location: SourceLocation
    source_line: str = ""
    symbol: str = ""
    dest: str = ""
    comp: str = ""
    jump: str = ""

    def __repr__(self) -> str:
        pos = f"{self.location.line}:{self.location.column}"
        if self.type is CommandType.COMPUTE:
            return (
                f"Command(COMPUTE, dest={self.dest!r}, comp={self.comp!r}, "
                f"jump={self.jump!r}, {pos})"
            )
        if self.type is CommandType.INVALID:
            return f"Command(INVALID, {self.text!r}, {pos})"
        return f"Command({self.type.name}, {self.symbol!r}, {pos})"

    @property
    def is_instruction(self) -> bool:
        """True for commands that occupy a ROM address."""
        return self.type in (CommandType.ADDRESS, CommandType.COMPUTE)


# =============================================================================
# Line Decoding
# =============================================================================

def strip_line(raw: str) -> str:
    """
    Remove the comment and all whitespace from a raw source line.

    >>> strip_line("  @5 // comment")
    '@5'
    """
    comment = raw.find(COMMENT_MARKER)
    if comment != -1:
        raw = raw[:comment]
    return "".join(raw.split())


def decode_line(
    raw: str,
    line: int = 1,
    filename: str = "<input>",
) -> Optional[Command]:
    """
    Decode one raw source line.

    Args:
        raw: The line text (a trailing newline is tolerated)
        line: Line number (1-indexed) for error reporting
        filename: Source filename for error reporting

    Returns:
        A Command, or None when the line is blank or only a comment
    """
    text = strip_line(raw)
    if not text:
        return None

    source_line = raw.rstrip("\r\n")
    column = len(source_line) - len(source_line.lstrip()) + 1
    location = SourceLocation(filename, line, column)

    # "@" and "()" keep their shape with an empty symbol
    if text.startswith("@"):
        return Command(CommandType.ADDRESS, text, location, source_line, symbol=text[1:])

    if len(text) >= 2 and text.startswith("(") and text.endswith(")"):
        return Command(CommandType.LABEL, text, location, source_line, symbol=text[1:-1])

    if "=" in text or ";" in text:
        dest, comp, jump = split_compute(text)
        return Command(
            CommandType.COMPUTE, text, location, source_line,
            dest=dest, comp=comp, jump=jump,
        )

    return Command(CommandType.INVALID, text, location, source_line)


def split_compute(text: str) -> tuple[str, str, str]:
    """
    Split normalised C-instruction text into (dest, comp, jump).

    The split is on the first '=' and then the first ';' of the remainder.
    Missing parts come back as empty strings.

    >>> split_compute("D=D+1")
    ('D', 'D+1', '')
    >>> split_compute("0;JMP")
    ('', '0', 'JMP')
    """
    dest, eq, rest = text.partition("=")
    if not eq:
        dest, rest = "", text
    comp, _, jump = rest.partition(";")
    return dest, comp, jump


def iter_commands(source_lines, filename: str = "<input>") -> Iterator[Command]:
    """
    Decode a sequence of source lines, skipping blank and comment lines.

    Args:
        source_lines: Iterable of raw lines
        filename: Source filename for error reporting

    Yields:
        Command objects in source order (including INVALID ones)
    """
    for line_number, raw in enumerate(source_lines, start=1):
        command = decode_line(raw, line_number, filename)
        if command is not None:
            yield command


def parse_source(source: str, filename: str = "<input>") -> list[Command]:
    """
    Convenience function to decode a whole source text.

    Args:
        source: Hack assembly source text
        filename: Source filename for error messages

    Returns:
        List of decoded commands
    """
    return list(iter_commands(source.splitlines(), filename))
