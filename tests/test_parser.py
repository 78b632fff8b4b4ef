# =============================================================================
# test_parser.py - Line Decoder Unit Tests
# =============================================================================
# Tests for the Hack assembly line decoder.
#
# Test coverage includes:
#   - Comment and whitespace stripping
#   - Classification of A-, C- and label lines
#   - dest/comp/jump field splitting
#   - Invalid lines
#   - Source locations
# =============================================================================

from hackasm.assembler.parser import (
    Command,
    CommandType,
    decode_line,
    parse_source,
    split_compute,
    strip_line,
)


# =============================================================================
# Stripping Tests
# =============================================================================

class TestStripLine:
    """Comments and whitespace are removed before classification."""

    def test_comment_removed(self):
        assert strip_line("@5 // load five") == "@5"

    def test_all_whitespace_removed(self):
        assert strip_line("  D = D + A \t") == "D=D+A"

    def test_comment_only(self):
        assert strip_line("// nothing here") == ""

    def test_blank(self):
        assert strip_line("   \t  ") == ""

    def test_single_slash_is_kept(self):
        """Only the two-character marker starts a comment."""
        assert strip_line("D=A / 2") == "D=A/2"

    def test_crlf(self):
        assert strip_line("@5\r\n") == "@5"


# =============================================================================
# Blank Line Tests
# =============================================================================

class TestBlankLines:

    def test_empty_line(self):
        assert decode_line("") is None

    def test_whitespace_line(self):
        assert decode_line("    \t") is None

    def test_comment_line(self):
        assert decode_line("   // just a comment") is None


# =============================================================================
# Address Instruction Tests
# =============================================================================

class TestAddressCommand:

    def test_literal(self):
        cmd = decode_line("@21")
        assert cmd.type is CommandType.ADDRESS
        assert cmd.symbol == "21"

    def test_symbol(self):
        cmd = decode_line("@LOOP")
        assert cmd.type is CommandType.ADDRESS
        assert cmd.symbol == "LOOP"

    def test_comment_and_whitespace(self):
        """'  @5 // comment' decodes like '@5'."""
        plain = decode_line("@5")
        noisy = decode_line("  @5 // comment")
        assert noisy.type is plain.type
        assert noisy.symbol == plain.symbol
        assert noisy.text == plain.text == "@5"

    def test_symbol_with_punctuation(self):
        cmd = decode_line("@Main.fibonacci$ret.1")
        assert cmd.symbol == "Main.fibonacci$ret.1"

    def test_is_instruction(self):
        assert decode_line("@0").is_instruction

    def test_missing_operand(self):
        """A bare "@" is still an address command, with an empty symbol."""
        cmd = decode_line("@")
        assert cmd.type is CommandType.ADDRESS
        assert cmd.symbol == ""
        assert cmd.is_instruction

    def test_missing_operand_with_comment(self):
        cmd = decode_line("  @   // nothing")
        assert cmd.type is CommandType.ADDRESS
        assert cmd.symbol == ""


# =============================================================================
# Label Tests
# =============================================================================

class TestLabelCommand:

    def test_label(self):
        cmd = decode_line("(LOOP)")
        assert cmd.type is CommandType.LABEL
        assert cmd.symbol == "LOOP"
        assert not cmd.is_instruction

    def test_label_with_spaces(self):
        cmd = decode_line("  ( END )  // finish")
        assert cmd.type is CommandType.LABEL
        assert cmd.symbol == "END"

    def test_empty_label(self):
        cmd = decode_line("()")
        assert cmd.type is CommandType.LABEL
        assert cmd.symbol == ""
        assert not cmd.is_instruction

    def test_unclosed_label_is_invalid(self):
        cmd = decode_line("(LOOP")
        assert cmd.type is CommandType.INVALID


# =============================================================================
# Compute Instruction Tests
# =============================================================================

class TestComputeCommand:

    def test_dest_and_comp(self):
        cmd = decode_line("D=D+1")
        assert cmd.type is CommandType.COMPUTE
        assert (cmd.dest, cmd.comp, cmd.jump) == ("D", "D+1", "")

    def test_comp_and_jump(self):
        cmd = decode_line("D;JGT")
        assert (cmd.dest, cmd.comp, cmd.jump) == ("", "D", "JGT")

    def test_all_fields(self):
        cmd = decode_line("AM=M-1;JNE")
        assert (cmd.dest, cmd.comp, cmd.jump) == ("AM", "M-1", "JNE")

    def test_whitespace_inside(self):
        cmd = decode_line("  0 ; JMP   // loop forever")
        assert (cmd.dest, cmd.comp, cmd.jump) == ("", "0", "JMP")

    def test_empty_comp_kept(self):
        """Field validation is the encoder's job."""
        cmd = decode_line("D=")
        assert cmd.type is CommandType.COMPUTE
        assert cmd.comp == ""

    def test_split_on_first_equals(self):
        assert split_compute("A=D=M") == ("A", "D=M", "")

    def test_split_on_first_semicolon(self):
        assert split_compute("0;JMP;JGT") == ("", "0", "JMP;JGT")

    def test_split_no_separators(self):
        assert split_compute("D") == ("", "D", "")


# =============================================================================
# Invalid Line Tests
# =============================================================================

class TestInvalidLines:

    def test_bad_syntax(self):
        cmd = decode_line("#bad$syntax")
        assert cmd.type is CommandType.INVALID
        assert cmd.text == "#bad$syntax"
        assert not cmd.is_instruction

    def test_bare_mnemonic(self):
        assert decode_line("D+1").type is CommandType.INVALID

    def test_repr(self):
        assert repr(decode_line("#bad")) == "Command(INVALID, '#bad', 1:1)"


# =============================================================================
# Location Tracking Tests
# =============================================================================

class TestLocations:

    def test_line_and_filename(self):
        cmd = decode_line("@5", line=12, filename="Prog.asm")
        assert cmd.location.filename == "Prog.asm"
        assert cmd.location.line == 12

    def test_column_of_first_character(self):
        cmd = decode_line("    D=M")
        assert cmd.location.column == 5

    def test_source_line_kept(self):
        cmd = decode_line("  D=M  // read\n")
        assert cmd.source_line == "  D=M  // read"

    def test_bare_operand_location(self):
        cmd = decode_line("  @", line=3, filename="Bad.asm")
        assert str(cmd.location) == "Bad.asm:3:3"


# =============================================================================
# Whole Source Tests
# =============================================================================

class TestParseSource:

    def test_skips_blank_and_comments(self):
        source = """
            // Adds 2 and 3
            @2
            D=A

            (END)
            @END
            0;JMP
        """
        commands = parse_source(source)
        assert [c.type for c in commands] == [
            CommandType.ADDRESS,
            CommandType.COMPUTE,
            CommandType.LABEL,
            CommandType.ADDRESS,
            CommandType.COMPUTE,
        ]

    def test_line_numbers(self):
        commands = parse_source("// header\n@1\n\nD=A\n", "x.asm")
        assert [c.location.line for c in commands] == [2, 4]

    def test_returns_commands(self):
        commands = parse_source("@1")
        assert isinstance(commands[0], Command)
