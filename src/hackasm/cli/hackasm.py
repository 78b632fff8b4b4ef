"""
hackasm - Hack Assembler Command-Line Interface
===============================================

This module implements the command-line interface for the Hack assembler.

Usage Examples
--------------
Basic assembly:
    $ hackasm Add.asm Add.hack

Generate listing and symbol files:
    $ hackasm Max.asm Max.hack -l Max.lst -s Max.sym

Reject unrecognised lines:
    $ hackasm --strict Pong.asm Pong.hack

Verbose mode:
    $ hackasm -v Rect.asm Rect.hack
"""

import logging
from pathlib import Path
from typing import Optional

import click

from hackasm import __version__
from hackasm.assembler import Assembler
from hackasm.cli.errors import handle_cli_exception


# =============================================================================
# CLI Definition
# =============================================================================

@click.command()
@click.argument(
    "input_file",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
)
@click.argument(
    "output_file",
    type=click.Path(dir_okay=False, path_type=Path),
)
@click.option(
    "-l", "--listing",
    type=click.Path(dir_okay=False, path_type=Path),
    help="Generate listing file",
)
@click.option(
    "-s", "--symbols",
    type=click.Path(dir_okay=False, path_type=Path),
    help="Generate symbol file",
)
@click.option(
    "--strict",
    is_flag=True,
    help="Treat lines that are not @value, (LABEL) or dest=comp;jump as errors "
         "instead of skipping them.",
)
@click.option(
    "-v", "--verbose",
    is_flag=True,
    help="Verbose output",
)
@click.version_option(version=__version__, prog_name="hackasm")
def main(
    input_file: Path,
    output_file: Path,
    listing: Optional[Path],
    symbols: Optional[Path],
    strict: bool,
    verbose: bool,
) -> None:
    """
    Assemble Hack assembly source into Hack machine code.

    INPUT_FILE is the assembly source file (.asm) to assemble.
    OUTPUT_FILE is the machine code file (.hack) to write.

    \b
    Examples:
        hackasm Add.asm Add.hack
        hackasm Max.asm Max.hack -l Max.lst
        hackasm --strict Pong.asm Pong.hack
    """
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(levelname)s: %(message)s" if verbose else "%(message)s",
    )

    asm = Assembler(strict=strict)

    try:
        if verbose:
            click.echo(f"Assembling {input_file}...")

        asm.assemble_file(input_file)

        asm.write_hack(output_file)
        if verbose:
            click.echo(f"Wrote {len(asm.get_words())} instructions to {output_file}")

        if listing:
            asm.write_listing(listing)
            if verbose:
                click.echo(f"Wrote listing to {listing}")

        if symbols:
            asm.write_symbols(symbols)
            if verbose:
                click.echo(f"Wrote symbols to {symbols}")

        if verbose:
            variables = asm.get_variables()
            click.echo(f"Allocated {len(variables)} variables")
            for warning in asm.get_warnings():
                click.echo(f"Warning: {warning}", err=True)

    except Exception as e:
        handle_cli_exception(e, verbose=verbose, error_type="Assembly")


if __name__ == "__main__":
    main()
