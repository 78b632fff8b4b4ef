"""
hackasm Command-Line Interface
==============================

This package provides the command-line tool for the Hack assembler:

- **hackasm**: Hack assembler (.asm -> .hack)

The tool is implemented as a Click-based CLI application with
help text and consistent exit codes.
"""

__all__ = ["hackasm"]
