"""Command-line interface for contourpad.

This module provides the CLI using Typer with rich output for
user-friendly feedback and progress reporting.

Key features:
- Progress bar for the radial scan
- Verbose/quiet output modes
- Dry-run mode for inspecting a trace without writing files
- Detailed error reporting
"""

from contourpad.cli.app import cli, main

__all__ = ["cli", "main"]
