"""Command-line interface for msdfatlas.

This module provides the CLI using Typer with rich output for
user-friendly feedback and progress reporting.

Key features:
- Progress bars for glyph rendering
- Verbose/quiet output modes
- Debug TGA output for inspecting a single glyph
- Detailed error reporting
"""

from msdfatlas.cli.app import cli, main

__all__ = ["cli", "main"]
