"""Command-line interface for gerberkit.

This module provides the CLI using Typer with rich output for
user-friendly feedback and progress reporting.

Key features:
- Font compilation with a progress bar for polarity computation
- Text rendering straight to Gerber files and a zip bundle
- Quiet mode and optional log file
"""

from gerberkit.cli.app import cli, main

__all__ = ["cli", "main"]
