"""Command-line interface for polyop.

This module provides the CLI using Typer with rich output.

Key features:
- intersect, union, xor and difference commands on JSON polygon files
- Crossing listing with entry/exit classification
- Polygon inspection
- Quiet mode and optional log file
"""

from polyop.cli.app import cli, main

__all__ = ["cli", "main"]
