"""Command-line interface for planarize.

This module provides the CLI using Typer with rich output for
user-friendly feedback.

Key features:
- Plane, frame and boundary summary
- Verbose/quiet output modes
- JSON result output
- Detailed error reporting
"""

from planarize.cli.app import app, cli, main

__all__ = ["app", "cli", "main"]
