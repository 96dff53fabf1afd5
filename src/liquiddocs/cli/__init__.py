"""Command-line interface for liquiddocs."""

from liquiddocs.cli.commands import cli, main
from liquiddocs.cli.ui import LiquidDocsUI, get_ui

__all__ = [
    "cli",
    "main",
    "LiquidDocsUI",
    "get_ui",
]
