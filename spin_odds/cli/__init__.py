"""Command-line interface and terminal report."""

from spin_odds.cli.commands import main

__all__ = ["main"]
