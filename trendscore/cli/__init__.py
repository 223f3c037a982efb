"""Command-line interface."""

from trendscore.cli.rank import cli


__all__ = ["cli"]
