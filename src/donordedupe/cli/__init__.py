"""Command-line interface for donordedupe."""

from donordedupe.cli.main import cli

__all__ = ["cli"]
