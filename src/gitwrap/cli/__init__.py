"""Command-line interface for gitwrap."""

from .main import cli, main

__all__ = ["cli", "main"]
