"""Command-line interface for bootmap.

Provides the ``bootmap`` command group (write, show).
"""

from .main import cli, main

__all__ = ["cli", "main"]
