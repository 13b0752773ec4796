"""Command line interface for backuper."""

from .dispatcher import main

__all__ = ["main"]
