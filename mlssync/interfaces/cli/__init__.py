"""CLI interface facades for mlssync.

This package is the canonical home for all Click commands.
"""

from .__main__ import cli
from .logs import logs
from .status import status
from .sync import sync

__all__ = ["cli", "logs", "status", "sync"]
