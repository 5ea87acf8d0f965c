"""Domain port definitions for adapters."""

from __future__ import annotations

from .connection import Connection
from .progress import ProgressReporter

__all__ = ["Connection", "ProgressReporter"]
