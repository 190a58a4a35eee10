"""Filesystem adapters."""

from __future__ import annotations

from .local import LocalFileSystem
from .memory import InMemoryFileSystem

__all__ = ["InMemoryFileSystem", "LocalFileSystem"]
