"""Ports for the filesystem and the template engine."""

from __future__ import annotations

from cqrs_ddd_layouts.ports.engine import ITemplateEngine, ITemplateNamespace, TextWriter
from cqrs_ddd_layouts.ports.filesystem import FileEntry, ITemplateFileSystem

__all__ = [
    "FileEntry",
    "ITemplateEngine",
    "ITemplateFileSystem",
    "ITemplateNamespace",
    "TextWriter",
]
