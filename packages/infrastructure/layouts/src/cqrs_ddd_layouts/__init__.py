"""Layout-composing template loader - content rendered inside nested layout files."""

from __future__ import annotations

from .composer import LayoutComposer, file_extension, logical_name, split_layout
from .engine import LayoutEngine
from .engines.jinja import JinjaNamespace, JinjaTemplateEngine
from .exceptions import (
    LayoutError,
    LayoutMarkerError,
    TemplateCompileError,
    TemplateLoadError,
    TemplateNameCollisionError,
    TemplateNotFoundError,
    TemplateRenderError,
)
from .filesystem.local import LocalFileSystem
from .filesystem.memory import InMemoryFileSystem
from .ports.engine import ITemplateEngine, ITemplateNamespace, TextWriter
from .ports.filesystem import FileEntry, ITemplateFileSystem
from .registry import LayoutTemplate, RegistryEntry, StandaloneTemplate, TemplateRegistry
from .settings import LAYOUT_MARKER, TemplateSettings
from .store import TemplateStore

__all__ = [
    "LAYOUT_MARKER",
    "FileEntry",
    "ITemplateEngine",
    "ITemplateFileSystem",
    "ITemplateNamespace",
    "InMemoryFileSystem",
    "JinjaNamespace",
    "JinjaTemplateEngine",
    "LayoutComposer",
    "LayoutEngine",
    "LayoutError",
    "LayoutMarkerError",
    "LayoutTemplate",
    "LocalFileSystem",
    "RegistryEntry",
    "StandaloneTemplate",
    "TemplateCompileError",
    "TemplateLoadError",
    "TemplateNameCollisionError",
    "TemplateNotFoundError",
    "TemplateRegistry",
    "TemplateRenderError",
    "TemplateSettings",
    "TemplateStore",
    "TextWriter",
    "file_extension",
    "logical_name",
    "split_layout",
]
