"""LayoutEngine - public entry point for loading and rendering layouts."""

from __future__ import annotations

import io
import os
from collections.abc import Callable, Mapping
from typing import TYPE_CHECKING, Any

from .composer import LayoutComposer
from .filesystem.local import LocalFileSystem
from .settings import TemplateSettings
from .store import TemplateStore

if TYPE_CHECKING:
    from .ports.engine import ITemplateEngine, TextWriter
    from .ports.filesystem import ITemplateFileSystem
    from .registry import TemplateRegistry


class LayoutEngine:
    """
    Loads a template tree and renders content inside nested layouts.

    Usage:
        ```python
        engine = LayoutEngine("./templates", ".html")
        engine.load()

        out = io.StringIO()
        engine.render(out, "index", {"Title": "Hello"}, "layouts/nested", "layouts/main")
        ```

    Setters return the engine so they can be chained. Changes to delimiters,
    functions and escaping apply from the next :meth:`load`.
    """

    def __init__(
        self,
        directory: str | os.PathLike[str] | ITemplateFileSystem,
        extension: str,
        funcs: Mapping[str, Callable[..., Any]] | None = None,
        *,
        engine: ITemplateEngine | None = None,
    ) -> None:
        filesystem: ITemplateFileSystem
        if isinstance(directory, (str, os.PathLike)):
            filesystem = LocalFileSystem(directory)
        else:
            filesystem = directory
        self._composer = LayoutComposer()
        self._store = TemplateStore(
            filesystem,
            TemplateSettings(extension=extension),
            engine=engine,
            functions=funcs,
            composer=self._composer,
        )

    @classmethod
    def from_filesystem(
        cls,
        filesystem: ITemplateFileSystem,
        extension: str,
        funcs: Mapping[str, Callable[..., Any]] | None = None,
        *,
        engine: ITemplateEngine | None = None,
    ) -> LayoutEngine:
        """Build an engine over any filesystem, e.g. an InMemoryFileSystem."""
        return cls(filesystem, extension, funcs, engine=engine)

    # ── Setters ──────────────────────────────────────────────────

    def set_delims(self, left: str, right: str) -> LayoutEngine:
        self._store.configure(left_delim=left, right_delim=right)
        return self

    def add_func(self, name: str, func: Callable[..., Any]) -> LayoutEngine:
        self._store.register_function(name, func)
        return self

    def add_func_map(self, funcs: Mapping[str, Callable[..., Any]]) -> LayoutEngine:
        for name, func in funcs.items():
            self._store.register_function(name, func)
        return self

    def set_reload(self, enabled: bool = True) -> LayoutEngine:
        """Reload every template before each render (development mode)."""
        self._store.configure(reload=enabled)
        return self

    def set_debug(self, enabled: bool = True) -> LayoutEngine:
        self._store.configure(debug=enabled)
        return self

    def set_autoescape(self, enabled: bool = True) -> LayoutEngine:
        self._store.configure(autoescape=enabled)
        return self

    # ── Introspection ────────────────────────────────────────────

    @property
    def settings(self) -> TemplateSettings:
        return self._store.settings

    @property
    def store(self) -> TemplateStore:
        return self._store

    @property
    def templates(self) -> list[str]:
        """Logical names in the current registry."""
        return self._store.snapshot().names()

    # ── Load / Render ────────────────────────────────────────────

    def load(self) -> TemplateRegistry:
        return self._store.load()

    def render(
        self,
        out: TextWriter,
        name: str,
        binding: Mapping[str, Any] | None = None,
        *layouts: str,
    ) -> None:
        """Write ``name`` to ``out``, wrapped in ``layouts`` from right (outermost) to left."""
        self._composer.render(self._store, out, name, binding, layouts)

    def render_string(
        self,
        name: str,
        binding: Mapping[str, Any] | None = None,
        *layouts: str,
    ) -> str:
        buffer = io.StringIO()
        self.render(buffer, name, binding, *layouts)
        return buffer.getvalue()
