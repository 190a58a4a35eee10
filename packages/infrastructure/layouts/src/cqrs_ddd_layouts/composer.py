"""LayoutComposer - discovers, splits and sequences layout templates.

Load side: every file under the root whose extension matches is read and
split at the layout marker. A file without a marker is a standalone content
template; a file with exactly one marker is a layout whose head renders before
nested content and whose tail renders after it.

Render side: given layouts ``[A, B]`` (``A`` innermost, ``B`` outermost) the
output is ``B.head A.head content A.tail B.tail``.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import TYPE_CHECKING, Any

from .exceptions import (
    LayoutMarkerError,
    TemplateCompileError,
    TemplateNameCollisionError,
)
from .registry import LayoutTemplate, RegistryEntry, StandaloneTemplate, TemplateRegistry

if TYPE_CHECKING:
    from pathlib import PurePath

    from .ports.engine import ITemplateNamespace, TextWriter
    from .ports.filesystem import FileEntry, ITemplateFileSystem
    from .settings import TemplateSettings
    from .store import TemplateStore

logger = logging.getLogger(__name__)


def file_extension(name: str) -> str:
    """Return the suffix starting at the last dot of the base name, or ``""``."""
    base = name.rsplit("/", 1)[-1]
    dot = base.rfind(".")
    return base[dot:] if dot >= 0 else ""


def logical_name(relative: PurePath, extension: str) -> str:
    """Map a root-relative path to its template name.

    ``partials\\footer.html`` -> ``partials/footer``
    """
    name = relative.as_posix().replace("\\", "/")
    if extension and name.endswith(extension):
        name = name[: -len(extension)]
    return name


def split_layout(source: str, marker: str) -> list[str]:
    """Split template source on every occurrence of the layout marker."""
    return source.split(marker)


class LayoutComposer:
    """Turns a template tree into registry entries and renders them."""

    # ── Load ─────────────────────────────────────────────────────

    def collect(
        self,
        filesystem: ITemplateFileSystem,
        namespace: ITemplateNamespace,
        settings: TemplateSettings,
    ) -> dict[str, RegistryEntry]:
        """Walk ``filesystem`` and compile every matching file into ``namespace``.

        Raises on the first failure; nothing collected so far is returned.
        """
        entries: dict[str, RegistryEntry] = {}
        for entry in filesystem.walk():
            if entry.is_dir:
                continue
            relative = entry.relative.as_posix().replace("\\", "/")
            if file_extension(relative) != settings.extension:
                continue
            name = logical_name(entry.relative, settings.extension)
            existing = entries.get(name)
            if existing is not None:
                raise TemplateNameCollisionError(name, existing.source_path, entry.path)
            entries[name] = self._compile_file(entry, name, filesystem, namespace, settings)
            if settings.debug:
                logger.info("Registered view: %s", name)
        return entries

    def _compile_file(
        self,
        entry: FileEntry,
        name: str,
        filesystem: ITemplateFileSystem,
        namespace: ITemplateNamespace,
        settings: TemplateSettings,
    ) -> RegistryEntry:
        raw = filesystem.read_bytes(entry.path)
        try:
            source = raw.decode(settings.encoding)
        except UnicodeDecodeError as e:
            raise TemplateCompileError(name, reason=str(e)) from e

        segments = split_layout(source, settings.marker)
        if len(segments) == 1:
            unit = self._compile(name, None, segments[0], namespace)
            return StandaloneTemplate(name=name, unit=unit, source_path=entry.path)
        if len(segments) == 2:
            head = self._compile(name, "head", segments[0], namespace)
            tail = self._compile(name, "tail", segments[1], namespace)
            return LayoutTemplate(name=name, head=head, tail=tail, source_path=entry.path)
        raise LayoutMarkerError(name, len(segments) - 1)

    @staticmethod
    def _compile(
        name: str, fragment: str | None, source: str, namespace: ITemplateNamespace
    ) -> Any:
        try:
            if fragment is None:
                return namespace.register(name, source)
            return namespace.compile_fragment(f"{name} ({fragment})", source)
        except Exception as e:
            raise TemplateCompileError(name, fragment, str(e)) from e

    # ── Render ───────────────────────────────────────────────────

    def render(
        self,
        store: TemplateStore,
        writer: TextWriter,
        name: str,
        data: Mapping[str, Any] | None = None,
        layouts: tuple[str, ...] | list[str] = (),
    ) -> None:
        """Write ``name`` wrapped in ``layouts`` (innermost first) to ``writer``.

        Output is written as it is produced; if a later phase fails, what was
        already written stays written.
        """
        if store.settings.reload or not store.loaded:
            store.load()
        registry = store.snapshot()
        self.render_registry(registry, writer, name, data, layouts)

    def render_registry(
        self,
        registry: TemplateRegistry,
        writer: TextWriter,
        name: str,
        data: Mapping[str, Any] | None = None,
        layouts: tuple[str, ...] | list[str] = (),
    ) -> None:
        # Resolve every name before the first byte is written.
        wrappers = [registry.get_layout(layout) for layout in layouts]
        content = registry.get_template(name)
        namespace = registry.namespace
        assert namespace is not None  # a non-empty registry always has one

        for layout in reversed(wrappers):
            namespace.execute(layout.head, data, writer)
        namespace.execute(content.unit, data, writer)
        for layout in wrappers:
            namespace.execute(layout.tail, data, writer)
