"""Compiled-template registry published by each load pass."""

from __future__ import annotations

from dataclasses import dataclass
from types import MappingProxyType
from typing import TYPE_CHECKING, Any

from .exceptions import TemplateNotFoundError

if TYPE_CHECKING:
    from collections.abc import Iterator, Mapping

    from .ports.engine import ITemplateNamespace


@dataclass(frozen=True)
class StandaloneTemplate:
    """A file without a layout marker, rendered as content."""

    name: str
    unit: Any
    source_path: str = ""


@dataclass(frozen=True)
class LayoutTemplate:
    """A file split at its layout marker into head and tail fragments."""

    name: str
    head: Any
    tail: Any
    source_path: str = ""


RegistryEntry = StandaloneTemplate | LayoutTemplate


class TemplateRegistry:
    """Immutable snapshot of everything one load pass compiled.

    Entries are keyed by logical name. The namespace that compiled them travels
    with the snapshot so a render never executes units from two passes.
    """

    def __init__(
        self,
        entries: Mapping[str, RegistryEntry] | None = None,
        namespace: ITemplateNamespace | None = None,
    ) -> None:
        self._entries: Mapping[str, RegistryEntry] = MappingProxyType(dict(entries or {}))
        self.namespace = namespace

    @classmethod
    def empty(cls) -> TemplateRegistry:
        return cls()

    def get(self, name: str) -> RegistryEntry | None:
        return self._entries.get(name)

    def get_template(self, name: str) -> StandaloneTemplate:
        entry = self._entries.get(name)
        if entry is None:
            raise TemplateNotFoundError(name, "template")
        if not isinstance(entry, StandaloneTemplate):
            raise TemplateNotFoundError(
                name, "template", "it is a layout and can only wrap content"
            )
        return entry

    def get_layout(self, name: str) -> LayoutTemplate:
        entry = self._entries.get(name)
        if entry is None:
            raise TemplateNotFoundError(name, "layout")
        if not isinstance(entry, LayoutTemplate):
            raise TemplateNotFoundError(
                name, "layout", "it has no layout marker"
            )
        return entry

    def names(self) -> list[str]:
        return sorted(self._entries)

    def layouts(self) -> list[str]:
        """Return the logical names of every layout (debugging)."""
        return sorted(
            name for name, entry in self._entries.items() if isinstance(entry, LayoutTemplate)
        )

    def __contains__(self, name: object) -> bool:
        return name in self._entries

    def __iter__(self) -> Iterator[str]:
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def __repr__(self) -> str:
        return f"TemplateRegistry({len(self._entries)} templates)"
