"""Template filesystem port."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from collections.abc import Iterator
    from pathlib import PurePath


@dataclass(frozen=True)
class FileEntry:
    """One entry reachable from a filesystem root.

    ``path`` is what :meth:`ITemplateFileSystem.read_bytes` accepts;
    ``relative`` is the same location relative to the root.
    """

    path: str
    relative: PurePath
    is_dir: bool = False


@runtime_checkable
class ITemplateFileSystem(Protocol):
    """
    Protocol for the tree templates are loaded from.

    Implementations: LocalFileSystem, InMemoryFileSystem.
    """

    def walk(self) -> Iterator[FileEntry]:
        """Yield every file and directory under the root, recursively."""
        ...

    def read_bytes(self, path: str) -> bytes:
        """Return the full content of a file yielded by :meth:`walk`."""
        ...
