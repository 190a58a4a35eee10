"""LocalFileSystem - templates rooted at a directory on disk."""

from __future__ import annotations

import os
from pathlib import Path
from typing import TYPE_CHECKING

from ..ports.filesystem import FileEntry, ITemplateFileSystem

if TYPE_CHECKING:
    from collections.abc import Iterator


def _raise(error: OSError) -> None:
    raise error


class LocalFileSystem(ITemplateFileSystem):
    """
    Walks a real directory tree.

    Entries are yielded in lexical order, directories before their contents.
    Symlinked directories are not followed. Any ``OSError`` met while walking
    (missing root, unreadable directory) propagates to the caller.
    """

    def __init__(self, root: str | os.PathLike[str]) -> None:
        self.root = Path(root)

    def walk(self) -> Iterator[FileEntry]:
        for dirpath, dirnames, filenames in os.walk(self.root, onerror=_raise):
            dirnames.sort()
            current = Path(dirpath)
            for dirname in dirnames:
                full = current / dirname
                yield FileEntry(
                    path=str(full), relative=full.relative_to(self.root), is_dir=True
                )
            for filename in sorted(filenames):
                full = current / filename
                yield FileEntry(path=str(full), relative=full.relative_to(self.root))

    def read_bytes(self, path: str) -> bytes:
        return Path(path).read_bytes()

    def __repr__(self) -> str:
        return f"LocalFileSystem({str(self.root)!r})"
