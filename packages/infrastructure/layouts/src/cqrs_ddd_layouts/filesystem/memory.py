"""InMemoryFileSystem - embedded templates rooted at ``/``."""

from __future__ import annotations

import errno
import os
from pathlib import PurePosixPath
from typing import TYPE_CHECKING

from ..ports.filesystem import FileEntry, ITemplateFileSystem

if TYPE_CHECKING:
    from collections.abc import Iterator, Mapping

_ROOT = PurePosixPath("/")


def _normalize(path: str) -> PurePosixPath:
    return _ROOT / path.lstrip("/")


class InMemoryFileSystem(ITemplateFileSystem):
    """Virtual filesystem for tests and templates bundled as data.

    Keys are paths relative to ``/`` (a leading slash is optional); values are
    ``bytes`` or ``str`` (stored UTF-8 encoded). Directories are implied by the
    file paths.
    """

    def __init__(self, files: Mapping[str, bytes | str] | None = None) -> None:
        self._files: dict[PurePosixPath, bytes] = {}
        for path, content in (files or {}).items():
            self.write(path, content)

    def write(self, path: str, content: bytes | str) -> None:
        """Create or replace a file."""
        key = _normalize(path)
        if key == _ROOT:
            raise IsADirectoryError(errno.EISDIR, os.strerror(errno.EISDIR), path)
        if isinstance(content, str):
            content = content.encode("utf-8")
        self._files[key] = content

    def remove(self, path: str) -> None:
        """Delete a file."""
        key = _normalize(path)
        if key not in self._files:
            raise FileNotFoundError(errno.ENOENT, os.strerror(errno.ENOENT), path)
        del self._files[key]

    def walk(self) -> Iterator[FileEntry]:
        directories: set[PurePosixPath] = set()
        for key in self._files:
            directories.update(p for p in key.parents if p != _ROOT)
        entries = [(d, True) for d in directories] + [(f, False) for f in self._files]
        for path, is_dir in sorted(entries, key=lambda item: item[0].parts):
            yield FileEntry(
                path=str(path), relative=path.relative_to(_ROOT), is_dir=is_dir
            )

    def read_bytes(self, path: str) -> bytes:
        key = _normalize(path)
        try:
            return self._files[key]
        except KeyError:
            if any(key in f.parents for f in self._files):
                raise IsADirectoryError(
                    errno.EISDIR, os.strerror(errno.EISDIR), path
                ) from None
            raise FileNotFoundError(
                errno.ENOENT, os.strerror(errno.ENOENT), path
            ) from None

    def __len__(self) -> int:
        return len(self._files)

    def __repr__(self) -> str:
        return f"InMemoryFileSystem({len(self._files)} files)"
