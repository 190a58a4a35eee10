"""Test configuration for cqrs-ddd-layouts."""

from __future__ import annotations

import re
import shutil
from pathlib import Path

import pytest

from cqrs_ddd_layouts import InMemoryFileSystem, LayoutEngine

TEMPLATES_DIR = Path(__file__).parent / "templates"

_WHITESPACE = re.compile(r"\s+")


def trim(text: str) -> str:
    """Collapse whitespace runs so output can be compared on one line."""
    return _WHITESPACE.sub(" ", text).strip()


@pytest.fixture
def templates_dir() -> Path:
    """The static template tree shipped with the tests."""
    return TEMPLATES_DIR


@pytest.fixture
def engine(templates_dir: Path) -> LayoutEngine:
    """Engine over the static tree, loaded."""
    engine = LayoutEngine(templates_dir, ".html")
    engine.load()
    return engine


@pytest.fixture
def writable_templates(tmp_path: Path, templates_dir: Path) -> Path:
    """A copy of the static tree that tests may modify."""
    target = tmp_path / "templates"
    shutil.copytree(templates_dir, target)
    return target


@pytest.fixture
def memory_fs() -> InMemoryFileSystem:
    """Virtual tree mirroring the concrete scenario: one page, one layout."""
    return InMemoryFileSystem(
        {
            "index.html": "<h1>{{ Title }}</h1>",
            "layouts/main.html": "<html><!--tplusContent--></html>",
            "layouts/nested.html": "<main><!--tplusContent--></main>",
        }
    )
