"""Tests for LayoutComposer discovery, splitting and render sequencing."""

from __future__ import annotations

import io
from pathlib import PurePosixPath, PureWindowsPath
from typing import Any

import pytest

from cqrs_ddd_layouts import (
    InMemoryFileSystem,
    LayoutComposer,
    LayoutMarkerError,
    LayoutTemplate,
    StandaloneTemplate,
    TemplateCompileError,
    TemplateNameCollisionError,
    TemplateRegistry,
    TemplateRenderError,
    TemplateSettings,
    file_extension,
    logical_name,
    split_layout,
)

MARKER = "<!--tplusContent-->"


class RecordingNamespace:
    """Namespace whose units are their own source text."""

    def __init__(self) -> None:
        self.registered: list[str] = []
        self.fragments: list[str] = []

    def register(self, name: str, source: str) -> Any:
        if "{%" in source:
            raise ValueError("unbalanced block")
        self.registered.append(name)
        return source

    def compile_fragment(self, label: str, source: str) -> Any:
        self.fragments.append(label)
        return source

    def execute(self, unit: Any, data: Any, writer: Any) -> None:
        if unit == "FAIL":
            raise TemplateRenderError("fail", "boom")
        writer.write(unit)


@pytest.fixture
def settings() -> TemplateSettings:
    return TemplateSettings(extension=".html")


def _collect(files: dict[str, str], settings: TemplateSettings):
    namespace = RecordingNamespace()
    entries = LayoutComposer().collect(InMemoryFileSystem(files), namespace, settings)
    return entries, namespace


# ── Naming ───────────────────────────────────────────────────────


@pytest.mark.parametrize(
    ("name", "expected"),
    [
        ("index.html", ".html"),
        ("partials/footer.tmpl.html", ".html"),
        ("dir.d/readme", ""),
        (".html", ".html"),
    ],
)
def test_file_extension(name: str, expected: str) -> None:
    assert file_extension(name) == expected


def test_logical_name_strips_one_extension() -> None:
    assert logical_name(PurePosixPath("index.html"), ".html") == "index"
    assert logical_name(PurePosixPath("a.html.html"), ".html") == "a.html"
    assert logical_name(PurePosixPath("html.html/x.html"), ".html") == "html.html/x"


def test_logical_name_normalizes_separators() -> None:
    assert logical_name(PureWindowsPath("partials\\footer.html"), ".html") == "partials/footer"
    assert logical_name(PurePosixPath("partials\\footer.html"), ".html") == "partials/footer"


def test_split_layout() -> None:
    assert split_layout("plain", MARKER) == ["plain"]
    assert split_layout(f"<a>{MARKER}</a>", MARKER) == ["<a>", "</a>"]
    assert split_layout(f"{MARKER}{MARKER}", MARKER) == ["", "", ""]


# ── Collect ──────────────────────────────────────────────────────


def test_collect_classifies_files(settings: TemplateSettings) -> None:
    entries, namespace = _collect(
        {
            "index.html": "<h1>hi</h1>",
            "layouts/main.html": f"<html>{MARKER}</html>",
            "notes.txt": "skipped",
        },
        settings,
    )

    assert set(entries) == {"index", "layouts/main"}
    assert entries["index"] == StandaloneTemplate(
        name="index", unit="<h1>hi</h1>", source_path="/index.html"
    )
    layout = entries["layouts/main"]
    assert isinstance(layout, LayoutTemplate)
    assert (layout.head, layout.tail) == ("<html>", "</html>")
    assert namespace.registered == ["index"]
    assert namespace.fragments == ["layouts/main (head)", "layouts/main (tail)"]


def test_marker_at_edges_gives_empty_fragments(settings: TemplateSettings) -> None:
    entries, _ = _collect({"wrap.html": MARKER}, settings)

    layout = entries["wrap"]
    assert isinstance(layout, LayoutTemplate)
    assert (layout.head, layout.tail) == ("", "")


def test_too_many_markers(settings: TemplateSettings) -> None:
    with pytest.raises(LayoutMarkerError, match="too many layout markers in bad") as exc_info:
        _collect({"bad.html": f"a{MARKER}b{MARKER}c", "good.html": "ok"}, settings)

    assert exc_info.value.name == "bad"
    assert exc_info.value.count == 2


def test_name_collision(settings: TemplateSettings) -> None:
    files = {"a/b.html": "one", "a\\b.html": "two"}

    with pytest.raises(TemplateNameCollisionError, match="'a/b'"):
        _collect(files, settings)


def test_compile_error_names_fragment(settings: TemplateSettings) -> None:
    with pytest.raises(TemplateCompileError, match="broken") as exc_info:
        _collect({"broken.html": "{% if %}"}, settings)

    assert exc_info.value.name == "broken"
    assert isinstance(exc_info.value.__cause__, ValueError)


def test_undecodable_file(settings: TemplateSettings) -> None:
    fs = InMemoryFileSystem({"latin.html": b"caf\xe9"})

    with pytest.raises(TemplateCompileError, match="latin"):
        LayoutComposer().collect(fs, RecordingNamespace(), settings)


def test_custom_marker() -> None:
    settings = TemplateSettings(extension=".tpl", marker="@@content@@")
    entries, _ = _collect({"l.tpl": "<a>@@content@@</a>", "p.tpl": MARKER}, settings)

    assert isinstance(entries["l"], LayoutTemplate)
    assert isinstance(entries["p"], StandaloneTemplate)


def test_filesystem_errors_propagate(settings: TemplateSettings) -> None:
    class FailingFileSystem(InMemoryFileSystem):
        def read_bytes(self, path: str) -> bytes:
            raise PermissionError(13, "Permission denied", path)

    fs = FailingFileSystem({"index.html": "x"})
    with pytest.raises(PermissionError):
        LayoutComposer().collect(fs, RecordingNamespace(), settings)


# ── Render ───────────────────────────────────────────────────────


def _registry(**entries: Any) -> TemplateRegistry:
    return TemplateRegistry(entries, RecordingNamespace())


def test_render_nesting_order() -> None:
    registry = _registry(
        content=StandaloneTemplate("content", "C"),
        A=LayoutTemplate("A", "A.head ", " A.tail"),
        B=LayoutTemplate("B", "B.head ", " B.tail"),
    )
    buf = io.StringIO()

    LayoutComposer().render_registry(registry, buf, "content", None, ["A", "B"])

    assert buf.getvalue() == "B.head A.head C A.tail B.tail"


def test_render_same_layout_twice() -> None:
    registry = _registry(
        content=StandaloneTemplate("content", "C"),
        A=LayoutTemplate("A", "(", ")"),
    )
    buf = io.StringIO()

    LayoutComposer().render_registry(registry, buf, "content", None, ["A", "A"])

    assert buf.getvalue() == "((C))"


def test_render_failure_keeps_written_output() -> None:
    registry = _registry(
        content=StandaloneTemplate("content", "FAIL"),
        A=LayoutTemplate("A", "<a>", "</a>"),
    )
    buf = io.StringIO()

    with pytest.raises(TemplateRenderError):
        LayoutComposer().render_registry(registry, buf, "content", None, ["A"])

    assert buf.getvalue() == "<a>"


def test_render_failure_in_tail_stops_outer_tails() -> None:
    registry = _registry(
        content=StandaloneTemplate("content", "C"),
        A=LayoutTemplate("A", "<a>", "FAIL"),
        B=LayoutTemplate("B", "<b>", "</b>"),
    )
    buf = io.StringIO()

    with pytest.raises(TemplateRenderError):
        LayoutComposer().render_registry(registry, buf, "content", None, ["A", "B"])

    assert buf.getvalue() == "<b><a>C"
