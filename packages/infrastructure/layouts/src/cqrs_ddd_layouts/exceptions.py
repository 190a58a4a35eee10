"""Exception hierarchy for layout loading and rendering."""

from __future__ import annotations


class LayoutError(Exception):
    """Root exception for cqrs-ddd-layouts."""


class TemplateLoadError(LayoutError):
    """Base class for failures that abort a whole load pass.

    Filesystem failures are not wrapped: ``OSError`` raised while walking or
    reading the tree reaches the caller unchanged.
    """


class TemplateCompileError(TemplateLoadError):
    """Raised when a file (or one of its fragments) cannot be compiled."""

    def __init__(self, name: str, fragment: str | None = None, reason: str = "") -> None:
        self.name = name
        self.fragment = fragment
        label = f"{name} ({fragment})" if fragment else name
        msg = f"Failed to compile template {label}"
        if reason:
            msg += f": {reason}"
        super().__init__(msg)


class LayoutMarkerError(TemplateLoadError):
    """Raised when a file contains more than one layout marker."""

    def __init__(self, name: str, count: int) -> None:
        self.name = name
        self.count = count
        super().__init__(f"too many layout markers in {name} (found {count})")


class TemplateNameCollisionError(TemplateLoadError):
    """Raised when two files reduce to the same logical name."""

    def __init__(self, name: str, first: str, second: str) -> None:
        self.name = name
        self.first = first
        self.second = second
        super().__init__(
            f"Template name collision for {name!r}: {first} and {second}"
        )


class TemplateNotFoundError(LayoutError):
    """Raised when a render references a name the registry cannot serve.

    ``kind`` is ``"template"`` when content was requested and ``"layout"``
    when a layout was requested.
    """

    def __init__(self, name: str, kind: str = "template", reason: str | None = None) -> None:
        self.name = name
        self.kind = kind
        msg = f"No {kind} registered as {name!r}"
        if reason:
            msg += f" - {reason}"
        super().__init__(msg)


class TemplateRenderError(LayoutError):
    """Raised when the template engine fails while executing a unit."""

    def __init__(self, name: str, reason: str) -> None:
        self.name = name
        self.reason = reason
        super().__init__(f"Error executing template {name}: {reason}")
