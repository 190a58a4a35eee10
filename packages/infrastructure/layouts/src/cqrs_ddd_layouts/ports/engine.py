"""Template engine port."""

from __future__ import annotations

from collections.abc import Callable, Mapping
from typing import TYPE_CHECKING, Any, Protocol, runtime_checkable

if TYPE_CHECKING:
    from ..settings import TemplateSettings


@runtime_checkable
class TextWriter(Protocol):
    """Anything rendered output can be written to."""

    def write(self, text: str, /) -> Any: ...


@runtime_checkable
class ITemplateNamespace(Protocol):
    """One set of compiled units sharing names, delimiters and functions.

    A new namespace is created for every load pass.
    """

    def register(self, name: str, source: str) -> Any:
        """Compile ``source`` and make it addressable from other units as ``name``."""
        ...

    def compile_fragment(self, label: str, source: str) -> Any:
        """Compile ``source`` without making it addressable by name.

        ``label`` only appears in error messages.
        """
        ...

    def execute(
        self, unit: Any, data: Mapping[str, Any] | None, writer: TextWriter
    ) -> None:
        """Execute a compiled unit against ``data``, writing to ``writer``."""
        ...


@runtime_checkable
class ITemplateEngine(Protocol):
    """Protocol for the engine that compiles and executes template source."""

    def create_namespace(
        self,
        settings: TemplateSettings,
        functions: Mapping[str, Callable[..., Any]],
    ) -> ITemplateNamespace:
        """Create an empty namespace configured from ``settings``."""
        ...
