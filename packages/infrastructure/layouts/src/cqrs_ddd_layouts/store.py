"""TemplateStore - settings, function bindings and the compiled registry."""

from __future__ import annotations

import logging
import threading
from collections.abc import Callable, Mapping
from typing import TYPE_CHECKING, Any

from .composer import LayoutComposer
from .exceptions import TemplateNotFoundError
from .registry import RegistryEntry, TemplateRegistry

if TYPE_CHECKING:
    from .ports.engine import ITemplateEngine
    from .ports.filesystem import ITemplateFileSystem
    from .settings import TemplateSettings

logger = logging.getLogger(__name__)


class TemplateStore:
    """Owns everything a load pass reads and the registry it publishes.

    **Locking:** ``load()``, ``register_function()`` and ``configure()`` take
    one exclusive lock. Readers never lock; they call :meth:`snapshot` once
    and work on that immutable registry.

    **Failure:** a failed load raises and leaves the previously published
    registry in place.
    """

    def __init__(
        self,
        filesystem: ITemplateFileSystem,
        settings: TemplateSettings,
        engine: ITemplateEngine | None = None,
        functions: Mapping[str, Callable[..., Any]] | None = None,
        composer: LayoutComposer | None = None,
    ) -> None:
        if engine is None:
            from .engines.jinja import JinjaTemplateEngine

            engine = JinjaTemplateEngine()
        self.filesystem = filesystem
        self._settings = settings
        self._engine = engine
        self._functions: dict[str, Callable[..., Any]] = dict(functions or {})
        self._composer = composer or LayoutComposer()
        self._lock = threading.Lock()
        self._registry = TemplateRegistry.empty()
        self._loaded = False

    # ── Configuration ────────────────────────────────────────────

    @property
    def settings(self) -> TemplateSettings:
        return self._settings

    def configure(self, **changes: Any) -> TemplateSettings:
        """Publish a copy of the settings with ``changes`` applied and validated."""
        with self._lock:
            merged = self._settings.model_dump() | changes
            self._settings = type(self._settings).model_validate(merged)
            return self._settings

    def register_function(self, name: str, func: Callable[..., Any]) -> None:
        """Bind ``func`` as ``name`` in every template compiled by the next load."""
        with self._lock:
            self._functions[name] = func
        logger.debug("Registered template function %s", name)

    @property
    def functions(self) -> dict[str, Callable[..., Any]]:
        return dict(self._functions)

    # ── Load ─────────────────────────────────────────────────────

    @property
    def loaded(self) -> bool:
        return self._loaded

    def load(self) -> TemplateRegistry:
        """Rebuild the registry from the filesystem and publish it."""
        with self._lock:
            settings = self._settings
            namespace = self._engine.create_namespace(settings, dict(self._functions))
            entries = self._composer.collect(self.filesystem, namespace, settings)
            registry = TemplateRegistry(entries, namespace)
            self._registry = registry
            self._loaded = True
        logger.debug(
            "Loaded %d templates (%d layouts) from %r",
            len(registry),
            len(registry.layouts()),
            self.filesystem,
        )
        return registry

    # ── Lookup ───────────────────────────────────────────────────

    def snapshot(self) -> TemplateRegistry:
        """Return the registry published by the last successful load."""
        return self._registry

    def lookup(self, name: str) -> RegistryEntry:
        """Return the entry for ``name`` in the current snapshot.

        Convenience for callers holding a store. Renders resolve every name
        against one :meth:`snapshot` instead, so a concurrent reload cannot
        split a render across two registries.
        """
        entry = self.snapshot().get(name)
        if entry is None:
            raise TemplateNotFoundError(name)
        return entry
