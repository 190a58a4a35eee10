"""Jinja2 template engine adapter."""

from __future__ import annotations

import logging
from collections.abc import Callable, Mapping
from typing import TYPE_CHECKING, Any

from jinja2 import (
    DictLoader,
    Environment,
    StrictUndefined,
    Template,
    Undefined,
)

from ..exceptions import TemplateRenderError
from ..ports.engine import ITemplateEngine, ITemplateNamespace, TextWriter

if TYPE_CHECKING:
    from ..settings import TemplateSettings

logger = logging.getLogger(__name__)


class JinjaNamespace(ITemplateNamespace):
    """
    One Jinja2 environment per load pass.

    Standalone templates are stored in the environment's loader so that other
    templates can ``{% include %}`` or ``{% extends %}`` them by logical name.
    Layout fragments are compiled from strings and never addressable.
    """

    def __init__(self, environment: Environment, sources: dict[str, str]) -> None:
        self.environment = environment
        self._sources = sources

    def register(self, name: str, source: str) -> Template:
        self._sources[name] = source
        return self.environment.get_template(name)

    def compile_fragment(self, label: str, source: str) -> Template:
        code = self.environment.compile(source, name=label)
        return self.environment.template_class.from_code(
            self.environment, code, self.environment.make_globals(None)
        )

    def execute(
        self, unit: Any, data: Mapping[str, Any] | None, writer: TextWriter
    ) -> None:
        """Stream ``unit`` into ``writer``.

        Anything raised while producing output (Jinja2 errors, exceptions from
        bound functions) becomes a :class:`TemplateRenderError`; errors raised
        by ``writer`` itself propagate unchanged.
        """
        context = dict(data) if data is not None else {}
        chunks = unit.generate(context)
        while True:
            try:
                chunk = next(chunks)
            except StopIteration:
                return
            except Exception as e:
                name = getattr(unit, "name", None) or "<fragment>"
                logger.debug("Jinja2 execution of %s failed: %s", name, e)
                raise TemplateRenderError(name, str(e) or type(e).__name__) from e
            writer.write(chunk)


class JinjaTemplateEngine(ITemplateEngine):
    """
    Builds :class:`JinjaNamespace` instances from :class:`TemplateSettings`.

    ``left_delim``/``right_delim`` map to Jinja2's variable delimiters; block
    and comment syntax keep their defaults unless passed as extra environment
    options.
    """

    def __init__(self, **environment_options: Any) -> None:
        self._environment_options = environment_options

    def create_namespace(
        self,
        settings: TemplateSettings,
        functions: Mapping[str, Callable[..., Any]],
    ) -> JinjaNamespace:
        sources: dict[str, str] = {}
        options: dict[str, Any] = {
            "variable_start_string": settings.left_delim,
            "variable_end_string": settings.right_delim,
            "autoescape": settings.autoescape,
            "undefined": StrictUndefined if settings.strict_undefined else Undefined,
            "auto_reload": False,
            "keep_trailing_newline": True,
        }
        options.update(self._environment_options)
        environment = Environment(loader=DictLoader(sources), **options)
        environment.globals.update(functions)
        return JinjaNamespace(environment, sources)
