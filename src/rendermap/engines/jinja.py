"""Jinja2 engine.

Partials are ``{% include "name" %}`` targets, loaded through a Jinja loader
that delegates to the partial resolver. Template caching is disabled so that
included partials are resolved again on every render.

The loader follows Jinja's contract and raises TemplateNotFound for unknown
names, so ``ignore missing`` and list fallbacks behave as documented. A
lookup that nothing catches renders as empty text, or raises
PartialNotFoundError when partials are strict.
"""

import logging
from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from typing import Any

from jinja2 import (
    BaseLoader,
    Environment,
    Template,
    TemplateNotFound,
    TemplatesNotFound,
    TemplateSyntaxError,
)
from markupsafe import Markup

from rendermap.engines.base import Sink, TemplateEngine
from rendermap.exceptions import PartialNotFoundError, TemplateParseError
from rendermap.partials.base import PartialResolver

logger = logging.getLogger(__name__)


class ResolverLoader(BaseLoader):
    """Jinja2 loader backed by a PartialResolver."""

    def __init__(self, resolver: PartialResolver) -> None:
        self._resolver = resolver

    def get_source(self, environment: Environment, template: str) -> tuple[str, None, Any]:
        source = self._resolver.resolve(template)
        if source is None:
            raise TemplateNotFound(template)
        return source, None, lambda: False


class PartialEnvironment(Environment):
    """Environment applying the unresolved-partial policy to includes.

    ``{% include "name" %}`` goes through get_template and
    ``{% include ["a", "b"] %}`` through select_template. When every name is
    unknown and partials are lenient, an empty template is returned instead.
    With ``ignore missing`` the empty template renders nothing either way.
    """

    def __init__(self, strict_partials: bool = False, **options: Any) -> None:
        super().__init__(**options)
        self.strict_partials = strict_partials

    def get_template(self, name: Any, parent: str | None = None, globals: Any = None) -> Template:
        try:
            return super().get_template(name, parent, globals)
        except TemplateNotFound:
            if self.strict_partials:
                raise
            logger.debug("Partial not found, rendering empty: %s", name)
            return self.from_string("")

    def select_template(
        self, names: Sequence[Any], parent: str | None = None, globals: Any = None
    ) -> Template:
        try:
            return super().select_template(names, parent, globals)
        except TemplatesNotFound:
            if self.strict_partials:
                raise
            logger.debug("No partial found among %s, rendering empty", list(names))
            return self.from_string("")


@dataclass(frozen=True)
class JinjaTemplate:
    """Compiled Jinja2 template bound to its partial resolver."""

    template: Template
    source: str


class JinjaEngine(TemplateEngine):
    """Jinja2 templates with streaming output.

    Layouts receive the rendered content as ``content``. It is passed as
    markup, so ``{{ content }}`` inserts it without escaping it twice.
    """

    name = "jinja2"

    def _create_environment(self, resolver: PartialResolver) -> PartialEnvironment:
        return PartialEnvironment(
            strict_partials=self.strict_partials,
            loader=ResolverLoader(resolver),
            autoescape=True,
            trim_blocks=True,
            lstrip_blocks=True,
            keep_trailing_newline=True,
            cache_size=0,
        )

    def compile(
        self, text: str, resolver: PartialResolver, source: str = "<string>"
    ) -> JinjaTemplate:
        env = self._create_environment(resolver)
        try:
            template = env.from_string(text)
        except TemplateSyntaxError as e:
            raise TemplateParseError(source, f"line {e.lineno}: {e.message}") from e

        logger.debug("Compiled jinja2 template %s", source)
        return JinjaTemplate(template=template, source=source)

    def execute(
        self,
        compiled: JinjaTemplate,
        context: Any,
        sink: Sink,
        slots: Mapping[str, str] | None = None,
    ) -> None:
        if context is None:
            variables: dict[str, Any] = {}
        elif isinstance(context, Mapping):
            variables = dict(context)
        else:
            raise TypeError(
                f"jinja2 engine requires a mapping context, got {type(context).__name__}"
            )

        for key, value in (slots or {}).items():
            variables[key] = Markup(value)

        try:
            for chunk in compiled.template.generate(variables):
                sink.write(chunk)
        except TemplateNotFound as e:
            raise PartialNotFoundError(e.name) from e
