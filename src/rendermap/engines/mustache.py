"""Mustache engine backed by pystache."""

import logging
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

import pystache
from pystache.parsed import ParsedTemplate
from pystache.parser import ParsingError

from rendermap.engines.base import Sink, TemplateEngine
from rendermap.exceptions import TemplateParseError
from rendermap.partials.base import PartialResolver

logger = logging.getLogger(__name__)


class _PartialLoader:
    """Exposes a resolver through pystache's ``partials.get()`` hook."""

    def __init__(self, engine: TemplateEngine, resolver: PartialResolver) -> None:
        self._engine = engine
        self._resolver = resolver

    def get(self, name: str) -> str:
        return self._engine.resolve_partial(self._resolver, name)


@dataclass(frozen=True)
class MustacheTemplate:
    """Parsed mustache template bound to its partial resolver."""

    parsed: ParsedTemplate
    renderer: pystache.Renderer
    source: str


class MustacheEngine(TemplateEngine):
    """Logic-less mustache templates.

    Layouts receive the rendered content as ``content``; use the triple
    mustache ``{{{content}}}`` to insert it without escaping.
    """

    name = "mustache"

    def compile(
        self, text: str, resolver: PartialResolver, source: str = "<string>"
    ) -> MustacheTemplate:
        try:
            parsed = pystache.parse(text)
        except ParsingError as e:
            raise TemplateParseError(source, str(e)) from e

        # Missing partials are handled by _PartialLoader, so pystache itself
        # never sees an unknown name.
        renderer = pystache.Renderer(
            partials=_PartialLoader(self, resolver),
            missing_tags="ignore",
        )
        logger.debug("Compiled mustache template %s", source)
        return MustacheTemplate(parsed=parsed, renderer=renderer, source=source)

    def execute(
        self,
        compiled: MustacheTemplate,
        context: Any,
        sink: Sink,
        slots: Mapping[str, str] | None = None,
    ) -> None:
        stack = [context]
        if slots:
            stack.append(dict(slots))
        sink.write(compiled.renderer.render(compiled.parsed, *stack))
