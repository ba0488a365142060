"""Renderers: a compiled template (or a content/layout pair) ready to execute.

Renderers hold no mutable state after construction. The same renderer can be
called any number of times, from any number of threads.
"""

from typing import IO, Any, Protocol, runtime_checkable

from rendermap.engines.base import Sink, TemplateEngine
from rendermap.partials.base import PartialResolver
from rendermap.templates.loader import compile_template

CONTENT_SLOT = "content"


@runtime_checkable
class Renderer(Protocol):
    """Anything that can render a context into a sink."""

    def render(self, context: Any, sink: Sink) -> None:
        """Render context into sink, raising on failure."""
        ...


class SimpleRenderer:
    """Renders a single compiled template.

    Usage:
        renderer = SimpleRenderer.from_source(open("home.mustache"), resolver, engine)
        renderer.render({"name": "Ana"}, sys.stdout)
    """

    def __init__(self, engine: TemplateEngine, template: Any) -> None:
        self._engine = engine
        self._template = template

    @classmethod
    def from_source(
        cls,
        source: str | bytes | IO[Any],
        resolver: PartialResolver,
        engine: TemplateEngine,
        name: str = "<string>",
    ) -> "SimpleRenderer":
        """Compile a template source into a renderer."""
        return cls(engine, compile_template(source, resolver, engine, name))

    def render(self, context: Any, sink: Sink) -> None:
        self._engine.execute(self._template, context, sink)


class LayoutRenderer:
    """Renders a content template inside a layout template.

    The content template is rendered first, into memory. Its output is then
    bound to the ``content`` slot of the layout, which is rendered into the
    sink. If the content fails, the layout is never executed and the sink is
    left untouched.

    Both templates are compiled independently and may reference their own
    partials. Layouts do not nest.
    """

    def __init__(self, engine: TemplateEngine, template: Any, layout: Any) -> None:
        self._engine = engine
        self._template = template
        self._layout = layout

    @classmethod
    def from_sources(
        cls,
        template: str | bytes | IO[Any],
        layout: str | bytes | IO[Any],
        resolver: PartialResolver,
        engine: TemplateEngine,
        template_name: str = "<template>",
        layout_name: str = "<layout>",
    ) -> "LayoutRenderer":
        """Compile a content source and a layout source into a renderer."""
        return cls(
            engine,
            compile_template(template, resolver, engine, template_name),
            compile_template(layout, resolver, engine, layout_name),
        )

    def render(self, context: Any, sink: Sink) -> None:
        content = self._engine.render_to_string(self._template, context)
        self._engine.execute(self._layout, context, sink, slots={CONTENT_SLOT: content})
