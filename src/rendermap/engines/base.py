"""Abstract template engine interface.

The templating language itself is treated as a black box. Engines expose
exactly two capabilities to the rest of rendermap:

1. compile: parse template text into a reusable compiled object, bound to a
   partial resolver
2. execute: run a compiled object against a context, writing to a sink

Everything else (layout composition, registry assembly) is built on top of
these two calls, so it can be exercised with any engine.
"""

import io
from abc import ABC, abstractmethod
from collections.abc import Mapping
from typing import Any, Protocol

from rendermap.exceptions import PartialNotFoundError
from rendermap.partials.base import PartialResolver


class Sink(Protocol):
    """Writable text destination."""

    def write(self, s: str, /) -> Any: ...


class TemplateEngine(ABC):
    """Adapter over a concrete templating library.

    Attributes:
        name: Engine identifier (e.g., "mustache", "jinja2")
        strict_partials: Raise PartialNotFoundError for unresolved partials
            instead of rendering them as empty text
    """

    name: str = ""

    def __init__(self, strict_partials: bool = False) -> None:
        self.strict_partials = strict_partials

    @abstractmethod
    def compile(self, text: str, resolver: PartialResolver, source: str = "<string>") -> Any:
        """Parse template text into an executable template.

        Partials referenced by the template are resolved through ``resolver``
        when the template is executed, not here.

        Args:
            text: Raw template text
            resolver: Resolver consulted for partial references
            source: Human-readable origin of the text, used in errors

        Returns:
            Engine-specific compiled template

        Raises:
            TemplateParseError: If the text is not a valid template
        """
        pass

    @abstractmethod
    def execute(
        self,
        compiled: Any,
        context: Any,
        sink: Sink,
        slots: Mapping[str, str] | None = None,
    ) -> None:
        """Execute a compiled template, writing output to sink.

        Args:
            compiled: Object returned by compile()
            context: Data the template is rendered against
            sink: Output destination
            slots: Pre-rendered values layered on top of the context; they
                are inserted as-is and take precedence over context keys
        """
        pass

    def render_to_string(
        self,
        compiled: Any,
        context: Any,
        slots: Mapping[str, str] | None = None,
    ) -> str:
        """Execute a compiled template and return its output."""
        buffer = io.StringIO()
        self.execute(compiled, context, buffer, slots)
        return buffer.getvalue()

    def resolve_partial(self, resolver: PartialResolver, name: str) -> str:
        """Resolve a partial, applying the unresolved-partial policy."""
        text = resolver.resolve(name)
        if text is None:
            if self.strict_partials:
                raise PartialNotFoundError(name)
            return ""
        return text

    def __repr__(self) -> str:
        return f"{type(self).__name__}(strict_partials={self.strict_partials})"
