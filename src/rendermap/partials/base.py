"""Partial resolver protocol and the layered composite.

A resolver maps a partial name to its template text. ``None`` means the
resolver does not know the name; an empty string means it knows the name but
has no content for it.
"""

import logging
from typing import Protocol, runtime_checkable

logger = logging.getLogger(__name__)


@runtime_checkable
class PartialResolver(Protocol):
    """Maps partial names to raw template text."""

    def resolve(self, name: str) -> str | None:
        """Return the partial text, or None if unknown."""
        ...


class LayeredResolver:
    """Asks a fixed, ordered list of resolvers for a partial.

    The first result that is both found and non-empty wins. An empty match
    counts as a miss, so an earlier layer can declare a name as a placeholder
    and leave the content to a later layer.

    Usage:
        resolver = LayeredResolver(static_partials, FilePartialSource(["partials"]))
        text = resolver.resolve("header")
    """

    def __init__(self, *resolvers: PartialResolver) -> None:
        self._resolvers = tuple(resolvers)

    @property
    def resolvers(self) -> tuple[PartialResolver, ...]:
        return self._resolvers

    def resolve(self, name: str) -> str | None:
        for resolver in self._resolvers:
            text = resolver.resolve(name)
            if text:
                return text

        logger.debug("Partial not resolved by any layer: %s", name)
        return None
