"""Partial resolution.

- base: PartialResolver protocol and LayeredResolver
- static: StaticPartialSet and the built-in debug partial
- filesystem: FilePartialSource reading partials from disk on demand
"""

from rendermap.partials.base import LayeredResolver, PartialResolver
from rendermap.partials.filesystem import FilePartialSource
from rendermap.partials.static import (
    DEBUG_PARTIAL_NAME,
    StaticPartialSet,
    default_static_partials,
)

__all__ = [
    "DEBUG_PARTIAL_NAME",
    "FilePartialSource",
    "LayeredResolver",
    "PartialResolver",
    "StaticPartialSet",
    "default_static_partials",
]
