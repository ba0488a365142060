"""Exception hierarchy for rendermap.

Registry construction failures (unreadable source, malformed template) are
fatal and surface as RegistryBuildError. Render-time failures propagate to the
caller of Renderer.render unchanged.
"""

from collections.abc import Mapping
from typing import Any


class RendermapError(Exception):
    """Base class for all rendermap errors."""


class SourceUnavailableError(RendermapError):
    """Raised when a declared template or layout cannot be read."""

    def __init__(self, path: str, message: str | None = None) -> None:
        self.path = path
        self.message = message or f"Template source not available: {path}"
        super().__init__(self.message)


class TemplateParseError(RendermapError):
    """Raised when template text fails to parse."""

    def __init__(self, source: str, message: str) -> None:
        self.source = source
        self.message = message
        super().__init__(f"Failed to parse {source}: {message}")


class PartialNotFoundError(RendermapError):
    """Raised in strict mode when no resolver knows a partial."""

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"Partial not found: {name}")


class PartialSourceError(RendermapError):
    """Raised when a partial file exists but cannot be read."""

    def __init__(self, name: str, path: str, reason: str) -> None:
        self.name = name
        self.path = path
        self.reason = reason
        super().__init__(f"Failed to read partial {name!r} from {path}: {reason}")


class RegistryBuildError(RendermapError):
    """Raised when the renderer registry cannot be built.

    Attributes:
        renderers: Renderers assembled before the failing declaration
        name: Declaration that failed
    """

    def __init__(self, name: str, renderers: Mapping[str, Any], cause: Exception) -> None:
        self.name = name
        self.renderers = renderers
        super().__init__(f"Failed to build renderer {name!r}: {cause}")
