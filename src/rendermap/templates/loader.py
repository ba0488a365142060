"""Template source loading and compilation.

Sources are read completely before they are handed to the engine; there is
no streaming parse.
"""

import logging
from pathlib import Path
from typing import IO, Any, Protocol

from rendermap.engines.base import TemplateEngine
from rendermap.exceptions import SourceUnavailableError
from rendermap.partials.base import PartialResolver

logger = logging.getLogger(__name__)


class TemplateSourceLoader(Protocol):
    """Yields raw template text for a path or identifier."""

    def load(self, path: str) -> str:
        """Return the template text stored at path."""
        ...


class FileSourceLoader:
    """Reads template sources from the filesystem.

    Attributes:
        base_dir: Directory relative paths are resolved against (cwd if None)
        encoding: Text encoding of template files
    """

    def __init__(self, base_dir: Path | None = None, encoding: str = "utf-8") -> None:
        self.base_dir = base_dir
        self.encoding = encoding

    def load(self, path: str) -> str:
        """Read a template file.

        Args:
            path: Template path

        Returns:
            Template text

        Raises:
            SourceUnavailableError: If the file cannot be read or decoded
        """
        full_path = Path(path)
        if self.base_dir is not None and not full_path.is_absolute():
            full_path = self.base_dir / full_path

        try:
            with open(full_path, "rb") as f:
                data = f.read()
            return data.decode(self.encoding)
        except (OSError, UnicodeDecodeError) as e:
            raise SourceUnavailableError(path, f"reading {path}: {e}") from e


def read_source(source: str | bytes | IO[Any], encoding: str = "utf-8") -> str:
    """Read a template source fully into a string."""
    if hasattr(source, "read"):
        source = source.read()
    if isinstance(source, bytes):
        return source.decode(encoding)
    return source


def compile_template(
    source: str | bytes | IO[Any],
    resolver: PartialResolver,
    engine: TemplateEngine,
    name: str = "<string>",
) -> Any:
    """Compile template text, or a readable stream of it, with a resolver.

    Args:
        source: Template text, bytes, or a readable stream
        resolver: Resolver for partial references
        engine: Engine that parses the template
        name: Origin of the template, used in errors

    Returns:
        Engine-specific compiled template

    Raises:
        TemplateParseError: If the engine rejects the template
    """
    return engine.compile(read_source(source), resolver, source=name)
