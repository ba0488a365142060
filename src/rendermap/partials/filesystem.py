"""Filesystem-backed partial source.

Partials are looked up on every call: each search path is combined with the
partial name and each extension in order, and the first file that exists is
read. Nothing is cached, so edits to partial files show up on the next render.
"""

import logging
from collections.abc import Sequence
from pathlib import Path, PurePosixPath

from rendermap.exceptions import PartialSourceError

logger = logging.getLogger(__name__)

DEFAULT_EXTENSIONS: tuple[str, ...] = ("", ".mustache", ".stache")


class FilePartialSource:
    """Resolves partial names to files under a set of directories.

    Attributes:
        search_paths: Directories to search, in order
        extensions: File extensions to try for each directory, in order
    """

    def __init__(
        self,
        search_paths: Sequence[str | Path] = ("",),
        extensions: Sequence[str] = DEFAULT_EXTENSIONS,
        encoding: str = "utf-8",
    ) -> None:
        self.search_paths = tuple(Path(p) for p in search_paths)
        self.extensions = tuple(extensions)
        self.encoding = encoding

    def candidates(self, name: str) -> list[Path]:
        """List the paths tried for a partial name, in lookup order."""
        if not _is_safe_name(name):
            return []

        return [
            base / f"{name}{ext}"
            for base in self.search_paths
            for ext in self.extensions
        ]

    def resolve(self, name: str) -> str | None:
        for path in self.candidates(name):
            try:
                text = path.read_text(encoding=self.encoding)
            except (FileNotFoundError, IsADirectoryError, NotADirectoryError):
                continue
            except (OSError, UnicodeDecodeError) as e:
                raise PartialSourceError(name, str(path), str(e)) from e

            logger.debug("Loaded partial %s from %s", name, path)
            return text

        return None


def _is_safe_name(name: str) -> bool:
    """Reject names that would escape the search paths."""
    if not name:
        return False
    parts = PurePosixPath(name.replace("\\", "/"))
    return not parts.is_absolute() and ".." not in parts.parts
