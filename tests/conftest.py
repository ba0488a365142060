"""Shared pytest fixtures for rendermap tests.

Fixtures are organized by category:
- Engine fixtures: real engines plus a trivial fake engine for core logic
- Resolver fixtures: static and filesystem partial sources
- Filesystem fixtures: temporary template trees
"""

import logging
import re
from collections.abc import Iterator, Mapping
from pathlib import Path
from typing import Any

import pytest

from rendermap.engines import JinjaEngine, MustacheEngine
from rendermap.engines.base import Sink, TemplateEngine
from rendermap.exceptions import TemplateParseError
from rendermap.partials import FilePartialSource, LayeredResolver, StaticPartialSet
from rendermap.partials.base import PartialResolver

# =============================================================================
# Fake Engine
# =============================================================================

_TAG = re.compile(r"\{\{\s*(>?)\s*([\w./-]+)\s*\}\}")


class FakeEngine(TemplateEngine):
    """Minimal engine understanding only ``{{name}}`` and ``{{> partial}}``.

    Unknown variables raise KeyError. Unbalanced braces fail to compile.
    """

    name = "fake"

    def compile(self, text: str, resolver: PartialResolver, source: str = "<string>") -> Any:
        if text.count("{{") != text.count("}}"):
            raise TemplateParseError(source, "unbalanced braces")
        return (text, resolver)

    def execute(
        self,
        compiled: Any,
        context: Any,
        sink: Sink,
        slots: Mapping[str, str] | None = None,
    ) -> None:
        text, resolver = compiled
        values = {**(context or {}), **(slots or {})}

        def substitute(match: re.Match[str]) -> str:
            if match.group(1):
                partial = self.resolve_partial(resolver, match.group(2))
                return self.render_to_string((partial, resolver), context)
            return str(values[match.group(2)])

        sink.write(_TAG.sub(substitute, text))


class FailingSink:
    """Sink that fails on the first write."""

    def write(self, s: str) -> int:
        raise OSError("sink closed")


class RecordingSink:
    """Sink that records every write call."""

    def __init__(self) -> None:
        self.writes: list[str] = []

    def write(self, s: str) -> int:
        self.writes.append(s)
        return len(s)

    def getvalue(self) -> str:
        return "".join(self.writes)


# =============================================================================
# Logging
# =============================================================================


@pytest.fixture(autouse=True)
def reset_rendermap_logger() -> Iterator[None]:
    """Undo CLI logging setup so caplog sees rendermap records."""
    yield
    logger = logging.getLogger("rendermap")
    logger.handlers.clear()
    logger.propagate = True
    logger.setLevel(logging.NOTSET)


# =============================================================================
# Engine Fixtures
# =============================================================================


@pytest.fixture
def fake_engine() -> FakeEngine:
    return FakeEngine()


@pytest.fixture
def mustache_engine() -> MustacheEngine:
    return MustacheEngine()


@pytest.fixture
def jinja_engine() -> JinjaEngine:
    return JinjaEngine()


# =============================================================================
# Resolver Fixtures
# =============================================================================


@pytest.fixture
def partials_dir(tmp_path: Path) -> Path:
    """Create a directory of partial files."""
    directory = tmp_path / "partials"
    directory.mkdir()
    (directory / "footer.mustache").write_text("<footer>{{site}}</footer>")
    (directory / "x").write_text("dyn-x")
    (directory / "greeting").write_text("Hello from disk")
    return directory


@pytest.fixture
def static_partials() -> StaticPartialSet:
    return StaticPartialSet({"greeting": "Hi {{name}}", "x": ""})


@pytest.fixture
def resolver(static_partials: StaticPartialSet, partials_dir: Path) -> LayeredResolver:
    """Static partials first, then files under partials_dir."""
    return LayeredResolver(static_partials, FilePartialSource([partials_dir]))


# =============================================================================
# Filesystem Fixtures
# =============================================================================


@pytest.fixture
def site_dir(tmp_path: Path) -> Path:
    """Create a template tree with templates, layouts and partials."""
    (tmp_path / "templates").mkdir()
    (tmp_path / "layouts").mkdir()
    (tmp_path / "partials").mkdir()

    (tmp_path / "templates" / "home.mustache").write_text(
        "<h1>{{title}}</h1>{{> item_list}}"
    )
    (tmp_path / "templates" / "about.mustache").write_text("<p>About {{title}}</p>")
    (tmp_path / "layouts" / "main.mustache").write_text(
        "<html><title>{{title}}</title><body>{{{content}}}</body></html>"
    )
    (tmp_path / "partials" / "item_list.mustache").write_text(
        "<ul>{{#items}}<li>{{.}}</li>{{/items}}</ul>"
    )
    return tmp_path
