"""Template engines (black-box templating behind a narrow interface).

- base: TemplateEngine abstract interface
- mustache: pystache-backed mustache engine (default)
- jinja: Jinja2 engine
"""

from rendermap.engines.base import Sink, TemplateEngine
from rendermap.engines.jinja import JinjaEngine
from rendermap.engines.mustache import MustacheEngine

ENGINES: dict[str, type[TemplateEngine]] = {
    MustacheEngine.name: MustacheEngine,
    JinjaEngine.name: JinjaEngine,
}


def get_engine(name: str = "mustache", strict_partials: bool = False) -> TemplateEngine:
    """Instantiate an engine by name.

    Args:
        name: Engine identifier
        strict_partials: Raise on unresolved partials instead of rendering ""

    Returns:
        Engine instance

    Raises:
        ValueError: If no engine is registered under name
    """
    if name not in ENGINES:
        raise ValueError(f"Unknown template engine: {name}. Valid: {sorted(ENGINES)}")
    return ENGINES[name](strict_partials=strict_partials)


__all__ = [
    "ENGINES",
    "JinjaEngine",
    "MustacheEngine",
    "Sink",
    "TemplateEngine",
    "get_engine",
]
