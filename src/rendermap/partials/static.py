"""Statically registered partials.

Static partials are built once at startup and never change afterwards. The
built-in ``rendermap/debug`` partial dumps the fields of a ResponseContext so
a page can be inspected while it is being developed.
"""

from collections.abc import Iterator, Mapping
from types import MappingProxyType

DEBUG_PARTIAL_NAME = "rendermap/debug"

MUSTACHE_DEBUG_TEMPLATE = """
<div>
    <h1>rendermap debugger</h1>
    <small>page generated at {{ Helper.Now }}</small>
    <h3>Response context</h3>
    <div>{{ String }}</div>
    <h2>Request context params</h2>
    <div>
        <ul>{{ #Context.params }}
        <li><pre>{{ . }}</pre></li>{{ /Context.params }}
        </ul>
    </div>
    <h2>Request context keys</h2>
    <div>
        <ul>{{ #Context.keys }}
        <li><pre>{{ . }}</pre></li>{{ /Context.keys }}
        </ul>
    </div>
    <h2>Request params</h2>
    <div>
        <ul>{{ #Params }}
        <li><pre>{{ . }}</pre></li>{{ /Params }}
        </ul>
    </div>
    <h2>Extra data</h2>
    <div>
        <ul>{{ #Extra }}
        <li><pre>{{ . }}</pre></li>{{ /Extra }}
        </ul>
    </div>
    <h2>Backend data</h2>
    <h3>Full response (as object)</h3>
    <div>
        <ul>{{ #Data }}
        <li><pre>{{ . }}</pre></li>{{ /Data }}
        </ul>
    </div>
    <h3>Full response (as array)</h3>
    <div>
        <ul>{{ #Array }}
        <li><pre>{{ . }}</pre></li>{{ /Array }}
        </ul>
    </div>
</div>"""

JINJA_DEBUG_TEMPLATE = """
<div>
    <h1>rendermap debugger</h1>
    <small>page generated at {{ Helper.Now }}</small>
    <h3>Response context</h3>
    <div>{{ String }}</div>
    <h2>Request context params</h2>
    <div>
        <ul>{% for item in Context["params"] %}
        <li><pre>{{ item }}</pre></li>{% endfor %}
        </ul>
    </div>
    <h2>Request context keys</h2>
    <div>
        <ul>{% for item in Context["keys"] %}
        <li><pre>{{ item }}</pre></li>{% endfor %}
        </ul>
    </div>
    <h2>Request params</h2>
    <div>
        <ul>{% for item in Params %}
        <li><pre>{{ item }}</pre></li>{% endfor %}
        </ul>
    </div>
    <h2>Extra data</h2>
    <div>
        <ul>{% for item in Extra %}
        <li><pre>{{ item }}</pre></li>{% endfor %}
        </ul>
    </div>
    <h2>Backend data</h2>
    <h3>Full response (as object)</h3>
    <div>
        <ul>{% for item in Data %}
        <li><pre>{{ item }}</pre></li>{% endfor %}
        </ul>
    </div>
    <h3>Full response (as array)</h3>
    <div>
        <ul>{% for item in Array %}
        <li><pre>{{ item }}</pre></li>{% endfor %}
        </ul>
    </div>
</div>"""

_DEBUG_TEMPLATES = {
    "mustache": MUSTACHE_DEBUG_TEMPLATE,
    "jinja2": JINJA_DEBUG_TEMPLATE,
}


class StaticPartialSet(Mapping[str, str]):
    """Immutable mapping of partial name to template text."""

    def __init__(self, partials: Mapping[str, str] | None = None) -> None:
        self._partials = MappingProxyType(dict(partials or {}))

    def resolve(self, name: str) -> str | None:
        return self._partials.get(name)

    def __getitem__(self, name: str) -> str:
        return self._partials[name]

    def __iter__(self) -> Iterator[str]:
        return iter(self._partials)

    def __len__(self) -> int:
        return len(self._partials)

    def __repr__(self) -> str:
        return f"StaticPartialSet({sorted(self._partials)!r})"


def default_static_partials(engine_name: str = "mustache", debug: bool = True) -> StaticPartialSet:
    """Build the static partial set shipped with rendermap.

    Args:
        engine_name: Engine whose syntax the built-in partials must use
        debug: Whether to register the debug partial

    Returns:
        StaticPartialSet with the built-in partials
    """
    if not debug:
        return StaticPartialSet()

    try:
        body = _DEBUG_TEMPLATES[engine_name]
    except KeyError:
        raise ValueError(
            f"No built-in partials for engine: {engine_name}. Valid: {set(_DEBUG_TEMPLATES)}"
        ) from None

    return StaticPartialSet({DEBUG_PARTIAL_NAME: body})
