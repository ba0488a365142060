"""Renderer registry construction.

The registry maps names to ready-to-use renderers. It is built once, at
startup, from the declared templates, layouts and pages, and is read-only
afterwards.

Building is fail-fast: the first unreadable or unparsable declaration aborts
the build. The raised RegistryBuildError carries the renderers assembled up to
that point.
"""

import logging
from collections.abc import Iterator, Mapping
from pathlib import Path
from types import MappingProxyType

from rendermap.config import PageConfig, RendermapConfig
from rendermap.engines import get_engine
from rendermap.engines.base import TemplateEngine
from rendermap.exceptions import RegistryBuildError, RendermapError, SourceUnavailableError
from rendermap.partials import FilePartialSource, LayeredResolver, default_static_partials
from rendermap.partials.base import PartialResolver
from rendermap.templates.loader import FileSourceLoader, TemplateSourceLoader
from rendermap.templates.renderer import LayoutRenderer, Renderer, SimpleRenderer

logger = logging.getLogger(__name__)


class RendererRegistry(Mapping[str, Renderer]):
    """Immutable mapping of name to renderer."""

    def __init__(self, renderers: Mapping[str, Renderer] | None = None) -> None:
        self._renderers = MappingProxyType(dict(renderers or {}))

    def __getitem__(self, name: str) -> Renderer:
        return self._renderers[name]

    def __iter__(self) -> Iterator[str]:
        return iter(self._renderers)

    def __len__(self) -> int:
        return len(self._renderers)

    def __repr__(self) -> str:
        return f"RendererRegistry({sorted(self._renderers)!r})"


def build_renderer_map(
    templates: Mapping[str, str],
    layouts: Mapping[str, str],
    pages: Mapping[str, PageConfig] | None = None,
    *,
    engine: TemplateEngine,
    resolver: PartialResolver,
    loader: TemplateSourceLoader | None = None,
) -> RendererRegistry:
    """Load and compile every declaration into a renderer.

    Templates and layouts each become a SimpleRenderer. Pages pair a declared
    template with a declared layout and become a LayoutRenderer. Groups are
    processed in that order, entries within a group sorted by name.

    Args:
        templates: Template name -> path
        layouts: Layout name -> path
        pages: Page name -> template/layout names
        engine: Engine used to compile every source
        resolver: Resolver for partial references
        loader: Source loader (filesystem if None)

    Returns:
        RendererRegistry with one renderer per declaration

    Raises:
        RegistryBuildError: On the first read or parse failure
    """
    loader = loader or FileSourceLoader()
    result: dict[str, Renderer] = {}

    def add(name: str, renderer: Renderer) -> None:
        if name in result:
            logger.warning("Renderer %s declared more than once; keeping the last one", name)
        result[name] = renderer

    for section in (templates, layouts):
        for name in sorted(section):
            path = section[name]
            try:
                renderer = SimpleRenderer.from_source(loader.load(path), resolver, engine, path)
            except RendermapError as e:
                logger.error("Failed to build renderer %s from %s: %s", name, path, e)
                raise RegistryBuildError(name, RendererRegistry(result), e) from e
            logger.debug("Built renderer %s from %s", name, path)
            add(name, renderer)

    for name in sorted(pages or {}):
        page = pages[name]  # type: ignore[index]
        try:
            template_path = _declared_path(templates, page.template, "template")
            layout_path = _declared_path(layouts, page.layout, "layout")
            renderer = LayoutRenderer.from_sources(
                loader.load(template_path),
                loader.load(layout_path),
                resolver,
                engine,
                template_name=template_path,
                layout_name=layout_path,
            )
        except RendermapError as e:
            logger.error("Failed to build page %s: %s", name, e)
            raise RegistryBuildError(name, RendererRegistry(result), e) from e
        logger.debug("Built page %s (%s in %s)", name, page.template, page.layout)
        add(name, renderer)

    logger.info("Built %d renderer(s) with the %s engine", len(result), engine.name)
    return RendererRegistry(result)


def _declared_path(section: Mapping[str, str], name: str, kind: str) -> str:
    """Look up the path of a declared template or layout."""
    if name not in section:
        raise SourceUnavailableError(name, f"{kind} not declared: {name}")
    return section[name]


def create_resolver(config: RendermapConfig, base_dir: Path | None = None) -> LayeredResolver:
    """Create the static-then-filesystem resolver described by config.

    Args:
        config: Loaded configuration
        base_dir: Directory relative search paths are resolved against

    Returns:
        LayeredResolver consulting static partials first
    """
    statics = default_static_partials(config.engine.name, debug=config.partials.debug)
    search_paths = [
        base_dir / p if base_dir is not None and not Path(p).is_absolute() else Path(p)
        for p in config.partials.search_paths
    ]
    return LayeredResolver(statics, FilePartialSource(search_paths, config.partials.extensions))


def build_from_config(config: RendermapConfig, base_dir: Path | None = None) -> RendererRegistry:
    """Build the renderer registry described by a configuration.

    Args:
        config: Loaded configuration
        base_dir: Directory relative paths are resolved against (cwd if None)

    Returns:
        RendererRegistry for every declared template, layout and page

    Raises:
        RegistryBuildError: On the first read or parse failure
    """
    engine = get_engine(config.engine.name, strict_partials=config.engine.strict_partials)
    return build_renderer_map(
        config.templates,
        config.layouts,
        config.pages,
        engine=engine,
        resolver=create_resolver(config, base_dir),
        loader=FileSourceLoader(base_dir),
    )
