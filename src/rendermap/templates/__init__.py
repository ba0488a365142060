"""rendermap template rendering.

Renderers wrap compiled templates (optionally composed with a layout), and
the registry builder assembles them by name from declared source files.
"""

from rendermap.templates.loader import FileSourceLoader, compile_template
from rendermap.templates.registry import (
    RendererRegistry,
    build_from_config,
    build_renderer_map,
)
from rendermap.templates.renderer import LayoutRenderer, Renderer, SimpleRenderer

__all__ = [
    "FileSourceLoader",
    "LayoutRenderer",
    "Renderer",
    "RendererRegistry",
    "SimpleRenderer",
    "build_from_config",
    "build_renderer_map",
    "compile_template",
]
