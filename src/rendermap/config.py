"""rendermap configuration system.

Configuration is YAML-based. It declares the engine, where partials live, and
the templates, layouts and pages the renderer registry is built from.
Supports environment variable substitution (${VAR}) in config files.

Configuration file discovery (in priority order):
1. CLI --config argument
2. ./.rendermap/config.yaml
3. ./rendermap.yaml
"""

import os
import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml

VALID_ENGINES = {"mustache", "jinja2"}

# =============================================================================
# Configuration Dataclasses
# =============================================================================


@dataclass
class EngineConfig:
    """Template engine configuration.

    Attributes:
        name: Engine to use (mustache, jinja2)
        strict_partials: Raise on unresolved partials instead of rendering
            them as empty text
    """

    name: str = "mustache"
    strict_partials: bool = False

    def __post_init__(self) -> None:
        """Validate engine configuration."""
        if self.name not in VALID_ENGINES:
            raise ValueError(f"Invalid template engine: {self.name}. Valid: {VALID_ENGINES}")


@dataclass
class PartialsConfig:
    """Dynamic partial lookup configuration.

    Attributes:
        search_paths: Directories searched for partial files, in order
        extensions: Extensions tried for each directory, in order
        debug: Register the built-in rendermap/debug partial
    """

    search_paths: list[str] = field(default_factory=lambda: [""])
    extensions: list[str] = field(default_factory=lambda: ["", ".mustache", ".stache"])
    debug: bool = True


@dataclass
class PageConfig:
    """A content template rendered inside a layout.

    Attributes:
        template: Name of a declared template
        layout: Name of a declared layout
    """

    template: str
    layout: str

    def __post_init__(self) -> None:
        """Validate page configuration."""
        if not self.template or not self.layout:
            raise ValueError("Page requires both a template and a layout")


@dataclass
class RendermapConfig:
    """Top-level rendermap configuration.

    Attributes:
        engine: Engine selection and partial policy
        partials: Dynamic partial lookup
        templates: Template name -> file path
        layouts: Layout name -> file path
        pages: Page name -> template/layout pair
    """

    engine: EngineConfig = field(default_factory=EngineConfig)
    partials: PartialsConfig = field(default_factory=PartialsConfig)
    templates: dict[str, str] = field(default_factory=dict)
    layouts: dict[str, str] = field(default_factory=dict)
    pages: dict[str, PageConfig] = field(default_factory=dict)

    # Runtime overrides (set by CLI)
    _config_path: Path | None = field(default=None, repr=False)

    @property
    def config_path(self) -> Path | None:
        """Get the path to the config file that was loaded."""
        return self._config_path


# =============================================================================
# Environment Variable Substitution
# =============================================================================


def substitute_env_vars(value: Any) -> Any:
    """Substitute environment variables in config values.

    Supports ${VAR} syntax for environment variable substitution.
    Example: ${TEMPLATES_DIR}/home.mustache -> /srv/templates/home.mustache

    Args:
        value: Config value (string, dict, list, or other)

    Returns:
        Value with environment variables substituted
    """
    if isinstance(value, str):
        pattern = re.compile(r"\$\{([^}]+)\}")

        def replace_var(match: re.Match[str]) -> str:
            var_name = match.group(1)
            env_value = os.environ.get(var_name)
            if env_value is None:
                raise ValueError(f"Environment variable not set: {var_name}")
            return env_value

        return pattern.sub(replace_var, value)

    elif isinstance(value, dict):
        return {k: substitute_env_vars(v) for k, v in value.items()}

    elif isinstance(value, list):
        return [substitute_env_vars(v) for v in value]

    return value


# =============================================================================
# Config File Discovery
# =============================================================================


def find_config_file(start_path: Path | None = None) -> Path | None:
    """Find configuration file in standard locations.

    Search order:
    1. ./.rendermap/config.yaml
    2. ./rendermap.yaml

    Args:
        start_path: Starting directory for search (defaults to cwd)

    Returns:
        Path to config file if found, None otherwise
    """
    if start_path is None:
        start_path = Path.cwd()

    start_path = start_path.resolve()

    candidates = [
        start_path / ".rendermap" / "config.yaml",
        start_path / "rendermap.yaml",
    ]

    for candidate in candidates:
        if candidate.exists():
            return candidate

    return None


# =============================================================================
# Config Loading
# =============================================================================


def _string_map(data: Any, section: str) -> dict[str, str]:
    """Validate a name -> path section."""
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ValueError(f"'{section}' must be a mapping of name to path")
    return {str(name): str(path) for name, path in data.items()}


def _string_list(data: Any, field: str) -> list[str]:
    """Validate a list of strings."""
    if not isinstance(data, list):
        raise ValueError(f"'{field}' must be a list, got: {data!r}")
    return [str(item) for item in data]


def load_config_from_dict(data: dict[str, Any]) -> RendermapConfig:
    """Load configuration from a dictionary.

    Args:
        data: Configuration dictionary

    Returns:
        RendermapConfig instance

    Raises:
        ValueError: If a section has the wrong shape or fails validation
    """
    data = substitute_env_vars(data)

    config = RendermapConfig()

    if "engine" in data:
        engine_data = data["engine"] or {}
        config.engine = EngineConfig(
            name=engine_data.get("name", config.engine.name),
            strict_partials=engine_data.get("strict_partials", config.engine.strict_partials),
        )

    if "partials" in data:
        partials_data = data["partials"] or {}
        config.partials = PartialsConfig(
            search_paths=_string_list(
                partials_data.get("search_paths", config.partials.search_paths),
                "partials.search_paths",
            ),
            extensions=_string_list(
                partials_data.get("extensions", config.partials.extensions),
                "partials.extensions",
            ),
            debug=partials_data.get("debug", config.partials.debug),
        )

    config.templates = _string_map(data.get("templates"), "templates")
    config.layouts = _string_map(data.get("layouts"), "layouts")

    pages = data.get("pages") or {}
    if not isinstance(pages, dict):
        raise ValueError("'pages' must be a mapping of name to template and layout")
    for page_name, page_data in pages.items():
        if not isinstance(page_data, dict):
            raise ValueError(f"Page '{page_name}' must be a mapping with template and layout")
        config.pages[str(page_name)] = PageConfig(
            template=page_data.get("template", ""),
            layout=page_data.get("layout", ""),
        )

    return config


def load_config(
    config_path: Path | None = None,
    auto_discover: bool = True,
) -> RendermapConfig:
    """Load configuration from file.

    Args:
        config_path: Explicit path to config file
        auto_discover: Whether to search for config file if not specified

    Returns:
        RendermapConfig instance

    Raises:
        FileNotFoundError: If config_path specified but doesn't exist
    """
    if config_path is not None:
        if not config_path.exists():
            raise FileNotFoundError(f"Config file not found: {config_path}")
        found_path = config_path
    elif auto_discover:
        found_path = find_config_file()
    else:
        found_path = None

    if found_path is not None:
        with open(found_path) as f:
            data = yaml.safe_load(f) or {}
        config = load_config_from_dict(data)
        config._config_path = found_path
    else:
        config = RendermapConfig()

    return config


def create_default_config() -> str:
    """Create default configuration YAML content.

    Returns:
        YAML string with default configuration and comments
    """
    return '''# rendermap configuration

# Template engine
engine:
  name: "mustache"         # mustache, jinja2
  strict_partials: false   # true: unresolved partials fail the render

# Dynamic partials, read from disk on every render
partials:
  search_paths: ["partials"]
  extensions: ["", ".mustache", ".stache"]
  debug: true              # register the built-in rendermap/debug partial

# Templates: name -> file
templates: {}
#   home: "templates/home.mustache"

# Layouts: name -> file (insert the page body with {{{content}}})
layouts: {}
#   main: "layouts/main.mustache"

# Pages: a template rendered inside a layout
pages: {}
#   home_page:
#     template: "home"
#     layout: "main"
'''
