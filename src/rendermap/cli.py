"""rendermap CLI interface.

Commands:
- check: Build the renderer registry and report what was loaded
- render: Render one named renderer with JSON data
- validate: Validate a single template file
- init: Write a default configuration file

Global options:
- --config: Path to configuration file
- --verbose: Enable verbose output with timestamps
- --quiet: Suppress info messages
- --ci: JSON log output
- --version: Show version and exit
"""

import json
import logging
import sys
from pathlib import Path
from typing import Annotated, Any

import typer

from rendermap import __version__
from rendermap.config import RendermapConfig, create_default_config, load_config
from rendermap.utils.logging import configure_from_cli, get_logger

app = typer.Typer(
    name="rendermap",
    help="Named Mustache renderers with layouts and layered partials",
    add_completion=False,
    no_args_is_help=True,
)

# Global state
_config: RendermapConfig | None = None
_logger = get_logger()


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        typer.echo(f"rendermap {__version__}")
        raise typer.Exit()


def _current_config() -> RendermapConfig:
    return _config if _config is not None else RendermapConfig()


def _base_dir(config: RendermapConfig) -> Path | None:
    """Relative paths in a config file are relative to that file."""
    return config.config_path.parent if config.config_path else None


@app.callback()
def main(
    config: Annotated[
        Path | None,
        typer.Option(
            "--config",
            "-c",
            help="Path to configuration file",
            exists=True,
            dir_okay=False,
        ),
    ] = None,
    verbose: Annotated[
        bool,
        typer.Option("--verbose", "-v", help="Enable verbose output with timestamps"),
    ] = False,
    quiet: Annotated[
        bool,
        typer.Option("--quiet", "-q", help="Suppress info messages (warnings and errors only)"),
    ] = False,
    ci: Annotated[
        bool,
        typer.Option("--ci", help="Enable CI mode with JSON output"),
    ] = False,
    version: Annotated[
        bool,
        typer.Option(
            "--version",
            callback=version_callback,
            is_eager=True,
            help="Show version and exit",
        ),
    ] = False,
) -> None:
    """rendermap - render named templates, layouts and partials."""
    global _config

    configure_from_cli(verbose=verbose, quiet=quiet, ci=ci)

    try:
        _config = load_config(config_path=config)
        if _config.config_path:
            _logger.debug(f"Loaded config from: {_config.config_path}")
    except FileNotFoundError as e:
        _logger.error(str(e))
        raise typer.Exit(1)
    except Exception as e:
        _logger.error(f"Failed to load config: {e}")
        raise typer.Exit(1)


# =============================================================================
# check command
# =============================================================================


@app.command()
def check(
    json_output: Annotated[
        bool,
        typer.Option("--json", help="Output results as JSON"),
    ] = False,
) -> None:
    """Build every declared renderer.

    Exit codes:
        0: All templates, layouts and pages compiled
        1: A source could not be read or parsed
    """
    from rendermap.exceptions import RegistryBuildError
    from rendermap.templates import LayoutRenderer, build_from_config

    config = _current_config()

    try:
        registry = build_from_config(config, base_dir=_base_dir(config))
    except RegistryBuildError as e:
        _logger.error(str(e))
        if json_output:
            typer.echo(json.dumps({"ok": False, "failed": e.name, "built": sorted(e.renderers)}))
        else:
            typer.echo(f"❌ Failed to build {e.name!r}")
            typer.echo(f"   └─ {e.__cause__}")
        raise typer.Exit(1)

    _logger.structured(
        logging.INFO,
        f"Built {len(registry)} renderer(s)",
        engine=config.engine.name,
        renderers=sorted(registry),
    )

    if json_output:
        typer.echo(json.dumps({"ok": True, "engine": config.engine.name, "built": sorted(registry)}))
    else:
        typer.echo(f"\n🔍 Renderers ({config.engine.name})\n")
        for name in sorted(registry):
            kind = "page" if isinstance(registry[name], LayoutRenderer) else "template"
            typer.echo(f"  ✅ {name} [{kind}]")
        typer.echo()
    raise typer.Exit(0)


# =============================================================================
# render command
# =============================================================================


def _load_context(data: Path | None, as_response: bool) -> Any:
    """Read the JSON render context."""
    from rendermap.models import ResponseContext

    payload: Any = json.loads(data.read_text(encoding="utf-8")) if data else {}
    if not as_response:
        return payload

    if isinstance(payload, list):
        return ResponseContext(array=payload).as_dict()
    return ResponseContext(data=payload).as_dict()


@app.command()
def render(
    name: Annotated[str, typer.Argument(help="Name of the template, layout or page")],
    data: Annotated[
        Path | None,
        typer.Option(
            "--data",
            "-d",
            help="JSON file with the render context",
            exists=True,
            dir_okay=False,
        ),
    ] = None,
    output: Annotated[
        Path | None,
        typer.Option("--output", "-o", help="Write output to a file instead of stdout"),
    ] = None,
    as_response: Annotated[
        bool,
        typer.Option(
            "--as-response",
            help="Wrap the JSON as a response context (enables the debug partial fields)",
        ),
    ] = False,
) -> None:
    """Render a named renderer.

    Exit codes:
        0: Rendered successfully
        1: Registry build, lookup or render failed
    """
    from rendermap.exceptions import RegistryBuildError, RendermapError
    from rendermap.templates import build_from_config

    config = _current_config()

    try:
        registry = build_from_config(config, base_dir=_base_dir(config))
    except RegistryBuildError as e:
        _logger.error(str(e))
        raise typer.Exit(1)

    if name not in registry:
        _logger.error(f"No renderer named {name!r}. Available: {sorted(registry)}")
        raise typer.Exit(1)

    try:
        context = _load_context(data, as_response)
    except (OSError, ValueError) as e:
        _logger.error(f"Failed to read render data: {e}")
        raise typer.Exit(1)

    try:
        if output is None:
            registry[name].render(context, sys.stdout)
        else:
            output.parent.mkdir(parents=True, exist_ok=True)
            with open(output, "w", encoding="utf-8") as sink:
                registry[name].render(context, sink)
            _logger.info(f"Wrote {name} to {output}")
    except (RendermapError, OSError, TypeError) as e:
        _logger.error(f"Rendering {name} failed: {e}")
        raise typer.Exit(1)


# =============================================================================
# validate command
# =============================================================================


@app.command()
def validate(
    template: Annotated[
        Path,
        typer.Argument(
            help="Path to the template to validate",
            exists=True,
            dir_okay=False,
        ),
    ],
    engine: Annotated[
        str | None,
        typer.Option("--engine", "-e", help="Engine to parse with (overrides config)"),
    ] = None,
) -> None:
    """Validate a template's syntax."""
    from rendermap.engines import get_engine
    from rendermap.exceptions import TemplateParseError
    from rendermap.partials import StaticPartialSet

    config = _current_config()
    engine_name = engine or config.engine.name

    try:
        template_engine = get_engine(engine_name)
    except ValueError as e:
        _logger.error(str(e))
        raise typer.Exit(1)

    _logger.info(f"Validating template: {template}")

    try:
        text = template.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        _logger.error(f"Failed to read template: {e}")
        typer.echo(f"❌ Cannot read {template}: {e}")
        raise typer.Exit(1)

    try:
        template_engine.compile(text, StaticPartialSet(), source=str(template))
    except TemplateParseError as e:
        _logger.error(f"Template syntax error: {e.message}")
        typer.echo(f"❌ Template syntax error in {template}: {e.message}")
        raise typer.Exit(1)

    typer.echo(f"✅ Template is valid: {template}")
    raise typer.Exit(0)


# =============================================================================
# init command
# =============================================================================


@app.command()
def init(
    force: Annotated[
        bool,
        typer.Option("--force", help="Overwrite existing config"),
    ] = False,
) -> None:
    """Initialize rendermap configuration.

    Creates rendermap.yaml plus empty templates, layouts and partials
    directories.
    """
    config_file = Path("rendermap.yaml")

    if config_file.exists() and not force:
        _logger.error(f"Config already exists: {config_file}")
        _logger.info("Use --force to overwrite")
        raise typer.Exit(1)

    config_file.write_text(create_default_config(), encoding="utf-8")
    _logger.info(f"Created config: {config_file}")

    for directory in ("templates", "layouts", "partials"):
        Path(directory).mkdir(exist_ok=True)

    typer.echo("\n✅ rendermap configuration initialized")
    typer.echo(f"   Config: {config_file}")
    raise typer.Exit(0)


if __name__ == "__main__":
    app()
