"""Integration tests for rendermap CLI commands.

These tests exercise the full CLI workflow against the fixture site.
"""

import json
from pathlib import Path

import pytest
from typer.testing import CliRunner

from rendermap import __version__
from rendermap.cli import app
from tests.fixtures import SITE_CONFIG, SITE_DATA, SITE_DIR

runner = CliRunner()


@pytest.fixture(autouse=True)
def isolated_cwd(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Run every command from an empty directory."""
    monkeypatch.chdir(tmp_path)
    return tmp_path


class TestGlobalOptions:
    """Tests for global CLI options."""

    def test_version(self) -> None:
        """Test that --version prints the version."""
        result = runner.invoke(app, ["--version"])

        assert result.exit_code == 0
        assert f"rendermap {__version__}" in result.output

    def test_missing_config(self, tmp_path: Path) -> None:
        """Test that a nonexistent --config is rejected."""
        result = runner.invoke(app, ["--config", str(tmp_path / "nope.yaml"), "check"])

        assert result.exit_code != 0

    def test_invalid_config(self, tmp_path: Path) -> None:
        """Test that an invalid config exits with code 1."""
        config = tmp_path / "rendermap.yaml"
        config.write_text("engine:\n  name: handlebars\n")

        result = runner.invoke(app, ["--config", str(config), "check"])

        assert result.exit_code == 1


class TestCheck:
    """Integration tests for `rendermap check`."""

    def test_check_builds_site(self) -> None:
        """Test that every declared renderer is listed."""
        result = runner.invoke(app, ["--config", str(SITE_CONFIG), "check"])

        assert result.exit_code == 0, result.output
        for name in ("home", "about", "debug", "main", "home_page", "about_page"):
            assert name in result.output
        assert "home_page [page]" in result.output

    def test_check_json(self) -> None:
        """Test that --json reports the built renderers."""
        result = runner.invoke(app, ["--config", str(SITE_CONFIG), "--quiet", "check", "--json"])

        assert result.exit_code == 0, result.output
        data = json.loads(result.output.strip().splitlines()[-1])
        assert data["ok"] is True
        assert data["engine"] == "mustache"
        assert "home_page" in data["built"]

    def test_check_missing_template(self, tmp_path: Path) -> None:
        """Test that a missing template fails the build."""
        (tmp_path / "a.mustache").write_text("a")
        config = tmp_path / "rendermap.yaml"
        config.write_text("templates:\n  a: a.mustache\n  b: missing.mustache\n")

        result = runner.invoke(app, ["--config", str(config), "--quiet", "check", "--json"])

        assert result.exit_code == 1
        data = json.loads(result.output.strip().splitlines()[-1])
        assert data == {"ok": False, "failed": "b", "built": ["a"]}

    def test_check_parse_error(self, tmp_path: Path) -> None:
        """Test that a malformed template fails the build."""
        (tmp_path / "bad.mustache").write_text("{{#open}}{{/close}}")
        config = tmp_path / "rendermap.yaml"
        config.write_text("templates:\n  bad: bad.mustache\n")

        result = runner.invoke(app, ["--config", str(config), "check"])

        assert result.exit_code == 1
        assert "Failed to build 'bad'" in result.output


class TestRender:
    """Integration tests for `rendermap render`."""

    def test_render_page(self) -> None:
        """Test rendering a page with JSON data to stdout."""
        result = runner.invoke(
            app,
            ["--config", str(SITE_CONFIG), "--quiet", "render", "home_page", "--data", str(SITE_DATA)],
        )

        assert result.exit_code == 0, result.output
        assert "<title>Fixture Shop</title>" in result.output
        assert '<nav><a href="/">Fixture Shop</a></nav>' in result.output
        assert "<li>Kettle</li><li>Teapot</li>" in result.output

    def test_render_to_file(self, tmp_path: Path) -> None:
        """Test writing rendered output to a file."""
        output = tmp_path / "out" / "about.html"

        result = runner.invoke(
            app,
            [
                "--config", str(SITE_CONFIG),
                "render", "about_page",
                "--data", str(SITE_DATA),
                "--output", str(output),
            ],
        )

        assert result.exit_code == 0, result.output
        content = output.read_text()
        assert "<p>About Fixture Shop</p>" in content
        assert content.startswith("<html>")

    def test_render_debug_page(self) -> None:
        """Test the debug partial with a response context."""
        result = runner.invoke(
            app,
            [
                "--config", str(SITE_CONFIG),
                "--quiet",
                "render", "debug",
                "--data", str(SITE_DATA),
                "--as-response",
            ],
        )

        assert result.exit_code == 0, result.output
        assert "rendermap debugger" in result.output
        assert "<pre>title: Fixture Shop</pre>" in result.output

    def test_render_unknown_name(self) -> None:
        """Test that an unknown renderer name fails."""
        result = runner.invoke(app, ["--config", str(SITE_CONFIG), "render", "nope"])

        assert result.exit_code == 1
        assert "No renderer named 'nope'" in result.output

    def test_render_bad_data(self, tmp_path: Path) -> None:
        """Test that invalid JSON data fails cleanly."""
        data = tmp_path / "bad.json"
        data.write_text("{not json")

        result = runner.invoke(
            app, ["--config", str(SITE_CONFIG), "render", "home", "--data", str(data)]
        )

        assert result.exit_code == 1
        assert "Failed to read render data" in result.output

    def test_render_strict_missing_partial(self, tmp_path: Path) -> None:
        """Test that strict mode turns a missing partial into a failure."""
        (tmp_path / "page.mustache").write_text("{{> nowhere}}")
        config = tmp_path / "rendermap.yaml"
        config.write_text(
            "engine:\n  strict_partials: true\ntemplates:\n  page: page.mustache\n"
        )

        result = runner.invoke(app, ["--config", str(config), "render", "page"])

        assert result.exit_code == 1
        assert "Partial not found: nowhere" in result.output


class TestValidate:
    """Integration tests for `rendermap validate`."""

    def test_valid_template(self) -> None:
        """Test that a valid template passes."""
        template = SITE_DIR / "templates" / "home.mustache"

        result = runner.invoke(app, ["validate", str(template)])

        assert result.exit_code == 0
        assert "Template is valid" in result.output

    def test_invalid_template(self, tmp_path: Path) -> None:
        """Test that a syntax error is reported."""
        template = tmp_path / "bad.mustache"
        template.write_text("{{/never_opened}}")

        result = runner.invoke(app, ["validate", str(template)])

        assert result.exit_code == 1
        assert "Template syntax error" in result.output

    def test_undecodable_template(self, tmp_path: Path) -> None:
        """Test that a template that is not UTF-8 fails cleanly."""
        template = tmp_path / "latin1.mustache"
        template.write_bytes(b"caf\xe9 {{name}}")

        result = runner.invoke(app, ["validate", str(template)])

        assert result.exit_code == 1
        assert "Cannot read" in result.output
        assert not isinstance(result.exception, UnicodeDecodeError)

    def test_engine_override(self, tmp_path: Path) -> None:
        """Test validating with the jinja2 engine."""
        template = tmp_path / "page.html"
        template.write_text("{% for x in items %}{{ x }}")

        result = runner.invoke(app, ["validate", str(template), "--engine", "jinja2"])

        assert result.exit_code == 1

    def test_unknown_engine(self) -> None:
        """Test that an unknown engine name fails."""
        template = SITE_DIR / "templates" / "home.mustache"

        result = runner.invoke(app, ["validate", str(template), "--engine", "nope"])

        assert result.exit_code == 1


class TestInit:
    """Integration tests for `rendermap init`."""

    def test_init_creates_config(self, isolated_cwd: Path) -> None:
        """Test that init writes a loadable config and directories."""
        result = runner.invoke(app, ["init"])

        assert result.exit_code == 0
        assert (isolated_cwd / "rendermap.yaml").exists()
        assert (isolated_cwd / "templates").is_dir()
        assert (isolated_cwd / "partials").is_dir()

        check = runner.invoke(app, ["check"])
        assert check.exit_code == 0, check.output

    def test_init_refuses_overwrite(self, isolated_cwd: Path) -> None:
        """Test that an existing config is kept without --force."""
        (isolated_cwd / "rendermap.yaml").write_text("# mine")

        result = runner.invoke(app, ["init"])

        assert result.exit_code == 1
        assert (isolated_cwd / "rendermap.yaml").read_text() == "# mine"

    def test_init_force(self, isolated_cwd: Path) -> None:
        """Test that --force overwrites an existing config."""
        (isolated_cwd / "rendermap.yaml").write_text("# mine")

        result = runner.invoke(app, ["init", "--force"])

        assert result.exit_code == 0
        assert "engine:" in (isolated_cwd / "rendermap.yaml").read_text()
