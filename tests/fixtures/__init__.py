"""Test fixtures for rendermap.

Fixture Sites:
- site: mustache templates, a layout, partials, render data and a
  rendermap.yaml declaring them
"""

from pathlib import Path

# Path to fixtures directory
FIXTURES_DIR = Path(__file__).parent

# Fixture site with its configuration file
SITE_DIR = FIXTURES_DIR / "site"
SITE_CONFIG = SITE_DIR / "rendermap.yaml"
SITE_DATA = SITE_DIR / "data" / "home.json"
