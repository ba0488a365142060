"""Entry point for running rendermap as a module.

Usage:
    python -m rendermap [command] [options]

Example:
    python -m rendermap check
    python -m rendermap render home_page --data response.json
"""

from rendermap.cli import app

if __name__ == "__main__":
    app()
