"""Entry point for running uiforge as a module.

Usage:
    python -m uiforge [command] [options]

Example:
    python -m uiforge analyze --repo ./my-app
    python -m uiforge report health --format markdown
"""

from uiforge.cli import app

if __name__ == "__main__":
    app()
