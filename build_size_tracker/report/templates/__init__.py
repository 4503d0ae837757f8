"""Bundled report templates."""

from pathlib import Path

DEFAULT_TEMPLATE_PATH = Path(__file__).parent / "index.html"
