"""Bundled resource directory resolution."""

from __future__ import annotations

from pathlib import Path

# Resolve from src/cookie_scope/core/paths.py → src/cookie_scope/resources/
RESOURCES_DIR = Path(__file__).resolve().parent.parent / "resources"
