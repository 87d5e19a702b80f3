"""Passive scan rules. Each sub-package holds one rule."""
