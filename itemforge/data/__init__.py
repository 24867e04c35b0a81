"""Bundled sample graph definitions."""
