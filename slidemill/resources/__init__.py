"""Bundled templates and static assets."""
