"""Command line interface for inspecting institution records."""

from .main import app, run

__all__ = ["app", "run"]
