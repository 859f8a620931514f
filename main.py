"""Compatibility entry point delegating to the Typer-powered CLI."""

from __future__ import annotations

from curriculum.cli.main import run


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(run())
