"""Shared helpers used across the curriculum CLI modules."""

from __future__ import annotations

import json
from dataclasses import dataclass
from functools import reduce
from pathlib import Path
from typing import Any, Dict, Iterable, Mapping

import typer
from rich.console import Console
from rich.panel import Panel

from curriculum.config.settings import Settings, deep_merge
from curriculum.utils.helpers import load_record
from curriculum.utils.logging import configure_logging, get_logger

console = Console()
_LOGGER = get_logger(module=__name__)


class CLIError(RuntimeError):
    """Exception raised for user-facing CLI errors."""


@dataclass(slots=True)
class CLIState:
    """State object attached to ``typer.Context`` for downstream commands."""

    settings: Settings
    overrides: Dict[str, Any]
    environment: str
    verbose: bool


def parse_override(argument: str) -> Dict[str, Any]:
    """Turn ``catalog.boards=["CBSE"]`` into ``{"catalog": {"boards": ["CBSE"]}}``.

    Values are parsed as JSON when possible and kept as strings otherwise.
    """

    dotted, separator, raw = argument.partition("=")
    segments = [segment.strip() for segment in dotted.split(".") if segment.strip()]
    if not separator or not segments:
        raise typer.BadParameter("Overrides must be expressed as dotted.key=value")
    try:
        value: Any = json.loads(raw)
    except json.JSONDecodeError:
        value = raw
    for segment in reversed(segments):
        value = {segment: value}
    return value


def resolve_settings(environment: str | None, overrides: Dict[str, Any]) -> Settings:
    """Construct :class:`Settings` with environment and overrides applied."""

    payload = dict(overrides)
    if environment:
        payload["environment"] = environment
    try:
        return Settings(**payload)
    except ValueError as exc:
        raise CLIError(f"Invalid configuration: {exc}") from exc


def configure_state(
    ctx: typer.Context,
    *,
    environment: str | None,
    overrides: Iterable[Dict[str, Any]],
    verbose: bool,
) -> None:
    """Populate ``ctx.obj`` with :class:`CLIState` and set up logging."""

    merged = reduce(deep_merge, overrides, {})
    settings = resolve_settings(environment, merged)
    configure_logging(settings, level="DEBUG" if verbose else None)
    ctx.obj = CLIState(
        settings=settings,
        overrides=merged,
        environment=settings.environment,
        verbose=verbose,
    )


def get_state(ctx: typer.Context) -> CLIState:
    """Return the previously configured :class:`CLIState`."""

    if ctx.obj is None:
        raise CLIError("CLI context is not initialised")
    if not isinstance(ctx.obj, CLIState):  # pragma: no cover
        raise CLIError("Unexpected CLI context payload")
    return ctx.obj


def render_panel(title: str, content: Mapping[str, Any]) -> None:
    """Utility for rendering JSON-like mappings using Rich panels."""

    from rich.json import JSON as RichJSON

    console.print(Panel(RichJSON.from_data(content), title=title, border_style="cyan"))


def read_record(path: Path) -> Dict[str, Any]:
    """Load an institution record, translating failures into :class:`CLIError`."""

    target = Path(path).expanduser().resolve()
    if not target.exists():
        raise CLIError(f"Path does not exist: {target}")
    try:
        return load_record(target)
    except (json.JSONDecodeError, ValueError) as exc:
        _LOGGER.debug("Unreadable record", path=str(target), error=str(exc))
        raise CLIError(f"Could not read institution record {target}: {exc}") from exc
