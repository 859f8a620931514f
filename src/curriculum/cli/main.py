"""Primary Typer application wiring the curriculum CLI."""

from __future__ import annotations

from pathlib import Path
from typing import Iterable, List, Optional

import typer
from rich.table import Table

from curriculum.admissions import open_admission_for
from curriculum.derivation import derive
from curriculum.grades import summarize
from curriculum.payload import describe
from curriculum.reconciliation import reconcile, resolve_board_map
from curriculum.utils.helpers import serialize_json
from curriculum.utils.logging import logging_context
from curriculum.validation import ConfigurationValidator

from .common import CLIError, configure_state, console, get_state, parse_override, read_record, render_panel


app = typer.Typer(
    add_completion=False,
    help="""
    Inspect institution records: derive aggregates, validate school
    configurations, and reconcile legacy board ranges.
    """.strip(),
    no_args_is_help=True,
)


@app.callback()
def main(
    ctx: typer.Context,
    environment: Optional[str] = typer.Option(
        None,
        "--environment",
        "-e",
        help="Active configuration environment (development, testing, production).",
        show_default=False,
    ),
    override: List[str] = typer.Option(  # noqa: B008 - Typer callback signature
        [],
        "--override",
        "-o",
        metavar="KEY=VALUE",
        help="Configuration override in dotted.key=value notation (repeatable).",
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Emit debug logging for CLI operations.",
    ),
) -> None:
    """Configure shared CLI state prior to executing subcommands."""

    overrides = [parse_override(item) for item in override]
    configure_state(ctx, environment=environment, overrides=overrides, verbose=verbose)

    if verbose:
        state = ctx.obj
        table = Table(title="CLI Context", show_header=False, box=None)
        table.add_row("Environment", state.environment)
        table.add_row("Policy version", state.settings.policy_version)
        console.print(table)


@app.command("derive")
def derive_command(
    ctx: typer.Context,
    record: Path = typer.Argument(..., help="Institution record JSON file."),
    output: Optional[Path] = typer.Option(
        None,
        "--output",
        help="Also write the aggregates as JSON to this path.",
        show_default=False,
    ),
) -> None:
    """Print the aggregates derived from a record's board map."""

    get_state(ctx)
    with logging_context(component="derive"):
        data = read_record(record)
        config = reconcile(data)
        aggregates = derive(config.board_grade_map, config.admissions_open_by_standard)
        if output is not None:
            destination = serialize_json(aggregates.to_wire(), output)
            console.print(f"Wrote aggregates to {destination}")
    render_panel("Aggregates", aggregates.to_wire())


@app.command("reconcile")
def reconcile_command(
    ctx: typer.Context,
    record: Path = typer.Argument(..., help="Institution record JSON file."),
) -> None:
    """Show the canonical configuration rebuilt from a record."""

    get_state(ctx)
    data = read_record(record)
    _, source = resolve_board_map(data)
    config = reconcile(data)

    table = Table(title=f"Board map ({source.value})", box=None)
    table.add_column("Board")
    table.add_column("Sections")
    table.add_column("Grades", justify="left")
    for board, selection in config.board_grade_map.items():
        grades = ", ".join(str(grade) for section in selection.sections for grade in selection.grades_in(section))
        table.add_row(board, summarize(selection) or "—", grades or "—")
    console.print(table)
    render_panel("Configuration", config.to_payload())


@app.command("validate")
def validate_command(
    ctx: typer.Context,
    record: Path = typer.Argument(..., help="Institution record JSON file."),
    institution_type: Optional[str] = typer.Option(
        None,
        "--type",
        "-t",
        help="Institution type; defaults to the record's type.",
        show_default=False,
    ),
) -> None:
    """Run the pre-submit checks; exits with status 1 when they fail."""

    state = get_state(ctx)
    catalog = state.settings.policies.catalog
    data = read_record(record)
    resolved_type = institution_type or data.get("type") or catalog.school_type
    if resolved_type not in catalog.institution_types:
        raise CLIError(f"Unknown institution type {resolved_type!r}")

    config = reconcile(data)
    validator = ConfigurationValidator(state.settings.policies.validation, catalog)
    with logging_context(component="validate"):
        report = config.validate_for(resolved_type, validator=validator)
    if report.passed:
        console.print(f"[bold green]Valid[/bold green] ({resolved_type})")
        return

    table = Table(title="Validation errors", box=None)
    table.add_column("Code")
    table.add_column("Field")
    table.add_column("Message")
    for error in report.errors:
        table.add_row(error.code.value, error.form_field, error.message)
    console.print(table)
    raise typer.Exit(code=1)


@app.command("describe")
def describe_command(
    ctx: typer.Context,
    record: Path = typer.Argument(..., help="Institution record JSON file."),
) -> None:
    """Print the one-glance summary shown in institution lists."""

    get_state(ctx)
    summary = describe(read_record(record))
    for line in summary.lines():
        console.print(line)


@app.command("admissions")
def admissions_command(
    ctx: typer.Context,
    record: Path = typer.Argument(..., help="Institution record JSON file."),
) -> None:
    """Show which offered grades and streams have admissions open."""

    get_state(ctx)
    state = open_admission_for(read_record(record))
    render_panel("Open admissions", state.to_wire())


def run(argv: Iterable[str] | None = None) -> int:
    """Execute the curriculum CLI."""

    args = list(argv) if argv is not None else None
    try:
        return app(prog_name="curriculum", args=args, standalone_mode=False) or 0
    except CLIError as exc:
        console.print(f"[bold red]Error:[/bold red] {exc}")
        return 2


__all__ = ["app", "run"]
