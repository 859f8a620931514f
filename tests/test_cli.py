"""End-to-end smoke tests for the Typer-based curriculum CLI."""

from __future__ import annotations

import json
from pathlib import Path

import pytest
import typer
from loguru import logger
from typer.testing import CliRunner

from curriculum.cli.common import parse_override
from curriculum.cli.main import app, run


@pytest.fixture()
def runner() -> CliRunner:
    return CliRunner()


@pytest.fixture(autouse=True)
def _reset_logging():
    yield
    logger.remove()


def _write(tmp_path: Path, payload: dict, name: str = "record.json") -> Path:
    path = tmp_path / name
    path.write_text(json.dumps(payload), encoding="utf-8")
    return path


@pytest.fixture()
def school_record(tmp_path: Path) -> Path:
    return _write(
        tmp_path,
        {
            "type": "School",
            "boardGradeMap": {
                "CBSE": {"primary": [1, 2, 3, 4, 5], "middle": [6, 7, 8, 9, 10], "high": [11, 12]},
            },
            "streamsOffered": ["Science"],
        },
    )


def test_parse_override_builds_nested_mapping() -> None:
    override = parse_override("validation.report_all_errors=false")

    assert override == {"validation": {"report_all_errors": False}}
    assert parse_override("catalog.boards=[\"CBSE\"]") == {"catalog": {"boards": ["CBSE"]}}
    assert parse_override("logging.level=DEBUG") == {"logging": {"level": "DEBUG"}}
    with pytest.raises(typer.BadParameter):
        parse_override("logging.level")


def test_derive_prints_aggregates(runner: CliRunner, school_record: Path) -> None:
    result = runner.invoke(app, ["derive", str(school_record)])

    assert result.exit_code == 0, result.output
    assert "Aggregates" in result.output
    assert "boardsOffered" in result.output
    assert "CBSE" in result.output


def test_validate_accepts_complete_school(runner: CliRunner, school_record: Path) -> None:
    result = runner.invoke(app, ["validate", str(school_record)])

    assert result.exit_code == 0, result.output
    assert "Valid" in result.output


def test_validate_reports_errors_with_exit_code_one(runner: CliRunner, tmp_path: Path) -> None:
    record = _write(
        tmp_path,
        {"type": "School", "boardGradeMap": {"CBSE": {"primary": [], "middle": [], "high": [11]}}},
    )

    result = runner.invoke(app, ["validate", str(record)])

    assert result.exit_code == 1
    assert "Validation errors" in result.output
    assert "stream" in result.output


def test_validate_skips_checks_for_colleges(runner: CliRunner, tmp_path: Path) -> None:
    record = _write(tmp_path, {"type": "School"})

    result = runner.invoke(app, ["validate", str(record), "--type", "College"])

    assert result.exit_code == 0, result.output
    assert "College" in result.output


def test_reconcile_shows_legacy_source(runner: CliRunner, tmp_path: Path) -> None:
    record = _write(tmp_path, {"boardsByStandard": {"1-5": ["ICSE"], "6-10": [], "11-12": []}})

    result = runner.invoke(app, ["reconcile", str(record)])

    assert result.exit_code == 0, result.output
    assert "legacy" in result.output
    assert "ICSE" in result.output


def test_describe_prints_summary_lines(runner: CliRunner, school_record: Path) -> None:
    result = runner.invoke(app, ["describe", str(school_record)])

    assert result.exit_code == 0, result.output
    assert "Boards: CBSE" in result.output
    assert "Streams: Science" in result.output


def test_admissions_lists_open_grades(runner: CliRunner, tmp_path: Path) -> None:
    record = _write(
        tmp_path,
        {
            "boardGradeMap": {"IB": {"primary": [1], "middle": [], "high": []}},
            "admissionsOpenGrades": [1, 7],
        },
    )

    result = runner.invoke(app, ["admissions", str(record)])

    assert result.exit_code == 0, result.output
    assert "admissionsOpenGrades" in result.output


def test_envelope_records_are_unwrapped(runner: CliRunner, tmp_path: Path) -> None:
    record = _write(
        tmp_path,
        {"data": {"institution": {"boardGradeMap": {"IB": {"primary": [2], "middle": [], "high": []}}}}},
    )

    result = runner.invoke(app, ["describe", str(record)])

    assert result.exit_code == 0, result.output
    assert "Boards: IB" in result.output


def test_run_returns_two_for_missing_record(tmp_path: Path) -> None:
    assert run(["describe", str(tmp_path / "missing.json")]) == 2


def test_run_returns_two_for_unknown_type(school_record: Path) -> None:
    assert run(["validate", str(school_record), "--type", "University"]) == 2


def test_derive_writes_aggregates_file(runner: CliRunner, school_record: Path, tmp_path: Path) -> None:
    destination = tmp_path / "out" / "aggregates.json"

    result = runner.invoke(app, ["derive", str(school_record), "--output", str(destination)])

    assert result.exit_code == 0, result.output
    written = json.loads(destination.read_text(encoding="utf-8"))
    assert written["boardsOffered"] == ["CBSE"]
    assert written["standardsAvailable"] == ["Primary", "Middle", "High"]
    assert written["admissionsOpen"] is True


def test_validate_uses_configured_board_catalog(runner: CliRunner, school_record: Path) -> None:
    result = runner.invoke(
        app,
        [
            "--override",
            'catalog.boards=["ICSE"]',
            "-o",
            "validation.report_all_errors=false",
            "validate",
            str(school_record),
        ],
    )

    assert result.exit_code == 1
    assert "UnknownBoard" in result.output
