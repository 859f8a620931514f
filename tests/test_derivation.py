"""Unit tests for curriculum.derivation."""

from __future__ import annotations

import pytest

from curriculum.derivation import derive
from curriculum.entities import BoardGradeMap, StandardLabel, StandardRange


def test_scenario_primary_and_high() -> None:
    board_map = {"CBSE": {"primary": [1, 2, 3, 4, 5], "middle": [], "high": [11, 12]}}
    flags = {"1-5": True, "6-10": False, "11-12": True}

    aggregates = derive(board_map, flags)

    assert aggregates.boards_offered == ["CBSE"]
    assert set(aggregates.standards_available) == {StandardLabel.PRIMARY, StandardLabel.HIGH}
    assert aggregates.boards_by_standard == {
        StandardRange.PRIMARY: ["CBSE"],
        StandardRange.MIDDLE: [],
        StandardRange.HIGH: ["CBSE"],
    }
    assert aggregates.admissions_open is True


def test_boards_without_grades_do_not_leak() -> None:
    board_map = {
        "ICSE": {"primary": [], "middle": [], "high": []},
        "CBSE": {"primary": [2], "middle": [], "high": []},
    }

    aggregates = derive(board_map)

    assert aggregates.boards_offered == ["CBSE"]
    assert aggregates.boards_by_standard[StandardRange.PRIMARY] == ["CBSE"]


def test_ordering_follows_insertion_not_alphabet() -> None:
    board_map = {
        "State Board": {"primary": [1], "middle": [6], "high": []},
        "IB": {"primary": [1], "middle": [], "high": [11]},
        "CBSE": {"primary": [], "middle": [6], "high": []},
    }

    aggregates = derive(board_map)

    assert aggregates.boards_offered == ["State Board", "IB", "CBSE"]
    assert aggregates.boards_by_standard[StandardRange.PRIMARY] == ["State Board", "IB"]
    assert aggregates.boards_by_standard[StandardRange.MIDDLE] == ["State Board", "CBSE"]
    assert aggregates.standards_available == [
        StandardLabel.PRIMARY,
        StandardLabel.MIDDLE,
        StandardLabel.HIGH,
    ]


def test_admissions_open_is_or_over_flags() -> None:
    closed = derive({}, {"1-5": False, "6-10": False, "11-12": False})
    partial = derive({}, {"1-5": False, "6-10": False})

    assert closed.admissions_open is False
    # Open flag for a range with no boards still makes the institution visible.
    assert partial.admissions_open is True
    assert partial.admissions_open_by_standard[StandardRange.HIGH] is True


@pytest.mark.parametrize("raw", [None, "CBSE", 42, ["CBSE"], {"CBSE": "all"}])
def test_derive_tolerates_malformed_input(raw: object) -> None:
    aggregates = derive(raw, "not flags")

    assert aggregates.boards_offered == []
    assert aggregates.standards_available == []
    assert aggregates.admissions_open is True


def test_derive_is_idempotent() -> None:
    board_map = BoardGradeMap.from_wire(
        {
            "ICSE": {"primary": [3], "middle": [7, 8], "high": []},
            "IGCSE": {"primary": [], "middle": [], "high": [12]},
        }
    )
    flags = {"1-5": True, "6-10": False, "11-12": False}

    assert derive(board_map, flags) == derive(board_map, flags)
    assert derive(board_map, flags).to_wire() == derive(board_map.to_wire(), flags).to_wire()


def test_only_literal_false_closes_a_range() -> None:
    board_map = {"CBSE": {"primary": [1], "middle": [], "high": []}}

    loose = derive(board_map, {"1-5": "false", "6-10": 0, "11-12": None})

    assert loose.admissions_open_by_standard == {
        StandardRange.PRIMARY: True,
        StandardRange.MIDDLE: True,
        StandardRange.HIGH: True,
    }
    assert loose.admissions_open is True
    assert derive(board_map, {"1-5": False, "6-10": False, "11-12": False}).admissions_open is False
