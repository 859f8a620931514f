"""Unit tests for the board map editor transitions."""

from __future__ import annotations

import pytest

from curriculum.editor import (
    select_all,
    select_section,
    set_section_grades,
    toggle_board,
    toggle_grade,
    update_board_grades,
)
from curriculum.entities import BoardGradeMap, BoardGradeSelection, Section


def test_toggle_board_adds_empty_selection() -> None:
    board_map = toggle_board(BoardGradeMap(), "CBSE")

    assert board_map.enabled == ("CBSE",)
    assert board_map.selection_for("CBSE").is_empty


def test_toggle_board_twice_restores_presence_but_drops_grades() -> None:
    original = BoardGradeMap.from_wire({"CBSE": {"primary": [1, 2], "middle": [], "high": []}})

    removed = toggle_board(original, "CBSE")
    restored = toggle_board(removed, "CBSE")

    assert removed.is_empty
    assert restored.enabled == original.enabled
    assert restored.selection_for("CBSE").is_empty
    assert original.selection_for("CBSE").primary == (1, 2)


def test_toggle_board_appends_in_insertion_order() -> None:
    board_map = toggle_board(toggle_board(toggle_board(BoardGradeMap(), "IB"), "CBSE"), "ICSE")
    board_map = toggle_board(board_map, "CBSE")

    assert board_map.enabled == ("IB", "ICSE")


def test_toggle_board_checks_catalog() -> None:
    with pytest.raises(ValueError):
        toggle_board(BoardGradeMap(), "Cambridge", catalog=["CBSE", "ICSE"])
    with pytest.raises(ValueError):
        toggle_board(BoardGradeMap(), "   ")


def test_toggle_board_accepts_wire_map_without_mutating_it() -> None:
    wire = {"CBSE": {"primary": [1], "middle": [], "high": []}}

    board_map = toggle_board(wire, "IB")

    assert board_map.enabled == ("CBSE", "IB")
    assert list(wire) == ["CBSE"]


def test_toggle_grade_adds_and_removes_in_section() -> None:
    selection = BoardGradeSelection(middle=[9])

    added = toggle_grade(selection, 6)
    removed = toggle_grade(added, 9)

    assert added.middle == (6, 9)
    assert removed.middle == (6,)
    assert selection.middle == (9,)


def test_toggle_grade_never_duplicates() -> None:
    selection = BoardGradeSelection()
    for grade in (12, 11, 12, 12, 12):
        selection = toggle_grade(selection, grade)
        assert len(set(selection.high)) == len(selection.high)

    assert selection.high == (11,)


@pytest.mark.parametrize("grade", [0, 13, True])
def test_toggle_grade_rejects_unknown_grades(grade: int) -> None:
    with pytest.raises(ValueError):
        toggle_grade(BoardGradeSelection(), grade)


def test_set_section_grades_replaces_wholesale() -> None:
    selection = BoardGradeSelection(primary=[1, 2], high=[11])

    updated = set_section_grades(selection, Section.PRIMARY, [5, 4])

    assert updated.primary == (4, 5)
    assert updated.high == (11,)
    with pytest.raises(ValueError):
        set_section_grades(selection, "high", [10])


def test_select_section_and_select_all() -> None:
    selection = select_section(BoardGradeSelection(), "middle", True)
    assert selection.middle == (6, 7, 8, 9, 10)
    assert select_section(selection, Section.MIDDLE, False).is_empty

    everything = select_all(BoardGradeSelection(primary=[2]), True)
    assert everything.to_dict() == {
        "primary": [1, 2, 3, 4, 5],
        "middle": [6, 7, 8, 9, 10],
        "high": [11, 12],
    }
    assert select_all(everything, False).is_empty


def test_update_board_grades_tolerates_malformed_selection() -> None:
    board_map = BoardGradeMap(enabled=("CBSE",))

    updated = update_board_grades(board_map, "CBSE", "not a selection")
    enabled = update_board_grades(board_map, "IB", {"primary": [1]})

    assert updated.selection_for("CBSE").is_empty
    assert enabled.enabled == ("CBSE", "IB")
    assert enabled.selection_for("IB").primary == (1,)


def test_update_board_grades_normalises_board_name() -> None:
    board_map = toggle_board(BoardGradeMap(), "CBSE")

    updated = update_board_grades(board_map, " CBSE ", {"primary": [1]})

    assert updated.enabled == ("CBSE",)
    assert updated.selection_for("CBSE").primary == (1,)
    with pytest.raises(ValueError, match="non-whitespace"):
        update_board_grades(board_map, "  ", {"primary": [1]})
