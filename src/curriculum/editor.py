"""Pure transitions over board maps and grade selections.

Every function returns a new value; inputs are never mutated.
"""

from __future__ import annotations

from typing import Any, Iterable, Sequence

from .entities.core import ALL_GRADES, BoardGradeMap, BoardGradeSelection, Section
from .grades import section_of
from .utils.logging import get_logger

_LOGGER = get_logger(module=__name__)


def _board_name(board: Any) -> str:
    name = board.strip() if isinstance(board, str) else ""
    if not name:
        raise ValueError("board name must contain non-whitespace characters")
    return name


def toggle_board(
    board_map: Any,
    board: str,
    *,
    catalog: Sequence[str] | None = None,
) -> BoardGradeMap:
    """Enable ``board`` with an empty selection, or remove it entirely.

    Removing a board discards its grades, so re-enabling it starts blank.
    """

    current = BoardGradeMap.from_wire(board_map)
    name = _board_name(board)
    if current.is_enabled(name):
        _LOGGER.debug("Board disabled", board=name)
        return current.without_board(name)
    if catalog is not None and name not in catalog:
        raise ValueError(f"unknown board {name!r}; expected one of {list(catalog)}")
    _LOGGER.debug("Board enabled", board=name)
    return current.with_board(name, BoardGradeSelection())


def toggle_grade(selection: Any, grade: int) -> BoardGradeSelection:
    """Add ``grade`` to its section, or remove it if already selected."""

    if isinstance(grade, bool) or grade not in ALL_GRADES:
        raise ValueError(f"grade must be between 1 and 12, got {grade!r}")
    current = BoardGradeSelection.from_raw(selection)
    section = section_of(grade)
    grades = set(current.grades_in(section))
    if grade in grades:
        grades.discard(grade)
    else:
        grades.add(grade)
    return current.replace(section, sorted(grades))


def set_section_grades(
    selection: Any,
    section: Section | str,
    grades: Iterable[int],
) -> BoardGradeSelection:
    """Replace one section's grades wholesale."""

    return BoardGradeSelection.from_raw(selection).replace(Section(section), grades)


def select_section(selection: Any, section: Section | str, checked: bool) -> BoardGradeSelection:
    target = Section(section)
    return set_section_grades(selection, target, target.grades if checked else ())


def select_all(selection: Any, checked: bool) -> BoardGradeSelection:
    """Select or clear every grade from 1 to 12."""

    current = BoardGradeSelection.from_raw(selection)
    for section in Section:
        current = current.replace(section, section.grades if checked else ())
    return current


def update_board_grades(board_map: Any, board: str, selection: Any) -> BoardGradeMap:
    """Store ``selection`` for ``board``; malformed selections become empty."""

    current = BoardGradeMap.from_wire(board_map)
    return current.with_board(_board_name(board), BoardGradeSelection.from_raw(selection))


__all__ = [
    "select_all",
    "select_section",
    "set_section_grades",
    "toggle_board",
    "toggle_grade",
    "update_board_grades",
]
