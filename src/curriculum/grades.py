"""Grade and section helpers.

Grades 1-12 are partitioned into three sections: primary (1-5), middle (6-10)
and high (11-12). The helpers here accept either :class:`BoardGradeSelection`
instances or raw ``{primary, middle, high}`` mappings and never raise on
malformed input.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Sequence, Tuple

from .entities.core import (
    ALL_GRADES,
    SECTION_GRADES,
    BoardGradeMap,
    BoardGradeSelection,
    Section,
)


def section_of(grade: Any) -> Section:
    """Classify ``grade`` into its section.

    Values outside 1-12 (or not numbers at all) fall back to
    :attr:`Section.PRIMARY` instead of raising.
    """

    for section, grades in SECTION_GRADES.items():
        if not isinstance(grade, bool) and grade in grades:
            return section
    return Section.PRIMARY


def grades_for(section: Section | str) -> Tuple[int, ...]:
    return SECTION_GRADES[Section(section)]


def _section_values(selection: Any, section: Section) -> Sequence[Any]:
    if isinstance(selection, BoardGradeSelection):
        return selection.grades_in(section)
    if isinstance(selection, Mapping):
        values = selection.get(section.value)
        if isinstance(values, (list, tuple)):
            return values
    return ()


def summarize(selection: Any) -> str:
    """Return e.g. ``"Primary & High"`` for the non-empty sections."""

    parts = [section.label.value for section in Section if _section_values(selection, section)]
    return " & ".join(parts)


def has_any_grade(selection: Any) -> bool:
    """True when at least one section of ``selection`` is non-empty."""

    return any(_section_values(selection, section) for section in Section)


def selected_grades(selection: Any) -> List[int]:
    """Sorted union of the grades in ``selection``."""

    return sorted(
        {
            grade
            for section in Section
            for grade in BoardGradeSelection.from_raw(selection).grades_in(section)
        }
    )


@dataclass(slots=True)
class SectionState:
    """Checkbox state for one section row of the grade selector."""

    section: Section
    selected: List[int] = field(default_factory=list)

    @property
    def all_selected(self) -> bool:
        return len(self.selected) == len(SECTION_GRADES[self.section])

    @property
    def some_selected(self) -> bool:
        return bool(self.selected)

    @property
    def indeterminate(self) -> bool:
        return self.some_selected and not self.all_selected


@dataclass(slots=True)
class SelectionState:
    """Tri-state summary for the whole 1-12 row and each section."""

    selected: List[int]
    sections: Dict[Section, SectionState]

    @property
    def all_selected(self) -> bool:
        return len(self.selected) == len(ALL_GRADES)

    @property
    def some_selected(self) -> bool:
        return bool(self.selected)

    @property
    def indeterminate(self) -> bool:
        return self.some_selected and not self.all_selected


def selection_state(selection: Any) -> SelectionState:
    grades = selected_grades(selection)
    chosen = set(grades)
    sections = {
        section: SectionState(
            section=section,
            selected=[grade for grade in SECTION_GRADES[section] if grade in chosen],
        )
        for section in Section
    }
    return SelectionState(selected=grades, sections=sections)


def offered_grades(board_map: Any) -> List[int]:
    """Every grade offered by any board, sorted ascending."""

    parsed = BoardGradeMap.from_wire(board_map)
    offered = {grade for _, selection in parsed.items() for grade in selected_grades(selection)}
    return sorted(offered)


def grades_by_board(board_map: Any) -> List[Tuple[str, BoardGradeSelection]]:
    """Boards paired with their selections, skipping boards without grades."""

    parsed = BoardGradeMap.from_wire(board_map)
    return [(board, selection) for board, selection in parsed.items() if not selection.is_empty]


__all__ = [
    "ALL_GRADES",
    "SectionState",
    "SelectionState",
    "grades_by_board",
    "grades_for",
    "has_any_grade",
    "offered_grades",
    "section_of",
    "selected_grades",
    "selection_state",
    "summarize",
]
