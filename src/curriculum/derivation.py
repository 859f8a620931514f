"""Derive the aggregate views persisted alongside the canonical board map."""

from __future__ import annotations

from typing import Any, Dict, List

from .entities.core import (
    Aggregates,
    BoardGradeMap,
    Section,
    StandardLabel,
    StandardRange,
    normalize_admissions_flags,
)
from .grades import has_any_grade
from .utils.logging import get_logger

_LOGGER = get_logger(module=__name__)


def boards_offered(board_map: BoardGradeMap) -> List[str]:
    """Enabled boards with at least one grade, in insertion order."""

    return [board for board, selection in board_map.items() if has_any_grade(selection)]


def standards_available(board_map: BoardGradeMap) -> List[StandardLabel]:
    present = {
        section
        for _, selection in board_map.items()
        for section in selection.sections
    }
    return [section.label for section in Section if section in present]


def boards_by_standard(board_map: BoardGradeMap) -> Dict[StandardRange, List[str]]:
    offered = boards_offered(board_map)
    return {
        section.standard_range: [
            board for board in offered if board_map.selection_for(board).grades_in(section)
        ]
        for section in Section
    }


def derive(board_map: Any, admissions_open_by_standard: Any = None) -> Aggregates:
    """Compute every aggregate from the canonical map and the range flags.

    ``board_map`` may be a :class:`BoardGradeMap` or the persisted mapping;
    malformed input is treated as empty. ``admissions_open`` is the OR of the
    three range flags and does not depend on which ranges have boards.
    """

    parsed = BoardGradeMap.from_wire(board_map)
    flags = normalize_admissions_flags(admissions_open_by_standard)
    aggregates = Aggregates(
        boards_offered=boards_offered(parsed),
        standards_available=standards_available(parsed),
        boards_by_standard=boards_by_standard(parsed),
        admissions_open_by_standard=flags,
        admissions_open=any(flags.values()),
    )
    _LOGGER.debug(
        "Derived aggregates",
        boards=len(aggregates.boards_offered),
        standards=[label.value for label in aggregates.standards_available],
        admissions_open=aggregates.admissions_open,
    )
    return aggregates


__all__ = ["boards_by_standard", "boards_offered", "derive", "standards_available"]
