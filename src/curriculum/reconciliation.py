"""Rebuild the canonical configuration from a persisted institution record.

Records saved before the per-board grade map existed only carry the flat
``boardsByStandard`` ranges. Those are expanded back into a board map that
assumes every grade of a listed range was selected; partial selections cannot
be recovered from the legacy shape.
"""

from __future__ import annotations

from enum import Enum
from typing import Any, Dict, List, Mapping, Tuple

from .configuration import CurriculumConfiguration
from .entities.core import (
    BoardGradeMap,
    BoardGradeSelection,
    StandardRange,
    Stream,
    normalize_admissions_flags,
)
from .utils.logging import get_logger

_LOGGER = get_logger(module=__name__)


class MapSource(str, Enum):
    """Which persisted shape produced the canonical map."""

    CANONICAL = "canonical"
    LEGACY = "legacy"
    FLAT = "flat"
    EMPTY = "empty"


def normalize_boards_by_standard(raw: Any) -> Dict[StandardRange, List[str]]:
    """Default each legacy range to an empty list, ignoring malformed values."""

    result: Dict[StandardRange, List[str]] = {standard: [] for standard in StandardRange}
    if not isinstance(raw, Mapping):
        return result
    for standard in StandardRange:
        values = raw.get(standard.value)
        if isinstance(values, (list, tuple)):
            result[standard] = [
                value.strip() for value in values if isinstance(value, str) and value.strip()
            ]
    return result


def board_map_from_legacy(boards_by_standard: Any) -> BoardGradeMap:
    """Expand legacy range membership into full-range grade selections."""

    ranges = normalize_boards_by_standard(boards_by_standard)
    ordered: List[str] = []
    for standard in StandardRange:
        for board in ranges[standard]:
            if board not in ordered:
                ordered.append(board)

    selections: Dict[str, BoardGradeSelection] = {}
    for board in ordered:
        selections[board] = BoardGradeSelection(
            **{
                standard.section.value: standard.section.grades if board in ranges[standard] else ()
                for standard in StandardRange
            }
        )
    return BoardGradeMap(enabled=tuple(ordered), selections=selections)


def resolve_board_map(record: Mapping[str, Any]) -> Tuple[BoardGradeMap, MapSource]:
    canonical = record.get("boardGradeMap")
    if isinstance(canonical, Mapping) and canonical:
        return BoardGradeMap.from_wire(canonical), MapSource.CANONICAL

    legacy = record.get("boardsByStandard")
    if any(normalize_boards_by_standard(legacy).values()):
        return board_map_from_legacy(legacy), MapSource.LEGACY

    return BoardGradeMap(), MapSource.EMPTY


def _known_streams(raw: Any) -> List[Stream]:
    if not isinstance(raw, (list, tuple)):
        return []
    known = {stream.value: stream for stream in Stream}
    streams: List[Stream] = []
    for item in raw:
        stream = known.get(item) if isinstance(item, str) else None
        if stream is not None and stream not in streams:
            streams.append(stream)
    return streams


def reconcile(record: Any) -> CurriculumConfiguration:
    """Produce the editable configuration for a persisted institution record.

    A non-empty ``boardGradeMap`` wins; otherwise legacy ``boardsByStandard``
    ranges are expanded; otherwise the map starts empty. Missing admission flags
    default to open. Malformed input never raises.
    """

    data: Mapping[str, Any] = record if isinstance(record, Mapping) else {}
    board_map, source = resolve_board_map(data)
    _LOGGER.debug("Reconciled board map", source=source.value, boards=len(board_map.enabled))
    return CurriculumConfiguration(
        board_grade_map=board_map,
        admissions_open_by_standard=normalize_admissions_flags(data.get("admissionsOpenByStandard")),
        streams_offered=_known_streams(data.get("streamsOffered")),
    )


__all__ = [
    "MapSource",
    "board_map_from_legacy",
    "normalize_boards_by_standard",
    "reconcile",
    "resolve_board_map",
]
