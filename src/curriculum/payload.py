"""Submission payloads and display summaries for institution records."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping

from .configuration import CurriculumConfiguration, reset_for_type
from .entities.core import BoardGradeMap, Section, StandardRange
from .reconciliation import MapSource, normalize_boards_by_standard
from .validation import ConfigurationValidator

_RANGE_LABELS: Dict[StandardRange, str] = {
    standard: f"Grades {standard.section.grades[0]}–{standard.section.grades[-1]}"
    for standard in StandardRange
}


def build_payload(
    config: CurriculumConfiguration,
    institution_type: str,
    *,
    validator: ConfigurationValidator | None = None,
    school_type: str = "School",
) -> Dict[str, Any]:
    """Validate ``config`` and return the curriculum part of the submit payload.

    Non-school institutions always submit the reset defaults. Raises
    :class:`~curriculum.validation.ConfigurationInvalid` when a school
    configuration fails validation.
    """

    resolved = reset_for_type(config, institution_type, school_type=school_type)
    if institution_type == school_type:
        report = resolved.validate_for(institution_type, validator=validator)
        report.raise_for_errors()
    return resolved.to_payload()


@dataclass(slots=True)
class InstitutionSummary:
    """Compact, display-ready description of a school's offering."""

    source: MapSource
    boards: List[str] = field(default_factory=list)
    grade_range: str = ""
    ranges: Dict[str, List[str]] = field(default_factory=dict)
    streams: List[str] = field(default_factory=list)

    def lines(self) -> List[str]:
        rendered: List[str] = []
        if self.source is MapSource.LEGACY:
            for label, boards in self.ranges.items():
                rendered.append(f"{label}: {', '.join(boards)}")
        else:
            rendered.append(f"Boards: {', '.join(self.boards) or '—'}")
            rendered.append(f"Grade range: {self.grade_range or '—'}")
        if self.streams:
            rendered.append(f"Streams: {', '.join(self.streams)}")
        return rendered


def _string_list(value: Any) -> List[str]:
    if not isinstance(value, (list, tuple)):
        return []
    return [item for item in value if isinstance(item, str)]


def describe(record: Any) -> InstitutionSummary:
    """Summarise a record, preferring the canonical map over legacy fields."""

    data: Mapping[str, Any] = record if isinstance(record, Mapping) else {}
    streams = _string_list(data.get("streamsOffered"))

    canonical = data.get("boardGradeMap")
    if isinstance(canonical, Mapping) and canonical:
        board_map = BoardGradeMap.from_wire(canonical)
        present = {section for _, selection in board_map.items() for section in selection.sections}
        grade_range = " & ".join(section.label.value for section in Section if section in present)
        return InstitutionSummary(
            source=MapSource.CANONICAL,
            boards=list(board_map.enabled),
            grade_range=grade_range,
            streams=streams,
        )

    legacy = data.get("boardsByStandard")
    if isinstance(legacy, Mapping):
        ranges = normalize_boards_by_standard(legacy)
        return InstitutionSummary(
            source=MapSource.LEGACY,
            ranges={_RANGE_LABELS[standard]: boards for standard, boards in ranges.items() if boards},
            streams=streams,
        )

    return InstitutionSummary(
        source=MapSource.FLAT,
        boards=_string_list(data.get("boardsOffered")),
        grade_range=", ".join(_string_list(data.get("standardsAvailable"))),
        streams=streams,
    )


__all__ = ["InstitutionSummary", "build_payload", "describe"]
