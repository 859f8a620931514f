"""Per-grade and per-stream open admissions for an existing school."""

from __future__ import annotations

from typing import Any, Iterable, List, Mapping, Tuple

from pydantic import BaseModel, ConfigDict, field_validator

from .entities.core import (
    ALL_GRADES,
    Section,
    Stream,
    coerce_grade,
    normalize_admissions_flags,
)
from .grades import offered_grades
from .reconciliation import reconcile


def _sorted_grades(values: Iterable[Any]) -> Tuple[int, ...]:
    grades = {coerce_grade(value) for value in values}
    return tuple(sorted(grade for grade in grades if grade in ALL_GRADES))


class OpenAdmission(BaseModel):
    """Grades and streams currently open for admission."""

    model_config = ConfigDict(frozen=True)

    grades: Tuple[int, ...] = ()
    streams: Tuple[Stream, ...] = ()

    @field_validator("grades", mode="before")
    @classmethod
    def _normalize_grades(cls, value: Any) -> Tuple[int, ...]:
        if not isinstance(value, (list, tuple, set, frozenset)):
            return ()
        return _sorted_grades(value)

    def toggle_grade(self, grade: int) -> "OpenAdmission":
        if grade in self.grades:
            grades = tuple(item for item in self.grades if item != grade)
        else:
            grades = self.grades + (grade,)
        return OpenAdmission(grades=grades, streams=self.streams)

    def select_board_grades(self, board_grades: Iterable[int], checked: bool) -> "OpenAdmission":
        """Open or close every grade a single board offers."""

        current = set(self.grades)
        targets = set(board_grades)
        current = current | targets if checked else current - targets
        return OpenAdmission(grades=tuple(current), streams=self.streams)

    def toggle_stream(self, stream: Stream | str) -> "OpenAdmission":
        target = Stream(stream)
        if target in self.streams:
            streams = tuple(item for item in self.streams if item != target)
        else:
            streams = self.streams + (target,)
        return OpenAdmission(grades=self.grades, streams=streams)

    def select_all_streams(self, offered: Iterable[Stream | str], checked: bool) -> "OpenAdmission":
        streams = tuple(Stream(item) for item in offered) if checked else ()
        return OpenAdmission(grades=self.grades, streams=streams)

    def to_wire(self) -> dict:
        return {
            "admissionsOpenGrades": list(self.grades),
            "admissionsOpenStreams": [stream.value for stream in self.streams],
        }


def admissions_open_grades(record: Mapping[str, Any]) -> List[int]:
    """Grades with admissions open for a persisted record.

    An explicit ``admissionsOpenGrades`` list wins (an empty list means every
    grade is closed). Otherwise each open legacy range contributes all of its
    grades.
    """

    explicit = record.get("admissionsOpenGrades")
    if isinstance(explicit, (list, tuple)):
        explicit_grades = _sorted_grades(explicit)
        if explicit_grades or not explicit:
            return list(explicit_grades)

    flags = normalize_admissions_flags(record.get("admissionsOpenByStandard"))
    grades: List[int] = []
    for section in Section:
        if flags[section.standard_range]:
            grades.extend(section.grades)
    return grades


def open_admission_for(record: Any) -> OpenAdmission:
    """Initial open-admission state restricted to what the school offers."""

    data: Mapping[str, Any] = record if isinstance(record, Mapping) else {}
    config = reconcile(data)
    offered = offered_grades(config.board_grade_map)
    offered_streams = list(config.streams_offered)

    current = admissions_open_grades(data)
    grades = [grade for grade in current if grade in offered]

    raw_streams = data.get("admissionsOpenStreams")
    if isinstance(raw_streams, (list, tuple)):
        current_streams = [item for item in raw_streams if isinstance(item, str)]
    else:
        current_streams = [stream.value for stream in offered_streams]
    streams = [stream for stream in offered_streams if stream.value in current_streams]

    return OpenAdmission(grades=grades, streams=streams)


__all__ = ["OpenAdmission", "admissions_open_grades", "open_admission_for"]
