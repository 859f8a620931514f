"""The curriculum configuration value edited by the institution form."""

from __future__ import annotations

from typing import Any, Dict, Iterable, List, Sequence, Tuple

from pydantic import BaseModel, ConfigDict, Field, field_serializer, field_validator
from pydantic.alias_generators import to_camel

from . import editor
from .derivation import derive
from .entities.core import (
    Aggregates,
    BoardGradeMap,
    Section,
    StandardRange,
    Stream,
    default_admissions_flags,
    normalize_admissions_flags,
)
from .validation import ConfigurationValidator, ValidationReport


class CurriculumConfiguration(BaseModel):
    """Boards, grades, streams and admission flags for a school.

    The value is immutable; every edit returns a new configuration so callers
    can treat the methods below as reducer steps.
    """

    model_config = ConfigDict(frozen=True, alias_generator=to_camel, populate_by_name=True)

    board_grade_map: BoardGradeMap = Field(default_factory=BoardGradeMap)
    admissions_open_by_standard: Dict[StandardRange, bool] = Field(
        default_factory=default_admissions_flags
    )
    streams_offered: Tuple[Stream, ...] = ()

    @field_validator("board_grade_map", mode="before")
    @classmethod
    def _parse_board_map(cls, value: Any) -> BoardGradeMap:
        return BoardGradeMap.from_wire(value)

    @field_validator("admissions_open_by_standard", mode="before")
    @classmethod
    def _fill_flags(cls, value: Any) -> Dict[StandardRange, bool]:
        return normalize_admissions_flags(value)

    @field_validator("streams_offered", mode="before")
    @classmethod
    def _unique_streams(cls, value: Any) -> Tuple[Any, ...]:
        if value is None:
            return ()
        if isinstance(value, (str, bytes)):
            raise ValueError("streams_offered must be a list of stream names")
        ordered: List[Any] = []
        for item in value:
            if item not in ordered:
                ordered.append(item)
        return tuple(ordered)

    @field_serializer("board_grade_map")
    def _serialize_board_map(self, value: BoardGradeMap) -> Dict[str, Dict[str, List[int]]]:
        return value.to_wire()

    # -- editing -------------------------------------------------------------------

    def _with_map(self, board_map: BoardGradeMap) -> "CurriculumConfiguration":
        return self.model_copy(update={"board_grade_map": board_map})

    def toggle_board(self, board: str, *, catalog: Sequence[str] | None = None) -> "CurriculumConfiguration":
        return self._with_map(editor.toggle_board(self.board_grade_map, board, catalog=catalog))

    def update_board_grades(self, board: str, selection: Any) -> "CurriculumConfiguration":
        return self._with_map(editor.update_board_grades(self.board_grade_map, board, selection))

    def toggle_grade(self, board: str, grade: int) -> "CurriculumConfiguration":
        selection = self.board_grade_map.selection_for(board)
        return self.update_board_grades(board, editor.toggle_grade(selection, grade))

    def set_section_grades(
        self, board: str, section: Section | str, grades: Iterable[int]
    ) -> "CurriculumConfiguration":
        selection = self.board_grade_map.selection_for(board)
        return self.update_board_grades(board, editor.set_section_grades(selection, section, grades))

    def select_section(self, board: str, section: Section | str, checked: bool) -> "CurriculumConfiguration":
        selection = self.board_grade_map.selection_for(board)
        return self.update_board_grades(board, editor.select_section(selection, section, checked))

    def select_all(self, board: str, checked: bool) -> "CurriculumConfiguration":
        selection = self.board_grade_map.selection_for(board)
        return self.update_board_grades(board, editor.select_all(selection, checked))

    def set_admissions_open(self, standard: StandardRange | str, is_open: bool) -> "CurriculumConfiguration":
        flags = dict(self.admissions_open_by_standard)
        flags[StandardRange(standard)] = bool(is_open)
        return self.model_copy(update={"admissions_open_by_standard": flags})

    def toggle_stream(
        self, stream: Stream | str, *, catalog: Sequence[str] | None = None
    ) -> "CurriculumConfiguration":
        """Add or remove a stream.

        Streams are kept even when no board offers grades 11-12 any more; they
        only matter while the High section is available. Adding a stream outside
        ``catalog`` raises :class:`ValueError`.
        """

        target = Stream(stream)
        if target in self.streams_offered:
            streams = tuple(item for item in self.streams_offered if item != target)
        else:
            if catalog is not None and target.value not in catalog:
                raise ValueError(f"unknown stream {target.value!r}; expected one of {list(catalog)}")
            streams = self.streams_offered + (target,)
        return self.model_copy(update={"streams_offered": streams})

    # -- derived views ---------------------------------------------------------------

    def aggregates(self) -> Aggregates:
        return derive(self.board_grade_map, self.admissions_open_by_standard)

    def validate_for(
        self,
        institution_type: str | None = None,
        *,
        validator: ConfigurationValidator | None = None,
    ) -> ValidationReport:
        checker = validator or ConfigurationValidator()
        return checker.validate(
            self.board_grade_map,
            self.streams_offered,
            institution_type=institution_type,
        )

    def to_payload(self) -> Dict[str, Any]:
        """Wire representation handed to the institution service on submit."""

        payload: Dict[str, Any] = {"boardGradeMap": self.board_grade_map.to_wire()}
        payload.update(self.aggregates().to_wire())
        payload["streamsOffered"] = [stream.value for stream in self.streams_offered]
        return payload


def reset_for_type(
    config: CurriculumConfiguration,
    institution_type: str,
    *,
    school_type: str = "School",
) -> CurriculumConfiguration:
    """Clear every school field when the institution is not a school."""

    if institution_type == school_type:
        return config
    return CurriculumConfiguration()


__all__ = ["CurriculumConfiguration", "reset_for_type"]
