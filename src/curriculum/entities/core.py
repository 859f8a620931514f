"""Core value types describing a school's curriculum configuration."""

from __future__ import annotations

from enum import Enum
from typing import Any, Dict, Iterable, List, Mapping, Tuple

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    ValidationInfo,
    field_validator,
    model_validator,
)
from pydantic.alias_generators import to_camel


class Section(str, Enum):
    """Coarse grouping of grades 1-12."""

    PRIMARY = "primary"
    MIDDLE = "middle"
    HIGH = "high"

    @property
    def grades(self) -> Tuple[int, ...]:
        return SECTION_GRADES[self]

    @property
    def label(self) -> "StandardLabel":
        return SECTION_LABELS[self]

    @property
    def long_label(self) -> str:
        first, last = self.grades[0], self.grades[-1]
        return f"{self.label.value} ({first}–{last})"

    @property
    def standard_range(self) -> "StandardRange":
        return SECTION_RANGES[self]


class StandardRange(str, Enum):
    """Legacy range keys used by the flat ``boardsByStandard`` schema."""

    PRIMARY = "1-5"
    MIDDLE = "6-10"
    HIGH = "11-12"

    @property
    def section(self) -> Section:
        return Section[self.name]


class StandardLabel(str, Enum):
    """Display labels reported in ``standardsAvailable``."""

    PRIMARY = "Primary"
    MIDDLE = "Middle"
    HIGH = "High"


class Stream(str, Enum):
    """Senior-secondary streams."""

    SCIENCE = "Science"
    COMMERCE = "Commerce"
    ARTS = "Arts"


SECTION_GRADES: Dict[Section, Tuple[int, ...]] = {
    Section.PRIMARY: (1, 2, 3, 4, 5),
    Section.MIDDLE: (6, 7, 8, 9, 10),
    Section.HIGH: (11, 12),
}
SECTION_LABELS: Dict[Section, StandardLabel] = {
    Section.PRIMARY: StandardLabel.PRIMARY,
    Section.MIDDLE: StandardLabel.MIDDLE,
    Section.HIGH: StandardLabel.HIGH,
}
SECTION_RANGES: Dict[Section, StandardRange] = {
    Section.PRIMARY: StandardRange.PRIMARY,
    Section.MIDDLE: StandardRange.MIDDLE,
    Section.HIGH: StandardRange.HIGH,
}
ALL_GRADES: Tuple[int, ...] = tuple(
    grade for section in Section for grade in SECTION_GRADES[section]
)


def coerce_grade(value: Any) -> int | None:
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float) and value.is_integer():
        return int(value)
    if isinstance(value, str) and value.strip().isdigit():
        return int(value.strip())
    return None


def _strip(board: Any) -> Any:
    return board.strip() if isinstance(board, str) else board


def default_admissions_flags() -> Dict[StandardRange, bool]:
    return {standard: True for standard in StandardRange}


def normalize_admissions_flags(raw: Any) -> Dict[StandardRange, bool]:
    """Fill the three range flags; only an explicit ``False`` closes a range."""

    flags = default_admissions_flags()
    if not isinstance(raw, Mapping):
        return flags
    for standard in StandardRange:
        value = raw.get(standard.value)
        flags[standard] = value is not False
    return flags


class BoardGradeSelection(BaseModel):
    """Grades selected for one board, split by section.

    Each section holds a sorted, duplicate-free tuple drawn from that section's
    grade list. Use :meth:`from_raw` for persisted or user-supplied data; the
    regular constructor rejects grades that do not belong to their section.
    """

    model_config = ConfigDict(frozen=True)

    primary: Tuple[int, ...] = ()
    middle: Tuple[int, ...] = ()
    high: Tuple[int, ...] = ()

    @field_validator("primary", "middle", "high", mode="before")
    @classmethod
    def _sorted_unique(cls, value: Any) -> Tuple[int, ...]:
        if value is None:
            return ()
        if isinstance(value, (str, bytes)) or not isinstance(value, Iterable):
            raise ValueError("section grades must be a list of integers")
        grades = set()
        for item in value:
            grade = coerce_grade(item)
            if grade is None:
                raise ValueError(f"{item!r} is not a grade")
            grades.add(grade)
        return tuple(sorted(grades))

    @field_validator("primary", "middle", "high")
    @classmethod
    def _within_section(cls, value: Tuple[int, ...], info: ValidationInfo) -> Tuple[int, ...]:
        allowed = SECTION_GRADES[Section(info.field_name)]
        stray = [grade for grade in value if grade not in allowed]
        if stray:
            raise ValueError(
                f"grades {stray} do not belong to the {info.field_name} section"
            )
        return value

    @classmethod
    def from_raw(cls, raw: Any) -> "BoardGradeSelection":
        """Leniently parse a ``{primary, middle, high}`` mapping.

        Non-mapping input yields the empty selection, non-list sections are
        treated as empty, and values that are not grades of their section are
        dropped.
        """

        if isinstance(raw, BoardGradeSelection):
            return raw
        if not isinstance(raw, Mapping):
            return cls()
        parsed: Dict[str, List[int]] = {}
        for section in Section:
            values = raw.get(section.value)
            if not isinstance(values, (list, tuple)):
                parsed[section.value] = []
                continue
            grades = (coerce_grade(item) for item in values)
            parsed[section.value] = [
                grade for grade in grades if grade is not None and grade in section.grades
            ]
        return cls(**parsed)

    def grades_in(self, section: Section) -> Tuple[int, ...]:
        return getattr(self, Section(section).value)

    def replace(self, section: Section, grades: Iterable[int]) -> "BoardGradeSelection":
        """Return a copy with ``section`` replaced wholesale."""

        data = self.to_dict()
        data[Section(section).value] = list(grades)
        return BoardGradeSelection(**data)

    @property
    def sections(self) -> List[Section]:
        """Sections with at least one selected grade."""

        return [section for section in Section if self.grades_in(section)]

    @property
    def is_empty(self) -> bool:
        return not self.sections

    def to_dict(self) -> Dict[str, List[int]]:
        return {section.value: list(self.grades_in(section)) for section in Section}


class BoardGradeMap(BaseModel):
    """Boards the operator enabled, each with its grade selection.

    Presence is explicit: ``enabled`` lists the enabled boards in insertion
    order and ``selections`` holds a selection for exactly those boards. A board
    enabled without grades keeps an empty selection, which is distinct from the
    board being absent.
    """

    model_config = ConfigDict(frozen=True)

    enabled: Tuple[str, ...] = ()
    selections: Dict[str, BoardGradeSelection] = Field(default_factory=dict)

    @model_validator(mode="before")
    @classmethod
    def _fill_selections(cls, values: Any) -> Any:
        if not isinstance(values, Mapping):
            return values
        data = dict(values)
        enabled = data.get("enabled") or ()
        if isinstance(enabled, (str, bytes)):
            raise ValueError("enabled must be a sequence of board names")
        selections = dict(data.get("selections") or {})
        for board in enabled:
            selections.setdefault(board, BoardGradeSelection())
        data["enabled"] = tuple(enabled)
        data["selections"] = selections
        return data

    @field_validator("enabled")
    @classmethod
    def _unique_boards(cls, value: Tuple[str, ...]) -> Tuple[str, ...]:
        cleaned = tuple(board.strip() for board in value)
        if any(not board for board in cleaned):
            raise ValueError("board names must contain non-whitespace characters")
        if len(set(cleaned)) != len(cleaned):
            raise ValueError("board names must be unique")
        return cleaned

    @model_validator(mode="after")
    def _selections_match_enabled(self) -> "BoardGradeMap":
        extra = sorted(set(self.selections) - set(self.enabled))
        if extra:
            raise ValueError(f"selections given for boards that are not enabled: {extra}")
        return self

    @classmethod
    def from_wire(cls, raw: Any) -> "BoardGradeMap":
        """Parse the persisted ``{board: {primary, middle, high}}`` shape.

        Anything that is not a mapping yields an empty map; blank board names
        are skipped.
        """

        if isinstance(raw, BoardGradeMap):
            return raw
        if not isinstance(raw, Mapping):
            return cls()
        enabled: List[str] = []
        selections: Dict[str, BoardGradeSelection] = {}
        for key, value in raw.items():
            if not isinstance(key, str) or not key.strip():
                continue
            board = key.strip()
            if board in selections:
                continue
            enabled.append(board)
            selections[board] = BoardGradeSelection.from_raw(value)
        return cls(enabled=tuple(enabled), selections=selections)

    @property
    def boards(self) -> Tuple[str, ...]:
        return self.enabled

    @property
    def is_empty(self) -> bool:
        return not self.enabled

    def is_enabled(self, board: str) -> bool:
        return _strip(board) in self.selections

    def selection_for(self, board: str) -> BoardGradeSelection:
        """Return the selection for an enabled board."""

        try:
            return self.selections[_strip(board)]
        except KeyError:
            raise KeyError(f"board {board!r} is not enabled") from None

    def items(self) -> List[Tuple[str, BoardGradeSelection]]:
        return [(board, self.selections[board]) for board in self.enabled]

    def with_board(self, board: str, selection: BoardGradeSelection) -> "BoardGradeMap":
        """Return a copy where ``board`` is enabled with ``selection``."""

        enabled = self.enabled if board in self.selections else self.enabled + (board,)
        selections = dict(self.selections)
        selections[board] = selection
        return BoardGradeMap(enabled=enabled, selections=selections)

    def without_board(self, board: str) -> "BoardGradeMap":
        enabled = tuple(name for name in self.enabled if name != board)
        selections = {name: sel for name, sel in self.selections.items() if name != board}
        return BoardGradeMap(enabled=enabled, selections=selections)

    def to_wire(self) -> Dict[str, Dict[str, List[int]]]:
        return {board: selection.to_dict() for board, selection in self.items()}


class Aggregates(BaseModel):
    """Views derived from a :class:`BoardGradeMap`; never edited directly."""

    model_config = ConfigDict(frozen=True, alias_generator=to_camel, populate_by_name=True)

    boards_offered: List[str] = Field(default_factory=list)
    standards_available: List[StandardLabel] = Field(default_factory=list)
    boards_by_standard: Dict[StandardRange, List[str]] = Field(
        default_factory=lambda: {standard: [] for standard in StandardRange}
    )
    admissions_open_by_standard: Dict[StandardRange, bool] = Field(
        default_factory=default_admissions_flags
    )
    admissions_open: bool = True

    def to_wire(self) -> Dict[str, Any]:
        return self.model_dump(mode="json", by_alias=True)


__all__ = [
    "ALL_GRADES",
    "SECTION_GRADES",
    "Aggregates",
    "BoardGradeMap",
    "BoardGradeSelection",
    "Section",
    "StandardLabel",
    "StandardRange",
    "Stream",
    "coerce_grade",
    "default_admissions_flags",
    "normalize_admissions_flags",
]
