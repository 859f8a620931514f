"""Domain entities for the curriculum configuration model."""

from .core import (
    ALL_GRADES,
    SECTION_GRADES,
    Aggregates,
    BoardGradeMap,
    BoardGradeSelection,
    Section,
    StandardLabel,
    StandardRange,
    Stream,
    default_admissions_flags,
    normalize_admissions_flags,
)

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
    "default_admissions_flags",
    "normalize_admissions_flags",
]
