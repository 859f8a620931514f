"""Curriculum configuration model for school institutions."""

from __future__ import annotations

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("admissions-curriculum")
except PackageNotFoundError:  # pragma: no cover - running from a source checkout
    __version__ = "0.1.0"

from .config.settings import Settings, get_settings
from .configuration import CurriculumConfiguration, reset_for_type
from .derivation import derive
from .entities import (
    Aggregates,
    BoardGradeMap,
    BoardGradeSelection,
    Section,
    StandardLabel,
    StandardRange,
    Stream,
)
from .grades import has_any_grade, section_of, summarize
from .reconciliation import reconcile
from .validation import (
    ConfigurationInvalid,
    ConfigurationValidator,
    ErrorCode,
    ValidationReport,
)

__all__ = [
    "__version__",
    "Settings",
    "get_settings",
    "Aggregates",
    "BoardGradeMap",
    "BoardGradeSelection",
    "ConfigurationInvalid",
    "ConfigurationValidator",
    "CurriculumConfiguration",
    "ErrorCode",
    "Section",
    "StandardLabel",
    "StandardRange",
    "Stream",
    "ValidationReport",
    "derive",
    "has_any_grade",
    "reconcile",
    "reset_for_type",
    "section_of",
    "summarize",
]
