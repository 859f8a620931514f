"""Policy configuration primitives for the curriculum model."""

from __future__ import annotations

from pathlib import Path
from typing import Any, List, Mapping

from pydantic import BaseModel, Field, field_validator, model_validator


def _strip_names(value: List[str]) -> List[str]:
    seen: List[str] = []
    for item in value:
        if not isinstance(item, str):
            continue
        name = item.strip()
        if name and name not in seen:
            seen.append(name)
    return seen


class CatalogPolicy(BaseModel):
    """Fixed catalogs offered by the institution form."""

    boards: List[str] = Field(
        default_factory=lambda: ["CBSE", "ICSE", "State Board", "IB", "IGCSE"],
        description="Educational boards an institution may enable.",
    )
    streams: List[str] = Field(
        default_factory=lambda: ["Science", "Commerce", "Arts"],
        description="Senior-secondary streams.",
    )
    institution_types: List[str] = Field(default_factory=lambda: ["School", "College"])
    school_type: str = Field(
        default="School",
        description="Institution type for which the curriculum configuration applies.",
    )

    @field_validator("boards", "streams", "institution_types", mode="before")
    @classmethod
    def _normalize_lists(cls, value: List[str]) -> List[str]:
        return _strip_names(list(value or []))

    @model_validator(mode="after")
    def _school_type_is_known(self) -> "CatalogPolicy":
        if self.school_type not in self.institution_types:
            raise ValueError("school_type must be one of institution_types")
        if not self.boards:
            raise ValueError("catalog must declare at least one board")
        return self


class ValidationPolicy(BaseModel):
    """Controls the pre-submit gate."""

    report_all_errors: bool = Field(
        default=True,
        description="Collect every failing check instead of stopping at the first.",
    )
    require_stream_for_high: bool = Field(
        default=True,
        description="Require at least one stream when grades 11-12 are offered.",
    )


class LoggingPolicy(BaseModel):
    """Log sink configuration."""

    level: str = Field(default="INFO")
    log_file: Path | None = Field(default=None)

    @field_validator("level")
    @classmethod
    def _upper_level(cls, value: str) -> str:
        level = value.strip().upper()
        if level not in {"TRACE", "DEBUG", "INFO", "SUCCESS", "WARNING", "ERROR", "CRITICAL"}:
            raise ValueError(f"unknown log level: {value}")
        return level


class Policies(BaseModel):
    """Root policy container."""

    policy_version: str = Field(default="2026-10-01")
    catalog: CatalogPolicy = Field(default_factory=CatalogPolicy)
    validation: ValidationPolicy = Field(default_factory=ValidationPolicy)
    logging: LoggingPolicy = Field(default_factory=LoggingPolicy)


def load_policies(data: Mapping[str, Any] | None) -> Policies:
    """Build :class:`Policies` from a (possibly partial) mapping."""

    if data is None:
        return Policies()
    if isinstance(data, Policies):
        return data
    return Policies.model_validate(dict(data))


__all__ = [
    "CatalogPolicy",
    "ValidationPolicy",
    "LoggingPolicy",
    "Policies",
    "load_policies",
]
