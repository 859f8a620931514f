"""Pre-submit validation gate for school curriculum configurations."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Iterable, List

from .config.policies import CatalogPolicy, ValidationPolicy
from .derivation import derive
from .entities.core import BoardGradeMap, StandardLabel
from .grades import has_any_grade
from .utils.logging import get_logger

_LOGGER = get_logger(module=__name__)


class ErrorCode(str, Enum):
    """Failure codes reported by :class:`ConfigurationValidator`."""

    EMPTY_CONFIGURATION = "EmptyConfiguration"
    BOARD_WITHOUT_GRADES = "BoardWithoutGrades"
    MISSING_STREAM = "MissingStream"
    UNKNOWN_BOARD = "UnknownBoard"
    UNKNOWN_STREAM = "UnknownStream"


_FIELDS: Dict[ErrorCode, str] = {
    ErrorCode.EMPTY_CONFIGURATION: "boards",
    ErrorCode.BOARD_WITHOUT_GRADES: "grades",
    ErrorCode.MISSING_STREAM: "streams",
    ErrorCode.UNKNOWN_BOARD: "boards",
    ErrorCode.UNKNOWN_STREAM: "streams",
}


@dataclass(slots=True)
class ConfigurationError:
    """A single user-recoverable validation failure."""

    code: ErrorCode
    message: str
    board: str | None = None

    @property
    def form_field(self) -> str:
        return _FIELDS[self.code]

    def to_dict(self) -> dict:
        payload = {"code": self.code.value, "field": self.form_field, "message": self.message}
        if self.board is not None:
            payload["board"] = self.board
        return payload


@dataclass(slots=True)
class ValidationReport:
    """Outcome of validating a configuration before submission."""

    institution_type: str
    errors: List[ConfigurationError] = field(default_factory=list)

    @property
    def passed(self) -> bool:
        return not self.errors

    @property
    def codes(self) -> List[ErrorCode]:
        return [error.code for error in self.errors]

    def messages_by_field(self) -> Dict[str, str]:
        """First message per form field, as shown next to the inputs."""

        messages: Dict[str, str] = {}
        for error in self.errors:
            messages.setdefault(error.form_field, error.message)
        return messages

    def raise_for_errors(self) -> None:
        if self.errors:
            raise ConfigurationInvalid(self)

    def to_dict(self) -> dict:
        return {
            "passed": self.passed,
            "institution_type": self.institution_type,
            "errors": [error.to_dict() for error in self.errors],
        }


class ConfigurationInvalid(ValueError):
    """Raised when a caller requires a configuration to pass validation."""

    def __init__(self, report: ValidationReport) -> None:
        self.report = report
        summary = "; ".join(error.message for error in report.errors)
        super().__init__(summary or "configuration is invalid")


class ConfigurationValidator:
    """Checks the structural rules a school configuration must satisfy."""

    def __init__(
        self,
        policy: ValidationPolicy | None = None,
        catalog: CatalogPolicy | None = None,
    ) -> None:
        self._policy = policy or ValidationPolicy()
        self._catalog = catalog or CatalogPolicy()

    @property
    def policy(self) -> ValidationPolicy:
        return self._policy

    def validate(
        self,
        board_map: Any,
        streams_offered: Iterable[Any] | None = None,
        *,
        institution_type: str | None = None,
    ) -> ValidationReport:
        resolved_type = institution_type or self._catalog.school_type
        report = ValidationReport(institution_type=resolved_type)
        if resolved_type != self._catalog.school_type:
            return report

        parsed = BoardGradeMap.from_wire(board_map)
        streams = list(streams_offered or [])
        checks = (self._check_boards, self._check_grades, self._check_catalog, self._check_streams)
        for check in checks:
            report.errors.extend(check(parsed, streams))
            if report.errors and not self._policy.report_all_errors:
                break

        if not report.passed:
            _LOGGER.info(
                "Curriculum configuration rejected",
                codes=[code.value for code in report.codes],
            )
        return report

    # -- checks --------------------------------------------------------------------

    def _check_boards(self, board_map: BoardGradeMap, streams: List[Any]) -> List[ConfigurationError]:
        if not board_map.is_empty:
            return []
        return [
            ConfigurationError(
                code=ErrorCode.EMPTY_CONFIGURATION,
                message="Select at least one board.",
            )
        ]

    def _check_grades(self, board_map: BoardGradeMap, streams: List[Any]) -> List[ConfigurationError]:
        errors: List[ConfigurationError] = []
        for board, selection in board_map.items():
            if has_any_grade(selection):
                continue
            errors.append(
                ConfigurationError(
                    code=ErrorCode.BOARD_WITHOUT_GRADES,
                    message=f"Select at least one grade for {board}.",
                    board=board,
                )
            )
            if not self._policy.report_all_errors:
                break
        return errors

    def _check_catalog(self, board_map: BoardGradeMap, streams: List[Any]) -> List[ConfigurationError]:
        """Boards and streams must come from the configured catalog."""

        errors = [
            ConfigurationError(
                code=ErrorCode.UNKNOWN_BOARD,
                message=f"{board} is not an offered board.",
                board=board,
            )
            for board in board_map.enabled
            if board not in self._catalog.boards
        ]
        for stream in streams:
            name = getattr(stream, "value", stream)
            if name not in self._catalog.streams:
                errors.append(
                    ConfigurationError(
                        code=ErrorCode.UNKNOWN_STREAM,
                        message=f"{name} is not an offered stream.",
                    )
                )
        if errors and not self._policy.report_all_errors:
            return errors[:1]
        return errors

    def _check_streams(self, board_map: BoardGradeMap, streams: List[Any]) -> List[ConfigurationError]:
        if not self._policy.require_stream_for_high or streams:
            return []
        if StandardLabel.HIGH not in derive(board_map).standards_available:
            return []
        return [
            ConfigurationError(
                code=ErrorCode.MISSING_STREAM,
                message="Select at least one stream for senior secondary (11–12).",
            )
        ]


def validate_configuration(
    board_map: Any,
    streams_offered: Iterable[Any] | None = None,
    *,
    institution_type: str | None = None,
    policy: ValidationPolicy | None = None,
    catalog: CatalogPolicy | None = None,
) -> ValidationReport:
    """Convenience wrapper around :class:`ConfigurationValidator`."""

    validator = ConfigurationValidator(policy, catalog)
    return validator.validate(board_map, streams_offered, institution_type=institution_type)


__all__ = [
    "ConfigurationError",
    "ConfigurationInvalid",
    "ConfigurationValidator",
    "ErrorCode",
    "ValidationReport",
    "validate_configuration",
]
