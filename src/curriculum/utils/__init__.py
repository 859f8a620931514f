"""Utility helpers shared across curriculum modules."""

from .helpers import load_record, serialize_json
from .logging import configure_logging, get_logger, logging_context

__all__ = [
    "configure_logging",
    "get_logger",
    "logging_context",
    "load_record",
    "serialize_json",
]
