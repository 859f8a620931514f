"""Configuration utilities for the curriculum model."""

from .policies import (
    CatalogPolicy,
    LoggingPolicy,
    Policies,
    ValidationPolicy,
    load_policies,
)
from .settings import Settings, get_settings

__all__ = [
    "Settings",
    "get_settings",
    "Policies",
    "load_policies",
    "CatalogPolicy",
    "ValidationPolicy",
    "LoggingPolicy",
]
