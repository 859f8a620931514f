"""Configuration management built on top of the policy primitives."""

from __future__ import annotations

import os
from functools import lru_cache
from pathlib import Path
from typing import Any, Dict, Literal

import yaml
from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from .policies import Policies, load_policies

DEFAULT_CONFIG_DIR = Path(__file__).resolve().parent


def deep_merge(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    """Recursively merge two dictionaries."""

    result = dict(base)
    for key, value in override.items():
        if (
            key in result
            and isinstance(result[key], dict)
            and isinstance(value, dict)
        ):
            result[key] = deep_merge(result[key], value)
        else:
            result[key] = value
    return result


def _load_yaml_file(path: Path) -> Dict[str, Any]:
    if not path.exists():
        return {}
    with path.open("r", encoding="utf-8") as handle:
        return yaml.safe_load(handle) or {}


def _apply_env_overrides(base: Dict[str, Any]) -> Dict[str, Any]:
    """Apply overrides from CURRICULUM_SETTINGS__* environment variables."""

    prefix = "CURRICULUM_SETTINGS__"
    result = dict(base)
    for key, value in os.environ.items():
        if not key.startswith(prefix):
            continue
        path = key[len(prefix) :].lower().split("__")
        cursor = result
        for part in path[:-1]:
            nested = cursor.get(part)
            if not isinstance(nested, dict):
                nested = {}
                cursor[part] = nested
            cursor = nested
        cursor[path[-1]] = value
    return result


class Settings(BaseSettings):
    """Primary configuration object for the curriculum model.

    Precedence (highest first): explicit kwargs, environment variables prefixed
    with ``CURRICULUM_`` (handled by :class:`BaseSettings`), nested overrides via
    ``CURRICULUM_SETTINGS__`` variables, environment-specific YAML (e.g.
    ``production.yaml``), the default YAML file, and finally the class defaults.
    """

    model_config = SettingsConfigDict(
        env_prefix="CURRICULUM_",
        validate_assignment=True,
        extra="allow",
    )

    environment: Literal["development", "testing", "production"] = Field(
        default="development",
        description="Active runtime environment",
    )
    config_dir: Path = Field(default=DEFAULT_CONFIG_DIR)
    policies: Policies = Field(default_factory=Policies)

    @model_validator(mode="before")
    @classmethod
    def _bootstrap_from_files(cls, values: Dict[str, Any]) -> Dict[str, Any]:
        """Load YAML files and merge with provided overrides."""

        config_dir = Path(values.get("config_dir") or DEFAULT_CONFIG_DIR)
        environment = values.get("environment") or os.getenv("CURRICULUM_ENV", "development")
        base_config = _load_yaml_file(config_dir / "default.yaml")
        env_config = _load_yaml_file(config_dir / f"{environment}.yaml")
        merged = deep_merge(base_config, env_config)
        hydrated = _apply_env_overrides(merged)

        combined = deep_merge(hydrated, {k: v for k, v in values.items() if v is not None})

        policies_data = combined.pop("policies", None)
        if isinstance(policies_data, Policies):
            combined["policies"] = policies_data
            return combined

        top_level = {
            key: combined.pop(key)
            for key in list(Policies.model_fields.keys())
            if key in combined
        }
        if policies_data is None:
            policies_data = top_level
        else:
            policies_data = deep_merge(top_level, dict(policies_data))
        combined["policies"] = load_policies(policies_data)
        return combined

    @property
    def policy_version(self) -> str:
        return self.policies.policy_version

    @property
    def log_file(self) -> Path | None:
        return self.policies.logging.log_file


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Return a singleton settings instance."""

    return Settings()


__all__ = ["Settings", "get_settings", "deep_merge", "DEFAULT_CONFIG_DIR"]
