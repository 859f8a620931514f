"""JSON helpers for reading and writing institution records."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Dict

from .logging import get_logger

_LOGGER = get_logger(module=__name__)


def load_record(source: Path | str) -> Dict[str, Any]:
    """Load an institution record from a JSON file.

    Records wrapped in the API envelope (``{"data": {"institution": {...}}}``)
    are unwrapped.
    """

    path = Path(source)
    with path.open("r", encoding="utf-8") as handle:
        payload = json.load(handle)
    if not isinstance(payload, dict):
        raise ValueError(f"{path} does not contain a JSON object")
    data = payload.get("data")
    if isinstance(data, dict) and isinstance(data.get("institution"), dict):
        payload = data["institution"]
    _LOGGER.debug("Loaded record", path=str(path), keys=sorted(payload))
    return payload


def serialize_json(data: object, destination: Path | str, *, indent: int = 2) -> Path:
    """Serialize data to JSON with deterministic ordering."""

    dest_path = Path(destination)
    dest_path.parent.mkdir(parents=True, exist_ok=True)
    dest_path.write_text(
        json.dumps(data, indent=indent, sort_keys=True, ensure_ascii=False) + "\n",
        encoding="utf-8",
    )
    _LOGGER.debug("Serialized JSON", path=str(dest_path), size=dest_path.stat().st_size)
    return dest_path


__all__ = ["load_record", "serialize_json"]
