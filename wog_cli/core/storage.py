"""File-backed key-value store for collections and spin history."""

from __future__ import annotations

import re
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence

from loguru import logger

from wog_cli.core.constants import HISTORY_SUFFIX, MAX_HISTORY_ENTRIES, STORAGE_VERSION
from wog_cli.core.models import Collection, SpinResult, entry_from_dict
from wog_cli.exporters.json_export import read_json, write_json

_KEY_RE = re.compile(r"[^A-Za-z0-9_.-]+")


def _valid_entry_dict(item: Any) -> bool:
    if not isinstance(item, dict):
        return False
    weight = item.get("multiplier", item.get("weight"))
    return bool(item.get("id") and item.get("name") and item.get("url")) and (
        isinstance(weight, (int, float)) and not isinstance(weight, bool)
    )


def _as_timestamp(value: Any) -> int:
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return int(value)
    return 0


class CollectionStore:
    """Stores one JSON document per key under a directory."""

    def __init__(self, directory: Path, max_history: int = MAX_HISTORY_ENTRIES) -> None:
        self.directory = directory
        self.max_history = max_history

    def path_for(self, key: str) -> Path:
        safe = _KEY_RE.sub("_", key).strip("._") or "default"
        return self.directory / f"{safe}.json"

    def _read(self, key: str) -> Optional[Dict[str, Any]]:
        path = self.path_for(key)
        if not path.exists():
            return None
        try:
            data = read_json(path)
        except (OSError, ValueError) as exc:
            logger.warning(f"Failed to read stored document {path}: {exc}")
            return None
        if not isinstance(data, dict) or data.get("version") != STORAGE_VERSION:
            logger.info(f"Ignoring stored document {path} with unsupported version")
            return None
        return data

    def load(self, key: str) -> Optional[Collection]:
        """Load a collection, or ``None`` when missing or invalid."""
        data = self._read(key)
        if data is None:
            return None
        items = data.get("workouts")
        if not isinstance(items, list) or not all(_valid_entry_dict(item) for item in items):
            logger.warning(f"Stored collection {key!r} has invalid workouts")
            return None
        return Collection(
            title=str(data.get("title") or ""),
            description=str(data.get("description") or ""),
            entries=[entry_from_dict(item) for item in items],
        )

    def save(self, key: str, collection: Collection) -> Path:
        payload = {"version": STORAGE_VERSION, **collection.to_dict()}
        return write_json(self.path_for(key), payload)

    def load_history(self, key: str) -> List[SpinResult]:
        data = self._read(key + HISTORY_SUFFIX)
        if data is None:
            return []
        history: List[SpinResult] = []
        for item in data.get("history") or []:
            if not isinstance(item, dict) or not _valid_entry_dict(item.get("workout")):
                continue
            history.append(
                SpinResult(
                    id=str(item.get("id") or ""),
                    entry=entry_from_dict(item["workout"]),
                    timestamp=_as_timestamp(item.get("timestamp")),
                )
            )
        return history[: self.max_history]

    def save_history(self, key: str, history: Sequence[SpinResult]) -> Path:
        payload = {
            "version": STORAGE_VERSION,
            "history": [result.to_dict() for result in history[: self.max_history]],
        }
        return write_json(self.path_for(key + HISTORY_SUFFIX), payload)

    def clear_history(self, key: str) -> None:
        path = self.path_for(key + HISTORY_SUFFIX)
        if path.exists():
            path.unlink()
