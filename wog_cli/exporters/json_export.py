"""JSON document helpers shared by exports and the collection store."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any


def write_json(path: Path, payload: Any) -> Path:
    """Write payload as pretty UTF-8 JSON and return path."""
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(payload, indent=2, ensure_ascii=False) + "\n", encoding="utf-8")
    return path


def read_json(path: Path) -> Any:
    """Load a JSON document; raises ``OSError`` or ``ValueError`` when unreadable."""
    return json.loads(path.read_text(encoding="utf-8"))
