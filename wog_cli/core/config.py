"""Configuration loading."""

from __future__ import annotations

import copy
import json
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Optional

try:  # Python 3.11+
    import tomllib  # type: ignore[attr-defined]
except ModuleNotFoundError:  # Python 3.9-3.10
    import tomli as tomllib  # type: ignore[no-redef]

from wog_cli.core.constants import (
    DEFAULT_SHARE_BASE_PATH,
    DEFAULT_SHARE_ORIGIN,
    MAX_HISTORY_ENTRIES,
    SHARE_QUERY_KEYS,
    STORAGE_KEY,
)


class ConfigError(RuntimeError):
    """Raised when config file parsing fails."""


@dataclass(frozen=True)
class ShareSettings:
    """Where share links point and how they carry the token."""

    origin: str
    base_path: str
    query_key: str
    compact: bool


def _deep_merge(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    merged = copy.deepcopy(base)
    for key, value in override.items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = _deep_merge(merged[key], value)
        else:
            merged[key] = value
    return merged


def expand_path(path_str: str) -> Path:
    """Expand user/env vars and return absolute path."""
    return Path(os.path.expandvars(path_str)).expanduser().resolve()


def default_data_dir() -> Path:
    """Resolve XDG-style data directory with env override."""
    raw = os.getenv("WOG_DATA_DIR", "~/.local/share/wog")
    return expand_path(raw)


def default_config_path() -> Path:
    """Get default config file path."""
    raw = os.getenv("WOG_CONFIG_FILE", "~/.config/wog/config.toml")
    return expand_path(raw)


def _default_config() -> Dict[str, Any]:
    data_dir = default_data_dir()
    return {
        "share": {
            "origin": DEFAULT_SHARE_ORIGIN,
            "base_path": DEFAULT_SHARE_BASE_PATH,
            "query_key": SHARE_QUERY_KEYS[0],
            "compact": True,
        },
        "storage": {
            "directory": str(data_dir / "storage"),
            "key": STORAGE_KEY,
        },
        "history": {
            "max_entries": MAX_HISTORY_ENTRIES,
        },
        "defaults": {
            "preset": "classic",
        },
    }


def _read_config(path: Path) -> Dict[str, Any]:
    suffix = path.suffix.lower()
    text = path.read_text()
    try:
        if suffix in {".toml", ""}:
            loaded = tomllib.loads(text)
        else:
            loaded = json.loads(text)
    except json.JSONDecodeError as exc:
        raise ConfigError(f"Invalid JSON in config file {path}: {exc}") from exc
    except Exception as exc:
        if suffix in {".toml", ""}:
            raise ConfigError(f"Invalid TOML in config file {path}: {exc}") from exc
        raise ConfigError(f"Failed to parse config file {path}: {exc}") from exc

    if not isinstance(loaded, dict):
        raise ConfigError(f"Config file {path} must contain an object/table at the root")
    return loaded


def load_config(path: Optional[Path] = None) -> Dict[str, Any]:
    """Load configuration from disk, merged with defaults."""
    cfg_path = path or default_config_path()
    cfg = _default_config()
    if cfg_path.exists():
        cfg = _deep_merge(cfg, _read_config(cfg_path))

    query_key = cfg["share"].get("query_key")
    if query_key not in SHARE_QUERY_KEYS:
        raise ConfigError(
            f"share.query_key must be one of {', '.join(SHARE_QUERY_KEYS)} (got {query_key!r})"
        )
    return cfg


def resolve_storage_dir(config: Dict[str, Any], explicit: Optional[Path] = None) -> Path:
    """Resolve storage directory with CLI override first."""
    if explicit is not None:
        return explicit.expanduser().resolve()
    raw = os.getenv("WOG_STORAGE_DIR") or config.get("storage", {}).get("directory")
    if not raw:
        raw = str(default_data_dir() / "storage")
    return expand_path(raw)


def resolve_share_settings(
    config: Dict[str, Any],
    origin: Optional[str] = None,
    base_path: Optional[str] = None,
    query_key: Optional[str] = None,
    compact: Optional[bool] = None,
) -> ShareSettings:
    """Merge CLI overrides, env and config into share-link settings."""
    share_cfg = config.get("share", {})
    resolved_path = base_path or share_cfg.get("base_path") or DEFAULT_SHARE_BASE_PATH
    if not resolved_path.startswith("/"):
        resolved_path = "/" + resolved_path
    return ShareSettings(
        origin=origin or os.getenv("WOG_SHARE_ORIGIN") or share_cfg.get("origin") or DEFAULT_SHARE_ORIGIN,
        base_path=resolved_path,
        query_key=query_key or share_cfg.get("query_key") or SHARE_QUERY_KEYS[0],
        compact=bool(share_cfg.get("compact", True)) if compact is None else compact,
    )


def history_limit(config: Dict[str, Any]) -> int:
    try:
        value = int(config.get("history", {}).get("max_entries", MAX_HISTORY_ENTRIES))
    except (TypeError, ValueError):
        return MAX_HISTORY_ENTRIES
    return max(1, value)
