"""Runtime state container for CLI context."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict

from rich.console import Console

from wog_cli.core.config import history_limit, resolve_storage_dir
from wog_cli.core.constants import STORAGE_KEY
from wog_cli.core.storage import CollectionStore


@dataclass
class CLIState:
    """CLI runtime options, loaded configuration and output console."""

    json_output: bool
    plain_output: bool
    verbose: bool
    quiet: bool
    config_path: Path
    config: Dict[str, Any]
    console: Console

    @property
    def storage_key(self) -> str:
        """Key of the current collection; its history lives under ``<key>_history``."""
        return str(self.config.get("storage", {}).get("key") or STORAGE_KEY)

    def store(self) -> CollectionStore:
        return CollectionStore(resolve_storage_dir(self.config), max_history=history_limit(self.config))
