from __future__ import annotations

from pathlib import Path
from typing import List

import pytest
from typer.testing import CliRunner

from wog_cli.core.models import Collection, WeightedEntry, category_by_id, make_entry


@pytest.fixture(autouse=True)
def isolated_env(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> Path:
    data_dir = tmp_path / "wog-data"
    monkeypatch.setenv("WOG_DATA_DIR", str(data_dir))
    monkeypatch.setenv("WOG_CONFIG_FILE", str(tmp_path / "wog-config" / "config.toml"))
    monkeypatch.delenv("WOG_STORAGE_DIR", raising=False)
    monkeypatch.delenv("WOG_SHARE_ORIGIN", raising=False)
    return data_dir


@pytest.fixture()
def runner() -> CliRunner:
    return CliRunner()


@pytest.fixture()
def sample_entries() -> List[WeightedEntry]:
    return [
        make_entry("Jumping Jacks", weight=3, category=category_by_id("cardio"), entry_id="quick-1"),
        make_entry("Push-ups", weight=2, entry_id="quick-2"),
        make_entry("Squats", weight=2, entry_id="quick-3"),
        make_entry(
            "Plank",
            url="https://www.youtube.com/watch?v=ASdvN_XEl_c",
            weight=1,
            entry_id="quick-4",
        ),
    ]


@pytest.fixture()
def sample_collection(sample_entries: List[WeightedEntry]) -> Collection:
    return Collection(
        title="Quick 5-Minute Blast",
        description="Perfect for when you only have 5 minutes to spare!",
        entries=sample_entries,
    )


@pytest.fixture()
def sample_lines() -> str:
    return "Push-ups|3\n[Burpees](https://x.test/b)\nMountain Climbers|2\n# comment\n\nJump Rope"


@pytest.fixture()
def write_temp_toml(tmp_path: Path):
    def _write(name: str, content: str) -> Path:
        path = tmp_path / name
        path.write_text(content.strip() + "\n")
        return path

    return _write
