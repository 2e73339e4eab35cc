from __future__ import annotations

import json
from pathlib import Path

from wog_cli.core.expansion import add_spin_result
from wog_cli.core.models import Collection
from wog_cli.core.storage import CollectionStore


def test_save_and_load_collection(tmp_path: Path, sample_collection: Collection) -> None:
    store = CollectionStore(tmp_path)
    path = store.save("wheelOfGains_workouts", sample_collection)

    data = json.loads(path.read_text(encoding="utf-8"))
    assert data["version"] == "1.0"
    assert data["workouts"][0]["multiplier"] == 3

    loaded = store.load("wheelOfGains_workouts")
    assert loaded is not None
    assert loaded.title == sample_collection.title
    assert [(e.id, e.weight) for e in loaded.entries] == [(e.id, e.weight) for e in sample_collection.entries]


def test_missing_key_loads_none(tmp_path: Path) -> None:
    assert CollectionStore(tmp_path).load("nothing") is None
    assert CollectionStore(tmp_path).load_history("nothing") == []


def test_wrong_version_is_ignored(tmp_path: Path) -> None:
    store = CollectionStore(tmp_path)
    store.path_for("k").write_text(json.dumps({"version": "0.9", "workouts": []}), encoding="utf-8")
    assert store.load("k") is None


def test_corrupt_document_is_ignored(tmp_path: Path) -> None:
    store = CollectionStore(tmp_path)
    store.path_for("k").write_text("{not json", encoding="utf-8")
    assert store.load("k") is None


def test_invalid_workouts_are_rejected(tmp_path: Path) -> None:
    store = CollectionStore(tmp_path)
    payload = {"version": "1.0", "title": "T", "description": "D", "workouts": [{"name": "No id"}]}
    store.path_for("k").write_text(json.dumps(payload), encoding="utf-8")
    assert store.load("k") is None


def test_keys_are_made_filesystem_safe(tmp_path: Path) -> None:
    store = CollectionStore(tmp_path)
    assert store.path_for("../evil key").parent == tmp_path
    assert store.path_for("...").name == "default.json"


def test_history_round_trip_and_clear(tmp_path: Path, sample_entries) -> None:
    store = CollectionStore(tmp_path, max_history=3)
    history = []
    for step, entry in enumerate(sample_entries):
        history = add_spin_result(history, entry, now=step)
    store.save_history("k", history)

    loaded = store.load_history("k")
    assert [result.entry.id for result in loaded] == ["quick-4", "quick-3", "quick-2"]
    assert loaded[0].timestamp == 3

    store.clear_history("k")
    assert store.load_history("k") == []
    store.clear_history("k")


def test_history_skips_malformed_records(tmp_path: Path, sample_entries) -> None:
    store = CollectionStore(tmp_path)
    good = add_spin_result([], sample_entries[0], now=5)[0].to_dict()
    payload = {"version": "1.0", "history": [good, {"id": "x", "workout": {"name": "bad"}}, "junk"]}
    store.path_for("k_history").write_text(json.dumps(payload), encoding="utf-8")

    loaded = store.load_history("k")
    assert [result.entry.id for result in loaded] == ["quick-1"]
