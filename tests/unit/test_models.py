from __future__ import annotations

import math

import pytest

from wog_cli.core.models import (
    DEFAULT_CATEGORIES,
    Category,
    category_by_id,
    category_from_dict,
    derive_url,
    entry_from_dict,
    is_name_unique,
    make_entry,
    normalize_weight,
    validate_new_entry,
    validate_weight,
)


def test_derive_url_encodes_name_and_suffix() -> None:
    assert derive_url("Deadlift") == "https://www.google.com/search?q=Deadlift%20workout"
    assert derive_url("Simple & Sinister") == (
        "https://www.google.com/search?q=Simple%20%26%20Sinister%20workout"
    )
    assert derive_url("Farmer's Walk") == "https://www.google.com/search?q=Farmer's%20Walk%20workout"


@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        (-3, 1),
        (0, 1),
        (0.5, 1),
        (1, 1),
        (2.9, 2),
        (7, 7),
        ("4", 4),
        ("abc", 1),
        (None, 1),
        (True, 1),
        (math.nan, 1),
        (math.inf, 1),
        ("1e400", 1),
        (10**400, 10**400),
    ],
)
def test_normalize_weight_clamps(raw, expected) -> None:
    assert normalize_weight(raw) == expected


@pytest.mark.parametrize("raw", [-10.5, -1, 0, 0.2, 1, 1.5, 2.9, 3, 42.7, 1e6])
def test_normalize_weight_is_idempotent(raw: float) -> None:
    once = normalize_weight(raw)
    assert normalize_weight(once) == once


def test_is_name_unique_ignores_case_and_padding() -> None:
    entries = [make_entry("Push-ups", entry_id="a"), make_entry("Squats", entry_id="b")]
    assert not is_name_unique("  push-ups ", entries)
    assert is_name_unique("Burpees", entries)


def test_is_name_unique_excludes_entry_being_edited() -> None:
    entries = [make_entry("Push-ups", entry_id="a")]
    assert is_name_unique("PUSH-UPS", entries, exclude_id="a")


def test_validate_new_entry_flags_each_problem() -> None:
    entries = [make_entry("Plank", entry_id="p")]
    result = validate_new_entry("   ", 0, entries)
    assert not result.is_valid
    assert result.name
    assert result.weight

    duplicate = validate_new_entry("plank", 2, entries)
    assert duplicate.duplicate
    assert not duplicate.is_valid

    ok = validate_new_entry("Lunges", 2, entries)
    assert ok.is_valid


def test_validate_weight_rejects_non_numbers() -> None:
    assert validate_weight(1)
    assert validate_weight(2.5)
    assert not validate_weight(0.9)
    assert not validate_weight("x")


def test_make_entry_derives_defaults() -> None:
    entry = make_entry("  Squats ", weight=2.7)
    assert entry.name == "Squats"
    assert entry.weight == 2
    assert entry.url == derive_url("Squats")
    assert entry.category == DEFAULT_CATEGORIES[0]
    assert entry.id


def test_make_entry_generates_unique_ids() -> None:
    assert make_entry("A").id != make_entry("A").id


def test_category_by_id_falls_back_to_first() -> None:
    assert category_by_id("cardio").name == "Cardio"
    assert category_by_id("missing") == DEFAULT_CATEGORIES[0]
    assert category_by_id(None) == DEFAULT_CATEGORIES[0]


def test_category_from_dict_keeps_custom_categories() -> None:
    custom = category_from_dict({"id": "classic", "name": "Classic", "color": "#64748b"})
    assert custom == Category(id="classic", name="Classic", color="#64748b")
    assert category_from_dict(None) == DEFAULT_CATEGORIES[0]
    assert category_from_dict({"id": "recovery"}).name == "Recovery"


def test_entry_from_dict_accepts_weight_alias_and_missing_category() -> None:
    entry = entry_from_dict({"id": "x", "name": "Row", "url": "https://r.test", "weight": 3})
    assert entry.weight == 3
    assert entry.url == "https://r.test"
    assert entry.category == DEFAULT_CATEGORIES[0]


def test_entry_to_dict_uses_wire_names() -> None:
    entry = make_entry("Row", weight=2, entry_id="r")
    data = entry.to_dict()
    assert list(data) == ["id", "name", "url", "multiplier", "category"]
    assert data["multiplier"] == 2
    assert data["category"]["id"] == "strength"
