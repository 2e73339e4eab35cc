from __future__ import annotations

from wog_cli.core.models import Collection, category_by_id, derive_url, make_entry
from wog_cli.utils.parsing import (
    collection_from_description,
    convert_legacy_collection,
    embed_entries,
    entries_to_lines,
    load_markdown_collection,
    materialize,
    parse_description,
    parse_entry_line,
    parse_legacy_workout,
    parse_number,
    parse_workout_lines,
    split_frontmatter,
    to_entries,
)
from wog_cli.utils.text import search_slug


def test_parse_mixed_document(sample_lines: str) -> None:
    entries = parse_workout_lines(sample_lines)
    assert [(e.name, e.weight) for e in entries] == [
        ("Push-ups", 3),
        ("Burpees", 1),
        ("Mountain Climbers", 2),
        ("Jump Rope", 1),
    ]
    assert entries[1].url == "https://x.test/b"
    assert entries[3].url == derive_url("jump-rope")
    assert [e.id for e in entries] == ["entry-0", "entry-1", "entry-2", "entry-3"]


def test_parse_is_deterministic(sample_lines: str) -> None:
    assert parse_workout_lines(sample_lines) == parse_workout_lines(sample_lines)


def test_legacy_suffix_form() -> None:
    assert parse_legacy_workout("Deadlift x.5") == ("Deadlift", 1)
    assert parse_legacy_workout("ABC x3") == ("ABC", 3)
    assert parse_legacy_workout("Snatch Test x2.5") == ("Snatch Test", 3)
    assert parse_legacy_workout("Simple & Sinister") == ("Simple & Sinister", 1)


def test_legacy_suffix_form_through_line_parser() -> None:
    entries = parse_workout_lines("Deadlift x.5\nABC x3")
    assert [(e.name, e.weight) for e in entries] == [("Deadlift", 1), ("ABC", 3)]
    assert entries[1].url == derive_url("abc")


def test_suffix_does_not_need_whitespace_before_x() -> None:
    entry = parse_entry_line("Box", 0)
    assert entry is not None and entry.name == "Box" and entry.weight == 1
    assert parse_legacy_workout("Squatx3") == ("Squat", 3)
    entry = parse_entry_line("Lunges  x2  ", 0)
    assert entry is not None and entry.name == "Lunges" and entry.weight == 2


def test_oversized_suffix_keeps_the_entry() -> None:
    entries = parse_workout_lines("Squat x" + "9" * 400)
    assert [e.name for e in entries] == ["Squat"]
    assert entries[0].weight == int("9" * 400)
    assert parse_legacy_workout("Row x" + "9" * 400 + ".5") == ("Row", int("1" + "0" * 400))


def test_pipe_weight_takes_priority_over_suffix() -> None:
    entry = parse_entry_line("Name x2|3", 0)
    assert entry is not None
    assert entry.name == "Name x2"
    assert entry.weight == 3


def test_fractional_pipe_weight_kept_until_normalized() -> None:
    entry = parse_entry_line("Walking|2.5", 4)
    assert entry is not None
    assert entry.weight == 2.5
    assert entry.id == "entry-4"
    assert entry.to_entry().weight == 2


def test_non_numeric_or_non_positive_pipe_is_part_of_the_name() -> None:
    for line in ("Name|0", "Name|-2", "Name|abc", "Name|"):
        entry = parse_entry_line(line, 0)
        assert entry is not None
        assert entry.name == line
        assert entry.weight == 1


def test_link_with_weight() -> None:
    entry = parse_entry_line("[Kettlebell Swing](https://kb.test/swing)|2", 0)
    assert entry is not None
    assert entry.name == "Kettlebell Swing"
    assert entry.url == "https://kb.test/swing"
    assert entry.weight == 2


def test_link_must_match_whole_content() -> None:
    entry = parse_entry_line("[Row](https://r.test) today", 0)
    assert entry is not None
    assert entry.name == "[Row](https://r.test) today"
    assert entry.url.startswith("https://www.google.com/search?q=")


def test_empty_content_and_comments_produce_nothing() -> None:
    assert parse_entry_line("|3", 0) is None
    assert parse_entry_line("# heading", 0) is None
    assert parse_entry_line("// note", 0) is None
    assert parse_entry_line("   ", 0) is None
    assert parse_workout_lines("|3\n\n# only comments\n// here") == []


def test_search_slug_rules() -> None:
    assert search_slug("Farmer's  Walk!") == "farmers-walk"
    assert search_slug("Push - ups") == "push-ups"


def test_parse_number() -> None:
    assert parse_number("3") == 3
    assert isinstance(parse_number("3.0"), int)
    assert parse_number(".5") == 0.5
    assert parse_number("nan") is None
    assert parse_number("inf") is None
    assert parse_number("1_000") is None
    assert parse_number("3 sets") is None


def test_description_mode_treats_prose_as_entries() -> None:
    text = "My favourite finisher set.\n\nBurpees|2\n// skip me\nPlank"
    names = [e.name for e in parse_description(text)]
    assert names == ["My favourite finisher set.", "Burpees", "Plank"]


def test_collection_from_description_normalizes_weights() -> None:
    collection = collection_from_description("T", "Row|2.9\nBike", category_by_id("cardio"))
    assert [(e.name, e.weight) for e in collection.entries] == [("Row", 2), ("Bike", 1)]
    assert all(e.category.id == "cardio" for e in collection.entries)


def test_materialize_fills_entries_only_when_missing() -> None:
    bare = Collection(title="", description="Row|2\nBike", entries=[])
    filled = materialize(bare)
    assert [e.name for e in filled.entries] == ["Row", "Bike"]

    existing = Collection(title="T", description="ignored", entries=[make_entry("Kept")])
    assert materialize(existing) is existing


def test_entries_to_lines_round_trips(sample_lines: str) -> None:
    entries = to_entries(parse_workout_lines(sample_lines))
    rendered = entries_to_lines(entries)
    assert rendered.splitlines()[0] == "Push-ups|3"
    again = to_entries(parse_workout_lines(rendered))
    assert [(e.name, e.url, e.weight) for e in again] == [(e.name, e.url, e.weight) for e in entries]


def test_entries_to_lines_protects_ambiguous_names() -> None:
    entries = [make_entry("Max x3", entry_id="m"), make_entry("# Hashtag", entry_id="h")]
    again = to_entries(parse_workout_lines(entries_to_lines(entries)))
    assert [(e.name, e.weight) for e in again] == [("Max x3", 1), ("# Hashtag", 1)]


def test_embed_entries_comments_out_prose(sample_collection: Collection) -> None:
    embedded = embed_entries(sample_collection)
    assert embedded.startswith("# Perfect for when you only have 5 minutes to spare!\n\n")
    again = to_entries(parse_description(embedded))
    assert [(e.name, e.url, e.weight) for e in again] == [
        (e.name, e.url, e.weight) for e in sample_collection.entries
    ]


def test_embed_entries_keeps_source_description(sample_lines: str) -> None:
    collection = collection_from_description("", sample_lines)
    assert embed_entries(collection) == sample_lines


def test_convert_legacy_collection() -> None:
    converted = convert_legacy_collection(
        {
            "id": "classic",
            "title": "Classic Mix",
            "description": "The original",
            "workouts": ["ABC x3", "Deadlift", "Walk x.5"],
        }
    )
    assert converted["title"] == "Classic Mix"
    assert converted["description"] == "The original\n\nABC|3\nDeadlift\nWalk|1"


def test_convert_legacy_collection_without_workouts() -> None:
    converted = convert_legacy_collection({"id": "x", "title": "T", "description": "D"})
    assert converted == {"id": "x", "title": "T", "description": "D"}


def test_load_markdown_collection_with_frontmatter() -> None:
    text = "\n".join(
        [
            "---",
            'title: "Beginner Basics"',
            'description: "No equipment needed"',
            'category: "cardio"',
            'tags: ["beginner", "full-body"]',
            "---",
            "",
            "# Beginner Basics Workout",
            "",
            "- [Push-ups (modified)](https://www.youtube.com/watch?v=0GsVJsS6474)|2",
            "- [Bodyweight squats](https://www.youtube.com/watch?v=aclHkVaku9U)|3",
            "* Wall sit",
            "1. Rest 60 seconds",
        ]
    )
    loaded = load_markdown_collection(text, "beginner-basics")
    assert loaded.title == "Beginner Basics"
    assert loaded.description == "No equipment needed"
    assert loaded.tags == ["beginner", "full-body"]

    collection = loaded.to_collection()
    assert [(e.name, e.weight) for e in collection.entries] == [
        ("Push-ups (modified)", 2),
        ("Bodyweight squats", 3),
        ("Wall sit", 1),
        ("Rest 60 seconds", 1),
    ]
    assert collection.entries[0].url == "https://www.youtube.com/watch?v=0GsVJsS6474"
    assert all(e.category.id == "cardio" for e in collection.entries)


def test_load_markdown_collection_without_frontmatter_uses_slug() -> None:
    loaded = load_markdown_collection("Row|2\nBike", "my-set")
    assert loaded.title == "my-set"
    assert loaded.body == "Row|2\nBike"


def test_split_frontmatter_tolerates_bad_yaml() -> None:
    frontmatter, body = split_frontmatter("---\ntitle: [unclosed\n---\nRow")
    assert frontmatter == {}
    assert body == "Row"
