"""Built-in workout collections."""

from __future__ import annotations

from typing import Dict, List, Sequence, Tuple

from wog_cli.core.models import Category, Collection, category_by_id, make_entry
from wog_cli.utils.parsing import parse_entry_line

DEFAULT_PRESET = "classic"

# (title, description, category id, legacy workout strings)
_PRESETS: Dict[str, Tuple[str, str, str, Sequence[str]]] = {
    "classic": (
        "Classic Mix",
        "The original workout collection - a balanced mix to get you started!",
        "strength",
        (
            "Simple & Sinister",
            "ABC x3",
            "AXE Snatch",
            "AXE KB Swing",
            "Snatch Test x2",
            "AXE Macebell Touch Down x.5",
            "AXE Macebell Uppercuts x.5",
            "Deadlift",
        ),
    ),
    "beginner": (
        "Beginner Friendly",
        "Perfect for those just starting their fitness journey!",
        "strength",
        (
            "Bodyweight Squats x2",
            "Push-ups x2",
            "Plank x3",
            "Walking x.5",
            "Glute Bridges x2",
            "Wall Sit x2",
            "Knee Push-ups x2",
            "Modified Burpees",
            "Arm Circles x3",
            "Leg Raises x2",
        ),
    ),
    "intermediate": (
        "Intermediate Challenge",
        "Ready to step up your game? These workouts will push you further!",
        "cardio",
        (
            "Burpees",
            "Mountain Climbers x2",
            "Jump Squats x2",
            "Pike Push-ups",
            "Russian Twists x2",
            "Lunge Jumps",
            "High Knees x2",
            "Tricep Dips x2",
            "Bear Crawl x.5",
            "Jumping Jacks x3",
        ),
    ),
    "advanced": (
        "Advanced Warriors",
        "For the fitness elite - extreme challenges await!",
        "strength",
        (
            "Muscle-ups x.5",
            "Pistol Squats",
            "Handstand Push-ups x.5",
            "One Arm Push-ups x.5",
            "L-sits x.5",
            "Archer Pull-ups x.5",
            "Single Leg Burpees",
            "Planche Push-ups x.5",
            "Human Flag x.5",
            "Dragon Flags x.5",
        ),
    ),
    "cardio": (
        "Cardio Blast",
        "Get your heart pumping with these high-intensity cardio workouts!",
        "cardio",
        (
            "Sprint Intervals x2",
            "Box Jumps x2",
            "Battle Ropes x2",
            "Rowing Machine x2",
            "Cycling Sprints x2",
            "Stair Climbing x2",
            "Jump Rope x3",
            "Shadow Boxing x2",
            "Running x.5",
            "Elliptical x.5",
        ),
    ),
    "strength": (
        "Strength Builder",
        "Build muscle and power with these strength-focused exercises!",
        "strength",
        (
            "Deadlifts",
            "Squats",
            "Bench Press",
            "Pull-ups",
            "Overhead Press",
            "Barbell Rows",
            "Dips x2",
            "Farmer's Walk x.5",
            "Weighted Lunges",
            "Clean and Press x.5",
        ),
    ),
}

PRESET_NAMES: Tuple[str, ...] = tuple(_PRESETS)


def _build(name: str, lines: Sequence[str], category: Category) -> Collection:
    title, description, _, _ = _PRESETS[name]
    entries = []
    for index, line in enumerate(lines):
        parsed = parse_entry_line(line, index)
        if parsed is None:
            continue
        # Preset links search for the display name, not the slug.
        entries.append(
            make_entry(
                name=parsed.name,
                weight=parsed.weight,
                category=category,
                entry_id=f"{name}-{index}",
            )
        )
    return Collection(title=title, description=description, entries=entries)


def get_preset(name: str) -> Collection:
    """Return a fresh copy of a built-in collection."""
    if name not in _PRESETS:
        raise KeyError(f"Unknown preset: {name}")
    _, _, category_id, lines = _PRESETS[name]
    return _build(name, lines, category_by_id(category_id))


def default_collection() -> Collection:
    """Collection shown when a shared link cannot be loaded."""
    return get_preset(DEFAULT_PRESET)


def list_presets() -> List[Dict[str, object]]:
    rows: List[Dict[str, object]] = []
    for name in PRESET_NAMES:
        collection = get_preset(name)
        rows.append(
            {
                "name": name,
                "title": collection.title,
                "description": collection.description,
                "entries": len(collection.entries),
                "total_weight": collection.total_weight,
            }
        )
    return rows
