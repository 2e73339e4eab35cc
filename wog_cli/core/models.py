"""Data models for weighted workout entries and collections."""

from __future__ import annotations

import math
import uuid
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Sequence, Tuple
from urllib.parse import quote

from wog_cli.core.constants import (
    CATEGORY_PALETTE,
    SEARCH_SUFFIX,
    SEARCH_URL_BASE,
    URI_COMPONENT_SAFE,
)


@dataclass(frozen=True)
class Category:
    """Palette entry used to group and colour workouts."""

    id: str
    name: str
    color: str

    def to_dict(self) -> Dict[str, str]:
        return {"id": self.id, "name": self.name, "color": self.color}


DEFAULT_CATEGORIES: Tuple[Category, ...] = tuple(
    Category(id=cid, name=name, color=color) for cid, name, color in CATEGORY_PALETTE
)
CATEGORY_BY_ID: Dict[str, Category] = {category.id: category for category in DEFAULT_CATEGORIES}


def category_by_id(category_id: Optional[str]) -> Category:
    """Look up a palette category, falling back to the first one."""
    if category_id and category_id in CATEGORY_BY_ID:
        return CATEGORY_BY_ID[category_id]
    return DEFAULT_CATEGORIES[0]


@dataclass(frozen=True)
class WeightedEntry:
    """A single workout that can land on the wheel."""

    id: str
    name: str
    url: str
    weight: int
    category: Category = DEFAULT_CATEGORIES[0]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "url": self.url,
            "multiplier": self.weight,
            "category": self.category.to_dict(),
        }


@dataclass
class Collection:
    """Titled, described, ordered set of entries."""

    title: str
    description: str
    entries: List[WeightedEntry] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "title": self.title,
            "description": self.description,
            "workouts": [entry.to_dict() for entry in self.entries],
        }

    @property
    def total_weight(self) -> int:
        return sum(entry.weight for entry in self.entries)


@dataclass(frozen=True)
class SpinResult:
    """History record for one spin."""

    id: str
    entry: WeightedEntry
    timestamp: int

    def to_dict(self) -> Dict[str, Any]:
        return {"id": self.id, "workout": self.entry.to_dict(), "timestamp": self.timestamp}


@dataclass(frozen=True)
class EntryValidation:
    """Boolean validation flags consumed by entry forms."""

    is_valid: bool
    name: bool = False
    weight: bool = False
    duplicate: bool = False


def derive_url(name: str) -> str:
    """Build a search URL for a workout name."""
    return SEARCH_URL_BASE + quote(f"{name}{SEARCH_SUFFIX}", safe=URI_COMPONENT_SAFE)


def _as_number(raw: Any) -> Optional[float]:
    if isinstance(raw, bool):
        return None
    if isinstance(raw, int):
        # Exact for ints too large for a float.
        return raw
    try:
        value = float(raw)
    except (TypeError, ValueError, OverflowError):
        return None
    return value if math.isfinite(value) else None


def normalize_weight(raw: Any) -> int:
    """Clamp any input to a positive integer weight."""
    value = _as_number(raw)
    if value is None or value < 1:
        return 1
    return max(1, int(math.floor(value)))


def validate_name(name: str) -> bool:
    return bool(name and name.strip())


def validate_weight(raw: Any) -> bool:
    value = _as_number(raw)
    return value is not None and value >= 1


def is_name_unique(
    name: str,
    entries: Sequence[WeightedEntry],
    exclude_id: Optional[str] = None,
) -> bool:
    """Check a name against existing entries, ignoring case and padding."""
    normalized = name.strip().lower()
    return not any(
        entry.id != exclude_id and entry.name.strip().lower() == normalized
        for entry in entries
    )


def validate_new_entry(
    name: str,
    weight: Any,
    entries: Sequence[WeightedEntry],
    exclude_id: Optional[str] = None,
) -> EntryValidation:
    """Validate an add/edit form submission without raising."""
    name_error = not validate_name(name)
    weight_error = not validate_weight(weight)
    duplicate = not is_name_unique(name, entries, exclude_id=exclude_id)
    return EntryValidation(
        is_valid=not (name_error or weight_error or duplicate),
        name=name_error,
        weight=weight_error,
        duplicate=duplicate,
    )


def make_entry(
    name: str,
    url: Optional[str] = None,
    weight: Any = 1,
    category: Optional[Category] = None,
    entry_id: Optional[str] = None,
) -> WeightedEntry:
    """Build a valid entry, deriving defaults for missing fields."""
    clean_name = name.strip()
    return WeightedEntry(
        id=entry_id or str(uuid.uuid4()),
        name=clean_name,
        url=url or derive_url(clean_name),
        weight=normalize_weight(weight),
        category=category or DEFAULT_CATEGORIES[0],
    )


def category_from_dict(raw: Any) -> Category:
    """Rebuild a category from a stored dict, defaulting when absent."""
    if not isinstance(raw, dict):
        return DEFAULT_CATEGORIES[0]
    known = CATEGORY_BY_ID.get(str(raw.get("id") or ""))
    if known and raw.get("name") in (None, known.name) and raw.get("color") in (None, known.color):
        return known
    if raw.get("id") and raw.get("name") and raw.get("color"):
        return Category(id=str(raw["id"]), name=str(raw["name"]), color=str(raw["color"]))
    return known or DEFAULT_CATEGORIES[0]


def entry_from_dict(raw: Dict[str, Any]) -> WeightedEntry:
    """Rebuild an entry from its wire/storage dict (``multiplier`` or ``weight``)."""
    weight = raw.get("multiplier", raw.get("weight", 1))
    return make_entry(
        name=str(raw.get("name") or ""),
        url=str(raw.get("url") or "") or None,
        weight=weight,
        category=category_from_dict(raw.get("category")),
        entry_id=str(raw.get("id") or "") or None,
    )
