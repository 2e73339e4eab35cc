"""Parsing helpers for turning free-form text into weighted workout entries.

The line language accepts, per line::

    Plain text                  -> weight 1, search URL derived from the name
    Plain text|3                -> weight 3
    [Text](https://url)         -> weight 1, explicit URL
    [Text](https://url)|2.5     -> weight 2.5 (normalized later)
    Legacy name x3              -> weight 3, suffix stripped from the name
    # comment / // comment      -> ignored

Blank and comment lines are skipped. A line that cannot be turned into an
entry is dropped without failing the rest of the document.
"""

from __future__ import annotations

import math
import re
from dataclasses import dataclass, field
from decimal import ROUND_HALF_UP, Decimal
from typing import Any, Dict, Iterator, List, Optional, Sequence, Tuple, Union

import yaml
from loguru import logger

from wog_cli.core.constants import COMMENT_PREFIXES, ENTRY_ID_PREFIX
from wog_cli.core.models import (
    Category,
    Collection,
    WeightedEntry,
    category_by_id,
    derive_url,
    make_entry,
)
from wog_cli.utils.text import search_slug

Number = Union[int, float]

_LINK_RE = re.compile(r"^\[([^\]]+)\]\(([^)]+)\)$")
_SUFFIX_RE = re.compile(r"\s*x(\d*\.?\d+)\s*$")
_NUMBER_RE = re.compile(r"^[+-]?(?:\d+(?:\.\d*)?|\.\d+)(?:[eE][+-]?\d+)?$")
_LIST_MARKER_RE = re.compile(r"^(?:[-*+]|\d+[.)])\s+")
_FRONTMATTER_FENCE = "---"


@dataclass(frozen=True)
class ParsedEntry:
    """Entry produced by the line parser before it joins a collection."""

    id: str
    name: str
    url: str
    weight: Number = 1

    def to_entry(self, category: Optional[Category] = None) -> WeightedEntry:
        return make_entry(
            name=self.name,
            url=self.url,
            weight=self.weight,
            category=category,
            entry_id=self.id,
        )


@dataclass
class MarkdownCollection:
    """Collection file with YAML frontmatter and a body of entry lines."""

    slug: str
    title: str
    description: str = ""
    body: str = ""
    category: Optional[str] = None
    tags: List[str] = field(default_factory=list)

    def to_collection(self) -> Collection:
        parsed = parse_workout_lines(self.body, strip_list_markers=True)
        return Collection(
            title=self.title,
            description=self.description,
            entries=to_entries(parsed, category_by_id(self.category)),
        )


def parse_number(value: str) -> Optional[Number]:
    """Parse a finite decimal number, keeping integers as ``int``."""
    raw = value.strip()
    if not _NUMBER_RE.match(raw):
        return None
    number = float(raw)
    if not math.isfinite(number):
        return None
    return int(number) if number.is_integer() else number


def _round_half_up(value: str) -> int:
    return int(Decimal(value).to_integral_value(rounding=ROUND_HALF_UP))


def _split_suffix(content: str) -> Tuple[str, Optional[int]]:
    match = _SUFFIX_RE.search(content)
    if not match:
        return content, None
    name = content[: match.start()].strip()
    return name, max(1, _round_half_up(match.group(1)))


def parse_legacy_workout(text: str) -> Tuple[str, int]:
    """Split ``"Name x3"`` into ``("Name", 3)``; fractions round half-up, floor 1."""
    name, weight = _split_suffix(text.strip())
    return name, weight if weight is not None else 1


def is_comment(line: str) -> bool:
    return line.startswith(COMMENT_PREFIXES)


def iter_candidate_lines(text: str, strip_list_markers: bool = False) -> Iterator[str]:
    """Yield trimmed lines that are neither blank nor comments."""
    for raw in text.splitlines():
        line = raw.strip()
        if not line or is_comment(line):
            continue
        if strip_list_markers:
            line = _LIST_MARKER_RE.sub("", line, count=1).strip()
            if not line:
                continue
        yield line


def parse_entry_line(line: str, index: int) -> Optional[ParsedEntry]:
    """Parse one candidate line; ``None`` when it yields no entry."""
    line = line.strip()
    if not line or is_comment(line):
        return None

    content = line
    weight: Optional[Number] = None

    pipe_index = line.rfind("|")
    if pipe_index >= 0:
        parsed_weight = parse_number(line[pipe_index + 1 :])
        if parsed_weight is not None and parsed_weight > 0:
            weight = parsed_weight
            content = line[:pipe_index].strip()

    if weight is None:
        content, weight = _split_suffix(content)

    if not content:
        return None

    entry_id = f"{ENTRY_ID_PREFIX}-{index}"
    weight = weight if weight is not None else 1

    link = _LINK_RE.match(content)
    if link:
        return ParsedEntry(id=entry_id, name=link.group(1), url=link.group(2), weight=weight)

    return ParsedEntry(
        id=entry_id,
        name=content,
        url=derive_url(search_slug(content)),
        weight=weight,
    )


def parse_workout_lines(text: str, strip_list_markers: bool = False) -> List[ParsedEntry]:
    """Parse a block of entry lines in document order."""
    entries: List[ParsedEntry] = []
    dropped = 0
    for index, line in enumerate(iter_candidate_lines(text or "", strip_list_markers)):
        try:
            parsed = parse_entry_line(line, index)
        except Exception as exc:
            logger.warning(f"Dropping unparseable line {index + 1} {line!r}: {exc}")
            dropped += 1
            continue
        if parsed is None:
            logger.debug(f"Line {index + 1} {line!r} produced no entry")
            dropped += 1
            continue
        entries.append(parsed)

    logger.debug(f"Parsed {len(entries)} entries ({dropped} lines dropped)")
    return entries


def parse_description(description: str) -> List[ParsedEntry]:
    """Parse a whole description; every non-comment line is a candidate entry."""
    return parse_workout_lines(description)


def to_entries(
    parsed: Sequence[ParsedEntry],
    category: Optional[Category] = None,
) -> List[WeightedEntry]:
    """Promote parsed entries to weighted entries with normalized weights."""
    return [item.to_entry(category) for item in parsed]


def collection_from_description(
    title: str,
    description: str,
    category: Optional[Category] = None,
) -> Collection:
    """Build a collection whose entries are derived from its description."""
    return Collection(
        title=title,
        description=description,
        entries=to_entries(parse_description(description), category),
    )


def materialize(collection: Collection, category: Optional[Category] = None) -> Collection:
    """Fill in entries from the description when a collection carries none."""
    if collection.entries or not collection.description.strip():
        return collection
    return collection_from_description(collection.title, collection.description, category)


def _needs_link_form(name: str) -> bool:
    return (
        name.startswith("[")
        or "|" in name
        or is_comment(name)
        or _SUFFIX_RE.search(name) is not None
    )


def entry_to_line(entry: WeightedEntry) -> str:
    """Render one entry back into the line language."""
    if entry.url == derive_url(search_slug(entry.name)) and not _needs_link_form(entry.name):
        line = entry.name
    else:
        line = f"[{entry.name}]({entry.url})"
    if entry.weight != 1:
        line = f"{line}|{entry.weight}"
    return line


def entries_to_lines(entries: Sequence[WeightedEntry]) -> str:
    return "\n".join(entry_to_line(entry) for entry in entries)


def _same_entries(parsed: Sequence[WeightedEntry], entries: Sequence[WeightedEntry]) -> bool:
    if len(parsed) != len(entries):
        return False
    return all(
        (a.name, a.url, a.weight) == (b.name, b.url, b.weight)
        for a, b in zip(parsed, entries)
    )


def embed_entries(collection: Collection) -> str:
    """Description text from which the collection's entries can be re-derived.

    Prose lines are kept as comments so they never turn into entries.
    """
    if _same_entries(to_entries(parse_description(collection.description)), collection.entries):
        return collection.description

    prose = [f"# {line.strip()}" for line in collection.description.splitlines() if line.strip()]
    body = entries_to_lines(collection.entries)
    if not prose:
        return body
    return "\n".join(prose) + "\n\n" + body


def convert_legacy_collection(data: Dict[str, Any]) -> Dict[str, str]:
    """Convert ``{title, description, workouts: ["ABC x3", ...]}`` to the embedded form."""
    workouts = data.get("workouts")
    title = str(data.get("title") or "")
    description = str(data.get("description") or "")
    if not isinstance(workouts, list):
        logger.debug("Legacy collection has no workouts array; returning as-is")
        return {"id": str(data.get("id") or ""), "title": title, "description": description}

    lines: List[str] = []
    for workout in workouts:
        name, weight = _split_suffix(str(workout).strip())
        if weight is None:
            lines.append(name)
        else:
            lines.append(f"{name}|{weight}")

    return {
        "id": str(data.get("id") or ""),
        "title": title,
        "description": f"{description}\n\n" + "\n".join(lines),
    }


def split_frontmatter(text: str) -> Tuple[Dict[str, Any], str]:
    """Split a ``---`` fenced YAML header from the body."""
    lines = text.splitlines()
    if not lines or lines[0].strip() != _FRONTMATTER_FENCE:
        return {}, text

    for end, line in enumerate(lines[1:], start=1):
        if line.strip() == _FRONTMATTER_FENCE:
            break
    else:
        return {}, text

    try:
        loaded = yaml.safe_load("\n".join(lines[1:end])) or {}
    except yaml.YAMLError as exc:
        logger.warning(f"Ignoring invalid frontmatter: {exc}")
        loaded = {}
    if not isinstance(loaded, dict):
        loaded = {}
    return loaded, "\n".join(lines[end + 1 :])


def has_frontmatter(text: str) -> bool:
    return text.lstrip().startswith(_FRONTMATTER_FENCE)


def load_markdown_collection(text: str, slug: str) -> MarkdownCollection:
    """Load a markdown collection file; no frontmatter means the whole file is the body."""
    frontmatter, body = split_frontmatter(text.lstrip())
    tags = frontmatter.get("tags") or []
    return MarkdownCollection(
        slug=slug,
        title=str(frontmatter.get("title") or slug),
        description=str(frontmatter.get("description") or ""),
        body=body.strip(),
        category=str(frontmatter["category"]) if frontmatter.get("category") else None,
        tags=[str(tag) for tag in tags] if isinstance(tags, list) else [str(tags)],
    )
