"""Markdown collection export functionality."""

from __future__ import annotations

from pathlib import Path
from typing import Any, Dict

import yaml

from wog_cli.core.models import Collection
from wog_cli.utils.parsing import entries_to_lines
from wog_cli.utils.text import slugify


def collection_to_markdown(collection: Collection) -> str:
    """Convert a collection to markdown with YAML frontmatter."""
    title = collection.title or "Untitled"
    categories = {entry.category.id for entry in collection.entries}
    frontmatter: Dict[str, Any] = {"title": title}
    if collection.description:
        frontmatter["description"] = collection.description
    if len(categories) == 1:
        frontmatter["category"] = categories.pop()

    header = yaml.safe_dump(frontmatter, sort_keys=False, allow_unicode=True).strip()
    body = entries_to_lines(collection.entries)

    return (
        f"---\n"
        f"{header}\n"
        f"---\n\n"
        f"# {title}\n\n"
        f"{body or '// No workouts yet'}\n"
    )


def write_collection_markdown(
    output_dir: Path,
    collection: Collection,
    rewrite: bool = False,
) -> Path:
    """Write one collection markdown file and return output path."""
    out_path = output_dir / f"{slugify(collection.title or 'untitled')}.md"

    if out_path.exists() and not rewrite:
        return out_path

    output_dir.mkdir(parents=True, exist_ok=True)
    out_path.write_text(collection_to_markdown(collection), encoding="utf-8")
    return out_path
