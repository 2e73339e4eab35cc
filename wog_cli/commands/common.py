"""Shared command helpers."""

from __future__ import annotations

import json
import sys
from pathlib import Path
from typing import Any, Optional, Sequence, Tuple

import typer
from loguru import logger
from rich.table import Table

from wog_cli.core.codec import CollectionDecodeError, decode_collection, resolve_token
from wog_cli.core.models import Collection, WeightedEntry
from wog_cli.core.presets import PRESET_NAMES, default_collection, get_preset
from wog_cli.core.state import CLIState
from wog_cli.utils.formatting import entry_rows
from wog_cli.utils.parsing import (
    collection_from_description,
    has_frontmatter,
    load_markdown_collection,
    materialize,
)

DECODE_NOTICE = (
    "Failed to load workout collection. The link may be corrupted or invalid. "
    "Showing default workout collection instead."
)


def get_state(ctx: typer.Context) -> CLIState:
    """Extract validated CLI state from Typer context."""
    state = ctx.obj
    if not isinstance(state, CLIState):
        raise typer.Exit(code=2)
    return state


def print_json_payload(state: CLIState, payload: Any) -> None:
    """Print JSON payload with plain-mode fallback for piping."""
    if state.plain_output:
        typer.echo(json.dumps(payload, separators=(",", ":"), ensure_ascii=False))
        return
    state.console.print_json(data=payload)


def read_input_text(
    file_path: Optional[Path],
    read_stdin: bool,
    text: Optional[str],
    stdin_text: Optional[str] = None,
) -> Optional[str]:
    """Read entry text from --file, --stdin or --text (first one given wins)."""
    if file_path is not None:
        if not file_path.exists():
            raise typer.BadParameter(f"File not found: {file_path}")
        return file_path.read_text(encoding="utf-8")
    if read_stdin:
        return stdin_text if stdin_text is not None else sys.stdin.read()
    return text


def collection_from_text(
    text: str,
    title: Optional[str] = None,
    description: Optional[str] = None,
    slug: str = "collection",
) -> Collection:
    """Build a collection from raw input, honouring markdown frontmatter."""
    if has_frontmatter(text):
        collection = load_markdown_collection(text, slug).to_collection()
        if title:
            collection.title = title
        if description is not None:
            collection.description = description
        return collection

    collection = collection_from_description(title or "", text)
    if description is not None:
        collection.description = description
    return collection


def decode_or_default(token_or_url: str) -> Tuple[Collection, Optional[str]]:
    """Decode a shared token, falling back to the default collection with a notice."""
    token = resolve_token(token_or_url)
    if not token:
        logger.warning("No workout data found in link")
        return default_collection(), "No workout data found in URL. Please check your link."
    try:
        return materialize(decode_collection(token)), None
    except CollectionDecodeError:
        return default_collection(), DECODE_NOTICE


def resolve_collection(
    state: CLIState,
    file_path: Optional[Path] = None,
    read_stdin: bool = False,
    text: Optional[str] = None,
    preset: Optional[str] = None,
    token: Optional[str] = None,
    title: Optional[str] = None,
) -> Collection:
    """Pick the collection a command operates on from its input options."""
    if preset is not None:
        if preset not in PRESET_NAMES:
            raise typer.BadParameter(f"Unknown preset '{preset}'. Choose from: {', '.join(PRESET_NAMES)}")
        return get_preset(preset)

    if token is not None:
        collection, notice = decode_or_default(token)
        if notice:
            echo_notice(state, notice)
        return collection

    raw = read_input_text(file_path, read_stdin, text)
    if raw is not None:
        slug = file_path.stem if file_path is not None else "collection"
        return collection_from_text(raw, title=title, slug=slug)

    store = state.store()
    stored = store.load(state.storage_key)
    if stored is not None:
        return stored

    default_name = str(state.config.get("defaults", {}).get("preset") or "classic")
    return get_preset(default_name) if default_name in PRESET_NAMES else default_collection()


def echo_notice(state: CLIState, notice: str) -> None:
    """Non-blocking notice on stderr."""
    if not state.quiet:
        typer.echo(f"Notice: {notice}", err=True)


def print_entries(state: CLIState, title: str, entries: Sequence[WeightedEntry]) -> None:
    """Render entries as a rich table, or tab separated lines in plain mode."""
    rows = entry_rows(entries)
    if state.plain_output:
        for row in rows:
            typer.echo(f"{row['name']}\t{row['weight']}\t{row['url']}")
        return

    table = Table(title=title or None)
    table.add_column("#", justify="right")
    table.add_column("Workout")
    table.add_column("Weight", justify="right")
    table.add_column("Odds", justify="right")
    table.add_column("Category")
    table.add_column("URL", overflow="fold")
    for index, row in enumerate(rows, start=1):
        table.add_row(
            str(index),
            row["name"],
            str(row["weight"]),
            row["odds"],
            row["category"],
            row["url"],
        )
    state.console.print(table)
