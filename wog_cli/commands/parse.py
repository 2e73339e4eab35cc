"""Parse free-form workout text into weighted entries."""

from __future__ import annotations

from pathlib import Path
from typing import Any, Dict, Optional

import typer

from wog_cli.commands.common import (
    collection_from_text,
    get_state,
    print_entries,
    print_json_payload,
    read_input_text,
)
from wog_cli.utils.formatting import entry_rows


def parse_command(
    ctx: typer.Context,
    file: Optional[Path] = typer.Option(None, help="Text or markdown file with one workout per line"),
    stdin: bool = typer.Option(False, "--stdin", help="Read workout lines from stdin"),
    text: Optional[str] = typer.Option(None, help="Workout lines given inline"),
    title: Optional[str] = typer.Option(None, help="Collection title"),
    save: bool = typer.Option(False, help="Store the parsed collection as the current one"),
) -> None:
    """Parse workout lines (plain, [text](url), |N weights, legacy xN suffixes)."""
    state = get_state(ctx)

    raw = read_input_text(file, stdin, text)
    if raw is None:
        raise typer.BadParameter("Provide --file, --stdin, or --text")

    collection = collection_from_text(raw, title=title, slug=file.stem if file else "collection")

    saved_path: Optional[Path] = None
    if save:
        saved_path = state.store().save(state.storage_key, collection)

    if state.json_output:
        payload: Dict[str, Any] = {
            "title": collection.title,
            "entries": entry_rows(collection.entries),
            "total_weight": collection.total_weight,
        }
        if saved_path is not None:
            payload["saved"] = str(saved_path)
        print_json_payload(state, payload)
        return

    print_entries(state, collection.title, collection.entries)
    if state.plain_output:
        return

    state.console.print(
        f"Parsed {len(collection.entries)} workouts (pool size {collection.total_weight})"
    )
    if saved_path is not None:
        state.console.print(f"Saved to: {saved_path}")
