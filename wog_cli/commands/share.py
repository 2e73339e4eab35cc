"""Encode, decode and share workout collections."""

from __future__ import annotations

from pathlib import Path
from typing import Any, Dict, Optional

import typer

from wog_cli.commands.common import (
    decode_or_default,
    echo_notice,
    get_state,
    print_entries,
    print_json_payload,
    resolve_collection,
)
from wog_cli.core.codec import (
    CollectionEncodeError,
    create_share_url,
    encode_collection,
    encode_description,
)
from wog_cli.core.config import resolve_share_settings
from wog_cli.core.models import Collection
from wog_cli.core.state import CLIState
from wog_cli.utils.formatting import entry_rows
from wog_cli.utils.parsing import embed_entries

DEFAULT_SHARED_TITLE = "Shared Workout Collection"
DEFAULT_SHARED_DESCRIPTION = "A custom workout collection shared via link"


def _prepare(
    state: CLIState,
    file: Optional[Path],
    stdin: bool,
    text: Optional[str],
    preset: Optional[str],
    title: Optional[str],
    description: Optional[str],
    full: bool,
) -> Collection:
    collection = resolve_collection(
        state,
        file_path=file,
        read_stdin=stdin,
        text=text,
        preset=preset,
        title=title,
    )
    if title:
        collection.title = title
    if description is not None:
        collection.description = description
    if full:
        # Full payloads are only accepted back with a title and description.
        collection.title = collection.title or DEFAULT_SHARED_TITLE
        collection.description = collection.description or DEFAULT_SHARED_DESCRIPTION
    if not collection.entries:
        raise typer.BadParameter("No workouts to share; the collection is empty")
    return collection


def encode_command(
    ctx: typer.Context,
    file: Optional[Path] = typer.Option(None, help="Text or markdown file with workouts"),
    stdin: bool = typer.Option(False, "--stdin", help="Read workout lines from stdin"),
    text: Optional[str] = typer.Option(None, help="Workout lines given inline"),
    preset: Optional[str] = typer.Option(None, help="Encode a built-in collection"),
    title: Optional[str] = typer.Option(None, help="Collection title"),
    description: Optional[str] = typer.Option(None, help="Collection description"),
    full: bool = typer.Option(False, "--full", help="Encode the whole collection instead of its description"),
) -> None:
    """Encode a collection into a compact URL-safe token."""
    state = get_state(ctx)
    collection = _prepare(state, file, stdin, text, preset, title, description, full)

    try:
        token = encode_collection(collection) if full else encode_description(embed_entries(collection))
    except CollectionEncodeError as exc:
        typer.echo(str(exc), err=True)
        raise typer.Exit(code=1)

    if state.json_output:
        print_json_payload(
            state,
            {"token": token, "format": "full" if full else "description", "entries": len(collection.entries)},
        )
        return
    typer.echo(token)


def decode_command(
    ctx: typer.Context,
    value: str = typer.Argument(..., help="Token or share URL (z, data or zip parameter)"),
    save: bool = typer.Option(False, help="Store the decoded collection as the current one"),
) -> None:
    """Decode a shared token or link; falls back to the classic collection."""
    state = get_state(ctx)
    collection, notice = decode_or_default(value)

    if save and notice is None:
        state.store().save(state.storage_key, collection)

    if state.json_output:
        payload: Dict[str, Any] = {
            "title": collection.title,
            "description": collection.description,
            "entries": entry_rows(collection.entries),
            "fallback": notice is not None,
        }
        if notice:
            payload["notice"] = notice
        print_json_payload(state, payload)
        return

    if notice:
        echo_notice(state, notice)

    if state.plain_output:
        typer.echo(f"title\t{collection.title}")
        print_entries(state, collection.title, collection.entries)
        return

    if collection.title:
        state.console.print(f"[bold]{collection.title}[/bold]")
    print_entries(state, "", collection.entries)


def share_command(
    ctx: typer.Context,
    file: Optional[Path] = typer.Option(None, help="Text or markdown file with workouts"),
    stdin: bool = typer.Option(False, "--stdin", help="Read workout lines from stdin"),
    text: Optional[str] = typer.Option(None, help="Workout lines given inline"),
    preset: Optional[str] = typer.Option(None, help="Share a built-in collection"),
    title: Optional[str] = typer.Option(None, help="Collection title"),
    description: Optional[str] = typer.Option(None, help="Collection description"),
    full: bool = typer.Option(False, "--full", help="Embed the whole collection instead of its description"),
    origin: Optional[str] = typer.Option(None, help="Site origin, e.g. https://example.org"),
    base_path: Optional[str] = typer.Option(None, help="Path of the wheel page"),
    key: Optional[str] = typer.Option(None, help="Query parameter: z|data|zip"),
) -> None:
    """Print a shareable link for a collection."""
    state = get_state(ctx)
    if key is not None and key not in {"z", "data", "zip"}:
        raise typer.BadParameter("--key must be one of: z, data, zip")

    settings = resolve_share_settings(
        state.config,
        origin=origin,
        base_path=base_path,
        query_key=key,
        compact=False if full else None,
    )
    collection = _prepare(state, file, stdin, text, preset, title, description, not settings.compact)

    try:
        url = create_share_url(
            collection,
            origin=settings.origin,
            base_path=settings.base_path,
            query_key=settings.query_key,
            compact=settings.compact,
            description=embed_entries(collection) if settings.compact else None,
        )
    except CollectionEncodeError as exc:
        typer.echo(str(exc), err=True)
        raise typer.Exit(code=1)

    if state.json_output:
        print_json_payload(state, {"url": url, "compact": settings.compact})
        return
    typer.echo(url)
