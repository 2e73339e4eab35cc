"""Spin the wheel and inspect spin history."""

from __future__ import annotations

import random
from pathlib import Path
from typing import Optional

import typer
from rich.table import Table

from wog_cli.commands.common import get_state, print_json_payload, resolve_collection
from wog_cli.core.config import history_limit
from wog_cli.core.expansion import add_spin_result, expand, pick_index
from wog_cli.utils.formatting import format_odds, history_rows


def spin_command(
    ctx: typer.Context,
    file: Optional[Path] = typer.Option(None, help="Text or markdown file with workouts"),
    stdin: bool = typer.Option(False, "--stdin", help="Read workout lines from stdin"),
    text: Optional[str] = typer.Option(None, help="Workout lines given inline"),
    preset: Optional[str] = typer.Option(None, help="Spin a built-in collection"),
    token: Optional[str] = typer.Option(None, help="Spin a shared token or link"),
    seed: Optional[int] = typer.Option(None, help="Seed for a reproducible spin"),
    no_history: bool = typer.Option(False, "--no-history", help="Do not record the result"),
) -> None:
    """Expand weights into a shuffled pool and pick one workout."""
    state = get_state(ctx)
    collection = resolve_collection(
        state,
        file_path=file,
        read_stdin=stdin,
        text=text,
        preset=preset,
        token=token,
    )
    if not collection.entries:
        raise typer.BadParameter("No workouts to spin; the collection is empty")

    source = random.Random(seed).random if seed is not None else random.random
    pool = expand(collection.entries, random=source)
    index = pick_index(pool, random=source)
    winner = pool[index]

    if not no_history:
        store = state.store()
        key = state.storage_key
        history = add_spin_result(store.load_history(key), winner, max_entries=history_limit(state.config))
        store.save_history(key, history)

    odds = format_odds(winner.weight, len(pool))
    if state.json_output:
        print_json_payload(
            state,
            {
                "winner": {"id": winner.id, "name": winner.name, "url": winner.url, "weight": winner.weight},
                "index": index,
                "pool_size": len(pool),
                "odds": odds,
            },
        )
        return

    if state.plain_output:
        typer.echo(f"{winner.name}\t{winner.url}")
        return

    state.console.print(f"[bold green]{winner.name}[/bold green] ({odds} chance)")
    state.console.print(winner.url)


def history_command(
    ctx: typer.Context,
    clear: bool = typer.Option(False, "--clear", help="Delete the recorded history"),
) -> None:
    """Show recent spin results, newest first."""
    state = get_state(ctx)
    store = state.store()
    key = state.storage_key

    if clear:
        store.clear_history(key)
        if state.json_output:
            print_json_payload(state, {"status": "cleared"})
        elif not state.quiet:
            typer.echo("History cleared")
        return

    rows = history_rows(store.load_history(key))
    if state.json_output:
        print_json_payload(state, {"history": rows})
        return

    if state.plain_output:
        for row in rows:
            typer.echo(f"{row['when']}\t{row['name']}\t{row['url']}")
        return

    if not rows:
        state.console.print("Spin the wheel to start your workout history!")
        return

    table = Table(title="Spin History")
    table.add_column("When")
    table.add_column("Workout")
    table.add_column("URL", overflow="fold")
    for row in rows:
        table.add_row(row["when"], row["name"], row["url"])
    state.console.print(table)
