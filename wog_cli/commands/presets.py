"""List built-in collections."""

from __future__ import annotations

import typer
from rich.table import Table

from wog_cli.commands.common import get_state, print_json_payload
from wog_cli.core.presets import list_presets


def presets_command(ctx: typer.Context) -> None:
    """List the built-in workout collections."""
    state = get_state(ctx)
    rows = list_presets()

    if state.json_output:
        print_json_payload(state, {"presets": rows})
        return

    if state.plain_output:
        for row in rows:
            typer.echo(f"{row['name']}\t{row['title']}\t{row['entries']}")
        return

    table = Table(title="Built-in Collections")
    table.add_column("Name")
    table.add_column("Title")
    table.add_column("Workouts", justify="right")
    table.add_column("Pool", justify="right")
    table.add_column("Description")
    for row in rows:
        table.add_row(
            str(row["name"]),
            str(row["title"]),
            str(row["entries"]),
            str(row["total_weight"]),
            str(row["description"]),
        )
    state.console.print(table)
