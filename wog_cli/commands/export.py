"""Export collections to markdown or JSON files."""

from __future__ import annotations

from pathlib import Path
from typing import Dict, Optional

import typer

from wog_cli.commands.common import get_state, print_json_payload, resolve_collection
from wog_cli.core.config import default_data_dir
from wog_cli.exporters.json_export import write_json
from wog_cli.exporters.markdown import write_collection_markdown
from wog_cli.utils.text import slugify


def export_command(
    ctx: typer.Context,
    file: Optional[Path] = typer.Option(None, help="Text or markdown file with workouts"),
    stdin: bool = typer.Option(False, "--stdin", help="Read workout lines from stdin"),
    text: Optional[str] = typer.Option(None, help="Workout lines given inline"),
    preset: Optional[str] = typer.Option(None, help="Export a built-in collection"),
    token: Optional[str] = typer.Option(None, help="Export a shared token or link"),
    title: Optional[str] = typer.Option(None, help="Collection title"),
    output_format: str = typer.Option("markdown", "--format", help="Export format: markdown|json"),
    output_dir: Optional[Path] = typer.Option(None, help="Output directory"),
    rewrite: bool = typer.Option(False, help="Overwrite an existing markdown file"),
) -> None:
    """Write a collection to disk as markdown (with frontmatter) or JSON."""
    state = get_state(ctx)

    if output_format not in {"markdown", "json"}:
        raise typer.BadParameter("--format must be markdown|json")

    collection = resolve_collection(
        state,
        file_path=file,
        read_stdin=stdin,
        text=text,
        preset=preset,
        token=token,
        title=title,
    )
    if title:
        collection.title = title

    out_dir = (output_dir or default_data_dir() / "exports").expanduser().resolve()

    if output_format == "markdown":
        path = write_collection_markdown(out_dir, collection, rewrite=rewrite)
    else:
        path = write_json(out_dir / f"{slugify(collection.title or 'untitled')}.json", collection.to_dict())

    result: Dict[str, object] = {
        "status": "exported",
        "format": output_format,
        "path": str(path),
        "count": len(collection.entries),
    }

    if state.json_output:
        print_json_payload(state, result)
        return

    if state.plain_output:
        for key in ("status", "format", "path", "count"):
            typer.echo(f"{key}\t{result[key]}")
        return

    state.console.print(f"Exported {result['count']} workouts as {output_format} to {path}")
