# ABOUTME: The `readershelf shelves` command for listing shelves on the reader.
# ABOUTME: Displays a Rich table of shelf titles and their book counts.

from pathlib import Path

import click
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from readershelf.cli.options import body_option
from readershelf.core.content import readable_name
from readershelf.db.catalog import DeviceCatalog
from readershelf.db.connection import CatalogNotFoundError, open_catalog

console = Console()


@click.command("shelves")
@body_option
@click.pass_context
def shelves(ctx: click.Context, body_root: Path | None) -> None:
    """List the shelves in the reader's catalog."""
    if body_root is None:
        raise click.UsageError("Missing option '--body'.")

    try:
        with open_catalog(body_root) as conn:
            counts = DeviceCatalog(conn).shelf_counts()
    except CatalogNotFoundError as exc:
        console.print(f"[red]{escape(readable_name(str(exc)))}[/red]")
        click.echo(ctx.get_help())
        raise SystemExit(2) from exc

    if not counts:
        console.print("[yellow]No shelves on the reader.[/yellow]")
        return

    table = Table()
    table.add_column("Shelf", style="bold")
    table.add_column("Books", justify="right")

    for title, count in counts:
        table.add_row(escape(title), str(count))

    console.print(table)
    console.print(f"\n[dim]{len(counts)} shelf(s)[/dim]")
