# ABOUTME: The `readershelf sync` command for copying books onto the reader and shelving them.
# ABOUTME: Prints a phase banner per stage and one line per book considered.

import sqlite3
from pathlib import Path, PurePath

import click
from rich.console import Console
from rich.markup import escape

from readershelf.cli.options import body_option, sd_option
from readershelf.core.config import ConfigurationError, SyncConfig
from readershelf.core.content import readable_name
from readershelf.core.sync import sync_device

console = Console()


class ConsoleReporter:
    """SyncReporter that prints progress lines with Rich."""

    def __init__(self, out: Console) -> None:
        self._out = out

    def phase(self, name: str) -> None:
        self._out.print(f"[bold]\\[{escape(readable_name(name))}][/bold]")

    def file(self, name: str, destination: PurePath) -> None:
        self._out.print(f" -> {readable_name(name)}", markup=False, highlight=False)
        self._out.print(f" => {destination.as_posix()}", markup=False, highlight=False)

    def outcome(self, copied: bool) -> None:
        if copied:
            self._out.print(" => [bold white on blue]copied.[/bold white on blue]")
        else:
            self._out.print(" => [on red]skipped.[/on red]")


@click.command("sync")
@body_option
@sd_option
@click.option(
    "--sub",
    "sub_directory",
    type=click.Path(path_type=Path),
    envvar="READERSHELF_SUB",
    default=None,
    help="Relative directory on the device to place all books under.",
)
@click.option(
    "--body-source",
    type=click.Path(exists=True, file_okay=False, path_type=Path),
    envvar="READERSHELF_BODY_SOURCE",
    default=None,
    help="Folder of shelf directories to sync onto internal storage.",
)
@click.option(
    "--sd-source",
    type=click.Path(exists=True, file_okay=False, path_type=Path),
    envvar="READERSHELF_SD_SOURCE",
    default=None,
    help="Folder of shelf directories to sync onto the SD card.",
)
@click.pass_context
def sync(
    ctx: click.Context,
    body_root: Path | None,
    sd_root: Path | None,
    sub_directory: Path | None,
    body_source: Path | None,
    sd_source: Path | None,
) -> None:
    """Copy books from shelf folders onto the reader and put them on shelves."""
    config = SyncConfig(
        body_root=body_root,
        body_source=body_source,
        sd_root=sd_root,
        sd_source=sd_source,
        sub_directory=sub_directory or Path(),
    )

    try:
        result = sync_device(config, ConsoleReporter(console))
    except ConfigurationError as exc:
        console.print(f"[red]{escape(readable_name(str(exc)))}[/red]")
        click.echo(ctx.get_help())
        raise SystemExit(2) from exc
    except (OSError, sqlite3.Error) as exc:
        console.print(f"[red]Error:[/red] {escape(readable_name(str(exc)))}")
        raise SystemExit(1) from exc

    console.print(f"\n[green]{result.summary}[/green]")
