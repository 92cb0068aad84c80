# ABOUTME: CLI package for readershelf, built on Click.
# ABOUTME: Defines the root command group, configures logging, and registers subcommands.

import logging

import click

from readershelf.cli.commands import shelves_cmd, sync_cmd

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s - %(message)s"


@click.group()
@click.version_option(package_name="readershelf")
@click.option(
    "-v", "--verbose",
    is_flag=True,
    default=False,
    help="Log catalog and copy decisions.",
)
def cli(verbose: bool) -> None:
    """readershelf - sync e-book folders onto a Sony Reader as shelves."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format=LOG_FORMAT,
    )


cli.add_command(sync_cmd.sync)
cli.add_command(shelves_cmd.shelves)
