# ABOUTME: Shared Click options for readershelf CLI commands.
# ABOUTME: Provides reusable decorators for device and source root flags.

from pathlib import Path

import click

body_option = click.option(
    "--body",
    "body_root",
    type=click.Path(exists=True, file_okay=False, path_type=Path),
    envvar="READERSHELF_BODY",
    default=None,
    help="Mount point of the reader's internal storage (holds the catalog).",
)

sd_option = click.option(
    "--sd",
    "sd_root",
    type=click.Path(exists=True, file_okay=False, path_type=Path),
    envvar="READERSHELF_SD",
    default=None,
    help="Mount point of the reader's SD card.",
)
