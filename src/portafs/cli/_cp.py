"""The cp command."""

from __future__ import annotations

import click

from ..copy import copy
from ..types import CopyOptions
from ._helpers import main, _cli_errors, _status


@main.command()
@click.argument("src", type=click.Path())
@click.argument("dest", type=click.Path())
@click.option("--overwrite", "-f", is_flag=True, default=False, envvar="PORTAFS_OVERWRITE",
              help="Replace existing destination entries (or set PORTAFS_OVERWRITE=1).")
@click.option("--preserve-timestamps", "-p", is_flag=True, default=False,
              help="Copy access and modification times from the source.")
@click.pass_context
def cp(ctx, src, dest, overwrite, preserve_timestamps):
    """Copy SRC to DEST.

    Directories are copied recursively and merged into an existing DEST
    (with --overwrite); symlinks are recreated, not followed.

    \b
    Examples:
        portafs cp notes.txt backup/notes.txt
        portafs cp src/ /tmp/src-copy
        portafs cp -f -p src /tmp/src-copy
    """
    opts = CopyOptions(overwrite=overwrite, preserve_timestamps=preserve_timestamps)
    with _cli_errors():
        copy(src, dest, opts)
    _status(ctx, f"Copied {src} -> {dest}")
