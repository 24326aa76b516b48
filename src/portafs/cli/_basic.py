"""Basic commands: stat, empty-dir."""

from __future__ import annotations

import json

import click

from ..empty_dir import empty_dir as _empty_dir
from ..fileinfo import lstat, stat as _stat
from ._helpers import main, _cli_errors, _status


# ---------------------------------------------------------------------------
# stat
# ---------------------------------------------------------------------------

@main.command()
@click.argument("path", type=click.Path())
@click.option("--no-follow", is_flag=True, default=False,
              help="Describe a symlink itself rather than its target.")
def stat(path, no_follow):
    """Print PATH's metadata as JSON.

    Fields the host cannot report are printed as null.
    """
    with _cli_errors():
        info = lstat(path) if no_follow else _stat(path)
    click.echo(json.dumps(info.to_dict(), indent=2))


# ---------------------------------------------------------------------------
# empty-dir
# ---------------------------------------------------------------------------

@main.command("empty-dir")
@click.argument("path", type=click.Path())
@click.pass_context
def empty_dir(ctx, path):
    """Delete everything inside PATH, creating it if it does not exist.

    PATH itself is kept.
    """
    with _cli_errors():
        _empty_dir(path)
    _status(ctx, f"Emptied {path}")
