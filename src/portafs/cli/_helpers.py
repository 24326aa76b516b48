"""Shared helpers, option decorators, and the main CLI group."""

from __future__ import annotations

import logging
import re
from contextlib import contextmanager

import click

from ..exceptions import FsError, InvalidOperationError


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def _status(ctx, msg):
    """Emit a status message to stderr when verbose mode (-v) is on."""
    if ctx.obj.get("verbose"):
        click.echo(msg, err=True)


@contextmanager
def _cli_errors():
    """Turn library errors into a clean ``click.ClickException``."""
    try:
        yield
    except InvalidOperationError as exc:
        raise click.ClickException(str(exc))
    except FsError as exc:
        raise click.ClickException(f"{exc.kind}: {exc}")
    except re.error as exc:
        raise click.ClickException(f"Invalid pattern: {exc}")
    except ValueError as exc:
        raise click.ClickException(str(exc))


def _format_option(f):
    """Shared --format option for listing commands."""
    return click.option(
        "--format", "fmt", type=click.Choice(["text", "json", "jsonl"]),
        default="text", show_default=True, help="Output format.",
    )(f)


# ---------------------------------------------------------------------------
# Main group
# ---------------------------------------------------------------------------

@click.group()
@click.option("-v", "--verbose", is_flag=True, envvar="PORTAFS_VERBOSE",
              help="Verbose output on stderr (or set PORTAFS_VERBOSE=1).")
@click.pass_context
def main(ctx, verbose):
    """portafs: walk, copy, and empty directory trees.

    \b
    Quick start:
      portafs walk src --ext py
      portafs cp src backup --overwrite
      portafs empty-dir build

    \b
    Commands:
      walk            Recursively list a tree with filters
      ls / stat       List one directory or describe one path
      cp              Copy a file, symlink, or directory tree
      empty-dir       Delete a directory's contents (or create it)
    """
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose
    if verbose:
        logging.basicConfig(
            level=logging.DEBUG,
            format="%(levelname)s %(name)s: %(message)s",
        )
