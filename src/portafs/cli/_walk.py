"""The walk and ls commands."""

from __future__ import annotations

import dataclasses
import json

import click

from .._exclude import ExcludeFilter
from .._glob import glob_predicate
from ..readdir import read_dir
from ..types import WalkOptions
from ..walk import walk as walk_tree
from ._helpers import main, _cli_errors, _format_option, _status


def _type_marker(entry) -> str:
    if entry.is_symlink:
        return "@"
    if entry.is_directory:
        return "/"
    return ""


def _entry_dict(entry) -> dict:
    return dataclasses.asdict(entry)


# ---------------------------------------------------------------------------
# walk
# ---------------------------------------------------------------------------

@main.command()
@click.argument("root", type=click.Path())
@click.option("--max-depth", type=int, default=None,
              help="Deepest level to list (the root is depth 0).")
@click.option("--no-files", is_flag=True, default=False, help="Do not list files.")
@click.option("--no-dirs", is_flag=True, default=False, help="Do not list directories.")
@click.option("--no-symlinks", is_flag=True, default=False,
              help="Do not list symlinks that are not followed.")
@click.option("--follow-symlinks", "-L", is_flag=True, default=False,
              help="Traverse into symlink targets.")
@click.option("--no-canonicalize", is_flag=True, default=False,
              help="Report followed links by the path through the link.")
@click.option("--ext", "exts", multiple=True,
              help="Only list paths with this extension (repeatable).")
@click.option("--match", "match", multiple=True,
              help="Only list paths matching this regex (repeatable).")
@click.option("--skip", "skip", multiple=True,
              help="Skip paths matching this regex (repeatable).")
@click.option("--glob", "globs", multiple=True,
              help="Only list paths matching this glob (repeatable).")
@click.option("--exclude", multiple=True,
              help="Exclude paths matching pattern (gitignore syntax, repeatable).")
@click.option("--exclude-from", "exclude_from", type=click.Path(exists=True),
              help="Read exclude patterns from file.")
@click.option("--gitignore", is_flag=True, default=False,
              help="Honor .gitignore files found in the tree.")
@_format_option
@click.pass_context
def walk(ctx, root, max_depth, no_files, no_dirs, no_symlinks, follow_symlinks,
         no_canonicalize, exts, match, skip, globs, exclude, exclude_from,
         gitignore, fmt):
    """Recursively list ROOT, a directory before its contents.

    \b
    Examples:
        portafs walk src --ext py
        portafs walk . --skip '\\.git$' --max-depth 2
        portafs walk . --gitignore --no-dirs
        portafs walk . -L --no-canonicalize
    """
    skip = list(skip)
    excl = ExcludeFilter(root, patterns=exclude, exclude_from=exclude_from,
                         gitignore=gitignore)
    if excl.active:
        skip.append(excl)
    match = list(match) + [glob_predicate(g) for g in globs]

    entries = []
    with _cli_errors():
        opts = WalkOptions(
            max_depth=max_depth,
            include_files=not no_files,
            include_dirs=not no_dirs,
            include_symlinks=not no_symlinks,
            follow_symlinks=follow_symlinks,
            canonicalize=not no_canonicalize,
            exts=exts or None,
            match=match or None,
            skip=skip or None,
        )
        for entry in walk_tree(root, opts):
            if fmt == "text":
                click.echo(entry.path)
            elif fmt == "jsonl":
                click.echo(json.dumps(_entry_dict(entry)))
            else:
                entries.append(_entry_dict(entry))
    if fmt == "json":
        click.echo(json.dumps(entries))
    _status(ctx, f"Walked {root}")


# ---------------------------------------------------------------------------
# ls
# ---------------------------------------------------------------------------

@main.command()
@click.argument("path", type=click.Path(), default=".")
@_format_option
def ls(path, fmt):
    """List the immediate children of PATH (default: current directory).

    Directories end with '/', symlinks with '@'.  Entries are shown in
    the order the filesystem returns them.
    """
    with _cli_errors():
        entries = list(read_dir(path))
    if fmt == "text":
        for e in entries:
            click.echo(e.name + _type_marker(e))
    elif fmt == "json":
        click.echo(json.dumps([_entry_dict(e) for e in entries]))
    else:
        for e in entries:
            click.echo(json.dumps(_entry_dict(e)))
