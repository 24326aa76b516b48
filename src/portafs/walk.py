"""Recursive, lazy directory traversal.

:func:`walk` yields a :class:`~portafs.types.WalkEntry` for the root and
then for every node below it, pre-order: a directory comes before its
children.  Sibling order is whatever the host returns.

Symlinks are yielded as leaves unless ``follow_symlinks`` is set.  When
they are followed, the walker keeps the canonical paths of the
directories on the current branch and refuses to descend into a link
that resolves to one of them.  The same real directory can still be
reached (and yielded) more than once through unrelated links.  For a
tree holding ``a/z``, ``b -> a``, ``x`` and ``y -> x``::

    follow + canonicalize   .  a  a/z  a  a/z  x  x
    follow only             .  a  a/z  b  b/z  x  y
    no follow               .  a  a/z  b  x  y
"""

from __future__ import annotations

import dataclasses
import logging
import os
from typing import AsyncIterator, Iterator

from ._aio import AsyncFs
from ._host import NativeFs, default_host
from ._metadata import MetadataMapper
from ._paths import resolve
from .readdir import read_dir, read_dir_async
from .types import DirEntry, FileInfo, WalkEntry, WalkOptions

logger = logging.getLogger(__name__)

__all__ = ["walk", "walk_async"]


def _options(options: WalkOptions | None, overrides: dict) -> WalkOptions:
    if options is None:
        return WalkOptions(**overrides)
    if overrides:
        return dataclasses.replace(options, **overrides)
    return options


def _from_dirent(path: str, dirent: DirEntry) -> WalkEntry:
    return WalkEntry(
        path=path,
        name=dirent.name,
        is_file=dirent.is_file,
        is_directory=dirent.is_directory,
        is_symlink=dirent.is_symlink,
    )


def _from_info(path: str, info: FileInfo, *, is_main_dir: bool = False) -> WalkEntry:
    return WalkEntry(
        path=path,
        name=os.path.basename(path),
        is_file=info.is_file,
        is_directory=info.is_directory,
        is_symlink=info.is_symlink,
        is_main_dir=is_main_dir,
    )


def _wanted(entry: WalkEntry, opts: WalkOptions) -> bool:
    """Type filter plus the *exts* / *match* / *skip* path filters."""
    if entry.is_directory:
        wanted = opts.include_dirs
    elif entry.is_symlink:
        wanted = opts.include_symlinks
    else:
        wanted = opts.include_files
    return wanted and opts.includes(entry.path)


def _should_descend(entry: WalkEntry, real: str, depth: int,
                    ancestors: list[str], opts: WalkOptions) -> bool:
    if not opts.descends(depth) or opts.skips(entry.path):
        return False
    if opts.follow_symlinks and real in ancestors:
        logger.debug("Not descending into %s: %s is an ancestor", entry.path, real)
        return False
    return True


# ---------------------------------------------------------------------------
# Blocking
# ---------------------------------------------------------------------------

def walk(
    root: str | os.PathLike[str],
    options: WalkOptions | None = None,
    *,
    host: NativeFs | None = None,
    **kwargs,
) -> Iterator[WalkEntry]:
    """Walk the tree at *root*, yielding one :class:`WalkEntry` per node.

    Options come from *options* and/or keyword arguments named like the
    :class:`WalkOptions` fields (keywords win).

    Raises:
        NotFound: If *root* does not exist, or a directory disappears
            before it is read.
    """
    opts = _options(options, kwargs)
    if opts.max_depth is not None and opts.max_depth < 0:
        return
    fs = host or default_host()
    mapper = MetadataMapper(fs.capabilities)

    root = resolve(root)
    st = fs.stat(root) if opts.follow_symlinks else fs.lstat(root)
    entry = _from_info(root, mapper.to_file_info(st), is_main_dir=True)
    if _wanted(entry, opts):
        yield entry
    if not entry.is_directory or not opts.descends(0) or opts.skips(root):
        return

    real = fs.realpath(root) if opts.follow_symlinks else root
    yield from _walk_dir(fs, mapper, root, real, 1, [real], opts)


def _walk_dir(fs: NativeFs, mapper: MetadataMapper, dirpath: str, real_dir: str,
              depth: int, ancestors: list[str], opts: WalkOptions) -> Iterator[WalkEntry]:
    for dirent in read_dir(dirpath, host=fs):
        path = os.path.join(dirpath, dirent.name)
        real = os.path.join(real_dir, dirent.name)

        if dirent.is_symlink:
            if not opts.follow_symlinks:
                entry = _from_dirent(path, dirent)
                if _wanted(entry, opts):
                    yield entry
                continue
            real = fs.realpath(path)
            info = mapper.to_file_info(fs.stat(real))
            entry = _from_info(real if opts.canonicalize else path, info)
        else:
            entry = _from_dirent(path, dirent)

        if _wanted(entry, opts):
            yield entry
        if not entry.is_directory:
            continue
        if not _should_descend(entry, real, depth, ancestors, opts):
            continue
        ancestors.append(real)
        try:
            yield from _walk_dir(fs, mapper, entry.path, real, depth + 1, ancestors, opts)
        finally:
            ancestors.pop()


# ---------------------------------------------------------------------------
# Suspending
# ---------------------------------------------------------------------------

async def walk_async(
    root: str | os.PathLike[str],
    options: WalkOptions | None = None,
    *,
    host: NativeFs | None = None,
    **kwargs,
) -> AsyncIterator[WalkEntry]:
    """Asynchronous :func:`walk`; every native call is awaited in an executor."""
    opts = _options(options, kwargs)
    if opts.max_depth is not None and opts.max_depth < 0:
        return
    afs = AsyncFs(host or default_host())
    mapper = MetadataMapper(afs.capabilities)

    root = resolve(root)
    st = await (afs.stat(root) if opts.follow_symlinks else afs.lstat(root))
    entry = _from_info(root, mapper.to_file_info(st), is_main_dir=True)
    if _wanted(entry, opts):
        yield entry
    if not entry.is_directory or not opts.descends(0) or opts.skips(root):
        return

    real = await afs.realpath(root) if opts.follow_symlinks else root
    async for child in _walk_dir_async(afs, mapper, root, real, 1, [real], opts):
        yield child


async def _walk_dir_async(afs: AsyncFs, mapper: MetadataMapper, dirpath: str, real_dir: str,
                          depth: int, ancestors: list[str],
                          opts: WalkOptions) -> AsyncIterator[WalkEntry]:
    async for dirent in read_dir_async(dirpath, host=afs.fs):
        path = os.path.join(dirpath, dirent.name)
        real = os.path.join(real_dir, dirent.name)

        if dirent.is_symlink:
            if not opts.follow_symlinks:
                entry = _from_dirent(path, dirent)
                if _wanted(entry, opts):
                    yield entry
                continue
            real = await afs.realpath(path)
            info = mapper.to_file_info(await afs.stat(real))
            entry = _from_info(real if opts.canonicalize else path, info)
        else:
            entry = _from_dirent(path, dirent)

        if _wanted(entry, opts):
            yield entry
        if not entry.is_directory:
            continue
        if not _should_descend(entry, real, depth, ancestors, opts):
            continue
        ancestors.append(real)
        try:
            async for child in _walk_dir_async(afs, mapper, entry.path, real,
                                               depth + 1, ancestors, opts):
                yield child
        finally:
            ancestors.pop()
