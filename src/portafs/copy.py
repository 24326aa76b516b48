"""Recursive copy of files, symlinks and directory trees.

The copy is additive: entries already in *dest* that are not in *src*
are left alone.  It is not transactional; when a child fails, whatever
was copied before it stays in place and the classified error
propagates unchanged.

Checks made before anything is written:

- *src* and *dest* resolve to the same path.
- *dest* lies inside the directory *src*.
- *src* is a directory and *dest* exists as a non-directory.
- *dest* exists and ``overwrite`` is off (:class:`AlreadyExists`).
"""

from __future__ import annotations

import dataclasses
import logging
import os

from ._aio import AsyncFs
from ._host import NativeFs, default_host
from ._metadata import MetadataMapper
from ._paths import is_subdir, resolve
from .exceptions import AlreadyExists, InvalidOperationError, NotFound
from .readdir import read_dir, read_dir_async
from .types import CopyOptions, FileInfo

logger = logging.getLogger(__name__)

__all__ = ["copy", "copy_async"]


def _options(options: CopyOptions | None, overrides: dict) -> CopyOptions:
    if options is None:
        return CopyOptions(**overrides)
    if overrides:
        return dataclasses.replace(options, **overrides)
    return options


def _resolve_pair(src, dest) -> tuple[str, str]:
    src = resolve(src)
    dest = resolve(dest)
    if os.path.normcase(src) == os.path.normcase(dest):
        raise InvalidOperationError("Source and destination cannot be the same.", src, dest)
    return src, dest


def _check_subdir(src: str, dest: str, src_info: FileInfo) -> None:
    if src_info.is_directory and is_subdir(os.path.normcase(src), os.path.normcase(dest)):
        raise InvalidOperationError(
            f"Cannot copy '{src}' to a subdirectory of itself, '{dest}'.", src, dest)


def _check_dest(src: str, dest: str, dest_info: FileInfo | None,
                opts: CopyOptions, *, is_folder: bool = False) -> None:
    """Validate an existing *dest* against the copy policy."""
    if dest_info is None:
        return
    if is_folder and not dest_info.is_directory:
        raise InvalidOperationError(
            f"Cannot overwrite non-directory '{dest}' with directory '{src}'.", src, dest)
    if not opts.overwrite:
        raise AlreadyExists(f"'{dest}' already exists.")
    if not is_folder and dest_info.is_directory:
        raise InvalidOperationError(
            f"Cannot overwrite directory '{dest}' with non-directory '{src}'.", src, dest)


def _times(st: os.stat_result) -> tuple[int, int]:
    return st.st_atime_ns, st.st_mtime_ns


def _skip_special(src: str) -> None:
    logger.warning("Skipping %s: not a file, directory or symlink", src)


# ---------------------------------------------------------------------------
# Blocking
# ---------------------------------------------------------------------------

def copy(
    src: str | os.PathLike[str],
    dest: str | os.PathLike[str],
    options: CopyOptions | None = None,
    *,
    host: NativeFs | None = None,
    **kwargs,
) -> None:
    """Copy the file, symlink or directory tree at *src* to *dest*.

    Options come from *options* and/or ``overwrite=`` /
    ``preserve_timestamps=`` keywords.

    Raises:
        InvalidOperationError: On a self-copy, a copy into the source's
            own subtree, or a directory/non-directory clash.
        AlreadyExists: If *dest* exists and ``overwrite`` is off.
        NotFound: If *src* does not exist.
    """
    opts = _options(options, kwargs)
    fs = host or default_host()
    mapper = MetadataMapper(fs.capabilities)

    src, dest = _resolve_pair(src, dest)
    src_info = mapper.to_file_info(fs.lstat(src))
    _check_subdir(src, dest, src_info)

    if src_info.is_symlink:
        _copy_symlink(fs, mapper, src, dest, opts)
    elif src_info.is_directory:
        _copy_dir(fs, mapper, src, dest, opts)
    elif src_info.is_file:
        _copy_file(fs, mapper, src, dest, opts)
    else:
        _skip_special(src)


def _lstat_or_none(fs: NativeFs, mapper: MetadataMapper, path: str) -> FileInfo | None:
    try:
        return mapper.to_file_info(fs.lstat(path))
    except NotFound:
        return None


def _copy_file(fs: NativeFs, mapper: MetadataMapper, src: str, dest: str,
               opts: CopyOptions) -> None:
    dest_info = _lstat_or_none(fs, mapper, dest)
    _check_dest(src, dest, dest_info, opts)
    if dest_info is not None and dest_info.is_symlink:
        # Replace the link itself, not the file it points to
        fs.unlink(dest)
    logger.debug("copy file %s -> %s", src, dest)
    fs.copyfile(src, dest)
    if opts.preserve_timestamps:
        fs.utime(dest, _times(fs.stat(src)))


def _copy_symlink(fs: NativeFs, mapper: MetadataMapper, src: str, dest: str,
                  opts: CopyOptions) -> None:
    dest_info = _lstat_or_none(fs, mapper, dest)
    _check_dest(src, dest, dest_info, opts)
    if dest_info is not None:
        fs.unlink(dest)
    target = fs.readlink(src)
    is_dir = False
    if fs.capabilities.symlink_needs_type:
        try:
            is_dir = mapper.to_file_info(fs.stat(src)).is_directory
        except NotFound:
            pass  # dangling link
    logger.debug("copy symlink %s -> %s (%s)", src, dest, target)
    fs.symlink(target, dest, target_is_directory=is_dir)
    if opts.preserve_timestamps and fs.capabilities.utime_no_follow:
        fs.utime(dest, _times(fs.lstat(src)), follow_symlinks=False)


def _copy_dir(fs: NativeFs, mapper: MetadataMapper, src: str, dest: str,
              opts: CopyOptions) -> None:
    dest_info = _lstat_or_none(fs, mapper, dest)
    _check_dest(src, dest, dest_info, opts, is_folder=True)
    if dest_info is None:
        logger.debug("create directory %s", dest)
        fs.makedirs(dest)

    for dirent in read_dir(src, host=fs):
        child_src = os.path.join(src, dirent.name)
        child_dest = os.path.join(dest, dirent.name)
        if dirent.is_symlink:
            _copy_symlink(fs, mapper, child_src, child_dest, opts)
        elif dirent.is_directory:
            _copy_dir(fs, mapper, child_src, child_dest, opts)
        elif dirent.is_file:
            _copy_file(fs, mapper, child_src, child_dest, opts)
        else:
            _skip_special(child_src)

    # After the children, which would otherwise bump the mtime again
    if opts.preserve_timestamps:
        fs.utime(dest, _times(fs.stat(src)))


# ---------------------------------------------------------------------------
# Suspending
# ---------------------------------------------------------------------------

async def copy_async(
    src: str | os.PathLike[str],
    dest: str | os.PathLike[str],
    options: CopyOptions | None = None,
    *,
    host: NativeFs | None = None,
    **kwargs,
) -> None:
    """Asynchronous :func:`copy`; every native call is awaited in an executor."""
    opts = _options(options, kwargs)
    afs = AsyncFs(host or default_host())
    mapper = MetadataMapper(afs.capabilities)

    src, dest = _resolve_pair(src, dest)
    src_info = mapper.to_file_info(await afs.lstat(src))
    _check_subdir(src, dest, src_info)

    if src_info.is_symlink:
        await _copy_symlink_async(afs, mapper, src, dest, opts)
    elif src_info.is_directory:
        await _copy_dir_async(afs, mapper, src, dest, opts)
    elif src_info.is_file:
        await _copy_file_async(afs, mapper, src, dest, opts)
    else:
        _skip_special(src)


async def _lstat_or_none_async(afs: AsyncFs, mapper: MetadataMapper, path: str) -> FileInfo | None:
    try:
        return mapper.to_file_info(await afs.lstat(path))
    except NotFound:
        return None


async def _copy_file_async(afs: AsyncFs, mapper: MetadataMapper, src: str, dest: str,
                           opts: CopyOptions) -> None:
    dest_info = await _lstat_or_none_async(afs, mapper, dest)
    _check_dest(src, dest, dest_info, opts)
    if dest_info is not None and dest_info.is_symlink:
        await afs.unlink(dest)
    logger.debug("copy file %s -> %s", src, dest)
    await afs.copyfile(src, dest)
    if opts.preserve_timestamps:
        await afs.utime(dest, _times(await afs.stat(src)))


async def _copy_symlink_async(afs: AsyncFs, mapper: MetadataMapper, src: str, dest: str,
                              opts: CopyOptions) -> None:
    dest_info = await _lstat_or_none_async(afs, mapper, dest)
    _check_dest(src, dest, dest_info, opts)
    if dest_info is not None:
        await afs.unlink(dest)
    target = await afs.readlink(src)
    is_dir = False
    if afs.capabilities.symlink_needs_type:
        try:
            is_dir = mapper.to_file_info(await afs.stat(src)).is_directory
        except NotFound:
            pass  # dangling link
    logger.debug("copy symlink %s -> %s (%s)", src, dest, target)
    await afs.symlink(target, dest, target_is_directory=is_dir)
    if opts.preserve_timestamps and afs.capabilities.utime_no_follow:
        await afs.utime(dest, _times(await afs.lstat(src)), follow_symlinks=False)


async def _copy_dir_async(afs: AsyncFs, mapper: MetadataMapper, src: str, dest: str,
                          opts: CopyOptions) -> None:
    dest_info = await _lstat_or_none_async(afs, mapper, dest)
    _check_dest(src, dest, dest_info, opts, is_folder=True)
    if dest_info is None:
        logger.debug("create directory %s", dest)
        await afs.makedirs(dest)

    async for dirent in read_dir_async(src, host=afs.fs):
        child_src = os.path.join(src, dirent.name)
        child_dest = os.path.join(dest, dirent.name)
        if dirent.is_symlink:
            await _copy_symlink_async(afs, mapper, child_src, child_dest, opts)
        elif dirent.is_directory:
            await _copy_dir_async(afs, mapper, child_src, child_dest, opts)
        elif dirent.is_file:
            await _copy_file_async(afs, mapper, child_src, child_dest, opts)
        else:
            _skip_special(child_src)

    if opts.preserve_timestamps:
        await afs.utime(dest, _times(await afs.stat(src)))
