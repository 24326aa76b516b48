"""stat / lstat returning :class:`~portafs.types.FileInfo`."""

from __future__ import annotations

import os

from ._aio import AsyncFs
from ._host import NativeFs, default_host
from ._metadata import MetadataMapper
from ._paths import to_path_string
from .types import FileInfo


def stat(path: str | os.PathLike[str], *, host: NativeFs | None = None) -> FileInfo:
    """Return :class:`FileInfo` for *path*, following symlinks."""
    fs = host or default_host()
    return MetadataMapper(fs.capabilities).to_file_info(fs.stat(to_path_string(path)))


def lstat(path: str | os.PathLike[str], *, host: NativeFs | None = None) -> FileInfo:
    """Return :class:`FileInfo` for *path* itself, without following a symlink."""
    fs = host or default_host()
    return MetadataMapper(fs.capabilities).to_file_info(fs.lstat(to_path_string(path)))


async def stat_async(path: str | os.PathLike[str], *, host: NativeFs | None = None) -> FileInfo:
    afs = AsyncFs(host or default_host())
    st = await afs.stat(to_path_string(path))
    return MetadataMapper(afs.capabilities).to_file_info(st)


async def lstat_async(path: str | os.PathLike[str], *, host: NativeFs | None = None) -> FileInfo:
    afs = AsyncFs(host or default_host())
    st = await afs.lstat(to_path_string(path))
    return MetadataMapper(afs.capabilities).to_file_info(st)
