"""Lazy directory listing."""

from __future__ import annotations

import os
from typing import AsyncIterator, Iterator

from ._aio import AsyncFs
from ._host import NativeFs, default_host
from ._metadata import MetadataMapper
from ._paths import to_path_string
from .exceptions import classified
from .types import DirEntry


def read_dir(path: str | os.PathLike[str], *, host: NativeFs | None = None) -> Iterator[DirEntry]:
    """Yield the immediate children of *path* as :class:`DirEntry` values.

    One native read per entry; stopping early leaves the rest unread.
    Order is whatever the host filesystem returns.

    Raises:
        NotFound: If *path* does not exist.
        FsError: If *path* is not a directory (classified ``ENOTDIR``).
    """
    fs = host or default_host()
    mapper = MetadataMapper(fs.capabilities)
    handle = fs.opendir(to_path_string(path))
    try:
        while True:
            entry = fs.readdir(handle)
            if entry is None:
                return
            with classified():
                dirent = mapper.to_dir_entry(entry)
            yield dirent
    finally:
        fs.closedir(handle)


async def read_dir_async(
    path: str | os.PathLike[str], *, host: NativeFs | None = None,
) -> AsyncIterator[DirEntry]:
    """Asynchronous :func:`read_dir`; each step awaits one native read."""
    afs = AsyncFs(host or default_host())
    mapper = MetadataMapper(afs.capabilities)
    handle = await afs.opendir(to_path_string(path))
    try:
        while True:
            entry = await afs.readdir(handle)
            if entry is None:
                return
            with classified():
                dirent = mapper.to_dir_entry(entry)
            yield dirent
    finally:
        afs.closedir(handle)
