"""Make sure a directory exists and has no children."""

from __future__ import annotations

import logging
import os

from ._aio import AsyncFs
from ._host import NativeFs, default_host
from ._paths import to_path_string
from .exceptions import NotFound
from .readdir import read_dir, read_dir_async

logger = logging.getLogger(__name__)

__all__ = ["empty_dir", "empty_dir_async"]


def empty_dir(path: str | os.PathLike[str], *, host: NativeFs | None = None) -> None:
    """Delete every child of *path*, or create *path* (with parents) if missing.

    The directory itself is kept.  Child symlinks are removed, never
    followed.  Not atomic: a failure leaves some children removed.
    """
    fs = host or default_host()
    path = to_path_string(path)
    try:
        entries = list(read_dir(path, host=fs))
    except NotFound:
        logger.debug("create directory %s", path)
        fs.makedirs(path)
        return
    for entry in entries:
        child = os.path.join(path, entry.name)
        logger.debug("remove %s", child)
        if entry.is_directory:
            fs.rmtree(child)
        else:
            fs.unlink(child)


async def empty_dir_async(path: str | os.PathLike[str], *, host: NativeFs | None = None) -> None:
    """Asynchronous :func:`empty_dir`."""
    afs = AsyncFs(host or default_host())
    path = to_path_string(path)
    try:
        entries = [entry async for entry in read_dir_async(path, host=afs.fs)]
    except NotFound:
        logger.debug("create directory %s", path)
        await afs.makedirs(path)
        return
    for entry in entries:
        child = os.path.join(path, entry.name)
        logger.debug("remove %s", child)
        if entry.is_directory:
            await afs.rmtree(child)
        else:
            await afs.unlink(child)
