"""Suspending wrappers around :class:`~portafs._host.NativeFs`.

Every primitive runs in the event loop's default executor, so each
``await`` is one native call and a cancellation takes effect before
the next one starts.
"""

from __future__ import annotations

import asyncio
import functools
import os

from ._host import NativeFs


class AsyncFs:
    """Awaitable view of a :class:`NativeFs`."""

    def __init__(self, fs: NativeFs) -> None:
        self.fs = fs
        self.capabilities = fs.capabilities

    async def _call(self, func, *args, **kwargs):
        loop = asyncio.get_running_loop()
        return await loop.run_in_executor(None, functools.partial(func, *args, **kwargs))

    async def stat(self, path: str) -> os.stat_result:
        return await self._call(self.fs.stat, path)

    async def lstat(self, path: str) -> os.stat_result:
        return await self._call(self.fs.lstat, path)

    async def realpath(self, path: str) -> str:
        return await self._call(self.fs.realpath, path)

    async def readlink(self, path: str) -> str:
        return await self._call(self.fs.readlink, path)

    async def opendir(self, path: str):
        return await self._call(self.fs.opendir, path)

    async def readdir(self, handle) -> os.DirEntry | None:
        return await self._call(self.fs.readdir, handle)

    def closedir(self, handle) -> None:
        # Closing never blocks; safe to do inline from a finally block.
        self.fs.closedir(handle)

    async def makedirs(self, path: str) -> None:
        await self._call(self.fs.makedirs, path)

    async def copyfile(self, src: str, dest: str) -> None:
        await self._call(self.fs.copyfile, src, dest)

    async def symlink(self, target: str, path: str, *, target_is_directory: bool = False) -> None:
        await self._call(self.fs.symlink, target, path,
                         target_is_directory=target_is_directory)

    async def utime(self, path: str, ns: tuple[int, int], *, follow_symlinks: bool = True) -> None:
        await self._call(self.fs.utime, path, ns, follow_symlinks=follow_symlinks)

    async def unlink(self, path: str) -> None:
        await self._call(self.fs.unlink, path)

    async def rmtree(self, path: str) -> None:
        await self._call(self.fs.rmtree, path)
