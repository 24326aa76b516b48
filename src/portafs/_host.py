"""Native filesystem primitives, one adapter per host.

Each :class:`NativeFs` method performs exactly one native call and
converts any ``OSError`` into a classified
:class:`~portafs.exceptions.FsError`.  The walker and copy engine only
talk to this interface; the adapter is chosen once, at import time.
"""

from __future__ import annotations

import os
import shutil
from dataclasses import dataclass

from .exceptions import classified


@dataclass(frozen=True, slots=True)
class Capabilities:
    """What the host can report or do.

    Attributes:
        posix_fields: ``mode``, ``uid``, ``gid``, ``ino`` and friends are
            meaningful.
        symlink_needs_type: Creating a symlink requires knowing whether
            the target is a directory.
        utime_no_follow: Timestamps can be set on a symlink itself.
    """

    posix_fields: bool
    symlink_needs_type: bool
    utime_no_follow: bool


class NativeFs:
    """Single-call native primitives with classified errors."""

    capabilities = Capabilities(
        posix_fields=True,
        symlink_needs_type=False,
        utime_no_follow=os.utime in os.supports_follow_symlinks,
    )

    # -- metadata ---------------------------------------------------------

    def stat(self, path: str) -> os.stat_result:
        with classified():
            return os.stat(path)

    def lstat(self, path: str) -> os.stat_result:
        with classified():
            return os.lstat(path)

    def realpath(self, path: str) -> str:
        with classified():
            return os.path.realpath(path, strict=True)

    def readlink(self, path: str) -> str:
        with classified():
            return os.readlink(path)

    # -- directory reading ------------------------------------------------

    def opendir(self, path: str):
        """Open a directory handle; pass it to :meth:`readdir` and :meth:`closedir`."""
        with classified():
            return os.scandir(path)

    def readdir(self, handle) -> os.DirEntry | None:
        """Return the next entry of *handle*, or ``None`` when exhausted."""
        with classified():
            return next(handle, None)

    def closedir(self, handle) -> None:
        handle.close()

    # -- mutation ---------------------------------------------------------

    def makedirs(self, path: str) -> None:
        with classified():
            os.makedirs(path, exist_ok=True)

    def copyfile(self, src: str, dest: str) -> None:
        """Copy bytes and permission bits; timestamps are fresh."""
        with classified():
            shutil.copy(src, dest, follow_symlinks=True)

    def symlink(self, target: str, path: str, *, target_is_directory: bool = False) -> None:
        with classified():
            os.symlink(target, path)

    def utime(self, path: str, ns: tuple[int, int], *, follow_symlinks: bool = True) -> None:
        with classified():
            os.utime(path, ns=ns, follow_symlinks=follow_symlinks)

    def unlink(self, path: str) -> None:
        with classified():
            os.unlink(path)

    def rmtree(self, path: str) -> None:
        with classified():
            shutil.rmtree(path)


class PosixFs(NativeFs):
    """Adapter for Linux, macOS and other POSIX hosts."""


class WindowsFs(NativeFs):
    """Adapter for Windows hosts."""

    capabilities = Capabilities(
        posix_fields=False,
        symlink_needs_type=True,
        utime_no_follow=False,
    )

    def symlink(self, target: str, path: str, *, target_is_directory: bool = False) -> None:
        with classified():
            os.symlink(target, path, target_is_directory=target_is_directory)


def _select_host() -> NativeFs:
    if os.name == "nt":
        return WindowsFs()
    return PosixFs()


_DEFAULT_HOST = _select_host()


def default_host() -> NativeFs:
    """Return the adapter selected for the running host."""
    return _DEFAULT_HOST
