"""Map native stat results and directory entries onto portafs values."""

from __future__ import annotations

import os
import stat as _stat
from datetime import datetime, timezone

from ._host import Capabilities
from .types import DirEntry, FileInfo


def _timestamp(ns: int | None) -> datetime | None:
    if ns is None:
        return None
    seconds, rem = divmod(ns, 1_000_000_000)
    return datetime.fromtimestamp(seconds, tz=timezone.utc).replace(microsecond=rem // 1000)


class MetadataMapper:
    """Pure conversions, parameterized by the host's :class:`Capabilities`."""

    def __init__(self, capabilities: Capabilities) -> None:
        self.capabilities = capabilities

    def to_file_info(self, st: os.stat_result) -> FileInfo:
        posix = self.capabilities.posix_fields
        mode = st.st_mode

        def posix_only(value):
            return value if posix else None

        birth = getattr(st, "st_birthtime_ns", None)
        if birth is None and getattr(st, "st_birthtime", None) is not None:
            birth = int(st.st_birthtime * 1_000_000_000)

        return FileInfo(
            is_file=_stat.S_ISREG(mode),
            is_directory=_stat.S_ISDIR(mode),
            is_symlink=_stat.S_ISLNK(mode),
            size=st.st_size,
            mtime=_timestamp(st.st_mtime_ns),
            atime=_timestamp(st.st_atime_ns),
            birthtime=_timestamp(birth),
            dev=st.st_dev,
            ino=posix_only(st.st_ino),
            mode=posix_only(mode),
            nlink=posix_only(st.st_nlink),
            uid=posix_only(st.st_uid),
            gid=posix_only(st.st_gid),
            rdev=posix_only(getattr(st, "st_rdev", None)),
            blksize=posix_only(getattr(st, "st_blksize", None)),
            blocks=posix_only(getattr(st, "st_blocks", None)),
            is_block_device=posix_only(_stat.S_ISBLK(mode)),
            is_char_device=posix_only(_stat.S_ISCHR(mode)),
            is_fifo=posix_only(_stat.S_ISFIFO(mode)),
            is_socket=posix_only(_stat.S_ISSOCK(mode)),
        )

    def to_dir_entry(self, entry: os.DirEntry) -> DirEntry:
        return DirEntry(
            name=entry.name,
            is_file=entry.is_file(follow_symlinks=False),
            is_directory=entry.is_dir(follow_symlinks=False),
            is_symlink=entry.is_symlink(),
        )
