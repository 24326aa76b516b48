"""Value types shared by the reader, walker and copy engine."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from datetime import datetime
from typing import Callable, Sequence, Union

from ._paths import normalize_exts

#: A path predicate: a compiled regex (``search`` semantics), a regex
#: source string, or any ``str -> bool`` callable.
Pattern = Union[re.Pattern, str, Callable[[str], bool]]


@dataclass(frozen=True, slots=True)
class FileInfo:
    """Uniform stat result.

    Exactly one of *is_file* / *is_directory* is true for a resolved
    node.  For an unresolved symlink (``lstat``) *is_symlink* is true
    and the other two describe the link itself (both false).

    POSIX-only fields are ``None`` on hosts that cannot report them;
    they are never omitted, so ``None`` means "unsupported" and ``0``
    means zero.

    Attributes:
        is_file: Regular file.
        is_directory: Directory.
        is_symlink: Symbolic link (only for ``lstat``).
        size: Size in bytes.
        mtime: Last modification time (UTC), or ``None``.
        atime: Last access time (UTC), or ``None``.
        birthtime: Creation time (UTC), or ``None`` where unsupported.
    """

    is_file: bool
    is_directory: bool
    is_symlink: bool
    size: int
    mtime: datetime | None
    atime: datetime | None
    birthtime: datetime | None
    dev: int | None
    ino: int | None
    mode: int | None
    nlink: int | None
    uid: int | None
    gid: int | None
    rdev: int | None
    blksize: int | None
    blocks: int | None
    is_block_device: bool | None
    is_char_device: bool | None
    is_fifo: bool | None
    is_socket: bool | None

    def to_dict(self) -> dict:
        """Return a JSON-friendly dict (timestamps as ISO 8601 strings)."""
        result = {}
        for name in self.__dataclass_fields__:
            value = getattr(self, name)
            if isinstance(value, datetime):
                value = value.isoformat()
            result[name] = value
        return result


@dataclass(frozen=True, slots=True)
class DirEntry:
    """One row of a directory listing.

    *name* is the base name only.  The type flags describe the entry
    itself; a symlink is never followed.
    """

    name: str
    is_file: bool
    is_directory: bool
    is_symlink: bool


@dataclass(frozen=True, slots=True)
class WalkEntry:
    """A :class:`DirEntry` plus its absolute *path*.

    *is_main_dir* is ``True`` only for the walk's own root.
    """

    path: str
    name: str
    is_file: bool
    is_directory: bool
    is_symlink: bool
    is_main_dir: bool = False


@dataclass(frozen=True)
class WalkOptions:
    """Options for :func:`~portafs.walk`.

    Attributes:
        max_depth: Deepest level to yield (root is depth 0); ``None``
            means unbounded.
        include_files: Yield non-directory entries.
        include_dirs: Yield directories (including the root).
        include_symlinks: Yield symlinks that are not followed.
        follow_symlinks: Resolve symlinks and traverse into their targets.
        canonicalize: Report followed links by their real path rather than
            the path through the link.  Defaults to ``True``; only
            meaningful together with *follow_symlinks*.
        exts: Suffix allow-list; a missing leading ``.`` is added.
        match: Only yield paths matching at least one pattern.
        skip: Never yield, nor descend into, paths matching any pattern.
    """

    max_depth: int | None = None
    include_files: bool = True
    include_dirs: bool = True
    include_symlinks: bool = True
    follow_symlinks: bool = False
    canonicalize: bool = True
    exts: Sequence[str] | None = None
    match: Sequence[Pattern] | None = None
    skip: Sequence[Pattern] | None = None
    _match: tuple[Callable[[str], bool], ...] = field(
        init=False, repr=False, compare=False, default=())
    _skip: tuple[Callable[[str], bool], ...] = field(
        init=False, repr=False, compare=False, default=())

    def __post_init__(self) -> None:
        if self.exts is not None:
            object.__setattr__(self, "exts", tuple(normalize_exts(self.exts)))
        object.__setattr__(self, "_match", tuple(_predicate(p) for p in self.match or ()))
        object.__setattr__(self, "_skip", tuple(_predicate(p) for p in self.skip or ()))

    def includes(self, path: str) -> bool:
        """True if *path* passes the *exts*, *match* and *skip* filters."""
        if self.exts is not None and not any(path.endswith(ext) for ext in self.exts):
            return False
        if self._match and not any(pred(path) for pred in self._match):
            return False
        return not self.skips(path)

    def skips(self, path: str) -> bool:
        """True if any *skip* pattern matches *path*."""
        return any(pred(path) for pred in self._skip)

    def descends(self, depth: int) -> bool:
        """True if directories at *depth* are read."""
        return self.max_depth is None or depth < self.max_depth


@dataclass(frozen=True)
class CopyOptions:
    """Options for :func:`~portafs.copy`.

    Attributes:
        overwrite: Replace existing destination entries instead of
            failing with :class:`~portafs.exceptions.AlreadyExists`.
        preserve_timestamps: Copy access and modification times from
            the source onto each copied node.
    """

    overwrite: bool = False
    preserve_timestamps: bool = False


def _predicate(pattern: Pattern) -> Callable[[str], bool]:
    if isinstance(pattern, str):
        pattern = re.compile(pattern)
    if isinstance(pattern, re.Pattern):
        return lambda path, _rx=pattern: _rx.search(path) is not None
    if callable(pattern):
        return pattern
    raise TypeError(f"Unsupported pattern type: {type(pattern).__name__}")
