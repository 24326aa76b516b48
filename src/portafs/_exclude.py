"""Gitignore-syntax exclude filters for :func:`~portafs.walk`.

Combines ``--exclude`` patterns, ``--exclude-from`` files, and
automatic ``.gitignore`` loading into a single predicate.  An instance
is callable with an absolute path, so it can be passed straight to
``walk(..., skip=[filt])``; a skipped directory is not descended into.

Pattern syntax follows gitignore rules (implemented by
``dulwich.ignore.IgnoreFilter``).
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Sequence

from dulwich.ignore import IgnoreFilter

from ._host import NativeFs, default_host
from ._metadata import MetadataMapper
from ._paths import resolve
from .exceptions import NotFound
from .types import FileInfo


class ExcludeFilter:
    """Combines exclude patterns, an exclude file, and .gitignore files.

    Paths are matched relative to *root*; anything outside *root*
    (for example a canonicalized symlink target) is never excluded.
    Directory and .gitignore lookups go through *host*.
    """

    def __init__(
        self,
        root: str | os.PathLike[str],
        *,
        patterns: Sequence[str] | None = None,
        exclude_from: str | os.PathLike[str] | None = None,
        gitignore: bool = False,
        host: NativeFs | None = None,
    ) -> None:
        self.root = resolve(root)
        self._fs = host or default_host()
        self._mapper = MetadataMapper(self._fs.capabilities)
        base_lines: list[bytes] = []
        for p in patterns or ():
            base_lines.append(p.encode("utf-8"))
        if exclude_from is not None:
            for raw in Path(exclude_from).read_bytes().splitlines():
                line = raw.strip()
                if line and not line.startswith(b"#"):
                    base_lines.append(line)
        self._base: IgnoreFilter | None = (
            IgnoreFilter(base_lines) if base_lines else None
        )
        self._gitignore = gitignore
        # {rel_dir: IgnoreFilter | None}, loaded lazily per directory
        self._dir_filters: dict[str, IgnoreFilter | None] = {}

    # ------------------------------------------------------------------
    @property
    def active(self) -> bool:
        """True if any filtering is configured."""
        return self._base is not None or self._gitignore

    # ------------------------------------------------------------------
    def __call__(self, path: str) -> bool:
        rel = os.path.relpath(path, self.root).replace(os.sep, "/")
        if rel == "." or rel == ".." or rel.startswith("../"):
            return False
        if self._gitignore:
            parts = rel.split("/")
            for depth in range(len(parts)):
                rel_dir = "/".join(parts[:depth])
                self._enter_directory(rel_dir)
        info = self._stat_or_none(path)
        return self.is_excluded(rel, is_dir=info is not None and info.is_directory)

    def _stat_or_none(self, path: str) -> FileInfo | None:
        try:
            return self._mapper.to_file_info(self._fs.stat(path))
        except NotFound:
            return None

    # ------------------------------------------------------------------
    def _enter_directory(self, rel_dir: str) -> None:
        if rel_dir in self._dir_filters:
            return
        gi = os.path.join(self.root, rel_dir, ".gitignore")
        info = self._stat_or_none(gi)
        if info is not None and info.is_file:
            self._dir_filters[rel_dir] = IgnoreFilter.from_path(gi)
        else:
            self._dir_filters[rel_dir] = None

    # ------------------------------------------------------------------
    def is_excluded(self, rel_path: str, *, is_dir: bool = False) -> bool:
        """Check *rel_path* (``/``-separated, relative to *root*).

        Base patterns are checked first, then the loaded ``.gitignore``
        files from the deepest ancestor up to the root; the first one
        with a verdict (match or negation) decides.
        """
        check = rel_path + "/" if is_dir else rel_path

        if self._base is not None and self._base.is_ignored(check) is True:
            return True

        if not self._gitignore:
            return False

        # .gitignore files themselves are excluded
        if not is_dir and rel_path.rsplit("/", 1)[-1] == ".gitignore":
            return True

        # Each filter checks the path relative to its own directory.
        parts = rel_path.split("/")
        for depth in reversed(range(len(parts))):
            filt = self._dir_filters.get("/".join(parts[:depth]))
            if filt is None:
                continue
            sub = "/".join(parts[depth:])
            result = filt.is_ignored(sub + "/" if is_dir else sub)
            if result is not None:
                return result

        return False
