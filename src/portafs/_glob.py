"""Dotfile-aware glob predicates for ``match`` / ``skip``."""

from __future__ import annotations

import os
from fnmatch import fnmatchcase as _fnmatch
from typing import Callable


def _glob_match(pattern: str, name: str) -> bool:
    """Match *name* against a glob *pattern* segment.

    ``*`` and ``?`` do not match a leading ``.`` unless the pattern itself
    starts with ``.`` (Unix/rsync convention).
    """
    if not pattern.startswith(".") and name.startswith("."):
        return False
    return _fnmatch(name, pattern)


def glob_predicate(pattern: str) -> Callable[[str], bool]:
    """Build a path predicate from a glob *pattern*.

    Without a ``/`` the pattern is matched against the base name only
    (``*.py``).  With one, it is matched segment by segment against the
    trailing segments of the path (``src/*.py``).
    """
    segments = pattern.strip("/").split("/")

    def predicate(path: str) -> bool:
        parts = path.replace(os.sep, "/").rstrip("/").split("/")
        if len(parts) < len(segments):
            return False
        tail = parts[len(parts) - len(segments):]
        return all(_glob_match(seg, name) for seg, name in zip(segments, tail))

    return predicate
