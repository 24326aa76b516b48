"""Path normalization shared by every operation."""

from __future__ import annotations

import os
from typing import Iterable
from urllib.parse import unquote, urlparse
from urllib.request import url2pathname


def to_path_string(path: str | os.PathLike[str]) -> str:
    """Return a filesystem path string for *path*.

    Accepts ``str``, any :class:`os.PathLike`, or a ``file://`` URL.  A
    string like ``file:build`` without the ``//`` is a relative file name.

    Raises:
        ValueError: If a ``file://`` URL names a remote host (outside Windows).
    """
    path = os.fspath(path)
    if not isinstance(path, str):
        raise TypeError(f"Expected a str path, got {type(path).__name__}")
    if path.startswith("file://"):
        return from_file_url(path)
    return path


def from_file_url(url: str) -> str:
    """Convert a ``file://`` URL to a local path."""
    parsed = urlparse(url)
    if parsed.scheme != "file":
        raise ValueError(f"Must be a file URL: {url}")
    if parsed.netloc and parsed.netloc != "localhost":
        # UNC share on Windows
        if os.name == "nt":
            return url2pathname(f"//{parsed.netloc}{parsed.path}")
        raise ValueError(f"File URL host must be 'localhost' or empty: {url}")
    if os.name == "nt":
        return url2pathname(parsed.path)
    return unquote(parsed.path)


def resolve(path: str | os.PathLike[str]) -> str:
    """Absolute, normalized form of *path*.  Symlinks are not resolved."""
    return os.path.abspath(to_path_string(path))


def _segments(path: str) -> list[str]:
    drive, rest = os.path.splitdrive(path)
    parts = [p for p in rest.replace("\\", "/").split("/") if p]
    if drive:
        parts.insert(0, os.path.normcase(drive))
    return parts


def is_subdir(src: str, dest: str) -> bool:
    """True if *dest* lies strictly below *src*.

    Compares whole path segments, so ``/foo`` is not a parent of
    ``/foobar``.  Both paths should already be resolved.
    """
    src_parts = _segments(src)
    dest_parts = _segments(dest)
    if len(dest_parts) <= len(src_parts):
        return False
    return dest_parts[:len(src_parts)] == src_parts


def normalize_exts(exts: Iterable[str]) -> list[str]:
    """Prefix each extension with ``.`` where it is missing."""
    return [ext if ext.startswith(".") else f".{ext}" for ext in exts]
