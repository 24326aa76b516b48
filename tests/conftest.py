"""Shared fixtures for portafs tests."""

import os

import pytest
from click.testing import CliRunner


def make_tree(root, files=(), dirs=(), links=()):
    """Create *dirs*, *files* (``{rel: text}`` or names) and *links* under *root*.

    *links* is a sequence of ``(rel_link, target)`` pairs; targets are
    written as given (relative targets are relative to the link).
    """
    root.mkdir(parents=True, exist_ok=True)
    for d in dirs:
        (root / d).mkdir(parents=True, exist_ok=True)
    if isinstance(files, dict):
        items = files.items()
    else:
        items = ((f, "") for f in files)
    for rel, text in items:
        p = root / rel
        p.parent.mkdir(parents=True, exist_ok=True)
        p.write_text(text)
    for rel, target in links:
        p = root / rel
        p.parent.mkdir(parents=True, exist_ok=True)
        try:
            os.symlink(target, p, target_is_directory=(p.parent / target).is_dir())
        except (OSError, NotImplementedError):
            pytest.skip("symlinks not supported on this host")
    return root


@pytest.fixture
def tmp(tmp_path):
    """Canonical temp directory (no symlinks in its own path)."""
    return type(tmp_path)(os.path.realpath(tmp_path))


def rel_paths(root, entries):
    """Sorted paths of *entries* relative to *root* ('.' for the root)."""
    return sorted(os.path.relpath(e.path, root).replace(os.sep, "/") for e in entries)


# ---------------------------------------------------------------------------
# Walk fixture trees
# ---------------------------------------------------------------------------

@pytest.fixture
def walk_data(tmp):
    """Fixture trees under ``tmp/walk``.

    Tree:
        empty_dir/
        single_file/x
        nested_single_file/a/x
        depth/a/b/c/d/x
        ext/x.ts, ext/y.rs, ext/z.txt
        match/x, match/y, match/z
    """
    base = tmp / "walk"
    make_tree(base, dirs=["empty_dir"])
    make_tree(base / "single_file", files=["x"])
    make_tree(base / "nested_single_file", files=["a/x"])
    make_tree(base / "depth", files=["a/b/c/d/x"])
    make_tree(base / "ext", files=["x.ts", "y.rs", "z.txt"])
    make_tree(base / "match", files=["x", "y", "z"])
    return base


@pytest.fixture
def symlink_tree(tmp):
    """``symlink/`` holding ``a/z``, ``b -> a``, ``x``, ``y -> x``."""
    root = tmp / "symlink"
    make_tree(root, files=["a/z", "x"], links=[("b", "a"), ("y", "x")])
    return root


@pytest.fixture
def copy_dir(tmp):
    """``copy_dir/0.txt`` = "txt" and ``copy_dir/nest/0.txt`` = "nest"."""
    return make_tree(tmp / "copy_dir", files={"0.txt": "txt", "nest/0.txt": "nest"})


# ---------------------------------------------------------------------------
# CLI fixtures
# ---------------------------------------------------------------------------

@pytest.fixture
def runner():
    return CliRunner()
