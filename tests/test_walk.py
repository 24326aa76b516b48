"""Tests for walk() and walk_async()."""

import os
import re
import shutil

import pytest

from portafs import (
    ErrorKind,
    ExcludeFilter,
    NotFound,
    WalkOptions,
    glob_predicate,
    walk,
    walk_async,
)

from conftest import make_tree, rel_paths


async def collect(agen):
    return [e async for e in agen]


def walk_paths(root, **kwargs):
    return rel_paths(root, walk(root, **kwargs))


class TestWalkBasics:
    def test_empty_dir_yields_root_only(self, walk_data):
        root = walk_data / "empty_dir"
        entries = list(walk(root))
        assert len(entries) == 1
        assert entries[0].path == str(root)
        assert entries[0].is_directory is True
        assert entries[0].is_main_dir is True

    def test_single_file(self, walk_data):
        assert walk_paths(walk_data / "single_file") == [".", "x"]

    def test_nested_single_file(self, walk_data):
        assert walk_paths(walk_data / "nested_single_file") == [".", "a", "a/x"]

    def test_preorder(self, walk_data):
        root = walk_data / "depth"
        paths = [os.path.relpath(e.path, root) for e in walk(root)]
        expected = [".", "a", "a/b", "a/b/c", "a/b/c/d", "a/b/c/d/x"]
        assert paths == [p.replace("/", os.sep) for p in expected]

    def test_only_root_is_main_dir(self, walk_data):
        entries = list(walk(walk_data / "nested_single_file"))
        assert [e.is_main_dir for e in entries].count(True) == 1
        assert entries[0].is_main_dir

    def test_entry_fields(self, walk_data):
        root = walk_data / "nested_single_file"
        by_rel = {os.path.relpath(e.path, root): e for e in walk(root)}
        x = by_rel[os.path.join("a", "x")]
        assert x.name == "x"
        assert x.is_file and not x.is_directory and not x.is_symlink
        assert by_rel["a"].is_directory

    def test_accepts_pathlike_and_relative(self, walk_data, monkeypatch):
        monkeypatch.chdir(walk_data)
        entries = list(walk("single_file"))
        assert entries[0].path == str(walk_data / "single_file")

    def test_accepts_file_url(self, walk_data):
        root = walk_data / "single_file"
        entries = list(walk(root.as_uri()))
        assert rel_paths(root, entries) == [".", "x"]

    def test_root_file(self, walk_data):
        entries = list(walk(walk_data / "single_file" / "x"))
        assert len(entries) == 1
        assert entries[0].is_file and entries[0].is_main_dir


class TestWalkOptions:
    def test_max_depth(self, walk_data):
        assert walk_paths(walk_data / "depth", max_depth=3) == [".", "a", "a/b", "a/b/c"]

    def test_max_depth_zero(self, walk_data):
        assert walk_paths(walk_data / "depth", max_depth=0) == ["."]

    def test_negative_max_depth_yields_nothing(self, walk_data):
        assert list(walk(walk_data / "depth", max_depth=-1)) == []

    @pytest.mark.parametrize("k", [0, 1, 2, 4])
    def test_entries_never_deeper_than_max_depth(self, walk_data, k):
        root = walk_data / "depth"
        for rel in walk_paths(root, max_depth=k):
            depth = 0 if rel == "." else rel.count("/") + 1
            assert depth <= k

    def test_include_dirs_false(self, walk_data):
        root = walk_data / "depth"
        entries = list(walk(root, include_dirs=False))
        assert rel_paths(root, entries) == ["a/b/c/d/x"]
        assert not any(e.is_directory for e in entries)

    def test_include_files_false(self, walk_data):
        root = walk_data / "depth"
        entries = list(walk(root, include_files=False))
        assert rel_paths(root, entries) == [".", "a", "a/b", "a/b/c", "a/b/c/d"]
        assert not any(e.is_file for e in entries)

    def test_exts(self, walk_data):
        assert walk_paths(walk_data / "ext", exts=[".rs", ".ts"]) == ["x.ts", "y.rs"]

    def test_exts_without_period(self, walk_data):
        assert walk_paths(walk_data / "ext", exts=["rs", "ts"]) == ["x.ts", "y.rs"]

    def test_exts_mixed_equivalent(self, walk_data):
        root = walk_data / "ext"
        assert walk_paths(root, exts=[".rs", "ts"]) == walk_paths(root, exts=[".rs", ".ts"])

    def test_exts_normalized_on_options(self):
        opts = WalkOptions(exts=[".rs", "ts"])
        assert opts.exts == (".rs", ".ts")
        again = WalkOptions(exts=opts.exts)
        assert again.exts == opts.exts

    def test_match_regex(self, walk_data):
        root = walk_data / "match"
        assert walk_paths(root, match=[re.compile("x$"), re.compile("y$")]) == ["x", "y"]

    def test_match_string_pattern(self, walk_data):
        assert walk_paths(walk_data / "match", match=["x$"]) == ["x"]

    def test_skip_regex(self, walk_data):
        root = walk_data / "match"
        assert walk_paths(root, skip=[re.compile("x$"), re.compile("y$")]) == [".", "z"]

    def test_match_still_traverses_directories(self, walk_data):
        # "a" and its parents do not match, but the file below them does.
        root = walk_data / "depth"
        assert walk_paths(root, match=[r"x$"]) == ["a/b/c/d/x"]

    def test_skip_prunes_directory(self, walk_data):
        root = walk_data / "depth"
        assert walk_paths(root, skip=[re.compile(r"[/\\]c$")]) == [".", "a", "a/b"]

    def test_callable_predicate(self, walk_data):
        root = walk_data / "match"
        paths = walk_paths(root, match=[lambda p: p.endswith("z")])
        assert paths == ["z"]

    def test_options_object_and_kwargs(self, walk_data):
        root = walk_data / "depth"
        opts = WalkOptions(max_depth=1)
        assert walk_paths(root, options=opts) == [".", "a"]
        assert walk_paths(root, options=opts, include_dirs=False) == []

    def test_unsupported_pattern_type(self):
        with pytest.raises(TypeError):
            WalkOptions(match=[42])


class TestWalkGlobAndExclude:
    def test_glob_predicate_basename(self, tmp):
        root = make_tree(tmp / "g", files=["a.py", "b.txt", ".c.py", "sub/d.py"])
        assert walk_paths(root, match=[glob_predicate("*.py")]) == ["a.py", "sub/d.py"]

    def test_glob_predicate_with_dir(self, tmp):
        root = make_tree(tmp / "g", files=["a.py", "sub/d.py"])
        assert walk_paths(root, match=[glob_predicate("sub/*.py")]) == ["sub/d.py"]

    def test_exclude_filter_as_skip(self, tmp):
        root = make_tree(tmp / "proj", files=["app.py", "debug.log", "build/out.o"])
        excl = ExcludeFilter(root, patterns=["*.log", "build/"])
        assert walk_paths(root, skip=[excl]) == [".", "app.py"]

    def test_exclude_filter_gitignore(self, tmp):
        root = make_tree(tmp / "proj", files={
            ".gitignore": "*.log\n",
            "app.py": "",
            "debug.log": "",
            "sub/.gitignore": "*.tmp\n",
            "sub/keep.py": "",
            "sub/x.tmp": "",
        })
        excl = ExcludeFilter(root, gitignore=True)
        assert walk_paths(root, skip=[excl]) == [".", "app.py", "sub", "sub/keep.py"]


class TestWalkSymlinks:
    def test_follow_symlinks_canonicalize(self, symlink_tree):
        assert walk_paths(symlink_tree, follow_symlinks=True) == sorted(
            [".", "a", "a/z", "a", "a/z", "x", "x"])

    def test_follow_symlinks_no_canonicalize(self, symlink_tree):
        paths = walk_paths(symlink_tree, follow_symlinks=True, canonicalize=False)
        assert paths == [".", "a", "a/z", "b", "b/z", "x", "y"]

    def test_no_follow(self, symlink_tree):
        entries = list(walk(symlink_tree))
        assert rel_paths(symlink_tree, entries) == [".", "a", "a/z", "b", "x", "y"]
        links = {e.name for e in entries if e.is_symlink}
        assert links == {"b", "y"}

    def test_no_follow_excluding_symlinks(self, symlink_tree):
        paths = walk_paths(symlink_tree, include_symlinks=False)
        assert paths == [".", "a", "a/z", "x"]

    def test_followed_link_reports_target_type(self, symlink_tree):
        entries = list(walk(symlink_tree, follow_symlinks=True, canonicalize=False))
        b = next(e for e in entries if e.name == "b")
        assert b.is_directory and not b.is_symlink

    def test_cycle_to_ancestor_terminates(self, tmp):
        root = make_tree(tmp / "cyc", dirs=["sub"], links=[("sub/loop", "..")])
        entries = list(walk(root, follow_symlinks=True, canonicalize=False))
        assert rel_paths(root, entries) == [".", "sub", "sub/loop"]

    def test_cycle_canonical_reports_ancestor(self, tmp):
        root = make_tree(tmp / "cyc", dirs=["sub"], links=[("sub/loop", "..")])
        entries = list(walk(root, follow_symlinks=True))
        assert rel_paths(root, entries) == [".", ".", "sub"]

    def test_self_link_terminates(self, tmp):
        root = make_tree(tmp / "selfref", links=[("me", ".")])
        entries = list(walk(root, follow_symlinks=True, canonicalize=False))
        assert rel_paths(root, entries) == [".", "me"]


class TestWalkErrors:
    def test_missing_root(self, walk_data):
        with pytest.raises(NotFound) as exc_info:
            list(walk(walk_data / "non_existent"))
        assert exc_info.value.kind == ErrorKind.NOT_FOUND

    def test_missing_root_is_file_not_found(self, walk_data):
        with pytest.raises(FileNotFoundError):
            list(walk(walk_data / "non_existent"))

    def test_root_removed_during_walk(self, tmp):
        root = make_tree(tmp / "error", dirs=["."])
        gen = walk(root)
        first = next(gen)
        assert first.is_main_dir
        shutil.rmtree(root)
        with pytest.raises(NotFound):
            next(gen)

    def test_lazy_until_iterated(self, walk_data):
        # Building the generator touches nothing.
        gen = walk(walk_data / "non_existent")
        with pytest.raises(NotFound):
            next(gen)


class TestWalkAsync:
    @pytest.mark.asyncio
    async def test_nested(self, walk_data):
        root = walk_data / "nested_single_file"
        entries = await collect(walk_async(root))
        assert rel_paths(root, entries) == [".", "a", "a/x"]

    @pytest.mark.asyncio
    async def test_matches_sync(self, walk_data):
        root = walk_data / "depth"
        for kwargs in ({}, {"max_depth": 2}, {"include_dirs": False}, {"include_files": False}):
            sync = rel_paths(root, walk(root, **kwargs))
            async_ = rel_paths(root, await collect(walk_async(root, **kwargs)))
            assert sync == async_

    @pytest.mark.asyncio
    async def test_exts(self, walk_data):
        root = walk_data / "ext"
        entries = await collect(walk_async(root, exts=["rs", ".ts"]))
        assert rel_paths(root, entries) == ["x.ts", "y.rs"]

    @pytest.mark.asyncio
    async def test_follow_symlinks(self, symlink_tree):
        entries = await collect(walk_async(symlink_tree, follow_symlinks=True))
        assert rel_paths(symlink_tree, entries) == sorted(
            [".", "a", "a/z", "a", "a/z", "x", "x"])

    @pytest.mark.asyncio
    async def test_follow_symlinks_no_canonicalize(self, symlink_tree):
        entries = await collect(
            walk_async(symlink_tree, follow_symlinks=True, canonicalize=False))
        assert rel_paths(symlink_tree, entries) == [".", "a", "a/z", "b", "b/z", "x", "y"]

    @pytest.mark.asyncio
    async def test_cycle_terminates(self, tmp):
        root = make_tree(tmp / "cyc", dirs=["sub"], links=[("sub/loop", "..")])
        entries = await collect(walk_async(root, follow_symlinks=True, canonicalize=False))
        assert rel_paths(root, entries) == [".", "sub", "sub/loop"]

    @pytest.mark.asyncio
    async def test_missing_root(self, walk_data):
        with pytest.raises(NotFound):
            await collect(walk_async(walk_data / "non_existent"))

    @pytest.mark.asyncio
    async def test_root_removed_during_walk(self, tmp):
        root = make_tree(tmp / "error", dirs=["."])
        agen = walk_async(root)
        first = await agen.__anext__()
        assert first.is_main_dir
        shutil.rmtree(root)
        with pytest.raises(NotFound):
            await agen.__anext__()
