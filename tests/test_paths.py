"""Tests for path normalization helpers."""

import os
import pathlib

import pytest

from portafs import from_file_url, is_subdir, normalize_exts, resolve, to_path_string


class TestToPathString:
    def test_str(self):
        assert to_path_string("a/b") == "a/b"

    def test_pathlike(self):
        assert to_path_string(pathlib.PurePath("a")) == "a"

    def test_file_url(self, tmp):
        assert to_path_string((tmp / "x y").as_uri()) == str(tmp / "x y")

    def test_file_colon_name_is_a_relative_path(self):
        assert to_path_string("file:build") == "file:build"
        assert to_path_string("file:/build") == "file:/build"

    def test_bytes_rejected(self):
        with pytest.raises(TypeError):
            to_path_string(b"/tmp")


class TestFromFileUrl:
    @pytest.mark.skipif(os.name == "nt", reason="POSIX paths")
    def test_posix(self):
        assert from_file_url("file:///home/me/a%20b.txt") == "/home/me/a b.txt"

    @pytest.mark.skipif(os.name == "nt", reason="POSIX paths")
    def test_localhost(self):
        assert from_file_url("file://localhost/etc/hosts") == "/etc/hosts"

    def test_wrong_scheme(self):
        with pytest.raises(ValueError, match="Must be a file URL"):
            from_file_url("http://example.com/x")

    @pytest.mark.skipif(os.name == "nt", reason="UNC paths are valid on Windows")
    def test_remote_host(self):
        with pytest.raises(ValueError):
            from_file_url("file://server/share/x")


class TestResolve:
    def test_absolute(self, tmp, monkeypatch):
        monkeypatch.chdir(tmp)
        assert resolve("a/../b") == str(tmp / "b")

    def test_does_not_follow_symlinks(self, symlink_tree):
        assert resolve(symlink_tree / "b") == str(symlink_tree / "b")


class TestIsSubdir:
    def test_child(self):
        assert is_subdir("/foo", "/foo/bar") is True

    def test_sibling_with_common_prefix(self):
        assert is_subdir("/foo", "/foobar") is False

    def test_same_path(self):
        assert is_subdir("/foo", "/foo") is False

    def test_parent(self):
        assert is_subdir("/foo/bar", "/foo") is False

    def test_trailing_separator(self):
        assert is_subdir("/foo/", "/foo/bar/baz") is True

    def test_backslashes(self):
        assert is_subdir("C:\\foo", "C:\\foo\\bar") is True


class TestNormalizeExts:
    def test_adds_period(self):
        assert normalize_exts(["rs", ".ts"]) == [".rs", ".ts"]

    def test_idempotent(self):
        once = normalize_exts(["rs", "ts", ".md"])
        assert normalize_exts(once) == once
