from ._exclude import ExcludeFilter
from ._glob import glob_predicate
from ._host import Capabilities, NativeFs, PosixFs, WindowsFs, default_host
from ._metadata import MetadataMapper
from ._paths import from_file_url, is_subdir, normalize_exts, resolve, to_path_string
from .copy import copy, copy_async
from .empty_dir import empty_dir, empty_dir_async
from .exceptions import (
    AlreadyExists,
    BadResource,
    BrokenPipe,
    Busy,
    ErrorKind,
    FsError,
    Interrupted,
    InvalidData,
    InvalidOperationError,
    NotFound,
    Other,
    PermissionDenied,
    TimedOut,
    UnexpectedEof,
    WriteZero,
    classify,
)
from .fileinfo import lstat, lstat_async, stat, stat_async
from .readdir import read_dir, read_dir_async
from .types import CopyOptions, DirEntry, FileInfo, WalkEntry, WalkOptions
from .walk import walk, walk_async

__all__ = [
    # Operations
    "walk", "walk_async", "copy", "copy_async",
    "empty_dir", "empty_dir_async", "read_dir", "read_dir_async",
    "stat", "stat_async", "lstat", "lstat_async",
    # Types
    "FileInfo", "DirEntry", "WalkEntry", "WalkOptions", "CopyOptions",
    # Filters
    "ExcludeFilter", "glob_predicate",
    # Host
    "Capabilities", "NativeFs", "PosixFs", "WindowsFs", "default_host", "MetadataMapper",
    # Paths
    "to_path_string", "from_file_url", "resolve", "is_subdir", "normalize_exts",
    # Errors
    "ErrorKind", "classify", "FsError", "InvalidOperationError",
    "AlreadyExists", "BadResource", "BrokenPipe", "Busy", "Interrupted",
    "InvalidData", "NotFound", "Other", "PermissionDenied", "TimedOut",
    "UnexpectedEof", "WriteZero",
]
